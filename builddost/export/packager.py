"""Export bundles: ordered file maps built from templates or stored projects.

A template bundle is a standalone Vite + React + Tailwind project around
one shipped template source. ``src/App.tsx`` is synthesized from that
source with every internal ``@/`` import removed and small stand-ins
inlined for the primitives it used, so the bundle builds on its own.
"""

import io
import json
import re
import zipfile

import structlog

from builddost.errors import ExportFailure, NotFoundError
from builddost.schemas import ProjectCodePackage, ProjectRead, check_relative_path
from builddost.storage import Storage

from .sources import TEMPLATE_TITLES, load_template_source, resolve_template_slug

logger = structlog.get_logger()

# === App entry synthesis ===

_INTERNAL_IMPORT = re.compile(
    r"^import\s+(?P<clause>.+?)\s+from\s+[\"']@/[^\"']*[\"'];?[ \t]*\n?", re.M
)
_TEMPLATE_FUNCTION = re.compile(r"export default function \w*Template\b")
_TEMPLATE_ACTIONS = re.compile(r"[ \t]*<TemplateActions\b[^>]*/>[ \t]*\n?")

BUTTON_STAND_IN = """\
const Button = ({ children, className = '', variant = 'default', size = 'default', ...props }: any) => {
  const baseClasses = 'inline-flex items-center justify-center rounded-md text-sm font-medium transition-colors focus-visible:outline-none focus-visible:ring-2 disabled:opacity-50 disabled:pointer-events-none';
  const variants: Record<string, string> = {
    default: 'bg-gray-900 text-white hover:bg-gray-800',
    outline: 'border border-gray-300 hover:bg-gray-100',
    ghost: 'hover:bg-gray-100'
  };
  const sizes: Record<string, string> = {
    default: 'h-10 py-2 px-4',
    sm: 'h-9 px-3',
    lg: 'h-11 px-8'
  };
  return (
    <button className={`${baseClasses} ${variants[variant]} ${sizes[size]} ${className}`} {...props}>
      {children}
    </button>
  );
};"""

BADGE_STAND_IN = """\
const Badge = ({ children, className = '', ...props }: any) => (
  <div className={`inline-flex items-center rounded-full border px-2.5 py-0.5 text-xs font-semibold ${className}`} {...props}>
    {children}
  </div>
);"""

USE_TOAST_STAND_IN = """\
const useToast = () => ({
  toast: ({ title, description }: { title?: string; description?: string }) =>
    window.alert([title, description].filter(Boolean).join('\\n'))
});"""

ARROW_RIGHT_STAND_IN = """\
const ArrowRight = ({ className = '', ...props }: any) => (
  <svg className={className} width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" strokeWidth="2" strokeLinecap="round" strokeLinejoin="round" {...props}>
    <path d="M5 12h14M12 5l7 7-7 7" />
  </svg>
);"""

CHECK_STAND_IN = """\
const Check = ({ className = '', ...props }: any) => (
  <svg className={className} width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" strokeWidth="2" strokeLinecap="round" strokeLinejoin="round" {...props}>
    <path d="M20 6 9 17l-5-5" />
  </svg>
);"""

STAND_INS: dict[str, str] = {
    "Button": BUTTON_STAND_IN,
    "Badge": BADGE_STAND_IN,
    "useToast": USE_TOAST_STAND_IN,
    "ArrowRight": ARROW_RIGHT_STAND_IN,
    "Check": CHECK_STAND_IN,
}


def _imported_names(clause: str) -> list[str]:
    """Local names bound by an import clause like ``A, { B, C as D }``."""
    names = []
    for part in clause.replace("{", ",").replace("}", ",").split(","):
        part = part.strip()
        if not part or part.startswith("*"):
            continue
        names.append(part.split(" as ")[-1].strip())
    return names


def synthesize_app(source: str) -> str:
    """Turn a gallery template into a self-contained ``App`` component."""
    imported = [
        name
        for match in _INTERNAL_IMPORT.finditer(source)
        for name in _imported_names(match.group("clause"))
    ]

    body = _INTERNAL_IMPORT.sub("", source)
    body = _TEMPLATE_FUNCTION.sub("function App", body, count=1)
    body = _TEMPLATE_ACTIONS.sub("", body)

    stand_ins = [STAND_INS[name] for name in STAND_INS if name in imported]
    header = ["import React from 'react';", "import './index.css';", ""]
    return "\n".join([*header, *stand_ins, "", body.strip(), "", "export default App;", ""])


# === Static project files ===

MAIN_TSX = """\
import React from 'react'
import ReactDOM from 'react-dom/client'
import App from './App.tsx'
import './index.css'

ReactDOM.createRoot(document.getElementById('root')!).render(
  <React.StrictMode>
    <App />
  </React.StrictMode>,
)
"""

INDEX_CSS = """\
@tailwind base;
@tailwind components;
@tailwind utilities;
"""

VITE_CONFIG = """\
import { defineConfig } from 'vite'
import react from '@vitejs/plugin-react'

export default defineConfig({
  plugins: [react()],
  resolve: {
    alias: {
      '@': '/src',
    },
  },
})
"""

TAILWIND_CONFIG = """\
/** @type {import('tailwindcss').Config} */
export default {
  content: [
    "./index.html",
    "./src/**/*.{js,ts,jsx,tsx}",
  ],
  theme: {
    extend: {},
  },
  plugins: [],
}
"""

POSTCSS_CONFIG = """\
export default {
  plugins: {
    tailwindcss: {},
    autoprefixer: {},
  },
}
"""

GITIGNORE = """\
# Logs
logs
*.log
npm-debug.log*
yarn-debug.log*
yarn-error.log*
pnpm-debug.log*

node_modules
dist
dist-ssr
*.local

# Editor directories and files
.vscode/*
!.vscode/extensions.json
.idea
.DS_Store
*.sw?
"""

TSCONFIG = {
    "compilerOptions": {
        "target": "ES2020",
        "useDefineForClassFields": True,
        "lib": ["ES2020", "DOM", "DOM.Iterable"],
        "module": "ESNext",
        "skipLibCheck": True,
        "moduleResolution": "bundler",
        "allowImportingTsExtensions": True,
        "resolveJsonModule": True,
        "isolatedModules": True,
        "noEmit": True,
        "jsx": "react-jsx",
        "strict": True,
        "noUnusedLocals": True,
        "noUnusedParameters": True,
        "noFallthroughCasesInSwitch": True,
        "baseUrl": ".",
        "paths": {"@/*": ["./src/*"]},
    },
    "include": ["src"],
    "references": [{"path": "./tsconfig.node.json"}],
}

TSCONFIG_NODE = {
    "compilerOptions": {
        "composite": True,
        "skipLibCheck": True,
        "module": "ESNext",
        "moduleResolution": "bundler",
        "allowSyntheticDefaultImports": True,
    },
    "include": ["vite.config.ts"],
}


def _package_json(slug: str, title: str) -> str:
    return json.dumps(
        {
            "name": f"{slug}-template",
            "version": "1.0.0",
            "description": f"{title} Template",
            "type": "module",
            "scripts": {"dev": "vite", "build": "tsc && vite build", "preview": "vite preview"},
            "dependencies": {
                "react": "^18.2.0",
                "react-dom": "^18.2.0",
                "lucide-react": "^0.263.1",
                "class-variance-authority": "^0.7.0",
                "clsx": "^2.0.0",
                "tailwind-merge": "^1.14.0",
            },
            "devDependencies": {
                "@types/react": "^18.2.15",
                "@types/react-dom": "^18.2.7",
                "@vitejs/plugin-react": "^4.0.3",
                "autoprefixer": "^10.4.14",
                "postcss": "^8.4.27",
                "tailwindcss": "^3.3.0",
                "typescript": "^5.0.2",
                "vite": "^4.4.5",
            },
        },
        indent=2,
    )


def _index_html(title: str) -> str:
    return f"""\
<!doctype html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <link rel="icon" type="image/svg+xml" href="/vite.svg" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>{title} - BuildDost Template</title>
  </head>
  <body>
    <div id="root"></div>
    <script type="module" src="/src/main.tsx"></script>
  </body>
</html>
"""


def _readme(title: str) -> str:
    return f"""\
# {title} Template

This is a React + TypeScript + Tailwind CSS template generated by BuildDost.

## Getting Started

1. Install dependencies: `npm install`
2. Start the development server: `npm run dev`
3. Build for production: `npm run build`

## Customization

Edit the components in the `src` directory to match your needs.
"""


def build_template_files(slug: str) -> dict[str, str]:
    """File map for the template ``slug``; insertion order is archive order."""
    title = TEMPLATE_TITLES[slug]
    source = load_template_source(slug)
    return {
        "package.json": _package_json(slug, title),
        "index.html": _index_html(title),
        "src/App.tsx": synthesize_app(source),
        "src/main.tsx": MAIN_TSX,
        "src/index.css": INDEX_CSS,
        "vite.config.ts": VITE_CONFIG,
        "tailwind.config.js": TAILWIND_CONFIG,
        "postcss.config.js": POSTCSS_CONFIG,
        "tsconfig.json": json.dumps(TSCONFIG, indent=2),
        "tsconfig.node.json": json.dumps(TSCONFIG_NODE, indent=2),
        "README.md": _readme(title),
        ".gitignore": GITIGNORE,
    }


# === Bundles ===


async def build_template_bundle(template_id: str, storage: Storage) -> dict[str, str]:
    """Bundle for a template slug or stored template id."""
    slug = await resolve_template_slug(template_id, storage)
    files = build_template_files(slug)
    logger.info("template_bundle_built", template_id=template_id, slug=slug, files=len(files))
    return files


async def build_project_bundle(project_id: str, storage: Storage) -> dict[str, str]:
    """A stored project's file map, unchanged."""
    project = await storage.get_project(project_id)
    if not project:
        raise NotFoundError.for_entity("Project")
    return dict(project.config.files)


def build_project_package(project: ProjectRead) -> ProjectCodePackage:
    """Downloadable description of a stored project with a minimal package.json."""
    return ProjectCodePackage(
        name=project.name,
        description=project.description,
        components=project.components,
        config=project.config,
        package_json={
            "name": re.sub(r"\s+", "-", project.name.lower()),
            "version": "1.0.0",
            "dependencies": {
                "react": "^18.3.1",
                "react-dom": "^18.3.1",
                "@types/react": "^18.3.11",
                "@types/react-dom": "^18.3.1",
                "tailwindcss": "^3.4.17",
            },
        },
    )


def ensure_relative_paths(bundle: dict[str, str]) -> None:
    """Raise ExportFailure if any bundle path would escape the archive root."""
    for path in bundle:
        try:
            check_relative_path(path)
        except ValueError as e:
            logger.error("export_path_rejected", path=path, error=str(e))
            raise ExportFailure(f"Unsafe path in bundle: {e}") from e


def to_zip(bundle: dict[str, str]) -> bytes:
    """Serialize a file map to zip bytes, entries in insertion order.

    Raises:
        ExportFailure: If a path is not relative or the archive cannot be written
    """
    ensure_relative_paths(bundle)
    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=9) as zf:
            for path, content in bundle.items():
                zf.writestr(path, content)
    except (OSError, ValueError, zipfile.LargeZipFile) as e:
        logger.error("zip_export_failed", error=str(e), error_type=type(e).__name__, exc_info=True)
        raise ExportFailure(f"Failed to write archive: {e}") from e
    return buffer.getvalue()
