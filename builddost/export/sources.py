"""Registry of shipped template sources.

Each gallery category has one React source file under ``sources/``. A
template id is either one of these slugs or the id of a stored template
whose category is a slug.
"""

from pathlib import Path

from builddost.errors import NotFoundError
from builddost.storage import Storage

SOURCES_DIR = Path(__file__).parent / "sources"

TEMPLATE_FILES: dict[str, str] = {
    "landing": "landing-page.tsx",
    "portfolio": "portfolio.tsx",
    "ecommerce": "ecommerce.tsx",
    "blog": "blog.tsx",
    "dashboard": "dashboard.tsx",
    "todo": "task-manager.tsx",
}

# Human-readable names used in index.html, README and package.json
TEMPLATE_TITLES: dict[str, str] = {
    "landing": "Landing Page",
    "portfolio": "Portfolio",
    "ecommerce": "E-commerce Store",
    "blog": "Blog",
    "dashboard": "Admin Dashboard",
    "todo": "Task Manager",
}


def load_template_source(slug: str) -> str:
    """Return the React source for ``slug``.

    Raises:
        NotFoundError: If the slug is unknown or its file is missing
    """
    filename = TEMPLATE_FILES.get(slug)
    if not filename:
        raise NotFoundError.for_entity("Template")
    path = SOURCES_DIR / filename
    if not path.exists():
        raise NotFoundError.for_entity("Template")
    return path.read_text(encoding="utf-8")


async def resolve_template_slug(template_id: str, storage: Storage) -> str:
    """Map a slug or stored template id to a source slug."""
    if template_id in TEMPLATE_FILES:
        return template_id

    template = await storage.get_template(template_id)
    if template and template.category in TEMPLATE_FILES:
        return template.category
    raise NotFoundError.for_entity("Template")
