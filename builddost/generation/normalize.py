"""Parsing and defaulting of model output.

The model is asked for one JSON object per call. Whatever comes back is
parsed, then every top-level field that is missing or falsy is replaced from
a per-mode default table before the result is validated into its schema.
"""

from collections.abc import Callable, Mapping
import json
import time
from typing import Any

from builddost.schemas import TechStack

STOP_WORDS = frozenset({"a", "an", "the", "for", "with", "app", "website", "application"})
FALLBACK_PROJECT_NAME = "Generated App"

DefaultTable = Mapping[str, Any | Callable[[], Any]]


def parse_json_object(content: str) -> dict[str, Any]:
    """Parse model output as a JSON object, handling markdown code blocks.

    Raises ValueError when the text is not JSON or not an object.
    """
    text = content.strip()
    if text.startswith("```"):
        lines = [line for line in text.split("\n") if not line.strip().startswith("```")]
        text = "\n".join(lines)

    parsed = json.loads(text)
    if not isinstance(parsed, dict):
        raise ValueError(f"expected a JSON object, got {type(parsed).__name__}")
    return parsed


def apply_defaults(raw: dict[str, Any], defaults: DefaultTable) -> dict[str, Any]:
    """Fill missing or falsy fields of ``raw`` from ``defaults``.

    A default may be a zero-argument callable, evaluated only when needed.
    Keys outside the table pass through untouched.
    """
    result = dict(raw)
    for key, default in defaults.items():
        if not result.get(key):
            result[key] = default() if callable(default) else default
    return result


def extract_project_name(description: str) -> str:
    """Up to three significant words of the description, capitalised."""
    words = [
        word
        for word in description.lower().split(" ")
        if len(word) > 2 and word not in STOP_WORDS
    ][:3]
    return " ".join(word[0].upper() + word[1:] for word in words) or FALLBACK_PROJECT_NAME


# === Per-mode default tables ===


def project_defaults(description: str) -> DefaultTable:
    return {
        "id": lambda: f"project_{int(time.time() * 1000)}",
        "name": lambda: extract_project_name(description),
        "description": description,
        "files": dict,
        "structure": lambda: {
            "frontend": ["src/", "src/components/", "src/pages/"],
            "backend": ["server/", "server/routes/"],
            "database": ["shared/"],
        },
        "dependencies": lambda: {
            "frontend": ["react", "typescript", "tailwindcss"],
            "backend": ["express", "drizzle-orm", "zod"],
        },
    }


def adaptive_project_defaults(user_input: str, tech_stack: TechStack) -> DefaultTable:
    """Project defaults with layout and packages taken from the analysed tech stack."""
    return {
        **project_defaults(user_input),
        "structure": lambda: {
            "frontend": ["src/", "src/components/", "src/pages/"],
            "backend": ["server/", "server/routes/"],
            "database": ["shared/"] if tech_stack.database else [],
        },
        "dependencies": lambda: {
            "frontend": list(tech_stack.frontend),
            "backend": list(tech_stack.backend),
        },
    }


def component_defaults(component_type: str | None) -> DefaultTable:
    return {
        "name": "GeneratedComponent",
        "category": component_type or "ui",
        "code": lambda: {"jsx": "", "props": {}},
        "config": lambda: {"props": {}, "styling": {}},
    }


BACKEND_DEFAULTS: DefaultTable = {
    "endpoints": list,
    "models": list,
    "middleware": list,
    "packageDependencies": list,
}


def optimize_defaults(code: str) -> DefaultTable:
    # Nothing optimized means the input stands.
    return {"optimizedCode": code, "improvements": list}


ANALYSIS_DEFAULTS: DefaultTable = {
    "projectType": "other",
    "complexity": "moderate",
    "suggestedFeatures": list,
    "techStack": lambda: {
        "frontend": ["react", "tailwindcss", "typescript"],
        "backend": ["express"],
        "database": False,
    },
    "timeline": "Not estimated",
    "recommendations": list,
}
