"""Routers package."""

from . import ai, components, health, projects, templates, users

__all__ = [
    "ai",
    "components",
    "health",
    "projects",
    "templates",
    "users",
]
