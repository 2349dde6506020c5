"""Database models package."""

from .base import Base
from .component import Component
from .project import Project
from .template import Template
from .user import User

__all__ = [
    "Base",
    "Component",
    "Project",
    "Template",
    "User",
]
