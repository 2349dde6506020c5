"""Template schemas."""

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import CamelModel

TEMPLATE_CATEGORIES = ("landing", "portfolio", "ecommerce", "blog", "dashboard", "todo")


class TemplateBase(CamelModel):
    """Base template schema."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    category: str = Field(
        ..., min_length=1, description=f"Gallery category, e.g. {', '.join(TEMPLATE_CATEGORIES)}"
    )
    components: list[dict[str, Any]] = Field(default_factory=list)
    config: dict[str, Any] = Field(default_factory=dict)
    preview_image: str | None = None
    is_public: bool = True


class TemplateCreate(TemplateBase):
    """Schema for creating a template."""

    pass


class TemplateRead(TemplateBase):
    """Schema for reading a template."""

    id: str
    created_at: datetime
