"""Component schemas."""

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import CamelModel, ExtensibleModel


class ComponentCode(ExtensibleModel):
    """Component source plus prop defaults."""

    jsx: str = ""
    css: str | None = None
    props: dict[str, Any] = Field(default_factory=dict)


class PropSpec(ExtensibleModel):
    """Declaration of one component prop."""

    type: str = "any"
    default: Any = None
    required: bool = False


class ComponentConfig(ExtensibleModel):
    """Prop declarations and styling metadata."""

    props: dict[str, PropSpec] = Field(default_factory=dict)
    styling: dict[str, Any] = Field(default_factory=dict)


class ComponentBase(CamelModel):
    """Base component schema."""

    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, description="layout, ui, forms, navigation, ...")
    code: ComponentCode = Field(default_factory=ComponentCode)
    config: ComponentConfig = Field(default_factory=ComponentConfig)
    preview_image: str | None = None
    is_public: bool = True


class ComponentCreate(ComponentBase):
    """Schema for creating a component."""

    pass


class ComponentRead(ComponentBase):
    """Schema for reading a component."""

    id: str
    created_at: datetime
