"""Component model."""

from sqlalchemy import JSON, Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Component(Base):
    """Component model - reusable UI units for the builder."""

    __tablename__ = "components"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String(50), index=True)

    # React component code: jsx, css, prop defaults
    code: Mapped[dict] = mapped_column(JSON)

    # Props configuration and styling metadata
    config: Mapped[dict] = mapped_column(JSON)

    preview_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_public: Mapped[bool] = mapped_column(Boolean, default=True)
