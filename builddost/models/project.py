"""Project model."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Project(Base):
    """Project model - a user's generated or hand-built application."""

    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    # Owner (User ID)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), index=True)

    name: Mapped[str] = mapped_column(Text)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Ordered component snapshots from the builder
    components: Mapped[list] = mapped_column(JSON, default=list)

    # files / structure / dependencies for generated projects
    config: Mapped[dict] = mapped_column(JSON, default=dict)

    is_public: Mapped[bool] = mapped_column(Boolean, default=False)
    status: Mapped[str] = mapped_column(String(20), default="draft")
    deployment_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
