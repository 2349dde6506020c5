"""Project schemas."""

from datetime import datetime
from enum import Enum
import re
from typing import Annotated, Any

from pydantic import AfterValidator, Field

from .base import CamelModel, ExtensibleModel

DRIVE_PREFIX = re.compile(r"^[A-Za-z]:")


def check_relative_path(path: str) -> str:
    """Reject file paths that would land outside the project root.

    Raises:
        ValueError: If ``path`` is empty, absolute, or has a ``..`` segment
    """
    normalized = path.replace("\\", "/")
    if not normalized.strip() or normalized.startswith("/") or DRIVE_PREFIX.match(normalized):
        raise ValueError(f"file path must be relative: {path!r}")
    if ".." in normalized.split("/"):
        raise ValueError(f"file path must not contain '..': {path!r}")
    return path


def _check_file_map(files: dict[str, str]) -> dict[str, str]:
    for path in files:
        check_relative_path(path)
    return files


# Relative path -> file source
FileMap = Annotated[dict[str, str], AfterValidator(_check_file_map)]


class ProjectStatus(str, Enum):
    """Project lifecycle status."""

    DRAFT = "draft"
    LIVE = "live"
    BUILDING = "building"


class ProjectStructure(CamelModel):
    """Directory layout of a generated project, per tier."""

    frontend: list[str] = Field(default_factory=list)
    backend: list[str] = Field(default_factory=list)
    database: list[str] = Field(default_factory=list)


class ProjectDependencies(CamelModel):
    """Package names a generated project depends on, per tier."""

    frontend: list[str] = Field(default_factory=list)
    backend: list[str] = Field(default_factory=list)


class ProjectConfig(ExtensibleModel):
    """Project configuration bag.

    ``files`` maps a relative path to full file source; keys are unique.
    Unknown keys (builder state, generation metadata) are preserved.
    """

    files: FileMap = Field(default_factory=dict)
    structure: ProjectStructure | None = None
    dependencies: ProjectDependencies | None = None


class ProjectBase(CamelModel):
    """Base project schema."""

    user_id: str = Field(..., min_length=1, description="Owning user id")
    name: str = Field(..., min_length=1)
    description: str | None = None
    components: list[dict[str, Any]] = Field(default_factory=list)
    config: ProjectConfig = Field(default_factory=ProjectConfig)
    is_public: bool = False
    status: ProjectStatus = ProjectStatus.DRAFT
    deployment_url: str | None = None


class ProjectCreate(ProjectBase):
    """Schema for creating a project."""

    pass


class ProjectRead(ProjectBase):
    """Schema for reading a project."""

    id: str
    created_at: datetime
    updated_at: datetime


class ProjectUpdate(CamelModel):
    """Partial project update; unset fields keep their stored value."""

    name: str | None = Field(None, min_length=1)
    description: str | None = None
    components: list[dict[str, Any]] | None = None
    config: ProjectConfig | None = None
    is_public: bool | None = None
    status: ProjectStatus | None = None
    deployment_url: str | None = None

    def changes(self, mode: str = "python") -> dict[str, Any]:
        """Fields the caller set; explicit nulls only for nullable fields."""
        data = self.model_dump(mode=mode, exclude_unset=True)
        return {k: v for k, v in data.items() if v is not None or k not in _NON_NULLABLE}


_NON_NULLABLE = frozenset({"name", "components", "config", "is_public", "status"})
