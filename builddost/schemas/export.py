"""Export schemas."""

from typing import Any, Literal

from pydantic import Field

from .base import CamelModel
from .project import ProjectConfig


class TemplateExportRequest(CamelModel):
    """Body of POST /api/templates/{id}/export."""

    format: Literal["zip", "github"]
    repository: str | None = Field(
        None,
        pattern=r"^[A-Za-z0-9_.-]+$",
        max_length=100,
        description="Repository name, required for GitHub export",
    )


class GitHubExportResponse(CamelModel):
    success: bool = True
    repository_url: str


class TemplateSourceResponse(CamelModel):
    template_id: str
    code: str


class ProjectCodePackage(CamelModel):
    """Downloadable description of a stored project."""

    name: str
    description: str | None
    components: list[dict[str, Any]]
    config: ProjectConfig
    package_json: dict[str, Any]
