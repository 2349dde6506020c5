"""Templates router: gallery listing and export."""

from fastapi import APIRouter, Depends, Response, status
import structlog

from builddost.errors import NotFoundError, ValidationError
from builddost.export import (
    GitHubExporter,
    build_template_bundle,
    load_template_source,
    resolve_template_slug,
    to_zip,
)
from builddost.schemas import (
    GitHubExportResponse,
    TemplateCreate,
    TemplateExportRequest,
    TemplateRead,
    TemplateSourceResponse,
)
from builddost.storage import Storage

from ..dependencies import get_github_exporter, get_storage
from ..responses import zip_response

logger = structlog.get_logger()

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=list[TemplateRead])
async def list_templates(
    category: str | None = None,
    storage: Storage = Depends(get_storage),
) -> list[TemplateRead]:
    """List public templates, optionally filtered by category."""
    if category:
        return await storage.get_templates_by_category(category)
    return await storage.get_all_templates()


@router.get("/{template_id}", response_model=TemplateRead)
async def get_template(
    template_id: str,
    storage: Storage = Depends(get_storage),
) -> TemplateRead:
    """Get template by ID."""
    template = await storage.get_template(template_id)
    if not template:
        raise NotFoundError.for_entity("Template")
    return template


@router.post("", response_model=TemplateRead, status_code=status.HTTP_201_CREATED)
async def create_template(
    template_in: TemplateCreate,
    storage: Storage = Depends(get_storage),
) -> TemplateRead:
    """Create a new template."""
    template = await storage.create_template(template_in)
    logger.info("template_created", template_id=template.id, category=template.category)
    return template


@router.post("/{template_id}/export", response_model=None)
async def export_template(
    template_id: str,
    export_in: TemplateExportRequest,
    storage: Storage = Depends(get_storage),
    exporter: GitHubExporter = Depends(get_github_exporter),
) -> Response | GitHubExportResponse:
    """Export a template as a zip archive or to a GitHub repository."""
    if export_in.format == "github" and not export_in.repository:
        raise ValidationError("repository is required for GitHub export")

    bundle = await build_template_bundle(template_id, storage)

    if export_in.format == "zip":
        return zip_response(to_zip(bundle), f"{template_id}-template.zip")

    repository_url = await exporter.export(
        bundle, export_in.repository, description=f"{template_id} template exported from BuildDost"
    )
    logger.info("template_exported", template_id=template_id, repository_url=repository_url)
    return GitHubExportResponse(repository_url=repository_url)


@router.get("/{template_id}/export/zip")
async def download_template_zip(
    template_id: str,
    storage: Storage = Depends(get_storage),
) -> Response:
    """Download a template as a standalone project archive."""
    bundle = await build_template_bundle(template_id, storage)
    return zip_response(to_zip(bundle), f"{template_id}-template.zip")


@router.get("/{template_id}/source", response_model=TemplateSourceResponse)
async def get_template_source(
    template_id: str,
    storage: Storage = Depends(get_storage),
) -> TemplateSourceResponse:
    """Raw React source of a template."""
    slug = await resolve_template_slug(template_id, storage)
    return TemplateSourceResponse(template_id=template_id, code=load_template_source(slug))
