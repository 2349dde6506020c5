"""Projects router: CRUD, full-stack generation and export."""

from fastapi import APIRouter, Depends, Query, Request, Response, status
import structlog

from builddost.errors import NotFoundError, ValidationError
from builddost.export import build_project_bundle, build_project_package, to_zip
from builddost.generation import GenerationClient, extract_features
from builddost.schemas import (
    FullStackProjectRequest,
    GeneratedProject,
    GeneratedProjectSummary,
    ProjectCodePackage,
    ProjectConfig,
    ProjectCreate,
    ProjectGenerationRequest,
    ProjectGenerationResponse,
    ProjectRead,
    ProjectStatus,
    ProjectUpdate,
)
from builddost.storage import ANONYMOUS_USER_ID, Storage, ensure_anonymous_user

from ..cancellation import run_until_disconnected
from ..dependencies import get_generation_client, get_storage
from ..responses import zip_response

logger = structlog.get_logger()

router = APIRouter(prefix="/projects", tags=["projects"])


async def require_user(storage: Storage, user_id: str) -> None:
    """Ensure ``user_id`` may own projects; the demo user is created on demand."""
    if user_id == ANONYMOUS_USER_ID:
        await ensure_anonymous_user(storage)
    elif not await storage.get_user(user_id):
        raise NotFoundError.for_entity("User")


async def save_generated_project(
    storage: Storage, owner_id: str, generated: GeneratedProject, **config_extra
) -> GeneratedProjectSummary:
    """Persist a generated project as live and summarize it under its store id."""
    config = ProjectConfig(
        files=generated.files,
        structure=generated.structure,
        dependencies=generated.dependencies,
        generationId=generated.id,
        **config_extra,
    )
    project = await storage.create_project(
        ProjectCreate(
            user_id=owner_id,
            name=generated.name,
            description=generated.description,
            config=config,
            status=ProjectStatus.LIVE,
        )
    )

    logger.info(
        "project_generated",
        project_id=project.id,
        generation_id=generated.id,
        name=project.name,
        file_count=len(generated.files),
    )

    return GeneratedProjectSummary(
        id=project.id,
        name=project.name,
        description=project.description,
        files=generated.files,
        structure=generated.structure,
        dependencies=generated.dependencies,
    )


@router.get("", response_model=list[ProjectRead])
async def list_projects(
    user_id: str | None = Query(None, alias="userId"),
    storage: Storage = Depends(get_storage),
) -> list[ProjectRead]:
    """List a user's projects."""
    if not user_id:
        raise ValidationError("userId is required")
    return await storage.get_projects_by_user_id(user_id)


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_in: ProjectCreate,
    storage: Storage = Depends(get_storage),
) -> ProjectRead:
    """Create a new project."""
    await require_user(storage, project_in.user_id)

    project = await storage.create_project(project_in)
    logger.info(
        "project_created",
        project_id=project.id,
        user_id=project.user_id,
        status=project.status,
    )
    return project


@router.post("/generate", response_model=ProjectGenerationResponse)
async def generate_project(
    request: Request,
    generation_in: ProjectGenerationRequest,
    storage: Storage = Depends(get_storage),
    client: GenerationClient = Depends(get_generation_client),
) -> ProjectGenerationResponse:
    """Generate a full-stack project from a prompt and store it."""
    owner_id = generation_in.user_id or ANONYMOUS_USER_ID
    await require_user(storage, owner_id)

    features = extract_features(generation_in.prompt)
    logger.info(
        "project_generation_started",
        user_id=owner_id,
        features=features,
        prompt_length=len(generation_in.prompt),
    )

    generated = await run_until_disconnected(
        request,
        client.generate_project(
            FullStackProjectRequest(
                description=generation_in.prompt,
                features=features,
                type=generation_in.type,
            )
        ),
    )

    summary = await save_generated_project(storage, owner_id, generated)
    return ProjectGenerationResponse(project=summary)


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(
    project_id: str,
    storage: Storage = Depends(get_storage),
) -> ProjectRead:
    """Get project by ID."""
    project = await storage.get_project(project_id)
    if not project:
        raise NotFoundError.for_entity("Project")
    return project


@router.put("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: str,
    project_in: ProjectUpdate,
    storage: Storage = Depends(get_storage),
) -> ProjectRead:
    """Update project; fields absent from the body keep their value."""
    project = await storage.update_project(project_id, project_in)
    if not project:
        raise NotFoundError.for_entity("Project")

    logger.info("project_updated", project_id=project.id, status=project.status)
    return project


@router.delete("/{project_id}")
async def delete_project(
    project_id: str,
    storage: Storage = Depends(get_storage),
) -> dict:
    """Delete project."""
    if not await storage.delete_project(project_id):
        raise NotFoundError.for_entity("Project")

    logger.info("project_deleted", project_id=project_id)
    return {"success": True}


@router.post("/{project_id}/export", response_model=ProjectCodePackage)
async def export_project(
    project_id: str,
    storage: Storage = Depends(get_storage),
) -> ProjectCodePackage:
    """Downloadable code package of a stored project."""
    project = await storage.get_project(project_id)
    if not project:
        raise NotFoundError.for_entity("Project")
    return build_project_package(project)


@router.get("/{project_id}/export/zip")
async def download_project_zip(
    project_id: str,
    storage: Storage = Depends(get_storage),
) -> Response:
    """Archive of a stored project's generated files."""
    bundle = await build_project_bundle(project_id, storage)
    return zip_response(to_zip(bundle), f"{project_id}.zip")
