"""AI router: single-shot generation endpoints and adaptive project generation."""

from fastapi import APIRouter, Depends, Request
import structlog

from builddost.generation import GenerationClient, extract_features
from builddost.schemas import (
    AdaptiveProjectRequest,
    AdaptiveProjectResponse,
    BackendGenerationRequest,
    BackendGenerationResponse,
    CodeOptimizationRequest,
    CodeOptimizationResponse,
    ComponentCreate,
    ComponentGenerationRequest,
    ComponentGenerationResponse,
    WebsiteAnalysisRequest,
    WebsiteAnalysisResponse,
)
from builddost.storage import ANONYMOUS_USER_ID, Storage

from ..cancellation import run_until_disconnected
from ..dependencies import get_generation_client, get_storage
from .projects import require_user, save_generated_project

logger = structlog.get_logger()

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/generate-component", response_model=ComponentGenerationResponse)
async def generate_component(
    request: Request,
    component_in: ComponentGenerationRequest,
    storage: Storage = Depends(get_storage),
    client: GenerationClient = Depends(get_generation_client),
) -> ComponentGenerationResponse:
    """Generate a React component; store it as a public component if ``save``."""
    component = await run_until_disconnected(request, client.generate_component(component_in))

    if component_in.save:
        saved = await storage.create_component(
            ComponentCreate(
                name=component.name,
                category=component.category,
                code=component.code,
                config=component.config,
                is_public=True,
            )
        )
        component.id = saved.id
        logger.info("generated_component_saved", component_id=saved.id, name=saved.name)

    return ComponentGenerationResponse(component=component)


@router.post("/generate-backend", response_model=BackendGenerationResponse)
async def generate_backend(
    request: Request,
    backend_in: BackendGenerationRequest,
    client: GenerationClient = Depends(get_generation_client),
) -> BackendGenerationResponse:
    """Generate an Express backend scaffold. Never stored."""
    features = (
        backend_in.features
        if backend_in.features is not None
        else extract_features(backend_in.description)
    )
    backend = await run_until_disconnected(request, client.generate_backend(backend_in, features))
    logger.info(
        "backend_generated",
        endpoints=len(backend.endpoints),
        models=len(backend.models),
        features=features,
    )
    return BackendGenerationResponse(backend=backend)


@router.post("/optimize-code", response_model=CodeOptimizationResponse)
async def optimize_code(
    request: Request,
    optimize_in: CodeOptimizationRequest,
    client: GenerationClient = Depends(get_generation_client),
) -> CodeOptimizationResponse:
    optimization = await run_until_disconnected(request, client.optimize_code(optimize_in))
    logger.info(
        "code_optimized",
        type=optimize_in.type,
        improvements=len(optimization.improvements),
    )
    return CodeOptimizationResponse(optimization=optimization)


@router.post("/analyze-website", response_model=WebsiteAnalysisResponse)
async def analyze_website(
    request: Request,
    analysis_in: WebsiteAnalysisRequest,
    client: GenerationClient = Depends(get_generation_client),
) -> WebsiteAnalysisResponse:
    """Requirements analysis of a website idea."""
    analysis = await run_until_disconnected(request, client.analyze_website(analysis_in))
    logger.info(
        "website_analyzed",
        project_type=analysis.project_type,
        complexity=analysis.complexity,
    )
    return WebsiteAnalysisResponse(analysis=analysis)


@router.post("/generate-adaptive", response_model=AdaptiveProjectResponse)
async def generate_adaptive(
    request: Request,
    adaptive_in: AdaptiveProjectRequest,
    storage: Storage = Depends(get_storage),
    client: GenerationClient = Depends(get_generation_client),
) -> AdaptiveProjectResponse:
    """Generate a project from a requirements analysis and store it with that analysis."""
    owner_id = adaptive_in.user_id or ANONYMOUS_USER_ID
    await require_user(storage, owner_id)

    logger.info(
        "adaptive_generation_started",
        user_id=owner_id,
        analysis_supplied=adaptive_in.analysis is not None,
        prompt_length=len(adaptive_in.user_input),
    )

    generated, analysis = await run_until_disconnected(
        request, client.generate_adaptive_project(adaptive_in.user_input, adaptive_in.analysis)
    )

    summary = await save_generated_project(
        storage, owner_id, generated, analysis=analysis.model_dump(by_alias=True)
    )
    return AdaptiveProjectResponse(project=summary, analysis=analysis)
