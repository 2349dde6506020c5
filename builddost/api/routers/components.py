"""Components router."""

from fastapi import APIRouter, Depends, status
import structlog

from builddost.errors import NotFoundError
from builddost.schemas import ComponentCreate, ComponentRead
from builddost.storage import Storage

from ..dependencies import get_storage

logger = structlog.get_logger()

router = APIRouter(prefix="/components", tags=["components"])


@router.get("", response_model=list[ComponentRead])
async def list_components(
    category: str | None = None,
    storage: Storage = Depends(get_storage),
) -> list[ComponentRead]:
    """List public components, optionally filtered by category."""
    if category:
        return await storage.get_components_by_category(category)
    return await storage.get_all_components()


@router.get("/{component_id}", response_model=ComponentRead)
async def get_component(
    component_id: str,
    storage: Storage = Depends(get_storage),
) -> ComponentRead:
    component = await storage.get_component(component_id)
    if not component:
        raise NotFoundError.for_entity("Component")
    return component


@router.post("", response_model=ComponentRead, status_code=status.HTTP_201_CREATED)
async def create_component(
    component_in: ComponentCreate,
    storage: Storage = Depends(get_storage),
) -> ComponentRead:
    """Create a new component."""
    component = await storage.create_component(component_in)
    logger.info("component_created", component_id=component.id, category=component.category)
    return component
