"""Users router."""

from fastapi import APIRouter, Depends, status
import structlog

from builddost.errors import NotFoundError, ValidationError
from builddost.schemas import UserCreate, UserRead, UserUpdate
from builddost.storage import Storage

from ..dependencies import get_storage

logger = structlog.get_logger()

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_in: UserCreate,
    storage: Storage = Depends(get_storage),
) -> UserRead:
    """Create a new user."""
    if user_in.email and await storage.get_user_by_email(user_in.email):
        logger.warning("user_creation_failed_duplicate", email=user_in.email)
        raise ValidationError("User with this email already exists")

    user = await storage.create_user(user_in)
    logger.info("user_created", user_id=user.id)
    return user


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: str,
    storage: Storage = Depends(get_storage),
) -> UserRead:
    """Get user by ID."""
    user = await storage.get_user(user_id)
    if not user:
        raise NotFoundError.for_entity("User")
    return user


@router.patch("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: str,
    user_in: UserUpdate,
    storage: Storage = Depends(get_storage),
) -> UserRead:
    """Edit profile fields; unset fields are left alone."""
    if user_in.email:
        owner = await storage.get_user_by_email(user_in.email)
        if owner and owner.id != user_id:
            raise ValidationError("User with this email already exists")

    user = await storage.update_user(user_id, user_in)
    if not user:
        raise NotFoundError.for_entity("User")

    logger.info("user_updated", user_id=user_id, fields=sorted(user_in.changes()))
    return user
