"""Default gallery content and the demo user."""

from sqlalchemy.exc import IntegrityError
import structlog

from builddost.schemas import ComponentCreate, TemplateCreate, UserCreate

from .base import ANONYMOUS_USER_ID, Storage

logger = structlog.get_logger()

DEFAULT_TEMPLATES = [
    TemplateCreate(
        name="SaaS Landing",
        description="Modern SaaS landing page with hero section and features",
        category="landing",
        preview_image="https://images.unsplash.com/photo-1460925895917-afdab827c52f?w=400&h=300&fit=crop",
    ),
    TemplateCreate(
        name="E-commerce Store",
        description="Complete online store with product catalog and cart",
        category="ecommerce",
        preview_image="https://images.unsplash.com/photo-1556742049-0cfed4f6a45d?w=400&h=300&fit=crop",
    ),
    TemplateCreate(
        name="Portfolio",
        description="Creative portfolio showcase for designers and developers",
        category="portfolio",
        preview_image="https://images.unsplash.com/photo-1467232004584-a241de8bcf5d?w=400&h=300&fit=crop",
    ),
    TemplateCreate(
        name="Blog",
        description="Clean blog layout with article listings and reading view",
        category="blog",
        preview_image="https://images.unsplash.com/photo-1499750310107-5fef28a66643?w=400&h=300&fit=crop",
    ),
]

DEFAULT_COMPONENTS = [
    ComponentCreate(name="Header", category="layout"),
    ComponentCreate(name="Button", category="ui"),
    ComponentCreate(name="Card", category="ui"),
    ComponentCreate(name="Grid", category="layout"),
]


async def seed_defaults(storage: Storage) -> bool:
    """Populate an empty store. Returns False if it already had templates."""
    if await storage.get_all_templates():
        return False

    for template in DEFAULT_TEMPLATES:
        await storage.create_template(template)
    for component in DEFAULT_COMPONENTS:
        await storage.create_component(component)
    await ensure_anonymous_user(storage)

    logger.info(
        "storage_seeded",
        templates=len(DEFAULT_TEMPLATES),
        components=len(DEFAULT_COMPONENTS),
    )
    return True


async def ensure_anonymous_user(storage: Storage) -> None:
    """Create the demo owner of unattributed projects if it is missing.

    An insert that loses a race with a concurrent request is tolerated.
    """
    if await storage.get_user(ANONYMOUS_USER_ID):
        return
    try:
        await storage.create_user(UserCreate(first_name="Anonymous"), user_id=ANONYMOUS_USER_ID)
    except IntegrityError:
        if not await storage.get_user(ANONYMOUS_USER_ID):
            raise
        logger.info("anonymous_user_created_concurrently", user_id=ANONYMOUS_USER_ID)
