"""Storage interface for users, projects, templates and components.

Callers depend on ``Storage`` only; the concrete backend is chosen once at
process start (see ``builddost.storage.create_storage``).
"""

from abc import ABC, abstractmethod
from datetime import UTC, datetime, timedelta
import uuid

from builddost.schemas import (
    ComponentCreate,
    ComponentRead,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
    TemplateCreate,
    TemplateRead,
    UserCreate,
    UserRead,
    UserUpdate,
)

ANONYMOUS_USER_ID = "anonymous"

_TICK = timedelta(microseconds=1)


def new_id() -> str:
    """Opaque, globally unique record id."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)


def next_timestamp(previous: datetime) -> datetime:
    """Current time, forced strictly past ``previous``."""
    if previous.tzinfo is None:
        previous = previous.replace(tzinfo=UTC)
    now = utcnow()
    return now if now > previous else previous + _TICK


class Storage(ABC):
    """Async key-value store keyed by opaque ids.

    ``create_*`` never rejects input beyond schema validation. ``update_*``
    returns ``None`` for an unknown id and ``delete_project`` returns
    ``False``; neither raises.
    """

    async def init(self) -> None:  # noqa: B027
        """Prepare the backend (create tables, open pools)."""

    async def close(self) -> None:  # noqa: B027
        """Release backend resources."""

    # === Users ===

    @abstractmethod
    async def get_user(self, user_id: str) -> UserRead | None: ...

    @abstractmethod
    async def get_user_by_email(self, email: str) -> UserRead | None: ...

    @abstractmethod
    async def create_user(self, user: UserCreate, user_id: str | None = None) -> UserRead: ...

    @abstractmethod
    async def update_user(self, user_id: str, patch: UserUpdate) -> UserRead | None: ...

    # === Projects ===

    @abstractmethod
    async def get_project(self, project_id: str) -> ProjectRead | None: ...

    @abstractmethod
    async def get_projects_by_user_id(self, user_id: str) -> list[ProjectRead]: ...

    @abstractmethod
    async def create_project(self, project: ProjectCreate) -> ProjectRead: ...

    @abstractmethod
    async def update_project(self, project_id: str, patch: ProjectUpdate) -> ProjectRead | None:
        ...

    @abstractmethod
    async def delete_project(self, project_id: str) -> bool: ...

    # === Templates ===

    @abstractmethod
    async def get_template(self, template_id: str) -> TemplateRead | None: ...

    @abstractmethod
    async def get_all_templates(self) -> list[TemplateRead]:
        """Public templates only."""

    @abstractmethod
    async def get_templates_by_category(self, category: str) -> list[TemplateRead]:
        """Public templates in ``category``."""

    @abstractmethod
    async def create_template(self, template: TemplateCreate) -> TemplateRead: ...

    # === Components ===

    @abstractmethod
    async def get_component(self, component_id: str) -> ComponentRead | None: ...

    @abstractmethod
    async def get_all_components(self) -> list[ComponentRead]:
        """Public components only."""

    @abstractmethod
    async def get_components_by_category(self, category: str) -> list[ComponentRead]:
        """Public components in ``category``."""

    @abstractmethod
    async def create_component(self, component: ComponentCreate) -> ComponentRead: ...
