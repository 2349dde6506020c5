"""In-memory storage backed by dicts keyed by id.

Operations contain no awaits, so each one is atomic on the event loop.
Records are copied on the way in and out; callers never share state with
the store.
"""

import structlog

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

from .base import Storage, new_id, next_timestamp, utcnow

logger = structlog.get_logger()


class MemStorage(Storage):
    """Process-local store; contents are lost on restart."""

    def __init__(self) -> None:
        self.users: dict[str, UserRead] = {}
        self.projects: dict[str, ProjectRead] = {}
        self.templates: dict[str, TemplateRead] = {}
        self.components: dict[str, ComponentRead] = {}

    # === Users ===

    async def get_user(self, user_id: str) -> UserRead | None:
        user = self.users.get(user_id)
        return user.model_copy(deep=True) if user else None

    async def get_user_by_email(self, email: str) -> UserRead | None:
        for user in self.users.values():
            if user.email == email:
                return user.model_copy(deep=True)
        return None

    async def create_user(self, user: UserCreate, user_id: str | None = None) -> UserRead:
        now = utcnow()
        record = UserRead(
            **user.model_dump(),
            id=user_id or new_id(),
            created_at=now,
            updated_at=now,
        )
        self.users[record.id] = record
        return record.model_copy(deep=True)

    async def update_user(self, user_id: str, patch: UserUpdate) -> UserRead | None:
        current = self.users.get(user_id)
        if not current:
            return None
        record = UserRead.model_validate(
            {
                **current.model_dump(),
                **patch.changes(),
                "updated_at": next_timestamp(current.updated_at),
            }
        )
        self.users[user_id] = record
        return record.model_copy(deep=True)

    # === Projects ===

    async def get_project(self, project_id: str) -> ProjectRead | None:
        project = self.projects.get(project_id)
        return project.model_copy(deep=True) if project else None

    async def get_projects_by_user_id(self, user_id: str) -> list[ProjectRead]:
        return [p.model_copy(deep=True) for p in self.projects.values() if p.user_id == user_id]

    async def create_project(self, project: ProjectCreate) -> ProjectRead:
        now = utcnow()
        record = ProjectRead.model_validate(
            {**project.model_dump(), "id": new_id(), "created_at": now, "updated_at": now}
        )
        self.projects[record.id] = record
        logger.debug("project_stored", project_id=record.id, user_id=record.user_id)
        return record.model_copy(deep=True)

    async def update_project(self, project_id: str, patch: ProjectUpdate) -> ProjectRead | None:
        current = self.projects.get(project_id)
        if not current:
            return None
        record = ProjectRead.model_validate(
            {
                **current.model_dump(),
                **patch.changes(),
                "updated_at": next_timestamp(current.updated_at),
            }
        )
        self.projects[project_id] = record
        return record.model_copy(deep=True)

    async def delete_project(self, project_id: str) -> bool:
        return self.projects.pop(project_id, None) is not None

    # === Templates ===

    async def get_template(self, template_id: str) -> TemplateRead | None:
        template = self.templates.get(template_id)
        return template.model_copy(deep=True) if template else None

    async def get_all_templates(self) -> list[TemplateRead]:
        return [t.model_copy(deep=True) for t in self.templates.values() if t.is_public]

    async def get_templates_by_category(self, category: str) -> list[TemplateRead]:
        return [
            t.model_copy(deep=True)
            for t in self.templates.values()
            if t.category == category and t.is_public
        ]

    async def create_template(self, template: TemplateCreate) -> TemplateRead:
        record = TemplateRead(**template.model_dump(), id=new_id(), created_at=utcnow())
        self.templates[record.id] = record
        return record.model_copy(deep=True)

    # === Components ===

    async def get_component(self, component_id: str) -> ComponentRead | None:
        component = self.components.get(component_id)
        return component.model_copy(deep=True) if component else None

    async def get_all_components(self) -> list[ComponentRead]:
        return [c.model_copy(deep=True) for c in self.components.values() if c.is_public]

    async def get_components_by_category(self, category: str) -> list[ComponentRead]:
        return [
            c.model_copy(deep=True)
            for c in self.components.values()
            if c.category == category and c.is_public
        ]

    async def create_component(self, component: ComponentCreate) -> ComponentRead:
        record = ComponentRead.model_validate(
            {**component.model_dump(), "id": new_id(), "created_at": utcnow()}
        )
        self.components[record.id] = record
        return record.model_copy(deep=True)
