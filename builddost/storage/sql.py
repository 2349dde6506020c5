"""SQLAlchemy-backed storage.

Each operation opens its own session and commits one transaction.
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
import structlog

from builddost.models import Base, Component, Project, Template, User
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


class SqlStorage(Storage):
    """Store backed by PostgreSQL (asyncpg) or SQLite (aiosqlite)."""

    def __init__(self, database_url: str, echo: bool = False) -> None:
        self.engine: AsyncEngine = create_async_engine(database_url, echo=echo)
        self.session_maker = async_sessionmaker(self.engine, expire_on_commit=False)

    async def init(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("sql_storage_ready", dialect=self.engine.dialect.name)

    async def close(self) -> None:
        await self.engine.dispose()

    # === Users ===

    async def get_user(self, user_id: str) -> UserRead | None:
        async with self.session_maker() as session:
            user = await session.get(User, user_id)
            return UserRead.model_validate(user.to_dict()) if user else None

    async def get_user_by_email(self, email: str) -> UserRead | None:
        async with self.session_maker() as session:
            result = await session.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
            return UserRead.model_validate(user.to_dict()) if user else None

    async def create_user(self, user: UserCreate, user_id: str | None = None) -> UserRead:
        now = utcnow()
        row = User(id=user_id or new_id(), created_at=now, updated_at=now, **user.model_dump())
        async with self.session_maker() as session:
            session.add(row)
            await session.commit()
        return UserRead.model_validate(row.to_dict())

    async def update_user(self, user_id: str, patch: UserUpdate) -> UserRead | None:
        async with self.session_maker() as session:
            user = await session.get(User, user_id)
            if not user:
                return None
            _assign(user, patch.changes())
            user.updated_at = next_timestamp(user.updated_at)
            await session.commit()
            return UserRead.model_validate(user.to_dict())

    # === Projects ===

    async def get_project(self, project_id: str) -> ProjectRead | None:
        async with self.session_maker() as session:
            project = await session.get(Project, project_id)
            return ProjectRead.model_validate(project.to_dict()) if project else None

    async def get_projects_by_user_id(self, user_id: str) -> list[ProjectRead]:
        query = select(Project).where(Project.user_id == user_id).order_by(Project.created_at)
        async with self.session_maker() as session:
            result = await session.execute(query)
            return [ProjectRead.model_validate(p.to_dict()) for p in result.scalars().all()]

    async def create_project(self, project: ProjectCreate) -> ProjectRead:
        now = utcnow()
        row = Project(
            id=new_id(),
            created_at=now,
            updated_at=now,
            **project.model_dump(mode="json"),
        )
        async with self.session_maker() as session:
            session.add(row)
            await session.commit()
        logger.debug("project_stored", project_id=row.id, user_id=row.user_id)
        return ProjectRead.model_validate(row.to_dict())

    async def update_project(self, project_id: str, patch: ProjectUpdate) -> ProjectRead | None:
        async with self.session_maker() as session:
            project = await session.get(Project, project_id)
            if not project:
                return None
            _assign(project, patch.changes(mode="json"))
            project.updated_at = next_timestamp(project.updated_at)
            await session.commit()
            return ProjectRead.model_validate(project.to_dict())

    async def delete_project(self, project_id: str) -> bool:
        async with self.session_maker() as session:
            project = await session.get(Project, project_id)
            if not project:
                return False
            await session.delete(project)
            await session.commit()
            return True

    # === Templates ===

    async def get_template(self, template_id: str) -> TemplateRead | None:
        async with self.session_maker() as session:
            template = await session.get(Template, template_id)
            return TemplateRead.model_validate(template.to_dict()) if template else None

    async def get_all_templates(self) -> list[TemplateRead]:
        query = select(Template).where(Template.is_public.is_(True)).order_by(Template.created_at)
        return await self._list_templates(query)

    async def get_templates_by_category(self, category: str) -> list[TemplateRead]:
        query = (
            select(Template)
            .where(Template.category == category, Template.is_public.is_(True))
            .order_by(Template.created_at)
        )
        return await self._list_templates(query)

    async def _list_templates(self, query) -> list[TemplateRead]:
        async with self.session_maker() as session:
            result = await session.execute(query)
            return [TemplateRead.model_validate(t.to_dict()) for t in result.scalars().all()]

    async def create_template(self, template: TemplateCreate) -> TemplateRead:
        row = Template(id=new_id(), created_at=utcnow(), **template.model_dump(mode="json"))
        async with self.session_maker() as session:
            session.add(row)
            await session.commit()
        return TemplateRead.model_validate(row.to_dict())

    # === Components ===

    async def get_component(self, component_id: str) -> ComponentRead | None:
        async with self.session_maker() as session:
            component = await session.get(Component, component_id)
            return ComponentRead.model_validate(component.to_dict()) if component else None

    async def get_all_components(self) -> list[ComponentRead]:
        query = (
            select(Component).where(Component.is_public.is_(True)).order_by(Component.created_at)
        )
        return await self._list_components(query)

    async def get_components_by_category(self, category: str) -> list[ComponentRead]:
        query = (
            select(Component)
            .where(Component.category == category, Component.is_public.is_(True))
            .order_by(Component.created_at)
        )
        return await self._list_components(query)

    async def _list_components(self, query) -> list[ComponentRead]:
        async with self.session_maker() as session:
            result = await session.execute(query)
            return [ComponentRead.model_validate(c.to_dict()) for c in result.scalars().all()]

    async def create_component(self, component: ComponentCreate) -> ComponentRead:
        row = Component(id=new_id(), created_at=utcnow(), **component.model_dump(mode="json"))
        async with self.session_maker() as session:
            session.add(row)
            await session.commit()
        return ComponentRead.model_validate(row.to_dict())


def _assign(row: Base, changes: dict[str, Any]) -> None:
    for key, value in changes.items():
        setattr(row, key, value)
