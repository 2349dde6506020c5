"""Storage contract, run against the in-memory and the SQLite-backed store."""

import pytest

from builddost.schemas import (
    ComponentCreate,
    ProjectConfig,
    ProjectCreate,
    ProjectStatus,
    ProjectUpdate,
    TemplateCreate,
    UserCreate,
    UserUpdate,
)
from builddost.storage import MemStorage, SqlStorage


@pytest.fixture(params=["memory", "sql"])
async def storage(request, tmp_path):
    if request.param == "memory":
        store = MemStorage()
    else:
        store = SqlStorage(f"sqlite+aiosqlite:///{tmp_path / 'builddost.db'}")
    await store.init()
    yield store
    await store.close()


@pytest.fixture
async def user(storage):
    return await storage.create_user(UserCreate(email="ada@example.com", first_name="Ada"))


def new_project(user_id: str, name: str = "Shop", **kwargs) -> ProjectCreate:
    return ProjectCreate(user_id=user_id, name=name, **kwargs)


class TestUsers:
    @pytest.mark.asyncio
    async def test_create_and_get(self, storage, user):
        fetched = await storage.get_user(user.id)

        assert fetched.email == "ada@example.com"
        assert fetched.first_name == "Ada"
        assert user.created_at == user.updated_at

    @pytest.mark.asyncio
    async def test_create_with_explicit_id(self, storage):
        created = await storage.create_user(UserCreate(first_name="Anonymous"), user_id="anonymous")
        assert created.id == "anonymous"
        assert (await storage.get_user("anonymous")).first_name == "Anonymous"

    @pytest.mark.asyncio
    async def test_get_by_email(self, storage, user):
        assert (await storage.get_user_by_email("ada@example.com")).id == user.id
        assert await storage.get_user_by_email("nobody@example.com") is None

    @pytest.mark.asyncio
    async def test_update_applies_set_fields_only(self, storage, user):
        updated = await storage.update_user(user.id, UserUpdate(company="Analytical Engines"))

        assert updated.company == "Analytical Engines"
        assert updated.first_name == "Ada"
        assert updated.updated_at > user.updated_at

    @pytest.mark.asyncio
    async def test_update_unknown_user(self, storage):
        assert await storage.update_user("missing", UserUpdate(bio="x")) is None

    @pytest.mark.asyncio
    async def test_get_unknown_user(self, storage):
        assert await storage.get_user("missing") is None


class TestProjects:
    @pytest.mark.asyncio
    async def test_create_assigns_id_and_defaults(self, storage, user):
        project = await storage.create_project(new_project(user.id))

        assert project.id
        assert project.status == ProjectStatus.DRAFT
        assert project.is_public is False
        assert project.components == []
        assert project.config.files == {}
        assert project.created_at == project.updated_at

    @pytest.mark.asyncio
    async def test_ids_unique(self, storage, user):
        first = await storage.create_project(new_project(user.id))
        second = await storage.create_project(new_project(user.id))
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_get_round_trips_config(self, storage, user):
        config = ProjectConfig(files={"src/App.tsx": "code"}, generationId="proj_gen_1")
        created = await storage.create_project(new_project(user.id, config=config))

        fetched = await storage.get_project(created.id)

        assert fetched.config.files == {"src/App.tsx": "code"}
        assert fetched.config.model_extra["generationId"] == "proj_gen_1"

    @pytest.mark.asyncio
    async def test_list_by_user(self, storage, user):
        other = await storage.create_user(UserCreate(email="bob@example.com"))
        await storage.create_project(new_project(user.id, "One"))
        await storage.create_project(new_project(user.id, "Two"))
        await storage.create_project(new_project(other.id, "Theirs"))

        projects = await storage.get_projects_by_user_id(user.id)

        assert sorted(p.name for p in projects) == ["One", "Two"]
        assert await storage.get_projects_by_user_id("nobody") == []

    @pytest.mark.asyncio
    async def test_update_keeps_unset_fields(self, storage, user):
        created = await storage.create_project(
            new_project(user.id, description="Sells shoes", is_public=True)
        )

        updated = await storage.update_project(
            created.id, ProjectUpdate(status=ProjectStatus.LIVE)
        )

        assert updated.status == ProjectStatus.LIVE
        assert updated.name == "Shop"
        assert updated.description == "Sells shoes"
        assert updated.is_public is True
        assert updated.updated_at > created.updated_at

    @pytest.mark.asyncio
    async def test_update_null_clears_nullable_only(self, storage, user):
        created = await storage.create_project(new_project(user.id, description="Sells shoes"))

        updated = await storage.update_project(
            created.id, ProjectUpdate.model_validate({"description": None, "name": None})
        )

        assert updated.description is None
        assert updated.name == "Shop"

    @pytest.mark.asyncio
    async def test_updated_at_strictly_increases(self, storage, user):
        project = await storage.create_project(new_project(user.id))
        stamps = [project.updated_at]
        for i in range(3):
            project = await storage.update_project(project.id, ProjectUpdate(name=f"Shop {i}"))
            stamps.append(project.updated_at)

        assert stamps == sorted(stamps)
        assert len(set(stamps)) == len(stamps)

    @pytest.mark.asyncio
    async def test_update_unknown_project(self, storage):
        assert await storage.update_project("missing", ProjectUpdate(name="x")) is None

    @pytest.mark.asyncio
    async def test_delete(self, storage, user):
        project = await storage.create_project(new_project(user.id))

        assert await storage.delete_project(project.id) is True
        assert await storage.get_project(project.id) is None
        assert await storage.delete_project(project.id) is False


class TestGallery:
    """Templates and components: listings show public records only."""

    @pytest.mark.asyncio
    async def test_templates_filtered(self, storage):
        landing = await storage.create_template(TemplateCreate(name="SaaS", category="landing"))
        await storage.create_template(TemplateCreate(name="Shop", category="ecommerce"))
        await storage.create_template(
            TemplateCreate(name="Draft", category="landing", is_public=False)
        )

        assert len(await storage.get_all_templates()) == 2
        by_category = await storage.get_templates_by_category("landing")
        assert [t.id for t in by_category] == [landing.id]
        assert await storage.get_templates_by_category("blog") == []

    @pytest.mark.asyncio
    async def test_private_template_still_fetchable_by_id(self, storage):
        draft = await storage.create_template(
            TemplateCreate(name="Draft", category="landing", is_public=False)
        )
        assert (await storage.get_template(draft.id)).name == "Draft"

    @pytest.mark.asyncio
    async def test_components_filtered(self, storage):
        button = await storage.create_component(
            ComponentCreate(name="Button", category="ui", code={"jsx": "<button />"})
        )
        await storage.create_component(ComponentCreate(name="Grid", category="layout"))
        await storage.create_component(
            ComponentCreate(name="Secret", category="ui", is_public=False)
        )

        assert len(await storage.get_all_components()) == 2
        assert [c.id for c in await storage.get_components_by_category("ui")] == [button.id]

        fetched = await storage.get_component(button.id)
        assert fetched.code.jsx == "<button />"
        assert await storage.get_component("missing") is None


class TestMemStorageIsolation:
    @pytest.mark.asyncio
    async def test_returned_records_are_copies(self):
        storage = MemStorage()
        user = await storage.create_user(UserCreate(first_name="Ada"))
        project = await storage.create_project(
            ProjectCreate(user_id=user.id, name="Shop", config=ProjectConfig(files={"a": "1"}))
        )

        project.config.files["b"] = "2"
        project.name = "Changed"

        stored = await storage.get_project(project.id)
        assert stored.name == "Shop"
        assert stored.config.files == {"a": "1"}
