import json
from unittest.mock import AsyncMock, patch

import httpx
import openai
import pytest

from builddost.errors import GenerationFailure
from builddost.generation import GenerationClient
from builddost.schemas import (
    BackendGenerationRequest,
    CodeOptimizationRequest,
    ComponentGenerationRequest,
    FullStackProjectRequest,
    WebsiteAnalysis,
    WebsiteAnalysisRequest,
)


def connection_error() -> openai.APIConnectionError:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    return openai.APIConnectionError(request=request)


@pytest.fixture
def client(llm):
    return GenerationClient(llm, timeout=5.0, max_retries=2, retry_backoff=0)


class TestGenerateProject:
    """Full-stack project mode."""

    @pytest.mark.asyncio
    async def test_returns_validated_project(self, client, llm, project_payload):
        llm.push(project_payload)

        project = await client.generate_project(
            FullStackProjectRequest(description="Food delivery", features=["login", "cart"])
        )

        assert project.id == "proj_gen_1"
        assert project.name == "Food Delivery"
        assert set(project.files) == {"package.json", "src/App.tsx", "server/index.ts"}
        assert project.dependencies.backend == ["express", "zod"]
        assert "Features to include: login, cart" in llm.prompts[0]

    @pytest.mark.asyncio
    async def test_binds_json_mode_and_precise_temperature(self, client, llm, project_payload):
        llm.push(project_payload)

        await client.generate_project(FullStackProjectRequest(description="Food delivery"))

        assert llm.bound == [{"response_format": {"type": "json_object"}, "temperature": 0.3}]

    @pytest.mark.asyncio
    async def test_missing_fields_defaulted(self, client, llm):
        llm.push({"files": {"README.md": "# Hi"}})

        project = await client.generate_project(
            FullStackProjectRequest(description="Recipe sharing site")
        )

        assert project.id.startswith("project_")
        assert project.name == "Recipe Sharing Site"
        assert project.description == "Recipe sharing site"
        assert project.files == {"README.md": "# Hi"}
        assert project.structure.frontend == ["src/", "src/components/", "src/pages/"]

    @pytest.mark.asyncio
    async def test_empty_object_fully_defaulted(self, client, llm):
        llm.push({})

        project = await client.generate_project(
            FullStackProjectRequest(description="a simple todo app")
        )

        assert project.id
        assert project.name == "Simple Todo"
        assert project.description == "a simple todo app"
        assert project.files == {}
        assert project.dependencies.backend == ["express", "drizzle-orm", "zod"]

    @pytest.mark.asyncio
    async def test_fenced_output_accepted(self, client, llm, project_payload):
        llm.push(f"```json\n{json.dumps(project_payload)}\n```")

        project = await client.generate_project(FullStackProjectRequest(description="x"))
        assert project.name == "Food Delivery"

    @pytest.mark.asyncio
    async def test_non_json_output_fails(self, client, llm):
        llm.push("I cannot help with that.")

        with pytest.raises(GenerationFailure, match="Failed to generate full-stack project"):
            await client.generate_project(FullStackProjectRequest(description="x"))

    @pytest.mark.asyncio
    async def test_non_object_output_fails(self, client, llm):
        llm.push("[]")

        with pytest.raises(GenerationFailure, match="expected a JSON object"):
            await client.generate_project(FullStackProjectRequest(description="x"))

    @pytest.mark.asyncio
    async def test_files_with_non_string_content_fail(self, client, llm, project_payload):
        project_payload["files"] = {"src/App.tsx": {"not": "a string"}}
        llm.push(project_payload)

        with pytest.raises(GenerationFailure):
            await client.generate_project(FullStackProjectRequest(description="x"))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["../../.bashrc", "/etc/cron.d/job", "server/../../x.ts"])
    async def test_file_paths_outside_project_fail(self, client, llm, project_payload, path):
        project_payload["files"][path] = "payload"
        llm.push(project_payload)

        with pytest.raises(GenerationFailure, match="file path must"):
            await client.generate_project(FullStackProjectRequest(description="x"))


class TestAdaptiveProject:
    """Analysis-driven project mode."""

    @pytest.fixture
    def analysis(self) -> WebsiteAnalysis:
        return WebsiteAnalysis(
            project_type="e-commerce",
            complexity="complex",
            suggested_features=["cart", "authentication"],
            tech_stack={"frontend": ["react", "zustand"], "backend": ["express"], "database": True},
            timeline="3 weeks",
            recommendations=[],
        )

    @pytest.mark.asyncio
    async def test_supplied_analysis_used_directly(self, client, llm, analysis, project_payload):
        llm.push(project_payload)

        project, used = await client.generate_adaptive_project("Sneaker shop", analysis)

        assert project.files == project_payload["files"]
        assert used is analysis
        assert len(llm.calls) == 1
        assert "production-ready e-commerce application" in llm.prompts[0]
        assert llm.bound[0]["temperature"] == 0.2

    @pytest.mark.asyncio
    async def test_analysis_produced_first_when_missing(self, client, llm, project_payload):
        llm.push({"projectType": "blog", "complexity": "simple"}, project_payload)

        project, analysis = await client.generate_adaptive_project("Travel blog")

        assert analysis.project_type == "blog"
        assert analysis.tech_stack.database is False
        assert len(llm.calls) == 2
        assert 'User Input: "Travel blog"' in llm.prompts[0]
        assert "Project Type: blog" in llm.prompts[1]
        assert project.name == "Food Delivery"

    @pytest.mark.asyncio
    async def test_defaults_follow_tech_stack(self, client, llm, analysis):
        llm.push({"files": {"src/App.tsx": "export {}"}})

        project, _ = await client.generate_adaptive_project("Sneaker shop", analysis)

        assert project.name == "Sneaker Shop"
        assert project.structure.database == ["shared/"]
        assert project.dependencies.frontend == ["react", "zustand"]
        assert project.dependencies.backend == ["express"]

    @pytest.mark.asyncio
    async def test_no_database_no_shared_dir(self, client, llm, analysis):
        analysis.tech_stack.database = False
        llm.push({})

        project, _ = await client.generate_adaptive_project("Sneaker shop", analysis)

        assert project.structure.database == []
        assert project.structure.backend == ["server/", "server/routes/"]

    @pytest.mark.asyncio
    async def test_failure_names_adaptive_action(self, client, llm, analysis):
        llm.push("not json")

        with pytest.raises(GenerationFailure, match="Failed to generate adaptive project"):
            await client.generate_adaptive_project("Sneaker shop", analysis)


class TestOtherModes:
    @pytest.mark.asyncio
    async def test_component_uses_creative_temperature(self, client, llm):
        llm.push(
            {
                "name": "PricingTable",
                "category": "layout",
                "code": {"jsx": "<table />", "props": {"plans": 3}},
                "config": {"props": {"plans": {"type": "number", "default": 3}}},
            }
        )

        component = await client.generate_component(
            ComponentGenerationRequest(description="A pricing table")
        )

        assert component.name == "PricingTable"
        assert component.code.props == {"plans": 3}
        assert component.config.props["plans"].type == "number"
        assert llm.bound[0]["temperature"] == 0.7

    @pytest.mark.asyncio
    async def test_component_defaults_category_to_type(self, client, llm):
        llm.push({"code": {"jsx": "<form />"}})

        component = await client.generate_component(
            ComponentGenerationRequest(description="A signup form", type="forms")
        )

        assert component.name == "GeneratedComponent"
        assert component.category == "forms"
        assert component.id is None

    @pytest.mark.asyncio
    async def test_backend_defaults_to_empty_lists(self, client, llm):
        llm.push({"endpoints": [{"method": "GET", "path": "/api/items"}]})

        backend = await client.generate_backend(
            BackendGenerationRequest(description="Inventory API"), ["search"]
        )

        assert backend.endpoints[0].path == "/api/items"
        assert backend.models == []
        assert backend.package_dependencies == []
        assert "Features needed: search" in llm.prompts[0]

    @pytest.mark.asyncio
    async def test_optimize_without_result_returns_input(self, client, llm):
        llm.push({})

        result = await client.optimize_code(CodeOptimizationRequest(code="var x = 1"))

        assert result.optimized_code == "var x = 1"
        assert result.improvements == []
        assert llm.bound[0]["temperature"] == 0.3

    @pytest.mark.asyncio
    async def test_analysis(self, client, llm):
        llm.push(
            {
                "projectType": "e-commerce",
                "complexity": "complex",
                "suggestedFeatures": ["cart", "payments"],
                "recommendations": ["Start with the catalog"],
            }
        )

        analysis = await client.analyze_website(WebsiteAnalysisRequest(user_input="Shoe shop"))

        assert analysis.project_type == "e-commerce"
        assert analysis.suggested_features == ["cart", "payments"]
        assert analysis.timeline == "Not estimated"
        assert analysis.tech_stack.backend == ["express"]


class TestRetryPolicy:
    """Timeout and bounded retry around each call."""

    @pytest.mark.asyncio
    async def test_transient_errors_retried(self, client, llm, project_payload):
        llm.push(connection_error(), TimeoutError(), project_payload)

        project = await client.generate_project(FullStackProjectRequest(description="x"))

        assert project.name == "Food Delivery"
        assert len(llm.calls) == 3

    @pytest.mark.asyncio
    async def test_retries_exhausted(self, client, llm):
        llm.push(connection_error(), connection_error(), connection_error())

        with pytest.raises(GenerationFailure, match="Failed to generate full-stack project"):
            await client.generate_project(FullStackProjectRequest(description="x"))
        assert len(llm.calls) == 3

    @pytest.mark.asyncio
    async def test_backoff_doubles(self, llm, project_payload):
        client = GenerationClient(llm, max_retries=2, retry_backoff=1.0)
        llm.push(TimeoutError(), TimeoutError(), project_payload)

        with patch("builddost.generation.client.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await client.generate_project(FullStackProjectRequest(description="x"))

        assert [c.args[0] for c in sleep.await_args_list] == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_other_errors_not_retried(self, client, llm):
        llm.push(RuntimeError("invalid api key"))

        with pytest.raises(GenerationFailure, match="invalid api key"):
            await client.generate_project(FullStackProjectRequest(description="x"))
        assert len(llm.calls) == 1

    @pytest.mark.asyncio
    async def test_timeout(self, llm, stall):
        client = GenerationClient(llm, timeout=0.01, max_retries=0)
        llm.push(stall)

        with pytest.raises(GenerationFailure, match="timed out after 0.01s"):
            await client.generate_project(FullStackProjectRequest(description="x"))

    @pytest.mark.asyncio
    async def test_list_content_joined(self, client, llm):
        llm.push([{"type": "text", "text": '{"optimizedCode": "a"'}, {"type": "text", "text": "}"}])

        result = await client.optimize_code(CodeOptimizationRequest(code="b"))
        assert result.optimized_code == "a"
