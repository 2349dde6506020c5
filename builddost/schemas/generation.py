"""Generation request and result schemas.

Result models mirror the JSON shapes the prompts ask the model to return.
They are validated after per-field defaulting, so every field has a value.
"""

from typing import Annotated, Literal

from pydantic import Field, StringConstraints

from .base import CamelModel, ExtensibleModel
from .component import ComponentCode, ComponentConfig
from .project import FileMap, ProjectDependencies, ProjectStructure

MAX_PROMPT_LENGTH = 10_000

Description = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_PROMPT_LENGTH)
]
SourceCode = Annotated[str, StringConstraints(min_length=1, max_length=MAX_PROMPT_LENGTH * 10)]
ProjectType = Literal["web", "mobile", "desktop"]


# === Requests ===


class ProjectGenerationRequest(CamelModel):
    """Body of POST /api/projects/generate."""

    prompt: Description
    user_id: str | None = Field(None, description="Owner; the anonymous demo user if omitted")
    type: ProjectType = "web"


class FullStackProjectRequest(CamelModel):
    """Input of full-stack project generation."""

    description: Description
    features: list[str] = Field(default_factory=list)
    type: ProjectType = "web"


class ComponentGenerationRequest(CamelModel):
    """Body of POST /api/ai/generate-component."""

    description: Description
    type: str | None = None
    style: str | None = None
    functionality: list[str] = Field(default_factory=list)
    save: bool = False


class BackendGenerationRequest(CamelModel):
    """Body of POST /api/ai/generate-backend."""

    description: Description
    features: list[str] | None = Field(
        None, description="Defaults to the features extracted from the description"
    )
    database: bool = False
    authentication: bool = False
    api_endpoints: list[str] = Field(default_factory=list)


class CodeOptimizationRequest(CamelModel):
    """Body of POST /api/ai/optimize-code."""

    code: SourceCode
    type: Literal["frontend", "backend"] = "frontend"
    improvements: list[str] = Field(default_factory=list)


class WebsiteAnalysisRequest(CamelModel):
    """Body of POST /api/ai/analyze-website."""

    user_input: Description
    context: str | None = None
    previous_feedback: list[str] = Field(default_factory=list)


# === Results ===


class GeneratedComponent(ExtensibleModel):
    """Component returned by the model; ``id`` is set once persisted."""

    id: str | None = None
    name: str
    category: str
    code: ComponentCode
    config: ComponentConfig


class BackendEndpoint(ExtensibleModel):
    method: str = "GET"
    path: str = ""
    code: str = ""
    description: str = ""


class BackendModel(ExtensibleModel):
    name: str = ""
    schema_definition: str = Field("", alias="schema")
    relationships: list[str] = Field(default_factory=list)


class BackendMiddleware(ExtensibleModel):
    name: str = ""
    code: str = ""
    purpose: str = ""


class GeneratedBackend(ExtensibleModel):
    """Backend scaffold returned by the model."""

    endpoints: list[BackendEndpoint]
    models: list[BackendModel]
    middleware: list[BackendMiddleware]
    package_dependencies: list[str]


class OptimizedCode(ExtensibleModel):
    """Code optimization result."""

    optimized_code: str
    improvements: list[str]


class GeneratedProject(CamelModel):
    """Full-stack project returned by the model."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    files: FileMap
    structure: ProjectStructure
    dependencies: ProjectDependencies


class TechStack(ExtensibleModel):
    frontend: list[str] = Field(default_factory=list)
    backend: list[str] = Field(default_factory=list)
    database: bool = False


class WebsiteAnalysis(ExtensibleModel):
    """Requirements analysis of a website request."""

    project_type: str
    complexity: str
    suggested_features: list[str]
    tech_stack: TechStack
    timeline: str
    recommendations: list[str]


# === Adaptive generation ===


class AdaptiveProjectRequest(CamelModel):
    """Body of POST /api/ai/generate-adaptive."""

    user_input: Description
    analysis: WebsiteAnalysis | None = Field(
        None, description="Requirements analysis; produced first if omitted"
    )
    user_id: str | None = Field(None, description="Owner; the anonymous demo user if omitted")


# === Envelopes ===


class GeneratedProjectSummary(CamelModel):
    """Project part of the generation envelope; ``id`` is the store id."""

    id: str
    name: str
    description: str | None
    files: FileMap
    structure: ProjectStructure
    dependencies: ProjectDependencies


class ProjectGenerationResponse(CamelModel):
    success: bool = True
    project: GeneratedProjectSummary


class ComponentGenerationResponse(CamelModel):
    success: bool = True
    component: GeneratedComponent


class BackendGenerationResponse(CamelModel):
    success: bool = True
    backend: GeneratedBackend


class CodeOptimizationResponse(CamelModel):
    success: bool = True
    optimization: OptimizedCode


class WebsiteAnalysisResponse(CamelModel):
    success: bool = True
    analysis: WebsiteAnalysis


class AdaptiveProjectResponse(CamelModel):
    success: bool = True
    project: GeneratedProjectSummary
    analysis: WebsiteAnalysis
