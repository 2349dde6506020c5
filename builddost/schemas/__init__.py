"""Common schemas."""

from .component import (
    ComponentCode,
    ComponentConfig,
    ComponentCreate,
    ComponentRead,
    PropSpec,
)
from .export import (
    GitHubExportResponse,
    ProjectCodePackage,
    TemplateExportRequest,
    TemplateSourceResponse,
)
from .generation import (
    AdaptiveProjectRequest,
    AdaptiveProjectResponse,
    BackendGenerationRequest,
    BackendGenerationResponse,
    CodeOptimizationRequest,
    CodeOptimizationResponse,
    ComponentGenerationRequest,
    ComponentGenerationResponse,
    FullStackProjectRequest,
    GeneratedBackend,
    GeneratedComponent,
    GeneratedProject,
    GeneratedProjectSummary,
    OptimizedCode,
    ProjectGenerationRequest,
    ProjectGenerationResponse,
    TechStack,
    WebsiteAnalysis,
    WebsiteAnalysisRequest,
    WebsiteAnalysisResponse,
)
from .project import (
    FileMap,
    ProjectConfig,
    ProjectCreate,
    ProjectDependencies,
    ProjectRead,
    ProjectStatus,
    ProjectStructure,
    ProjectUpdate,
    check_relative_path,
)
from .template import TEMPLATE_CATEGORIES, TemplateCreate, TemplateRead
from .user import UserCreate, UserRead, UserUpdate

__all__ = [
    "AdaptiveProjectRequest",
    "AdaptiveProjectResponse",
    "TEMPLATE_CATEGORIES",
    "BackendGenerationRequest",
    "BackendGenerationResponse",
    "CodeOptimizationRequest",
    "CodeOptimizationResponse",
    "ComponentCode",
    "ComponentConfig",
    "ComponentCreate",
    "ComponentGenerationRequest",
    "ComponentGenerationResponse",
    "ComponentRead",
    "FileMap",
    "FullStackProjectRequest",
    "GeneratedBackend",
    "GeneratedComponent",
    "GeneratedProject",
    "GeneratedProjectSummary",
    "GitHubExportResponse",
    "OptimizedCode",
    "ProjectCodePackage",
    "ProjectConfig",
    "ProjectCreate",
    "ProjectDependencies",
    "ProjectGenerationRequest",
    "ProjectGenerationResponse",
    "ProjectRead",
    "ProjectStatus",
    "ProjectStructure",
    "ProjectUpdate",
    "PropSpec",
    "TechStack",
    "TemplateCreate",
    "TemplateExportRequest",
    "TemplateRead",
    "TemplateSourceResponse",
    "UserCreate",
    "UserRead",
    "UserUpdate",
    "WebsiteAnalysis",
    "WebsiteAnalysisRequest",
    "WebsiteAnalysisResponse",
    "check_relative_path",
]
