"""Generation client: one JSON-mode LLM call per generation step.

Each mode builds its prompt, calls the model with a timeout and a
bounded retry on transient failures, parses the JSON object it returns,
fills missing fields from the mode's default table and validates the
result. Every failure surfaces as ``GenerationFailure``.
"""

import asyncio
from typing import Any, TypeVar

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
import openai
from pydantic import BaseModel
import structlog

from builddost.config import Settings
from builddost.errors import GenerationFailure
from builddost.schemas import (
    BackendGenerationRequest,
    CodeOptimizationRequest,
    ComponentGenerationRequest,
    FullStackProjectRequest,
    GeneratedBackend,
    GeneratedComponent,
    GeneratedProject,
    OptimizedCode,
    WebsiteAnalysis,
    WebsiteAnalysisRequest,
)

from . import prompts
from .llm import LLMFactory
from .normalize import (
    ANALYSIS_DEFAULTS,
    BACKEND_DEFAULTS,
    DefaultTable,
    adaptive_project_defaults,
    apply_defaults,
    component_defaults,
    optimize_defaults,
    parse_json_object,
    project_defaults,
)

logger = structlog.get_logger()

ResultT = TypeVar("ResultT", bound=BaseModel)

CREATIVE_TEMPERATURE = 0.7
PRECISE_TEMPERATURE = 0.3
STRICT_TEMPERATURE = 0.2

# Failures worth another attempt; everything else fails immediately.
TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (
    TimeoutError,
    openai.APIConnectionError,  # includes APITimeoutError
    openai.RateLimitError,
    openai.InternalServerError,
)


class GenerationClient:
    """Calls the hosted model in JSON-object mode."""

    def __init__(
        self,
        llm: BaseChatModel,
        timeout: float = 120.0,
        max_retries: int = 2,
        retry_backoff: float = 1.0,
    ) -> None:
        self.llm = llm
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_backoff = retry_backoff

    @classmethod
    def from_settings(cls, settings: Settings) -> "GenerationClient":
        return cls(
            LLMFactory.create_llm(settings),
            timeout=settings.generation_timeout,
            max_retries=settings.generation_max_retries,
            retry_backoff=settings.generation_retry_backoff,
        )

    # === Modes ===

    async def generate_component(self, request: ComponentGenerationRequest) -> GeneratedComponent:
        return await self._generate(
            action="generate component",
            system_prompt=prompts.COMPONENT_SYSTEM_PROMPT,
            prompt=prompts.build_component_prompt(request),
            temperature=CREATIVE_TEMPERATURE,
            defaults=component_defaults(request.type),
            result_model=GeneratedComponent,
        )

    async def generate_backend(
        self, request: BackendGenerationRequest, features: list[str]
    ) -> GeneratedBackend:
        return await self._generate(
            action="generate backend",
            system_prompt=prompts.BACKEND_SYSTEM_PROMPT,
            prompt=prompts.build_backend_prompt(request, features),
            temperature=CREATIVE_TEMPERATURE,
            defaults=BACKEND_DEFAULTS,
            result_model=GeneratedBackend,
        )

    async def optimize_code(self, request: CodeOptimizationRequest) -> OptimizedCode:
        return await self._generate(
            action="optimize code",
            system_prompt=prompts.OPTIMIZE_SYSTEM_PROMPT,
            prompt=prompts.build_optimize_prompt(request),
            temperature=PRECISE_TEMPERATURE,
            defaults=optimize_defaults(request.code),
            result_model=OptimizedCode,
        )

    async def generate_project(self, request: FullStackProjectRequest) -> GeneratedProject:
        return await self._generate(
            action="generate full-stack project",
            system_prompt=prompts.PROJECT_SYSTEM_PROMPT,
            prompt=prompts.build_project_prompt(request),
            temperature=PRECISE_TEMPERATURE,
            defaults=project_defaults(request.description),
            result_model=GeneratedProject,
        )

    async def analyze_website(self, request: WebsiteAnalysisRequest) -> WebsiteAnalysis:
        return await self._generate(
            action="analyze website requirements",
            system_prompt=prompts.ANALYSIS_SYSTEM_PROMPT,
            prompt=prompts.build_analysis_prompt(request),
            temperature=PRECISE_TEMPERATURE,
            defaults=ANALYSIS_DEFAULTS,
            result_model=WebsiteAnalysis,
        )

    async def generate_adaptive_project(
        self, user_input: str, analysis: WebsiteAnalysis | None = None
    ) -> tuple[GeneratedProject, WebsiteAnalysis]:
        """Generate a project shaped by a requirements analysis.

        Without an ``analysis`` one is produced first, so this mode makes one
        or two model calls. Returns the project and the analysis it used.
        """
        if analysis is None:
            analysis = await self.analyze_website(WebsiteAnalysisRequest(user_input=user_input))

        project = await self._generate(
            action="generate adaptive project",
            system_prompt=prompts.ADAPTIVE_SYSTEM_PROMPT,
            prompt=prompts.build_adaptive_project_prompt(user_input, analysis),
            temperature=STRICT_TEMPERATURE,
            defaults=adaptive_project_defaults(user_input, analysis.tech_stack),
            result_model=GeneratedProject,
        )
        return project, analysis

    # === Internals ===

    async def _generate(
        self,
        *,
        action: str,
        system_prompt: str,
        prompt: str,
        temperature: float,
        defaults: DefaultTable,
        result_model: type[ResultT],
    ) -> ResultT:
        messages = [SystemMessage(content=system_prompt), HumanMessage(content=prompt)]
        content = await self._complete(action, messages, temperature)

        try:
            raw = parse_json_object(content)
            result = result_model.model_validate(apply_defaults(raw, defaults))
        except ValueError as e:
            # Raw output goes to the log only
            logger.warning(
                "generation_response_invalid",
                action=action,
                error=str(e),
                content=content[:500],
            )
            raise GenerationFailure(f"Failed to {action}: {e}") from e

        logger.info("generation_completed", action=action, result=result_model.__name__)
        return result

    async def _complete(self, action: str, messages: list[Any], temperature: float) -> str:
        """Invoke the model, retrying transient failures with exponential backoff."""
        runnable = self.llm.bind(response_format={"type": "json_object"}, temperature=temperature)

        attempt = 0
        while True:
            try:
                response = await asyncio.wait_for(runnable.ainvoke(messages), self.timeout)
                return _content_text(response.content)
            except TRANSIENT_ERRORS as e:
                error = _describe(e, self.timeout)
                if attempt >= self.max_retries:
                    logger.error(
                        "generation_failed",
                        action=action,
                        attempts=attempt + 1,
                        error=error,
                        error_type=type(e).__name__,
                    )
                    raise GenerationFailure(f"Failed to {action}: {error}") from e

                delay = self.retry_backoff * 2**attempt
                logger.warning(
                    "generation_retry",
                    action=action,
                    attempt=attempt + 1,
                    delay_sec=delay,
                    error=error,
                )
                await asyncio.sleep(delay)
                attempt += 1
            except Exception as e:
                logger.error(
                    "generation_failed",
                    action=action,
                    attempts=attempt + 1,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise GenerationFailure(f"Failed to {action}: {e}") from e


def _content_text(content: str | list) -> str:
    if isinstance(content, str):
        return content
    # Multi-part message: concatenate text parts
    return "".join(
        part if isinstance(part, str) else str(part.get("text", "")) for part in content
    )


def _describe(error: BaseException, timeout: float) -> str:
    if isinstance(error, TimeoutError):
        return f"timed out after {timeout}s"
    return str(error) or type(error).__name__
