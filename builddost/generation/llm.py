"""LLM factory for the generation client.

Builds a ``ChatOpenAI`` for either OpenAI directly or OpenRouter, from the
service settings.
"""

from langchain_openai import ChatOpenAI
import structlog

from builddost.config import Settings

logger = structlog.get_logger()

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


class LLMFactory:
    """Factory for creating LLM instances based on provider configuration.

    Supports:
    - OpenAI (default): direct connection to the OpenAI API
    - OpenRouter: OpenAI-compatible gateway with attribution headers
    """

    @staticmethod
    def create_llm(settings: Settings) -> ChatOpenAI:
        """Create an LLM instance from settings.

        Temperature and response format are bound per call, and retries are
        owned by the generation client, so the SDK's own retry is disabled.

        Raises:
            ValueError: If an unknown provider is configured
        """
        provider = settings.llm_provider
        logger.info("llm_client_created", provider=provider, model=settings.llm_model)

        if provider == "openrouter":
            return LLMFactory._create_openrouter_llm(settings)
        elif provider == "openai":
            return LLMFactory._create_openai_llm(settings)
        else:
            raise ValueError(
                f"Unknown LLM provider: {provider}. Supported providers: openrouter, openai"
            )

    @staticmethod
    def _create_openrouter_llm(settings: Settings) -> ChatOpenAI:
        headers = {"X-Title": settings.llm_app_name}
        if settings.llm_site_url:
            headers["HTTP-Referer"] = settings.llm_site_url

        return ChatOpenAI(
            base_url=OPENROUTER_BASE_URL,
            api_key=settings.llm_api_key,
            model=settings.llm_model,
            max_retries=0,
            default_headers=headers,
        )

    @staticmethod
    def _create_openai_llm(settings: Settings) -> ChatOpenAI:
        return ChatOpenAI(
            api_key=settings.llm_api_key,
            model=settings.llm_model,
            max_retries=0,
        )
