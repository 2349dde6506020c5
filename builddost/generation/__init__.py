"""Prompt-driven generation pipeline."""

from .client import GenerationClient
from .features import FEATURE_VOCABULARY, extract_features
from .llm import LLMFactory
from .normalize import apply_defaults, extract_project_name, parse_json_object

__all__ = [
    "FEATURE_VOCABULARY",
    "GenerationClient",
    "LLMFactory",
    "apply_defaults",
    "extract_features",
    "extract_project_name",
    "parse_json_object",
]
