"""FastAPI dependencies.

Process-wide singletons built from settings on first use. Tests replace
them through ``app.dependency_overrides``.
"""

from functools import lru_cache

from builddost.config import get_settings
from builddost.export import GitHubExporter
from builddost.generation import GenerationClient
from builddost.storage import Storage, create_storage


@lru_cache
def get_storage() -> Storage:
    """Project store selected by STORAGE_BACKEND."""
    return create_storage(get_settings())


@lru_cache
def get_generation_client() -> GenerationClient:
    return GenerationClient.from_settings(get_settings())


@lru_cache
def get_github_exporter() -> GitHubExporter:
    return GitHubExporter.from_settings(get_settings())
