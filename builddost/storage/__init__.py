"""Project store."""

from builddost.config import Settings

from .base import ANONYMOUS_USER_ID, Storage
from .memory import MemStorage
from .seed import ensure_anonymous_user, seed_defaults
from .sql import SqlStorage


def create_storage(settings: Settings) -> Storage:
    """Build the backend named by ``settings.storage_backend``."""
    if settings.storage_backend == "sql":
        return SqlStorage(settings.database_url)
    return MemStorage()


__all__ = [
    "ANONYMOUS_USER_ID",
    "MemStorage",
    "SqlStorage",
    "Storage",
    "create_storage",
    "ensure_anonymous_user",
    "seed_defaults",
]
