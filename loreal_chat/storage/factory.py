"""Factory for creating storage backends."""

from functools import lru_cache
from typing import Any

from ..config import get_settings
from ..logging_config import get_logger
from .base import KeyValueStorage

logger = get_logger(__name__)


def create_storage(backend: str = "file", **kwargs: Any) -> KeyValueStorage:
    """Create a storage backend.

    Args:
        backend: Backend type ("file" or "memory")
        **kwargs: Backend-specific configuration
            For file:
                - path: str | Path (required)
            For memory:
                - initial: dict[str, str] | None

    Returns:
        KeyValueStorage instance

    Raises:
        ValueError: If backend type is not supported
        TypeError: If required configuration is missing
    """
    backend_lower = backend.lower()

    if backend_lower == "file":
        if "path" not in kwargs:
            raise TypeError("File storage requires 'path'")
        from .file import FileStorage
        return FileStorage(**kwargs)

    if backend_lower == "memory":
        from .in_memory import InMemoryStorage
        return InMemoryStorage(**kwargs)

    raise ValueError(
        f"Unsupported storage backend: {backend}. "
        f"Supported backends: file, memory"
    )


@lru_cache(maxsize=1)
def get_storage() -> KeyValueStorage:
    """Get the storage backend selected in settings."""
    settings = get_settings()

    if settings.storage_backend.lower() == "file":
        storage = create_storage("file", path=settings.storage_path)
    else:
        storage = create_storage(settings.storage_backend)

    logger.info(f"Using {storage.backend_type} storage")
    return storage
