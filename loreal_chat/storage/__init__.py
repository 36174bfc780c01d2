"""Durable key-value storage for chat history and theme state."""

from .base import KeyValueStorage
from .factory import create_storage, get_storage
from .file import FileStorage
from .in_memory import InMemoryStorage

__all__ = [
    "KeyValueStorage",
    "FileStorage",
    "InMemoryStorage",
    "create_storage",
    "get_storage",
]
