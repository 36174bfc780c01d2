"""Abstract base class for durable key-value storage.

The chat client persists a handful of small string values (history, theme,
color adjustments, worker URL) under fixed keys. Backends hide:
- Where values live (file on disk, process memory)
- How writes are made durable
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorage(ABC):
    """String-to-string store with ``localStorage`` semantics.

    Backends raise ``PersistenceError`` for any read or write failure.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove a key. Removing a missing key is not an error."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
