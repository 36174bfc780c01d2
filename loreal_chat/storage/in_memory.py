"""In-memory storage backend.

Data is lost when the process exits. Used by tests and as a fallback when
no file location is usable.
"""

from typing import Dict, Optional

from ..errors import PersistenceError
from .base import KeyValueStorage


class InMemoryStorage(KeyValueStorage):
    """Dict-backed storage (session-only)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise PersistenceError(f"Value for {key!r} must be a string")
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    @property
    def backend_type(self) -> str:
        return "memory"
