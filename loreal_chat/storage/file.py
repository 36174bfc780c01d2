"""JSON file storage backend.

All keys live in one JSON object on disk. Every write rewrites the file
through a temporary sibling and an atomic rename, so a crash mid-write
leaves the previous contents intact.
"""

import json
import os
from pathlib import Path
from typing import Dict, Optional, Union

from ..errors import PersistenceError
from ..logging_config import get_logger
from .base import KeyValueStorage

logger = get_logger(__name__)


class FileStorage(KeyValueStorage):
    """File-backed storage, persistent across sessions."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> Dict[str, str]:
        if not self._path.is_file():
            return {}

        try:
            raw = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Failed to read {self._path}: {e}") from e

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Storage file {self._path} is not valid JSON") from e

        if not isinstance(data, dict):
            raise PersistenceError(f"Storage file {self._path} does not hold an object")

        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, items: Dict[str, str]) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(items, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except (OSError, UnicodeEncodeError, ValueError) as e:
            tmp_path.unlink(missing_ok=True)
            raise PersistenceError(f"Failed to write {self._path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise PersistenceError(f"Value for {key!r} must be a string")
        items = self._read_all()
        items[key] = value
        self._write_all(items)
        logger.debug(f"Stored {key} ({len(value)} chars)")

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key in items:
            del items[key]
            self._write_all(items)
            logger.debug(f"Removed {key}")

    @property
    def backend_type(self) -> str:
        return "file"
