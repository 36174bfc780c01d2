"""Configuration management for the L'Oréal chat client."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, Field

from .errors import PersistenceError
from .logging_config import get_logger

if TYPE_CHECKING:
    from .storage import KeyValueStorage

logger = get_logger(__name__)


def _load_env_file() -> None:
    """Load .env from root directory if present."""
    env_path = Path(__file__).parent.parent / ".env"
    if not env_path.is_file():
        return
    try:
        for line in env_path.read_text(encoding="utf-8").splitlines():
            stripped = line.strip()
            if stripped and not stripped.startswith("#") and "=" in stripped:
                key, value = stripped.split("=", 1)
                key, value = key.strip(), value.strip().strip("'\"")
                if key and value and key not in os.environ:
                    os.environ[key] = value
    except OSError as e:
        logger.warning(f"Could not read {env_path}: {e}")


_load_env_file()


DEFAULT_APP_NAME = "L'Oréal Chat Relay"
DEFAULT_APP_VERSION = "1.0.0"

# Shipped in place of a real deployment URL; treated as "not configured"
PLACEHOLDER_WORKER_URL = "https://your-worker.example.workers.dev"
PLACEHOLDER_API_KEY = "REPLACE_WITH_YOUR_OPENAI_KEY"
DEFAULT_WORKER_URL = PLACEHOLDER_WORKER_URL

OPENAI_CHAT_COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-4o"

# Durable storage keys
HISTORY_KEY = "loreal_chat_history_v1"
THEME_KEY = "loreal_theme"
COLOR_ADJUSTS_KEY = "loreal_color_adjusts"
WORKER_URL_KEY = "loreal_worker_url"


def _env(name: str, fallback: Optional[str] = None):
    return lambda: os.getenv(name, fallback)


def _env_int(name: str, fallback: int):
    def _read() -> int:
        try:
            return int(os.getenv(name, str(fallback)))
        except (TypeError, ValueError):
            return fallback
    return _read


def _env_float(name: str, fallback: float):
    def _read() -> float:
        try:
            return float(os.getenv(name, str(fallback)))
        except (TypeError, ValueError):
            return fallback
    return _read


class Settings(BaseModel):
    """Application settings with environment fallbacks."""

    # App metadata
    app_name: str = Field(default=DEFAULT_APP_NAME)
    app_version: str = Field(default=DEFAULT_APP_VERSION)
    log_level: str = Field(default_factory=_env("LOREAL_LOG_LEVEL", "INFO"))

    # Relay server runtime
    relay_host: str = Field(default_factory=_env("LOREAL_RELAY_HOST", "0.0.0.0"))
    relay_port: int = Field(default_factory=_env_int("LOREAL_RELAY_PORT", 8787))

    # Client endpoints / credentials
    worker_url: Optional[str] = Field(default_factory=_env("LOREAL_WORKER_URL"))
    openai_api_key: Optional[str] = Field(default_factory=_env("OPENAI_API_KEY"))
    openai_api_url: str = Field(
        default_factory=_env("LOREAL_OPENAI_API_URL", OPENAI_CHAT_COMPLETIONS_URL)
    )

    # Upstream request shape
    model: str = Field(default_factory=_env("LOREAL_MODEL", DEFAULT_MODEL))
    max_completion_tokens: int = Field(
        default_factory=_env_int("LOREAL_MAX_COMPLETION_TOKENS", 300)
    )
    request_timeout: float = Field(default_factory=_env_float("LOREAL_REQUEST_TIMEOUT", 60.0))

    # Durable storage
    storage_backend: str = Field(default_factory=_env("LOREAL_STORAGE_BACKEND", "file"))
    storage_path: str = Field(
        default_factory=_env(
            "LOREAL_STORAGE_PATH",
            str(Path.home() / ".loreal_chat" / "storage.json"),
        )
    )

    # Theme
    contrast_target: float = Field(default_factory=_env_float("LOREAL_CONTRAST_TARGET", 4.5))

    @property
    def direct_api_key(self) -> Optional[str]:
        """API key usable for the direct (development only) path."""
        if not self.openai_api_key or self.openai_api_key == PLACEHOLDER_API_KEY:
            return None
        return self.openai_api_key


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def _usable_url(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    value = value.strip()
    if not value or value.rstrip("/") == PLACEHOLDER_WORKER_URL:
        return None
    return value


def resolve_endpoint(
    settings: Settings,
    storage: Optional[KeyValueStorage] = None,
    override: Optional[str] = None,
) -> Optional[str]:
    """Resolve the relay endpoint once, at startup.

    Precedence: explicit override (entered by the user), ``LOREAL_WORKER_URL``
    from the environment or ``.env``, the persisted ``loreal_worker_url``
    value, then the built-in default. Returns None when nothing usable is
    configured.
    """
    candidates = [("override", override), ("environment", settings.worker_url)]

    if storage is not None:
        try:
            candidates.append(("stored", storage.get_item(WORKER_URL_KEY)))
        except PersistenceError as e:
            logger.warning(f"Could not read stored worker URL: {e}")

    candidates.append(("default", DEFAULT_WORKER_URL))

    for source, value in candidates:
        url = _usable_url(value)
        if url:
            logger.debug(f"Relay endpoint resolved from {source}")
            return url

    logger.warning("Relay endpoint is not configured")
    return None


def save_endpoint_override(storage: KeyValueStorage, url: str) -> Optional[str]:
    """Persist a user-entered relay URL. Returns the URL when it is usable."""
    usable = _usable_url(url)
    if not usable:
        return None

    try:
        storage.set_item(WORKER_URL_KEY, usable)
    except PersistenceError as e:
        logger.warning(f"Could not persist worker URL: {e}")
    return usable
