"""Tests for settings and relay endpoint resolution."""
import pytest

from loreal_chat.config import (
    PLACEHOLDER_WORKER_URL,
    WORKER_URL_KEY,
    Settings,
    resolve_endpoint,
    save_endpoint_override,
)
from loreal_chat.storage import FileStorage


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("LOREAL_MODEL", "LOREAL_MAX_COMPLETION_TOKENS", "LOREAL_CONTRAST_TARGET"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.app_name == "L'Oréal Chat Relay"
        assert settings.model == "gpt-4o"
        assert settings.max_completion_tokens == 300
        assert settings.contrast_target == 4.5

    def test_environment_fallbacks(self, monkeypatch):
        monkeypatch.setenv("LOREAL_WORKER_URL", "https://env.workers.dev/")
        monkeypatch.setenv("LOREAL_RELAY_PORT", "9000")

        settings = Settings()

        assert settings.worker_url == "https://env.workers.dev/"
        assert settings.relay_port == 9000

    def test_bad_integer_falls_back(self, monkeypatch):
        monkeypatch.setenv("LOREAL_RELAY_PORT", "not-a-port")
        assert Settings().relay_port == 8787

    @pytest.mark.parametrize("key", [None, "", "REPLACE_WITH_YOUR_OPENAI_KEY"])
    def test_placeholder_api_key_is_unusable(self, key):
        assert Settings(openai_api_key=key).direct_api_key is None

    def test_real_api_key_is_usable(self):
        assert Settings(openai_api_key="sk-live").direct_api_key == "sk-live"


class TestResolveEndpoint:
    """Tests for endpoint precedence."""

    def test_override_wins(self, storage):
        storage.set_item(WORKER_URL_KEY, "https://stored.workers.dev/")
        settings = Settings(worker_url="https://env.workers.dev/")

        url = resolve_endpoint(settings, storage, override="https://typed.workers.dev/")

        assert url == "https://typed.workers.dev/"

    def test_environment_beats_stored(self, storage):
        storage.set_item(WORKER_URL_KEY, "https://stored.workers.dev/")
        settings = Settings(worker_url="https://env.workers.dev/")

        assert resolve_endpoint(settings, storage) == "https://env.workers.dev/"

    def test_stored_used_when_nothing_else(self, storage):
        storage.set_item(WORKER_URL_KEY, "https://stored.workers.dev/")

        assert resolve_endpoint(Settings(worker_url=None), storage) == "https://stored.workers.dev/"

    def test_placeholders_are_unconfigured(self, storage):
        storage.set_item(WORKER_URL_KEY, "   ")
        settings = Settings(worker_url=PLACEHOLDER_WORKER_URL + "/")

        assert resolve_endpoint(settings, storage) is None

    def test_works_without_storage(self):
        assert resolve_endpoint(Settings(worker_url=None)) is None


class TestSaveEndpointOverride:
    def test_saves_trimmed_url(self, storage):
        url = save_endpoint_override(storage, "  https://mine.workers.dev/ ")

        assert url == "https://mine.workers.dev/"
        assert storage.get_item(WORKER_URL_KEY) == "https://mine.workers.dev/"

    def test_blank_is_rejected(self, storage):
        assert save_endpoint_override(storage, "  ") is None
        assert storage.get_item(WORKER_URL_KEY) is None

    def test_write_failure_still_returns_url(self, failing_storage):
        assert save_endpoint_override(failing_storage, "https://mine.workers.dev/") == (
            "https://mine.workers.dev/"
        )

    def test_unencodable_url_is_not_fatal(self, tmp_path):
        storage = FileStorage(tmp_path / "storage.json")

        assert save_endpoint_override(storage, "https://mine\udcff.dev") == "https://mine\udcff.dev"
        assert storage.get_item(WORKER_URL_KEY) is None
