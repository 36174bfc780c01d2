"""Tests for theme persistence and startup correction."""
import json

from loreal_chat.config import COLOR_ADJUSTS_KEY, THEME_KEY
from loreal_chat.services.theme import THEMES, ThemeManager
from loreal_chat.services.theme.color_math import contrast_ratio
from loreal_chat.storage import FileStorage


class TestThemeManager:
    """Tests for ThemeManager."""

    def test_startup_defaults_to_classic(self, storage):
        manager = ThemeManager(storage)

        style = manager.startup()

        assert style.theme == "classic"
        assert manager.last_report.changed is False
        assert len(manager.last_audit) == 4
        assert storage.get_item(COLOR_ADJUSTS_KEY) is None

    def test_unknown_saved_theme_falls_back(self, storage):
        storage.set_item(THEME_KEY, "neon")

        assert ThemeManager(storage).startup().theme == "classic"

    def test_saved_overrides_are_applied_verbatim(self, storage):
        storage.set_item(COLOR_ADJUSTS_KEY, json.dumps({"--user-bg": "#111111"}))

        style = ThemeManager(storage).startup()

        assert style.get("--user-bg") == "#111111"

    def test_malformed_overrides_are_ignored(self, storage):
        storage.set_item(COLOR_ADJUSTS_KEY, "[1, 2, 3]")

        style = ThemeManager(storage).startup()

        assert style.overrides == {}

    def test_low_contrast_theme_is_corrected_and_saved(self, storage):
        palette = THEMES["rose"]
        assert contrast_ratio(palette["--text"], palette["--brand-muted"]) < 4.5
        storage.set_item(THEME_KEY, "rose")

        manager = ThemeManager(storage)
        style = manager.startup()

        assert manager.last_report.changed is True
        assert contrast_ratio(style.get("--text"), palette["--brand-muted"]) >= 4.5
        saved = json.loads(storage.get_item(COLOR_ADJUSTS_KEY))
        assert saved["--text"] == style.get("--text")

    def test_restart_reuses_saved_adjustment(self, storage):
        storage.set_item(THEME_KEY, "rose")
        first = ThemeManager(storage).startup()

        second_manager = ThemeManager(storage)
        second = second_manager.startup()

        assert second.get("--text") == first.get("--text")
        assert second_manager.last_report.changed is False

    def test_change_theme_persists_and_keeps_overrides(self, storage):
        manager = ThemeManager(storage)
        manager.startup()
        manager.style.set("--user-bg", "#123456")

        style = manager.change_theme("noir")

        assert storage.get_item(THEME_KEY) == "noir"
        assert style.theme == "noir"
        assert style.palette["--brand-muted"] == THEMES["noir"]["--brand-muted"]
        assert style.get("--user-bg") == "#123456"

    def test_change_to_unknown_theme_uses_default(self, storage):
        manager = ThemeManager(storage)
        manager.startup()

        assert manager.change_theme("sparkle").theme == "classic"

    def test_startup_over_undecodable_file_uses_defaults(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_bytes(b"\xff\xfe")

        style = ThemeManager(FileStorage(path)).startup()

        assert style.theme == "classic"
        assert style.overrides == {}
