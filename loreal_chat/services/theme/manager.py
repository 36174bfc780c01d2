"""Theme selection, persisted color overrides and contrast upkeep."""

import json
from typing import Dict, List, Optional

from ...config import COLOR_ADJUSTS_KEY, THEME_KEY
from ...errors import PersistenceError
from ...logging_config import get_logger
from ...models.theme import AuditResult, CorrectionReport, StyleSheet
from ...storage import KeyValueStorage
from .contrast import ContrastCorrector, run_contrast_audit
from .palettes import DEFAULT_THEME, get_palette, is_known_theme

logger = get_logger(__name__)


class ThemeManager:
    """Keeps the active StyleSheet in sync with storage."""

    def __init__(self, storage: KeyValueStorage, corrector: Optional[ContrastCorrector] = None):
        self.storage = storage
        self.corrector = corrector or ContrastCorrector(storage)
        self.style = StyleSheet(theme=DEFAULT_THEME, palette=get_palette(DEFAULT_THEME))
        self.last_report: Optional[CorrectionReport] = None
        self.last_audit: List[AuditResult] = []

    def saved_theme(self) -> str:
        try:
            theme = self.storage.get_item(THEME_KEY)
        except PersistenceError as e:
            logger.warning(f"Failed to read saved theme: {e}")
            return DEFAULT_THEME

        if not theme or not is_known_theme(theme):
            return DEFAULT_THEME
        return theme

    def saved_overrides(self) -> Dict[str, str]:
        """Persisted color adjustments, or {} when absent or unreadable."""
        try:
            raw = self.storage.get_item(COLOR_ADJUSTS_KEY)
        except PersistenceError as e:
            logger.warning(f"Failed to read color adjustments: {e}")
            return {}

        if not raw:
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring color adjustments that are not valid JSON")
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring color adjustments that are not an object")
            return {}

        return {k: v for k, v in data.items() if isinstance(v, str)}

    def apply_saved_overrides(self) -> Dict[str, str]:
        overrides = self.saved_overrides()
        for name, value in overrides.items():
            self.style.set(name, value)
        return overrides

    def refresh(self) -> CorrectionReport:
        """Run the contrast fix, then the audit."""
        self.last_report = self.corrector.auto_fix(self.style)
        self.last_audit = run_contrast_audit(self.style)
        return self.last_report

    def startup(self) -> StyleSheet:
        theme = self.saved_theme()
        self.style = StyleSheet(theme=theme, palette=get_palette(theme))
        applied = self.apply_saved_overrides()
        if applied:
            logger.info(f"Applied {len(applied)} saved color adjustments")
        self.refresh()
        return self.style

    def change_theme(self, theme: str) -> StyleSheet:
        """Switch themes; inline overrides carry over, as in the browser."""
        theme = (theme or "").strip() or DEFAULT_THEME
        if not is_known_theme(theme):
            logger.warning(f"Unknown theme {theme!r}, using {DEFAULT_THEME}")
            theme = DEFAULT_THEME

        self.style.switch_theme(theme, get_palette(theme))
        try:
            self.storage.set_item(THEME_KEY, theme)
        except PersistenceError as e:
            logger.warning(f"Failed to save theme: {e}")

        self.refresh()
        return self.style
