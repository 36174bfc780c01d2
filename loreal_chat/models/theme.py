"""Theme models: style variables and contrast results."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


@dataclass
class StyleSheet:
    """Theme variables as seen by the front end.

    ``palette`` holds the active theme's values; ``overrides`` holds values
    set inline at runtime. Reads prefer the inline value. Switching themes
    replaces the palette but keeps the inline values.
    """

    theme: str
    palette: Dict[str, str] = field(default_factory=dict)
    overrides: Dict[str, str] = field(default_factory=dict)

    def get(self, name: str) -> Optional[str]:
        value = self.overrides.get(name) or self.palette.get(name) or ""
        return value.strip() or None

    def set(self, name: str, value: str) -> None:
        self.overrides[name] = value

    def inline(self, name: str) -> Optional[str]:
        value = self.overrides.get(name, "").strip()
        return value or None

    def switch_theme(self, theme: str, palette: Dict[str, str]) -> None:
        self.theme = theme
        self.palette = dict(palette)


class PairAdjustment(BaseModel):
    """Result of correcting one foreground/background pair."""

    foreground_var: str
    background_var: str
    initial_color: str
    final_color: str
    initial_ratio: float
    final_ratio: float
    attempts: int = 0
    met_target: bool = True
    history: List[str] = Field(default_factory=list, description="Foreground after each attempt")

    @property
    def adjusted(self) -> bool:
        return self.attempts > 0


class CorrectionReport(BaseModel):
    """Outcome of one contrast correction run."""

    target: float
    pairs: List[PairAdjustment] = Field(default_factory=list)
    changed: bool = False
    persisted: Dict[str, str] = Field(default_factory=dict)


class AuditResult(BaseModel):
    """Contrast of one named color pair."""

    pair: str
    fg: str
    bg: str
    contrast: float
