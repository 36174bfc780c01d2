"""Contrast audit and automatic contrast correction."""

import json
from typing import List, Optional, Sequence, Tuple

from ...config import COLOR_ADJUSTS_KEY
from ...errors import PersistenceError
from ...logging_config import get_logger
from ...models.theme import AuditResult, CorrectionReport, PairAdjustment, StyleSheet
from ...storage import KeyValueStorage
from .color_math import contrast_ratio, darken_towards_black

logger = get_logger(__name__)

DEFAULT_TARGET = 4.5
MAX_ATTEMPTS = 24

DEFAULT_FOREGROUND = "#222222"
DEFAULT_BACKGROUND = "#ffffff"

# (foreground variable, background variable)
CORRECTED_PAIRS: Tuple[Tuple[str, str], ...] = (
    ("--text", "--brand-muted"),
    ("--text", "--assistant-bg"),
)

PERSISTED_VARIABLES: Tuple[str, ...] = (
    "--text",
    "--assistant-bg",
    "--assistant-border",
    "--user-bg",
    "--user-text",
)

# (label, fg variable, fg fallback, bg variable, bg fallback)
AUDIT_PAIRS: Tuple[Tuple[str, str, str, str, str], ...] = (
    ("Body text vs background", "--text", "#222222", "--brand-muted", "#f7f4ef"),
    ("Button text vs brand gold", "--brand-black", "#000000", "--brand-gold", "#E3A535"),
    ("User bubble text vs user bg", "--user-text", "#FFFFFF", "--user-bg", "#000000"),
    ("Assistant text vs assistant bg", "--text", "#222222", "--assistant-bg", "#f3f1ee"),
)


def step_for_attempt(attempt: int) -> float:
    """Darkening fraction for the given (zero-based) attempt."""
    return min(1.0, 0.06 + attempt * 0.02)


def run_contrast_audit(style: StyleSheet) -> List[AuditResult]:
    """Compute the contrast of the key UI pairs and log them."""
    results = []
    for label, fg_var, fg_default, bg_var, bg_default in AUDIT_PAIRS:
        fg = style.get(fg_var) or fg_default
        bg = style.get(bg_var) or bg_default
        ratio = contrast_ratio(fg, bg) or 0.0
        results.append(AuditResult(pair=label, fg=fg, bg=bg, contrast=round(ratio, 2)))

    for result in results:
        logger.info(f"Contrast audit: {result.pair}: {result.fg} on {result.bg} = {result.contrast}")
    return results


class ContrastCorrector:
    """Darkens foreground colors until they reach a target contrast.

    The search only moves toward black. It gives up after ``max_attempts``
    per pair and keeps whatever ratio it reached; it never lightens, so a
    light foreground on a dark background only gets worse.
    """

    def __init__(
        self,
        storage: Optional[KeyValueStorage] = None,
        target: float = DEFAULT_TARGET,
        max_attempts: int = MAX_ATTEMPTS,
        pairs: Sequence[Tuple[str, str]] = CORRECTED_PAIRS,
        persisted_variables: Sequence[str] = PERSISTED_VARIABLES,
    ):
        self.storage = storage
        self.target = target
        self.max_attempts = max_attempts
        self.pairs = tuple(pairs)
        self.persisted_variables = tuple(persisted_variables)

    def _correct_pair(self, style: StyleSheet, fg_var: str, bg_var: str) -> Optional[PairAdjustment]:
        fg = style.get(fg_var) or DEFAULT_FOREGROUND
        bg = style.get(bg_var) or DEFAULT_BACKGROUND

        ratio = contrast_ratio(fg, bg)
        if ratio is None:
            logger.warning(f"Skipping contrast fix for {fg_var} on {bg_var}: unparseable color")
            return None

        adjustment = PairAdjustment(
            foreground_var=fg_var,
            background_var=bg_var,
            initial_color=fg,
            final_color=fg,
            initial_ratio=ratio,
            final_ratio=ratio,
        )

        attempts = 0
        while ratio < self.target and attempts < self.max_attempts:
            fg = darken_towards_black(fg, step_for_attempt(attempts))
            # Later pairs sharing this variable read the darkened value
            style.set(fg_var, fg)
            ratio = contrast_ratio(fg, bg) or 0.0
            attempts += 1
            adjustment.history.append(fg)

        adjustment.final_color = fg
        adjustment.final_ratio = ratio
        adjustment.attempts = attempts
        adjustment.met_target = ratio >= self.target

        if attempts:
            logger.info(
                f"Adjusted {fg_var} on {bg_var}: {adjustment.initial_color} -> {fg} "
                f"({adjustment.initial_ratio:.2f} -> {ratio:.2f}, {attempts} steps)"
            )
        if not adjustment.met_target:
            logger.warning(
                f"Contrast for {fg_var} on {bg_var} is {ratio:.2f}, below target {self.target}"
            )
        return adjustment

    def auto_fix(self, style: StyleSheet) -> CorrectionReport:
        """Correct every pair in order, persisting the result if anything moved."""
        report = CorrectionReport(target=self.target)

        for fg_var, bg_var in self.pairs:
            adjustment = self._correct_pair(style, fg_var, bg_var)
            if adjustment is None:
                continue
            report.pairs.append(adjustment)
            if adjustment.adjusted:
                report.changed = True

        if report.changed:
            report.persisted = self.persist(style)

        return report

    def collect_overrides(self, style: StyleSheet) -> dict:
        adjustments = {}
        for name in self.persisted_variables:
            value = style.inline(name)
            if value:
                adjustments[name] = value
        return adjustments

    def persist(self, style: StyleSheet) -> dict:
        """Save the inline values of the persisted variables."""
        adjustments = self.collect_overrides(style)
        if self.storage is None:
            return adjustments

        try:
            self.storage.set_item(COLOR_ADJUSTS_KEY, json.dumps(adjustments))
        except PersistenceError as e:
            logger.warning(f"Failed to save color adjustments: {e}")
        return adjustments
