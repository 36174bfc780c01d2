from .chat import ChatMessage, PayloadMessage, RelayPayload, StartupState, SubmitResult
from .theme import AuditResult, CorrectionReport, PairAdjustment, StyleSheet

__all__ = [
    "ChatMessage",
    "PayloadMessage",
    "RelayPayload",
    "StartupState",
    "SubmitResult",
    "AuditResult",
    "CorrectionReport",
    "PairAdjustment",
    "StyleSheet",
]
