from .client import (
    FALLBACK_REPLY,
    MODE_DIRECT,
    MODE_RELAY,
    RelayClient,
    build_payload,
    extract_reply,
)

__all__ = [
    "FALLBACK_REPLY",
    "MODE_DIRECT",
    "MODE_RELAY",
    "RelayClient",
    "build_payload",
    "extract_reply",
]
