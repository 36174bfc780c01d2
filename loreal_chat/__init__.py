"""Chat client for L'Oréal beauty questions, with an edge relay."""

from .errors import ChatError, ConfigurationError, ParseError, PersistenceError, RelayError

__version__ = "1.0.0"

__all__ = [
    "ChatError",
    "ConfigurationError",
    "ParseError",
    "PersistenceError",
    "RelayError",
]
