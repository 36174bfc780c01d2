"""Error types raised by the chat client."""

from typing import Optional


class ChatError(Exception):
    """Base class for chat client errors."""


class ConfigurationError(ChatError):
    """Neither a relay endpoint nor a direct API key is configured."""


class RelayError(ChatError):
    """The relay (or the direct endpoint) did not return a usable reply."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class PersistenceError(ChatError):
    """Durable storage could not be read or written."""


class ParseError(ChatError):
    """A persisted record does not have the expected shape."""
