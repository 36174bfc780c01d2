"""Conversation state management."""

from .store import GREETING, SYSTEM_PROMPT, ConversationStore

__all__ = ["ConversationStore", "GREETING", "SYSTEM_PROMPT"]
