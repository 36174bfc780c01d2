"""Conversation transcript with durable persistence."""

import json
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from ...config import HISTORY_KEY
from ...errors import ParseError, PersistenceError
from ...logging_config import get_logger
from ...models.chat import ChatMessage
from ...storage import KeyValueStorage

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful assistant that ONLY answers questions about L'Oréal products, "
    "routines, product recommendations, ingredients, and beauty-related topics associated "
    "with L'Oréal brands. If the user asks about anything outside L'Oréal products or beauty "
    "routines (finance, politics, unrelated brands, detailed medical advice, illegal "
    "activities, etc.), politely refuse and state you can only help with L'Oréal-related "
    "beauty/product questions. Keep answers friendly, concise, and use brand-appropriate tone."
)

GREETING = "👋 Hi — ask me about L'Oréal products, routines, or recommendations."

PERSISTED_ROLES = ("user", "assistant")

_history_adapter = TypeAdapter(List[ChatMessage])


class ConversationStore:
    """Owns the ordered transcript for one session.

    ``messages[0]`` is always the system directive. Only user and assistant
    messages are written to storage; the system directive is rebuilt from
    ``system_prompt`` on every load.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        system_prompt: str = SYSTEM_PROMPT,
        greeting: str = GREETING,
        key: str = HISTORY_KEY,
    ):
        self.storage = storage
        self.system_prompt = system_prompt
        self.greeting = greeting
        self.key = key
        self.restored = False
        self._messages: List[ChatMessage] = [self._system_message()]

    def _system_message(self) -> ChatMessage:
        return ChatMessage(role="system", content=self.system_prompt)

    @property
    def messages(self) -> List[ChatMessage]:
        """Snapshot of the transcript."""
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def init(self) -> List[ChatMessage]:
        """Load the persisted history, or start fresh.

        Corrupt records are purged. A fresh transcript holds only the system
        directive; ``restored`` tells the caller whether to show the greeting.
        """
        self._messages = [self._system_message()]
        self.restored = False

        try:
            history = self._load()
        except ParseError as e:
            logger.warning(f"Failed to parse saved history, clearing it: {e}")
            self._purge()
            history = []
        except PersistenceError as e:
            logger.warning(f"Failed to read saved history: {e}")
            history = []

        if history:
            self._messages.extend(history)
            self.restored = True
            logger.info(f"Restored {len(history)} messages from history")

        return self.messages

    def _load(self) -> List[ChatMessage]:
        raw = self.storage.get_item(self.key)
        if raw is None:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ParseError("history is not valid JSON") from e

        if not isinstance(data, list):
            raise ParseError(f"history is a JSON {type(data).__name__}, expected an array")

        try:
            history = _history_adapter.validate_python(data)
        except ValidationError as e:
            raise ParseError(f"history entries are malformed ({e.error_count()} errors)") from e

        if any(m.role not in PERSISTED_ROLES for m in history):
            raise ParseError("history contains a system message")

        return history

    def _purge(self) -> None:
        try:
            self.storage.remove_item(self.key)
        except PersistenceError as e:
            logger.warning(f"Failed to remove saved history: {e}")

    def append(self, message: ChatMessage) -> None:
        """Add a message to the end of the transcript and persist it."""
        if message.role == "system":
            raise ValueError("The system message is set at init and cannot be appended")

        self._messages.append(message)
        if message.role in PERSISTED_ROLES:
            self.persist()

    def persisted_messages(self) -> List[ChatMessage]:
        """The ordered user/assistant subsequence."""
        return [m for m in self._messages if m.role in PERSISTED_ROLES]

    def persist(self) -> None:
        """Write user/assistant messages to storage; failures are logged only."""
        to_save = [m.model_dump() for m in self.persisted_messages()]
        try:
            self.storage.set_item(self.key, json.dumps(to_save, ensure_ascii=False))
        except (PersistenceError, TypeError, ValueError) as e:
            logger.warning(f"Failed to save history: {e}")

    def clear(self) -> List[ChatMessage]:
        """Drop persisted history and reset to the system message only."""
        self._purge()
        self._messages = [self._system_message()]
        self.restored = False
        logger.info("Cleared conversation history")
        return self.messages

    def latest_question(self) -> Optional[str]:
        """Content of the most recent user message."""
        for message in reversed(self._messages):
            if message.role == "user":
                return message.content
        return None
