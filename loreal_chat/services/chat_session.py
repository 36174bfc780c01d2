"""Submission boundary between the front end and the chat core."""

import time
from typing import Callable, Optional

from ..errors import ConfigurationError, RelayError
from ..logging_config import get_logger
from ..models.chat import ChatMessage, StartupState, SubmitResult
from ..relay_client import MODE_DIRECT, RelayClient
from .conversation import ConversationStore

logger = get_logger(__name__)

CONFIG_MISSING_MESSAGE = (
    "Configuration missing: set LOREAL_WORKER_URL to your relay worker URL."
)


def now_ms() -> int:
    return int(time.time() * 1000)


class ChatSession:
    """Handles user submissions for one conversation.

    Every failure on the network path is turned into an inline error on the
    returned result; nothing propagates and the transcript only gains an
    assistant message when a reply actually arrived.
    """

    def __init__(
        self,
        store: ConversationStore,
        client: RelayClient,
        clock: Callable[[], int] = now_ms,
    ):
        self.store = store
        self.client = client
        self.clock = clock

    def start(self) -> StartupState:
        messages = self.store.init()
        return StartupState(
            messages=[m for m in messages if m.role != "system"],
            greeting=None if self.store.restored else self.store.greeting,
            latest_question=self.store.latest_question(),
        )

    async def submit(self, text: str) -> Optional[SubmitResult]:
        text = (text or "").strip()
        if not text:
            return None

        user_message = ChatMessage(role="user", content=text, timestamp=self.clock())
        self.store.append(user_message)

        result = SubmitResult(
            user_message=user_message,
            direct_fallback=self.client.mode == MODE_DIRECT,
        )

        try:
            payload = self.client.build_payload(self.store.messages)
            reply_text = await self.client.send(payload)
        except ConfigurationError as e:
            logger.warning(f"Cannot send message: {e}")
            result.error = CONFIG_MISSING_MESSAGE
            return result
        except RelayError as e:
            logger.error(f"Relay request failed: {e}")
            result.error = f"Error: {e}"
            return result

        reply = ChatMessage(role="assistant", content=reply_text, timestamp=self.clock())
        self.store.append(reply)
        result.reply = reply
        return result

    def clear(self) -> str:
        """Reset the conversation; returns the greeting to show."""
        self.store.clear()
        return self.store.greeting
