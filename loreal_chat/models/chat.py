"""Chat and conversation models."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict

Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    """A single chat message."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str
    timestamp: Optional[int] = None  # epoch milliseconds, None for the system message


class PayloadMessage(BaseModel):
    """A message as sent over the wire: role and content only."""

    role: Role
    content: str


class RelayPayload(BaseModel):
    """Request body accepted by the relay."""

    messages: List[PayloadMessage]


class StartupState(BaseModel):
    """What the front end needs to draw the initial conversation."""

    messages: List[ChatMessage]
    greeting: Optional[str] = None
    latest_question: Optional[str] = None


class SubmitResult(BaseModel):
    """Outcome of one user submission."""

    user_message: ChatMessage
    reply: Optional[ChatMessage] = None
    error: Optional[str] = None
    direct_fallback: bool = False

    @property
    def ok(self) -> bool:
        return self.reply is not None
