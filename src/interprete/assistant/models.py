"""Data models for replies and conversations.

The conversation belongs to the presentation layer. The assistant client
never reads or mutates it; callers record exchanges after a successful send.
"""

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Reply(BaseModel):
    """Validated assistant reply."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Trimmed reply text")
    thread_id: str | None = Field(
        default=None,
        description="Remote thread the reply belongs to (threads protocol only)"
    )

    def __str__(self) -> str:
        return self.text


class ChatMessage(BaseModel):
    """A single message shown in a conversation. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    text: str = Field(description="Message content")
    is_from_user: bool = Field(description="True for user messages, False for the assistant")
    created_at: datetime = Field(default_factory=_now)


class Conversation(BaseModel):
    """Ordered, in-memory message history with an optional size cap.

    When the cap is exceeded the oldest messages are dropped first.
    """

    max_messages: int | None = Field(default=100, ge=1)
    _messages: list[ChatMessage] = PrivateAttr(default_factory=list)

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def append(self, message: ChatMessage) -> ChatMessage:
        """Append a message, trimming the oldest if over the cap."""
        self._messages.append(message)
        if self.max_messages is not None and len(self._messages) > self.max_messages:
            del self._messages[: len(self._messages) - self.max_messages]
        return message

    def add_user_message(self, text: str) -> ChatMessage:
        return self.append(ChatMessage(text=text, is_from_user=True))

    def add_assistant_message(self, text: str) -> ChatMessage:
        return self.append(ChatMessage(text=text, is_from_user=False))

    def record_exchange(self, user_text: str | None, reply: Reply) -> None:
        """Record a successful exchange.

        Args:
            user_text: The text the user sent, or None for image sends
            reply: The assistant's reply
        """
        if user_text is not None:
            self.add_user_message(user_text)
        self.add_assistant_message(reply.text)

    def clear(self) -> None:
        self._messages.clear()

    def to_transcript(self) -> str:
        """Render the history as plain text, one line per message."""
        lines = []
        for message in self._messages:
            speaker = "Usuario" if message.is_from_user else "Asistente"
            lines.append(f"[{message.created_at:%H:%M}] {speaker}: {message.text}")
        return "\n".join(lines)
