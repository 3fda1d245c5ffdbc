"""
Interprete: a moderated, rate-limited client for a conversational legal assistant.

Turns free-form text or images into admitted, validated requests to a
remote chat API and returns clean replies or classified errors.
"""

__version__ = "0.1.0"

from .assistant import (
    AssistantClient,
    ChatMessage,
    Conversation,
    Reply,
    create_assistant_client,
)
from .config import AssistantSettings, ResponseProtocol
from .errors import AssistantError, ErrorKind

__all__ = [
    "AssistantClient",
    "AssistantError",
    "AssistantSettings",
    "ChatMessage",
    "Conversation",
    "ErrorKind",
    "Reply",
    "ResponseProtocol",
    "create_assistant_client",
]
