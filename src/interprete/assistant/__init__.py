"""Assistant orchestration: admission, dispatch and reply validation."""

from .base import ResponseStrategy
from .client import AssistantClient
from .completion import CompletionStrategy
from .factory import create_assistant_client, create_response_strategy
from .models import ChatMessage, Conversation, Reply
from .threads import ThreadedRunStrategy

__all__ = [
    "AssistantClient",
    "ChatMessage",
    "CompletionStrategy",
    "Conversation",
    "Reply",
    "ResponseStrategy",
    "ThreadedRunStrategy",
    "create_assistant_client",
    "create_response_strategy",
]
