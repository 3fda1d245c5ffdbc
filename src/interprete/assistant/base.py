"""Abstract base class for response strategies.

A strategy hides the design decision of how a text reply is obtained
from the remote API: one stateless completion call, or a server-side
thread whose runs are polled to completion. Both expose the same
contract so the client can switch between them without other changes.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..transport import RequestBuilder, ResponseValidator, Transport
from .models import Reply


class ResponseStrategy(ABC):
    """Obtains a reply for admitted input."""

    def __init__(
        self,
        transport: Transport,
        builder: RequestBuilder,
        validator: ResponseValidator,
    ):
        self._transport = transport
        self._builder = builder
        self._validator = validator
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set debug callback for logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        """Send debug message if callback is set."""
        if self._debug_callback:
            self._debug_callback(level, component, message)

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the protocol identifier."""

    @abstractmethod
    async def reply_to_text(self, text: str) -> Reply:
        """Obtain a reply for admitted user text.

        Args:
            text: Trimmed text that passed every admission check

        Returns:
            Validated Reply

        Raises:
            AssistantError: Any classified failure
        """
