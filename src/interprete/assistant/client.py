"""Assistant client: admission checks, request dispatch and error mapping.

Data flow for text:
    input validation -> content filter -> credential -> rate limiter
    -> response strategy (build, transport, validate) -> Reply

Images skip the content filter (it screens text only) and, when
``rate_limit_images`` is disabled, the rate limiter.
"""

from contextlib import AsyncExitStack
from typing import Any

from PIL import Image

from ..config import AssistantSettings
from ..errors import (
    AssistantError,
    ContentFilteredError,
    GeneralError,
    InvalidInputError,
    RateLimitedError,
)
from ..ratelimit import PeriodicReset, RateLimiter
from ..safety import ContentFilter, DenylistContentFilter
from ..transport import Transport
from .base import ResponseStrategy
from .completion import CompletionStrategy
from .models import Reply


class AssistantClient:
    """Composition root exposing ``send_text`` and ``send_image``.

    The client does not keep conversation history. Its only state is the
    rate limiter's counters and, for the threads protocol, the remote
    thread id held by the strategy.

    Usage:
        async with AssistantClient(settings, strategy, image_strategy) as client:
            reply = await client.send_text("¿Qué es un contrato?")
    """

    def __init__(
        self,
        settings: AssistantSettings,
        strategy: ResponseStrategy,
        image_strategy: CompletionStrategy,
        content_filter: ContentFilter | None = None,
        rate_limiter: RateLimiter | None = None,
    ):
        """Initialize the client.

        Args:
            settings: Limits, feature flags and credential
            strategy: Protocol used for text replies
            image_strategy: Completion strategy used for image replies
            content_filter: Text screen (default: denylist from settings)
            rate_limiter: Admission gate (default: limits from settings)
        """
        self._settings = settings
        self._strategy = strategy
        self._image_strategy = image_strategy
        self._content_filter = content_filter or DenylistContentFilter(
            denylist=settings.denylist,
            patterns=settings.suspicious_patterns,
        )
        self._rate_limiter = rate_limiter or RateLimiter(
            max_per_period=settings.max_messages_per_period,
            min_interval=settings.min_interval,
            max_per_day=settings.max_messages_per_day,
        )
        self._periodic_reset = PeriodicReset(self._rate_limiter, settings.reset_period)
        self._owned = AsyncExitStack()
        self._debug_callback: Any | None = None

    @property
    def settings(self) -> AssistantSettings:
        return self._settings

    @property
    def strategy(self) -> ResponseStrategy:
        return self._strategy

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._rate_limiter

    @property
    def content_filter(self) -> ContentFilter:
        return self._content_filter

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for detailed execution logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
                      component: Source component name
                      message: Log message
        """
        self._debug_callback = callback
        self._strategy.set_debug_callback(callback)
        self._image_strategy.set_debug_callback(callback)

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    def own_transport(self, transport: Transport) -> None:
        """Register a transport to be exited together with the client."""
        self._owned.push_async_exit(transport)

    # Lifecycle

    def start(self) -> None:
        """Start the periodic rate limiter reset. Requires a running event loop."""
        if not self._periodic_reset.running:
            self._periodic_reset.start()
            self._debug(
                "debug", "client",
                f"Rate limiter reset every {self._settings.reset_period:g}s"
            )

    async def close(self) -> None:
        """Stop the periodic reset and close owned transports."""
        await self._periodic_reset.stop()
        await self._owned.aclose()

    async def __aenter__(self) -> "AssistantClient":
        self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    # Admission

    def _validate_text(self, text: str) -> str:
        trimmed = (text or "").strip()
        if not trimmed:
            raise InvalidInputError("message is empty")
        if len(trimmed) > self._settings.max_message_length:
            raise InvalidInputError(
                f"message has {len(trimmed)} characters "
                f"(limit {self._settings.max_message_length})"
            )
        return trimmed

    def _admit(self) -> None:
        if not self._rate_limiter.try_admit():
            self._debug("warning", "client", "Local rate limit reached")
            raise RateLimitedError("local rate limit reached", source="local")

    # Operations

    async def send_text(self, text: str) -> Reply:
        """Send user text and return the assistant's reply.

        Args:
            text: Raw user input; surrounding whitespace is ignored

        Returns:
            Validated Reply

        Raises:
            InvalidInputError: Empty or over-length input
            ContentFilteredError: Input matched the denylist
            MissingCredentialError: Credential absent, malformed, or rejected
            RateLimitedError: Local limiter refused, or the server returned 429
            NetworkFailureError: Transport failure or timeout
            InvalidResponseError: Unusable reply body
            GeneralError: Server error or any unclassified failure
        """
        trimmed = self._validate_text(text)

        if self._content_filter.is_blocked(trimmed):
            self._debug("info", "client", "Message blocked by content filter")
            raise ContentFilteredError("message matched the content denylist")

        self._settings.require_credential()
        self._admit()

        self._debug("debug", "client", f"Sending {len(trimmed)} characters via {self._strategy.name}")
        try:
            reply = await self._strategy.reply_to_text(trimmed)
        except AssistantError as e:
            self._debug("error", "client", repr(e))
            raise
        except Exception as e:
            self._debug("error", "client", f"Unexpected {type(e).__name__}: {e}")
            raise GeneralError(f"unexpected error: {e}") from e

        self._debug("debug", "client", f"Received reply ({len(reply.text)} characters)")
        return reply

    async def send_image(self, image: bytes | Image.Image) -> Reply:
        """Send an image and return the assistant's analysis.

        Args:
            image: Encoded image bytes or a decoded Pillow image

        Returns:
            Validated Reply

        Raises:
            GeneralError: Image analysis is disabled, server error, or any
                unclassified failure
            MissingCredentialError: Credential absent, malformed, or rejected
            RateLimitedError: Local limiter refused, or the server returned 429
            ImageProcessingError: The image could not be prepared
            NetworkFailureError: Transport failure or timeout
            InvalidResponseError: Unusable reply body
        """
        if not self._settings.image_analysis_enabled:
            raise GeneralError("image analysis is disabled")

        self._settings.require_credential()
        if self._settings.rate_limit_images:
            self._admit()

        try:
            reply = await self._image_strategy.reply_to_image(image)
        except AssistantError as e:
            self._debug("error", "client", repr(e))
            raise
        except Exception as e:
            self._debug("error", "client", f"Unexpected {type(e).__name__}: {e}")
            raise GeneralError(f"unexpected error: {e}") from e

        self._debug("debug", "client", f"Received image reply ({len(reply.text)} characters)")
        return reply
