"""Stateless completion protocol: one request, one response."""

import asyncio

from PIL import Image

from ..errors import NetworkFailureError, ServerError
from ..transport import RequestBuilder, RequestDescriptor, ResponseValidator, Transport
from .base import ResponseStrategy
from .models import Reply

# Failures worth another attempt when retries are enabled
RETRYABLE_ERRORS = (NetworkFailureError, ServerError)


class CompletionStrategy(ResponseStrategy):
    """Sends each input as an independent chat completion.

    No server-side state is kept between calls. By default every request
    is attempted once; ``max_retries`` adds attempts with exponential
    backoff for network failures and server errors only.
    """

    def __init__(
        self,
        transport: Transport,
        builder: RequestBuilder,
        validator: ResponseValidator,
        max_retries: int = 0,
        retry_backoff: float = 1.0,
    ):
        super().__init__(transport, builder, validator)
        self._max_retries = max_retries
        self._retry_backoff = retry_backoff

    @property
    def name(self) -> str:
        return "completion"

    async def reply_to_text(self, text: str) -> Reply:
        request = self._builder.build_text_request(text)
        return Reply(text=await self._execute(request))

    async def reply_to_image(self, image: bytes | Image.Image) -> Reply:
        """Obtain a reply describing an image.

        Raises:
            ImageProcessingError: If the image cannot be prepared
            AssistantError: Any other classified failure
        """
        request = self._builder.build_image_request(image)
        return Reply(text=await self._execute(request))

    async def _execute(self, request: RequestDescriptor) -> str:
        attempt = 0
        while True:
            try:
                response = await self._transport.send(request)
                response.raise_for_status()
                return self._validator.parse(response.content)
            except RETRYABLE_ERRORS as e:
                if attempt >= self._max_retries:
                    raise
                delay = self._retry_backoff * (2 ** attempt)
                attempt += 1
                self._debug(
                    "warning",
                    "completion",
                    f"{e.detail}; retry {attempt}/{self._max_retries} in {delay:g}s",
                )
                await asyncio.sleep(delay)
