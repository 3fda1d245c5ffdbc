"""httpx-backed transport."""

from typing import Any

import httpx

from ..errors import NetworkFailureError
from .base import Transport
from .models import RequestDescriptor, TransportResponse


class HttpxTransport(Transport):
    """Executes request descriptors with an ``httpx.AsyncClient``.

    Hidden design decisions:
    - Client lifecycle (owned unless one is passed in)
    - Mapping of httpx exceptions to classified errors
    """

    def __init__(self, client: httpx.AsyncClient | None = None, **client_kwargs: Any):
        """Initialize the transport.

        Args:
            client: Existing client to use; it is not closed by this transport
            **client_kwargs: Additional kwargs for a newly created AsyncClient
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(**client_kwargs)

    async def send(self, request: RequestDescriptor) -> TransportResponse:
        try:
            response = await self._client.request(
                request.method,
                request.endpoint,
                headers=request.headers,
                json=request.body,
                timeout=request.timeout,
            )
        except httpx.TimeoutException as e:
            raise NetworkFailureError(
                f"request timed out after {request.timeout:g}s"
            ) from e
        except httpx.HTTPError as e:
            raise NetworkFailureError(f"transport error: {type(e).__name__}") from e

        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
        )

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
