"""Abstract base class for transports.

This module hides the design decision of which HTTP stack executes
requests. Implementations must:
- Honor ``RequestDescriptor.timeout``
- Raise ``NetworkFailureError`` for connection problems and timeouts
- Return every HTTP response, whatever its status, as a ``TransportResponse``

Supports async context manager protocol for proper resource cleanup:
    async with transport:
        response = await transport.send(descriptor)
"""

from abc import ABC, abstractmethod
from typing import Any

from .models import RequestDescriptor, TransportResponse


class Transport(ABC):
    """Abstract request executor."""

    @abstractmethod
    async def send(self, request: RequestDescriptor) -> TransportResponse:
        """Execute a request.

        Args:
            request: Descriptor to execute

        Returns:
            TransportResponse with status code and raw body

        Raises:
            NetworkFailureError: If no HTTP response was obtained
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "Transport":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
