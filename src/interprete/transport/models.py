from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..errors import (
    MissingCredentialError,
    NetworkFailureError,
    RateLimitedError,
    ServerError,
)


class RequestDescriptor(BaseModel):
    """Fully determined description of one HTTP request.

    Built by ``RequestBuilder`` and executed by a ``Transport``. Never
    mutated after construction.
    """

    model_config = ConfigDict(frozen=True)

    method: str = Field(default="POST", description="HTTP method")
    endpoint: str = Field(description="Absolute URL")
    headers: dict[str, str] = Field(default_factory=dict, repr=False)
    body: dict[str, Any] | None = Field(default=None, repr=False, description="JSON body")
    timeout: float = Field(default=30.0, gt=0, description="Seconds")


class TransportResponse(BaseModel):
    """Raw result of executing a request."""

    model_config = ConfigDict(frozen=True)

    status_code: int = Field(description="HTTP status code")
    content: bytes = Field(default=b"", repr=False, description="Raw response body")

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def raise_for_status(self) -> "TransportResponse":
        """Raise the classified error matching a non-2xx status.

        Returns:
            Self, for chaining

        Raises:
            MissingCredentialError: On 401
            RateLimitedError: On 429 (server-side)
            ServerError: On 5xx
            NetworkFailureError: On any other non-2xx status
        """
        status = self.status_code
        if self.is_success:
            return self
        if status == 401:
            raise MissingCredentialError("server rejected the credential (HTTP 401)")
        if status == 429:
            raise RateLimitedError("server rate limit reached (HTTP 429)", source="server")
        if 500 <= status < 600:
            raise ServerError(status)
        raise NetworkFailureError(f"unexpected HTTP status {status}", status_code=status)
