"""Classified errors raised by the assistant client.

Every failure that reaches a caller of ``AssistantClient`` is one of the
classes below. Each carries an ``ErrorKind`` tag, an internal detail string
for diagnostics, and resolves a user-facing description through the
localization tables.
"""

from enum import Enum

from .localization import get_strings


class ErrorKind(str, Enum):
    """Tag identifying the class of failure."""

    MISSING_CREDENTIAL = "missing_credential"
    NETWORK_FAILURE = "network_failure"
    INVALID_RESPONSE = "invalid_response"
    CONTENT_FILTERED = "content_filtered"
    RATE_LIMITED = "rate_limited"
    IMAGE_PROCESSING_FAILURE = "image_processing_failure"
    INVALID_INPUT = "invalid_input"
    GENERAL = "general"


class AssistantError(Exception):
    """Base class for all classified assistant errors.

    Attributes:
        kind: Error classification tag
        detail: Internal description (not shown to end users verbatim)
        retryable: Whether resending the same action can succeed
    """

    kind: ErrorKind = ErrorKind.GENERAL
    retryable: bool = True

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.kind.value.replace("_", " ")
        super().__init__(self.detail)

    def user_message(self, locale: str | None = None) -> str:
        """Get the localized description shown to the user."""
        return get_strings(locale).error_message(self.kind.value)

    def recovery_suggestion(self, locale: str | None = None) -> str:
        """Get the localized hint for how the user can recover."""
        return get_strings(locale).recovery_suggestion(self.kind.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, detail={self.detail!r})"


class MissingCredentialError(AssistantError):
    """Credential absent, malformed, or rejected by the server (HTTP 401)."""

    kind = ErrorKind.MISSING_CREDENTIAL
    retryable = False


class NetworkFailureError(AssistantError):
    """Transport error, timeout, or an unclassified non-2xx status."""

    kind = ErrorKind.NETWORK_FAILURE

    def __init__(self, detail: str | None = None, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(detail)


class InvalidResponseError(AssistantError):
    """Malformed body, missing fields, or an empty/over-length reply."""

    kind = ErrorKind.INVALID_RESPONSE


class ContentFilteredError(AssistantError):
    """Input matched the local denylist."""

    kind = ErrorKind.CONTENT_FILTERED
    retryable = False


class RateLimitedError(AssistantError):
    """Admission refused locally or by the server (HTTP 429).

    Attributes:
        source: 'local' for the client-side limiter, 'server' for HTTP 429
    """

    kind = ErrorKind.RATE_LIMITED

    def __init__(self, detail: str | None = None, source: str = "local"):
        self.source = source
        super().__init__(detail)


class ImageProcessingError(AssistantError):
    """Image could not be decoded, resized, or re-encoded."""

    kind = ErrorKind.IMAGE_PROCESSING_FAILURE
    retryable = False


class InvalidInputError(AssistantError):
    """Input text is empty after trimming or exceeds the length cap."""

    kind = ErrorKind.INVALID_INPUT
    retryable = False


class GeneralError(AssistantError):
    """Unclassified failure with a free-form message."""

    kind = ErrorKind.GENERAL

    def user_message(self, locale: str | None = None) -> str:
        return get_strings(locale).error_message(self.kind.value, self.detail)


class ServerError(GeneralError):
    """Server-side failure (HTTP 5xx)."""

    def __init__(self, status_code: int, detail: str | None = None):
        self.status_code = status_code
        super().__init__(detail or f"server error ({status_code})")


class RunTimeoutError(GeneralError):
    """Remote run did not complete within the polling budget."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"run did not complete after {attempts} polling attempts")


__all__ = [
    "AssistantError",
    "ContentFilteredError",
    "ErrorKind",
    "GeneralError",
    "ImageProcessingError",
    "InvalidInputError",
    "InvalidResponseError",
    "MissingCredentialError",
    "NetworkFailureError",
    "RateLimitedError",
    "RunTimeoutError",
    "ServerError",
]
