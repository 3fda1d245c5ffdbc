"""User error reports.

Sends a free-form comment plus the conversation transcript to a
configured collection endpoint as JSON.
"""

import httpx
from pydantic import BaseModel, Field

from .errors import InvalidInputError, NetworkFailureError, ServerError


class ErrorReport(BaseModel):
    """A user-submitted problem report."""

    comment: str = Field(min_length=1, description="What the user says happened")
    history: str = Field(default="", description="Conversation transcript")

    def to_payload(self) -> dict[str, str]:
        """Serialize with the field names the collection endpoint expects."""
        return {"comentario": self.comment, "historial": self.history}


async def submit_error_report(
    report: ErrorReport,
    endpoint: str,
    client: httpx.AsyncClient | None = None,
    timeout: float = 30.0,
) -> int:
    """Post an error report.

    Args:
        report: Report to send
        endpoint: Collection URL
        client: Existing client to use (not closed here)
        timeout: Seconds before giving up

    Returns:
        HTTP status code returned by the endpoint

    Raises:
        InvalidInputError: If the comment is blank
        NetworkFailureError: On transport failure or a 4xx status
        ServerError: On a 5xx status
    """
    if not report.comment.strip():
        raise InvalidInputError("report comment is empty")

    owns_client = client is None
    client = client or httpx.AsyncClient()
    try:
        response = await client.post(
            endpoint,
            json=report.to_payload(),
            timeout=timeout,
            follow_redirects=True,
        )
    except httpx.HTTPError as e:
        raise NetworkFailureError(f"could not submit report: {type(e).__name__}") from e
    finally:
        if owns_client:
            await client.aclose()

    if response.status_code >= 500:
        raise ServerError(response.status_code)
    if response.status_code >= 400:
        raise NetworkFailureError(
            f"report endpoint returned HTTP {response.status_code}",
            status_code=response.status_code,
        )
    return response.status_code
