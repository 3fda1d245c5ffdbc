"""Assistant configuration.

Centralizes every tunable used by the admission checks, the request
builder and the transport. Values come from keyword arguments or, via
``AssistantSettings.from_env``, from environment variables.

Environment variables:
    OPENAI_API_KEY: Bearer credential (required to send anything)
    OPENAI_ASSISTANT_ID: Assistant id for the threads protocol
    INTERPRETE_BASE_URL: API base URL (default: https://api.openai.com/v1)
    INTERPRETE_PROTOCOL: 'completion' or 'threads' (default: completion)
    INTERPRETE_TEXT_MODEL: Model for text requests (default: gpt-3.5-turbo)
    INTERPRETE_VISION_MODEL: Model for image requests (default: gpt-4-vision-preview)
    INTERPRETE_LOCALE: Locale for user-facing strings (default: es)
    INTERPRETE_MAX_PER_MINUTE: Messages per reset period (default: 10)
    INTERPRETE_MAX_PER_DAY: Messages per day (default: 100)
    INTERPRETE_MAX_RETRIES: Retries for the completion protocol (default: 0)
    INTERPRETE_REPORT_URL: Endpoint for error reports (optional)
"""

import os
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .errors import MissingCredentialError


class ResponseProtocol(str, Enum):
    """Remote protocol used to obtain text replies."""

    COMPLETION = "completion"  # One request, one response, no server state
    THREADS = "threads"        # Server-side thread + run polled to completion


DEFAULT_DENYLIST = ["spam", "test repetitivo", "abuso", "insulto", "ofensivo"]

DEFAULT_SUSPICIOUS_PATTERNS = [
    r"(..)\1{10,}",      # Excessive character repetition
    r"https?://[^\s]+",  # Raw URLs
]


class AssistantSettings(BaseModel):
    """Configuration surface for the assistant client."""

    model_config = ConfigDict(frozen=True)

    # API
    api_key: str = Field(default="", repr=False, description="Bearer credential")
    credential_prefix: str = Field(default="sk-", description="Expected credential prefix")
    base_url: str = Field(default="https://api.openai.com/v1")
    protocol: ResponseProtocol = Field(default=ResponseProtocol.COMPLETION)
    assistant_id: str | None = Field(default=None, description="Remote assistant for the threads protocol")
    api_version_header: str = Field(default="OpenAI-Beta")
    api_version: str = Field(default="assistants=v2")
    text_model: str = Field(default="gpt-3.5-turbo")
    vision_model: str = Field(default="gpt-4-vision-preview")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=1000, ge=1)
    text_timeout: float = Field(default=30.0, gt=0, description="Seconds")
    image_timeout: float = Field(default=45.0, gt=0, description="Seconds")
    max_retries: int = Field(default=0, ge=0, description="Extra attempts for the completion protocol")
    retry_backoff: float = Field(default=1.0, ge=0, description="Initial backoff in seconds, doubled per retry")
    run_poll_attempts: int = Field(default=30, ge=1)
    run_poll_interval: float = Field(default=1.0, ge=0, description="Seconds between run status polls")

    # Limits
    max_messages_per_period: int = Field(default=10, ge=1)
    max_messages_per_day: int = Field(default=100, ge=1)
    min_interval: float = Field(default=2.0, ge=0, description="Seconds between admitted messages")
    reset_period: float = Field(default=60.0, gt=0, description="Seconds between counter resets")
    max_message_length: int = Field(default=2000, ge=1)
    max_response_length: int = Field(default=5000, ge=1)

    # Content
    denylist: list[str] = Field(default_factory=lambda: list(DEFAULT_DENYLIST))
    suspicious_patterns: list[str] = Field(default_factory=list)

    # Images
    image_analysis_enabled: bool = Field(default=True)
    rate_limit_images: bool = Field(default=True)
    max_image_dimension: int = Field(default=1024, ge=1)
    image_quality: float = Field(default=0.8, gt=0, le=1)
    large_image_quality: float = Field(default=0.5, gt=0, le=1)
    large_image_width: int = Field(default=1000, ge=1)

    # Presentation
    locale: str = Field(default="es")
    report_url: str | None = Field(default=None)

    @classmethod
    def from_env(cls, **overrides: object) -> "AssistantSettings":
        """Create settings from environment variables.

        Args:
            **overrides: Values that take precedence over the environment

        Returns:
            AssistantSettings instance

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
        """
        values: dict[str, object] = {
            "api_key": os.getenv("OPENAI_API_KEY", ""),
            "assistant_id": os.getenv("OPENAI_ASSISTANT_ID") or None,
            "base_url": os.getenv("INTERPRETE_BASE_URL", "https://api.openai.com/v1"),
            "protocol": os.getenv("INTERPRETE_PROTOCOL", "completion").lower(),
            "text_model": os.getenv("INTERPRETE_TEXT_MODEL", "gpt-3.5-turbo"),
            "vision_model": os.getenv("INTERPRETE_VISION_MODEL", "gpt-4-vision-preview"),
            "locale": os.getenv("INTERPRETE_LOCALE", "es"),
            "max_messages_per_period": os.getenv("INTERPRETE_MAX_PER_MINUTE", "10"),
            "max_messages_per_day": os.getenv("INTERPRETE_MAX_PER_DAY", "100"),
            "max_retries": os.getenv("INTERPRETE_MAX_RETRIES", "0"),
            "report_url": os.getenv("INTERPRETE_REPORT_URL") or None,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def require_credential(self) -> str:
        """Get the credential, raising if it is absent or malformed.

        Raises:
            MissingCredentialError: If the key is empty or lacks the expected prefix
        """
        key = self.api_key.strip()
        if not key:
            raise MissingCredentialError("API key is not configured")
        if self.credential_prefix and not key.startswith(self.credential_prefix):
            raise MissingCredentialError(
                f"API key does not start with '{self.credential_prefix}'"
            )
        return key

    def validate_configuration(self) -> list[str]:
        """Check the configuration for problems.

        Returns:
            Human-readable problems; empty if the configuration is usable
        """
        problems = []
        try:
            self.require_credential()
        except MissingCredentialError as e:
            problems.append(e.detail)
        if self.protocol == ResponseProtocol.THREADS and not self.assistant_id:
            problems.append("threads protocol requires an assistant id")
        return problems

    def summary(self) -> str:
        """Render the configuration for debugging. The credential is never included."""
        return "\n".join([
            f"Protocol: {self.protocol.value}",
            f"Base URL: {self.base_url}",
            f"Text model: {self.text_model}",
            f"Vision model: {self.vision_model}",
            f"Messages per period: {self.max_messages_per_period} / {self.reset_period:g}s",
            f"Messages per day: {self.max_messages_per_day}",
            f"Minimum interval: {self.min_interval:g}s",
            f"Timeout: {self.text_timeout:g}s text, {self.image_timeout:g}s image",
            f"Image analysis: {'on' if self.image_analysis_enabled else 'off'}",
            f"Locale: {self.locale}",
        ])


__all__ = [
    "AssistantSettings",
    "DEFAULT_DENYLIST",
    "DEFAULT_SUSPICIOUS_PATTERNS",
    "ResponseProtocol",
]
