"""Data models for rate limiting state."""

from pydantic import BaseModel, ConfigDict, Field


class RateWindow(BaseModel):
    """Snapshot of the limiter's counters.

    Timestamps are monotonic-clock readings in seconds, not wall-clock
    times; only differences between them are meaningful.
    """

    model_config = ConfigDict(frozen=True)

    message_count: int = Field(default=0, ge=0, description="Admissions in the current period")
    daily_count: int = Field(default=0, ge=0, description="Admissions in the current day window")
    day_started_at: float | None = Field(default=None, description="Start of the current day window")
    last_message_at: float | None = Field(default=None, description="Time of the last admission")
