"""Daily wellness metric models."""
import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Mood = Literal["Happy", "Neutral", "Tired", "Stressed"]

# Enumeration order; also the tie-break order for the most common mood.
MOOD_ORDER: tuple[str, ...] = ("Happy", "Neutral", "Tired", "Stressed")
DEFAULT_MOOD = "Neutral"
NOTES_MAX_LENGTH = 500
# Largest value a SQLite INTEGER column holds
STEPS_MAX = 2**63 - 1


class MetricEntry(BaseModel):
    """One user's wellness record for a single calendar day."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    user_id: str = Field(alias="userId")
    date: dt.date
    steps: int = Field(default=0, ge=0, le=STEPS_MAX)
    sleep_hours: float = Field(default=0.0, ge=0, le=24, alias="sleep")
    mood: Mood = DEFAULT_MOOD
    notes: Optional[str] = None
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")


class MetricFields(BaseModel):
    """
    Partial metric fields sent by the client.

    Only the fields actually present in the request body are applied,
    so callers must dump with ``exclude_unset=True``.
    """

    model_config = ConfigDict(populate_by_name=True)

    steps: Optional[int] = Field(default=None, ge=0, le=STEPS_MAX)
    sleep_hours: Optional[float] = Field(default=None, ge=0, le=24, alias="sleep")
    mood: Optional[Mood] = None
    notes: Optional[str] = Field(default=None, max_length=NOTES_MAX_LENGTH)

    @field_validator("steps", "sleep_hours", mode="before")
    @classmethod
    def _reject_null_numbers(cls, value):
        if value is None:
            raise ValueError("must be a number")
        return value

    @field_validator("mood", mode="before")
    @classmethod
    def _reject_null_mood(cls, value):
        if value is None:
            raise ValueError("Invalid mood value")
        return value

    def supplied(self) -> dict:
        """Return only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class MetricUpsertRequest(MetricFields):
    """Create-or-update payload; the day is required."""

    date: dt.date | dt.datetime

    def supplied(self) -> dict:
        fields = super().supplied()
        fields.pop("date", None)
        return fields


class MetricResponse(BaseModel):
    """Single metric wrapped with an optional status message."""

    message: Optional[str] = None
    metric: MetricEntry


class MetricList(BaseModel):
    """List of metrics with their count."""

    metrics: list[MetricEntry]
    count: int
