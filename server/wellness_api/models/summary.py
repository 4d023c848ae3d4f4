"""Aggregate summary models."""
from pydantic import BaseModel, Field, ConfigDict


class SummaryStats(BaseModel):
    """Aggregate statistics over a user's metric entries."""

    model_config = ConfigDict(populate_by_name=True)

    total_entries: int = Field(alias="totalEntries")
    avg_steps: int = Field(alias="avgSteps")
    avg_sleep: str = Field(alias="avgSleep")
    mood_distribution: dict[str, int] = Field(alias="moodDistribution")
    most_common_mood: str = Field(alias="mostCommonMood")


class MoodSummary(BaseModel):
    """Rule-based narrative describing recent mood and habits."""

    summary: str
