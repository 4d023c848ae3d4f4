"""Pydantic models for wellness API requests and responses."""
from .metric import (
    MOOD_ORDER,
    Mood,
    MetricEntry,
    MetricFields,
    MetricList,
    MetricResponse,
    MetricUpsertRequest,
)
from .summary import MoodSummary, SummaryStats
from .auth import AuthResponse, Credentials, RegisterRequest, UserProfile

__all__ = [
    "MOOD_ORDER",
    "Mood",
    "MetricEntry",
    "MetricFields",
    "MetricList",
    "MetricResponse",
    "MetricUpsertRequest",
    "MoodSummary",
    "SummaryStats",
    "AuthResponse",
    "Credentials",
    "RegisterRequest",
    "UserProfile",
]
