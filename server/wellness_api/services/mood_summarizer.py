"""
Rule-based mood narrative.

Maps aggregate statistics to a short human-readable summary. One base
narrative is picked by the first matching rule, then sleep and activity
tips are appended independently.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .errors import NoDataError
from .metric_store import DateRange, MetricAggregate, MetricStore

logger = logging.getLogger(__name__)

SLEEP_TARGET_HOURS = 7
STEPS_TARGET = 5000


@dataclass(frozen=True)
class NarrativeRule:
    """A condition over the aggregate and the text it produces."""

    name: str
    applies: Callable[[MetricAggregate], bool]
    message: str


def _count(aggregate: MetricAggregate, mood: str) -> int:
    return aggregate.mood_counts.get(mood, 0)


# Evaluated in order; the first match wins. Percent thresholds are
# compared in integer arithmetic (happy / total > 50%, stressed / total > 40%).
BASE_RULES = [
    NarrativeRule(
        name="positive",
        applies=lambda agg: _count(agg, "Happy") * 2 > agg.total,
        message="You've been in a positive mood most of the time. Keep up whatever is making you happy!",
    ),
    NarrativeRule(
        name="stressed",
        applies=lambda agg: _count(agg, "Stressed") * 5 > agg.total * 2,
        message=(
            "You've experienced significant stress recently. "
            "Consider practicing relaxation techniques or adjusting your routine."
        ),
    ),
    NarrativeRule(
        name="low_energy",
        applies=lambda agg: _count(agg, "Tired") > _count(agg, "Happy"),
        message=(
            "You've been feeling tired more often. "
            "Make sure you're getting enough quality sleep and managing your energy levels."
        ),
    ),
    NarrativeRule(
        name="balanced",
        applies=lambda agg: True,
        message="Your mood has been fairly balanced. You're maintaining a good equilibrium in your daily life.",
    ),
]

TIP_RULES = [
    NarrativeRule(
        name="sleep_tip",
        applies=lambda agg: agg.mean_sleep < SLEEP_TARGET_HOURS,
        message="Based on your sleep patterns, you might benefit from aiming for 7-9 hours of sleep per night.",
    ),
    NarrativeRule(
        name="activity_tip",
        applies=lambda agg: agg.mean_steps < STEPS_TARGET,
        message="Increasing your daily steps could help boost your energy and mood.",
    ),
]


def compose_narrative(aggregate: MetricAggregate) -> str:
    """Build the narrative text for a non-empty aggregate."""
    if aggregate.total == 0:
        raise NoDataError("No data available for summary")

    base = next(rule for rule in BASE_RULES if rule.applies(aggregate))
    parts = [base.message]
    parts.extend(tip.message for tip in TIP_RULES if tip.applies(aggregate))
    logger.debug(f"[SUMMARY] Selected '{base.name}' narrative over {aggregate.total} entries")
    return " ".join(parts)


def narrate(store: MetricStore, owner_id: str, date_range: Optional[DateRange] = None) -> str:
    """Mood narrative for the owner's entries in the optional range."""
    return compose_narrative(store.aggregate(owner_id, date_range))
