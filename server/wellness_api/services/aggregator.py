"""Summary statistics over a user's daily metrics."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from ..models.metric import DEFAULT_MOOD, MOOD_ORDER
from ..models.summary import SummaryStats
from .metric_store import DateRange, MetricAggregate, MetricStore


def round_half_up(value: float, places: int = 0) -> Decimal:
    """Round away from zero on ties, independent of float repr quirks."""
    exponent = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)


def mood_distribution(mood_counts: dict[str, int]) -> dict[str, int]:
    """Counts for every known mood, in enumeration order, defaulting to 0."""
    return {mood: mood_counts.get(mood, 0) for mood in MOOD_ORDER}


def most_common_mood(distribution: dict[str, int]) -> str:
    """
    Mood with the highest count.

    Scans MOOD_ORDER with a strict greater-than, so on ties the earlier
    mood wins, and an all-zero distribution yields the default mood.
    """
    leader = DEFAULT_MOOD
    max_count = 0
    for mood in MOOD_ORDER:
        count = distribution.get(mood, 0)
        if count > max_count:
            leader = mood
            max_count = count
    return leader


def build_summary(aggregate: MetricAggregate) -> SummaryStats:
    """Turn a raw aggregate into rounded, client-facing statistics."""
    distribution = mood_distribution(aggregate.mood_counts)

    if aggregate.total == 0:
        return SummaryStats(
            total_entries=0,
            avg_steps=0,
            avg_sleep="0.0",
            mood_distribution=distribution,
            most_common_mood=most_common_mood(distribution),
        )

    return SummaryStats(
        total_entries=aggregate.total,
        avg_steps=int(round_half_up(aggregate.mean_steps)),
        avg_sleep=str(round_half_up(aggregate.mean_sleep, 1)),
        mood_distribution=distribution,
        most_common_mood=most_common_mood(distribution),
    )


def summarize(store: MetricStore, owner_id: str, date_range: Optional[DateRange] = None) -> SummaryStats:
    """Summary statistics for the owner's entries; zeroed when there are none."""
    return build_summary(store.aggregate(owner_id, date_range))
