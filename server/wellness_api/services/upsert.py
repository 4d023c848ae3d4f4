"""Create-or-update of daily metric entries.

A day's entry is keyed by (owner, calendar date). Numeric fields and notes
are replaced whenever the client supplied them, even with 0 or "". Mood is
only replaced by a non-empty value; an empty mood leaves the stored one.
"""
import datetime as dt
import logging
import sqlite3
from typing import Mapping, Optional

from ..models.metric import DEFAULT_MOOD, MetricEntry
from .errors import ConflictError, NotFoundError
from .metric_store import DateRange, MetricStore, is_unique_violation

logger = logging.getLogger(__name__)

DEFAULTS = {
    "steps": 0,
    "sleep_hours": 0.0,
    "mood": DEFAULT_MOOD,
    "notes": None,
}

# Replaced whenever present in the supplied fields.
PRESENCE_FIELDS = ("steps", "sleep_hours", "notes")


def normalize_day(day: dt.date | dt.datetime) -> dt.date:
    """Drop the time-of-day so every timestamp of a day maps to one key."""
    if isinstance(day, dt.datetime):
        return day.date()
    return day


def merge_fields(current: Mapping, fields: Mapping) -> dict:
    """Merge supplied fields over the current values of an entry."""
    merged = {name: current[name] for name in DEFAULTS}
    for name in PRESENCE_FIELDS:
        if name in fields:
            merged[name] = fields[name]
    if fields.get("mood"):
        merged["mood"] = fields["mood"]
    return merged


def initial_fields(fields: Mapping) -> dict:
    """Values for a brand-new entry: supplied fields over the defaults."""
    provided = {name: value for name, value in fields.items() if value is not None}
    return merge_fields(DEFAULTS, provided)


def _current_values(entry: MetricEntry) -> dict:
    return {
        "steps": entry.steps,
        "sleep_hours": entry.sleep_hours,
        "mood": entry.mood,
        "notes": entry.notes,
    }


def upsert(store: MetricStore, owner_id: str, day: dt.date | dt.datetime, fields: Mapping) -> MetricEntry:
    """
    Create the owner's entry for ``day`` or merge ``fields`` into it.

    Args:
        store: Metric persistence.
        owner_id: Authenticated user id.
        day: Date or datetime; only the calendar date is used.
        fields: Only the fields the caller supplied.

    Returns:
        The stored entry after the merge.

    Raises:
        ConflictError: A concurrent request created the same day first.
    """
    day = normalize_day(day)
    existing = store.find_by_day(owner_id, day)

    if existing is not None:
        merged = merge_fields(_current_values(existing), fields)
        updated = store.update(owner_id, existing.id, merged)
        if updated is not None:
            logger.info(f"[METRICS] Updated entry {existing.id} for {day}")
            return updated
        # Deleted since the lookup; create the day instead
        logger.info(f"[METRICS] Entry {existing.id} vanished before update, recreating {day}")

    try:
        created = store.insert(owner_id, day, initial_fields(fields))
    except sqlite3.IntegrityError as e:
        if is_unique_violation(e):
            logger.warning(f"[METRICS] Duplicate entry for user {owner_id} on {day}")
            raise ConflictError("An entry already exists for this date") from e
        raise
    logger.info(f"[METRICS] Created entry {created.id} for {day}")
    return created


def update_entry(store: MetricStore, owner_id: str, entry_id: str, fields: Mapping) -> MetricEntry:
    """Apply the same merge policy to an entry addressed by id."""
    existing = get_entry(store, owner_id, entry_id)
    merged = merge_fields(_current_values(existing), fields)
    updated = store.update(owner_id, entry_id, merged)
    if updated is None:
        raise NotFoundError("Metric not found")
    logger.info(f"[METRICS] Updated entry {entry_id}")
    return updated


def get_entry(store: MetricStore, owner_id: str, entry_id: str) -> MetricEntry:
    entry = store.get(owner_id, entry_id)
    if entry is None:
        raise NotFoundError("Metric not found")
    return entry


def delete_entry(store: MetricStore, owner_id: str, entry_id: str) -> None:
    if not store.delete(owner_id, entry_id):
        raise NotFoundError("Metric not found")
    logger.info(f"[METRICS] Deleted entry {entry_id}")


def list_entries(store: MetricStore, owner_id: str, date_range: Optional[DateRange] = None) -> list[MetricEntry]:
    """Owner's entries, newest first."""
    return store.query(owner_id, date_range, newest_first=True)
