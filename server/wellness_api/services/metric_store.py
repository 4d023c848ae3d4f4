"""Owner-scoped persistence for daily metric entries."""
import datetime as dt
import logging
import sqlite3
import uuid
from dataclasses import dataclass
from typing import Optional

from ..database import DatabaseManager
from ..models.metric import MetricEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar-date filter."""

    start: dt.date
    end: dt.date

    @classmethod
    def from_bounds(cls, start: Optional[dt.date], end: Optional[dt.date]) -> Optional["DateRange"]:
        """Build a range only when both bounds are given; otherwise no filtering."""
        if start is None or end is None:
            return None
        return cls(start=start, end=end)


@dataclass
class MetricAggregate:
    """Raw aggregate over a filtered entry set, before rounding."""

    total: int
    mean_steps: float
    mean_sleep: float
    mood_counts: dict[str, int]


def _now() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()


def _row_to_metric(row) -> MetricEntry:
    """Convert SQLite row to MetricEntry model."""
    return MetricEntry(
        id=row["id"],
        user_id=row["user_id"],
        date=row["date"],
        steps=int(row["steps"] or 0),
        sleep_hours=float(row["sleep_hours"] or 0),
        mood=row["mood"],
        notes=row["notes"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _range_clause(owner_id: str, date_range: Optional[DateRange]) -> tuple[str, list]:
    clause = "user_id = ?"
    params: list = [owner_id]
    if date_range is not None:
        clause += " AND date >= ? AND date <= ?"
        params += [date_range.start.isoformat(), date_range.end.isoformat()]
    return clause, params


class MetricStore:
    """
    Metric persistence on top of DatabaseManager.

    Every query is filtered by owner; an id that belongs to another
    user behaves exactly like an id that does not exist.
    """

    def __init__(self, db: DatabaseManager):
        self.db = db

    def find_by_day(self, owner_id: str, day: dt.date) -> Optional[MetricEntry]:
        with self.db.connect() as conn:
            row = conn.execute(
                "SELECT * FROM metrics WHERE user_id = ? AND date = ?",
                (owner_id, day.isoformat()),
            ).fetchone()
        return _row_to_metric(row) if row else None

    def get(self, owner_id: str, entry_id: str) -> Optional[MetricEntry]:
        with self.db.connect() as conn:
            row = conn.execute(
                "SELECT * FROM metrics WHERE id = ? AND user_id = ?",
                (entry_id, owner_id),
            ).fetchone()
        return _row_to_metric(row) if row else None

    def insert(self, owner_id: str, day: dt.date, values: dict) -> MetricEntry:
        """
        Insert a new entry.

        Raises sqlite3.IntegrityError when (owner_id, day) already exists.
        """
        now = _now()
        entry_id = str(uuid.uuid4())
        with self.db.connect() as conn:
            conn.execute(
                """
                INSERT INTO metrics
                    (id, user_id, date, steps, sleep_hours, mood, notes, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry_id,
                    owner_id,
                    day.isoformat(),
                    values["steps"],
                    values["sleep_hours"],
                    values["mood"],
                    values["notes"],
                    now,
                    now,
                ),
            )
            row = conn.execute("SELECT * FROM metrics WHERE id = ?", (entry_id,)).fetchone()
        return _row_to_metric(row)

    def update(self, owner_id: str, entry_id: str, values: dict) -> Optional[MetricEntry]:
        """Overwrite the mutable fields of an entry; None if it is not the owner's."""
        with self.db.connect() as conn:
            cursor = conn.execute(
                """
                UPDATE metrics
                SET steps = ?, sleep_hours = ?, mood = ?, notes = ?, updated_at = ?
                WHERE id = ? AND user_id = ?
                """,
                (
                    values["steps"],
                    values["sleep_hours"],
                    values["mood"],
                    values["notes"],
                    _now(),
                    entry_id,
                    owner_id,
                ),
            )
            if cursor.rowcount == 0:
                return None
            row = conn.execute("SELECT * FROM metrics WHERE id = ?", (entry_id,)).fetchone()
        return _row_to_metric(row)

    def delete(self, owner_id: str, entry_id: str) -> bool:
        with self.db.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM metrics WHERE id = ? AND user_id = ?",
                (entry_id, owner_id),
            )
            deleted = cursor.rowcount > 0
        return deleted

    def query(
        self,
        owner_id: str,
        date_range: Optional[DateRange] = None,
        newest_first: bool = False,
    ) -> list[MetricEntry]:
        """Fetch the owner's entries, optionally limited to a date range."""
        clause, params = _range_clause(owner_id, date_range)
        order = "DESC" if newest_first else "ASC"
        with self.db.connect() as conn:
            rows = conn.execute(
                f"SELECT * FROM metrics WHERE {clause} ORDER BY date {order}",
                params,
            ).fetchall()
        return [_row_to_metric(row) for row in rows]

    def aggregate(self, owner_id: str, date_range: Optional[DateRange] = None) -> MetricAggregate:
        """Count, means and per-mood counts computed in SQL."""
        clause, params = _range_clause(owner_id, date_range)
        with self.db.connect() as conn:
            totals = conn.execute(
                f"""
                SELECT COUNT(*) AS total,
                       AVG(steps) AS mean_steps,
                       AVG(sleep_hours) AS mean_sleep
                FROM metrics
                WHERE {clause}
                """,
                params,
            ).fetchone()
            mood_rows = conn.execute(
                f"SELECT mood, COUNT(*) AS cnt FROM metrics WHERE {clause} GROUP BY mood",
                params,
            ).fetchall()

        return MetricAggregate(
            total=totals["total"],
            mean_steps=float(totals["mean_steps"] or 0),
            mean_sleep=float(totals["mean_sleep"] or 0),
            mood_counts={row["mood"]: row["cnt"] for row in mood_rows},
        )


def is_unique_violation(error: sqlite3.IntegrityError) -> bool:
    """True when the integrity error comes from a UNIQUE constraint."""
    return "UNIQUE constraint failed" in str(error)
