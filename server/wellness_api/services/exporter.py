"""Tabular export of daily metrics."""
import csv
import io
import logging
from dataclasses import dataclass, field
from typing import Optional

from ..models.metric import MetricEntry
from .errors import NoDataError
from .metric_store import DateRange, MetricStore

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ("Date", "Steps", "Sleep Hours", "Mood", "Notes")
EXPORT_FILENAME = "wellness-data.csv"


@dataclass
class ExportTable:
    """Header plus one row per entry, oldest day first."""

    columns: tuple[str, ...] = EXPORT_COLUMNS
    rows: list[list] = field(default_factory=list)


def entry_to_row(entry: MetricEntry) -> list:
    return [
        entry.date.isoformat(),
        entry.steps,
        entry.sleep_hours,
        entry.mood,
        entry.notes or "",
    ]


def to_table(store: MetricStore, owner_id: str, date_range: Optional[DateRange] = None) -> ExportTable:
    """
    Rows for every matching entry in ascending date order.

    Raises:
        NoDataError: No entries match.
    """
    entries = store.query(owner_id, date_range, newest_first=False)
    if not entries:
        raise NoDataError("No data to export")

    table = ExportTable(rows=[entry_to_row(entry) for entry in entries])
    logger.info(f"[EXPORT] Prepared {len(table.rows)} rows for user {owner_id}")
    return table


def render_csv(table: ExportTable) -> str:
    """Render an export table as CSV text with a header line."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(table.columns)
    writer.writerows(table.rows)
    return buffer.getvalue()
