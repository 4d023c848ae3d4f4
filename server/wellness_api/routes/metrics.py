"""Daily metric API routes.

Every route is scoped to the authenticated user; entries owned by
someone else are reported as not found.
"""
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from ..models.metric import MetricFields, MetricList, MetricResponse, MetricUpsertRequest
from ..models.summary import MoodSummary, SummaryStats
from ..services import aggregator, exporter, mood_summarizer, upsert
from ..services.accounts import User
from ..services.metric_store import DateRange, MetricStore
from .deps import get_current_user, get_date_range, get_metric_store

router = APIRouter(
    prefix="/api/metrics",
    tags=["Metrics"],
    dependencies=[Depends(get_current_user)],
)


@router.post("", response_model=MetricResponse, response_model_by_alias=True)
async def create_or_update_metric(
    payload: MetricUpsertRequest,
    user: User = Depends(get_current_user),
    store: MetricStore = Depends(get_metric_store),
):
    """Create the entry for the given day, or merge into the existing one."""
    metric = upsert.upsert(store, user.id, payload.date, payload.supplied())
    return MetricResponse(message="Metric saved successfully", metric=metric)


@router.get("", response_model=MetricList, response_model_by_alias=True)
async def get_metrics(
    user: User = Depends(get_current_user),
    store: MetricStore = Depends(get_metric_store),
    date_range: Optional[DateRange] = Depends(get_date_range),
):
    """List entries, newest day first."""
    metrics = upsert.list_entries(store, user.id, date_range)
    return MetricList(metrics=metrics, count=len(metrics))


@router.get("/summary", response_model=SummaryStats, response_model_by_alias=True)
async def get_summary(
    user: User = Depends(get_current_user),
    store: MetricStore = Depends(get_metric_store),
    date_range: Optional[DateRange] = Depends(get_date_range),
):
    """Count, averages and mood distribution; zeroed when there is no data."""
    return aggregator.summarize(store, user.id, date_range)


@router.get("/ai/summary", response_model=MoodSummary)
async def get_mood_summary(
    user: User = Depends(get_current_user),
    store: MetricStore = Depends(get_metric_store),
    date_range: Optional[DateRange] = Depends(get_date_range),
):
    """Rule-based narrative of recent mood, sleep and activity."""
    return MoodSummary(summary=mood_summarizer.narrate(store, user.id, date_range))


@router.get("/export/csv")
async def export_data(
    user: User = Depends(get_current_user),
    store: MetricStore = Depends(get_metric_store),
    date_range: Optional[DateRange] = Depends(get_date_range),
):
    """Download matching entries as CSV, oldest day first."""
    table = exporter.to_table(store, user.id, date_range)
    return Response(
        content=exporter.render_csv(table),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{exporter.EXPORT_FILENAME}"'},
    )


@router.get("/{metric_id}", response_model=MetricResponse, response_model_by_alias=True)
async def get_metric(
    metric_id: str,
    user: User = Depends(get_current_user),
    store: MetricStore = Depends(get_metric_store),
):
    return MetricResponse(metric=upsert.get_entry(store, user.id, metric_id))


@router.put("/{metric_id}", response_model=MetricResponse, response_model_by_alias=True)
async def update_metric(
    metric_id: str,
    payload: MetricFields,
    user: User = Depends(get_current_user),
    store: MetricStore = Depends(get_metric_store),
):
    """Update the supplied fields of an existing entry; its day never changes."""
    metric = upsert.update_entry(store, user.id, metric_id, payload.supplied())
    return MetricResponse(message="Metric updated successfully", metric=metric)


@router.delete("/{metric_id}")
async def delete_metric(
    metric_id: str,
    user: User = Depends(get_current_user),
    store: MetricStore = Depends(get_metric_store),
):
    upsert.delete_entry(store, user.id, metric_id)
    return {"message": "Metric deleted successfully"}
