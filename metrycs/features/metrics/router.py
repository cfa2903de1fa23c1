# metrycs/features/metrics/router.py
"""
API endpoints for event metrics.

Provides:
- GET /events/{event_id}/metrics - Complete (or category-filtered) snapshot
- GET /events/{event_id}/metrics/summary - Headline numbers
- GET /events/{event_id}/metrics/comparison - Similar-event comparison
- GET /events/{event_id}/metrics/realtime - Snapshot plus simulated live updates
"""

import logging
import random
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from metrycs.core.audit import audit_logger
from metrycs.core.runtime import get_current_time, get_rng
from metrycs.features.events.repository import EventRepository, get_event_repository
from metrycs.features.events.schemas import EventSummary
from metrycs.features.metrics.schemas import (
    ComparisonResponse,
    EventMetricsResponse,
    MetricCategory,
    MetricsSummaryResponse,
    RealtimeMetricsResponse,
)
from metrycs.features.metrics.service import (
    MetricsSynthesizer,
    filter_metrics,
    generate_metrics_update,
    is_event_active,
    summarize_metrics,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["Event Metrics"])


@router.get(
    "/{event_id}/metrics",
    response_model=EventMetricsResponse,
    summary="Get event metrics",
)
def get_event_metrics(
    event_id: str,
    categories: Optional[list[MetricCategory]] = Query(
        None, description="Restrict the snapshot to these categories"
    ),
    repository: EventRepository = Depends(get_event_repository),
    rng: random.Random = Depends(get_rng),
    now: datetime = Depends(get_current_time),
) -> EventMetricsResponse:
    """
    Retrieve complete metrics for a specific event.

    When `categories` is given, only those sub-records are returned alongside
    the event id, name and timestamp.
    """
    event = repository.get(event_id)

    try:
        metrics = MetricsSynthesizer(rng=rng).synthesize(event, now)
    except Exception as e:
        logger.error(f"Metrics generation error for event {event_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch metrics")

    audit_logger.log_metrics_generated(
        event_id=event.id,
        registrations=metrics.registration.total,
        attendance=metrics.attendance.checked_in,
        onchain_transactions=metrics.onchain.transactions.total,
        social_mentions=metrics.social.mentions,
    )

    if categories:
        payload = filter_metrics(metrics, categories)
    else:
        payload = metrics.model_dump(mode="json")

    return EventMetricsResponse(metrics=payload, event=EventSummary.from_event(event))


@router.get(
    "/{event_id}/metrics/summary",
    response_model=MetricsSummaryResponse,
    summary="Get metrics summary",
)
def get_metrics_summary(
    event_id: str,
    repository: EventRepository = Depends(get_event_repository),
    rng: random.Random = Depends(get_rng),
    now: datetime = Depends(get_current_time),
) -> MetricsSummaryResponse:
    """Lighter-weight endpoint for dashboard overview cards."""
    event = repository.get(event_id)

    try:
        metrics = MetricsSynthesizer(rng=rng).synthesize(event, now)
    except Exception as e:
        logger.error(f"Metrics summary error for event {event_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch metrics summary")

    return MetricsSummaryResponse(summary=summarize_metrics(metrics))


@router.get(
    "/{event_id}/metrics/comparison",
    response_model=ComparisonResponse,
    summary="Compare with similar events",
)
def get_comparison(
    event_id: str,
    repository: EventRepository = Depends(get_event_repository),
    rng: random.Random = Depends(get_rng),
) -> ComparisonResponse:
    """Get comparison data with similar events of the same type."""
    event = repository.get(event_id)

    try:
        comparison = MetricsSynthesizer(rng=rng).comparison(event)
    except Exception as e:
        logger.error(f"Comparison error for event {event_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch comparison data")

    audit_logger.log_comparison_generated(
        event_id=event.id,
        similar_events=len(comparison.similar_events),
        percentile=comparison.percentile,
    )

    return ComparisonResponse(comparison=comparison, event=EventSummary.from_event(event))


@router.get(
    "/{event_id}/metrics/realtime",
    response_model=RealtimeMetricsResponse,
    summary="Get realtime metrics",
)
def get_realtime_metrics(
    event_id: str,
    repository: EventRepository = Depends(get_event_repository),
    rng: random.Random = Depends(get_rng),
    now: datetime = Depends(get_current_time),
) -> RealtimeMetricsResponse:
    """
    Current snapshot plus simulated updates.

    One update for a randomly chosen category is produced while the event is
    live; otherwise the update list is empty.
    """
    event = repository.get(event_id)
    active = is_event_active(event, now)

    try:
        current = MetricsSynthesizer(rng=rng).synthesize(event, now)
        updates = []
        if active:
            category = rng.choice(list(MetricCategory))
            update = generate_metrics_update(current, category, rng=rng, timestamp=now)
            updates.append(update)
            audit_logger.log_realtime_update(event.id, category.value, update.changes)
    except Exception as e:
        logger.error(f"Realtime metrics error for event {event_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch realtime metrics")

    return RealtimeMetricsResponse(
        is_active=active,
        current_metrics=current,
        updates=updates,
        timestamp=now,
    )
