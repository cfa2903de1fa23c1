# metrycs/features/reporting/router.py
import logging
import random
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

from metrycs.core.audit import audit_logger
from metrycs.core.runtime import get_current_time, get_rng
from metrycs.features.events.repository import EventRepository, get_event_repository
from metrycs.features.events.schemas import EventSummary
from metrycs.features.metrics.service import MetricsSynthesizer
from metrycs.features.reporting.schemas import EventReportResponse
from metrycs.features.reporting.service import ReportGenerator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["Reporting"])


@router.get(
    "/{event_id}/report",
    response_model=EventReportResponse,
    summary="Generate post-event report",
)
def get_event_report(
    event_id: str,
    repository: EventRepository = Depends(get_event_repository),
    rng: random.Random = Depends(get_rng),
    now: datetime = Depends(get_current_time),
) -> EventReportResponse:
    """
    Synthesizes fresh metrics for the event and turns them into highlights,
    areas for improvement, recommendations and a similar-event comparison.
    """
    event = repository.get(event_id)

    try:
        metrics = MetricsSynthesizer(rng=rng).synthesize(event, now)
        report = ReportGenerator().generate(event, metrics, generated_at=now)
    except Exception as e:
        logger.error(f"Report generation error for event {event_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate report")

    audit_logger.log_report_generated(
        event_id=event.id,
        highlights=len(report.highlights),
        recommendations=len(report.recommendations),
        percentile=report.comparison.percentile,
    )

    return EventReportResponse(report=report, event=EventSummary.from_event(event))
