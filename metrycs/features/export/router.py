# metrycs/features/export/router.py
import logging
import random
from datetime import datetime
from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from metrycs.core.audit import audit_logger
from metrycs.core.runtime import get_current_time, get_rng
from metrycs.features.events.repository import EventRepository, get_event_repository
from metrycs.features.export.schemas import ExportFormat, ExportRequest, PdfExportResponse
from metrycs.features.export.service import (
    build_pdf_export,
    export_filename,
    parse_export_format,
    render_metrics_csv,
)
from metrycs.features.metrics.service import MetricsSynthesizer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["Metrics Export"])


@router.post(
    "/{event_id}/metrics/export",
    response_model=PdfExportResponse,
    responses={200: {"content": {"text/csv": {}}}},
    summary="Export event metrics",
)
def export_metrics(
    event_id: str,
    payload: Optional[ExportRequest] = None,
    repository: EventRepository = Depends(get_event_repository),
    rng: random.Random = Depends(get_rng),
    now: datetime = Depends(get_current_time),
) -> Union[Response, PdfExportResponse]:
    """
    Export a fresh metrics snapshot.

    `csv` returns the file as an attachment; `pdf` returns a descriptor of the
    export with its headline numbers.
    """
    export_format = parse_export_format(payload.format if payload else "csv")
    event = repository.get(event_id)

    try:
        metrics = MetricsSynthesizer(rng=rng).synthesize(event, now)
        if export_format == ExportFormat.CSV:
            content = render_metrics_csv(event, metrics, now)
            filename = export_filename(event, export_format, now)
            result = Response(
                content=content,
                media_type="text/csv",
                headers={"Content-Disposition": f'attachment; filename="{filename}"'},
            )
        else:
            result = build_pdf_export(event, metrics, now)
    except Exception as e:
        logger.error(f"Export error for event {event_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to export metrics")

    audit_logger.log_metrics_export(event_id=event.id, export_format=export_format.value)
    return result
