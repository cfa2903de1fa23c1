"""Post-event reporting feature module."""

from metrycs.features.reporting.router import router
from metrycs.features.reporting.schemas import EventReport, EventReportResponse
from metrycs.features.reporting.service import ReportGenerator, generate_event_report

__all__ = [
    "router",
    "EventReport",
    "EventReportResponse",
    "ReportGenerator",
    "generate_event_report",
]
