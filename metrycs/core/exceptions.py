# metrycs/core/exceptions.py
"""
Custom exception hierarchy for the Event Metrycs service.
All exceptions inherit from MetrycsServiceError for consistent handling.
"""

from typing import Optional


class MetrycsServiceError(Exception):
    """Base exception for all Event Metrycs service errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str = "METRYCS_ERROR",
        details: Optional[dict] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


# ===========================================
# Event Catalogue Exceptions
# ===========================================


class EventNotFoundError(MetrycsServiceError):
    """No event with the given id exists in the catalogue."""

    status_code = 404

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__(
            message="Event not found",
            error_code="EVENT_NOT_FOUND",
            details={"event_id": event_id},
        )


# ===========================================
# Export Exceptions
# ===========================================


class UnsupportedExportFormatError(MetrycsServiceError):
    """Requested export format is not csv or pdf."""

    status_code = 400

    def __init__(self, export_format: str):
        self.export_format = export_format
        super().__init__(
            message='Invalid export format. Use "csv" or "pdf".',
            error_code="UNSUPPORTED_EXPORT_FORMAT",
            details={"format": export_format},
        )


# ===========================================
# Metrics Exceptions
# ===========================================


class InvalidMetricCategoryError(MetrycsServiceError, ValueError):
    """A metrics update was requested for a category outside the fixed set."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(
            message=f"Unknown metric category: {category}",
            error_code="INVALID_METRIC_CATEGORY",
            details={"category": category},
        )
