# metrycs/core/audit.py
"""
Structured audit logging for analytics operations.

Provides:
- Metrics generation audit trail
- Report and export tracking
- Realtime update tracking
"""

import json
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from metrycs.core.config import settings

logger = logging.getLogger("audit")


class AuditAction(str, Enum):
    """Audit action types."""

    METRICS_GENERATED = "metrics.generated"
    METRICS_UPDATED = "metrics.realtime_update"
    COMPARISON_GENERATED = "metrics.comparison_generated"
    METRICS_EXPORTED = "metrics.exported"
    REPORT_GENERATED = "report.generated"


class AuditLogger:
    """
    Structured audit logger for analytics operations.

    All audit logs are written in JSON format for easy parsing
    by log aggregators.
    """

    def __init__(self, service_name: str = "event-metrycs", enabled: bool = True):
        self.service_name = service_name
        self.enabled = enabled

    def log(
        self,
        action: AuditAction,
        resource_id: Optional[str] = None,
        resource_type: str = "event",
        details: Optional[dict[str, Any]] = None,
        success: bool = True,
        error: Optional[str] = None,
    ) -> None:
        """
        Log an audit event.

        Args:
            action: The action being audited
            resource_id: ID of the event the action concerns
            resource_type: Type of resource
            details: Additional context about the action
            success: Whether the action succeeded
            error: Error message if action failed
        """
        if not self.enabled:
            return

        audit_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": self.service_name,
            "action": action.value,
            "resource_id": resource_id,
            "resource_type": resource_type,
            "success": success,
            "error": error,
            "details": details or {},
        }

        logger.info(json.dumps(audit_entry, default=str))

    def log_metrics_generated(
        self,
        event_id: str,
        registrations: int,
        attendance: int,
        onchain_transactions: int,
        social_mentions: int,
    ) -> None:
        """Log a freshly synthesized metrics snapshot."""
        self.log(
            action=AuditAction.METRICS_GENERATED,
            resource_id=event_id,
            details={
                "registrations": registrations,
                "attendance": attendance,
                "onchain_transactions": onchain_transactions,
                "social_mentions": social_mentions,
            },
        )

    def log_comparison_generated(
        self, event_id: str, similar_events: int, percentile: int
    ) -> None:
        self.log(
            action=AuditAction.COMPARISON_GENERATED,
            resource_id=event_id,
            details={"similar_events": similar_events, "percentile": percentile},
        )

    def log_realtime_update(self, event_id: str, category: str, changes: dict) -> None:
        self.log(
            action=AuditAction.METRICS_UPDATED,
            resource_id=event_id,
            details={"category": category, "changes": changes},
        )

    def log_report_generated(
        self,
        event_id: str,
        highlights: int,
        recommendations: int,
        percentile: int,
    ) -> None:
        """Log a generated post-event report."""
        self.log(
            action=AuditAction.REPORT_GENERATED,
            resource_id=event_id,
            details={
                "highlights": highlights,
                "recommendations": recommendations,
                "percentile": percentile,
            },
        )

    def log_metrics_export(self, event_id: str, export_format: str) -> None:
        """Log metrics data export."""
        self.log(
            action=AuditAction.METRICS_EXPORTED,
            resource_id=event_id,
            details={"format": export_format},
        )


# Global audit logger instance
audit_logger = AuditLogger(enabled=settings.AUDIT_LOG_ENABLED)
