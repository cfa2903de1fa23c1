# metrycs/features/export/service.py
"""
Metrics export rendering.

The CSV layout (preamble, section headers, row labels and units) matches the
export format existing consumers parse, so keep it stable.
"""

from datetime import datetime, timezone

from metrycs.core.exceptions import UnsupportedExportFormatError
from metrycs.features.events.schemas import Event
from metrycs.features.export.schemas import (
    ExportFormat,
    PdfExportData,
    PdfExportResponse,
    PdfExportSummary,
)
from metrycs.features.metrics.schemas import EventMetrics


def parse_export_format(value: str) -> ExportFormat:
    try:
        return ExportFormat((value or "csv").lower())
    except ValueError:
        raise UnsupportedExportFormatError(value)


def isoformat_z(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a Z suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_number(value: float) -> str:
    """Render whole floats without a trailing .0 (12.0 -> '12', 12.5 -> '12.5')."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _percent(rate: float) -> str:
    return f"{rate * 100:.1f}%"


def export_filename(event: Event, export_format: ExportFormat, generated_at: datetime) -> str:
    stamp = int(generated_at.timestamp() * 1000)
    return f"metrics-{event.event_code}-{stamp}.{export_format.value}"


def render_metrics_csv(event: Event, metrics: EventMetrics, generated_at: datetime) -> str:
    """Flatten a metrics snapshot into labelled Metric,Value sections."""
    registration = metrics.registration
    attendance = metrics.attendance
    onchain = metrics.onchain
    social = metrics.social

    sections = [
        (
            "REGISTRATION METRICS",
            [
                ("Total Registrations", registration.total),
                ("Conversion Rate", _percent(registration.conversion_rate)),
                ("Web Source", f"{registration.sources.web}%"),
                ("Social Source", f"{registration.sources.social}%"),
                ("Email Source", f"{registration.sources.email}%"),
                ("Referral Source", f"{registration.sources.referral}%"),
            ],
        ),
        (
            "ATTENDANCE METRICS",
            [
                ("Checked In", attendance.checked_in),
                ("Average Duration", f"{attendance.average_duration} minutes"),
                ("Peak Attendance", attendance.peak_attendance),
                ("No-Show Rate", _percent(attendance.no_show_rate)),
            ],
        ),
        (
            "ON-CHAIN METRICS",
            [
                ("New Wallets", onchain.wallets.new_created),
                ("Reactivated Wallets", onchain.wallets.reactivated),
                ("Total Active Wallets", onchain.wallets.total_active),
                ("Total Transactions", onchain.transactions.total),
                ("Total Volume", f"{format_number(onchain.transactions.total_volume)} AVAX"),
                ("Gas Spent", f"{format_number(onchain.transactions.gas_spent)} AVAX"),
                ("POAPs Minted", onchain.nfts.poaps),
                ("Certificates", onchain.nfts.certificates),
                ("Airdrops Claimed", onchain.airdrops.claimed),
                ("Claim Rate", _percent(onchain.airdrops.claim_rate)),
            ],
        ),
        (
            "SOCIAL MEDIA METRICS",
            [
                ("Mentions", social.mentions),
                ("Shares", social.shares),
                ("Hashtag Usage", social.hashtag_usage),
                ("Estimated Reach", social.estimated_reach),
                ("Positive Sentiment", social.sentiment.positive),
                ("Neutral Sentiment", social.sentiment.neutral),
                ("Negative Sentiment", social.sentiment.negative),
            ],
        ),
    ]

    # Values are written verbatim, never quoted or escaped
    lines = [
        "EventMetrics Data Export",
        f"Event: {event.name}",
        f"Event Code: {event.event_code}",
        f"Generated: {isoformat_z(generated_at)}",
        "",
    ]

    for title, rows in sections:
        lines.append(title)
        lines.append("Metric,Value")
        lines.extend(f"{label},{value}" for label, value in rows)
        lines.append("")

    lines.append("GEOGRAPHIC DISTRIBUTION")
    lines.append("Country,Registrations")
    lines.extend(
        f"{geo.country},{geo.count}" for geo in registration.geographic_distribution
    )

    return "\n".join(lines)


def build_pdf_export(
    event: Event, metrics: EventMetrics, generated_at: datetime
) -> PdfExportResponse:
    return PdfExportResponse(
        filename=export_filename(event, ExportFormat.PDF, generated_at),
        data=PdfExportData(
            event_name=event.name,
            event_code=event.event_code,
            generated_at=generated_at,
            summary=PdfExportSummary(
                registrations=metrics.registration.total,
                attendance=metrics.attendance.checked_in,
                conversion_rate=_percent(metrics.registration.conversion_rate),
                onchain_transactions=metrics.onchain.transactions.total,
                wallets=metrics.onchain.wallets.total_active,
                social_mentions=metrics.social.mentions,
            ),
        ),
    )
