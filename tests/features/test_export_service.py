# tests/features/test_export_service.py

import pytest

from metrycs.core.exceptions import UnsupportedExportFormatError
from metrycs.features.export.schemas import ExportFormat
from metrycs.features.export.service import (
    build_pdf_export,
    export_filename,
    format_number,
    isoformat_z,
    parse_export_format,
    render_metrics_csv,
)
from metrycs.features.metrics.schemas import (
    AirdropMetrics,
    AttendanceMetrics,
    CountryCount,
    EventMetrics,
    NFTMetrics,
    OnChainMetrics,
    RegistrationMetrics,
    RegistrationSources,
    SentimentBreakdown,
    SocialMetrics,
    TransactionMetrics,
    WalletMetrics,
)

EXPECTED_CSV = """EventMetrics Data Export
Event: Avalanche Developer Workshop
Event Code: AVC2025-042
Generated: 2025-06-15T12:00:00.000Z

REGISTRATION METRICS
Metric,Value
Total Registrations,42
Conversion Rate,85.0%
Web Source,60%
Social Source,20%
Email Source,10%
Referral Source,10%

ATTENDANCE METRICS
Metric,Value
Checked In,35
Average Duration,150 minutes
Peak Attendance,30
No-Show Rate,15.0%

ON-CHAIN METRICS
Metric,Value
New Wallets,7
Reactivated Wallets,3
Total Active Wallets,28
Total Transactions,120
Total Volume,180.25 AVAX
Gas Spent,0 AVAX
POAPs Minted,25
Certificates,8
Airdrops Claimed,30
Claim Rate,85.7%

SOCIAL MEDIA METRICS
Metric,Value
Mentions,40
Shares,12
Hashtag Usage,30
Estimated Reach,1500
Positive Sentiment,28
Neutral Sentiment,8
Negative Sentiment,4

GEOGRAPHIC DISTRIBUTION
Country,Registrations
Colombia,17
Mexico,6"""


@pytest.fixture
def metrics(now) -> EventMetrics:
    return EventMetrics(
        event_id="evt_test",
        event_name="Avalanche Developer Workshop",
        registration=RegistrationMetrics(
            total=42,
            sources=RegistrationSources(web=60, social=20, email=10, referral=10),
            conversion_rate=0.85,
            geographic_distribution=[
                CountryCount(country="Colombia", count=17),
                CountryCount(country="Mexico", count=6),
            ],
        ),
        attendance=AttendanceMetrics(
            checked_in=35, average_duration=150, peak_attendance=30, no_show_rate=0.15
        ),
        onchain=OnChainMetrics(
            wallets=WalletMetrics(new_created=7, reactivated=3, total_active=28),
            transactions=TransactionMetrics(total=120, total_volume=180.25, gas_spent=0.0),
            nfts=NFTMetrics(poaps=25, certificates=8, collectibles=4, total_minted=37, claim_rate=1.0),
            airdrops=AirdropMetrics(distributed=35, claimed=30, claim_rate=30 / 35),
        ),
        social=SocialMetrics(
            mentions=40,
            shares=12,
            hashtag_usage=30,
            sentiment=SentimentBreakdown(positive=28, neutral=8, negative=4),
            estimated_reach=1500,
        ),
        last_updated=now,
    )


class TestCsvExport:
    def test_renders_exact_layout(self, upcoming_event, metrics, now):
        # 1. Arrange / 2. Act
        content = render_metrics_csv(upcoming_event, metrics, now)

        # 3. Assert
        assert content == EXPECTED_CSV
        assert not content.endswith("\n")

    def test_section_headers_in_order(self, upcoming_event, metrics, now):
        lines = render_metrics_csv(upcoming_event, metrics, now).split("\n")

        headers = [
            "REGISTRATION METRICS",
            "ATTENDANCE METRICS",
            "ON-CHAIN METRICS",
            "SOCIAL MEDIA METRICS",
            "GEOGRAPHIC DISTRIBUTION",
        ]
        positions = [lines.index(h) for h in headers]
        assert positions == sorted(positions)
        country_header = lines.index("Country,Registrations")
        assert lines[country_header + 1] == "Colombia,17"

    def test_names_with_commas_and_quotes_are_not_escaped(self, make_event, metrics, now):
        # 1. Arrange
        event = make_event(name='DeFi Summit, "Bogota" Edition')
        metrics.registration.geographic_distribution = [
            CountryCount(country="Korea, Republic of", count=9)
        ]

        # 2. Act
        lines = render_metrics_csv(event, metrics, now).split("\n")

        # 3. Assert
        assert lines[1] == 'Event: DeFi Summit, "Bogota" Edition'
        assert lines[2] == "Event Code: AVC2025-042"
        assert lines[-1] == "Korea, Republic of,9"

    def test_empty_geography_ends_with_header(self, upcoming_event, metrics, now):
        metrics.registration.geographic_distribution = []

        content = render_metrics_csv(upcoming_event, metrics, now)

        assert content.endswith("GEOGRAPHIC DISTRIBUTION\nCountry,Registrations")


class TestPdfExport:
    def test_builds_descriptor(self, upcoming_event, metrics, now):
        export = build_pdf_export(upcoming_event, metrics, now)

        assert export.success is True
        assert export.format == ExportFormat.PDF
        assert export.filename == "metrics-AVC2025-042-1749988800000.pdf"
        assert export.download_url == "#"
        assert export.data.summary.registrations == 42
        assert export.data.summary.conversion_rate == "85.0%"
        assert export.data.summary.wallets == 28


class TestHelpers:
    def test_export_filename(self, upcoming_event, now):
        assert (
            export_filename(upcoming_event, ExportFormat.CSV, now)
            == "metrics-AVC2025-042-1749988800000.csv"
        )

    def test_isoformat_z(self, now):
        assert isoformat_z(now) == "2025-06-15T12:00:00.000Z"

    @pytest.mark.parametrize("value,expected", [(12.0, "12"), (12.5, "12.5"), (0, "0")])
    def test_format_number(self, value, expected):
        assert format_number(value) == expected

    @pytest.mark.parametrize("value", ["csv", "CSV", "pdf", ""])
    def test_parse_supported_formats(self, value):
        assert parse_export_format(value) in (ExportFormat.CSV, ExportFormat.PDF)

    def test_parse_rejects_unknown_format(self):
        with pytest.raises(UnsupportedExportFormatError) as exc_info:
            parse_export_format("xlsx")

        assert exc_info.value.status_code == 400
        assert exc_info.value.error_code == "UNSUPPORTED_EXPORT_FORMAT"
