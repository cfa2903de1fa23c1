# metrycs/features/reporting/schemas.py
from datetime import datetime

from pydantic import BaseModel, Field

from metrycs.features.events.schemas import EventSummary, EventType
from metrycs.features.metrics.schemas import CountryCount, RegistrationSources


class ReportEventInfo(BaseModel):
    id: str
    name: str
    event_code: str
    event_type: EventType
    start_date: datetime
    end_date: datetime


class ReportSummary(BaseModel):
    total_registrations: int
    total_attendance: int
    conversion_rate: float
    no_show_rate: float
    average_duration: int


class ReportRegistration(BaseModel):
    total: int
    sources: RegistrationSources
    geographic: list[CountryCount]


class ReportAttendance(BaseModel):
    checked_in: int
    peak_attendance: int
    average_duration: int


class ReportOnChain(BaseModel):
    new_wallets: int
    total_transactions: int
    total_volume: float
    nfts_minted: int


class ReportSocial(BaseModel):
    mentions: int
    shares: int
    reach: int
    sentiment_score: int = Field(..., ge=0, le=100)


class ReportMetrics(BaseModel):
    registration: ReportRegistration
    attendance: ReportAttendance
    onchain: ReportOnChain
    social: ReportSocial


class ReportComparison(BaseModel):
    class VsAverage(BaseModel):
        registrations: str
        attendance: str
        engagement: str

    percentile: int
    vs_average: VsAverage


class EventReport(BaseModel):
    """Qualitative post-event report built from one metrics snapshot."""

    event: ReportEventInfo
    summary: ReportSummary
    highlights: list[str] = Field(..., max_length=5)
    lowlights: list[str] = Field(..., max_length=5)
    recommendations: list[str] = Field(..., max_length=6)
    metrics: ReportMetrics
    comparison: ReportComparison
    generated_at: datetime


class EventReportResponse(BaseModel):
    success: bool = True
    report: EventReport
    event: EventSummary
