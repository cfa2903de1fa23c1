# metrycs/features/metrics/schemas.py
"""
Pydantic schemas for synthesized event metrics.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from metrycs.features.events.schemas import EventSummary


class MetricCategory(str, Enum):
    REGISTRATION = "registration"
    ATTENDANCE = "attendance"
    ONCHAIN = "onchain"
    SOCIAL = "social"


# --- Off-chain metrics ---


class RegistrationSources(BaseModel):
    """Source attribution in units of a 100 base (percent, floored)."""

    web: int = Field(0, ge=0)
    social: int = Field(0, ge=0)
    email: int = Field(0, ge=0)
    referral: int = Field(0, ge=0)


class CountryCount(BaseModel):
    country: str
    count: int = Field(..., ge=0)


class RegistrationMetrics(BaseModel):
    total: int = Field(0, ge=0)
    daily: list[int] = Field(default_factory=list)
    sources: RegistrationSources = Field(default_factory=RegistrationSources)
    conversion_rate: float = Field(0.0, ge=0.0, le=1.0)
    geographic_distribution: list[CountryCount] = Field(default_factory=list)


class AttendancePeak(BaseModel):
    time_slot: str
    count: int = Field(..., ge=0)


class AttendanceMetrics(BaseModel):
    checked_in: int = Field(0, ge=0)
    average_duration: int = Field(0, ge=0, description="Minutes")
    peak_attendance: int = Field(0, ge=0)
    no_show_rate: float = Field(0.0, ge=0.0, le=1.0)
    check_in_timestamps: list[datetime] = Field(default_factory=list)
    attendance_peaks: list[AttendancePeak] = Field(default_factory=list)


# --- On-chain metrics ---


class WalletMetrics(BaseModel):
    new_created: int = Field(0, ge=0)
    reactivated: int = Field(0, ge=0)
    total_active: int = Field(0, ge=0)
    addresses: list[str] = Field(default_factory=list, description="Display sample only")


class TransactionTypes(BaseModel):
    transfers: int = Field(0, ge=0)
    swaps: int = Field(0, ge=0)
    contracts: int = Field(0, ge=0)


class TransactionMetrics(BaseModel):
    total: int = Field(0, ge=0)
    average_per_wallet: float = Field(0.0, ge=0.0)
    total_volume: float = Field(0.0, ge=0.0, description="AVAX")
    gas_spent: float = Field(0.0, ge=0.0, description="AVAX")
    types: TransactionTypes = Field(default_factory=TransactionTypes)


class NFTMetrics(BaseModel):
    poaps: int = Field(0, ge=0)
    certificates: int = Field(0, ge=0)
    collectibles: int = Field(0, ge=0)
    total_minted: int = Field(0, ge=0)
    claim_rate: float = Field(0.0, ge=0.0, le=1.0)


class AirdropMetrics(BaseModel):
    distributed: int = Field(0, ge=0)
    claimed: int = Field(0, ge=0)
    claim_rate: float = Field(0.0, ge=0.0, le=1.0)


class OnChainMetrics(BaseModel):
    wallets: WalletMetrics = Field(default_factory=WalletMetrics)
    transactions: TransactionMetrics = Field(default_factory=TransactionMetrics)
    nfts: NFTMetrics = Field(default_factory=NFTMetrics)
    airdrops: AirdropMetrics = Field(default_factory=AirdropMetrics)


# --- Social metrics ---


class SentimentBreakdown(BaseModel):
    positive: int = Field(0, ge=0)
    neutral: int = Field(0, ge=0)
    negative: int = Field(0, ge=0)

    @property
    def total(self) -> int:
        return self.positive + self.neutral + self.negative


class TopPost(BaseModel):
    platform: str
    engagement: int = Field(..., ge=0)
    text: str


class SocialMetrics(BaseModel):
    mentions: int = Field(0, ge=0)
    shares: int = Field(0, ge=0)
    hashtag_usage: int = Field(0, ge=0)
    sentiment: SentimentBreakdown = Field(default_factory=SentimentBreakdown)
    estimated_reach: int = Field(0, ge=0)
    top_posts: list[TopPost] = Field(default_factory=list)


# --- Comparison ---


class SimilarEvent(BaseModel):
    event_name: str
    registrations: int = Field(..., ge=0)
    attendance: int = Field(..., ge=0)
    onchain_activity: int = Field(..., ge=0)


class ComparisonAverages(BaseModel):
    registrations: int = Field(0, ge=0)
    attendance: int = Field(0, ge=0)
    conversion_rate: float = Field(0.0, ge=0.0, le=1.0)
    social_engagement: int = Field(0, ge=0)


class ComparisonMetrics(BaseModel):
    similar_events: list[SimilarEvent] = Field(default_factory=list)
    averages: ComparisonAverages = Field(default_factory=ComparisonAverages)
    percentile: int = Field(50, ge=0, le=100, description="Where this event ranks (0-100)")


class EventMetrics(BaseModel):
    """Complete metrics snapshot for one event at one point in time."""

    event_id: str
    event_name: str
    registration: RegistrationMetrics
    attendance: AttendanceMetrics
    onchain: OnChainMetrics
    social: SocialMetrics
    last_updated: datetime
    comparison_data: Optional[ComparisonMetrics] = None


class MetricsUpdate(BaseModel):
    """Delta descriptor for a simulated realtime change."""

    category: MetricCategory
    changes: dict[str, int]
    timestamp: datetime


class MetricsSummary(BaseModel):
    total_registrations: int
    total_attendance: int
    conversion_rate: float
    total_transactions: int
    total_wallets: int
    social_engagement: int
    last_updated: datetime


# --- API responses ---


class EventMetricsResponse(BaseModel):
    success: bool = True
    metrics: dict
    event: EventSummary


class MetricsSummaryResponse(BaseModel):
    success: bool = True
    summary: MetricsSummary


class ComparisonResponse(BaseModel):
    success: bool = True
    comparison: ComparisonMetrics
    event: EventSummary


class RealtimeMetricsResponse(BaseModel):
    success: bool = True
    is_active: bool
    current_metrics: EventMetrics
    updates: list[MetricsUpdate]
    timestamp: datetime
