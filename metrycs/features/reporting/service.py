# metrycs/features/reporting/service.py
"""
Post-event report generation.

Turns a metrics snapshot into highlights, areas for improvement,
recommendations and a comparison against similar events.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from metrycs.core.ratios import clamp, round_half_away, safe_ratio
from metrycs.features.events.schemas import Event, EventType
from metrycs.features.metrics.schemas import EventMetrics
from metrycs.features.reporting.schemas import (
    EventReport,
    ReportAttendance,
    ReportComparison,
    ReportEventInfo,
    ReportMetrics,
    ReportOnChain,
    ReportRegistration,
    ReportSocial,
    ReportSummary,
)

logger = logging.getLogger(__name__)

MAX_HIGHLIGHTS = 5
MAX_LOWLIGHTS = 5
MAX_RECOMMENDATIONS = 6
DEFAULT_PERCENTILE = 50
NEUTRAL_SENTIMENT_SCORE = 50


def _pct(rate: float) -> str:
    return f"{rate * 100:.0f}%"


def sentiment_fractions(metrics: EventMetrics) -> tuple[float, float]:
    """(positive, negative) shares of all classified mentions; 0 when there are none."""
    sentiment = metrics.social.sentiment
    total = sentiment.total
    return safe_ratio(sentiment.positive, total), safe_ratio(sentiment.negative, total)


def calculate_sentiment_score(metrics: EventMetrics) -> int:
    """Sentiment on a 0-100 scale, 50 meaning neutral or no data."""
    sentiment = metrics.social.sentiment
    total = sentiment.total
    if total == 0:
        return NEUTRAL_SENTIMENT_SCORE

    score = ((sentiment.positive - sentiment.negative) / total) * 50 + 50
    return round_half_away(clamp(score, 0, 100))


def format_delta(actual: float, average: float) -> str:
    """Signed percentage difference from an average, e.g. '+12%' or '-8%'."""
    if not average:
        return "0%"
    diff = round_half_away((actual - average) / average * 100)
    return f"+{diff}%" if diff >= 0 else f"{diff}%"


class ReportGenerator:
    """
    Builds an EventReport from an Event and its metrics snapshot.

    Rules that judge a rate only fire when the population behind the rate is
    non-zero, so an empty snapshot yields no highlights or lowlights.
    """

    def highlights(self, metrics: EventMetrics) -> list[str]:
        registration = metrics.registration
        attendance = metrics.attendance
        onchain = metrics.onchain
        social = metrics.social
        highlights = []

        # Registration
        if registration.total > 0 and registration.conversion_rate > 0.8:
            highlights.append(
                f"Excellent conversion rate of {_pct(registration.conversion_rate)} "
                "from registration to attendance"
            )
        if registration.total > 100:
            highlights.append(
                f"Strong turnout with {registration.total} total registrations"
            )

        # Attendance
        if attendance.checked_in > 0 and attendance.no_show_rate < 0.15:
            highlights.append(
                f"Low no-show rate of {_pct(attendance.no_show_rate)}, "
                "indicating high attendee commitment"
            )
        if attendance.average_duration > 120:
            highlights.append(
                "High engagement with average attendance duration of "
                f"{attendance.average_duration} minutes"
            )

        # On-chain
        if onchain.wallets.new_created > 10:
            highlights.append(
                f"Successfully onboarded {onchain.wallets.new_created} new users to Web3"
            )
        if onchain.transactions.total > 200:
            highlights.append(
                "High blockchain activity with "
                f"{onchain.transactions.total} total transactions"
            )
        if onchain.nfts.total_minted > 50:
            highlights.append(
                f"Distributed {onchain.nfts.total_minted} NFTs/POAPs to attendees"
            )

        # Social
        if social.estimated_reach > 5000:
            highlights.append(
                f"Excellent social media reach of {social.estimated_reach:,} people"
            )
        positive, _ = sentiment_fractions(metrics)
        if positive > 0.7:
            highlights.append(
                f"Overwhelmingly positive social sentiment at {_pct(positive)}"
            )

        return highlights[:MAX_HIGHLIGHTS]

    def lowlights(self, metrics: EventMetrics) -> list[str]:
        registration = metrics.registration
        attendance = metrics.attendance
        airdrops = metrics.onchain.airdrops
        social = metrics.social
        lowlights = []

        if registration.total > 0 and registration.conversion_rate < 0.6:
            lowlights.append(
                f"Conversion rate of {_pct(registration.conversion_rate)} "
                "could be improved with better follow-up"
            )

        if attendance.checked_in > 0:
            if attendance.no_show_rate > 0.25:
                lowlights.append(
                    f"High no-show rate of {_pct(attendance.no_show_rate)} "
                    "- consider reminder strategies"
                )
            if attendance.average_duration < 60:
                lowlights.append(
                    f"Short average duration of {attendance.average_duration} minutes "
                    "- review content engagement"
                )

        if airdrops.distributed > 0 and airdrops.claim_rate < 0.5:
            lowlights.append(
                f"Only {_pct(airdrops.claim_rate)} airdrop claim rate "
                "- simplify the claiming process"
            )

        _, negative = sentiment_fractions(metrics)
        if negative > 0.15:
            lowlights.append(
                f"{_pct(negative)} negative social sentiment - review attendee feedback"
            )

        if registration.total > 0 and social.shares < 20:
            lowlights.append(
                f"Low social sharing ({social.shares} shares) "
                "- create more shareable moments"
            )

        return lowlights[:MAX_LOWLIGHTS]

    def recommendations(self, event: Event, metrics: EventMetrics) -> list[str]:
        registration = metrics.registration
        attendance = metrics.attendance
        onchain = metrics.onchain
        social = metrics.social
        recommendations = []

        # Event type specific
        if event.event_type == EventType.WORKSHOP and attendance.average_duration < 90:
            recommendations.append(
                "Consider adding more hands-on activities to increase workshop engagement time"
            )
        if event.event_type == EventType.HACKATHON and onchain.wallets.new_created < 20:
            recommendations.append(
                "Promote wallet creation at registration to increase blockchain participation"
            )
        if event.event_type == EventType.CONFERENCE and social.mentions < 100:
            recommendations.append(
                "Create a unique event hashtag and incentivize social sharing during sessions"
            )

        # Metric thresholds
        if registration.sources.referral < 10:
            recommendations.append(
                "Implement a referral program to leverage word-of-mouth marketing"
            )
        if onchain.nfts.claim_rate < 0.7:
            recommendations.append(
                "Set up QR codes or NFC tags for easier POAP/NFT claiming at the venue"
            )
        if attendance.peak_attendance < attendance.checked_in * 0.8:
            recommendations.append(
                "Schedule key sessions during peak attendance times for maximum impact"
            )

        # Location
        top_country = max(
            registration.geographic_distribution, key=lambda c: c.count, default=None
        )
        if top_country and top_country.count > registration.total * 0.5:
            recommendations.append(
                f"Consider hosting follow-up events in {top_country.country} "
                "given the strong regional interest"
            )

        if social.estimated_reach < 3000:
            recommendations.append(
                "Partner with influencers or community leaders to expand event visibility"
            )

        return recommendations[:MAX_RECOMMENDATIONS]

    def comparison(self, metrics: EventMetrics) -> ReportComparison:
        comparison = metrics.comparison_data
        if comparison is None:
            percentile = DEFAULT_PERCENTILE
            avg_registrations = avg_attendance = avg_engagement = 0
        else:
            percentile = comparison.percentile
            avg_registrations = comparison.averages.registrations
            avg_attendance = comparison.averages.attendance
            avg_engagement = comparison.averages.social_engagement

        engagement = metrics.social.mentions + metrics.social.shares

        return ReportComparison(
            percentile=percentile,
            vs_average=ReportComparison.VsAverage(
                registrations=format_delta(metrics.registration.total, avg_registrations),
                attendance=format_delta(metrics.attendance.checked_in, avg_attendance),
                engagement=format_delta(engagement, avg_engagement),
            ),
        )

    def generate(
        self,
        event: Event,
        metrics: EventMetrics,
        generated_at: Optional[datetime] = None,
    ) -> EventReport:
        """
        Generate the complete post-event report.

        Args:
            event: The event the metrics belong to
            metrics: Snapshot produced by MetricsSynthesizer (or built by hand)
            generated_at: Report timestamp, defaults to now

        Returns:
            EventReport; lists may be empty but the report is always complete
        """
        registration = metrics.registration
        attendance = metrics.attendance
        onchain = metrics.onchain
        social = metrics.social

        report = EventReport(
            event=ReportEventInfo(
                id=event.id,
                name=event.name,
                event_code=event.event_code,
                event_type=event.event_type,
                start_date=event.start_date,
                end_date=event.end_date,
            ),
            summary=ReportSummary(
                total_registrations=registration.total,
                total_attendance=attendance.checked_in,
                conversion_rate=registration.conversion_rate,
                no_show_rate=attendance.no_show_rate,
                average_duration=attendance.average_duration,
            ),
            highlights=self.highlights(metrics),
            lowlights=self.lowlights(metrics),
            recommendations=self.recommendations(event, metrics),
            metrics=ReportMetrics(
                registration=ReportRegistration(
                    total=registration.total,
                    sources=registration.sources,
                    geographic=registration.geographic_distribution,
                ),
                attendance=ReportAttendance(
                    checked_in=attendance.checked_in,
                    peak_attendance=attendance.peak_attendance,
                    average_duration=attendance.average_duration,
                ),
                onchain=ReportOnChain(
                    new_wallets=onchain.wallets.new_created,
                    total_transactions=onchain.transactions.total,
                    total_volume=onchain.transactions.total_volume,
                    nfts_minted=onchain.nfts.total_minted,
                ),
                social=ReportSocial(
                    mentions=social.mentions,
                    shares=social.shares,
                    reach=social.estimated_reach,
                    sentiment_score=calculate_sentiment_score(metrics),
                ),
            ),
            comparison=self.comparison(metrics),
            generated_at=generated_at or datetime.now(timezone.utc),
        )

        logger.debug(
            f"Generated report for {event.id}: {len(report.highlights)} highlights, "
            f"{len(report.lowlights)} lowlights, "
            f"{len(report.recommendations)} recommendations"
        )
        return report


def generate_event_report(
    event: Event,
    metrics: EventMetrics,
    generated_at: Optional[datetime] = None,
) -> EventReport:
    return ReportGenerator().generate(event, metrics, generated_at)
