# metrycs/features/metrics/service.py
"""
Metrics synthesis service.

Derives a complete, plausible metrics snapshot (registration, attendance,
on-chain, social, comparison) from an event's capacity and timing. Values are
random within documented ranges; pass a seeded random.Random for
reproducible output.
"""

import logging
import math
import random
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from metrycs.core.config import settings
from metrycs.core.exceptions import InvalidMetricCategoryError
from metrycs.core.ratios import clamp_unit, safe_ratio
from metrycs.features.events.schemas import Event, EventType
from metrycs.features.metrics.schemas import (
    AirdropMetrics,
    AttendanceMetrics,
    AttendancePeak,
    ComparisonAverages,
    ComparisonMetrics,
    CountryCount,
    EventMetrics,
    MetricCategory,
    MetricsSummary,
    MetricsUpdate,
    NFTMetrics,
    OnChainMetrics,
    RegistrationMetrics,
    RegistrationSources,
    SentimentBreakdown,
    SimilarEvent,
    SocialMetrics,
    TopPost,
    TransactionMetrics,
    TransactionTypes,
    WalletMetrics,
)

logger = logging.getLogger(__name__)

# Share of the registration target collected in each phase, and the number of
# days each phase spans, for events that already happened.
REGISTRATION_PHASES = {
    "early": (0.1, 14),
    "middle": (0.6, 46),
    "late": (0.3, 30),
}
MAX_HISTORY_DAYS = 90

GEO_WEIGHTS = [
    ("Colombia", 0.4),
    ("United States", 0.2),
    ("Mexico", 0.15),
    ("Argentina", 0.1),
    ("Spain", 0.08),
    ("Other", 0.07),
]

SOCIAL_PLATFORMS = ["Twitter", "LinkedIn", "Instagram", "Facebook"]
MAX_TOP_POSTS = 3

EVENT_TYPE_MULTIPLIERS = {
    EventType.WORKSHOP: 0.8,
    EventType.MEETUP: 1.0,
    EventType.HACKATHON: 1.5,
    EventType.CONFERENCE: 2.0,
    EventType.WEBINAR: 0.9,
    EventType.NETWORKING: 1.1,
}

# (suffix, registration factor, attendance factor, on-chain base)
SIMILAR_EVENT_PROFILES = [
    ("Alpha", 0.6, 0.5, 150),
    ("Beta", 0.8, 0.65, 200),
    ("Gamma", 0.7, 0.55, 175),
]

# Exclusive upper bound of the random increment per realtime update.
UPDATE_INCREMENTS = {
    MetricCategory.REGISTRATION: 5,
    MetricCategory.ATTENDANCE: 3,
    MetricCategory.ONCHAIN: 10,
    MetricCategory.SOCIAL: 15,
}

HEX_CHARS = "0123456789abcdef"


def days_between(start: datetime, end: datetime) -> int:
    """Whole days between two moments, rounded up."""
    seconds = abs((end - start).total_seconds())
    return math.ceil(seconds / 86400)


def hours_until(moment: datetime, current_time: datetime) -> int:
    """Whole hours until `moment`, rounded down. Negative once it has passed."""
    return math.floor((moment - current_time).total_seconds() / 3600)


def generate_wallet_address(rng: random.Random) -> str:
    return "0x" + "".join(rng.choice(HEX_CHARS) for _ in range(40))


class MetricsSynthesizer:
    """
    Builds EventMetrics snapshots.

    Stateless apart from the random source, so one instance can serve any
    number of events.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        max_wallet_sample: int = settings.MAX_WALLET_SAMPLE,
    ):
        self.rng = rng or random.Random()
        self.max_wallet_sample = max_wallet_sample

    def _uniform(self, low: float, high: float) -> float:
        return self.rng.uniform(low, high)

    # --- Registration ---

    def registration_curve(
        self, capacity: int, days_since_created: int, hours_until_event: int
    ) -> tuple[int, list[int]]:
        """Total registrations so far plus a per-day history."""
        days_until_event = math.floor(hours_until_event / 24)
        target = math.floor(capacity * self._uniform(0.7, 0.95))
        daily = []

        if hours_until_event < 0:
            total = target
            for day in range(min(days_since_created, MAX_HISTORY_DAYS)):
                if day < 14:
                    share, span = REGISTRATION_PHASES["early"]
                elif day < 60:
                    share, span = REGISTRATION_PHASES["middle"]
                else:
                    share, span = REGISTRATION_PHASES["late"]
                daily_avg = target * share / span
                daily.append(math.floor(daily_avg * self._uniform(0.5, 1.5)))
        else:
            # Registrations never reach 100% of target before the event starts
            progress = safe_ratio(
                days_since_created, days_since_created + days_until_event
            )
            total = max(0, math.floor(target * min(progress * 1.2, 0.95)))
            daily_avg = safe_ratio(total, days_since_created)
            for _ in range(days_since_created):
                daily.append(math.floor(daily_avg * self._uniform(0.3, 1.7)))

        return total, daily

    def registration_sources(self) -> RegistrationSources:
        base = 100
        web = self._uniform(0.5, 0.7)
        social = self._uniform(0.15, 0.3)
        email = self._uniform(0.05, 0.15)
        referral = max(0.0, 1 - web - social - email)

        return RegistrationSources(
            web=math.floor(base * web),
            social=math.floor(base * social),
            email=math.floor(base * email),
            referral=math.floor(base * referral),
        )

    def geographic_distribution(self) -> list[CountryCount]:
        return [
            CountryCount(
                country=country,
                count=math.floor(weight * 100 * self._uniform(0.8, 1.2)),
            )
            for country, weight in GEO_WEIGHTS
        ]

    def registration(self, event: Event, current_time: datetime) -> RegistrationMetrics:
        total, daily = self.registration_curve(
            event.max_capacity,
            days_between(event.created_at, current_time),
            hours_until(event.start_date, current_time),
        )
        return RegistrationMetrics(
            total=total,
            daily=daily,
            sources=self.registration_sources(),
            conversion_rate=self._uniform(0.75, 0.95),
            geographic_distribution=self.geographic_distribution(),
        )

    # --- Attendance ---

    def attendance(
        self,
        event: Event,
        registration: RegistrationMetrics,
        current_time: datetime,
    ) -> AttendanceMetrics:
        """Attendance is only generated once the event has started."""
        if current_time < event.start_date:
            return AttendanceMetrics()

        checked_in = math.floor(registration.total * registration.conversion_rate)
        no_show_rate = 1 - registration.conversion_rate
        duration = max(0.0, event.duration_minutes)

        check_ins = []
        for _ in range(checked_in):
            # Product of two draws pulls arrivals towards the start
            offset = abs(self.rng.random() * self.rng.random() * duration * 0.3)
            check_ins.append(event.start_date + timedelta(minutes=offset))
        check_ins.sort()

        slots = math.ceil(duration / 60)
        peaks = []
        for i in range(slots):
            hour = event.start_date + timedelta(hours=i)
            peak_factor = 1.0 if i < slots / 2 else 0.7
            count = math.floor(checked_in * peak_factor * self._uniform(0.6, 1.0))
            peaks.append(AttendancePeak(time_slot=hour.strftime("%I:%M %p"), count=count))

        return AttendanceMetrics(
            checked_in=checked_in,
            average_duration=math.floor(duration * self._uniform(0.7, 1.0)),
            peak_attendance=max((p.count for p in peaks), default=0),
            no_show_rate=no_show_rate,
            check_in_timestamps=check_ins,
            attendance_peaks=peaks,
        )

    # --- On-chain ---

    def onchain(self, event: Event, attendance: AttendanceMetrics) -> OnChainMetrics:
        attendees = attendance.checked_in or event.registered_count

        new_wallets = math.floor(attendees * self._uniform(0.15, 0.25))
        reactivated = math.floor(attendees * self._uniform(0.05, 0.15))
        total_active = math.floor(attendees * self._uniform(0.7, 0.9))
        addresses = [
            generate_wallet_address(self.rng)
            for _ in range(min(total_active, self.max_wallet_sample))
        ]

        total_tx = math.floor(attendees * self._uniform(2, 5))
        volume = total_tx * self._uniform(0.5, 2.5)
        gas = total_tx * self._uniform(0.001, 0.003)
        types = TransactionTypes(
            transfers=math.floor(total_tx * self._uniform(0.4, 0.6)),
            swaps=math.floor(total_tx * self._uniform(0.3, 0.5)),
            contracts=math.floor(total_tx * self._uniform(0.2, 0.4)),
        )

        poaps = math.floor(attendees * self._uniform(0.6, 0.8))
        certificates = math.floor(attendees * self._uniform(0.2, 0.3))
        collectibles = math.floor(attendees * self._uniform(0.1, 0.2))
        total_minted = poaps + certificates + collectibles

        claimed = math.floor(attendees * self._uniform(0.7, 0.9))

        return OnChainMetrics(
            wallets=WalletMetrics(
                new_created=new_wallets,
                reactivated=reactivated,
                total_active=total_active,
                addresses=addresses,
            ),
            transactions=TransactionMetrics(
                total=total_tx,
                average_per_wallet=safe_ratio(total_tx, total_active),
                total_volume=round(volume, 2),
                gas_spent=round(gas, 4),
                types=types,
            ),
            nfts=NFTMetrics(
                poaps=poaps,
                certificates=certificates,
                collectibles=collectibles,
                total_minted=total_minted,
                claim_rate=clamp_unit(safe_ratio(total_minted, attendees)),
            ),
            airdrops=AirdropMetrics(
                distributed=attendees,
                claimed=claimed,
                claim_rate=clamp_unit(safe_ratio(claimed, attendees)),
            ),
        )

    # --- Social ---

    def social(self, event: Event, registration: RegistrationMetrics) -> SocialMetrics:
        base_engagement = registration.total * self._uniform(1.5, 2.5)

        mentions = math.floor(base_engagement * self._uniform(0.3, 0.5))
        shares = event.share_count or math.floor(registration.total * 0.15)
        hashtag_usage = math.floor(mentions * self._uniform(0.6, 0.9))

        positive = self._uniform(0.6, 0.8)
        negative = self._uniform(0.05, 0.15)
        neutral = 1 - positive - negative

        top_posts = [
            TopPost(
                platform=platform,
                engagement=math.floor(100 + self.rng.random() * 500),
                text=f"Great experience at {event.name}! #blockchain #web3",
            )
            for platform in SOCIAL_PLATFORMS[:MAX_TOP_POSTS]
        ]

        return SocialMetrics(
            mentions=mentions,
            shares=shares,
            hashtag_usage=hashtag_usage,
            sentiment=SentimentBreakdown(
                positive=math.floor(mentions * positive),
                neutral=math.floor(mentions * neutral),
                negative=math.floor(mentions * negative),
            ),
            estimated_reach=math.floor(base_engagement * self._uniform(10, 30)),
            top_posts=top_posts,
        )

    # --- Comparison ---

    def comparison(self, event: Event) -> ComparisonMetrics:
        multiplier = EVENT_TYPE_MULTIPLIERS.get(event.event_type, 1.0)
        event_type = event.event_type.value

        similar_events = [
            SimilarEvent(
                event_name=f"{event_type} {suffix}",
                registrations=math.floor(event.max_capacity * reg_factor * multiplier),
                attendance=math.floor(event.max_capacity * att_factor * multiplier),
                onchain_activity=math.floor(onchain_base * multiplier),
            )
            for suffix, reg_factor, att_factor, onchain_base in SIMILAR_EVENT_PROFILES
        ]

        count = len(similar_events)
        averages = ComparisonAverages(
            registrations=math.floor(sum(e.registrations for e in similar_events) / count),
            attendance=math.floor(sum(e.attendance for e in similar_events) / count),
            conversion_rate=0.75,
            social_engagement=math.floor(250 * multiplier),
        )

        return ComparisonMetrics(
            similar_events=similar_events,
            averages=averages,
            percentile=math.floor(50 + self.rng.random() * 45),
        )

    # --- Complete snapshot ---

    def synthesize(self, event: Event, current_time: datetime) -> EventMetrics:
        """
        Generate the complete metrics snapshot for an event.

        Args:
            event: The event to synthesize metrics for
            current_time: The moment the snapshot describes

        Returns:
            EventMetrics with every sub-record populated
        """
        registration = self.registration(event, current_time)
        attendance = self.attendance(event, registration, current_time)
        onchain = self.onchain(event, attendance)
        social = self.social(event, registration)
        comparison = self.comparison(event)

        logger.debug(
            f"Synthesized metrics for {event.id}: "
            f"registrations={registration.total} checked_in={attendance.checked_in} "
            f"transactions={onchain.transactions.total} mentions={social.mentions}"
        )

        return EventMetrics(
            event_id=event.id,
            event_name=event.name,
            registration=registration,
            attendance=attendance,
            onchain=onchain,
            social=social,
            last_updated=current_time,
            comparison_data=comparison,
        )


def generate_complete_metrics(
    event: Event,
    current_time: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> EventMetrics:
    """Convenience wrapper around MetricsSynthesizer.synthesize."""
    if current_time is None:
        current_time = datetime.now(timezone.utc)
    return MetricsSynthesizer(rng=rng).synthesize(event, current_time)


def is_event_active(event: Event, current_time: datetime) -> bool:
    return event.start_date <= current_time <= event.end_date


# --- Realtime updates ---


def generate_metrics_update(
    current: EventMetrics,
    category: MetricCategory,
    rng: Optional[random.Random] = None,
    timestamp: Optional[datetime] = None,
) -> MetricsUpdate:
    """
    Simulate a small realtime change for one metric category.

    Returns a delta descriptor; merging it is up to the caller
    (see apply_metrics_update).
    """
    rng = rng or random.Random()
    try:
        category = MetricCategory(category)
    except ValueError:
        raise InvalidMetricCategoryError(str(category))

    increment = rng.randrange(UPDATE_INCREMENTS[category])

    if category == MetricCategory.REGISTRATION:
        changes = {
            "new_registrations": increment,
            "total": current.registration.total + increment,
        }
    elif category == MetricCategory.ATTENDANCE:
        changes = {
            "new_check_ins": increment,
            "checked_in": current.attendance.checked_in + increment,
        }
    elif category == MetricCategory.ONCHAIN:
        changes = {
            "new_transactions": increment,
            "total": current.onchain.transactions.total + increment,
        }
    else:
        changes = {
            "new_mentions": increment,
            "mentions": current.social.mentions + increment,
        }

    return MetricsUpdate(
        category=category,
        changes=changes,
        timestamp=timestamp or datetime.now(timezone.utc),
    )


def apply_metrics_update(metrics: EventMetrics, update: MetricsUpdate) -> EventMetrics:
    """Merge the absolute value carried by an update into a copy of `metrics`."""
    updated = metrics.model_copy(deep=True)
    changes = update.changes

    if update.category == MetricCategory.REGISTRATION and "total" in changes:
        updated.registration.total = changes["total"]
    elif update.category == MetricCategory.ATTENDANCE and "checked_in" in changes:
        updated.attendance.checked_in = changes["checked_in"]
    elif update.category == MetricCategory.ONCHAIN and "total" in changes:
        updated.onchain.transactions.total = changes["total"]
    elif update.category == MetricCategory.SOCIAL and "mentions" in changes:
        updated.social.mentions = changes["mentions"]
    else:
        return metrics

    updated.last_updated = update.timestamp
    return updated


def apply_metrics_updates(
    metrics: EventMetrics, updates: Iterable[MetricsUpdate]
) -> EventMetrics:
    for update in updates:
        metrics = apply_metrics_update(metrics, update)
    return metrics


# --- Projections ---


def summarize_metrics(metrics: EventMetrics) -> MetricsSummary:
    """Headline numbers for dashboard cards."""
    return MetricsSummary(
        total_registrations=metrics.registration.total,
        total_attendance=metrics.attendance.checked_in,
        conversion_rate=metrics.registration.conversion_rate,
        total_transactions=metrics.onchain.transactions.total,
        total_wallets=metrics.onchain.wallets.total_active,
        social_engagement=metrics.social.mentions + metrics.social.shares,
        last_updated=metrics.last_updated,
    )


def filter_metrics(
    metrics: EventMetrics, categories: Iterable[MetricCategory]
) -> dict:
    """JSON-ready projection keeping only the selected category sub-records."""
    selected = {MetricCategory(c).value for c in categories}
    keep = {"event_id", "event_name", "last_updated"} | selected
    return metrics.model_dump(mode="json", include=keep)
