# metrycs/features/events/repository.py
"""
In-memory event catalogue.

Holds the events the metrics endpoints read from. Nothing is persisted; the
catalogue is seeded with sample events on startup.
"""

import logging
import random
from datetime import datetime, timedelta
from typing import Optional

from metrycs.core.exceptions import EventNotFoundError
from metrycs.features.events.schemas import (
    Event,
    EventStatus,
    EventType,
    LocationType,
    PriceType,
)

logger = logging.getLogger(__name__)

# Organization prefix mapping for event codes
ORG_PREFIXES = {
    "org_team1": "TM1",
    "org_avax_col": "AVC",
    "org_cryptostartup": "CSI",
    "org_blockchain_uni": "BUN",
    "org_defi_corp": "DFC",
    "org_web3_innovators": "W3H",
}

SAMPLE_EVENTS = [
    {
        "name": "Avalanche Developer Workshop",
        "event_type": EventType.WORKSHOP,
        "description": "Hands-on workshop for developers building on Avalanche. Learn about subnets, smart contracts, and dApp development.",
        "location_type": LocationType.IN_PERSON,
        "address": "Parque Lleras, Medellín, Colombia",
        "max_capacity": 50,
        "registered_count": 45,
        "interested_count": 78,
        "view_count": 234,
        "share_count": 12,
    },
    {
        "name": "Blockchain Meetup Medellín",
        "event_type": EventType.MEETUP,
        "description": "Monthly blockchain meetup for enthusiasts and professionals. Network, learn, and share experiences.",
        "location_type": LocationType.HYBRID,
        "address": "Ruta N, Medellín, Colombia",
        "virtual_link": "https://meet.google.com/abc-defg-hij",
        "max_capacity": 150,
        "registered_count": 120,
        "interested_count": 203,
        "view_count": 567,
        "share_count": 34,
    },
    {
        "name": "Web3 Hackathon 2025",
        "event_type": EventType.HACKATHON,
        "description": "48-hour hackathon focused on building innovative Web3 solutions. Prizes and mentorship included.",
        "location_type": LocationType.IN_PERSON,
        "address": "Universidad EAFIT, Medellín, Colombia",
        "max_capacity": 100,
        "registered_count": 87,
        "interested_count": 156,
        "view_count": 892,
        "share_count": 67,
    },
    {
        "name": "DeFi Conference Colombia",
        "event_type": EventType.CONFERENCE,
        "description": "Two-day conference exploring the future of decentralized finance in Latin America.",
        "location_type": LocationType.IN_PERSON,
        "address": "Plaza Mayor, Medellín, Colombia",
        "max_capacity": 500,
        "registered_count": 423,
        "interested_count": 678,
        "view_count": 1456,
        "share_count": 123,
    },
    {
        "name": "Smart Contracts 101 Webinar",
        "event_type": EventType.WEBINAR,
        "description": "Introduction to smart contract development. Perfect for beginners.",
        "location_type": LocationType.VIRTUAL,
        "virtual_link": "https://zoom.us/j/123456789",
        "max_capacity": 200,
        "registered_count": 178,
        "interested_count": 245,
        "view_count": 456,
        "share_count": 23,
    },
]


def generate_event_code(organization_id: str, year: int, rng: random.Random) -> str:
    """
    Generate an event code.

    Format: {ORG_PREFIX}{YEAR}-{NUMBER}, e.g. AVC2025-001
    """
    prefix = ORG_PREFIXES.get(organization_id, "EVT")
    number = rng.randint(1, 999)
    return f"{prefix}{year}-{number:03d}"


def _add_month(moment: datetime) -> datetime:
    """Same day next month, clamped to 28 for short months."""
    year = moment.year + moment.month // 12
    month = moment.month % 12 + 1
    return moment.replace(year=year, month=month, day=min(moment.day, 28))


def build_sample_events(
    organization_id: str,
    creator_id: str,
    now: datetime,
    rng: random.Random,
) -> list[Event]:
    """
    Build the demo catalogue: the first three sample events, starting tomorrow,
    next week and next month, each three hours long.
    """
    starts = [now + timedelta(days=1), now + timedelta(days=7), _add_month(now)]
    stamp = int(now.timestamp() * 1000)

    events = []
    for index, (sample, start) in enumerate(zip(SAMPLE_EVENTS[:3], starts)):
        events.append(
            Event(
                id=f"evt_sample_{index}_{stamp}",
                event_code=generate_event_code(organization_id, now.year, rng),
                organization_id=organization_id,
                creator_id=creator_id,
                start_date=start,
                end_date=start + timedelta(hours=3),
                price_type=PriceType.FREE,
                price_amount=0,
                status=EventStatus.PUBLISHED,
                tags=["blockchain", "crypto", "web3"],
                created_at=now - timedelta(days=30 - index * 10),
                updated_at=now,
                **sample,
            )
        )
    return events


class EventRepository:
    """Dict-backed event store keyed by event id."""

    def __init__(self):
        self._events: dict[str, Event] = {}

    def add(self, event: Event) -> Event:
        self._events[event.id] = event
        return event

    def add_many(self, events: list[Event]) -> None:
        for event in events:
            self.add(event)

    def get(self, event_id: str) -> Event:
        """
        Look up an event by id.

        Raises:
            EventNotFoundError: If no event with that id exists
        """
        event = self._events.get(event_id)
        if event is None:
            logger.info(f"Event {event_id} not found in catalogue")
            raise EventNotFoundError(event_id)
        return event

    def list_events(self, organization_id: Optional[str] = None) -> list[Event]:
        events = list(self._events.values())
        if organization_id:
            events = [e for e in events if e.organization_id == organization_id]
        return events

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)


_repository: Optional[EventRepository] = None


def get_event_repository() -> EventRepository:
    """Get or create the event repository singleton."""
    global _repository
    if _repository is None:
        _repository = EventRepository()
    return _repository
