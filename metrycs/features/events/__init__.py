"""Event catalogue feature module."""

from metrycs.features.events.repository import (
    EventRepository,
    build_sample_events,
    generate_event_code,
    get_event_repository,
)
from metrycs.features.events.router import router
from metrycs.features.events.schemas import Event, EventSummary, EventType

__all__ = [
    "router",
    "Event",
    "EventSummary",
    "EventType",
    "EventRepository",
    "build_sample_events",
    "generate_event_code",
    "get_event_repository",
]
