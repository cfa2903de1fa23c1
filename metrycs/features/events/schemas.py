# metrycs/features/events/schemas.py
"""
Pydantic schemas for the event catalogue.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class EventType(str, Enum):
    WORKSHOP = "workshop"
    MEETUP = "meetup"
    HACKATHON = "hackathon"
    CONFERENCE = "conference"
    WEBINAR = "webinar"
    NETWORKING = "networking"


class LocationType(str, Enum):
    IN_PERSON = "in-person"
    VIRTUAL = "virtual"
    HYBRID = "hybrid"


class PriceType(str, Enum):
    FREE = "free"
    PAID = "paid"


class EventStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ACTIVE = "active"
    FINISHED = "finished"


class Event(BaseModel):
    """An event as stored in the catalogue. Read-only input to metrics synthesis."""

    id: str
    event_code: str
    organization_id: str
    creator_id: str
    name: str
    description: str = ""
    event_type: EventType
    start_date: datetime
    end_date: datetime
    location_type: LocationType = LocationType.IN_PERSON
    address: Optional[str] = None
    virtual_link: Optional[str] = None
    max_capacity: int = Field(0, ge=0)
    price_type: PriceType = PriceType.FREE
    price_amount: float = 0.0
    status: EventStatus = EventStatus.DRAFT
    tags: list[str] = Field(default_factory=list)
    special_requirements: Optional[str] = None

    # Engagement counters tracked by the catalogue
    registered_count: int = Field(0, ge=0)
    interested_count: int = Field(0, ge=0)
    view_count: int = Field(0, ge=0)
    share_count: int = Field(0, ge=0)

    created_at: datetime
    updated_at: datetime

    @property
    def duration_minutes(self) -> float:
        return (self.end_date - self.start_date).total_seconds() / 60


class EventSummary(BaseModel):
    """Compact event descriptor returned alongside metrics payloads."""

    id: str
    name: str
    event_code: str
    status: EventStatus
    event_type: EventType

    @classmethod
    def from_event(cls, event: Event) -> "EventSummary":
        return cls(
            id=event.id,
            name=event.name,
            event_code=event.event_code,
            status=event.status,
            event_type=event.event_type,
        )


class EventListResponse(BaseModel):
    success: bool = True
    events: list[Event]


class EventDetailResponse(BaseModel):
    success: bool = True
    event: Event
