# metrycs/features/events/router.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from metrycs.features.events.repository import EventRepository, get_event_repository
from metrycs.features.events.schemas import EventDetailResponse, EventListResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["Events"])


@router.get("", response_model=EventListResponse, summary="List events")
def list_events(
    organization_id: Optional[str] = Query(None, description="Only this organization's events"),
    repository: EventRepository = Depends(get_event_repository),
) -> EventListResponse:
    events = repository.list_events(organization_id)
    logger.debug(f"Listing {len(events)} events (organization={organization_id})")
    return EventListResponse(events=events)


@router.get("/{event_id}", response_model=EventDetailResponse, summary="Get event")
def get_event(
    event_id: str,
    repository: EventRepository = Depends(get_event_repository),
) -> EventDetailResponse:
    return EventDetailResponse(event=repository.get(event_id))
