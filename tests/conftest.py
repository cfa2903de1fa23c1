import random
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from metrycs.core.runtime import get_current_time, get_rng
from metrycs.features.events.repository import EventRepository, get_event_repository
from metrycs.features.events.schemas import Event, EventStatus, EventType
from metrycs.main import app

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def make_event():
    """Factory for catalogue events relative to NOW."""

    def _make(
        event_id: str = "evt_test",
        event_type: EventType = EventType.WORKSHOP,
        max_capacity: int = 100,
        created_days_ago: int = 40,
        starts_in: timedelta = timedelta(days=10),
        duration: timedelta = timedelta(hours=3),
        **overrides,
    ) -> Event:
        start = NOW + starts_in
        fields = dict(
            id=event_id,
            event_code="AVC2025-042",
            organization_id="org_avax_col",
            creator_id="user_demo",
            name="Avalanche Developer Workshop",
            event_type=event_type,
            start_date=start,
            end_date=start + duration,
            max_capacity=max_capacity,
            registered_count=45,
            share_count=12,
            status=EventStatus.PUBLISHED,
            created_at=NOW - timedelta(days=created_days_ago),
            updated_at=NOW,
        )
        fields.update(overrides)
        return Event(**fields)

    return _make


@pytest.fixture
def upcoming_event(make_event) -> Event:
    return make_event(event_id="evt_upcoming")


@pytest.fixture
def past_event(make_event) -> Event:
    return make_event(event_id="evt_past", starts_in=-timedelta(days=5))


@pytest.fixture
def live_event(make_event) -> Event:
    return make_event(event_id="evt_live", starts_in=-timedelta(hours=1))


@pytest.fixture
def repository(upcoming_event, past_event, live_event) -> EventRepository:
    repo = EventRepository()
    repo.add_many([upcoming_event, past_event, live_event])
    return repo


@pytest.fixture
def client(repository) -> TestClient:
    """
    A test client whose catalogue, random source and clock are pinned.
    """
    app.dependency_overrides[get_event_repository] = lambda: repository
    app.dependency_overrides[get_rng] = lambda: random.Random(42)
    app.dependency_overrides[get_current_time] = lambda: NOW
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
