"""Pytest configuration and fixtures for travila.

Content fixtures are small, hand-built documents so each test states the
data it relies on. HTTP tests run against travila.main:app with the content
repository dependency overridden.
"""

from typing import Any, AsyncIterator, Dict, List, Optional, Sequence

import pytest
from httpx import ASGITransport, AsyncClient

from travila.api.dependencies import get_content_repository
from travila.main import app
from travila.models.content import Activity, Car, ContentType, Hotel, Ticket, Tour
from travila.repositories.base import ContentStoreError
from travila.repositories.criteria import Criterion, SortKey
from travila.repositories.memory import InMemoryContentRepository


def make_tour(_id: str = "t1", **overrides: Any) -> Tour:
    doc: Dict[str, Any] = {
        "_id": _id,
        "title": "Paris Highlights",
        "location": "Paris, France",
        "category": "City",
        "description": "Walk the Seine.",
        "price": {"amount": 50, "currency": "USD", "per": "person"},
        "rating": {"score": 4.0, "reviews": 10},
        "availability": True,
    }
    doc.update(overrides)
    return Tour.model_validate(doc)


def make_hotel(_id: str = "h1", **overrides: Any) -> Hotel:
    doc: Dict[str, Any] = {
        "_id": _id,
        "name": "Grand Hotel",
        "location": {"city": "Rome", "country": "Italy"},
        "price": {"perNight": 200, "currency": "USD"},
        "rating": {"score": 4.0, "reviews": 10},
        "amenities": ["Pool"],
        "availability": True,
    }
    doc.update(overrides)
    return Hotel.model_validate(doc)


def make_car(_id: str = "c1", **overrides: Any) -> Car:
    doc: Dict[str, Any] = {
        "_id": _id,
        "brand": "Toyota",
        "model": "Corolla",
        "year": 2022,
        "location": {"city": "Lisbon", "country": "Portugal"},
        "price": {"amount": 40, "currency": "USD", "per": "day"},
        "rating": {"score": 4.0, "reviews": 10},
        "features": ["GPS"],
        "availability": True,
    }
    doc.update(overrides)
    return Car.model_validate(doc)


def make_activity(_id: str = "a1", **overrides: Any) -> Activity:
    doc: Dict[str, Any] = {
        "_id": _id,
        "title": "Cooking Class",
        "category": "Food",
        "location": {"city": "Florence", "country": "Italy"},
        "description": "Fresh pasta from scratch.",
        "price": {"amount": 80, "currency": "EUR", "per": "person"},
        "rating": {"score": 4.0, "reviews": 10},
        "availability": True,
    }
    doc.update(overrides)
    return Activity.model_validate(doc)


def make_ticket(_id: str = "k1", **overrides: Any) -> Ticket:
    doc: Dict[str, Any] = {
        "_id": _id,
        "type": "train",
        "departure": {"location": "London", "dateTime": "2026-05-01T08:00:00Z"},
        "arrival": {"location": "Brussels", "dateTime": "2026-05-01T10:00:00Z"},
        "provider": {"name": "Eurostar"},
        "class": "Standard",
        "price": {"amount": 70, "currency": "GBP"},
        "isAvailable": True,
    }
    doc.update(overrides)
    return Ticket.model_validate(doc)


class RecordingRepository(InMemoryContentRepository):
    """In-memory repository that records reads and can fail chosen collections."""

    def __init__(self, items=None, failing: Sequence[ContentType] = ()):
        super().__init__(items)
        self.failing = set(failing)
        self.calls: List[ContentType] = []

    async def find(
        self,
        content_type: ContentType,
        criterion: Optional[Criterion] = None,
        sort: Sequence[SortKey] = (),
        limit: Optional[int] = None,
    ):
        self.calls.append(content_type)
        if content_type in self.failing:
            raise ContentStoreError(content_type, "connection reset")
        return await super().find(content_type, criterion, sort=sort, limit=limit)


@pytest.fixture
def repository() -> RecordingRepository:
    return RecordingRepository(
        [
            make_tour("t1", title="Paris Highlights", rating={"score": 4.2}),
            make_tour("t2", title="Beach Yoga Retreat", location="Goa, India",
                      category="Wellness", rating={"score": 4.8}),
            make_hotel("h1", name="Sunset Beach Hotel",
                       location={"city": "Nice", "country": "France"},
                       rating={"score": 4.1}),
            make_hotel("h2", name="Harbour Inn",
                       location={"city": "Sydney", "country": "Australia"},
                       amenities=["Pool", "Beach access"], rating={"score": 4.7}),
            make_hotel("h3", name="Closed Beach Lodge", availability=False,
                       rating={"score": 5.0}),
            make_car("c1"),
            make_activity("a1"),
            make_ticket("k1"),
        ]
    )


@pytest.fixture
async def client(repository: RecordingRepository) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app with the test repository."""
    app.dependency_overrides[get_content_repository] = lambda: repository
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
