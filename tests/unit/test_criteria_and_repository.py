"""Tests for filter criteria, sorting and the in-memory content repository."""

import json
from datetime import datetime, timezone

import pytest

from travila.models.content import ContentType
from travila.repositories.criteria import (
    AllOf,
    Contains,
    Equals,
    SortKey,
    any_contains,
    resolve_path,
    sort_documents,
)
from travila.repositories.base import ContentStoreError
from travila.repositories.memory import InMemoryContentRepository
from tests.conftest import make_car, make_hotel, make_ticket


class TestCriteria:
    def test_resolve_nested_path(self) -> None:
        doc = {"location": {"city": "Paris"}}
        assert resolve_path(doc, "location.city") == "Paris"

    def test_contains_is_case_insensitive(self) -> None:
        assert Contains("name", "BEACH").matches({"name": "Sunset beach hotel"})
        assert not Contains("name", "beach").matches({"name": "Harbour Inn"})

    def test_contains_matches_any_list_element(self) -> None:
        doc = {"amenities": ["Pool", "Beach access"]}
        assert Contains("amenities", "beach").matches(doc)
        assert not Contains("amenities", "spa").matches(doc)

    def test_contains_ignores_missing_and_non_string_values(self) -> None:
        assert not Contains("location.city", "x").matches({"location": "x"})
        assert not Contains("year", "20").matches({"year": 2020})

    def test_text_is_not_a_regular_expression(self) -> None:
        assert not Contains("title", "a.c").matches({"title": "abc"})
        assert Contains("title", "a.c").matches({"title": "a.c tour"})

    def test_all_of_any_of(self) -> None:
        criterion = AllOf((Equals("availability", True), any_contains(["a", "b"], "x")))
        assert criterion.matches({"availability": True, "a": "", "b": "xyz"})
        assert not criterion.matches({"availability": False, "a": "x", "b": ""})
        assert not criterion.matches({"availability": True, "a": "", "b": ""})


class TestSortDocuments:
    def test_multi_key_descending(self) -> None:
        docs = [
            {"id": 1, "rating": {"score": 4.0}, "year": 2020},
            {"id": 2, "rating": {"score": 4.5}, "year": 2019},
            {"id": 3, "rating": {"score": 4.0}, "year": 2023},
        ]
        ordered = sort_documents(
            docs, [SortKey("rating.score", descending=True), SortKey("year", descending=True)]
        )
        assert [d["id"] for d in ordered] == [2, 3, 1]

    def test_missing_values_sort_last_when_descending(self) -> None:
        docs = [{"id": 1}, {"id": 2, "score": 3}]
        assert [d["id"] for d in sort_documents(docs, [SortKey("score", True)])] == [2, 1]
        assert [d["id"] for d in sort_documents(docs, [SortKey("score")])] == [1, 2]

    def test_ascending_datetimes(self) -> None:
        late = datetime(2026, 5, 2, tzinfo=timezone.utc)
        early = datetime(2026, 5, 1, tzinfo=timezone.utc)
        docs = [{"id": "late", "at": late}, {"id": "early", "at": early}]
        assert [d["id"] for d in sort_documents(docs, [SortKey("at")])] == ["early", "late"]


class TestInMemoryContentRepository:
    async def test_find_filters_sorts_and_limits(self) -> None:
        repo = InMemoryContentRepository(
            [
                make_hotel("h1", rating={"score": 3.0}),
                make_hotel("h2", rating={"score": 5.0}),
                make_hotel("h3", rating={"score": 4.0}),
            ]
        )
        items = await repo.find(
            ContentType.HOTELS,
            Equals("availability", True),
            sort=[SortKey("rating.score", descending=True)],
            limit=2,
        )
        assert [item.id for item in items] == ["h2", "h3"]

    async def test_criteria_use_wire_field_names(self) -> None:
        repo = InMemoryContentRepository([make_ticket("k1", isAvailable=False), make_ticket("k2")])
        items = await repo.find(ContentType.TICKETS, Equals("isAvailable", True))
        assert [item.id for item in items] == ["k2"]

    async def test_distinct_values(self) -> None:
        repo = InMemoryContentRepository(
            [make_car("c1", brand="BMW"), make_car("c2", brand="Audi"), make_car("c3", brand="BMW")]
        )
        assert await repo.distinct(ContentType.CARS, "brand") == ["BMW", "Audi"]

    async def test_from_json_file_skips_invalid_documents(self, tmp_path) -> None:
        seed = {
            "hotels": [
                {
                    "_id": "ok",
                    "name": "Fine Hotel",
                    "location": {"city": "Oslo", "country": "Norway"},
                    "price": {"perNight": 100},
                },
                {"_id": "broken", "name": "No Price Hotel"},
            ],
            "spaceships": [{"_id": "x"}],
        }
        path = tmp_path / "seed.json"
        path.write_text(json.dumps(seed), encoding="utf-8")

        repo = InMemoryContentRepository.from_json_file(str(path))
        assert repo.count(ContentType.HOTELS) == 1
        assert [item.id for item in await repo.find(ContentType.HOTELS)] == ["ok"]

    @pytest.mark.parametrize("content_type", list(ContentType))
    async def test_bundled_seed_loads_every_collection(self, content_type) -> None:
        from travila.core.settings import DEFAULT_SEED_PATH

        repo = InMemoryContentRepository.from_json_file(DEFAULT_SEED_PATH)
        assert repo.count(content_type) >= 3

    async def test_incomparable_sort_values_raise_store_error(self) -> None:
        repo = InMemoryContentRepository(
            [make_ticket("k1", platform="A1"), make_ticket("k2", platform=7)]
        )
        with pytest.raises(ContentStoreError):
            await repo.find(ContentType.TICKETS, sort=[SortKey("platform")])

    def test_naive_ticket_times_are_stored_as_utc(self) -> None:
        ticket = make_ticket(
            "k1", departure={"location": "London", "dateTime": "2026-05-02T08:00:00"}
        )
        assert ticket.departure.date_time == datetime(2026, 5, 2, 8, tzinfo=timezone.utc)
