"""Tests for the search widget wiring: submit, fallback and suggestions."""

import asyncio
from datetime import date
from unittest.mock import AsyncMock, Mock

import aiohttp
import pytest

from travila.models.content import ContentType
from travila.models.search import Suggestion
from travila.web.client import ApiClientError
from travila.web.form import DEFAULT_LOCATIONS, Dropdown, SearchFormState
from travila.web.renderer import ClickableItem
from travila.web.widget import NO_RESULTS_MESSAGE, SearchWidget
from tests.conftest import make_hotel, make_tour


def hotel_payload(_id: str, name: str) -> dict:
    return make_hotel(_id, name=name).model_dump(by_alias=True, mode="json")


@pytest.fixture
def api() -> Mock:
    client = Mock()
    client.search = AsyncMock()
    client.get_search_filters = AsyncMock()
    client.suggestion_list = AsyncMock(return_value=[])
    return client


@pytest.fixture
def view_item() -> Mock:
    return Mock()


@pytest.fixture
def widget(api: Mock, view_item: Mock) -> SearchWidget:
    form = SearchFormState(today=lambda: date(2026, 3, 10))
    return SearchWidget(api, view_item, form=form)


class TestSubmit:
    async def test_submit_sends_location_and_tab(self, widget: SearchWidget, api: Mock) -> None:
        api.search.return_value = {"success": True, "data": {"results": {}}}
        widget.form.switch_tab("hotels")
        widget.form.select_location("Paris, France")

        await widget.submit()

        api.search.assert_awaited_once_with("Paris, France", ["hotels"], 20)

    async def test_results_render_and_route_clicks(
        self, widget: SearchWidget, api: Mock, view_item: Mock
    ) -> None:
        api.search.return_value = {
            "success": True,
            "data": {"results": {"hotels": [hotel_payload("h9", "Harbour Inn")]}},
        }

        await widget.submit()

        assert widget.results.visible
        assert "Harbour Inn" in widget.results.html
        widget.results.click(ClickableItem("h9", ContentType.HOTELS))
        view_item.assert_called_once_with("h9", "hotels")

    async def test_empty_results_message(self, widget: SearchWidget, api: Mock) -> None:
        api.search.return_value = {"success": True, "data": {"results": {"tours": []}}}

        await widget.submit()

        assert "No results found. Try different search terms." in widget.results.html

    async def test_unsuccessful_response_shows_error(self, widget: SearchWidget, api: Mock) -> None:
        api.search.return_value = {"success": False, "message": "Search query must be at least 2 characters long"}

        await widget.submit()

        assert NO_RESULTS_MESSAGE in widget.results.html
        assert widget.results.items == []

    @pytest.mark.parametrize(
        "error", [ApiClientError("down", status=503), aiohttp.ClientConnectionError("refused")]
    )
    async def test_unreachable_api_falls_back_to_samples(
        self, widget: SearchWidget, api: Mock, error: Exception
    ) -> None:
        api.search.side_effect = error
        widget.form.switch_tab("cars")

        await widget.submit()

        assert widget.results.visible
        assert "BMW 3 Series" in widget.results.html
        assert {item.type for item in widget.results.items} == {ContentType.CARS}

    async def test_tab_without_samples_falls_back_to_tours(
        self, widget: SearchWidget, api: Mock
    ) -> None:
        api.search.side_effect = ApiClientError("down")
        widget.form.switch_tab("tickets")

        await widget.submit()

        assert "California Sunset Cruise" in widget.results.html

    async def test_last_response_to_resolve_wins(self, widget: SearchWidget, api: Mock) -> None:
        release = {"first": asyncio.Event(), "second": asyncio.Event()}
        payloads = {
            "first": {"tours": [make_tour("t-first", title="First Tour").model_dump(by_alias=True, mode="json")]},
            "second": {"tours": [make_tour("t-second", title="Second Tour").model_dump(by_alias=True, mode="json")]},
        }
        calls = []

        async def search(query, types, limit):
            name = "first" if not calls else "second"
            calls.append(name)
            await release[name].wait()
            return {"success": True, "data": {"results": payloads[name]}}

        api.search.side_effect = search

        first = asyncio.create_task(widget.submit())
        await asyncio.sleep(0)
        second = asyncio.create_task(widget.submit())
        await asyncio.sleep(0)

        release["second"].set()
        await second
        assert "Second Tour" in widget.results.html

        release["first"].set()
        await first
        assert "First Tour" in widget.results.html
        assert widget.results.items == [ClickableItem("t-first", ContentType.TOURS)]


class TestLocations:
    async def test_locations_loaded_from_hotel_cities(self, widget: SearchWidget, api: Mock) -> None:
        api.get_search_filters.return_value = {
            "success": True,
            "data": {"filters": {"hotelCities": ["Nice", "Sydney"]}},
        }

        await widget.load_locations()

        assert widget.form.locations == ["Nice", "Sydney"]

    async def test_defaults_kept_when_filters_fail(self, widget: SearchWidget, api: Mock) -> None:
        api.get_search_filters.side_effect = ApiClientError("down", status=500)

        await widget.load_locations()

        assert widget.form.locations == DEFAULT_LOCATIONS


class TestSuggestions:
    async def test_show_and_select_suggestion(self, widget: SearchWidget, api: Mock) -> None:
        api.suggestion_list.return_value = [
            {"type": "hotel", "text": "Harbour Inn", "subtitle": "Sydney, Australia"}
        ]

        suggestions = await widget.show_suggestions("harb")

        assert suggestions == [
            Suggestion(type="hotel", text="Harbour Inn", subtitle="Sydney, Australia")
        ]
        assert "Harbour Inn" in widget.suggestions_html

        widget.form.open_dropdown(Dropdown.LOCATION)
        widget.select_suggestion(suggestions[0])
        assert widget.form.location_label == "Harbour Inn"
        assert widget.form.is_idle
        assert widget.suggestions_html == ""

    async def test_failure_gives_empty_dropdown(self, widget: SearchWidget, api: Mock) -> None:
        api.suggestion_list.side_effect = ApiClientError("down")

        assert await widget.show_suggestions("harb") == []
        assert widget.suggestions_html == ""

    def test_render_search_box(self, widget: SearchWidget) -> None:
        html = widget.render()
        assert "Where are you going?" in html
        assert 'data-tab="tours"' in html
