from typing import Any, Callable, Dict, List, Optional
import logging
import aiohttp

from travila.models.search import Suggestion
from travila.web.client import ApiClientError, TravilaApiClient
from travila.web.form import SearchFormState
from travila.web.renderer import (
    ResultsPanel,
    SearchRenderer,
    cards_from_payload,
)
from travila.web.samples import sample_results_for

logger = logging.getLogger(__name__)

NO_RESULTS_MESSAGE = "No results found for your search."


class SearchWidget:
    """One mounted search box: form state, results modal and suggestion dropdown.

    Collaborators are passed in explicitly. Searches are neither serialized nor
    cancelled: whichever response finishes last is the one left on the panel.
    """

    def __init__(
        self,
        client: TravilaApiClient,
        view_item: Callable[[str, str], Any],
        renderer: Optional[SearchRenderer] = None,
        form: Optional[SearchFormState] = None,
    ):
        self.client = client
        self.renderer = renderer or SearchRenderer()
        self.form = form or SearchFormState()
        self.results = ResultsPanel(view_item)
        self.suggestions: List[Suggestion] = []
        self.suggestions_html = ""

    async def load_locations(self) -> None:
        """Replace the location options with the hotel cities the API knows about."""
        try:
            data = await self.client.get_search_filters()
        except (ApiClientError, aiohttp.ClientError) as e:
            logger.warning(f"Keeping default locations, filters unavailable: {e}")
            return
        cities = data.get("data", {}).get("filters", {}).get("hotelCities") or []
        if data.get("success") and cities:
            self.form.locations = list(cities)

    async def submit(self) -> None:
        request = self.form.to_search_request()
        logger.info(f"Performing search: {self.form.snapshot()}")
        try:
            data = await self.client.search(request.query, request.types, request.limit)
        except (ApiClientError, aiohttp.ClientError) as e:
            logger.error(f"Search request failed, showing sample results: {e}")
            self._show_results(sample_results_for(self.form.current_tab))
            return

        if data.get("success"):
            self._show_results(data.get("data", {}).get("results", {}))
        else:
            self.results.show_message(self.renderer.render_error(NO_RESULTS_MESSAGE))

    def _show_results(self, results: Dict[str, List[Dict[str, Any]]]) -> None:
        rendered = self.renderer.render_results(cards_from_payload(results))
        self.results.show(rendered)

    async def show_suggestions(self, text: str, limit: int = 5) -> List[Suggestion]:
        try:
            raw = await self.client.suggestion_list(text, limit)
            suggestions = [Suggestion(**entry) for entry in raw]
        except (ApiClientError, aiohttp.ClientError, TypeError, ValueError) as e:
            logger.error(f"Error getting suggestions: {e}")
            suggestions = []

        self.suggestions = suggestions
        self.suggestions_html = self.renderer.render_suggestions(suggestions)
        return suggestions

    def select_suggestion(self, suggestion: Suggestion) -> None:
        self.form.select_location(suggestion.text)
        self.dismiss_suggestions()

    def dismiss_suggestions(self) -> None:
        self.suggestions = []
        self.suggestions_html = ""

    def render(self) -> str:
        return self.renderer.render_search_box(self.form)
