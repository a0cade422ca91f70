from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence
import logging

from jinja2 import Environment, PackageLoader, select_autoescape
from pydantic import ValidationError

from travila.models.content import CONTENT_TYPE_ORDER, ContentType
from travila.models.search import ResultCard, Suggestion
from travila.web.calendar import WEEKDAY_HEADER
from travila.web.form import GuestKind, SearchFormState

logger = logging.getLogger(__name__)

EMPTY_RESULTS_MESSAGE = "No results found. Try different search terms."


@dataclass(frozen=True)
class ClickableItem:
    id: str
    type: ContentType


@dataclass
class RenderedResults:
    html: str
    items: List[ClickableItem] = field(default_factory=list)


def cards_from_payload(results: Mapping[str, Sequence[Dict[str, Any]]]) -> Dict[ContentType, List[ResultCard]]:
    """Project API result documents into cards, skipping unknown types and bad items."""
    cards: Dict[ContentType, List[ResultCard]] = {}
    for tag, items in results.items():
        content_type = ContentType.parse(tag)
        if content_type is None:
            continue
        projected = []
        for item in items or []:
            try:
                projected.append(ResultCard.from_payload(content_type, item))
            except ValidationError as e:
                logger.warning(f"Skipping unrenderable {content_type.singular} result: {e}")
        cards[content_type] = projected
    return cards


class SearchRenderer:
    """Renders the search box, the results modal body and the suggestion dropdown."""

    def __init__(self, environment: Optional[Environment] = None):
        self.env = environment or Environment(
            loader=PackageLoader("travila.web", "templates"),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_results(self, groups: Mapping[ContentType, Sequence[ResultCard]]) -> RenderedResults:
        sections = []
        items: List[ClickableItem] = []
        for content_type in CONTENT_TYPE_ORDER:
            cards = list(groups.get(content_type) or [])
            if not cards:
                continue
            sections.append(
                {
                    "type": content_type.value,
                    "label": content_type.value.capitalize(),
                    "cards": cards,
                }
            )
            items.extend(ClickableItem(card.id, content_type) for card in cards)

        html = self.env.get_template("results.html").render(
            groups=sections, empty_message=EMPTY_RESULTS_MESSAGE
        )
        return RenderedResults(html=html, items=items)

    def render_error(self, message: str) -> str:
        return self.env.get_template("error.html").render(message=message)

    def render_suggestions(self, suggestions: Sequence[Suggestion]) -> str:
        if not suggestions:
            return ""
        return self.env.get_template("suggestions.html").render(suggestions=suggestions)

    def _form_context(self, form: SearchFormState) -> Dict[str, Any]:
        return {
            "form": form,
            "months": form.months(),
            "weekday_header": WEEKDAY_HEADER,
            "guest_counts": [
                (kind.value, getattr(form.guests, kind.value)) for kind in GuestKind
            ],
        }

    def render_search_box(self, form: SearchFormState) -> str:
        return self.env.get_template("search_box.html").render(**self._form_context(form))

    def render_page(self, form: SearchFormState, title: str = "Travila") -> str:
        return self.env.get_template("page.html").render(
            title=title, **self._form_context(form)
        )


class ResultsPanel:
    """The results modal: holds the last rendered results and routes item clicks."""

    def __init__(self, view_item: Callable[[str, str], Any]):
        self.view_item = view_item
        self.html = ""
        self.items: List[ClickableItem] = []
        self.visible = False

    def show(self, rendered: RenderedResults) -> None:
        self.html = rendered.html
        self.items = list(rendered.items)
        self.visible = True

    def show_message(self, html: str) -> None:
        self.html = html
        self.items = []
        self.visible = True

    def close(self) -> None:
        self.visible = False

    def click(self, item: ClickableItem) -> Any:
        if item not in self.items:
            raise KeyError(f"{item.type.value}/{item.id} is not in the current results")
        return self.view_item(item.id, item.type.value)
