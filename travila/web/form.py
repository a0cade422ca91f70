from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from travila.models.content import CONTENT_TYPE_ORDER, ContentType
from travila.web.calendar import (
    MonthView,
    add_months,
    format_day,
    start_of_month,
    visible_months,
)

LOCATION_PLACEHOLDER = "Where are you going?"
SEARCH_RESULT_LIMIT = 20

DEFAULT_LOCATIONS = [
    "New York, USA",
    "Paris, France",
    "London, UK",
    "Tokyo, Japan",
    "Dubai, UAE",
    "Bali, Indonesia",
]


class FormStateError(Exception):
    """An interaction was sent to a part of the form that cannot take it."""
    pass


class Dropdown(str, Enum):
    LOCATION = "location"
    DATES = "dates"
    GUESTS = "guests"


class GuestKind(str, Enum):
    ADULTS = "adults"
    CHILDREN = "children"
    INFANTS = "infants"


@dataclass
class GuestCounts:
    adults: int = 2
    children: int = 0
    infants: int = 0

    def label(self) -> str:
        return f"{self.adults} adults, {self.children} children"


@dataclass
class SearchRequestParams:
    query: str
    types: List[str]
    limit: int = SEARCH_RESULT_LIMIT


@dataclass
class SearchFormState:
    """Ephemeral state of one mounted search box.

    Only one dropdown is open at a time. Interactions aimed at a dropdown
    that is not open raise FormStateError and leave the state untouched.
    """

    tabs: Sequence[str] = field(
        default_factory=lambda: [t.value for t in CONTENT_TYPE_ORDER]
    )
    current_tab: str = ContentType.TOURS.value
    location: Optional[str] = None
    locations: List[str] = field(default_factory=lambda: list(DEFAULT_LOCATIONS))
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    view_month: Optional[date] = None
    guests: GuestCounts = field(default_factory=GuestCounts)
    guests_label: Optional[str] = None
    open: Optional[Dropdown] = None
    today: Callable[[], date] = date.today

    def __post_init__(self):
        if self.view_month is None:
            self.view_month = start_of_month(self.today())
        if self.guests_label is None:
            self.guests_label = self.guests.label()

    # Dropdowns

    @property
    def is_idle(self) -> bool:
        return self.open is None

    def open_dropdown(self, which: Dropdown) -> None:
        which = Dropdown(which)
        if which is Dropdown.DATES:
            anchor = self.start_date or self.end_date or self.today()
            self.view_month = start_of_month(anchor)
        self.open = which

    def click_outside(self) -> None:
        self.open = None

    def _require_open(self, which: Dropdown) -> None:
        if self.open is not which:
            current = self.open.value if self.open else "none"
            raise FormStateError(
                f"The {which.value} dropdown is not open (open: {current})"
            )

    # Tabs

    def switch_tab(self, tab: str) -> None:
        tab = tab.strip().lower()
        if tab not in self.tabs:
            raise FormStateError(f"Unknown search tab: {tab}")
        self.current_tab = tab

    def _shift_tab(self, step: int) -> None:
        index = self.tabs.index(self.current_tab) if self.current_tab in self.tabs else 0
        self.current_tab = self.tabs[(index + step) % len(self.tabs)]

    def next_tab(self) -> None:
        self._shift_tab(1)

    def previous_tab(self) -> None:
        self._shift_tab(-1)

    # Location

    @property
    def location_label(self) -> str:
        return self.location or LOCATION_PLACEHOLDER

    def filter_locations(self, text: str) -> List[str]:
        needle = text.strip().casefold()
        return [label for label in self.locations if needle in label.casefold()]

    def select_location(self, label: str) -> None:
        self.location = label.strip() or None
        self.open = None

    # Dates

    def click_day(self, day: date) -> None:
        self._require_open(Dropdown.DATES)
        if self.start_date is None or self.end_date is not None:
            self.start_date, self.end_date = day, None
        elif day < self.start_date:
            self.start_date, self.end_date = day, self.start_date
        else:
            self.end_date = day

    def clear_dates(self) -> None:
        self._require_open(Dropdown.DATES)
        self.start_date = self.end_date = None

    def apply_dates(self) -> None:
        self._require_open(Dropdown.DATES)
        if self.start_date is not None and self.end_date is None:
            self.end_date = self.start_date
        self.open = None

    def previous_month(self) -> None:
        self._require_open(Dropdown.DATES)
        self.view_month = add_months(self.view_month, -1)

    def next_month(self) -> None:
        self._require_open(Dropdown.DATES)
        self.view_month = add_months(self.view_month, 1)

    def months(self) -> Tuple[MonthView, MonthView]:
        return visible_months(self.view_month, self.start_date, self.end_date)

    @property
    def check_in_label(self) -> str:
        return format_day(self.start_date)

    @property
    def check_out_label(self) -> str:
        return format_day(self.end_date)

    # Guests

    def _guest_kind(self, kind: str) -> GuestKind:
        try:
            return GuestKind(kind)
        except ValueError:
            raise FormStateError(f"Unknown guest counter: {kind}")

    def increment(self, kind: str) -> int:
        self._require_open(Dropdown.GUESTS)
        name = self._guest_kind(kind).value
        setattr(self.guests, name, getattr(self.guests, name) + 1)
        return getattr(self.guests, name)

    def decrement(self, kind: str) -> int:
        self._require_open(Dropdown.GUESTS)
        name = self._guest_kind(kind).value
        setattr(self.guests, name, max(0, getattr(self.guests, name) - 1))
        return getattr(self.guests, name)

    def apply_guests(self) -> None:
        self._require_open(Dropdown.GUESTS)
        self.guests_label = self.guests.label()
        self.open = None

    # Submission

    def to_search_request(self) -> SearchRequestParams:
        return SearchRequestParams(
            query=self.location or self.current_tab,
            types=[self.current_tab or ContentType.TOURS.value],
        )

    def snapshot(self) -> Dict[str, object]:
        return {
            "tab": self.current_tab,
            "location": self.location_label,
            "check_in": self.check_in_label,
            "check_out": self.check_out_label,
            "guests": self.guests_label,
        }
