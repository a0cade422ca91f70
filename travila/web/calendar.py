"""Date math for the two-month range picker.

All functions take and return immutable ``datetime.date`` values.
"""

import calendar
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import List, Optional, Tuple

GRID_WEEKS = 6
GRID_CELLS = 7 * GRID_WEEKS
WEEKDAY_HEADER = ["S", "M", "T", "W", "T", "F", "S"]


class CellState(str, Enum):
    BLANK = "blank"
    PLAIN = "plain"
    ENDPOINT = "endpoint"
    IN_RANGE = "in_range"


@dataclass(frozen=True)
class CalendarCell:
    day: Optional[date]
    state: CellState

    @property
    def label(self) -> str:
        return str(self.day.day) if self.day else ""


@dataclass(frozen=True)
class MonthView:
    first: date
    cells: List[CalendarCell]

    @property
    def label(self) -> str:
        return f"{calendar.month_name[self.first.month]} {self.first.year}"

    def weeks(self) -> List[List[CalendarCell]]:
        return [self.cells[i:i + 7] for i in range(0, len(self.cells), 7)]


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def add_months(day: date, months: int) -> date:
    """Shift to the first of the month ``months`` away from ``day``'s month."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def days_in_month(day: date) -> int:
    return calendar.monthrange(day.year, day.month)[1]


def leading_blanks(first: date) -> int:
    """Sunday-first weekday index of the 1st of the month."""
    return (first.weekday() + 1) % 7


def cell_state(day: date, start: Optional[date], end: Optional[date]) -> CellState:
    if day == start or day == end:
        return CellState.ENDPOINT
    if start and end and start < day < end:
        return CellState.IN_RANGE
    return CellState.PLAIN


def month_grid(
    first: date, start: Optional[date] = None, end: Optional[date] = None
) -> MonthView:
    """Lay out one month as a fixed 6-week grid of 42 cells."""
    first = start_of_month(first)
    blanks = leading_blanks(first)
    count = days_in_month(first)

    cells = [CalendarCell(None, CellState.BLANK) for _ in range(blanks)]
    for number in range(1, count + 1):
        day = first.replace(day=number)
        cells.append(CalendarCell(day, cell_state(day, start, end)))
    cells.extend(
        CalendarCell(None, CellState.BLANK) for _ in range(GRID_CELLS - len(cells))
    )
    return MonthView(first=first, cells=cells)


def visible_months(
    cursor: date, start: Optional[date] = None, end: Optional[date] = None
) -> Tuple[MonthView, MonthView]:
    first = start_of_month(cursor)
    return month_grid(first, start, end), month_grid(add_months(first, 1), start, end)


def format_day(day: Optional[date], placeholder: str = "Add dates") -> str:
    """Long date label, e.g. ``05 March 2026``."""
    if day is None:
        return placeholder
    return f"{day.day:02d} {calendar.month_name[day.month]} {day.year}"
