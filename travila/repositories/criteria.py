"""Filter expressions understood by content repositories.

Criteria address document fields with dotted camelCase paths, exactly as
they appear on the wire (``location.city``, ``rating.score``), so a
document store can translate them directly into its own query language.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Tuple

_MISSING = object()


def resolve_path(document: Any, path: str) -> Any:
    """Return the value at a dotted path, or a sentinel when it is absent."""
    value = document
    for part in path.split("."):
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return _MISSING
    return value


class Criterion:
    def matches(self, document: dict) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class Contains(Criterion):
    """Case-insensitive substring match; list fields match on any element."""

    path: str
    text: str

    def matches(self, document: dict) -> bool:
        value = resolve_path(document, self.path)
        needle = self.text.casefold()
        if isinstance(value, list):
            return any(
                isinstance(element, str) and needle in element.casefold()
                for element in value
            )
        return isinstance(value, str) and needle in value.casefold()


@dataclass(frozen=True)
class Equals(Criterion):
    path: str
    value: Any

    def matches(self, document: dict) -> bool:
        return resolve_path(document, self.path) == self.value


@dataclass(frozen=True)
class AnyOf(Criterion):
    criteria: Tuple[Criterion, ...]

    def matches(self, document: dict) -> bool:
        return any(criterion.matches(document) for criterion in self.criteria)


@dataclass(frozen=True)
class AllOf(Criterion):
    criteria: Tuple[Criterion, ...]

    def matches(self, document: dict) -> bool:
        return all(criterion.matches(document) for criterion in self.criteria)


@dataclass(frozen=True)
class SortKey:
    path: str
    descending: bool = False


def any_contains(paths: Iterable[str], text: str) -> AnyOf:
    return AnyOf(tuple(Contains(path, text) for path in paths))


def sort_documents(documents: List[dict], keys: Iterable[SortKey]) -> List[dict]:
    """Stable multi-key sort; missing values sort lowest (last when descending)."""
    ordered = list(documents)
    for key in reversed(list(keys)):

        def sort_value(document: dict, path: str = key.path):
            value = resolve_path(document, path)
            if value is _MISSING or value is None:
                return (0, 0)
            return (1, value)

        ordered.sort(key=sort_value, reverse=key.descending)
    return ordered
