"""
Structured filter expressions evaluated by the document store.

Conditions are case-sensitive unless ``ignore_case`` is set, which is why
free-text search never relies on them.
"""

from dataclasses import dataclass, field
from typing import Any

from jobboard.utils.text import coerce_list

_MISSING = object()


def _fold(value: Any, ignore_case: bool) -> Any:
    if ignore_case and isinstance(value, str):
        return value.lower()
    return value


@dataclass(frozen=True)
class Condition:
    """A predicate over a single item attribute."""

    field: str

    def matches(self, item: dict) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class Eq(Condition):
    value: Any = None
    ignore_case: bool = False

    def matches(self, item: dict) -> bool:
        actual = item.get(self.field, _MISSING)
        if actual is _MISSING:
            return False
        return _fold(actual, self.ignore_case) == _fold(self.value, self.ignore_case)


@dataclass(frozen=True)
class Ne(Condition):
    value: Any = None

    def matches(self, item: dict) -> bool:
        return item.get(self.field, _MISSING) != self.value


@dataclass(frozen=True)
class Contains(Condition):
    """Substring match on strings, element match on arrays.

    With ``as_list`` the attribute is coerced to a list first, so a
    comma-joined string and a real array behave the same.
    """

    value: Any = None
    ignore_case: bool = False
    as_list: bool = False

    def matches(self, item: dict) -> bool:
        actual = item.get(self.field)
        if actual is None:
            return False
        needle = _fold(self.value, self.ignore_case)
        if self.as_list:
            return needle in [_fold(v, self.ignore_case) for v in coerce_list(actual)]
        if isinstance(actual, str):
            return isinstance(needle, str) and needle in _fold(actual, self.ignore_case)
        if isinstance(actual, (list, tuple, set)):
            return needle in [_fold(v, self.ignore_case) for v in actual]
        return False


@dataclass(frozen=True)
class MissingOrEmpty(Condition):
    """True when the attribute is absent, null, or has size zero."""

    def matches(self, item: dict) -> bool:
        actual = item.get(self.field)
        if actual is None:
            return True
        if isinstance(actual, (str, list, tuple, dict)):
            return len(actual) == 0
        return False


@dataclass(frozen=True)
class Filter:
    """AND-combination of conditions. An empty filter matches everything."""

    conditions: tuple[Condition, ...] = field(default_factory=tuple)

    def and_(self, *conditions: Condition) -> "Filter":
        return Filter(self.conditions + tuple(conditions))

    def matches(self, item: dict) -> bool:
        return all(condition.matches(item) for condition in self.conditions)

    def __bool__(self) -> bool:
        return bool(self.conditions)
