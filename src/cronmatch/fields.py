"""Cron field definitions and matchers.

This module holds the static tables every cron field is validated
against (value boundaries and name look-up tables) and the immutable
``FieldMatcher`` that the parser produces for each of the five fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import FrozenSet, Iterable, Iterator


# =============================================================================
# Field Index
# =============================================================================


class FieldIndex(IntEnum):
    """Position of a field within a five-field cron expression."""

    MINUTE = 0
    HOUR = 1
    DAY_OF_MONTH = 2
    MONTH = 3
    DAY_OF_WEEK = 4


@dataclass(frozen=True)
class FieldBoundary:
    """Allowed values of a cron field.

    Attributes:
        min_value: Smallest accepted value.
        max_value: Largest accepted value.
        mod: Added to ``max_value`` to get the modulus used when a range
            wraps around. Day-of-week uses 0 because 7 and 0 are both
            Sunday.
    """

    min_value: int
    max_value: int
    mod: int = 1

    @property
    def wrap(self) -> int:
        """Modulus for range filling."""
        return self.max_value + self.mod

    def __contains__(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value


FIELD_BOUNDARIES: dict[FieldIndex, FieldBoundary] = {
    FieldIndex.MINUTE: FieldBoundary(0, 59),
    FieldIndex.HOUR: FieldBoundary(0, 23),
    FieldIndex.DAY_OF_MONTH: FieldBoundary(1, 31),
    FieldIndex.MONTH: FieldBoundary(1, 12),
    FieldIndex.DAY_OF_WEEK: FieldBoundary(0, 7, mod=0),
}


# =============================================================================
# Name Tables
# =============================================================================

WEEKDAY_NAMES: dict[str, int] = {
    "sun": 0, "mon": 1, "tue": 2, "wed": 3,
    "thu": 4, "fri": 5, "sat": 6,
}

MONTH_NAMES: dict[str, int] = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4,
    "may": 5, "jun": 6, "jul": 7, "aug": 8,
    "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

# Only month and day-of-week accept a name in place of the whole field
FIELD_NAMES: dict[FieldIndex, dict[str, int]] = {
    FieldIndex.MONTH: MONTH_NAMES,
    FieldIndex.DAY_OF_WEEK: WEEKDAY_NAMES,
}


# =============================================================================
# Field Matcher
# =============================================================================


class FieldMatcher:
    """Set of permitted values for one field of a parsed expression.

    Matchers are created by the parser once every field of an expression
    has been validated and are never modified afterwards, so they can be
    shared between threads freely.

    Attributes:
        index: Which field this matcher belongs to.
        values: Frozen set of permitted integer values.
    """

    __slots__ = ("_index", "_values")

    def __init__(self, index: FieldIndex, values: Iterable[int]) -> None:
        self._index = FieldIndex(index)
        self._values: FrozenSet[int] = frozenset(values)

    @property
    def index(self) -> FieldIndex:
        return self._index

    @property
    def values(self) -> FrozenSet[int]:
        return self._values

    @property
    def boundary(self) -> FieldBoundary:
        return FIELD_BOUNDARIES[self._index]

    def matches(self, value: int) -> bool:
        return value in self._values

    def __contains__(self, value: object) -> bool:
        return value in self._values

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldMatcher):
            return self._index == other._index and self._values == other._values
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._index, self._values))

    def __repr__(self) -> str:
        return f"FieldMatcher({self._index.name}, {sorted(self._values)!r})"
