"""Cron expression parser and validator.

Turns the text of a five-field cron expression into five
``FieldMatcher`` objects. Every numeric literal in the expression goes
through the same validation path, so boundary and step rules apply
whether the literal appears as a bare value, a range endpoint or a step.

Grammar (per field, fields separated by whitespace):
    field    := name | element ("," element)*
    element  := base ["/" step]
    base     := "*" | value | value "-" value
    name     := three-letter month or weekday name (month and
                day-of-week fields only, never combined with lists,
                ranges or steps)
"""

from __future__ import annotations

import re
from enum import Enum

from cronmatch.fields import (
    FIELD_BOUNDARIES,
    FIELD_NAMES,
    FieldIndex,
    FieldMatcher,
)


# =============================================================================
# Exceptions
# =============================================================================


class ParseErrorKind(Enum):
    """Reasons a cron expression is rejected."""

    WRONG_FIELD_COUNT = "wrong_field_count"
    BAD_STEP_SYNTAX = "bad_step_syntax"
    STEP_OUT_OF_RANGE = "step_out_of_range"
    NON_INTEGER_VALUE = "non_integer_value"
    VALUE_OUT_OF_BOUNDARY = "value_out_of_boundary"
    VALUE_WITH_STEP = "value_with_step"
    BAD_RANGE_SYNTAX = "bad_range_syntax"
    UNKNOWN_TIMEZONE = "unknown_timezone"


class CronParseError(ValueError):
    """Raised when cron expression parsing fails.

    Attributes:
        kind: Category of the failure.
        expression: The complete expression being parsed.
        field: Field in which the failure occurred, if any.
        token: The offending part of the expression.
    """

    def __init__(
        self,
        message: str,
        kind: ParseErrorKind,
        expression: str = "",
        field: FieldIndex | None = None,
        token: str = "",
    ) -> None:
        self.kind = kind
        self.expression = expression
        self.field = field
        self.token = token
        super().__init__(message)


# =============================================================================
# Cron Parser
# =============================================================================

_INTEGER = re.compile(r"0|[1-9][0-9]*")

# Anything number-like is checked as a single value, the rest as a range
_NUMERIC = re.compile(r"[+-]?[0-9]+(\.[0-9]*)?")


class CronParser:
    """Parser for five-field cron expressions.

    Fields are, in order: minute, hour, day of month, month, day of week.

    Example:
        >>> fields = CronParser("*/15 9-17 * * mon").parse()
        >>> sorted(fields[0].values)
        [0, 15, 30, 45]
    """

    FIELD_COUNT = 5

    def __init__(self, expression: str) -> None:
        """Initialize parser with expression.

        Args:
            expression: Cron expression string.
        """
        self._expression = expression

    def parse(self) -> tuple[FieldMatcher, ...]:
        """Parse the cron expression.

        Returns:
            Tuple of five FieldMatcher objects, indexed by FieldIndex.

        Raises:
            CronParseError: If expression is invalid.
        """
        segments = self._expression.split()

        if len(segments) != self.FIELD_COUNT:
            raise CronParseError(
                f"Invalid number of fields: {len(segments)}. Expected 5 fields.",
                ParseErrorKind.WRONG_FIELD_COUNT,
                self._expression,
            )

        builders: list[set[int]] = [set() for _ in range(self.FIELD_COUNT)]

        for index, segment in zip(FieldIndex, segments):
            self._parse_segment(builders[index], index, segment)

        # 7 and 0 are both Sunday
        if 7 in builders[FieldIndex.DAY_OF_WEEK]:
            builders[FieldIndex.DAY_OF_WEEK].add(0)

        return tuple(
            FieldMatcher(index, builder)
            for index, builder in zip(FieldIndex, builders)
        )

    def _parse_segment(self, register: set[int], index: FieldIndex, segment: str) -> None:
        """Parse one whitespace-separated field of the expression."""
        names = FIELD_NAMES.get(index)
        if names is not None and segment.lower() in names:
            register.add(names[segment.lower()])
            return

        # e.g. "1,5-7,*/2" -> ["1", "5-7", "*/2"]
        for element in segment.split(","):
            self._parse_element(register, index, element)

    def _parse_element(self, register: set[int], index: FieldIndex, element: str) -> None:
        """Parse a list element: a value, a range or ``*``, with optional step."""
        step = 1
        parts = element.split("/")
        base = parts[0]

        if len(parts) > 1:
            step = self._validate_step(parts, index, element)

        if _NUMERIC.fullmatch(base):
            value = self._validate_value(base, index, step)
            register.add(value)
        else:
            self._parse_range(register, index, base, step)

    def _parse_range(self, register: set[int], index: FieldIndex, base: str, step: int) -> None:
        """Parse ``*`` or ``A-B`` and fill the register."""
        boundary = FIELD_BOUNDARIES[index]

        if base == "*":
            start, end = boundary.min_value, boundary.max_value
        else:
            endpoints = base.split("-")
            if len(endpoints) != 2:
                raise CronParseError(
                    f"Invalid range: {base!r}",
                    ParseErrorKind.BAD_RANGE_SYNTAX,
                    self._expression,
                    index,
                    base,
                )
            start = self._validate_value(endpoints[0], index)
            end = self._validate_value(endpoints[1], index)

        self._fill_range(register, index, start, end, step)

    def _validate_step(self, parts: list[str], index: FieldIndex, element: str) -> int:
        """Validate the step part of an element and return it."""
        if len(parts) != 2:
            raise CronParseError(
                f"Invalid step notation: {element!r}",
                ParseErrorKind.BAD_STEP_SYNTAX,
                self._expression,
                index,
                element,
            )

        boundary = FIELD_BOUNDARIES[index]
        token = parts[1]
        step = int(token) if _INTEGER.fullmatch(token) else 0

        if step < 1 or step > boundary.max_value:
            raise CronParseError(
                f"Step {token!r} out of range [1-{boundary.max_value}] "
                f"for {index.name}",
                ParseErrorKind.STEP_OUT_OF_RANGE,
                self._expression,
                index,
                element,
            )

        return step

    def _validate_value(self, token: str, index: FieldIndex, step: int = 1) -> int:
        """Validate a single integer literal and return its value."""
        if not _INTEGER.fullmatch(token):
            raise CronParseError(
                f"Invalid value: {token!r}",
                ParseErrorKind.NON_INTEGER_VALUE,
                self._expression,
                index,
                token,
            )

        value = int(token)
        boundary = FIELD_BOUNDARIES[index]

        if value not in boundary:
            raise CronParseError(
                f"Value {value} out of range "
                f"[{boundary.min_value}-{boundary.max_value}] for {index.name}",
                ParseErrorKind.VALUE_OUT_OF_BOUNDARY,
                self._expression,
                index,
                token,
            )

        if step != 1:
            raise CronParseError(
                f"Step cannot be combined with a single value: {token}/{step}",
                ParseErrorKind.VALUE_WITH_STEP,
                self._expression,
                index,
                token,
            )

        return value

    @staticmethod
    def _fill_range(
        register: set[int],
        index: FieldIndex,
        start: int,
        end: int,
        step: int,
    ) -> None:
        """Add ``start..end`` (wrapping past the maximum if needed) in steps.

        Ascending, wrapping and ``*`` ranges share one code path. A
        wrapping range on day-of-month or month also yields 0, which no
        date ever matches.
        """
        modulus = FIELD_BOUNDARIES[index].wrap
        length = end - start

        if start > end:
            length += modulus

        for offset in range(0, length + 1, step):
            register.add((start + offset) % modulus)
