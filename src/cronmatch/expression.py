"""Cron expression matching and next-occurrence calculation.

``CronExpression`` is the object callers keep around: it is built once
from text (plus an optional timezone) and then answers two questions,
whether an instant matches and which minute is the next one to match.

Design Principles:
    1. Immutable expressions: safe to share between threads
    2. Fail once: a bad expression is rejected at construction, after
       which queries report failure instead of raising
    3. Coarsest-first search: the next occurrence is found by jumping a
       month, day, hour or minute at a time, whichever is the coarsest
       unit that does not match yet
"""

from __future__ import annotations

import calendar
import logging
from datetime import datetime, timedelta, tzinfo
from enum import Enum, auto
from typing import Iterator, NamedTuple

from cronmatch._time import (
    Instant,
    InstantError,
    TimezoneLike,
    ceil_to_minute,
    resolve_timezone,
    timezone_key,
    to_datetime,
)
from cronmatch.fields import FieldIndex, FieldMatcher
from cronmatch.parser import CronParseError, CronParser, ParseErrorKind

logger = logging.getLogger(__name__)

# The Gregorian calendar (weekdays included) repeats every 400 years
_CALENDAR_CYCLE_YEARS = 400

_ONE_MINUTE = timedelta(minutes=1)


# =============================================================================
# Search helpers
# =============================================================================


class _Unit(Enum):
    """Granularity the search advances by."""

    MONTH = auto()
    DAY = auto()
    HOUR = auto()
    MINUTE = auto()


class _Pointer(NamedTuple):
    """Calendar position seen on the previous search step."""

    year: int
    month: int
    day: int
    hour: int

    @classmethod
    def of(cls, dt: datetime) -> "_Pointer":
        return cls(dt.year, dt.month, dt.day, dt.hour)


def _cron_weekday(dt: datetime) -> int:
    """Day of week with Sunday as 0."""
    return dt.isoweekday() % 7


def _floor(now: datetime, pointer: _Pointer) -> datetime:
    """Reset the units finer than the coarsest one that changed."""
    if (now.year, now.month) != (pointer.year, pointer.month):
        return now.replace(day=1, hour=0, minute=0)
    if now.day != pointer.day:
        return now.replace(hour=0, minute=0)
    if now.hour != pointer.hour:
        return now.replace(minute=0)
    return now


def _advance(now: datetime, unit: _Unit) -> datetime:
    """Move forward by one month, day, hour or minute of wall-clock time."""
    if unit is _Unit.MONTH:
        year, month = divmod(now.year * 12 + now.month, 12)
        month += 1
        day = min(now.day, calendar.monthrange(year, month)[1])
        return now.replace(year=year, month=month, day=day)
    if unit is _Unit.DAY:
        return now + timedelta(days=1)
    if unit is _Unit.HOUR:
        return now + timedelta(hours=1)
    return now + _ONE_MINUTE


# =============================================================================
# Cron Expression
# =============================================================================


class CronExpression:
    """Parsed five-field cron expression.

    Construction never raises for a malformed expression. Instead the
    expression becomes permanently invalid: ``is_valid()`` returns False,
    ``error`` holds the reason, ``is_matching`` returns False and
    ``get_next`` returns None. Use ``CronExpression.parse`` to get an
    exception instead.

    Day of month and day of week must both match for a day to match.

    Example:
        >>> expr = CronExpression("0 12 * * *")
        >>> expr.get_next(datetime(2024, 1, 15, 10, 30))
        datetime.datetime(2024, 1, 15, 12, 0)
        >>> expr.is_matching(datetime(2024, 1, 15, 12, 0))
        True
    """

    __slots__ = ("_expression", "_timezone", "_fields", "_error")

    def __init__(self, expression: str, timezone: TimezoneLike | None = None) -> None:
        """Parse and validate a cron expression.

        Args:
            expression: Cron expression string
                (minute hour day-of-month month day-of-week).
            timezone: Timezone the expression is evaluated in. A tzinfo,
                a timedelta offset, an IANA zone name or an offset string
                such as ``+02:00``. Defaults to the zone of the queried
                datetime, or local time.
        """
        self._expression = expression
        self._timezone: tzinfo | None = None
        self._fields: tuple[FieldMatcher, ...] | None = None
        self._error: CronParseError | None = None

        try:
            self._timezone = self._resolve_timezone(expression, timezone)
            self._fields = CronParser(expression).parse()
        except CronParseError as e:
            logger.debug("Rejected cron expression %r: %s", expression, e)
            self._error = e

    @staticmethod
    def _resolve_timezone(expression: str, timezone: TimezoneLike | None) -> tzinfo | None:
        try:
            return resolve_timezone(timezone)
        except ValueError as e:
            raise CronParseError(
                str(e),
                ParseErrorKind.UNKNOWN_TIMEZONE,
                expression,
                token=str(timezone),
            ) from e

    @classmethod
    def parse(cls, expression: str, timezone: TimezoneLike | None = None) -> "CronExpression":
        """Parse a cron expression, raising on failure.

        Args:
            expression: Cron expression string.
            timezone: Optional timezone, see ``CronExpression``.

        Returns:
            Valid CronExpression.

        Raises:
            CronParseError: If expression or timezone is invalid.
        """
        instance = cls(expression, timezone)
        if instance._error is not None:
            raise instance._error
        return instance

    @property
    def expression(self) -> str:
        """Get original expression string."""
        return self._expression

    @property
    def timezone(self) -> tzinfo | None:
        return self._timezone

    @property
    def error(self) -> CronParseError | None:
        """Reason the expression was rejected, or None if valid."""
        return self._error

    @property
    def fields(self) -> tuple[FieldMatcher, ...]:
        """Get parsed fields (empty for an invalid expression)."""
        return self._fields or ()

    def get_field(self, index: FieldIndex) -> FieldMatcher | None:
        """Get a specific field matcher."""
        if self._fields is None:
            return None
        return self._fields[index]

    def is_valid(self) -> bool:
        """Check if the expression parsed successfully."""
        return self._fields is not None

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def is_matching(self, instant: Instant | None = None) -> bool:
        """Check if an instant matches this expression.

        Args:
            instant: Datetime or seconds since the epoch (default: now).

        Returns:
            True if all five fields match. False if they do not, if the
            expression is invalid, or if the instant cannot be converted.
        """
        if self._fields is None:
            return False

        try:
            now = to_datetime(instant, self._timezone)
        except InstantError as e:
            logger.debug("Cannot match %r: %s", self._expression, e)
            return False

        return self._matches(now)

    def get_next(self, start: Instant | None = None) -> datetime | None:
        """Get the next matching minute strictly after ``start``.

        Args:
            start: Datetime or seconds since the epoch (default: now).

        Returns:
            Next matching datetime, in the expression's timezone when one
            is configured. None if the expression is invalid, the start
            cannot be converted, or no matching minute exists.
        """
        if self._fields is None:
            return None

        try:
            origin = to_datetime(start, self._timezone)
            zone = origin.tzinfo
            now = ceil_to_minute(origin)

            # Never return the start itself
            if now == origin and self._matches(now):
                now += _ONE_MINUTE

            result = self._search(now.replace(tzinfo=None))

            # A repeated wall-clock hour (DST fall-back) can resolve to an
            # instant before the start; retry its second occurrence, then
            # keep searching past it.
            while result is not None and zone is not None:
                result = result.replace(tzinfo=zone)
                if result.timestamp() > origin.timestamp():
                    break
                if result.replace(fold=1).timestamp() > origin.timestamp():
                    result = result.replace(fold=1)
                    break
                result = self._search(result.replace(tzinfo=None) + _ONE_MINUTE)
        except (InstantError, OverflowError, ValueError) as e:
            logger.debug("No next occurrence for %r: %s", self._expression, e)
            return None

        if result is None:
            logger.debug(
                "Cron expression %r never matches after %s", self._expression, start
            )
            return None

        return result

    def next_n(self, n: int, start: Instant | None = None) -> list[datetime]:
        """Get next n matching datetimes.

        Args:
            n: Number of matches to find.
            start: Start searching after this instant.

        Returns:
            List of matching datetimes, shorter than n if the search ends.
        """
        return list(self.iter(start, limit=n))

    def iter(
        self,
        start: Instant | None = None,
        limit: int | None = None,
    ) -> "CronIterator":
        """Create iterator over matching datetimes.

        Args:
            start: Start after this instant.
            limit: Maximum number of matches.

        Returns:
            CronIterator.
        """
        return CronIterator(self, start, limit)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _matches(self, dt: datetime) -> bool:
        minute, hour, day, month, weekday = self._fields
        return (
            minute.matches(dt.minute)
            and hour.matches(dt.hour)
            and day.matches(dt.day)
            and month.matches(dt.month)
            and weekday.matches(_cron_weekday(dt))
        )

    def _excluded_unit(self, dt: datetime) -> _Unit | None:
        """Coarsest unit of ``dt`` that does not match, if any."""
        minute, hour, day, month, weekday = self._fields

        if not month.matches(dt.month):
            return _Unit.MONTH
        if not (day.matches(dt.day) and weekday.matches(_cron_weekday(dt))):
            return _Unit.DAY
        if not hour.matches(dt.hour):
            return _Unit.HOUR
        if not minute.matches(dt.minute):
            return _Unit.MINUTE
        return None

    def _search(self, now: datetime) -> datetime | None:
        """Find the first matching wall-clock minute at or after ``now``.

        Returns None once the search has covered a whole calendar cycle
        without a match.
        """
        horizon = now.year + _CALENDAR_CYCLE_YEARS
        pointer = _Pointer.of(now)

        while now.year <= horizon:
            now = _floor(now, pointer)
            pointer = _Pointer.of(now)

            unit = self._excluded_unit(now)
            if unit is None:
                return now

            now = _advance(now, unit)

        return None

    def __repr__(self) -> str:
        key = timezone_key(self._timezone)
        if key is None:
            return f"CronExpression({self._expression!r})"
        return f"CronExpression({self._expression!r}, timezone={key!r})"

    def __str__(self) -> str:
        return self._expression

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CronExpression):
            return (
                self._expression == other._expression
                and timezone_key(self._timezone) == timezone_key(other._timezone)
            )
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._expression, timezone_key(self._timezone)))


# =============================================================================
# Cron Iterator
# =============================================================================


class CronIterator(Iterator[datetime]):
    """Iterator over matching datetimes.

    Each step is a ``get_next`` call starting from the previous match.
    """

    def __init__(
        self,
        expression: CronExpression,
        start: Instant | None = None,
        limit: int | None = None,
    ) -> None:
        """Initialize iterator.

        Args:
            expression: Cron expression.
            start: Start after this instant.
            limit: Maximum matches.
        """
        self._expression = expression
        self._current = start
        self._limit = limit
        self._count = 0

    def __iter__(self) -> "CronIterator":
        return self

    def __next__(self) -> datetime:
        if self._limit is not None and self._count >= self._limit:
            raise StopIteration

        next_dt = self._expression.get_next(self._current)
        if next_dt is None:
            raise StopIteration

        self._current = next_dt
        self._count += 1

        return next_dt


# =============================================================================
# Validation Functions
# =============================================================================


def validate_expression(expression: str) -> list[str]:
    """Validate a cron expression.

    Args:
        expression: Cron expression to validate.

    Returns:
        List of validation errors (empty if valid).
    """
    error = CronExpression(expression).error
    return [] if error is None else [str(error)]


def is_valid_expression(expression: str) -> bool:
    """Check if a cron expression is valid."""
    return CronExpression(expression).is_valid()
