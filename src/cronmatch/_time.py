"""Timezone resolution and instant normalization.

Internal helpers shared by the expression queries. A query instant may
be a ``datetime`` (naive or aware) or a count of seconds since the Unix
epoch; these helpers turn it into a datetime in the expression's
timezone, or fail with ``InstantError``.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

Instant = Union[datetime, int, float]
TimezoneLike = Union[tzinfo, timedelta, str]

_OFFSET = re.compile(r"([+-])(\d{2}):?(\d{2})")


class InstantError(ValueError):
    """Raised when a query instant cannot be converted to a datetime."""


def resolve_timezone(value: TimezoneLike | None) -> tzinfo | None:
    """Resolve a timezone argument.

    Args:
        value: ``None``, a tzinfo, a fixed offset as timedelta, or a string
            holding an IANA zone name, ``UTC``/``Z``, or an offset such as
            ``+02:00`` or ``-0530``.

    Returns:
        The tzinfo, or None when no timezone was given.

    Raises:
        ValueError: If the timezone cannot be resolved.
    """
    if value is None or isinstance(value, tzinfo):
        return value

    if isinstance(value, timedelta):
        return timezone(value)

    if not isinstance(value, str):
        raise ValueError(f"Unsupported timezone: {value!r}")

    name = value.strip()
    if name.upper() in ("UTC", "Z"):
        return timezone.utc

    match = _OFFSET.fullmatch(name)
    if match:
        sign, hours, minutes = match.groups()
        offset = timedelta(hours=int(hours), minutes=int(minutes))
        return timezone(-offset if sign == "-" else offset)

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise ValueError(f"Unknown timezone: {value!r}") from e


def timezone_key(tz: tzinfo | None) -> str | None:
    """Stable name of a timezone, used for equality and repr."""
    if tz is None:
        return None
    key = getattr(tz, "key", None)
    return key if key is not None else str(tz)


def to_datetime(instant: Instant | None, tz: tzinfo | None) -> datetime:
    """Convert a query instant to a datetime in the given timezone.

    With a timezone, aware datetimes are converted into it and naive
    ones are taken as wall-clock time in it. Without one, aware
    datetimes keep their own zone and everything else is naive local
    time.

    Raises:
        InstantError: If the instant has an unsupported type or cannot
            be represented.
    """
    try:
        if instant is None:
            return datetime.now(tz)

        if isinstance(instant, datetime):
            if tz is None:
                return instant
            if instant.tzinfo is None:
                return instant.replace(tzinfo=tz)
            return instant.astimezone(tz)

        if isinstance(instant, (int, float)) and not isinstance(instant, bool):
            return datetime.fromtimestamp(instant, tz)
    except (OverflowError, OSError, ValueError) as e:
        raise InstantError(f"Cannot convert instant {instant!r}: {e}") from e

    raise InstantError(f"Unsupported instant type: {type(instant).__name__}")


def ceil_to_minute(dt: datetime) -> datetime:
    """Round up to the next whole minute unless already on one."""
    if dt.second == 0 and dt.microsecond == 0:
        return dt
    return dt.replace(second=0, microsecond=0) + timedelta(minutes=1)
