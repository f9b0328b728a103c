"""cronmatch - strict five-field cron expression matching.

Parses a cron expression once, then answers whether an instant matches
it and which minute is the next one to match.

Syntax Reference:
    Field         Values            Special Characters
    ───────────────────────────────────────────────────
    Minute        0-59              * / , -
    Hour          0-23              * / , -
    Day of Month  1-31              * / , -
    Month         1-12 or jan-dec   * / , -
    Day of Week   0-7 or sun-sat    * / , -   (0 and 7 are Sunday)

    *   Any value
    ,   List separator (1,3,5)
    -   Range (1-5), may wrap around (22-4)
    /   Step on a range or * (*/15, 10-50/20)

    A month or weekday name replaces the whole field and cannot be
    combined with lists, ranges or steps. Day of month and day of week
    must both match.

Usage:
    >>> from cronmatch import CronExpression
    >>>
    >>> expr = CronExpression("0 9 * * 1-5", timezone="Europe/Berlin")
    >>> if not expr.is_valid():
    ...     raise expr.error
    >>> next_run = expr.get_next()
    >>> expr.is_matching(1705305600)
    True
"""

from cronmatch.expression import (
    # Core
    CronExpression,
    # Iterator
    CronIterator,
    # Validation
    validate_expression,
    is_valid_expression,
)
from cronmatch.fields import (
    FIELD_BOUNDARIES,
    MONTH_NAMES,
    WEEKDAY_NAMES,
    FieldBoundary,
    FieldIndex,
    FieldMatcher,
)
from cronmatch.parser import (
    CronParseError,
    CronParser,
    ParseErrorKind,
)

__version__ = "1.0.0"

__all__ = [
    # Core
    "CronExpression",
    "FieldIndex",
    "FieldMatcher",
    "FieldBoundary",
    "FIELD_BOUNDARIES",
    "MONTH_NAMES",
    "WEEKDAY_NAMES",
    # Parser
    "CronParser",
    "CronParseError",
    "ParseErrorKind",
    # Iterator
    "CronIterator",
    # Validation
    "validate_expression",
    "is_valid_expression",
]
