"""Predefined cron expression presets.

Commonly used schedules as ready-made expressions, evaluated in the
timezone of the datetimes they are queried with.

Usage:
    >>> from cronmatch.presets import DAILY, WEEKDAYS_9AM
    >>>
    >>> next_run = DAILY.get_next()
    >>> WEEKDAYS_9AM.is_matching(datetime(2024, 1, 15, 9, 0))
    True
"""

from cronmatch.expression import CronExpression


# =============================================================================
# Standard Intervals
# =============================================================================

# January 1st at midnight
YEARLY = CronExpression.parse("0 0 1 1 *")
ANNUALLY = YEARLY

# First day of every month at midnight
MONTHLY = CronExpression.parse("0 0 1 * *")

# Every Sunday at midnight
WEEKLY = CronExpression.parse("0 0 * * sun")

DAILY = CronExpression.parse("0 0 * * *")
MIDNIGHT = DAILY

HOURLY = CronExpression.parse("0 * * * *")

EVERY_MINUTE = CronExpression.parse("* * * * *")


# =============================================================================
# Business Schedule Presets
# =============================================================================

# Monday-Friday
WEEKDAYS_9AM = CronExpression.parse("0 9 * * 1-5")
WEEKDAYS_6PM = CronExpression.parse("0 18 * * 1-5")

# Every 15 minutes, 9:00 to 17:45, Monday-Friday
BUSINESS_HOURS_15MIN = CronExpression.parse("*/15 9-17 * * 1-5")

BUSINESS_HOURS_HOURLY = CronExpression.parse("0 9-17 * * 1-5")

FIRST_OF_MONTH = CronExpression.parse("0 6 1 * *")


# =============================================================================
# Interval Presets
# =============================================================================

EVERY_5_MIN = CronExpression.parse("*/5 * * * *")
EVERY_15_MIN = CronExpression.parse("*/15 * * * *")
EVERY_30_MIN = CronExpression.parse("*/30 * * * *")
EVERY_2_HOURS = CronExpression.parse("0 */2 * * *")
EVERY_6_HOURS = CronExpression.parse("0 */6 * * *")
TWICE_DAILY = CronExpression.parse("0 0,12 * * *")


# =============================================================================
# Off-hours Presets
# =============================================================================

# Saturday and Sunday
WEEKENDS_NOON = CronExpression.parse("0 12 * * 6-7")

NIGHTLY_2AM = CronExpression.parse("0 2 * * *")

# Overnight window 22:00 to 04:00, on the hour
OVERNIGHT_HOURLY = CronExpression.parse("0 22-4 * * *")

SUNDAY_MAINTENANCE = CronExpression.parse("0 3 * * sun")

# First day of each quarter
QUARTERLY = CronExpression.parse("0 0 1 */3 *")


# =============================================================================
# Preset Registry
# =============================================================================

PRESETS: dict[str, CronExpression] = {
    # Standard
    "yearly": YEARLY,
    "annually": ANNUALLY,
    "monthly": MONTHLY,
    "weekly": WEEKLY,
    "daily": DAILY,
    "midnight": MIDNIGHT,
    "hourly": HOURLY,
    "every_minute": EVERY_MINUTE,
    # Business
    "weekdays_9am": WEEKDAYS_9AM,
    "weekdays_6pm": WEEKDAYS_6PM,
    "business_hours_15min": BUSINESS_HOURS_15MIN,
    "business_hours_hourly": BUSINESS_HOURS_HOURLY,
    "first_of_month": FIRST_OF_MONTH,
    # Intervals
    "every_5_min": EVERY_5_MIN,
    "every_15_min": EVERY_15_MIN,
    "every_30_min": EVERY_30_MIN,
    "every_2_hours": EVERY_2_HOURS,
    "every_6_hours": EVERY_6_HOURS,
    "twice_daily": TWICE_DAILY,
    # Off-hours
    "weekends_noon": WEEKENDS_NOON,
    "nightly_2am": NIGHTLY_2AM,
    "overnight_hourly": OVERNIGHT_HOURLY,
    "sunday_maintenance": SUNDAY_MAINTENANCE,
    "quarterly": QUARTERLY,
}


def get_preset(name: str) -> CronExpression | None:
    """Get a preset cron expression by name.

    Args:
        name: Preset name (case-insensitive, ``-`` and ``_`` interchangeable).

    Returns:
        CronExpression or None if not found.
    """
    return PRESETS.get(name.lower().replace("-", "_"))


def list_presets() -> list[str]:
    """List all available preset names."""
    return list(PRESETS.keys())
