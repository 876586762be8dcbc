"""ISO 8601 duration helpers for subscription periods.

Catalog fixtures describe subscription cadence as simple ISO 8601 durations
("P1M", "P1Y", "P2W", "P7D"). These helpers parse and format that subset and
convert it to a timedelta for date arithmetic.
"""

import re
from datetime import timedelta

# Day counts used for approximate period lengths
DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365

UNIT_DAYS = {
    "D": 1,
    "W": DAYS_PER_WEEK,
    "M": DAYS_PER_MONTH,
    "Y": DAYS_PER_YEAR,
}

_PERIOD_PATTERN = re.compile(r"^P(\d+)?([DWMY])$")


def parse_iso8601_period(period: str) -> tuple[int, str]:
    """Split an ISO 8601 duration into its count and unit letter.

    Supports P[n]D, P[n]W, P[n]M and P[n]Y. The count defaults to 1 when
    omitted ("PM" is one month).

    Args:
        period: Duration string such as "P1M"

    Returns:
        Tuple of (count, unit letter)

    Raises:
        ValueError: If the string is empty, malformed, or has a zero count

    Examples:
        >>> parse_iso8601_period("P1M")
        (1, 'M')
        >>> parse_iso8601_period("p2w")
        (2, 'W')
    """
    if not period or not isinstance(period, str):
        raise ValueError("Period must be a non-empty string")

    normalized = period.strip().upper()
    match = _PERIOD_PATTERN.match(normalized)
    if not match:
        raise ValueError(
            f"Unsupported period format: '{period}'. "
            "Supported formats: P[n]D, P[n]W, P[n]M, P[n]Y"
        )

    count_str, unit = match.groups()
    count = int(count_str) if count_str else 1
    if count <= 0:
        raise ValueError(f"Period count must be positive, got: {count}")

    return count, unit


def format_iso8601_period(count: int, unit: str) -> str:
    """Build an ISO 8601 duration from a count and unit letter."""
    unit = unit.upper()
    if unit not in UNIT_DAYS:
        raise ValueError(f"Unsupported unit: {unit}")
    if count <= 0:
        raise ValueError(f"Period count must be positive, got: {count}")
    return f"P{count}{unit}"


def period_to_timedelta(period: str) -> timedelta:
    """Approximate a duration string as a timedelta.

    Months count as 30 days and years as 365 days.

    Examples:
        >>> period_to_timedelta("P1W")
        datetime.timedelta(days=7)
    """
    count, unit = parse_iso8601_period(period)
    return timedelta(days=count * UNIT_DAYS[unit])


def validate_iso8601_period(period: str) -> bool:
    try:
        parse_iso8601_period(period)
        return True
    except (ValueError, TypeError):
        return False
