"""Utility helpers for the preview store."""

from iap_preview.utils.period import (
    DAYS_PER_MONTH,
    DAYS_PER_WEEK,
    DAYS_PER_YEAR,
    format_iso8601_period,
    parse_iso8601_period,
    period_to_timedelta,
    validate_iso8601_period,
)

__all__ = [
    "DAYS_PER_WEEK",
    "DAYS_PER_MONTH",
    "DAYS_PER_YEAR",
    "parse_iso8601_period",
    "format_iso8601_period",
    "period_to_timedelta",
    "validate_iso8601_period",
]
