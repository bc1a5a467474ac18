"""
Summary parameter parsing.

PURPOSE: Turn the interval / from / to query parameters into a concrete
reporting window.
AI CONTEXT: Called by the summary loader and by the controller (for
display). Raises ParamParseError on malformed input; callers decide how to
surface it.

SUPPORTED INTERVALS (aliases in parentheses):
- today, yesterday
- week (this_week), month (this_month), year (this_year)
- 24_hours (last_24_hours, last_day)
- last_7_days (7_days), last_7_days_yesterday, last_14_days (14_days)
- last_30_days (30_days), last_6_months (6_months)
- last_12_months (12_months, last_year)
- any (all_time)
"""

from __future__ import annotations

import calendar
from collections.abc import Callable, Mapping
from datetime import UTC, date, datetime, timedelta

from .errors import ParamParseError
from .models import SummaryParams

__all__ = [
    "INTERVAL_ALIASES",
    "parse_summary_params",
    "resolve_interval_window",
    "parse_datetime",
]

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

INTERVAL_ALIASES: dict[str, str] = {
    "today": "today",
    "yesterday": "yesterday",
    "week": "week",
    "this_week": "week",
    "month": "month",
    "this_month": "month",
    "year": "year",
    "this_year": "year",
    "24_hours": "24_hours",
    "last_24_hours": "24_hours",
    "last_day": "24_hours",
    "last_7_days": "last_7_days",
    "7_days": "last_7_days",
    "last_7_days_yesterday": "last_7_days_yesterday",
    "last_14_days": "last_14_days",
    "14_days": "last_14_days",
    "last_30_days": "last_30_days",
    "30_days": "last_30_days",
    "last_6_months": "last_6_months",
    "6_months": "last_6_months",
    "last_12_months": "last_12_months",
    "12_months": "last_12_months",
    "last_year": "last_12_months",
    "any": "any",
    "all_time": "any",
}


def _begin_of_day(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def _shift_months(moment: datetime, months: int) -> datetime:
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


_WINDOWS: dict[str, Callable[[datetime], tuple[datetime, datetime]]] = {
    "today": lambda now: (_begin_of_day(now), now),
    "yesterday": lambda now: (
        _begin_of_day(now) - timedelta(days=1),
        _begin_of_day(now),
    ),
    "week": lambda now: (_begin_of_day(now) - timedelta(days=now.weekday()), now),
    "month": lambda now: (_begin_of_day(now).replace(day=1), now),
    "year": lambda now: (_begin_of_day(now).replace(month=1, day=1), now),
    "24_hours": lambda now: (now - timedelta(hours=24), now),
    "last_7_days": lambda now: (_begin_of_day(now) - timedelta(days=7), now),
    "last_7_days_yesterday": lambda now: (
        _begin_of_day(now) - timedelta(days=8),
        _begin_of_day(now) - timedelta(days=1),
    ),
    "last_14_days": lambda now: (_begin_of_day(now) - timedelta(days=14), now),
    "last_30_days": lambda now: (_begin_of_day(now) - timedelta(days=30), now),
    "last_6_months": lambda now: (_shift_months(_begin_of_day(now), -6), now),
    "last_12_months": lambda now: (_shift_months(_begin_of_day(now), -12), now),
    "any": lambda now: (EPOCH.astimezone(now.tzinfo), now),
}


def resolve_interval_window(interval: str, now: datetime) -> tuple[datetime, datetime]:
    """
    Map a symbolic interval token to a (from, to) window ending at now.

    Args:
        interval: Token or alias from INTERVAL_ALIASES (case-insensitive).
        now: Current time; its tzinfo defines where days begin.

    Returns:
        Tuple of (from_time, to_time).

    Raises:
        ParamParseError: If the token is unknown.

    Example:
        >>> now = datetime(2024, 3, 14, 15, 0, tzinfo=UTC)
        >>> resolve_interval_window("today", now)[0]
        datetime.datetime(2024, 3, 14, 0, 0, tzinfo=datetime.timezone.utc)
    """
    canonical = INTERVAL_ALIASES.get(interval.lower())
    if canonical is None:
        raise ParamParseError(f"invalid interval '{interval}'")
    return _WINDOWS[canonical](now)


def parse_datetime(value: str, tz: object, name: str) -> datetime:
    """
    Parse an ISO date or datetime query value.

    Naive values are interpreted in the given timezone.

    Raises:
        ParamParseError: If the value is not ISO 8601.
    """
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        try:
            parsed_date = date.fromisoformat(value)
        except ValueError as e:
            raise ParamParseError(f"invalid '{name}' parameter '{value}'") from e
        parsed = datetime(parsed_date.year, parsed_date.month, parsed_date.day)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)  # type: ignore[arg-type]
    return parsed


def parse_summary_params(
    query: Mapping[str, str],
    now: datetime | None = None,
) -> SummaryParams:
    """
    Parse summary query parameters into a reporting window.

    Business context: The dashboard links use symbolic intervals, while
    the date picker submits explicit from/to bounds. Both end up as a
    concrete window handed to the summary service.

    Args:
        query: Query parameters (interval, from, to, recompute).
        now: Reference time; defaults to the current UTC time.

    Returns:
        SummaryParams with from_time <= to_time.

    Raises:
        ParamParseError: On an unknown interval, a missing or malformed
            from/to value, or from after to.

    Example:
        >>> params = parse_summary_params({"interval": "week"})
        >>> params.interval
        'week'
        >>> parse_summary_params({"from": "2024-01-01", "to": "2024-01-31"}).is_symbolic
        False
    """
    now = now or datetime.now(UTC)
    recompute = query.get("recompute", "").lower() in ("true", "1")

    interval = query.get("interval", "")
    if interval:
        from_time, to_time = resolve_interval_window(interval, now)
        return SummaryParams(
            from_time=from_time,
            to_time=to_time,
            interval=interval,
            recompute=recompute,
        )

    from_value = query.get("from", "")
    if not from_value:
        raise ParamParseError("missing 'from' parameter")

    from_time = parse_datetime(from_value, now.tzinfo, "from")
    to_value = query.get("to", "")
    to_time = parse_datetime(to_value, now.tzinfo, "to") if to_value else now

    if from_time > to_time:
        raise ParamParseError("'from' must not be after 'to'")

    return SummaryParams(from_time=from_time, to_time=to_time, recompute=recompute)
