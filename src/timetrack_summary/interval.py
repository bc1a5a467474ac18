"""
Interval resolution for the summary page.

PURPOSE: Decide which reporting interval a request uses and which single
side effect (redirect, cookie or nothing) the response must carry.
AI CONTEXT: Pure function returning a tagged result. The controller maps
each tag to exactly one action, so a redirect can never be followed by a
render in the same request.

RESOLUTION ORDER (first match wins):
1. No interval and no from, cookie present -> Redirect to ?interval=<cookie>
2. No interval and no from, no cookie      -> interval defaults to "today"
3. Explicit interval                        -> SetCookie persisting it
4. Explicit from/to only                    -> NoOp
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from urllib.parse import urlencode

from .config import Config

__all__ = [
    "Redirect",
    "SetCookie",
    "NoOp",
    "IntervalAction",
    "IntervalResolution",
    "resolve_interval",
]


@dataclass(frozen=True)
class Redirect:
    """Send the browser elsewhere; nothing is rendered."""

    url: str


@dataclass(frozen=True)
class SetCookie:
    """Persist the selected interval in the browser."""

    name: str
    value: str


@dataclass(frozen=True)
class NoOp:
    """No side effect."""


IntervalAction = Redirect | SetCookie | NoOp


@dataclass(frozen=True)
class IntervalResolution:
    """Effective query parameters plus the one side effect to perform."""

    params: dict[str, str] = field(default_factory=dict)
    action: IntervalAction = field(default_factory=NoOp)

    @property
    def is_redirect(self) -> bool:
        return isinstance(self.action, Redirect)


def resolve_interval(
    query: Mapping[str, str],
    cookie_value: str | None,
    base_path: str = "",
) -> IntervalResolution:
    """
    Resolve the effective interval for a summary request.

    Business context: Users pick an interval ("last 7 days") once and
    expect the dashboard to remember it. The selection is persisted in the
    PersistentIntervalKey cookie whenever it is chosen explicitly, and a
    bare visit to /summary replays it through a redirect so the URL always
    reflects what is displayed.

    Args:
        query: Request query parameters. Empty values count as absent.
        cookie_value: Value of the PersistentIntervalKey cookie, or None.
            An empty cookie counts as absent.
        base_path: Normalized URL prefix the app is mounted under.

    Returns:
        IntervalResolution whose params are a fresh dict (the input mapping
        is never mutated) and whose action is exactly one of Redirect,
        SetCookie or NoOp. On Redirect the params equal the input unchanged.

    Example:
        >>> resolve_interval({}, "week").action
        Redirect(url='/summary?interval=week')
        >>> resolve_interval({}, None).params
        {'interval': 'today'}
        >>> resolve_interval({"interval": "month"}, None).action
        SetCookie(name='PersistentIntervalKey', value='month')
    """
    params = dict(query)
    interval = params.get("interval", "")
    from_value = params.get("from", "")

    if not interval and not from_value:
        if cookie_value:
            url = f"{base_path}/summary?{urlencode({'interval': cookie_value})}"
            return IntervalResolution(params=params, action=Redirect(url=url))
        params["interval"] = Config.DEFAULT_INTERVAL
        return IntervalResolution(params=params, action=NoOp())

    if interval:
        return IntervalResolution(
            params=params,
            action=SetCookie(name=Config.PERSISTENT_INTERVAL_KEY, value=interval),
        )

    return IntervalResolution(params=params, action=NoOp())
