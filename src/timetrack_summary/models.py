"""
Data models for Timetrack Summary.

PURPOSE: Typed containers for principals, summary parameters and summaries.
AI CONTEXT: Pure data - no I/O. Summaries are produced by a SummaryService
and only read by the presentation layer.

MODELS:
- Principal: Authenticated user attached to a request
- SummaryParams: Resolved reporting window for one request
- SummaryItem: Time spent on one category value (e.g. language "Python")
- Summary: Aggregated usage for one user and one window
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

__all__ = [
    "Principal",
    "SummaryParams",
    "SummaryItem",
    "Summary",
    "SUMMARY_KINDS",
]

SUMMARY_KINDS: tuple[str, ...] = (
    "projects",
    "editors",
    "languages",
    "operating_systems",
    "machines",
)


@dataclass(frozen=True)
class Principal:
    """
    Authenticated identity attached to a request.

    Never constructed by the page controller; only produced by the
    authentication layer and read afterwards.
    """

    user_id: str
    api_key: str

    def __repr__(self) -> str:
        # Keep API keys out of logs
        return f"Principal(user_id={self.user_id!r})"


@dataclass(frozen=True)
class SummaryParams:
    """Reporting window resolved from the query string."""

    from_time: datetime
    to_time: datetime
    interval: str | None = None
    recompute: bool = False

    @property
    def is_symbolic(self) -> bool:
        """True when the window came from an interval token rather than from/to."""
        return self.interval is not None


@dataclass(frozen=True)
class SummaryItem:
    """Total time spent on one category value."""

    key: str
    total_seconds: float

    @property
    def duration_display(self) -> str:
        """
        Format total time as "Xh Ym" or "Ym".

        Example:
            >>> SummaryItem("Python", 5400).duration_display
            '1h 30m'
        """
        minutes = int(self.total_seconds // 60)
        hours, minutes = divmod(minutes, 60)
        if hours:
            return f"{hours}h {minutes}m"
        return f"{minutes}m"


@dataclass
class Summary:
    """
    Aggregated usage for one user within one reporting window.

    Each category collection is a list of SummaryItem sorted by time spent,
    most used first.
    """

    user_id: str
    from_time: datetime
    to_time: datetime
    projects: list[SummaryItem] = field(default_factory=list)
    editors: list[SummaryItem] = field(default_factory=list)
    languages: list[SummaryItem] = field(default_factory=list)
    operating_systems: list[SummaryItem] = field(default_factory=list)
    machines: list[SummaryItem] = field(default_factory=list)

    def items(self, kind: str) -> list[SummaryItem]:
        """Return the item list for a kind from SUMMARY_KINDS."""
        if kind not in SUMMARY_KINDS:
            raise KeyError(kind)
        items: list[SummaryItem] = getattr(self, kind)
        return items

    def total_seconds(self) -> float:
        """
        Total tracked time in the window.

        Every heartbeat is attributed to exactly one project, so the project
        totals add up to the overall time. Falls back to languages when no
        project data is present.
        """
        source = self.projects or self.languages
        return sum(item.total_seconds for item in source)

    def percentages(self, kind: str) -> dict[str, float]:
        """
        Share of each category value within its kind, in percent.

        Example:
            >>> s = Summary("u", now, now, languages=[SummaryItem("Go", 30),
            ...                                       SummaryItem("Python", 90)])
            >>> s.percentages("languages")
            {'Go': 25.0, 'Python': 75.0}
        """
        items = self.items(kind)
        total = sum(item.total_seconds for item in items)
        if total <= 0:
            return {item.key: 0.0 for item in items}
        return {item.key: round(item.total_seconds / total * 100, 1) for item in items}

    def __iter__(self) -> Iterator[tuple[str, list[SummaryItem]]]:
        for kind in SUMMARY_KINDS:
            yield kind, self.items(kind)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible dict (used by the template's chart data)."""
        result: dict[str, Any] = {
            "user_id": self.user_id,
            "from": self.from_time.isoformat(),
            "to": self.to_time.isoformat(),
        }
        for kind, items in self:
            result[kind] = [{"key": i.key, "total": i.total_seconds} for i in items]
        return result
