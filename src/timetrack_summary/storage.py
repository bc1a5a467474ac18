"""
Summary storage for Timetrack Summary.

PURPOSE: Serve pre-aggregated daily usage totals from a JSON file.
AI CONTEXT: Implements the SummaryService protocol consumed by the loader.
How the daily totals are computed from raw activity is owned elsewhere.

STORAGE FORMAT (summaries.json):
    {
        "<user_id>": [
            {
                "date": "2024-03-14",
                "projects": {"tracker": 5400},
                "editors": {"VS Code": 5400},
                "languages": {"Python": 3600, "Go": 1800},
                "operating_systems": {"Linux": 5400},
                "machines": {"workstation": 5400}
            }
        ]
    }

ERROR HANDLING STRATEGY:
- File not found: Every user has an empty summary
- JSON corruption / unreadable file: SummaryServiceError (request fails
  with an in-page error, server keeps running)
"""

from __future__ import annotations

import json
import logging
import os
from collections import defaultdict
from datetime import date, datetime, time
from typing import Any, Protocol

from .errors import SummaryServiceError
from .models import SUMMARY_KINDS, Principal, Summary, SummaryItem

__all__ = ["SummaryService", "JsonSummaryStore"]

logger = logging.getLogger(__name__)


class SummaryService(Protocol):
    """Produces aggregated summaries for a principal and a window."""

    def summarize(
        self,
        from_time: datetime,
        to_time: datetime,
        principal: Principal,
        recompute: bool = False,
    ) -> Summary:
        """
        Aggregate usage of principal between from_time and to_time.

        Raises:
            SummaryServiceError: If the data cannot be retrieved.
        """
        ...


class JsonSummaryStore:
    """
    SummaryService backed by a JSON file of daily totals.

    DESIGN PRINCIPLES:
    1. Fresh data: the parsed document is cached only while the file's
       modification time is unchanged
    2. recompute=True always rereads the file
    3. Read-only: the dashboard never writes summaries

    THREAD SAFETY:
    The cache is replaced, never mutated, so concurrent readers see either
    the old or the new document.
    """

    def __init__(self, path: str) -> None:
        """
        Initialize store for a summaries file.

        Args:
            path: Path to summaries.json. The file may not exist yet.
        """
        self.path = path
        self._cache: tuple[float, dict[str, Any]] | None = None

    def _load(self, force: bool) -> dict[str, Any]:
        try:
            mtime = os.path.getmtime(self.path)
        except FileNotFoundError:
            logger.debug(f"Summaries file not found: {self.path}")
            return {}
        except OSError as e:
            raise SummaryServiceError(f"failed to access summaries: {e}") from e

        cached = self._cache
        if not force and cached is not None and cached[0] == mtime:
            return cached[1]

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read summaries from {self.path}: {e}")
            raise SummaryServiceError(f"failed to read summaries: {e}") from e

        if not isinstance(data, dict):
            raise SummaryServiceError("summaries file must contain a JSON object")

        self._cache = (mtime, data)
        return data

    def summarize(
        self,
        from_time: datetime,
        to_time: datetime,
        principal: Principal,
        recompute: bool = False,
    ) -> Summary:
        """
        Merge the daily totals of principal that fall inside the window.

        A day is included when its midnight lies in [start of from_time's
        day, to_time). Category names keep their stored spelling; items are
        sorted by total time, most used first.

        Args:
            from_time: Window start.
            to_time: Window end (exclusive at day granularity).
            principal: User whose data is summarized.
            recompute: Bypass the cached document.

        Returns:
            Summary for the window; empty lists when there is no data.

        Raises:
            SummaryServiceError: If the file is unreadable or malformed.

        Example:
            >>> store = JsonSummaryStore("summaries.json")
            >>> summary = store.summarize(start, end, principal)
            >>> [i.key for i in summary.languages]
            ['Python', 'Go']
        """
        data = self._load(force=recompute)
        days = data.get(principal.user_id, [])
        if not isinstance(days, list):
            raise SummaryServiceError(f"summaries of user '{principal.user_id}' must be a list")

        window_start = from_time.replace(hour=0, minute=0, second=0, microsecond=0)
        totals: dict[str, dict[str, float]] = {kind: defaultdict(float) for kind in SUMMARY_KINDS}

        for day in days:
            try:
                day_date = date.fromisoformat(day["date"])
            except (KeyError, TypeError, ValueError) as e:
                raise SummaryServiceError(f"invalid day entry {day!r}") from e
            midnight = datetime.combine(day_date, time(), tzinfo=from_time.tzinfo)
            if not window_start <= midnight < to_time:
                continue
            try:
                for kind in SUMMARY_KINDS:
                    for key, seconds in (day.get(kind) or {}).items():
                        totals[kind][key] += float(seconds)
            except (AttributeError, TypeError, ValueError) as e:
                raise SummaryServiceError(f"invalid day entry {day!r}") from e

        def _items(kind: str) -> list[SummaryItem]:
            ranked = sorted(totals[kind].items(), key=lambda kv: (-kv[1], kv[0]))
            return [SummaryItem(key=k, total_seconds=v) for k, v in ranked]

        return Summary(
            user_id=principal.user_id,
            from_time=from_time,
            to_time=to_time,
            projects=_items("projects"),
            editors=_items("editors"),
            languages=_items("languages"),
            operating_systems=_items("operating_systems"),
            machines=_items("machines"),
        )
