"""
Presenters for the summary dashboard.

PURPOSE: Testable business logic layer between loaded data and templates.
AI CONTEXT: Pure data transformation - no I/O, no rendering.

DESIGN PRINCIPLES:
1. Presenters receive data, return view models (dataclasses)
2. A view model is either success-shaped or error-shaped, never both
3. Fully unit-testable without mocking
4. Session messages are attached to error view models only

USAGE:
    presenter = SummaryPresenter(config)
    view_model = presenter.build(result, query, principal, raw_query, messages)
    # view_model is SummaryViewModel or SummaryErrorViewModel
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qsl, urlencode

from .colors import filter_colors
from .config import Config
from .models import SummaryParams

if TYPE_CHECKING:
    from .loader import LoadResult
    from .models import Principal, Summary

__all__ = [
    "SessionMessage",
    "SummaryViewModel",
    "SummaryErrorViewModel",
    "PageViewModel",
    "LandingViewModel",
    "SummaryPresenter",
]

# Fallback when a category has no configured color
DEFAULT_COLOR = "#9e9e9e"


@dataclass(frozen=True)
class SessionMessage:
    """Flash-style message carried across a redirect in the session."""

    kind: str
    text: str


@dataclass
class SummaryViewModel:
    """View model of a successfully loaded summary page."""

    summary: Summary
    params: SummaryParams
    principal: Principal
    editor_colors: dict[str, str]
    language_colors: dict[str, str]
    os_colors: dict[str, str]
    api_key: str
    raw_query: str
    is_error: bool = field(default=False, init=False)

    def color_for(self, kind: str, key: str) -> str:
        """
        Color of one category value for chart rendering.

        Args:
            kind: "editors", "languages" or "operating_systems".
            key: Category name as it appears in the summary.

        Returns:
            Configured color, or DEFAULT_COLOR when none is configured.
        """
        tables = {
            "editors": self.editor_colors,
            "languages": self.language_colors,
            "operating_systems": self.os_colors,
        }
        return tables.get(kind, {}).get(key.lower(), DEFAULT_COLOR)

    @property
    def total_display(self) -> str:
        minutes = int(self.summary.total_seconds() // 60)
        hours, minutes = divmod(minutes, 60)
        return f"{hours}h {minutes}m" if hours else f"{minutes}m"

    @property
    def recompute_query(self) -> str:
        """
        Query string of the "Recompute" link.

        The current query with any existing recompute flag replaced by
        recompute=true, so repeated clicks keep a single flag.

        Example:
            >>> vm.raw_query = "interval=week&recompute=true"
            >>> vm.recompute_query
            'interval=week&recompute=true'
        """
        pairs = [
            (k, v)
            for k, v in parse_qsl(self.raw_query, keep_blank_values=True)
            if k != "recompute"
        ]
        pairs.append(("recompute", "true"))
        return urlencode(pairs)

    def chart_data(self) -> dict[str, Any]:
        """Summary plus color tables as a JSON-compatible dict for client-side charts."""
        data = self.summary.to_dict()
        data["colors"] = {
            "editors": self.editor_colors,
            "languages": self.language_colors,
            "operating_systems": self.os_colors,
        }
        return data


@dataclass
class SummaryErrorViewModel:
    """View model of a summary page that failed to load."""

    error: str
    status: int
    messages: list[SessionMessage] = field(default_factory=list)
    raw_query: str = ""
    is_error: bool = field(default=True, init=False)

    @property
    def errors(self) -> list[str]:
        """Loader error followed by any flashed error messages."""
        flashed = [m.text for m in self.messages if m.kind == "error" and m.text != self.error]
        return [self.error, *flashed]

    @property
    def notices(self) -> list[str]:
        return [m.text for m in self.messages if m.kind != "error"]


PageViewModel = SummaryViewModel | SummaryErrorViewModel


@dataclass
class LandingViewModel:
    """View model of the landing page unauthenticated users are sent to."""

    messages: list[SessionMessage] = field(default_factory=list)
    error: str | None = None

    @property
    def errors(self) -> list[str]:
        texts = [m.text for m in self.messages if m.kind == "error"]
        if self.error and self.error not in texts:
            texts.insert(0, self.error)
        return texts


class SummaryPresenter:
    """
    Builds summary page view models.

    Business context: The summary page always renders its chrome (header,
    interval picker) so users can recover from a bad interval or an outage
    without leaving the page. The presenter decides which of the two view
    model shapes a request gets.
    """

    def __init__(self, config: Config) -> None:
        """
        Args:
            config: Provides the editor, language and OS color tables.
        """
        self._config = config

    def build(
        self,
        result: LoadResult,
        query: Mapping[str, str],
        principal: Principal | None,
        raw_query: str,
        messages: Sequence[SessionMessage] = (),
    ) -> PageViewModel:
        """
        Build the view model for a loaded (or failed) summary.

        Decision order:
        1. Loader failed        -> error view model with loader message/status
        2. No principal         -> error view model "unauthorized" / 401
        3. Otherwise            -> success view model

        Args:
            result: Outcome of the summary loader.
            query: Effective query parameters used for loading.
            principal: Authenticated user, or None.
            raw_query: Original query string, kept for links.
            messages: Pending session messages; only error view models
                carry them.

        Returns:
            SummaryViewModel or SummaryErrorViewModel.

        Example:
            >>> vm = presenter.build(LoadResult.failure("boom", 500), {}, user, "")
            >>> vm.is_error, vm.status
            (True, 500)
        """
        if not result.ok:
            return self.build_error(
                result.error or "failed to load summary",
                result.status,
                messages,
                raw_query,
            )
        if principal is None or result.summary is None:
            return self.build_error(
                Config.UNAUTHORIZED_MESSAGE,
                HTTPStatus.UNAUTHORIZED,
                messages,
                raw_query,
            )
        return self.build_success(result.summary, query, principal, raw_query)

    def build_success(
        self,
        summary: Summary,
        query: Mapping[str, str],
        principal: Principal,
        raw_query: str,
    ) -> SummaryViewModel:
        """
        Compose the success view model with filtered color tables.

        The reported window is taken from the summary itself so the page
        shows exactly what was loaded.
        """
        params = SummaryParams(
            from_time=summary.from_time,
            to_time=summary.to_time,
            interval=query.get("interval") or None,
            recompute=query.get("recompute", "").lower() in ("true", "1"),
        )
        return SummaryViewModel(
            summary=summary,
            params=params,
            principal=principal,
            editor_colors=filter_colors(self._config.get_editor_colors(), summary.editors),
            language_colors=filter_colors(self._config.get_language_colors(), summary.languages),
            os_colors=filter_colors(self._config.get_os_colors(), summary.operating_systems),
            api_key=principal.api_key,
            raw_query=raw_query,
        )

    def build_error(
        self,
        error: str,
        status: int,
        messages: Sequence[SessionMessage] = (),
        raw_query: str = "",
    ) -> SummaryErrorViewModel:
        """Compose an error view model carrying pending session messages."""
        return SummaryErrorViewModel(
            error=error,
            status=int(status),
            messages=list(messages),
            raw_query=raw_query,
        )
