"""
Summary loading boundary.

PURPOSE: Load the summary for a request and report failures as data
(message + HTTP status) instead of exceptions.
AI CONTEXT: The controller treats any LoadResult with an error as terminal
for the request and renders an error-shaped view model with its status.

STATUS MAPPING:
- 200: Summary loaded
- 400: Malformed interval / from / to (ParamParseError)
- 401: No principal attached to the request
- 500: Summary service failure (SummaryServiceError)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from http import HTTPStatus
from typing import TYPE_CHECKING, Protocol

from .config import Config
from .errors import ParamParseError, SummaryServiceError
from .params import parse_summary_params

if TYPE_CHECKING:
    from .models import Principal, Summary
    from .storage import SummaryService

__all__ = ["LoadResult", "SummaryLoader", "ServiceSummaryLoader"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading a summary: either a summary or an error + status."""

    summary: Summary | None = None
    error: str | None = None
    status: int = HTTPStatus.OK

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: str, status: int) -> LoadResult:
        return cls(summary=None, error=error, status=status)


class SummaryLoader(Protocol):
    """Loads the summary described by the query for a principal."""

    def load(self, query: Mapping[str, str], principal: Principal | None) -> LoadResult: ...


class ServiceSummaryLoader:
    """
    SummaryLoader delegating to a SummaryService.

    Parses the reporting window from the effective query parameters, calls
    the service and converts every expected failure into a LoadResult.
    """

    def __init__(
        self,
        service: SummaryService,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Args:
            service: Backing summary service.
            clock: Returns the current time. Defaults to UTC now; tests
                inject a fixed clock.
        """
        self._service = service
        self._clock = clock or (lambda: datetime.now(UTC))

    def load(self, query: Mapping[str, str], principal: Principal | None) -> LoadResult:
        """
        Load the summary for principal within the window described by query.

        Business context: Loading is the only step of the summary page that
        touches backing data. Failures must never take the page down; they
        are rendered inline with the status returned here.

        Args:
            query: Effective query parameters after interval resolution.
            principal: Authenticated user, or None.

        Returns:
            LoadResult with a summary and status 200, or an error message
            with status 400, 401 or 500.

        Example:
            >>> loader = ServiceSummaryLoader(JsonSummaryStore("summaries.json"))
            >>> result = loader.load({"interval": "today"}, principal)
            >>> result.ok, result.status
            (True, 200)
        """
        if principal is None:
            return LoadResult.failure(Config.UNAUTHORIZED_MESSAGE, HTTPStatus.UNAUTHORIZED)

        try:
            params = parse_summary_params(query, now=self._clock())
        except ParamParseError as e:
            return LoadResult.failure(str(e), HTTPStatus.BAD_REQUEST)

        try:
            summary = self._service.summarize(
                params.from_time,
                params.to_time,
                principal,
                recompute=params.recompute,
            )
        except SummaryServiceError as e:
            logger.warning(f"Summary service failed for {principal.user_id}: {e}")
            return LoadResult.failure(str(e), HTTPStatus.INTERNAL_SERVER_ERROR)

        return LoadResult(summary=summary, status=HTTPStatus.OK)
