"""
Pytest configuration and shared fixtures for Timetrack Summary tests.

This module contains:
- StubSummaryService: In-memory SummaryService recording its calls
- make_request: Builds Starlette requests without a running server
- Shared fixtures available to all test modules
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest
from starlette.requests import Request

from timetrack_summary.config import ColorTables, Config
from timetrack_summary.errors import SummaryServiceError
from timetrack_summary.models import Principal, Summary, SummaryItem

FIXED_NOW = datetime(2024, 3, 14, 15, 30, tzinfo=UTC)
API_KEY = "a1b2c3d4-0000-4000-8000-000000000001"


class StubSummaryService:
    """
    In-memory summary service for testing.

    Returns the same Summary for every call (re-stamped with the requested
    window) or raises the configured error. Every call is recorded in
    ``calls`` as (from_time, to_time, principal, recompute).

    FEATURES:
    - No file I/O
    - Deterministic output
    - Failure injection via ``error``
    """

    def __init__(self, summary: Summary | None = None, error: Exception | None = None) -> None:
        """
        Initialize stub with an optional canned summary or error.

        Args:
            summary: Summary returned by summarize(). Defaults to an empty
                summary for the requesting user.
            error: Exception raised by summarize() instead of returning.
        """
        self.summary = summary
        self.error = error
        self.calls: list[tuple[datetime, datetime, Principal, bool]] = []

    def summarize(
        self,
        from_time: datetime,
        to_time: datetime,
        principal: Principal,
        recompute: bool = False,
    ) -> Summary:
        """
        Record the call and return the canned summary for the window.

        Raises:
            Exception: The configured ``error``, if any.
        """
        self.calls.append((from_time, to_time, principal, recompute))
        if self.error is not None:
            raise self.error
        base = self.summary or Summary(principal.user_id, from_time, to_time)
        return Summary(
            user_id=principal.user_id,
            from_time=from_time,
            to_time=to_time,
            projects=list(base.projects),
            editors=list(base.editors),
            languages=list(base.languages),
            operating_systems=list(base.operating_systems),
            machines=list(base.machines),
        )


def make_request(
    path: str = "/summary",
    query: str = "",
    cookies: dict[str, str] | None = None,
    principal: Principal | None = None,
) -> Request:
    """
    Build a GET request from a raw ASGI scope.

    Args:
        path: Request path.
        query: Raw query string without the leading "?".
        cookies: Cookies sent with the request.
        principal: Principal to attach as the auth dependency would.

    Returns:
        Starlette Request usable by the controller.
    """
    headers: list[tuple[bytes, bytes]] = []
    if cookies:
        cookie_header = "; ".join(f"{k}={v}" for k, v in cookies.items())
        headers.append((b"cookie", cookie_header.encode("latin-1")))
    scope: dict[str, Any] = {
        "type": "http",
        "method": "GET",
        "scheme": "http",
        "server": ("testserver", 80),
        "path": path,
        "root_path": "",
        "query_string": query.encode("latin-1"),
        "headers": headers,
        "state": {},
    }
    request = Request(scope)
    if principal is not None:
        request.state.principal = principal
    return request


@pytest.fixture
def principal() -> Principal:
    """Authenticated user "alice" with a fixed API key."""
    return Principal(user_id="alice", api_key=API_KEY)


@pytest.fixture
def color_tables() -> ColorTables:
    """Small color tables with lower-case keys as loaded from config."""
    return ColorTables(
        editors={"vscode": "#1e88e5", "vim": "#019833"},
        languages={"python": "#3572a5", "go": "#00add8", "rust": "#dea584"},
        operating_systems={"linux": "#f0db4f", "windows": "#0078d6"},
    )


@pytest.fixture
def config(color_tables: ColorTables) -> Config:
    """Production-mode config at the root path with test color tables."""
    return Config(session_secret="test-secret", colors=color_tables)


@pytest.fixture
def sample_summary() -> Summary:
    """Summary with data in every category, including an uncolored language."""
    return Summary(
        user_id="alice",
        from_time=datetime(2024, 3, 14, tzinfo=UTC),
        to_time=FIXED_NOW,
        projects=[SummaryItem("tracker", 5400), SummaryItem("dotfiles", 1800)],
        editors=[SummaryItem("VSCode", 7200)],
        languages=[
            SummaryItem("Python", 3600),
            SummaryItem("Go", 2700),
            SummaryItem("Brainfuck", 900),
        ],
        operating_systems=[SummaryItem("Linux", 7200)],
        machines=[SummaryItem("workstation", 7200)],
    )


@pytest.fixture
def stub_service(sample_summary: Summary) -> StubSummaryService:
    """Summary service returning sample_summary."""
    return StubSummaryService(summary=sample_summary)


@pytest.fixture
def failing_service() -> StubSummaryService:
    """Summary service that always fails."""
    return StubSummaryService(error=SummaryServiceError("database unavailable"))
