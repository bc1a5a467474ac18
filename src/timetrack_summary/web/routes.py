"""
FastAPI routes for the summary dashboard.

PURPOSE: Thin route handlers that delegate to the SummaryController.
AI CONTEXT: Routes should be simple - logic lives in the controller,
interval resolver and presenter.

ROUTE STRUCTURE (relative to the configured base path):
- /         : Landing page (error redirect target, shows session messages)
- /summary  : Summary page (authenticated)
- /summary/ : Same handler, trailing-slash registration
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response

from .auth import require_principal
from .controller import SummaryController

__all__ = ["router", "get_summary_controller"]

router = APIRouter()


def get_summary_controller(request: Request) -> SummaryController:
    """
    Return the controller built by create_app().

    The controller is created once per application with explicit
    configuration and stored on app.state.

    Returns:
        SummaryController shared by all requests of this app.
    """
    controller: SummaryController = request.app.state.summary_controller
    return controller


@router.get("/", response_class=HTMLResponse)
async def landing_page(
    request: Request,
    controller: Annotated[SummaryController, Depends(get_summary_controller)],
) -> Response:
    """
    Render the landing page.

    Unauthenticated visitors of /summary end up here with
    ?error=unauthorized and a flashed session message.
    """
    return controller.get_landing(request)


@router.get(
    "/summary",
    response_class=HTMLResponse,
    dependencies=[Depends(require_principal)],
)
@router.get(
    "/summary/",
    response_class=HTMLResponse,
    dependencies=[Depends(require_principal)],
    include_in_schema=False,
)
async def summary_page(
    request: Request,
    controller: Annotated[SummaryController, Depends(get_summary_controller)],
) -> Response:
    """
    Render the summary page for the authenticated user.

    Business context: This is the main page of the dashboard. It shows
    time per project, editor, language, operating system and machine for
    the selected interval and remembers that interval in a cookie.

    Args:
        request: Incoming request (query string and cookies).
        controller: SummaryController injected via FastAPI Depends.

    Returns:
        302 redirect replaying the persisted interval, or the rendered
        summary page with status 200, 400, 401 or 500.

    Example:
        >>> # GET /summary?interval=week
        >>> # Returns: summary page, Set-Cookie: PersistentIntervalKey=week
    """
    return controller.get_index(request)
