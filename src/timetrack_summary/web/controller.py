"""
Summary page controller.

PURPOSE: Orchestrate one summary page request from query string to
rendered response.
AI CONTEXT: All collaborators (config, loader, templates, presenter) are
injected at construction; nothing is looked up globally per request.

STATE MACHINE:
    Start -> IntervalResolved
        -> Redirected                      (302, nothing rendered)
        -> ParamsReady -> LoadFailed       (summary.html, loader status)
                       -> Loaded -> Unauthorized (summary.html, 401)
                                 -> Success      (summary.html, 200)
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import TYPE_CHECKING

from starlette.responses import HTMLResponse, RedirectResponse, Response

from ..config import Config
from ..interval import NoOp, Redirect, SetCookie, resolve_interval
from ..presenters import LandingViewModel, SummaryErrorViewModel, SummaryPresenter
from .auth import get_principal
from .messages import attach_session_messages, pop_session_messages

if TYPE_CHECKING:
    from starlette.datastructures import QueryParams
    from starlette.requests import Request

    from ..interval import IntervalAction
    from ..loader import SummaryLoader
    from .templates import TemplateRegistry

__all__ = ["SummaryController"]

logger = logging.getLogger(__name__)


def _first_values(query_params: QueryParams) -> dict[str, str]:
    """Collapse repeated query keys to their first value."""
    params: dict[str, str] = {}
    for key, value in query_params.multi_items():
        params.setdefault(key, value)
    return params


class SummaryController:
    """
    Handles GET requests for the summary page and the landing page.

    Business context: The summary page is what users open every day to see
    where their coding time went. It must remember the chosen interval and
    always render its chrome, even when loading fails.
    """

    def __init__(
        self,
        config: Config,
        loader: SummaryLoader,
        templates: TemplateRegistry,
        presenter: SummaryPresenter | None = None,
    ) -> None:
        """
        Args:
            config: Base path and color tables.
            loader: Loads summaries for resolved parameters.
            templates: Registry rendering summary.html and index.html.
            presenter: View model builder. Defaults to SummaryPresenter(config).
        """
        self._config = config
        self._loader = loader
        self._templates = templates
        self._presenter = presenter or SummaryPresenter(config)

    def get_index(self, request: Request) -> Response:
        """
        Serve the summary page.

        Resolves the interval first. A redirect ends the request right
        away; otherwise the summary is loaded, a view model built and
        summary.html rendered with the matching status. A cookie-set
        instruction is applied to whatever page is rendered.

        Args:
            request: Incoming request; the principal, if any, was attached
                by the authentication dependency.

        Returns:
            RedirectResponse (302) or HTMLResponse (200, 400, 401, 500).

        Example:
            >>> # GET /summary with cookie PersistentIntervalKey=week
            >>> controller.get_index(request).headers["location"]
            '/summary?interval=week'
        """
        raw_query = request.url.query
        resolution = resolve_interval(
            _first_values(request.query_params),
            request.cookies.get(Config.PERSISTENT_INTERVAL_KEY),
            self._config.base_path,
        )

        action = resolution.action
        if isinstance(action, Redirect):
            logger.debug(f"Replaying persisted interval: {action.url}")
            return RedirectResponse(action.url, status_code=HTTPStatus.FOUND)

        principal = get_principal(request)
        result = self._loader.load(resolution.params, principal)
        if not result.ok:
            server_side = result.status >= HTTPStatus.INTERNAL_SERVER_ERROR
            level = logging.ERROR if server_side else logging.INFO
            logger.log(
                level,
                f"{request.method} {request.url.path} - failed to load summary "
                f"({int(result.status)}) - {result.error}",
            )

        view_model = self._presenter.build(result, resolution.params, principal, raw_query)
        if isinstance(view_model, SummaryErrorViewModel):
            attach_session_messages(view_model, request)
            status = view_model.status
        else:
            status = HTTPStatus.OK

        html = self._templates.render(
            Config.SUMMARY_TEMPLATE,
            view_model,
            base_path=self._config.base_path,
        )
        response = HTMLResponse(content=html, status_code=int(status))
        self._apply_action(response, action)
        return response

    def get_landing(self, request: Request) -> Response:
        """Serve the landing page showing pending session messages."""
        view_model = LandingViewModel(
            messages=pop_session_messages(request),
            error=request.query_params.get("error") or None,
        )
        html = self._templates.render(
            Config.INDEX_TEMPLATE,
            view_model,
            base_path=self._config.base_path,
        )
        return HTMLResponse(content=html)

    def _apply_action(self, response: Response, action: IntervalAction) -> None:
        if isinstance(action, SetCookie):
            response.set_cookie(
                action.name,
                action.value,
                path=self._config.base_path or "/",
            )
        elif isinstance(action, NoOp):
            return
        else:
            raise TypeError(f"Unexpected interval action on a rendered page: {action!r}")
