"""
FastAPI application for the summary dashboard.

PURPOSE: Main application factory and server runner.
AI CONTEXT: Creates app with all routes registered and collaborators
wired onto app.state.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from ..__version__ import __version__
from ..config import Config
from ..loader import ServiceSummaryLoader, SummaryLoader
from ..storage import JsonSummaryStore, SummaryService
from .auth import AuthenticationRequired, UserStore
from .controller import SummaryController
from .messages import flash
from .routes import router
from .templates import TemplateRegistry

__all__ = ["create_app", "run_dashboard"]

logger = logging.getLogger(__name__)

SESSION_COOKIE = "timetrack_session"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """
    Manage application lifecycle with startup/shutdown hooks.

    Business context: Startup logging records the mode and base path the
    dashboard is serving, which is the first thing to check when links
    break behind a reverse proxy.

    Args:
        app: The FastAPI application instance (provided by FastAPI).

    Yields:
        None. Control returns to FastAPI to handle requests.
    """
    config: Config = app.state.config
    logger.info(
        f"Timetrack summary dashboard starting (v{__version__}, "
        f"{config.environment} mode, base path '{config.base_path or '/'}')"
    )
    yield
    logger.info("Timetrack summary dashboard shutting down")


async def _redirect_unauthenticated(
    request: Request, exc: AuthenticationRequired
) -> RedirectResponse:
    """Flash the auth failure and send the visitor to the error target."""
    flash(request, "error", exc.message)
    return RedirectResponse(exc.redirect_target, status_code=302)


def create_app(
    config: Config | None = None,
    summary_service: SummaryService | None = None,
    user_store: UserStore | None = None,
    loader: SummaryLoader | None = None,
    templates: TemplateRegistry | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI dashboard application.

    Factory function wiring configuration, data access, authentication and
    templates into a new app. Every collaborator can be injected, which is
    how the tests run the app against in-memory data.

    Business context: The app serves the summary page of a self-hosted
    coding time tracker. Configuration is resolved once here and passed to
    the controller explicitly.

    Args:
        config: Settings. Defaults to Config.from_env().
        summary_service: Backing summaries. Defaults to a JsonSummaryStore
            on config.summaries_file.
        user_store: API key lookup. Defaults to UserStore.from_file on
            config.users_file.
        loader: Summary loader. Defaults to ServiceSummaryLoader over
            summary_service.
        templates: Template registry. Defaults to the bundled templates,
            reloaded per request in dev mode.

    Returns:
        Configured FastAPI application with:
        - Landing page and summary routes mounted under config.base_path
        - Signed session cookie for flash messages
        - Redirect handler for unauthenticated requests

    Raises:
        ConfigError: If configuration, colors or users cannot be loaded.

    Example:
        >>> from fastapi.testclient import TestClient
        >>> client = TestClient(create_app(Config(), summary_service=store, user_store=users))
        >>> client.get("/summary", headers={"Authorization": "Bearer key"}).status_code
        200
    """
    config = config or Config.from_env()
    if summary_service is None:
        summary_service = JsonSummaryStore(config.summaries_file)
    if user_store is None:
        user_store = UserStore.from_file(config.users_file)
    if loader is None:
        loader = ServiceSummaryLoader(summary_service)
    if templates is None:
        templates = TemplateRegistry(
            reload_on_access=config.is_dev(),
            globals={"version": __version__, "base_path": config.base_path},
        )

    app = FastAPI(
        title="Timetrack Summary",
        description="Summary dashboard of a self-hosted coding time tracker",
        version=__version__,
        lifespan=lifespan,
        debug=config.is_dev(),
    )
    app.state.config = config
    app.state.user_store = user_store
    app.state.summary_controller = SummaryController(config, loader, templates)

    app.add_middleware(
        SessionMiddleware,
        secret_key=config.session_secret,
        session_cookie=SESSION_COOKIE,
        path=config.base_path or "/",
    )
    app.add_exception_handler(AuthenticationRequired, _redirect_unauthenticated)  # type: ignore[arg-type]

    app.include_router(router, prefix=config.base_path)

    return app


def run_dashboard(
    host: str = Config.DEFAULT_HOST,
    port: int = Config.DEFAULT_PORT,
    reload: bool = False,
    log_level: str = "info",
) -> None:
    """
    Launch the summary dashboard server.

    Starts a uvicorn ASGI server with create_app as factory; configuration
    is read from TIMETRACK_* environment variables in the server process.

    Args:
        host: Network interface to bind to.
        port: TCP port for the HTTP server.
        reload: Restart the server on code changes (development only).
        log_level: Uvicorn logging verbosity.

    Returns:
        None. Blocks until the server is stopped (Ctrl+C).

    Raises:
        OSError: If the port is already in use or host is invalid.
    """
    uvicorn.run(
        "timetrack_summary.web.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )
