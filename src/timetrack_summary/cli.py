"""
CLI entry point for Timetrack Summary.

PURPOSE: Command-line interface for running the dashboard server.
AI CONTEXT: Main entry point for package execution.

USAGE:
    # Serve the dashboard (default)
    python -m timetrack_summary

    # Or via CLI command (after install)
    timetrack-summary serve --host 0.0.0.0 --port 3000
    timetrack-summary serve --dev        # Reload templates on every request
"""

from __future__ import annotations

import argparse
import logging
import os
from functools import lru_cache

from .config import Config

LOG_LEVELS = ("critical", "error", "warning", "info", "debug", "trace")


@lru_cache(maxsize=1)
def _get_logger() -> logging.Logger:
    """Get module logger (cached for thread safety)."""
    logging.basicConfig(level=logging.INFO)
    return logging.getLogger(__name__)


def _log(message: str, *, emoji: str = "") -> None:
    """Log message with optional emoji prefix for CLI output.

    Args:
        message: The message to log.
        emoji: Optional emoji prefix for visual CLI feedback.
    """
    prefix = f"{emoji} " if emoji else ""
    _get_logger().info(f"{prefix}{message}")


def run_serve(
    host: str = Config.DEFAULT_HOST,
    port: int = Config.DEFAULT_PORT,
    dev: bool = False,
    log_level: str = "info",
) -> None:
    """
    Launch the summary dashboard.

    Starts the uvicorn server hosting the FastAPI app. The app itself reads
    its settings from TIMETRACK_* environment variables; --dev sets
    TIMETRACK_ENV=dev so templates are reloaded before every request.

    Business context: Self-hosters run the dashboard next to the tracking
    backend. Development mode lets template authors edit HTML and refresh
    the browser without restarting the server.

    Args:
        host: Network interface to bind to.
        port: TCP port for the HTTP server.
        dev: Enable development mode (template hot-reload, debug errors).
        log_level: Uvicorn log level.

    Returns:
        None. Blocks until server shutdown (Ctrl+C).

    Raises:
        OSError: If port is already in use.

    Example:
        >>> # From command line:
        >>> # timetrack-summary serve --port 8080 --dev
        >>> run_serve(port=8080, dev=True)
        🚀 Starting dashboard at http://127.0.0.1:8080 (dev mode)
    """
    from .web import run_dashboard

    if dev:
        os.environ["TIMETRACK_ENV"] = Config.ENV_DEV
    mode = "dev" if dev else os.environ.get("TIMETRACK_ENV", Config.ENV_PRODUCTION)

    _log(f"Starting dashboard at http://{host}:{port} ({mode} mode)", emoji="🚀")
    _log("Press Ctrl+C to stop")
    run_dashboard(host=host, port=port, log_level=log_level)


def main(argv: list[str] | None = None) -> int:
    """
    Main CLI entry point for Timetrack Summary.

    Parses command-line arguments and dispatches to the subcommand
    handler. Without a subcommand the dashboard is served with defaults.

    Subcommands:
    - serve [--host HOST] [--port PORT] [--dev] [--log-level LEVEL]

    Args:
        argv: Argument list; defaults to sys.argv[1:].

    Returns:
        Exit code 0 for success.

    Raises:
        SystemExit: On --help, --version or argument parsing errors.

    Example:
        >>> sys.exit(main(["serve", "--port", "8080"]))
    """
    from .__version__ import __version__

    parser = argparse.ArgumentParser(
        prog="timetrack-summary",
        description="Timetrack Summary - per-user coding time dashboard",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve the summary dashboard",
    )
    serve_parser.add_argument(
        "--host",
        default=os.environ.get("TIMETRACK_HOST", Config.DEFAULT_HOST),
        help=f"Bind address (default: {Config.DEFAULT_HOST})",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("TIMETRACK_PORT", Config.DEFAULT_PORT)),
        help=f"Port number (default: {Config.DEFAULT_PORT})",
    )
    serve_parser.add_argument(
        "--dev",
        action="store_true",
        help="Development mode: reload templates on every request",
    )
    serve_parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="info",
        help="Server log level (default: info)",
    )

    args = parser.parse_args(argv)

    if args.command == "serve":
        run_serve(host=args.host, port=args.port, dev=args.dev, log_level=args.log_level)
    else:
        # Default: serve with defaults
        run_serve()

    return 0
