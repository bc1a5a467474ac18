"""
Timetrack Summary.

PURPOSE: Render the per-user summary dashboard of a coding time tracker.
AI CONTEXT: This package resolves the reporting interval, loads aggregated
usage data and assembles the view model handed to the templates.

PACKAGE STRUCTURE:
- config.py: Runtime settings and color tables
- interval.py: Interval selection (query vs cookie vs default)
- params.py: Parsing of interval tokens and from/to bounds
- colors.py: Color annotation of summary categories
- loader.py: Summary loading boundary (result + status)
- presenters.py: Success / error view models
- storage.py: JSON-backed summary service
- web/: FastAPI app, routes, controller, auth and templates

QUICK START:
    # Serve the dashboard
    python -m timetrack_summary serve --port 3000

    # Development mode (templates reloaded on every request)
    python -m timetrack_summary serve --dev
"""

from timetrack_summary.__version__ import (
    __author__,
    __copyright__,
    __description__,
    __license__,
    __title__,
    __url__,
    __version__,
    __version_date__,
)

__all__ = [
    "__version__",
    "__version_date__",
    "__title__",
    "__description__",
    "__url__",
    "__author__",
    "__license__",
    "__copyright__",
]
