"""
Web dashboard module for Timetrack Summary.

PURPOSE: FastAPI-based summary page rendered with Jinja2 templates.

FEATURES:
- Interval selection remembered in a cookie
- API key authentication with redirect to the landing page
- Flash-style session messages
- Template hot-reload in development mode

USAGE:
    # Via CLI
    timetrack-summary serve

    # Programmatically
    from timetrack_summary.web import create_app
    app = create_app()
    # Run with uvicorn
"""

from .app import create_app, run_dashboard

__all__ = ["create_app", "run_dashboard"]
