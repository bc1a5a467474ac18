"""Version information for timetrack-summary."""

__version__ = "0.3.0"
__version_date__ = "2026-10-19"

__title__ = "timetrack_summary"
__description__ = "Summary dashboard page for a self-hosted coding time tracker"
__url__ = "https://github.com/timetrack-summary/timetrack-summary"

__author__ = "timetrack-summary contributors"

__license__ = "MIT"
__copyright__ = "Copyright 2026 timetrack-summary contributors"

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
