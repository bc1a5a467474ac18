"""
Exception hierarchy for Timetrack Summary.

PURPOSE: Typed failures raised by configuration, parsing and data access.
AI CONTEXT: Per-request failures are caught by the loader and turned into
an error-shaped view model; only ConfigError escapes at startup.
"""

from __future__ import annotations

__all__ = [
    "TimetrackError",
    "ConfigError",
    "ParamParseError",
    "SummaryServiceError",
]


class TimetrackError(Exception):
    """Base class for all Timetrack Summary errors."""


class ConfigError(TimetrackError):
    """Configuration could not be loaded or is invalid."""


class ParamParseError(TimetrackError):
    """The interval, from or to query parameter is malformed."""


class SummaryServiceError(TimetrackError):
    """The backing summary service failed to produce a summary."""
