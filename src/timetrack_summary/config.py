"""
Configuration for Timetrack Summary.

PURPOSE: Centralized configuration constants and runtime settings.
AI CONTEXT: A Config instance is built once at startup and handed to the
controller; request handlers never reach for a global configuration.

CONFIGURATION CATEGORIES:
- Server: Environment, bind address, base path prefix, session secret
- Data: Users file (API keys) and pre-aggregated summaries file
- Colors: Editor, language and operating system color tables

ENVIRONMENT VARIABLES:
- TIMETRACK_ENV: "dev" or "production" (default: production)
- TIMETRACK_BASE_PATH: URL prefix the app is mounted under (default: "")
- TIMETRACK_HOST / TIMETRACK_PORT: Bind address (default: 127.0.0.1:3000)
- TIMETRACK_SESSION_SECRET: Key signing the session cookie
- TIMETRACK_COLORS_FILE: JSON color tables (default: bundled data/colors.json)
- TIMETRACK_USERS_FILE: JSON users file (default: users.json)
- TIMETRACK_SUMMARIES_FILE: JSON summaries file (default: summaries.json)

USAGE:
    from timetrack_summary.config import Config
    config = Config.from_env()
    if config.is_dev():
        ...
"""

from __future__ import annotations

import json
import logging
import os
import secrets
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, ClassVar

from .errors import ConfigError

__all__ = ["Config", "ColorTables", "load_color_tables", "normalize_base_path"]

logger = logging.getLogger(__name__)

DEFAULT_COLORS_FILE = Path(__file__).parent / "data" / "colors.json"

_EMPTY: Mapping[str, str] = MappingProxyType({})


def _empty_table() -> Mapping[str, str]:
    return _EMPTY


def normalize_base_path(base_path: str) -> str:
    """
    Normalize a URL prefix to "" or "/prefix" without trailing slash.

    Args:
        base_path: Raw prefix, e.g. "", "/", "tracker/" or "/tracker".

    Returns:
        Normalized prefix suitable for string concatenation with "/summary".

    Example:
        >>> normalize_base_path("tracker/")
        '/tracker'
        >>> normalize_base_path("/")
        ''
    """
    stripped = base_path.strip().strip("/")
    return f"/{stripped}" if stripped else ""


@dataclass(frozen=True)
class ColorTables:
    """Read-only color tables, one per category kind, keyed by lower-case name."""

    editors: Mapping[str, str] = field(default_factory=_empty_table)
    languages: Mapping[str, str] = field(default_factory=_empty_table)
    operating_systems: Mapping[str, str] = field(default_factory=_empty_table)


def _freeze_table(raw: Any, section: str) -> Mapping[str, str]:
    if raw is None:
        return _EMPTY
    if not isinstance(raw, dict):
        raise ConfigError(f"Color section '{section}' must be an object")
    return MappingProxyType({str(k).lower(): str(v) for k, v in raw.items()})


def load_color_tables(path: str | Path | None = None) -> ColorTables:
    """
    Load editor, language and OS color tables from a JSON document.

    Business context: Each summary chart paints its categories with a stable
    color (Python is always the same blue). The tables are process-wide and
    read-only once loaded.

    Args:
        path: JSON file with "editors", "languages" and "operating_systems"
            objects. Defaults to the bundled data/colors.json.

    Returns:
        ColorTables with lower-cased keys wrapped in MappingProxyType.

    Raises:
        ConfigError: If the file cannot be read or is not valid JSON of the
            expected shape.

    Example:
        >>> tables = load_color_tables()
        >>> tables.languages["python"]
        '#3572a5'
    """
    colors_path = Path(path) if path else DEFAULT_COLORS_FILE
    try:
        with open(colors_path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read colors file {colors_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in colors file {colors_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Colors file {colors_path} must contain a JSON object")

    tables = ColorTables(
        editors=_freeze_table(data.get("editors"), "editors"),
        languages=_freeze_table(data.get("languages"), "languages"),
        operating_systems=_freeze_table(data.get("operating_systems"), "operating_systems"),
    )
    logger.debug(
        f"Loaded colors from {colors_path} ({len(tables.editors)} editors, "
        f"{len(tables.languages)} languages, "
        f"{len(tables.operating_systems)} operating systems)"
    )
    return tables


@dataclass(frozen=True)
class Config:
    """
    Immutable configuration container for Timetrack Summary.

    DESIGN: Frozen dataclass. Class-level constants describe protocol values
    that never change (cookie name, template names); instance fields carry
    deployment settings and are passed explicitly to the components that
    need them.

    ENVIRONMENTS:
    - dev: templates are reloaded from disk before every request
    - production: templates are loaded once at startup
    """

    # =========================================================================
    # PROTOCOL CONSTANTS
    # =========================================================================
    PERSISTENT_INTERVAL_KEY: ClassVar[str] = "PersistentIntervalKey"
    """Cookie remembering the last explicitly selected interval."""

    DEFAULT_INTERVAL: ClassVar[str] = "today"
    UNAUTHORIZED_MESSAGE: ClassVar[str] = "unauthorized"

    SUMMARY_TEMPLATE: ClassVar[str] = "summary.html"
    INDEX_TEMPLATE: ClassVar[str] = "index.html"

    ENV_DEV: ClassVar[str] = "dev"
    ENV_PRODUCTION: ClassVar[str] = "production"
    ENVIRONMENTS: ClassVar[frozenset[str]] = frozenset({"dev", "production"})

    DEFAULT_HOST: ClassVar[str] = "127.0.0.1"
    DEFAULT_PORT: ClassVar[int] = 3000

    # =========================================================================
    # DEPLOYMENT SETTINGS
    # =========================================================================
    environment: str = "production"
    base_path: str = ""
    host: str = "127.0.0.1"
    port: int = 3000
    session_secret: str = field(default_factory=lambda: secrets.token_urlsafe(32), repr=False)
    colors_file: str | None = None
    users_file: str = "users.json"
    summaries_file: str = "summaries.json"
    colors: ColorTables = field(default_factory=ColorTables)

    def __post_init__(self) -> None:
        if self.environment not in self.ENVIRONMENTS:
            raise ConfigError(
                f"Unknown environment '{self.environment}', "
                f"expected one of {sorted(self.ENVIRONMENTS)}"
            )
        object.__setattr__(self, "base_path", normalize_base_path(self.base_path))

    # =========================================================================
    # DERIVED VALUES
    # =========================================================================
    def is_dev(self) -> bool:
        """Return True when running in development mode."""
        return self.environment == self.ENV_DEV

    def error_redirect_target(self) -> str:
        """
        URL unauthenticated users are sent to.

        Returns:
            "<base_path>/?error=unauthorized"

        Example:
            >>> Config(base_path="/tracker").error_redirect_target()
            '/tracker/?error=unauthorized'
        """
        return f"{self.base_path}/?error={self.UNAUTHORIZED_MESSAGE}"

    def get_editor_colors(self) -> Mapping[str, str]:
        return self.colors.editors

    def get_language_colors(self) -> Mapping[str, str]:
        return self.colors.languages

    def get_os_colors(self) -> Mapping[str, str]:
        return self.colors.operating_systems

    # =========================================================================
    # CONSTRUCTION
    # =========================================================================
    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """
        Build configuration from TIMETRACK_* environment variables.

        Business context: Deployments configure the dashboard through the
        environment (container, systemd unit). Unset variables fall back to
        defaults suitable for a local single-user setup.

        Args:
            environ: Mapping to read from. Defaults to os.environ; tests pass
                a plain dict.

        Returns:
            Fully populated Config including loaded color tables.

        Raises:
            ConfigError: On an unknown environment, a non-numeric port or an
                unreadable colors file.

        Example:
            >>> config = Config.from_env({"TIMETRACK_ENV": "dev"})
            >>> config.is_dev()
            True
        """
        env = os.environ if environ is None else environ

        port_raw = env.get("TIMETRACK_PORT", str(cls.DEFAULT_PORT))
        try:
            port = int(port_raw)
        except ValueError as e:
            raise ConfigError(f"TIMETRACK_PORT must be an integer, got '{port_raw}'") from e

        colors_file = env.get("TIMETRACK_COLORS_FILE") or None
        session_secret = env.get("TIMETRACK_SESSION_SECRET")
        if not session_secret:
            logger.warning("TIMETRACK_SESSION_SECRET not set, using a random per-process secret")
            session_secret = secrets.token_urlsafe(32)

        return cls(
            environment=env.get("TIMETRACK_ENV", cls.ENV_PRODUCTION).lower(),
            base_path=env.get("TIMETRACK_BASE_PATH", ""),
            host=env.get("TIMETRACK_HOST", cls.DEFAULT_HOST),
            port=port,
            session_secret=session_secret,
            colors_file=colors_file,
            users_file=env.get("TIMETRACK_USERS_FILE", "users.json"),
            summaries_file=env.get("TIMETRACK_SUMMARIES_FILE", "summaries.json"),
            colors=load_color_tables(colors_file),
        )
