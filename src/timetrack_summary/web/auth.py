"""
Authentication for the web dashboard.

PURPOSE: Resolve the principal of a request from its API key and guard
authenticated routes.
AI CONTEXT: The summary controller only ever reads the principal through
get_principal(); it never authenticates by itself.

ACCEPTED CREDENTIALS (first match wins):
1. Authorization: Bearer <api_key>
2. Authorization: Basic <base64(api_key)>
3. ?api_key=<api_key> query parameter

USERS FILE (users.json):
    {"users": [{"id": "alice", "api_key": "..."}]}
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from collections.abc import Iterable
from pathlib import Path

from starlette.requests import Request

from ..config import Config
from ..errors import ConfigError
from ..models import Principal

__all__ = [
    "AuthenticationRequired",
    "UserStore",
    "get_principal",
    "require_principal",
]

logger = logging.getLogger(__name__)


class AuthenticationRequired(Exception):
    """Raised by require_principal; turned into a redirect by the app."""

    def __init__(self, redirect_target: str, message: str = Config.UNAUTHORIZED_MESSAGE) -> None:
        super().__init__(message)
        self.redirect_target = redirect_target
        self.message = message


class UserStore:
    """
    In-memory lookup of principals by API key.

    Business context: Each user of the tracker owns an API key that their
    editor plugins send with heartbeats. The same key unlocks the web
    dashboard.
    """

    def __init__(self, principals: Iterable[Principal] = ()) -> None:
        self._by_key: dict[str, Principal] = {p.api_key: p for p in principals}

    def __len__(self) -> int:
        return len(self._by_key)

    @classmethod
    def from_file(cls, path: str | Path) -> UserStore:
        """
        Load users from a JSON users file.

        A missing file yields an empty store (nobody can log in) and a
        warning, so a fresh install still starts.

        Raises:
            ConfigError: If the file exists but is not valid.
        """
        users_path = Path(path)
        if not users_path.exists():
            logger.warning(f"Users file not found: {users_path}, no user can sign in")
            return cls()
        try:
            with open(users_path, encoding="utf-8") as f:
                data = json.load(f)
            entries = data["users"] if isinstance(data, dict) else data
            principals = [Principal(user_id=str(u["id"]), api_key=str(u["api_key"])) for u in entries]
        except (OSError, json.JSONDecodeError, KeyError, TypeError) as e:
            raise ConfigError(f"Invalid users file {users_path}: {e}") from e
        logger.info(f"Loaded {len(principals)} user(s) from {users_path}")
        return cls(principals)

    def lookup(self, api_key: str) -> Principal | None:
        return self._by_key.get(api_key)

    def authenticate(self, request: Request) -> Principal | None:
        """Resolve the principal from the request's credentials, if any."""
        api_key = _api_key_from_request(request)
        if not api_key:
            return None
        return self.lookup(api_key)


def _api_key_from_request(request: Request) -> str | None:
    header = request.headers.get("authorization", "")
    scheme, _, credentials = header.partition(" ")
    credentials = credentials.strip()
    if scheme.lower() == "bearer" and credentials:
        return credentials
    if scheme.lower() == "basic" and credentials:
        try:
            return base64.b64decode(credentials, validate=True).decode("utf-8").strip()
        except (binascii.Error, UnicodeDecodeError):
            logger.debug("Ignoring malformed basic auth header")
            return None
    return request.query_params.get("api_key") or None


def get_principal(request: Request) -> Principal | None:
    """Principal attached to the request by require_principal, or None."""
    principal: Principal | None = getattr(request.state, "principal", None)
    return principal


def require_principal(request: Request) -> Principal:
    """
    FastAPI dependency guarding authenticated routes.

    Attaches the principal to request.state on success.

    Raises:
        AuthenticationRequired: When no valid API key is presented; the
            app redirects to the configured error target.
    """
    store: UserStore = request.app.state.user_store
    config: Config = request.app.state.config
    principal = store.authenticate(request)
    if principal is None:
        logger.info(f"Unauthenticated request to {request.url.path}")
        raise AuthenticationRequired(config.error_redirect_target())
    request.state.principal = principal
    return principal
