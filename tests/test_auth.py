"""Tests for web.auth module."""

from __future__ import annotations

import base64
import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

pytest.importorskip("fastapi")

from conftest import API_KEY, make_request  # noqa: E402

from timetrack_summary.config import Config  # noqa: E402
from timetrack_summary.errors import ConfigError  # noqa: E402
from timetrack_summary.models import Principal  # noqa: E402
from timetrack_summary.web.auth import (  # noqa: E402
    AuthenticationRequired,
    UserStore,
    get_principal,
    require_principal,
)


def _request_with_headers(headers: dict[str, str], query: str = ""):  # type: ignore[no-untyped-def]
    request = make_request(query=query)
    request.scope["headers"] = [(k.lower().encode(), v.encode()) for k, v in headers.items()]
    return request


@pytest.fixture
def store(principal: Principal) -> UserStore:
    return UserStore([principal])


class TestUserStoreLoading:
    """Tests for loading users from disk."""

    def test_from_file(self, tmp_path: Path) -> None:
        """Verifies users are loaded from the {"users": [...]} document.

        Business context:
        Each tracker user unlocks the dashboard with the API key their
        editor plugin already uses.
        """
        path = tmp_path / "users.json"
        path.write_text(
            json.dumps({"users": [{"id": "alice", "api_key": "k1"}, {"id": "bob", "api_key": "k2"}]}),
            encoding="utf-8",
        )

        store = UserStore.from_file(path)

        assert len(store) == 2
        assert store.lookup("k2") == Principal(user_id="bob", api_key="k2")

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        store = UserStore.from_file(tmp_path / "users.json")

        assert len(store) == 0

    def test_invalid_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "users.json"
        path.write_text(json.dumps({"users": [{"id": "alice"}]}), encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid users file"):
            UserStore.from_file(path)


class TestCredentialParsing:
    """Tests for reading API keys from requests."""

    def test_bearer_header(self, store: UserStore, principal: Principal) -> None:
        request = _request_with_headers({"Authorization": f"Bearer {API_KEY}"})

        assert store.authenticate(request) == principal

    def test_basic_header(self, store: UserStore, principal: Principal) -> None:
        encoded = base64.b64encode(API_KEY.encode()).decode()
        request = _request_with_headers({"Authorization": f"Basic {encoded}"})

        assert store.authenticate(request) == principal

    def test_malformed_basic_header(self, store: UserStore) -> None:
        request = _request_with_headers({"Authorization": "Basic !!!not-base64"})

        assert store.authenticate(request) is None

    def test_query_parameter(self, store: UserStore, principal: Principal) -> None:
        request = make_request(query=f"api_key={API_KEY}")

        assert store.authenticate(request) == principal

    def test_unknown_key(self, store: UserStore) -> None:
        request = _request_with_headers({"Authorization": "Bearer wrong"})

        assert store.authenticate(request) is None

    def test_no_credentials(self, store: UserStore) -> None:
        assert store.authenticate(make_request()) is None


class TestRequirePrincipal:
    """Tests for the route guard dependency."""

    def _with_app(self, request, store: UserStore, config: Config):  # type: ignore[no-untyped-def]
        app = MagicMock()
        app.state.user_store = store
        app.state.config = config
        request.scope["app"] = app
        return request

    def test_attaches_principal(
        self, store: UserStore, config: Config, principal: Principal
    ) -> None:
        """Verifies a valid key attaches the principal to request.state."""
        request = self._with_app(make_request(query=f"api_key={API_KEY}"), store, config)

        assert require_principal(request) == principal
        assert get_principal(request) == principal

    def test_rejects_with_redirect_target(self, store: UserStore) -> None:
        """Verifies a missing key raises with the base-path-aware error target."""
        config = Config(base_path="/tracker", session_secret="x")
        request = self._with_app(make_request(), store, config)

        with pytest.raises(AuthenticationRequired) as exc_info:
            require_principal(request)

        assert exc_info.value.redirect_target == "/tracker/?error=unauthorized"
        assert exc_info.value.message == "unauthorized"
        assert get_principal(request) is None
