from __future__ import annotations

import pytest

from stockdesk.app.application.state.session_state import SessionState
from stockdesk.sdk.auth_store import AuthStore
from stockdesk.sdk.config import ClientConfig
from stockdesk.sdk.http_client import HttpClient
from stockdesk.sdk.local_cache import USERS_KEY, LocalCache
from stockdesk.sdk.models import LoginResponse
from stockdesk.sdk.tracing import TraceContext
from tests.fakes import BASE_URL, FakeAuthClient, ManualScheduler

SEED_USERS = [
    {"id": "u1", "email": "admin@example.com", "name": "admin", "role": "admin"},
    {"id": "u2", "email": "jane@example.com", "name": "jane", "role": "user"},
]


@pytest.fixture
def cache(tmp_path) -> LocalCache:
    cache = LocalCache(base_dir=tmp_path / "cache")
    cache.set(USERS_KEY, [dict(record) for record in SEED_USERS])
    return cache


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def http() -> HttpClient:
    return HttpClient(ClientConfig(api_base_url=BASE_URL), trace=TraceContext())


@pytest.fixture
def admin_session(cache: LocalCache) -> SessionState:
    session = SessionState(FakeAuthClient(), cache, AuthStore(cache=cache))
    session.login("admin@example.com", "admin123", "admin")
    return session


@pytest.fixture
def user_session(cache: LocalCache) -> SessionState:
    auth = FakeAuthClient(LoginResponse(username="jane", role="user", token="tok-2"))
    session = SessionState(auth, cache, AuthStore(cache=cache))
    session.login("jane@example.com", "secret1", "user")
    return session
