"""
tests/conftest.py -- Shared test fixtures for ShopDesk integration tests.

This module provides:
  - _make_test_store(): creates an isolated in-memory user DB
  - _patch_lifespan(): wires the test store and settings into app.state
  - api_client: TestClient plus an admin JWT for API integration tests
  - make_token: issues tokens for arbitrary ids/roles with the app's secret

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs sync route handlers in a thread pool. Plain :memory:
DBs are per-connection and would present a blank schema to each worker thread.

Environment must be set before any api/auth/core import:
  DEBUG=true             -> get_settings() auto-generates SECRET_KEY
  BCRYPT_ROUNDS=4        -> minimum bcrypt cost keeps the suite fast
  LOGIN_RATE_LIMIT=...   -> high enough that repeated logins never hit 429
"""

from __future__ import annotations

import os
from collections.abc import Callable, Generator
from contextlib import asynccontextmanager

os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOGIN_RATE_LIMIT", "10000/minute")

import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.accounts import create_account
from auth.models import Role
from auth.store import UserStore
from auth.tokens import create_access_token
from core.config import Settings, get_settings

ADMIN_EMAIL = "admin@shopdesk.test"
ADMIN_PASSWORD = "adminpass123"


def _make_test_store(db_suffix: str) -> UserStore:
    """Create an isolated named shared-memory SQLite store.

    Args:
        db_suffix: Unique string appended to the DB name so test modules
                   don't share state.
    """
    return UserStore(f"sqlite:///file:test_users_{db_suffix}?mode=memory&cache=shared&uri=true")


def _patch_lifespan(user_store: UserStore, settings: Settings):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.settings = settings
        app.state.user_store = user_store
        yield

    return test_lifespan


@pytest.fixture(scope="session")
def settings() -> Settings:
    return get_settings()


@pytest.fixture(scope="session")
def make_token(settings: Settings) -> Callable[..., str]:
    """Return a helper that signs a token for any user id and role."""

    def _make(user_id: str, role: str, **kwargs) -> str:
        kwargs.setdefault("secret_key", settings.secret_key)
        kwargs.setdefault("expire_seconds", settings.token_expire_seconds)
        return create_access_token(user_id, role, **kwargs)

    return _make


@pytest.fixture(scope="module")
def api_client(
    request: pytest.FixtureRequest, settings: Settings, make_token
) -> Generator[tuple[TestClient, str, str], None, None]:
    """Yield (client, admin_token, admin_id) for API integration tests.

    Each test module gets its own store (named after the module) and a fresh
    admin account created directly through the store, since the API never
    grants the admin role to self-registered users.
    """
    user_store = _make_test_store(request.module.__name__.rsplit(".", 1)[-1])

    admin_id = create_account(
        user_store,
        name="Test Admin",
        email=ADMIN_EMAIL,
        password=ADMIN_PASSWORD,
        gender="Other",
        date_of_birth="1985-05-05",
        mobile_number="0000000000",
        address="Head office",
        role=Role.admin,
        rounds=settings.bcrypt_rounds,
    )
    token = make_token(admin_id, Role.admin.value)

    app.router.lifespan_context = _patch_lifespan(user_store, settings)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client, token, admin_id

    user_store.close()


@pytest.fixture(scope="session")
def registration_body() -> Callable[..., dict]:
    """Return a builder for complete, valid registration payloads."""
    return _registration_body


def _registration_body(email: str, **overrides) -> dict:
    body = {
        "name": "A",
        "email": email,
        "password": "abc123",
        "gender": "Male",
        "dateOfBirth": "1990-01-01",
        "mobileNumber": "1234567890",
        "address": "X",
    }
    body.update(overrides)
    return body
