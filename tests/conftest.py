"""
tests/conftest.py -- Shared test fixtures for Furnishare integration tests.

This module provides:
  - make_settings(): explicit Settings for an isolated in-memory database
  - api_client: TestClient over a real create_app() instance, module-scoped
  - signup(): helper that registers an account and returns (token, user dict)

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs sync route handlers in a thread pool. Plain :memory:
DBs are per-connection and would present a blank schema to each worker
thread. The named URI format (file:name?mode=memory&cache=shared&uri=true)
shares one in-memory instance across all connections in the same process.

Settings are passed as keyword arguments, which take priority over the
environment and any .env file, so a developer's local JWT_SECRET or
DATABASE_URL never leaks into a test run. bcrypt runs at 4 rounds to keep the
suite fast.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.main import create_app
from core.config import Settings

TEST_SECRET = "furnishare-test-secret-0123456789abcdef"


def make_settings(db_suffix: str, **overrides) -> Settings:
    """Return Settings bound to a named shared-memory SQLite database.

    Args:
        db_suffix: Unique string for the DB name so test modules don't share
                   state (e.g. 'auth', 'furniture').
    """
    values = {
        "jwt_secret": TEST_SECRET,
        "database_url": f"sqlite:///file:test_{db_suffix}?mode=memory&cache=shared&uri=true",
        "bcrypt_rounds": 4,
        "seed_sample_data": True,
        "cors_origins": ["http://localhost:3000", "http://localhost"],
        "_env_file": None,
    }
    values.update(overrides)
    return Settings(**values)


def signup(client: TestClient, email: str, password: str = "secret123", name: str = "Test User") -> tuple[str, dict]:
    """Register an account through the API and return (token, user)."""
    resp = client.post("/api/auth/signup", json={"name": name, "email": email, "password": password})
    assert resp.status_code == 201, f"signup failed: {resp.status_code} {resp.text}"
    data = resp.json()
    return data["token"], data["user"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="module")
def api_app(request) -> FastAPI:
    """A fresh application per test module, on its own in-memory database."""
    suffix = request.module.__name__.rsplit(".", 1)[-1]
    return create_app(make_settings(suffix))


@pytest.fixture(scope="module")
def api_client(api_app: FastAPI) -> Generator[TestClient, None, None]:
    """Yield a TestClient with the lifespan running (stores open, catalog seeded)."""
    with TestClient(api_app, raise_server_exceptions=True) as client:
        yield client
