"""
tests/test_static.py -- SPA static serving from web/routes.py.

Builds its own app (not the shared api_client) because the static router is
only mounted when asked for, the way asgi.py does it.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from tests.conftest import make_settings
from web.routes import build_static_router


@pytest.fixture
def static_client(tmp_path):
    site = tmp_path / "site"
    (site / "assets").mkdir(parents=True)
    (site / "index.html").write_text("<html>furnishare</html>")
    (site / "assets" / "app.js").write_text("console.log('app')")
    (tmp_path / "secret.txt").write_text("do not serve")

    app = create_app(make_settings("static", serve_static=True, static_dir=str(site)))
    app.include_router(build_static_router(site))
    with TestClient(app) as client:
        yield client


def test_root_serves_index(static_client: TestClient) -> None:
    resp = static_client.get("/")
    assert resp.status_code == 200
    assert "furnishare" in resp.text


def test_existing_file_served(static_client: TestClient) -> None:
    resp = static_client.get("/assets/app.js")
    assert resp.status_code == 200
    assert "console.log" in resp.text


def test_client_route_falls_back_to_index(static_client: TestClient) -> None:
    resp = static_client.get("/furniture/42/details")
    assert resp.status_code == 200
    assert "furnishare" in resp.text


def test_api_paths_never_fall_back(static_client: TestClient) -> None:
    resp = static_client.get("/api/unknown")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


def test_api_routes_still_win(static_client: TestClient) -> None:
    assert static_client.get("/api/health").json()["status"] == "healthy"


def test_traversal_outside_root_rejected(static_client: TestClient) -> None:
    # %2F keeps the client from collapsing the dot segments; the app sees
    # assets/../../secret.txt.
    resp = static_client.get("/assets/..%2F..%2Fsecret.txt")
    assert resp.status_code == 404
    assert "do not serve" not in resp.text


def test_missing_index_is_404(tmp_path) -> None:
    app = create_app(make_settings("static_empty"))
    app.include_router(build_static_router(tmp_path / "empty"))
    with TestClient(app) as client:
        resp = client.get("/anything")
    assert resp.status_code == 404
