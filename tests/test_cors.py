"""
tests/test_cors.py -- CORS headers, the OPTIONS short-circuit, and the error envelope.

Covers:
  - OPTIONS on any path answers 200 with an empty body, before routing and auth
  - An allow-listed Origin is reflected; any other Origin gets no Allow-Origin
  - CORS headers ride along on normal and error responses
  - Unknown routes and wrong methods use the {"error": ...} envelope
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

ALLOWED = "http://localhost:3000"


class TestPreflight:
    @pytest.mark.parametrize("path", ["/api/furniture", "/api/auth/signup", "/api/profile", "/api/nowhere"])
    def test_options_is_empty_200(self, api_client: TestClient, path: str) -> None:
        resp = api_client.options(path, headers={"Origin": ALLOWED, "Access-Control-Request-Method": "POST"})
        assert resp.status_code == 200, path
        assert resp.content == b""
        assert resp.headers["access-control-allow-origin"] == ALLOWED
        assert "POST" in resp.headers["access-control-allow-methods"]
        assert "Authorization" in resp.headers["access-control-allow-headers"]

    def test_options_without_origin(self, api_client: TestClient) -> None:
        resp = api_client.options("/api/furniture")
        assert resp.status_code == 200
        assert "access-control-allow-origin" not in resp.headers

    def test_options_on_protected_route_skips_auth(self, api_client: TestClient) -> None:
        resp = api_client.options("/api/profile")
        assert resp.status_code == 200
        assert resp.content == b""


class TestOrigins:
    def test_allowed_origin_reflected(self, api_client: TestClient) -> None:
        resp = api_client.get("/api/furniture", headers={"Origin": "http://localhost"})
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "http://localhost"
        assert "Origin" in resp.headers["vary"]

    def test_disallowed_origin_not_reflected(self, api_client: TestClient) -> None:
        resp = api_client.get("/api/furniture", headers={"Origin": "https://evil.example"})
        assert resp.status_code == 200
        assert "access-control-allow-origin" not in resp.headers

    def test_error_responses_carry_cors_headers(self, api_client: TestClient) -> None:
        resp = api_client.get("/api/profile", headers={"Origin": ALLOWED})
        assert resp.status_code == 401
        assert resp.headers["access-control-allow-origin"] == ALLOWED


class TestErrorEnvelope:
    def test_unknown_route(self, api_client: TestClient) -> None:
        resp = api_client.get("/api/does-not-exist")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Not Found"}

    def test_wrong_method(self, api_client: TestClient) -> None:
        resp = api_client.get("/api/auth/signup")
        assert resp.status_code == 405
        assert resp.json() == {"error": "Method Not Allowed"}
