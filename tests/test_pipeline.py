# =============================================================================
# tests/test_pipeline.py - Request Pipeline Tests
# =============================================================================
# This module contains tests for:
# - The CORS gate (preflight short-circuit, Allow-Origin on every response)
# - The error interceptor (ApiError envelope, masked 500s, framework errors)
#
# Extra routes are mounted on a fresh app to trigger each failure path.
# =============================================================================

import logging

import pytest
from fastapi import HTTPException, Query
from fastapi.testclient import TestClient

from app.exceptions import ApiError
from app.pipeline.errors import INTERNAL_ERROR_MESSAGE, error_response


@pytest.fixture
def handler_calls():
    return []


@pytest.fixture
def pipeline_client(app, handler_calls):
    """Client for an app with extra routes that fail in different ways."""

    @app.get("/test/ok")
    async def ok():
        handler_calls.append("ok")
        return {"ok": True}

    @app.get("/test/api-error")
    async def api_error():
        raise ApiError("`n` is too big. Use a number less than 10,000.", 400)

    @app.get("/test/crash")
    async def crash():
        raise RuntimeError("database password is hunter2")

    @app.get("/test/sync-crash")
    def sync_crash():
        return {}["missing"]

    @app.get("/test/challenge")
    async def challenge():
        raise HTTPException(401, detail="Login required", headers={"WWW-Authenticate": "Bearer"})

    @app.get("/test/typed")
    async def typed(n: int = Query(...)):
        return {"n": n}

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


# =============================================================================
# CORS Gate Tests
# =============================================================================

class TestCORSGate:
    """Test preflight handling and origin annotation."""

    def test_preflight_short_circuits(self, pipeline_client, handler_calls):
        """Test OPTIONS gets an empty 200 and never reaches the handler."""
        response = pipeline_client.options(
            "/test/ok",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "GET",
                "Access-Control-Request-Headers": "authorization, content-type",
            },
        )

        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["access-control-allow-methods"] == "*"
        assert response.headers["access-control-allow-headers"] == "authorization, content-type"
        assert handler_calls == []

    def test_preflight_without_requested_headers(self, pipeline_client):
        response = pipeline_client.options("/test/ok")

        assert response.status_code == 200
        assert response.content == b""
        assert "access-control-allow-methods" in response.headers
        assert response.headers["access-control-allow-headers"] == ""

    def test_preflight_on_unknown_route(self, pipeline_client):
        """Test preflight is answered before routing, even for unknown paths."""
        response = pipeline_client.options("/does/not/exist")

        assert response.status_code == 200
        assert response.content == b""

    def test_preflight_on_protected_route(self, pipeline_client):
        """Test preflight on a token-guarded route doesn't require a token."""
        response = pipeline_client.options(
            "/secret_data_jwt",
            headers={"Access-Control-Request-Headers": "authorization"},
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-headers"] == "authorization"

    def test_success_has_allow_origin(self, pipeline_client, handler_calls):
        response = pipeline_client.get("/test/ok")

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "access-control-allow-methods" not in response.headers
        assert "access-control-allow-headers" not in response.headers
        assert handler_calls == ["ok"]

    @pytest.mark.parametrize(
        "path,status",
        [
            ("/test/api-error", 400),
            ("/test/crash", 500),
            ("/does/not/exist", 404),
            ("/secret_data_jwt", 405),
        ],
    )
    def test_errors_have_allow_origin(self, pipeline_client, path, status):
        """Test responses written by the interceptor are annotated too."""
        response = pipeline_client.get(path)

        assert response.status_code == status
        assert response.headers["access-control-allow-origin"] == "*"
        assert "access-control-allow-methods" not in response.headers


# =============================================================================
# Error Interceptor Tests
# =============================================================================

class TestErrorInterceptor:
    """Test classification and rendering of failures."""

    def test_api_error_rendered_verbatim(self, pipeline_client):
        response = pipeline_client.get("/test/api-error")

        assert response.status_code == 400
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {
            "status": 400,
            "message": "`n` is too big. Use a number less than 10,000.",
        }

    def test_unclassified_error_masked(self, pipeline_client):
        """Test an unexpected exception becomes a generic 500."""
        response = pipeline_client.get("/test/crash")

        assert response.status_code == 500
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"status": 500, "message": "Internal server error."}
        assert "hunter2" not in response.text

    def test_unclassified_error_in_sync_handler(self, pipeline_client):
        response = pipeline_client.get("/test/sync-crash")

        assert response.status_code == 500
        assert response.json() == {"status": 500, "message": INTERNAL_ERROR_MESSAGE}
        assert "missing" not in response.text

    def test_unclassified_error_logged(self, pipeline_client, caplog):
        """Test the original failure is recorded for operators."""
        with caplog.at_level(logging.ERROR, logger="app.pipeline.errors"):
            pipeline_client.get("/test/crash")

        assert "hunter2" in caplog.text
        assert any(record.exc_info for record in caplog.records)

    def test_api_error_logged_as_warning(self, pipeline_client, caplog):
        with caplog.at_level(logging.WARNING, logger="app.pipeline.errors"):
            pipeline_client.get("/test/api-error")

        records = [r for r in caplog.records if r.name == "app.pipeline.errors"]
        assert records
        assert all(r.levelno == logging.WARNING for r in records)

    def test_unknown_route(self, pipeline_client):
        response = pipeline_client.get("/does/not/exist")

        assert response.status_code == 404
        assert response.json() == {"status": 404, "message": "Not Found"}

    def test_wrong_method(self, pipeline_client):
        response = pipeline_client.get("/get_token")

        assert response.status_code == 405
        assert response.json() == {"status": 405, "message": "Method Not Allowed"}
        assert "POST" in response.headers["allow"]

    def test_http_exception_headers_kept(self, pipeline_client):
        """Test headers set on a framework HTTPException reach the client."""
        response = pipeline_client.get("/test/challenge")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert response.json() == {"status": 401, "message": "Login required"}

    def test_validation_error(self, pipeline_client):
        response = pipeline_client.get("/test/typed", params={"n": "abc"})

        assert response.status_code == 422
        body = response.json()
        assert body["status"] == 422
        assert body["message"].startswith("Invalid request: query.n")

    def test_invalid_json_body(self, pipeline_client):
        response = pipeline_client.post(
            "/get_token",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"status": 400, "message": "Request body is not valid JSON."}

    def test_non_object_json_body(self, pipeline_client):
        response = pipeline_client.post("/get_token", json=["goodUser", "goodPass"])

        assert response.status_code == 400
        assert response.json()["message"] == "Request body must be a JSON object."


# =============================================================================
# error_response Tests
# =============================================================================

class TestErrorResponse:
    """Test the renderer directly."""

    def test_api_error(self):
        response = error_response(ApiError("Nope", 403))

        assert response.status_code == 403
        assert response.body == b'{"status":403,"message":"Nope"}'

    def test_api_error_headers(self):
        response = error_response(ApiError("Method Not Allowed", 405, headers={"Allow": "POST"}))

        assert response.status_code == 405
        assert response.headers["allow"] == "POST"
        assert response.body == b'{"status":405,"message":"Method Not Allowed"}'

    def test_other_exception(self):
        response = error_response(ValueError("internal detail"))

        assert response.status_code == 500
        assert b"internal detail" not in response.body
        assert response.body == b'{"status":500,"message":"Internal server error."}'
