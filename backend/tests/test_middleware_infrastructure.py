"""
Tests for the HTTP plumbing around the routers: middlewares, exception
handlers, request correlation and transaction helpers.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI, Response
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError, OperationalError

from rest_api.core.cors import DEV_ORIGINS, get_cors_origins
from rest_api.core.errors import _field_path, register_exception_handlers
from rest_api.core.middlewares import (
    ContentTypeValidationMiddleware,
    SecurityHeadersMiddleware,
    register_middlewares,
)
from shared.config.settings import settings
from shared.infrastructure.correlation import (
    CorrelationIdFilter,
    CorrelationIdMiddleware,
    request_id_var,
)
from shared.infrastructure.db import safe_commit


class TestSecurityHeaders:
    """Every API response carries the hardening headers."""

    def test_headers_on_public_route(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
        assert response.headers["Content-Security-Policy"].startswith("default-src 'none'")
        assert "camera=()" in response.headers["Permissions-Policy"]

    def test_server_header_removed(self):
        app = FastAPI()
        app.add_middleware(SecurityHeadersMiddleware)

        @app.get("/ping")
        def ping(response: Response):
            response.headers["Server"] = "uvicorn"
            return {"ok": True}

        response = TestClient(app).get("/ping")

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert "server" not in response.headers
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_authenticated_request_succeeds(self, client, auth_headers):
        response = client.get("/api/products/getall", headers=auth_headers)

        assert response.status_code == 200
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    def test_headers_on_error_responses(self, client):
        response = client.get("/api/products/getall")
        assert response.status_code == 401
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_hsts_only_in_production(self, client):
        assert "Strict-Transport-Security" not in client.get("/api/health").headers

        with patch.object(settings, "environment", "production"):
            response = client.get("/api/health")
        assert response.headers["Strict-Transport-Security"].startswith("max-age=31536000")


class TestContentType:
    """Write requests must send JSON."""

    def test_form_body_rejected(self, client, auth_headers):
        response = client.post(
            "/api/products/create",
            data={"name": "Widget"},
            headers=auth_headers,
        )
        assert response.status_code == 415
        assert response.json()["detail"] == "Unsupported Media Type. Use application/json"

    def test_text_body_rejected_on_patch(self, client, auth_headers, seed_product):
        response = client.patch(
            f"/api/products/update/{seed_product.id}",
            content="price=5",
            headers={**auth_headers, "Content-Type": "text/plain"},
        )
        assert response.status_code == 415

    def test_json_with_charset_accepted(self, client, auth_headers, seed_product):
        response = client.patch(
            f"/api/products/update/{seed_product.id}",
            content='{"quantity": 3}',
            headers={**auth_headers, "Content-Type": "application/json; charset=utf-8"},
        )
        assert response.status_code == 200

    def test_bodyless_post_accepted(self, client, user_auth_headers):
        response = client.post("/api/auth/logout", headers=user_auth_headers)
        assert response.status_code == 200

    def test_health_paths_exempt(self):
        app = FastAPI()
        app.add_middleware(ContentTypeValidationMiddleware)

        @app.post("/api/health/ping")
        def ping():
            return {"ok": True}

        response = TestClient(app).post(
            "/api/health/ping", content="ping", headers={"Content-Type": "text/plain"}
        )
        assert response.status_code == 200


class TestCors:
    """Admin panel origins may call the API from the browser."""

    def test_preflight_from_dev_origin(self, client):
        response = client.options(
            "/api/products/getall",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "GET",
                "Access-Control-Request-Headers": "Authorization",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"

    def test_unknown_origin_rejected(self, client):
        response = client.options(
            "/api/products/getall",
            headers={"Origin": "https://evil.example.com", "Access-Control-Request-Method": "GET"},
        )
        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers

    def test_configured_origins(self):
        with patch.object(settings, "allowed_origins", "https://shop.example.com, ,https://admin.example.com"):
            assert get_cors_origins() == ["https://shop.example.com", "https://admin.example.com"]

    def test_dev_origins_by_default(self):
        with patch.object(settings, "allowed_origins", ""):
            assert get_cors_origins() == DEV_ORIGINS


class TestCorrelationId:
    """X-Request-ID is generated or echoed."""

    def test_generated_when_missing(self, client):
        request_id = client.get("/api/health").headers["X-Request-ID"]
        assert len(request_id) == 32
        int(request_id, 16)

    def test_caller_id_echoed(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "order-sync-42"})
        assert response.headers["X-Request-ID"] == "order-sync-42"

    def test_ids_differ_between_requests(self, client):
        first = client.get("/api/health").headers["X-Request-ID"]
        second = client.get("/api/health").headers["X-Request-ID"]
        assert first != second

    @pytest.mark.parametrize("bound, expected", [("abc123", "abc123"), ("", "-")])
    def test_filter_stamps_records(self, bound, expected):
        record = logging.LogRecord("rest_api", logging.INFO, __file__, 1, "msg", (), None)
        token = request_id_var.set(bound)
        try:
            assert CorrelationIdFilter().filter(record) is True
        finally:
            request_id_var.reset(token)
        assert record.request_id == expected


class TestValidationErrors:
    """Request validation answers 400 naming the first failing field."""

    @pytest.mark.parametrize(
        "loc, expected",
        [
            (("body", "products", 0, "quantity"), "products.0.quantity"),
            (("query", "limit"), "limit"),
            (("body",), ""),
        ],
    )
    def test_field_path(self, loc, expected):
        assert _field_path(loc) == expected

    def test_wrong_type_in_order_line(self, client, auth_headers, seed_product):
        response = client.post(
            "/api/orders/create",
            json={
                "userId": "customer-1",
                "products": [{"productId": seed_product.id, "quantity": "many"}],
            },
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["detail"].startswith("products.0.quantity:")

    def test_query_out_of_range(self, client, auth_headers):
        response = client.get(
            "/api/orders/getall", params={"limit": 0}, headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json()["detail"].startswith("limit:")


class TestDatabaseErrors:
    """Database failures that reach the app answer a generic 500."""

    @pytest.fixture
    def failing_client(self):
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/down")
        def down():
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        return TestClient(app, raise_server_exceptions=False)

    def test_internal_details_hidden(self, failing_client):
        response = failing_client.get("/down")
        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
        assert "connection refused" not in response.text


class TestSafeCommit:
    """safe_commit rolls back before re-raising."""

    def test_commit(self):
        db = MagicMock()
        safe_commit(db)
        db.commit.assert_called_once()
        db.rollback.assert_not_called()

    def test_rollback_on_integrity_error(self):
        db = MagicMock()
        db.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate"))

        with pytest.raises(IntegrityError):
            safe_commit(db)
        db.rollback.assert_called_once()


def test_register_middlewares_installs_all():
    app = FastAPI()
    register_middlewares(app)

    installed = [m.cls for m in app.user_middleware]
    # Last registered runs first
    assert installed == [
        CorrelationIdMiddleware,
        ContentTypeValidationMiddleware,
        SecurityHeadersMiddleware,
    ]
