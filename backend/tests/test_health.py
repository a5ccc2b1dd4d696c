"""
Tests for health check endpoints and utilities.
"""

import time
from unittest.mock import patch

from shared.utils.health import (
    HealthCheckResult,
    HealthStatus,
    aggregate_health_checks,
    health_check_with_timeout,
)


class TestHealthEndpoints:
    """Test health check API endpoints."""

    def test_health_check(self, client):
        """Basic health check should return healthy status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "shop-admin-api"

    def test_detailed_health_check(self, client):
        response = client.get("/api/health/detailed")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"]["database"]["status"] == "healthy"
        assert data["dependencies"]["database"]["details"] == {"dialect": "sqlite"}
        assert data["dependencies"]["token_store"]["status"] == "healthy"

    def test_detailed_health_degraded(self, client, token_store):
        with patch.object(token_store, "ping", return_value=False):
            response = client.get("/api/health/detailed")
        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "degraded"
        assert data["dependencies"]["token_store"]["status"] == "unhealthy"

    def test_security_headers_present(self, client):
        response = client.get("/api/health")
        assert response.headers.get("X-Content-Type-Options") == "nosniff"
        assert response.headers.get("X-Request-ID")


class TestHealthUtilities:
    """Test the timeout decorator and aggregation."""

    def test_healthy_result(self):
        @health_check_with_timeout(timeout=1.0, component="thing")
        def check():
            return {"version": "1"}

        result = check()
        assert result.status == HealthStatus.HEALTHY
        assert result.details == {"version": "1"}
        assert result.latency_ms is not None

    def test_exception_is_unhealthy(self):
        @health_check_with_timeout(timeout=1.0)
        def check_widget_health():
            raise RuntimeError("boom")

        result = check_widget_health()
        assert result.status == HealthStatus.UNHEALTHY
        assert result.component == "widget"
        assert result.error == "boom"

    def test_timeout_is_unhealthy(self):
        @health_check_with_timeout(timeout=0.05, component="slow")
        def check():
            time.sleep(0.3)

        result = check()
        assert result.status == HealthStatus.UNHEALTHY
        assert "timeout" in result.error

    def test_aggregate(self):
        healthy = HealthCheckResult(status=HealthStatus.HEALTHY, component="a")
        down = HealthCheckResult(status=HealthStatus.UNHEALTHY, component="b", error="x")

        assert aggregate_health_checks([healthy])["status"] == "healthy"
        summary = aggregate_health_checks([healthy, down])
        assert summary["status"] == "degraded"
        assert summary["components"]["b"]["error"] == "x"
