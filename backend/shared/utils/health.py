"""
Dependency health checks for /api/health/detailed.

A check is a plain function that raises, or returns False, when its
dependency is unusable; it may return a dict of details. Decorating it with
health_check_with_timeout turns it into one that always returns a
HealthCheckResult within ``timeout`` seconds:

    @health_check_with_timeout(timeout=3.0)
    def check_database_health(db):
        db.execute(text("SELECT 1"))
"""

from __future__ import annotations

import concurrent.futures
import functools
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from shared.config.logging import get_logger

logger = get_logger(__name__)


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


@dataclass
class HealthCheckResult:
    status: HealthStatus
    component: str
    latency_ms: float | None = None
    error: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def healthy(self) -> bool:
        return self.status is HealthStatus.HEALTHY

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"status": self.status.value, "component": self.component}
        if self.latency_ms is not None:
            body["latency_ms"] = round(self.latency_ms, 2)
        if self.error:
            body["error"] = self.error
        if self.details:
            body["details"] = self.details
        return body


def _component_name(func: Callable) -> str:
    # check_database_health -> database
    name = func.__name__
    if name.startswith("check_"):
        name = name[len("check_"):]
    if name.endswith("_health"):
        name = name[: -len("_health")]
    return name


def health_check_with_timeout(timeout: float = 5.0, component: str | None = None):
    """
    Run the decorated check in a worker thread and bound its duration.

    Args:
        timeout: Seconds to wait before reporting the component unhealthy.
        component: Name in the report; derived from the function name if omitted.
    """

    def decorator(func: Callable[..., dict[str, Any] | bool | None]) -> Callable[..., HealthCheckResult]:
        name = component or _component_name(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> HealthCheckResult:
            started = time.perf_counter()

            def finish(status: HealthStatus, error: str | None = None, details: Any = None) -> HealthCheckResult:
                return HealthCheckResult(
                    status=status,
                    component=name,
                    latency_ms=(time.perf_counter() - started) * 1000,
                    error=error,
                    details=details if isinstance(details, dict) else {},
                )

            executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
            try:
                outcome = executor.submit(func, *args, **kwargs).result(timeout=timeout)
            except concurrent.futures.TimeoutError:
                logger.warning("Health check timed out", component=name, timeout=timeout)
                return finish(HealthStatus.UNHEALTHY, error=f"timeout after {timeout}s")
            except Exception as e:
                logger.warning("Health check failed", component=name, error=str(e))
                return finish(HealthStatus.UNHEALTHY, error=str(e))
            finally:
                # A hung check must not hold the request
                executor.shutdown(wait=False)

            if outcome is False:
                return finish(HealthStatus.UNHEALTHY, error="check returned unhealthy")
            return finish(HealthStatus.HEALTHY, details=outcome)

        return wrapper

    return decorator


def aggregate_health_checks(results: list[HealthCheckResult]) -> dict[str, Any]:
    """{"status": "healthy" | "degraded", "components": {name: result}}"""
    overall = HealthStatus.HEALTHY if all(r.healthy for r in results) else HealthStatus.DEGRADED
    return {
        "status": overall.value,
        "components": {r.component: r.to_dict() for r in results},
    }
