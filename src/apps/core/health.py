"""
Health check utilities for application monitoring.

Checks the database (including that the posts table answers), the cache and
available memory. Each check returns a dict with at least ``status``,
``message`` and ``timestamp``.
"""

import logging
import time
from typing import Any, Callable

import psutil
from django.conf import settings
from django.core.cache import cache
from django.db import connection
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.cache import never_cache
from django.views.decorators.http import require_http_methods

from apps.posts.repositories import PostStore

logger = logging.getLogger(__name__)


class HealthCheckStatus:
    """Health check status constants."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


def _result(status: str, message: str, **details: Any) -> dict[str, Any]:
    return {
        "status": status,
        "message": message,
        **details,
        "timestamp": timezone.now().isoformat(),
    }


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class HealthChecker:
    """Runs the registered component checks and folds them into one status."""

    def __init__(self) -> None:
        self.checks: dict[str, Callable[[], dict[str, Any]]] = {
            "database": self._check_database,
            "cache": self._check_cache,
            "memory": self._check_memory,
        }

    def run_all_checks(self) -> dict[str, Any]:
        results = {}
        overall_status = HealthCheckStatus.HEALTHY

        for check_name, check_func in self.checks.items():
            try:
                check_result = check_func()
            except Exception as e:
                logger.error(f"Health check '{check_name}' failed: {e}")
                check_result = _result(HealthCheckStatus.UNHEALTHY, f"Check failed: {e}")
            results[check_name] = check_result

            if check_result["status"] == HealthCheckStatus.UNHEALTHY:
                overall_status = HealthCheckStatus.UNHEALTHY
            elif (
                check_result["status"] == HealthCheckStatus.DEGRADED
                and overall_status == HealthCheckStatus.HEALTHY
            ):
                overall_status = HealthCheckStatus.DEGRADED

        return {
            "status": overall_status,
            "timestamp": timezone.now().isoformat(),
            "version": getattr(settings, "VERSION", "1.0.0"),
            "environment": getattr(settings, "ENVIRONMENT", "unknown"),
            "checks": results,
        }

    def _check_database(self) -> dict[str, Any]:
        try:
            start = time.perf_counter()
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
            posts_count = PostStore().count()
            response_time = _elapsed_ms(start)
        except Exception as e:
            return _result(HealthCheckStatus.UNHEALTHY, f"Database connection failed: {e}")

        if response_time > 1000:
            status = HealthCheckStatus.DEGRADED
            message = f"Slow database response: {response_time:.2f}ms"
        else:
            status = HealthCheckStatus.HEALTHY
            message = f"Database responsive: {response_time:.2f}ms"
        return _result(
            status, message, response_time_ms=response_time, posts_count=posts_count
        )

    def _check_cache(self) -> dict[str, Any]:
        test_key = "health_check_test"
        try:
            start = time.perf_counter()
            cache.set(test_key, "ok", timeout=30)
            cached_value = cache.get(test_key)
            cache.delete(test_key)
            response_time = _elapsed_ms(start)
        except Exception as e:
            return _result(HealthCheckStatus.DEGRADED, f"Cache connection failed: {e}")

        if cached_value != "ok":
            return _result(HealthCheckStatus.UNHEALTHY, "Cache read/write test failed")
        if response_time > 500:
            return _result(
                HealthCheckStatus.DEGRADED,
                f"Slow cache response: {response_time:.2f}ms",
                response_time_ms=response_time,
            )
        return _result(
            HealthCheckStatus.HEALTHY,
            f"Cache responsive: {response_time:.2f}ms",
            response_time_ms=response_time,
        )

    def _check_memory(self) -> dict[str, Any]:
        try:
            memory = psutil.virtual_memory()
        except Exception as e:
            return _result(HealthCheckStatus.UNHEALTHY, f"Memory check failed: {e}")

        available_mb = memory.available / (1024**2)
        min_memory = getattr(settings, "HEALTH_CHECK", {}).get("MEMORY_MIN", 100)

        if available_mb < min_memory:
            status = HealthCheckStatus.UNHEALTHY
            message = f"Low memory: {available_mb:.0f}MB available"
        elif available_mb < min_memory * 2:
            status = HealthCheckStatus.DEGRADED
            message = f"Memory usage high: {available_mb:.0f}MB available"
        else:
            status = HealthCheckStatus.HEALTHY
            message = f"Memory usage normal: {available_mb:.0f}MB available"
        return _result(
            status,
            message,
            memory_available_mb=round(available_mb),
            memory_usage_percent=round(memory.percent, 1),
        )


health_checker = HealthChecker()


@never_cache
@require_http_methods(["GET", "HEAD"])
def health_check_view(request: Any) -> JsonResponse:
    """Full health report. Degraded still answers 200; unhealthy answers 503."""
    health_status = health_checker.run_all_checks()
    status_code = 503 if health_status["status"] == HealthCheckStatus.UNHEALTHY else 200
    return JsonResponse(health_status, status=status_code)


@never_cache
@require_http_methods(["GET"])
def readiness_check_view(request: Any) -> JsonResponse:
    """Ready when the database answers."""
    db_check = health_checker._check_database()
    if db_check["status"] == HealthCheckStatus.UNHEALTHY:
        return JsonResponse(
            {"status": "not_ready", "message": "Database not available"}, status=503
        )
    return JsonResponse(
        {"status": "ready", "timestamp": timezone.now().isoformat()}, status=200
    )


@never_cache
@require_http_methods(["GET"])
def liveness_check_view(request: Any) -> JsonResponse:
    return JsonResponse(
        {
            "status": "alive",
            "timestamp": timezone.now().isoformat(),
            "version": getattr(settings, "VERSION", "1.0.0"),
        },
        status=200,
    )
