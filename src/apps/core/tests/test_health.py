"""
Tests for the health check module and views.
"""

import json
from unittest.mock import MagicMock, patch

from django.core.cache import cache
from django.test import TestCase
from django.urls import reverse

from apps.core.health import HealthChecker, HealthCheckStatus
from apps.posts.models import Post

HEALTHY_MEMORY = 1024 * 1024 * 1024  # 1GB


class HealthCheckViewTests(TestCase):
    """Tests for the health check endpoints."""

    def setUp(self) -> None:
        cache.clear()
        self.health_url = reverse("core:health-check")
        self.ready_url = reverse("core:readiness-check")
        self.live_url = reverse("core:liveness-check")

    @patch("apps.core.health.psutil")
    def test_health_check_success(self, mock_psutil: MagicMock) -> None:
        """Returns 200 with every component check when all are healthy."""
        mock_psutil.virtual_memory.return_value.available = HEALTHY_MEMORY
        mock_psutil.virtual_memory.return_value.percent = 20
        Post.objects.create(title="t", content="c", author="a")

        response = self.client.get(self.health_url)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Content-Type"], "application/json")
        data = json.loads(response.content)
        self.assertEqual(data["status"], HealthCheckStatus.HEALTHY)
        self.assertEqual(data["environment"], "test")
        self.assertEqual(set(data["checks"]), {"database", "cache", "memory"})
        self.assertEqual(data["checks"]["database"]["posts_count"], 1)

    def test_health_check_head_request(self) -> None:
        response = self.client.head(self.health_url)
        self.assertIn(response.status_code, (200, 503))

    def test_health_check_invalid_method(self) -> None:
        response = self.client.post(self.health_url)
        self.assertEqual(response.status_code, 405)

    @patch("apps.core.health.health_checker.run_all_checks")
    def test_health_view_unhealthy(self, mock_run: MagicMock) -> None:
        mock_run.return_value = {"status": HealthCheckStatus.UNHEALTHY, "checks": {}}
        response = self.client.get(self.health_url)
        self.assertEqual(response.status_code, 503)

    @patch("apps.core.health.health_checker.run_all_checks")
    def test_health_view_degraded(self, mock_run: MagicMock) -> None:
        """Degraded is still operational."""
        mock_run.return_value = {"status": HealthCheckStatus.DEGRADED, "checks": {}}
        response = self.client.get(self.health_url)
        self.assertEqual(response.status_code, 200)

    def test_readiness_check_success(self) -> None:
        response = self.client.get(self.ready_url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(json.loads(response.content)["status"], "ready")

    @patch("apps.core.health.connection")
    def test_readiness_check_failure(self, mock_connection: MagicMock) -> None:
        mock_connection.cursor.side_effect = Exception("Database down")

        response = self.client.get(self.ready_url)

        self.assertEqual(response.status_code, 503)
        self.assertEqual(json.loads(response.content)["status"], "not_ready")

    def test_liveness_check(self) -> None:
        response = self.client.get(self.live_url)
        self.assertEqual(response.status_code, 200)
        data = json.loads(response.content)
        self.assertEqual(data["status"], "alive")
        self.assertIn("version", data)

    def test_kubernetes_aliases(self) -> None:
        self.assertEqual(self.client.get("/livez/").status_code, 200)
        self.assertEqual(self.client.get("/readyz/").status_code, 200)


class HealthCheckerUnitTests(TestCase):
    """Unit tests for the individual HealthChecker checks."""

    def setUp(self) -> None:
        self.checker = HealthChecker()

    def test_database_check_success(self) -> None:
        result = self.checker._check_database()
        self.assertEqual(result["status"], HealthCheckStatus.HEALTHY)
        self.assertEqual(result["posts_count"], 0)
        self.assertIn("response_time_ms", result)

    @patch("apps.core.health.connection")
    def test_database_check_failure(self, mock_connection: MagicMock) -> None:
        mock_cursor = MagicMock()
        mock_cursor.execute.side_effect = Exception("Database connection failed")
        mock_connection.cursor.return_value.__enter__.return_value = mock_cursor

        result = self.checker._check_database()

        self.assertEqual(result["status"], HealthCheckStatus.UNHEALTHY)
        self.assertIn("Database connection failed", result["message"])

    def test_cache_check_success(self) -> None:
        result = self.checker._check_cache()
        self.assertEqual(result["status"], HealthCheckStatus.HEALTHY)

    @patch("apps.core.health.cache")
    def test_cache_mismatch(self, mock_cache: MagicMock) -> None:
        mock_cache.get.return_value = "wrong_value"
        result = self.checker._check_cache()
        self.assertEqual(result["status"], HealthCheckStatus.UNHEALTHY)
        self.assertEqual(result["message"], "Cache read/write test failed")

    @patch("apps.core.health.cache")
    def test_cache_failure_is_degraded(self, mock_cache: MagicMock) -> None:
        mock_cache.set.side_effect = Exception("Redis unavailable")
        result = self.checker._check_cache()
        self.assertEqual(result["status"], HealthCheckStatus.DEGRADED)

    @patch("apps.core.health.psutil.virtual_memory")
    def test_memory_unhealthy_and_degraded(self, mock_mem: MagicMock) -> None:
        mock_mem.return_value.available = 50 * 1024 * 1024  # 50MB
        mock_mem.return_value.percent = 95
        self.assertEqual(
            self.checker._check_memory()["status"], HealthCheckStatus.UNHEALTHY
        )

        mock_mem.return_value.available = 150 * 1024 * 1024  # 150MB
        self.assertEqual(
            self.checker._check_memory()["status"], HealthCheckStatus.DEGRADED
        )

    @patch("apps.core.health.psutil.virtual_memory")
    def test_memory_exception(self, mock_mem: MagicMock) -> None:
        mock_mem.side_effect = Exception("Memory error")
        result = self.checker._check_memory()
        self.assertEqual(result["status"], HealthCheckStatus.UNHEALTHY)
        self.assertIn("Memory check failed", result["message"])

    def test_run_all_checks_exception(self) -> None:
        """A check that raises marks the whole report unhealthy."""
        self.checker.checks["database"] = MagicMock(
            side_effect=Exception("Internal check error")
        )
        results = self.checker.run_all_checks()
        self.assertEqual(results["status"], HealthCheckStatus.UNHEALTHY)
        self.assertIn("Check failed", results["checks"]["database"]["message"])

    def test_degraded_check_degrades_overall(self) -> None:
        self.checker.checks = {
            "a": lambda: {"status": HealthCheckStatus.HEALTHY},
            "b": lambda: {"status": HealthCheckStatus.DEGRADED},
        }
        self.assertEqual(
            self.checker.run_all_checks()["status"], HealthCheckStatus.DEGRADED
        )
