"""
Core app URL configuration.

Health checks for monitoring and container orchestration.
"""

from django.urls import path

from .health import (
    health_check_view,
    liveness_check_view,
    readiness_check_view,
)
from .views import HealthCheckAPIView

app_name = "core"

urlpatterns = [
    path("health/", health_check_view, name="health-check"),
    path("health/ready/", readiness_check_view, name="readiness-check"),
    path("health/live/", liveness_check_view, name="liveness-check"),
    # Aliases for Kubernetes/Docker health checks
    path("healthz/", health_check_view, name="healthz"),
    path("readyz/", readiness_check_view, name="readyz"),
    path("livez/", liveness_check_view, name="livez"),
    path("api/health/", HealthCheckAPIView.as_view(), name="api-health-check"),
]
