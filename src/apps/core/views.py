"""Core views for the application."""

from typing import Any

from django.conf import settings
from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.posts.repositories import PostStore

from .serializers import HealthCheckSerializer


class HealthCheckAPIView(APIView):  # type: ignore[misc]
    """
    API view for health check.

    Reports the service identity and how many posts are stored. The detailed
    component report lives at ``/health/``.
    """

    permission_classes = [AllowAny]
    serializer_class = HealthCheckSerializer

    @extend_schema(responses={200: HealthCheckSerializer}, tags=["Health"])
    def get(self, request: Any, *args: Any, **kwargs: Any) -> Response:
        data = {
            "status": "UP",
            "service": getattr(settings, "SERVICE_NAME", "post-backend"),
            "version": getattr(settings, "VERSION", "1.0.0"),
            "timestamp": timezone.now(),
            "posts_count": PostStore().count(),
        }
        serializer = self.serializer_class(instance=data)
        return Response(serializer.data)
