"""
Core serializers for the application.
"""

from rest_framework import serializers


class HealthCheckSerializer(serializers.Serializer):  # type: ignore[misc]
    """
    Serializer for the API health check endpoint.
    """

    status = serializers.CharField(read_only=True)
    service = serializers.CharField(read_only=True)
    version = serializers.CharField(read_only=True)
    timestamp = serializers.DateTimeField(read_only=True)
    posts_count = serializers.IntegerField(read_only=True)
