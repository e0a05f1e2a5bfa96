"""Serializers for the posts API."""

from typing import Any

from django.conf import settings
from rest_framework import serializers

from .models import AUTHOR_MAX_LENGTH, CONTENT_MAX_LENGTH, TITLE_MAX_LENGTH


class PostCreateSerializer(serializers.Serializer):  # type: ignore[misc]
    """Serializer for a new post request."""

    title = serializers.CharField(max_length=TITLE_MAX_LENGTH)
    content = serializers.CharField(max_length=CONTENT_MAX_LENGTH)
    author = serializers.CharField(max_length=AUTHOR_MAX_LENGTH)


class PostSummarySerializer(serializers.Serializer):  # type: ignore[misc]
    """Serializer for the listing view of a post."""

    id = serializers.IntegerField(read_only=True)
    title = serializers.CharField(read_only=True)
    author = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    view_count = serializers.IntegerField(read_only=True)
    content_preview = serializers.CharField(read_only=True)


class PostDetailSerializer(serializers.Serializer):  # type: ignore[misc]
    """Serializer for the full view of a post."""

    id = serializers.IntegerField(read_only=True)
    title = serializers.CharField(read_only=True)
    content = serializers.CharField(read_only=True)
    author = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)
    view_count = serializers.IntegerField(read_only=True)


class PostCreatedSerializer(serializers.Serializer):  # type: ignore[misc]
    """Serializer for the response to a successful create."""

    id = serializers.IntegerField(read_only=True)
    message = serializers.CharField(read_only=True)
    post = PostDetailSerializer(read_only=True)


class PostPageSerializer(serializers.Serializer):  # type: ignore[misc]
    """Serializer for a page of post summaries."""

    results = PostSummarySerializer(source="items", many=True, read_only=True)
    total_count = serializers.IntegerField(read_only=True)
    page = serializers.IntegerField(read_only=True)
    size = serializers.IntegerField(read_only=True)
    total_pages = serializers.IntegerField(read_only=True)
    is_first = serializers.BooleanField(read_only=True)
    is_last = serializers.BooleanField(read_only=True)


class PagingQuerySerializer(serializers.Serializer):  # type: ignore[misc]
    """Serializer for ``page`` / ``size`` query parameters."""

    page = serializers.IntegerField(min_value=0, default=0)
    size = serializers.IntegerField(min_value=1, required=False)

    def validate_size(self, value: int) -> int:
        max_size = getattr(settings, "POSTS_MAX_PAGE_SIZE", 100)
        if value > max_size:
            raise serializers.ValidationError(
                f"Ensure this value is less than or equal to {max_size}."
            )
        return value

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        attrs.setdefault("size", getattr(settings, "POSTS_DEFAULT_PAGE_SIZE", 10))
        return attrs


class SearchQuerySerializer(PagingQuerySerializer):
    """Serializer for search query parameters."""

    keyword = serializers.CharField(max_length=200)
    field = serializers.ChoiceField(choices=["all", "title"], default="all")


class DateRangeQuerySerializer(serializers.Serializer):  # type: ignore[misc]
    """Serializer for a creation date range."""

    start = serializers.DateTimeField()
    end = serializers.DateTimeField()

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        if attrs["start"] > attrs["end"]:
            raise serializers.ValidationError("Start must not be after end")
        return attrs


class AuthorStatsSerializer(serializers.Serializer):  # type: ignore[misc]
    """Serializer for per-author statistics."""

    author = serializers.CharField(read_only=True)
    total_posts = serializers.IntegerField(read_only=True)
