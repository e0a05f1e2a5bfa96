"""
Pytest configuration and global fixtures.

Defines common fixtures for the entire test suite. Django settings come
from ``DJANGO_SETTINGS_MODULE`` in pyproject.toml (``config.settings.test``).
"""

from typing import Any, Callable

import pytest
from faker import Faker
from rest_framework.test import APIClient

from apps.posts.models import Post
from apps.posts.services import PostService

fake = Faker()


@pytest.fixture
def api_client() -> APIClient:
    """DRF API test client."""
    return APIClient()


@pytest.fixture
def post_service() -> PostService:
    """Service wired to the ORM-backed store."""
    return PostService()


@pytest.fixture
def make_post(db: Any) -> Callable[..., Post]:
    """Factory that inserts a post directly, bypassing the service.

    ``view_count`` is written with a queryset update so ``updated_at`` keeps
    its creation value.
    """

    def _make_post(
        title: str = "",
        content: str = "",
        author: str = "",
        view_count: int = 0,
    ) -> Post:
        post = Post.objects.create(
            title=title or fake.sentence(nb_words=4),
            content=content or fake.paragraph(),
            author=author or fake.user_name()[:50],
        )
        if view_count:
            Post.objects.filter(pk=post.pk).update(view_count=view_count)
            post.refresh_from_db()
        return post

    return _make_post
