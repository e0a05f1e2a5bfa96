"""
Post Repositories.

This file contains the data access logic for the posts app. The store is the
only component that talks to the ORM; services receive plain model instances
and (items, total_count) tuples from it.

All list queries order by ``created_at`` descending with ``id`` as the final
tie-break, use zero-based page numbers, and return an empty item list with a
valid total when the page is past the end.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, transaction
from django.db.models import F, Q
from django.db.models.query import QuerySet

from .exceptions import PostNotFound, StorageError
from .models import Post

logger = logging.getLogger(__name__)

RECENT_FIRST = ("-created_at", "-id")
MOST_VIEWED_FIRST = ("-view_count", "-created_at", "-id")


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise database failures inside the block as ``StorageError``."""
    try:
        yield
    except DatabaseError as e:
        logger.error(
            "Post store operation failed.",
            extra={"operation": operation, "error": str(e)},
        )
        raise StorageError(f"Post store failed during {operation}", cause=e) from e


class PostStore:
    """Persistence and query operations for ``Post`` records."""

    def create(self, *, title: str, content: str, author: str) -> Post:
        """
        Persist a new post and return it with id and timestamps assigned.

        Raises:
            StorageError: if a column constraint is violated or the database fails.
        """
        post = Post(title=title, content=content, author=author)
        try:
            post.full_clean()
        except DjangoValidationError as e:
            raise StorageError(f"Post rejected by store: {e.message_dict}", cause=e) from e

        with storage_errors("create"):
            post.save(force_insert=True)
        return post

    def get_by_id(self, post_id: int) -> Post:
        with storage_errors("get_by_id"):
            try:
                return Post.objects.get(pk=post_id)
            except Post.DoesNotExist:
                raise PostNotFound(post_id) from None

    def list_all(self, page: int, size: int) -> tuple[list[Post], int]:
        return self._paginate(Post.objects.all(), page, size)

    def list_by_author(self, author: str, page: int, size: int) -> tuple[list[Post], int]:
        return self._paginate(Post.objects.filter(author=author), page, size)

    def search_by_keyword(
        self, keyword: str, page: int, size: int
    ) -> tuple[list[Post], int]:
        """Case-insensitive substring match against title or content."""
        queryset = Post.objects.filter(
            Q(title__icontains=keyword) | Q(content__icontains=keyword)
        )
        return self._paginate(queryset, page, size)

    def search_by_title(self, keyword: str, page: int, size: int) -> tuple[list[Post], int]:
        """Case-insensitive substring match against the title only."""
        return self._paginate(Post.objects.filter(title__icontains=keyword), page, size)

    def list_created_between(self, start: datetime, end: datetime) -> list[Post]:
        """Posts created within ``[start, end]``, newest first."""
        queryset = Post.objects.filter(created_at__gte=start, created_at__lte=end)
        with storage_errors("list_created_between"):
            return list(queryset.order_by(*RECENT_FIRST))

    def top_by_view_count(self, limit: int = 10) -> list[Post]:
        """Most viewed posts; equal counts fall back to newest first."""
        with storage_errors("top_by_view_count"):
            return list(Post.objects.order_by(*MOST_VIEWED_FIRST)[:limit])

    def count_by_author(self, author: str) -> int:
        with storage_errors("count_by_author"):
            return Post.objects.filter(author=author).count()

    def count(self) -> int:
        with storage_errors("count"):
            return Post.objects.count()

    def increment_view_count(self, post_id: int) -> int:
        """
        Add one to the post's view counter in a single UPDATE statement.

        The counter is incremented in the database (``F()`` expression), so
        concurrent calls never lose an update. ``updated_at`` is not changed.
        The stored counter is read back in the same transaction, while the
        UPDATE still holds the row.

        Returns:
            The view count stored after this increment.

        Raises:
            PostNotFound: if no row has ``post_id``.
        """
        with storage_errors("increment_view_count"), transaction.atomic():
            updated = Post.objects.filter(pk=post_id).update(
                view_count=F("view_count") + 1
            )
            if not updated:
                raise PostNotFound(post_id)
            return (
                Post.objects.filter(pk=post_id).values_list("view_count", flat=True).get()
            )

    def _paginate(
        self, queryset: QuerySet[Post], page: int, size: int
    ) -> tuple[list[Post], int]:
        offset = page * size
        queryset = queryset.order_by(*RECENT_FIRST)
        # Count and slice are read in one transaction
        with storage_errors("paginate"), transaction.atomic():
            total_count = queryset.count()
            items = list(queryset[offset : offset + size]) if offset < total_count else []
        return items, total_count
