"""
Read-only views of a Post returned by the service.

``PostSummary`` is used in listings and carries a shortened preview of the
content. ``PostDetail`` carries the full record. Both are plain frozen
dataclasses so callers never receive a live ORM instance.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Generic, TypeVar

from .models import Post

PREVIEW_LENGTH = 50
PREVIEW_MARKER = "..."

T = TypeVar("T")
U = TypeVar("U")


def content_preview(content: str) -> str:
    """Return the first 50 characters of ``content`` plus a marker when cut."""
    if len(content) > PREVIEW_LENGTH:
        return content[:PREVIEW_LENGTH] + PREVIEW_MARKER
    return content


@dataclass(frozen=True)
class PostSummary:
    id: int
    title: str
    author: str
    created_at: datetime
    view_count: int
    content_preview: str

    @classmethod
    def from_post(cls, post: Post) -> "PostSummary":
        return cls(
            id=post.id,
            title=post.title,
            author=post.author,
            created_at=post.created_at,
            view_count=post.view_count,
            content_preview=content_preview(post.content),
        )


@dataclass(frozen=True)
class PostDetail:
    id: int
    title: str
    content: str
    author: str
    created_at: datetime
    updated_at: datetime
    view_count: int

    @classmethod
    def from_post(cls, post: Post) -> "PostDetail":
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            author=post.author,
            created_at=post.created_at,
            updated_at=post.updated_at,
            view_count=post.view_count,
        )


@dataclass(frozen=True)
class Page(Generic[T]):
    """A zero-based slice of an ordered result set plus the total match count."""

    items: list[T]
    total_count: int
    page: int
    size: int
    total_pages: int = field(init=False)

    def __post_init__(self) -> None:
        pages = math.ceil(self.total_count / self.size) if self.size else 0
        object.__setattr__(self, "total_pages", pages)

    @property
    def is_first(self) -> bool:
        return self.page == 0

    @property
    def is_last(self) -> bool:
        return self.page >= self.total_pages - 1

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    def map(self, func: Callable[[T], U]) -> "Page[U]":
        """Return a page with ``func`` applied to each item, keeping paging data."""
        return Page(
            items=[func(item) for item in self.items],
            total_count=self.total_count,
            page=self.page,
            size=self.size,
        )
