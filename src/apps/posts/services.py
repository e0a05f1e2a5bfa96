"""
Post Services.

This file contains the business rules for posts: input normalization,
the not-found policy, view counting and mapping stored records to the
``PostSummary`` / ``PostDetail`` projections.

Views and management commands call ``PostService``; only the store touches
the database.
"""

import logging
from datetime import datetime
from typing import Optional

from django.conf import settings

from .exceptions import PostNotFound, PostValidationError
from .models import AUTHOR_MAX_LENGTH, CONTENT_MAX_LENGTH, TITLE_MAX_LENGTH
from .projections import Page, PostDetail, PostSummary
from .repositories import PostStore

logger = logging.getLogger(__name__)

POPULAR_LIMIT = 10

FIELD_LIMITS = {
    "title": TITLE_MAX_LENGTH,
    "content": CONTENT_MAX_LENGTH,
    "author": AUTHOR_MAX_LENGTH,
}


def _clean_fields(**values: str) -> dict[str, str]:
    """Trim each value and reject blank or over-length results."""
    cleaned: dict[str, str] = {}
    errors: dict[str, list[str]] = {}

    for name, value in values.items():
        text = (value or "").strip()
        if not text:
            errors[name] = ["This field may not be blank."]
        elif len(text) > FIELD_LIMITS[name]:
            errors[name] = [
                f"Ensure this field has no more than {FIELD_LIMITS[name]} characters."
            ]
        cleaned[name] = text

    if errors:
        raise PostValidationError(errors)
    return cleaned


def _require_text(name: str, value: Optional[str]) -> str:
    text = (value or "").strip()
    if not text:
        raise PostValidationError({name: ["This field may not be blank."]})
    return text


class PostService:
    """
    Orchestrates post operations against a ``PostStore``.

    Args:
        store: Persistence backend. Defaults to the ORM-backed ``PostStore``.
        log: Logger used for operation messages. Defaults to this module's logger.
    """

    def __init__(
        self, store: Optional[PostStore] = None, log: Optional[logging.Logger] = None
    ) -> None:
        self.store = store if store is not None else PostStore()
        self.logger = log if log is not None else logger
        self.max_page_size: int = getattr(settings, "POSTS_MAX_PAGE_SIZE", 100)

    def create_post(self, *, title: str, content: str, author: str) -> PostDetail:
        """
        Create a post from trimmed input.

        Raises:
            PostValidationError: if a trimmed field is blank or too long.
            StorageError: if the store fails to persist the post.
        """
        fields = _clean_fields(title=title, content=content, author=author)
        self.logger.info(
            "Creating post.",
            extra={"author": fields["author"], "title": fields["title"]},
        )

        post = self.store.create(**fields)

        self.logger.info(
            "Post created successfully.",
            extra={"post_id": post.id, "author": post.author},
        )
        return PostDetail.from_post(post)

    def get_post(self, post_id: int) -> PostDetail:
        """
        Fetch a post and count the view.

        The returned ``view_count`` is the counter stored by this view's increment,
        so views that land between fetch and increment are included. Fetch and
        increment are two separate store calls; a failed increment propagates
        as an error.

        Raises:
            PostNotFound: if no post exists with ``post_id``.
        """
        self.logger.debug("Fetching post.", extra={"post_id": post_id})
        try:
            post = self.store.get_by_id(post_id)
            post.view_count = self.store.increment_view_count(post_id)
        except PostNotFound:
            self.logger.warning("Post not found.", extra={"post_id": post_id})
            raise

        return PostDetail.from_post(post)

    def list_posts(self, page: int, size: int) -> Page[PostSummary]:
        self._check_paging(page, size)
        self.logger.debug("Listing posts.", extra={"page": page, "size": size})
        items, total = self.store.list_all(page, size)
        return self._summary_page(items, total, page, size)

    def list_posts_by_author(self, author: str, page: int, size: int) -> Page[PostSummary]:
        author = _require_text("author", author)
        self._check_paging(page, size)
        self.logger.debug(
            "Listing posts by author.",
            extra={"author": author, "page": page, "size": size},
        )
        items, total = self.store.list_by_author(author, page, size)
        return self._summary_page(items, total, page, size)

    def search_posts(self, keyword: str, page: int, size: int) -> Page[PostSummary]:
        """Posts whose title or content contains ``keyword``, ignoring case."""
        keyword = _require_text("keyword", keyword)
        self._check_paging(page, size)
        self.logger.debug(
            "Searching posts.", extra={"keyword": keyword, "page": page, "size": size}
        )
        items, total = self.store.search_by_keyword(keyword, page, size)
        return self._summary_page(items, total, page, size)

    def search_post_titles(self, keyword: str, page: int, size: int) -> Page[PostSummary]:
        """Posts whose title contains ``keyword``, ignoring case."""
        keyword = _require_text("keyword", keyword)
        self._check_paging(page, size)
        self.logger.debug(
            "Searching post titles.",
            extra={"keyword": keyword, "page": page, "size": size},
        )
        items, total = self.store.search_by_title(keyword, page, size)
        return self._summary_page(items, total, page, size)

    def posts_between(self, start: datetime, end: datetime) -> list[PostSummary]:
        if start > end:
            raise PostValidationError({"start": ["Start must not be after end."]})
        self.logger.debug(
            "Listing posts by creation date.",
            extra={"start": start.isoformat(), "end": end.isoformat()},
        )
        return [
            PostSummary.from_post(post)
            for post in self.store.list_created_between(start, end)
        ]

    def popular_posts(self) -> list[PostSummary]:
        """Top posts by view count; ties go to the newer post."""
        self.logger.debug("Listing popular posts.")
        posts = self.store.top_by_view_count(limit=POPULAR_LIMIT)
        return [PostSummary.from_post(post) for post in posts]

    def author_post_count(self, author: str) -> int:
        author = _require_text("author", author)
        return self.store.count_by_author(author)

    def _check_paging(self, page: int, size: int) -> None:
        errors: dict[str, list[str]] = {}
        if page < 0:
            errors["page"] = ["Ensure this value is greater than or equal to 0."]
        if size < 1 or size > self.max_page_size:
            errors["size"] = [f"Ensure this value is between 1 and {self.max_page_size}."]
        if errors:
            raise PostValidationError(errors)

    @staticmethod
    def _summary_page(items: list, total: int, page: int, size: int) -> Page[PostSummary]:
        return Page(items=items, total_count=total, page=page, size=size).map(
            PostSummary.from_post
        )
