"""Post model."""

from django.core.validators import MaxLengthValidator
from django.db import models

from apps.core.models import TimestampedModel

TITLE_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 5000
AUTHOR_MAX_LENGTH = 50


class Post(TimestampedModel):
    """
    A short text entry written by a named author.

    Attributes:
        title: Post title, at most 200 characters.
        content: Body text, at most 5000 characters.
        author: Free-form display name of the writer (not a user foreign key).
        view_count: How many times the post has been fetched by id.
    """

    title = models.CharField(
        max_length=TITLE_MAX_LENGTH, help_text="The title of the post."
    )
    content = models.TextField(
        validators=[MaxLengthValidator(CONTENT_MAX_LENGTH)],
        help_text="The main content of the post.",
    )
    author = models.CharField(
        max_length=AUTHOR_MAX_LENGTH,
        db_index=True,
        help_text="Display name of the post author.",
    )
    view_count = models.PositiveBigIntegerField(
        default=0, help_text="Number of times the post has been viewed."
    )

    class Meta:
        verbose_name = "Post"
        verbose_name_plural = "Posts"
        ordering = ["-created_at", "-id"]
        indexes = [
            # Ranking for the popular posts listing
            models.Index(fields=["-view_count", "-created_at"], name="idx_post_popular"),
        ]

    def __str__(self) -> str:
        return self.title
