"""Base models shared across the application."""

from django.db import models


class TimestampedModel(models.Model):
    """Abstract base model with created/updated timestamps.

    ``created_at`` is written once on insert. ``updated_at`` is refreshed on
    every ``save()``; queryset ``update()`` calls leave it untouched.
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="Timestamp when the record was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True, help_text="Timestamp when the record was last updated"
    )

    class Meta:
        abstract = True
        ordering = ["-created_at"]
