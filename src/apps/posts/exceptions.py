"""Exceptions raised by the post store and service."""

from typing import Any, Optional


class PostServiceError(Exception):
    """Base class for all post service errors."""

    pass


class PostValidationError(PostServiceError):
    """Raised when input to the service has the wrong shape.

    ``errors`` maps a field name to a list of messages, the same layout DRF
    uses for serializer errors.
    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        message = "; ".join(
            f"{field}: {' '.join(messages)}" for field, messages in errors.items()
        )
        super().__init__(message or "Invalid input")


class PostNotFound(PostServiceError):
    """Raised when no post exists for the requested id."""

    def __init__(self, post_id: Any) -> None:
        self.post_id = post_id
        super().__init__(f"Post not found: {post_id}")


class StorageError(PostServiceError):
    """Raised when the underlying database rejects or fails an operation."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        super().__init__(message)
