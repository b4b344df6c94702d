from __future__ import annotations


CREATE_REQUIRED_MESSAGE = "Title and content are required."
UPDATE_INVALID_MESSAGE = "Title and content must be non-empty strings."
INVALID_BODY_MESSAGE = "Request body must be a JSON object."


class BlogServiceError(Exception):
    """Base exception for all blog-service errors."""

    @property
    def message(self) -> str:
        return str(self)


class PostValidationError(BlogServiceError):
    """Required post fields are missing or empty."""


class InvalidRequestBodyError(BlogServiceError):
    """A JSON request body could not be parsed into an object."""


class PostNotFoundError(BlogServiceError):
    """An operation addressed a post id that is not in the store."""

    def __init__(self, post_id: str, action: str = "get") -> None:
        self.post_id = post_id
        self.action = action
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        if self.action == "update":
            return f"Could not update blog post with id={self.post_id}. Post not found"
        if self.action == "delete":
            return f"Could not delete blog post with id={self.post_id}. Post not found"
        return f"Blog post with id={self.post_id} not found"
