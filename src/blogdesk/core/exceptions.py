"""Application-specific exceptions.

Every error a route can raise on purpose derives from ``BlogdeskError`` and
carries the HTTP status it maps to. The handlers registered in
``blogdesk.main`` turn them into ``{"error": ...}`` JSON bodies.
"""

from fastapi import status


class BlogdeskError(Exception):
    """Base exception for all Blogdesk errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, details: object | None = None):
        """Initialize the exception.

        Args:
            message: Client-facing error message.
            details: Optional extra context, only exposed outside production.
        """
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class InvalidInputError(BlogdeskError):
    """Raised when the client sent something it can correct."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class UnauthenticatedError(BlogdeskError):
    """Raised when a route requires a credential and none was sent."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access denied. No token provided."


class UnknownIdentityError(BlogdeskError):
    """Raised when a valid token names a user that no longer exists."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "User not found"


class InvalidCredentialError(BlogdeskError):
    """Raised when a token is malformed, expired or badly signed."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid token"


class ForbiddenError(BlogdeskError):
    """Raised when the identity lacks the role a route requires."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied. Admin privileges required."


class NotFoundError(BlogdeskError):
    """Raised when a resource is missing or hidden from the requester."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class PostNotFoundError(NotFoundError):
    """Raised when a post is missing or not visible to the requester."""

    default_message = "Blog post not found"

    def __init__(self, post_id: str | None = None):
        """Initialize the exception.

        Args:
            post_id: The identifier that failed to resolve.
        """
        self.post_id = post_id
        super().__init__()


class ConfigurationError(BlogdeskError):
    """Raised when there is a configuration error."""

    pass
