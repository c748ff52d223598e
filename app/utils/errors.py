"""
Lunchbox API - Custom Exception Classes.

Exception hierarchy for application error handling. Every subclass carries
the HTTP status it is rendered with; the handlers in ``main.py`` turn them
into ``{"error": message}`` responses.
"""

from typing import Optional


class LunchboxException(Exception):
    """
    Base exception class for the Lunchbox application.

    All custom exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code for the error.
        detail: Additional error details.
    """

    def __init__(
        self,
        message: str = "An error occurred",
        status_code: int = 500,
        detail: Optional[str] = None
    ):
        """
        Initialize LunchboxException.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code (default 500).
            detail: Additional error details.
        """
        self.message = message
        self.status_code = status_code
        self.detail = detail or message
        super().__init__(self.message)


class AuthenticationError(LunchboxException):
    """
    Exception raised when no principal can be resolved for the request.

    The message stays generic so it never reveals whether an account exists.
    """

    def __init__(
        self,
        message: str = "Unauthorized",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=401,
            detail=detail
        )


class ForbiddenError(LunchboxException):
    """
    Exception raised when the principal lacks the required role.

    Never carries the caller's actual role.
    """

    def __init__(
        self,
        message: str = "Forbidden",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=403,
            detail=detail
        )


class ValidationError(LunchboxException):
    """
    Exception raised for input validation failures.

    Used when:
    - Invalid input format
    - Missing required fields
    - Business rule violations (partial cold bundle, unarchive attempts)
    """

    def __init__(
        self,
        message: str = "Validation error",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=400,
            detail=detail
        )


class NotFoundError(LunchboxException):
    """Exception raised when a resource is not found."""

    def __init__(
        self,
        message: str = "Resource not found",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=404,
            detail=detail
        )


class ConflictError(LunchboxException):
    """
    Exception raised for referential-integrity conflicts.

    Used when a menu item that is still referenced by plans or daily options
    is hard-deleted.
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=409,
            detail=detail
        )


class UpstreamError(LunchboxException):
    """Exception raised when the identity provider or backing store fails."""

    def __init__(
        self,
        message: str = "Upstream service error",
        status_code: int = 500,
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=status_code,
            detail=detail
        )
