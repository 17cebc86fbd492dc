"""Application exceptions.

Every error that should reach the client verbatim derives from ApiError and
carries its HTTP status. Anything else is treated as an internal failure by
the exception handlers and never leaks its detail.
"""

from typing import Any


class ApiError(Exception):
    """Base exception for errors surfaced to the API caller.

    Attributes:
        status_code: HTTP status of the failure response.
        message: Human-readable error description.
        errors: Additional error entries (e.g. per-field problems).
    """

    status_code = 500
    default_message = "Something went wrong"

    def __init__(
        self,
        message: str | None = None,
        errors: list[Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)


class InvalidArgumentError(ApiError):
    """Malformed or missing identifier or field."""

    status_code = 400
    default_message = "Invalid argument"


class UnauthorizedError(ApiError):
    """Missing, invalid or expired credentials."""

    status_code = 401
    default_message = "Unauthorized request"


class ForbiddenError(ApiError):
    """The actor does not own the resource."""

    status_code = 403
    default_message = "You do not have permission to perform this action"


class NotFoundError(ApiError):
    """Referenced entity does not exist."""

    status_code = 404
    default_message = "Resource not found"


class ConflictError(ApiError):
    """A unique field is already taken."""

    status_code = 409
    default_message = "Resource already exists"


class UpstreamError(ApiError):
    """The asset host failed."""

    status_code = 502
    default_message = "Asset host request failed"


class InternalError(ApiError):
    """Unexpected store failure."""

    status_code = 500
    default_message = "Internal server error"
