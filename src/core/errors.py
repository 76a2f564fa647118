"""
Custom exceptions and error handling for Tripper.

Defines application-specific exceptions with error codes for consistent
error handling across Lambda functions and client communication.

Usage:
    from core.errors import ForbiddenError

    raise ForbiddenError("Only the trip owner can perform this action")
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for client-facing error messages."""

    # Authentication errors
    UNAUTHENTICATED = "UNAUTHENTICATED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors
    FORBIDDEN = "FORBIDDEN"

    # Lookup errors
    NOT_FOUND = "NOT_FOUND"

    # Validation errors
    INVALID_ARGUMENT = "INVALID_ARGUMENT"

    # Write conflicts
    CONFLICT = "CONFLICT"

    # Upstream (places search) errors
    UPSTREAM_TIMEOUT = "UPSTREAM_TIMEOUT"
    UPSTREAM_FAILED = "UPSTREAM_FAILED"

    # System errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


STATUS_CODES: dict[ErrorCode, int] = {
    ErrorCode.UNAUTHENTICATED: 401,
    ErrorCode.INVALID_TOKEN: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.INVALID_ARGUMENT: 400,
    ErrorCode.CONFLICT: 409,
    ErrorCode.UPSTREAM_TIMEOUT: 504,
    ErrorCode.UPSTREAM_FAILED: 502,
    ErrorCode.INTERNAL_ERROR: 500,
}

# Codes whose raw message may carry internals; everything else is written for the user.
USER_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_TOKEN: "Your session has expired. Please sign in again.",
    ErrorCode.UPSTREAM_TIMEOUT: "Request timeout",
    ErrorCode.UPSTREAM_FAILED: "The places service is temporarily unavailable. Please try again later.",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred. Please try again.",
}


class TripperError(Exception):
    """Base exception for all Tripper errors."""

    default_code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, code: ErrorCode | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return STATUS_CODES.get(self.code, 500)

    @property
    def user_message(self) -> str:
        return USER_MESSAGES.get(self.code, self.message)


class AuthenticationError(TripperError):
    """No valid session."""

    default_code = ErrorCode.UNAUTHENTICATED


class ForbiddenError(TripperError):
    """Authenticated but lacking the required trip role."""

    default_code = ErrorCode.FORBIDDEN


class NotFoundError(TripperError):
    """Referenced entity is absent."""

    default_code = ErrorCode.NOT_FOUND


class InvalidArgumentError(TripperError):
    """Input failed validation or breaks a domain rule."""

    default_code = ErrorCode.INVALID_ARGUMENT


class UpstreamError(TripperError):
    """Third-party places search failed or timed out."""

    default_code = ErrorCode.UPSTREAM_FAILED


class ConflictError(TripperError):
    """A conditional write found the document already present."""

    default_code = ErrorCode.CONFLICT
