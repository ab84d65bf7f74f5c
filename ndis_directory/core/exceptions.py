"""
Custom exceptions for the application.
All exceptions map to standard error codes and HTTP status codes.
"""
from typing import Optional, Dict, Any

from ndis_directory.schemas.error import ErrorCode


class AppException(Exception):
    """
    Base exception class for all application exceptions.
    All custom exceptions should inherit from this.
    """

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppException):
    """Raised when review input is malformed (422). Never retried."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(ErrorCode.INVALID_ARGUMENT, message, details)


class NotFoundError(AppException):
    """Raised when the calling layer requires an entity that does not exist (404)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(ErrorCode.NOT_FOUND, message, details)


class UnavailableError(AppException):
    """Raised when the persistence backend is unreachable or failing (503)."""

    def __init__(
        self, message: str = "Storage unavailable", details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(ErrorCode.DB_UNAVAILABLE, message, details)


class UnauthorizedError(AppException):
    """Raised when authentication is required (401)."""

    def __init__(self, message: str = "Unauthorized", details: Optional[Dict[str, Any]] = None):
        super().__init__(ErrorCode.UNAUTHORIZED, message, details)
