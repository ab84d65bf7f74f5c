"""
Core utilities package.
Exports configuration, logging, middleware, and exceptions.
"""
from ndis_directory.core.config import settings
from ndis_directory.core.logging import logger
from ndis_directory.core.middleware import RequestIdMiddleware, get_request_id
from ndis_directory.core.exceptions import (
    AppException,
    ValidationError,
    NotFoundError,
    UnavailableError,
    UnauthorizedError,
)

__all__ = [
    "settings",
    "logger",
    "RequestIdMiddleware",
    "get_request_id",
    "AppException",
    "ValidationError",
    "NotFoundError",
    "UnavailableError",
    "UnauthorizedError",
]
