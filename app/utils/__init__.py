"""Lunchbox API - Utilities Package."""

from app.utils.errors import (
    LunchboxException,
    AuthenticationError,
    ForbiddenError,
    ValidationError,
    NotFoundError,
    ConflictError,
    UpstreamError,
)
from app.utils.dates import parse_month, validate_range

__all__ = [
    "LunchboxException",
    "AuthenticationError",
    "ForbiddenError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "UpstreamError",
    "parse_month",
    "validate_range",
]
