# backend/app/core/exceptions.py
"""
Domain-specific exceptions for the location directory search API.

These exceptions provide clear, client-facing error messages
that can be caught and handled appropriately at the API layer.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        """Default conversion to HTTPException (override in subclasses)."""
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ValidationException(DomainException):
    """Raised when request validation fails."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class SearchValidationError(ValidationException):
    """Raised by the search parameter parser for malformed query parameters."""

    def __init__(self, message: str, code: str, field: Optional[str] = None) -> None:
        super().__init__(message, code=code, details={"field": field} if field else None)
        self.field = field


class GeocodingError(Exception):
    """
    Raised when a geocoding provider cannot resolve an address.

    Never surfaced to clients: the location resolver degrades the
    location filter to an empty match instead.
    """


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues or query failures.
    """
