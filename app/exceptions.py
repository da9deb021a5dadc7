"""
Custom exceptions and error handling utilities for the SAMD Care application.
"""

import re
from typing import Any, Dict, Optional


class SamdCareException(Exception):
    """Base exception class for all SAMD Care application errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__
        super().__init__(message)


class ValidationError(SamdCareException):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message, status_code=400, details=details, error_code="VALIDATION_ERROR"
        )


class AuthenticationError(SamdCareException):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, status_code=401, error_code="AUTHENTICATION_ERROR")


class NotFoundError(SamdCareException):
    """Raised when a resource is not found.

    Also used when the resource exists but belongs to another owner, so the
    two cases are indistinguishable to the caller.
    """

    def __init__(
        self, message: str = "Resource not found", resource_type: Optional[str] = None
    ):
        details = {"resource_type": resource_type} if resource_type else {}
        super().__init__(
            message, status_code=404, details=details, error_code="NOT_FOUND_ERROR"
        )


class ConflictError(SamdCareException):
    """Raised when there's a conflict with the current state."""

    def __init__(self, message: str = "Resource conflict"):
        super().__init__(message, status_code=409, error_code="CONFLICT_ERROR")


class DatabaseError(SamdCareException):
    """Raised when database operations fail."""

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
    ):
        details = {"operation": operation} if operation else {}
        super().__init__(
            message, status_code=500, details=details, error_code="DATABASE_ERROR"
        )


class GenerationError(SamdCareException):
    """Raised when AI recommendation generation fails.

    The response body never carries provider detail; that goes to the logs.
    """

    def __init__(self, message: str = "Failed to generate recommendations"):
        super().__init__(message, status_code=500, error_code="GENERATION_ERROR")


class AnalysisSchemaError(GenerationError):
    """The model answered, but the output did not match the analysis schema."""


class AnalysisServiceError(GenerationError):
    """The model could not be reached, timed out or refused the request."""


def extract_sql_error_message(exception: Exception) -> tuple[str, str]:
    """
    Extract meaningful error message from SQLAlchemy exceptions.

    Returns:
        tuple: (user_friendly_message, technical_details)
    """
    error_str = str(exception)
    lowered = error_str.lower()

    if "column" in lowered and "does not exist" in lowered:
        match = re.search(r'column "([^"]*)" does not exist', error_str)
        if match:
            return f"Database column '{match.group(1)}' does not exist", error_str
        return "Database column does not exist", error_str

    elif "relation" in lowered and "does not exist" in lowered:
        match = re.search(r'relation "([^"]*)" does not exist', error_str)
        if match:
            return f"Database table '{match.group(1)}' does not exist", error_str
        return "Database table does not exist", error_str

    elif "duplicate key" in lowered:
        return "Duplicate record - this data already exists", error_str

    elif "foreign key constraint" in lowered:
        return "Invalid reference - related record not found", error_str

    elif "not null constraint" in lowered:
        return "Required field is missing", error_str

    return "Database query failed", error_str
