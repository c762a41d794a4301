"""
Custom Exceptions for the Xact Estate backend

Provides a hierarchy of exceptions for standardized error handling across all modules.

Exception Hierarchy:
    XactError (base)
    ├── ConfigurationError
    ├── DatabaseError
    │   └── DatabaseConnectionError
    ├── ValidationError
    ├── NotFoundError
    ├── ForbiddenError
    ├── RateLimitError
    └── CalculationError
"""

from typing import Optional


class XactError(Exception):
    """Base exception for all Xact Estate errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


# Configuration Errors
class ConfigurationError(XactError):
    """Raised when there's a configuration problem."""

    pass


# Database Errors
class DatabaseError(XactError):
    """Base exception for database-related errors."""

    pass


class DatabaseConnectionError(DatabaseError):
    """Raised when unable to connect to the database."""

    pass


# Validation Errors
class ValidationError(XactError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str = None, value=None):
        self.field = field
        self.value = value
        super().__init__(message)


# Lookup / access errors
class NotFoundError(XactError):
    """Raised when a requested record does not exist or is not public."""

    def __init__(self, message: str, resource: str = None, identifier: str = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(message)


class ForbiddenError(XactError):
    """Raised when a user acts on a listing they do not own."""

    pass


class RateLimitError(XactError):
    """Raised when a client or email submits too often."""

    def __init__(self, message: str, retry_after: Optional[int] = None):
        self.retry_after = retry_after
        super().__init__(message)


# Finance Errors
class CalculationError(XactError):
    """Raised when calculator inputs cannot produce a result."""

    pass
