"""
Common Exception Classes

This module defines the exceptions shared by the storage layer. Callers
distinguish a missing record (NotFoundError) from a persistence failure
(DatabaseError) so that "does not exist" can be presented differently
from a transient error.
"""

from typing import Optional, Any


class BaseError(Exception):
    """Base class for all custom exceptions."""

    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            original_exception: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.original_exception = original_exception


class DatabaseError(BaseError):
    """Exception raised for database-related errors."""

    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        """
        Initialize the database error.

        Args:
            message: Error message, usually naming the failed operation
            original_exception: Original database exception
        """
        super().__init__(f"Database error: {message}", original_exception)


class ConfigurationError(BaseError):
    """Exception raised for configuration-related errors."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(f"Configuration error: {message}")
        self.config_key = config_key


class NotFoundError(BaseError):
    """Exception raised when a resource is not found."""

    def __init__(self, resource_type: str, resource_id: Any):
        """
        Initialize the not found error.

        Args:
            resource_type: Type of resource that wasn't found
            resource_id: ID of the resource that wasn't found
        """
        super().__init__(f"{resource_type} with ID {resource_id} not found")
        self.resource_type = resource_type
        self.resource_id = resource_id
