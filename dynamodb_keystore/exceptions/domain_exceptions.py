"""
Domain-Specific Exceptions for the Keystore

All exceptions extend the base KeystoreError. They fall into two groups:

1. Caller errors (invalid arguments)
2. Backend outcomes (predicate failures and genuine backend failures)

Predicate failures (ConditionFailedError) are an expected outcome of the
versioned-write protocol: Keyspace operations catch them and answer False.
Every other backend exception propagates to the caller untouched.
"""

from typing import Any, Dict, Optional

from .base import KeystoreError


# =============================================================================
# Caller Errors
# =============================================================================

class ValidationError(KeystoreError):
    """Raised when an argument or request is invalid.

    Used for:
    - None keys, values or versions passed to a Keyspace operation
    - Invalid configuration values
    - DynamoDB ValidationException responses
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Dictionary of field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {}
        if self.errors:
            context['validation_errors'] = self.errors
        super().__init__(message, original_error, context)


# =============================================================================
# Missing Table Errors
# =============================================================================

class TableNotFoundError(KeystoreError):
    """Raised when the backing table does not exist.

    An absent key is never an error: reads return None and conditional
    writes return False.
    """

    def __init__(self, table_name: str, original_error: Optional[Exception] = None):
        """Initialize table not found error.

        Args:
            table_name: Name of the DynamoDB table
            original_error: The original exception that caused this error
        """
        self.table_name = table_name
        message = f"Table not found: '{table_name}'"
        super().__init__(message, original_error, {'table_name': table_name})


# =============================================================================
# Conflict and Conditional Errors
# =============================================================================

class ConflictError(KeystoreError):
    """Raised when an operation conflicts with concurrent or existing state."""

    def __init__(self, message: str, resource_id: Optional[str] = None, original_error: Optional[Exception] = None):
        """Initialize conflict error.

        Args:
            message: Human-readable error message
            resource_id: Key of the conflicting item
            original_error: The original exception that caused this error
        """
        self.resource_id = resource_id
        context = {}
        if resource_id:
            context['resource_id'] = resource_id
        super().__init__(message, original_error, context)


class ConditionFailedError(ConflictError):
    """Raised by a storage backend when a conditional predicate does not hold.

    Used for:
    - ConditionalCheckFailedException from DynamoDB
    - ITEM_ABSENT / ITEM_PRESENT / VERSION_EQUALS mismatches in MemoryBackend
    """


# =============================================================================
# Infrastructure and Retry Errors
# =============================================================================

class ConnectionError(KeystoreError):
    """Raised when the storage backend cannot be reached or refuses access.

    Used for:
    - Network connectivity issues
    - Authentication/authorization failures
    - Invalid endpoint configurations
    - Unknown DynamoDB error codes
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


class RetryableError(KeystoreError):
    """Raised when the backend failed for a temporary reason (throttling, timeouts).

    The keystore never retries on its own; callers decide.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message, original_error)
