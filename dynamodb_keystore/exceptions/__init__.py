# Base exception class
from .base import KeystoreError

# Domain-specific exceptions
from .domain_exceptions import (
    ValidationError,
    TableNotFoundError,
    ConflictError,
    ConditionFailedError,
    ConnectionError,
    RetryableError,
)

__all__ = [
    # Base exception
    "KeystoreError",

    # Domain exceptions (alphabetically ordered)
    "ConditionFailedError",
    "ConflictError",
    "ConnectionError",
    "RetryableError",
    "TableNotFoundError",
    "ValidationError",
]
