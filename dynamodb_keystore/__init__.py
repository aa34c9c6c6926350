"""
DynamoDB Keystore

Versioned key-value keyspaces over a shared DynamoDB table, with
compare-and-swap operations built on DynamoDB conditional writes.
"""

from .config import DynamoDBConfig
from .exceptions import (
    ConditionFailedError,
    ConflictError,
    ConnectionError,
    KeystoreError,
    RetryableError,
    TableNotFoundError,
    ValidationError,
)
from .models import (
    AttributeNames,
    AttributeRole,
    KeyValue,
    Predicate,
    PredicateKind,
    ReadConsistency,
    StoredItem,
)
from .core import (
    TableGateway,
    create_table_gateway,
)
from .backends import (
    DynamoDBBackend,
    MemoryBackend,
    StorageBackend,
)
from .keyspace import Keyspace
from .adapter import KeystoreAdapter, create_dynamodb_adapter
from .logging_config import configure_logging
from .utils import content_digest, string_hash_code

__version__ = "0.1.0"
__all__ = [
    # Configuration
    "DynamoDBConfig",
    "configure_logging",

    # Exceptions
    "ConditionFailedError",
    "ConflictError",
    "ConnectionError",
    "KeystoreError",
    "RetryableError",
    "TableNotFoundError",
    "ValidationError",

    # Models
    "AttributeNames",
    "AttributeRole",
    "KeyValue",
    "Predicate",
    "PredicateKind",
    "ReadConsistency",
    "StoredItem",

    # Gateway
    "TableGateway",
    "create_table_gateway",

    # Backends
    "DynamoDBBackend",
    "MemoryBackend",
    "StorageBackend",

    # Keyspaces
    "Keyspace",
    "KeystoreAdapter",
    "create_dynamodb_adapter",

    # Version tokens
    "content_digest",
    "string_hash_code",
]
