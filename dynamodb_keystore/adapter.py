"""
Keystore Adapter

Hands out Keyspace views over one storage backend. All keyspaces obtained from
the same adapter share the backend (one physical table for DynamoDB) and the
adapter's read consistency and version scheme.
"""

import logging
from typing import Optional

from .backends import DynamoDBBackend, StorageBackend
from .config import DynamoDBConfig
from .core import create_table_gateway
from .exceptions import ValidationError
from .keyspace import Keyspace
from .models import ReadConsistency
from .utils.versioning import DEFAULT_VERSION_SCHEME, get_version_function

logger = logging.getLogger(__name__)


class KeystoreAdapter:
    """Factory for keyspaces sharing one storage backend."""

    def __init__(
        self,
        backend: StorageBackend,
        read_consistency: ReadConsistency = ReadConsistency.STRONG,
        version_scheme: str = DEFAULT_VERSION_SCHEME,
    ):
        """Initialize adapter.

        Args:
            backend: Storage backend shared by every keyspace
            read_consistency: Consistency mode for keyspace reads
            version_scheme: Version token scheme ('hashcode' or 'digest')
        """
        if backend is None:
            raise ValidationError("Backend must not be None", errors={'backend': "required"})
        self.backend = backend
        self.read_consistency = ReadConsistency(read_consistency)
        self.version_scheme = version_scheme
        self._version_function = get_version_function(version_scheme)

    def get_keyspace(self, keyspace_name: str) -> Keyspace:
        """Get the keyspace view for ``keyspace_name``.

        Raises:
            ValidationError: keyspace_name is None
        """
        if keyspace_name is None:
            raise ValidationError("Keyspace name must not be None", errors={'keyspace_name': "required"})
        return Keyspace(
            keyspace_name,
            self.backend,
            read_consistency=self.read_consistency,
            version_function=self._version_function,
        )


def create_dynamodb_adapter(config: DynamoDBConfig, table_name: Optional[str] = None) -> KeystoreAdapter:
    """
    Factory function to create a KeystoreAdapter backed by DynamoDB.

    The table must already exist with the keyspace attribute as partition key
    and the key attribute as sort key (both strings).

    Args:
        config: DynamoDB configuration (attribute names, consistency, version scheme)
        table_name: Base table name, defaults to config.table_name

    Returns:
        Configured KeystoreAdapter instance
    """
    gateway = create_table_gateway(config, table_name)
    backend = DynamoDBBackend(gateway, config.get_attribute_names())
    logger.info(
        f"Keystore adapter on {gateway.table_name} "
        f"(read_consistency={config.read_consistency.value}, version_scheme={config.version_scheme})"
    )
    return KeystoreAdapter(
        backend,
        read_consistency=config.read_consistency,
        version_scheme=config.version_scheme,
    )
