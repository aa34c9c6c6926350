"""
Storage backends for keyspaces.

- StorageBackend: capability protocol every backend satisfies
- DynamoDBBackend: one DynamoDB table shared by all keyspaces
- MemoryBackend: in-process store for development and tests
"""

from .dynamodb import DynamoDBBackend
from .memory import MemoryBackend
from .protocol import StorageBackend

__all__ = [
    "DynamoDBBackend",
    "MemoryBackend",
    "StorageBackend",
]
