"""
Keyspace: versioned key-value operations over a storage backend

A Keyspace is a named partition of the shared table. Every operation is one
request to the backend:

| Operation     | Backend request                                   |
|---------------|---------------------------------------------------|
| add           | put_item, ITEM_ABSENT                              |
| set           | put_item, unconditional                            |
| check_and_set | update_item, VERSION_EQUALS(version)               |
| replace       | update_item, ITEM_PRESENT, prior item returned     |
| delete        | delete_item, removed item returned                 |
| deletes       | delete_item, VERSION_EQUALS(version), removed item |
| exists        | get_item, key-only projection                      |
| get / gets    | get_item                                           |

A failed predicate is an expected answer, not an error: the conditional
operations return False. Other backend exceptions propagate unchanged and are
never retried here. The keyspace keeps no mutable state and takes no locks;
atomicity comes from the backend's single-item conditional primitive.
"""

import logging
from typing import Any, Callable, Optional, Tuple

from .backends import StorageBackend
from .exceptions import ConditionFailedError, ValidationError
from .models import AttributeRole, KeyValue, Predicate, ReadConsistency, StoredItem
from .utils.versioning import VersionFunction, string_hash_code

logger = logging.getLogger(__name__)


def _require(name: str, value: Any) -> None:
    """Reject a missing argument before anything reaches the backend."""
    if value is None:
        raise ValidationError(f"{name} must not be None", errors={name.lower(): "required"})


class Keyspace:
    """
    Versioned key-value operations scoped to one partition of a backend.

    Usage:
        keyspace = adapter.get_keyspace("sessions")
        keyspace.set("alice", "token-1")
        current = keyspace.gets("alice")
        keyspace.check_and_set("alice", "token-2", current.version)
    """

    def __init__(
        self,
        name: str,
        backend: StorageBackend,
        read_consistency: ReadConsistency = ReadConsistency.STRONG,
        version_function: VersionFunction = string_hash_code,
    ):
        """Initialize keyspace.

        Args:
            name: Keyspace (partition) name
            backend: Storage backend holding the shared table
            read_consistency: Consistency mode used by exists/get/gets
            version_function: Derives a version token from a value
        """
        _require("Keyspace name", name)
        _require("Backend", backend)
        self._name = name
        self._backend = backend
        self._read_consistency = ReadConsistency(read_consistency)
        self._version_function = version_function

    @property
    def name(self) -> str:
        return self._name

    @property
    def read_consistency(self) -> ReadConsistency:
        return self._read_consistency

    def version_of(self, value: str) -> int:
        """Version token this keyspace assigns to ``value``."""
        _require("Value", value)
        return self._version_function(value)

    def __repr__(self) -> str:
        return f"Keyspace(name={self._name!r}, read_consistency={self._read_consistency.value!r})"

    # ------------------------------------------------------------------
    # Shared conditional primitives
    # ------------------------------------------------------------------

    def _conditional(
        self,
        operation: Callable[..., Optional[StoredItem]],
        key: str,
        predicate: Predicate,
        *args,
        **kwargs
    ) -> Tuple[bool, Optional[StoredItem]]:
        """Run a backend mutation, turning a failed predicate into (False, None)."""
        try:
            return True, operation(self._name, key, *args, predicate=predicate, **kwargs)
        except ConditionFailedError:
            logger.debug(f"Predicate {predicate.kind.value} not met on {self._name}/{key}")
            return False, None

    def _write(self, key: str, value: str, predicate: Predicate) -> bool:
        """Put the whole item under ``predicate`` (add, set)."""
        succeeded, _ = self._conditional(self._backend.put_item, key, predicate, value, self.version_of(value))
        return succeeded

    def _update(self, key: str, value: str, predicate: Predicate, return_prior: bool = False) -> Tuple[bool, Optional[StoredItem]]:
        """Update value and version under ``predicate`` (check_and_set, replace)."""
        return self._conditional(
            self._backend.update_item, key, predicate, value, self.version_of(value), return_prior=return_prior
        )

    def _remove(self, key: str, predicate: Predicate) -> bool:
        """Delete under ``predicate``; True only if an item was actually removed (delete, deletes)."""
        succeeded, removed = self._conditional(self._backend.delete_item, key, predicate, return_prior=True)
        return succeeded and removed is not None

    def _read(self, key: str, projection=None) -> Optional[StoredItem]:
        return self._backend.get_item(self._name, key, self._read_consistency, projection)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add(self, key: str, value: str) -> bool:
        """Store ``value`` only if no item exists under ``key``.

        Returns:
            True if the item was created, False if one already existed
        """
        _require("Key", key)
        _require("Value", value)
        return self._write(key, value, Predicate.item_absent())

    def set(self, key: str, value: str) -> bool:
        """Store ``value`` unconditionally, overwriting value and version. Always True."""
        _require("Key", key)
        _require("Value", value)
        return self._write(key, value, Predicate.none())

    def check_and_set(self, key: str, value: str, version: int) -> bool:
        """Store ``value`` only if the stored version equals ``version``.

        Args:
            key: Item key
            value: New value
            version: Version obtained from a previous gets()

        Returns:
            True if updated, False if the version was stale or the item absent
        """
        _require("Key", key)
        _require("Value", value)
        _require("Version", version)
        succeeded, _ = self._update(key, value, Predicate.version_equals(version))
        return succeeded

    def replace(self, key: str, value: str) -> bool:
        """Store ``value`` only if an item already exists under ``key``.

        Returns:
            True if the stored value changed (or the backend reported no prior
            item); False if the item did not exist or already held ``value``
        """
        _require("Key", key)
        _require("Value", value)
        succeeded, prior = self._update(key, value, Predicate.item_present(), return_prior=True)
        if not succeeded:
            return False
        if prior is None:
            return True
        return prior.value != value

    def delete(self, key: str) -> bool:
        """Delete the item under ``key``. True if an item was removed."""
        _require("Key", key)
        return self._remove(key, Predicate.none())

    def deletes(self, key: str, version: int) -> bool:
        """Delete the item only if its stored version equals ``version``.

        Returns:
            True if an item was removed; False on a stale version or absent item
        """
        _require("Key", key)
        _require("Version", version)
        return self._remove(key, Predicate.version_equals(version))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def exists(self, key: str) -> bool:
        _require("Key", key)
        return self._read(key, projection=[AttributeRole.KEY]) is not None

    def get(self, key: str) -> Optional[str]:
        """Value stored under ``key``, or None."""
        _require("Key", key)
        item = self._read(key)
        if item is None:
            return None
        return item.value

    def gets(self, key: str) -> Optional[KeyValue]:
        """Value and version stored under ``key``, or None."""
        _require("Key", key)
        item = self._read(key)
        if item is None:
            return None
        return KeyValue(key=key, value=item.value, version=item.version)
