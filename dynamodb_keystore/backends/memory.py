"""In-memory keystore storage backend."""

import logging
from threading import Lock
from typing import Dict, List, Optional, Tuple

from ..exceptions import ConditionFailedError
from ..models import AttributeRole, Predicate, ReadConsistency, StoredItem

logger = logging.getLogger(__name__)


class MemoryBackend:
    """In-memory StorageBackend.

    Suitable for development and testing. Data is lost on restart. A single
    lock makes every predicate check and mutation one atomic step, so the
    conditional semantics match DynamoDB's. Reads are always strongly
    consistent regardless of the requested mode.
    """

    def __init__(self) -> None:
        self._items: Dict[Tuple[str, str], StoredItem] = {}
        self._lock = Lock()

    def _check(self, predicate: Predicate, partition: str, key: str) -> Optional[StoredItem]:
        """Evaluate a predicate against the current item (caller holds the lock)."""
        current = self._items.get((partition, key))
        exists = current is not None
        if not predicate.matches(current.version if exists else None, exists):
            logger.debug(f"Predicate {predicate.kind.value} failed for {partition}/{key}")
            raise ConditionFailedError(
                f"Conditional check failed - {predicate.kind.value} on {partition}/{key}",
                f"{partition}/{key}",
            )
        return current

    def put_item(
        self,
        partition: str,
        key: str,
        value: str,
        version: int,
        predicate: Predicate = Predicate.none(),
    ) -> None:
        with self._lock:
            self._check(predicate, partition, key)
            self._items[(partition, key)] = StoredItem(key=key, value=value, version=version)

    def update_item(
        self,
        partition: str,
        key: str,
        value: str,
        version: int,
        predicate: Predicate = Predicate.none(),
        return_prior: bool = False,
    ) -> Optional[StoredItem]:
        with self._lock:
            prior = self._check(predicate, partition, key)
            self._items[(partition, key)] = StoredItem(key=key, value=value, version=version)
        return prior if return_prior else None

    def delete_item(
        self,
        partition: str,
        key: str,
        predicate: Predicate = Predicate.none(),
        return_prior: bool = True,
    ) -> Optional[StoredItem]:
        with self._lock:
            self._check(predicate, partition, key)
            prior = self._items.pop((partition, key), None)
        return prior if return_prior else None

    def get_item(
        self,
        partition: str,
        key: str,
        consistency: ReadConsistency = ReadConsistency.STRONG,
        projection: Optional[List[AttributeRole]] = None,
    ) -> Optional[StoredItem]:
        with self._lock:
            item = self._items.get((partition, key))
        if item is None or not projection:
            return item
        roles = {AttributeRole(role) for role in projection}
        return StoredItem(
            key=item.key,
            value=item.value if AttributeRole.VALUE in roles else None,
            version=item.version if AttributeRole.VERSION in roles else None,
        )

    def clear(self) -> None:
        """Clear all data. Useful for testing."""
        with self._lock:
            self._items.clear()
