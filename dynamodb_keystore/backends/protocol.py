"""StorageBackend protocol for keystore storage engines."""

from typing import List, Optional, Protocol, runtime_checkable

from ..models import AttributeRole, Predicate, ReadConsistency, StoredItem


@runtime_checkable
class StorageBackend(Protocol):
    """Protocol for storage engines addressed by (partition, key).

    Implementations must evaluate a predicate and apply the mutation as one
    indivisible step, and raise ConditionFailedError when the predicate does
    not hold. Any other failure is raised as the corresponding KeystoreError.
    """

    def put_item(
        self,
        partition: str,
        key: str,
        value: str,
        version: int,
        predicate: Predicate = Predicate.none(),
    ) -> None:
        """Write the whole item. Predicate: NONE, ITEM_ABSENT or ITEM_PRESENT."""
        ...

    def update_item(
        self,
        partition: str,
        key: str,
        value: str,
        version: int,
        predicate: Predicate = Predicate.none(),
        return_prior: bool = False,
    ) -> Optional[StoredItem]:
        """Set value and version on the item. Predicate: NONE, VERSION_EQUALS or ITEM_PRESENT.

        Returns the item as it was before the update when ``return_prior`` is
        set and an item existed, otherwise None.
        """
        ...

    def delete_item(
        self,
        partition: str,
        key: str,
        predicate: Predicate = Predicate.none(),
        return_prior: bool = True,
    ) -> Optional[StoredItem]:
        """Delete the item. Predicate: NONE or VERSION_EQUALS.

        Returns the removed item when ``return_prior`` is set and an item was
        removed, otherwise None.
        """
        ...

    def get_item(
        self,
        partition: str,
        key: str,
        consistency: ReadConsistency = ReadConsistency.STRONG,
        projection: Optional[List[AttributeRole]] = None,
    ) -> Optional[StoredItem]:
        """Read the item, or None if not found. Projection limits returned roles."""
        ...
