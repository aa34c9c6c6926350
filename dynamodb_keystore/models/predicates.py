"""
Conditional predicates for backend mutations.

A Predicate is a small tagged variant describing the condition a backend must
evaluate against the existing item before applying a write or delete:

- NONE: unconditional
- ITEM_ABSENT: no item stored under the key
- ITEM_PRESENT: an item is stored under the key
- VERSION_EQUALS: an item is stored and its version equals ``version``

Backends translate a Predicate into their native conditional primitive and
raise ConditionFailedError when it does not hold.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator


class PredicateKind(str, Enum):
    """Kinds of condition a backend can evaluate."""
    NONE = "none"
    ITEM_ABSENT = "item_absent"
    ITEM_PRESENT = "item_present"
    VERSION_EQUALS = "version_equals"


class Predicate(BaseModel):
    """Condition over the existing item, evaluated atomically by the backend."""

    kind: PredicateKind = PredicateKind.NONE
    version: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def validate_version(self):
        """Only VERSION_EQUALS carries a version."""
        if self.kind is PredicateKind.VERSION_EQUALS and self.version is None:
            raise ValueError("VERSION_EQUALS predicate requires a version")
        if self.kind is not PredicateKind.VERSION_EQUALS and self.version is not None:
            raise ValueError(f"{self.kind.value} predicate does not take a version")
        return self

    @classmethod
    def none(cls) -> 'Predicate':
        return cls(kind=PredicateKind.NONE)

    @classmethod
    def item_absent(cls) -> 'Predicate':
        return cls(kind=PredicateKind.ITEM_ABSENT)

    @classmethod
    def item_present(cls) -> 'Predicate':
        return cls(kind=PredicateKind.ITEM_PRESENT)

    @classmethod
    def version_equals(cls, version: int) -> 'Predicate':
        return cls(kind=PredicateKind.VERSION_EQUALS, version=version)

    @property
    def is_conditional(self) -> bool:
        return self.kind is not PredicateKind.NONE

    def matches(self, current_version: Optional[int], exists: bool) -> bool:
        """Evaluate the predicate against an item's current state.

        Args:
            current_version: Version of the stored item (None if absent or unset)
            exists: Whether an item is stored under the key

        Returns:
            True if the predicate holds
        """
        if self.kind is PredicateKind.NONE:
            return True
        if self.kind is PredicateKind.ITEM_ABSENT:
            return not exists
        if self.kind is PredicateKind.ITEM_PRESENT:
            return exists
        return exists and current_version == self.version
