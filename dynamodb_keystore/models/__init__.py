from .domain_models import (
    # Enums
    ReadConsistency,
    AttributeRole,

    # Attribute naming
    AttributeNames,

    # Item snapshots
    StoredItem,
    KeyValue,
)
from .predicates import (
    Predicate,
    PredicateKind,
)

__all__ = [
    # Enums
    "ReadConsistency",
    "AttributeRole",
    "PredicateKind",

    # Attribute naming
    "AttributeNames",

    # Item snapshots
    "StoredItem",
    "KeyValue",

    # Conditions
    "Predicate",
]
