"""
Domain Models for the Keystore

Organized by concern:
1. Read/attribute enums shared by keyspaces and backends
2. Attribute-role naming for the physical table
3. Stored item snapshots (backend records and public KeyValue results)

All models are immutable pydantic models: a snapshot is produced by a read and
never mutated afterwards.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# =============================================================================
# Enums
# =============================================================================

class ReadConsistency(str, Enum):
    """Consistency mode used for every read issued by a keyspace."""
    STRONG = "strong"
    EVENTUAL = "eventual"


class AttributeRole(str, Enum):
    """Logical roles of the attributes of a stored item."""
    KEYSPACE = "keyspace"
    KEY = "key"
    VALUE = "value"
    VERSION = "version"


# =============================================================================
# Attribute Naming
# =============================================================================

class AttributeNames(BaseModel):
    """
    Physical attribute names for each role of a stored item.

    The keyspace and key attributes together form the table's primary key
    (partition key and sort key respectively).
    """

    keyspace: str = Field(default="keyspace", description="Partition key attribute holding the keyspace name")
    key: str = Field(default="key", description="Sort key attribute holding the item key")
    value: str = Field(default="value", description="String attribute holding the item value")
    version: str = Field(default="version", description="Number attribute holding the version token")

    model_config = ConfigDict(frozen=True)

    @field_validator('keyspace', 'key', 'value', 'version')
    @classmethod
    def validate_not_blank(cls, v):
        """Attribute names must be non-empty."""
        if not v or not v.strip():
            raise ValueError("Attribute names must not be empty")
        return v

    @model_validator(mode='after')
    def validate_distinct(self):
        """Each role needs its own attribute."""
        names = [self.keyspace, self.key, self.value, self.version]
        if len(set(names)) != len(names):
            raise ValueError(f"Attribute names must be distinct: {names}")
        return self

    def for_role(self, role: AttributeRole) -> str:
        """Get the physical attribute name for a role."""
        return getattr(self, AttributeRole(role).value)


# =============================================================================
# Item Snapshots
# =============================================================================

class StoredItem(BaseModel):
    """
    Backend-level record of one item.

    Value and version are optional because projected reads only return the
    attributes that were asked for.
    """

    key: str = Field(..., description="Item key, unique within its keyspace")
    value: Optional[str] = Field(None, description="Stored value, if projected")
    version: Optional[int] = Field(None, description="Stored version token, if projected")

    model_config = ConfigDict(frozen=True)


class KeyValue(BaseModel):
    """Immutable snapshot of a key, its value and the value's version token."""

    key: str = Field(..., description="Item key")
    value: str = Field(..., description="Item value")
    version: int = Field(..., description="Version token computed from the value")

    model_config = ConfigDict(frozen=True)
