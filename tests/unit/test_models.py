"""Tests for keystore models and predicates."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from dynamodb_keystore.models import (
    AttributeNames,
    AttributeRole,
    KeyValue,
    Predicate,
    PredicateKind,
    StoredItem,
)


class TestPredicate:
    """Test the conditional predicate variant."""

    def test_factories(self):
        assert Predicate.none().kind is PredicateKind.NONE
        assert Predicate.item_absent().kind is PredicateKind.ITEM_ABSENT
        assert Predicate.item_present().kind is PredicateKind.ITEM_PRESENT

        predicate = Predicate.version_equals(42)
        assert predicate.kind is PredicateKind.VERSION_EQUALS
        assert predicate.version == 42

    def test_version_required_for_version_equals(self):
        with pytest.raises(PydanticValidationError, match="requires a version"):
            Predicate(kind=PredicateKind.VERSION_EQUALS)

    def test_version_rejected_for_other_kinds(self):
        with pytest.raises(PydanticValidationError, match="does not take a version"):
            Predicate(kind=PredicateKind.ITEM_ABSENT, version=1)

    def test_is_conditional(self):
        assert Predicate.none().is_conditional is False
        assert Predicate.item_absent().is_conditional is True

    def test_equality(self):
        assert Predicate.version_equals(7) == Predicate.version_equals(7)
        assert Predicate.version_equals(7) != Predicate.version_equals(8)

    @pytest.mark.parametrize("predicate,current_version,exists,expected", [
        (Predicate.none(), None, False, True),
        (Predicate.none(), 1, True, True),
        (Predicate.item_absent(), None, False, True),
        (Predicate.item_absent(), 1, True, False),
        (Predicate.item_present(), None, False, False),
        (Predicate.item_present(), 1, True, True),
        (Predicate.version_equals(1), 1, True, True),
        (Predicate.version_equals(1), 2, True, False),
        (Predicate.version_equals(1), None, False, False),
    ])
    def test_matches(self, predicate, current_version, exists, expected):
        assert predicate.matches(current_version, exists) is expected


class TestAttributeNames:
    """Test attribute role naming."""

    def test_defaults(self):
        names = AttributeNames()

        assert names.for_role(AttributeRole.KEYSPACE) == "keyspace"
        assert names.for_role(AttributeRole.KEY) == "key"
        assert names.for_role(AttributeRole.VALUE) == "value"
        assert names.for_role(AttributeRole.VERSION) == "version"

    def test_role_lookup_accepts_strings(self):
        assert AttributeNames(value="v").for_role("value") == "v"

    def test_blank_name_rejected(self):
        with pytest.raises(PydanticValidationError, match="must not be empty"):
            AttributeNames(key=" ")

    def test_names_must_be_distinct(self):
        with pytest.raises(PydanticValidationError, match="distinct"):
            AttributeNames(value="version")


class TestSnapshots:
    """Test immutable item snapshots."""

    def test_key_value_is_frozen(self):
        kv = KeyValue(key="k", value="v", version=1)

        with pytest.raises(PydanticValidationError):
            kv.value = "other"

    def test_stored_item_projection_fields_optional(self):
        item = StoredItem(key="k")

        assert item.value is None
        assert item.version is None
