"""Tests for the in-memory storage backend."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from dynamodb_keystore.backends import MemoryBackend, StorageBackend
from dynamodb_keystore.exceptions import ConditionFailedError, ConflictError
from dynamodb_keystore.models import AttributeRole, Predicate, ReadConsistency, StoredItem


@pytest.fixture
def backend():
    return MemoryBackend()


class TestMemoryBackend:
    """Test MemoryBackend item storage and predicates."""

    def test_satisfies_protocol(self, backend):
        assert isinstance(backend, StorageBackend)

    def test_put_and_get(self, backend):
        backend.put_item("ks", "k1", "v1", 11)

        assert backend.get_item("ks", "k1") == StoredItem(key="k1", value="v1", version=11)

    def test_get_missing_returns_none(self, backend):
        assert backend.get_item("ks", "missing") is None

    def test_partitions_are_isolated(self, backend):
        backend.put_item("ks1", "k", "one", 1)
        backend.put_item("ks2", "k", "two", 2)

        assert backend.get_item("ks1", "k").value == "one"
        assert backend.get_item("ks2", "k").value == "two"

    def test_item_absent_predicate(self, backend):
        backend.put_item("ks", "k", "v1", 1, predicate=Predicate.item_absent())

        with pytest.raises(ConditionFailedError) as exc_info:
            backend.put_item("ks", "k", "v2", 2, predicate=Predicate.item_absent())

        assert exc_info.value.resource_id == "ks/k"
        assert isinstance(exc_info.value, ConflictError)
        assert backend.get_item("ks", "k").value == "v1"

    def test_item_present_predicate_on_missing_item(self, backend):
        with pytest.raises(ConditionFailedError):
            backend.update_item("ks", "k", "v", 1, predicate=Predicate.item_present())

        assert backend.get_item("ks", "k") is None

    def test_version_equals_predicate(self, backend):
        backend.put_item("ks", "k", "v1", 1)

        with pytest.raises(ConditionFailedError):
            backend.update_item("ks", "k", "v2", 2, predicate=Predicate.version_equals(99))

        backend.update_item("ks", "k", "v2", 2, predicate=Predicate.version_equals(1))
        assert backend.get_item("ks", "k") == StoredItem(key="k", value="v2", version=2)

    def test_update_upserts_without_predicate(self, backend):
        assert backend.update_item("ks", "k", "v", 5) is None
        assert backend.get_item("ks", "k").version == 5

    def test_update_returns_prior_item(self, backend):
        backend.put_item("ks", "k", "old", 1)

        prior = backend.update_item("ks", "k", "new", 2, return_prior=True)

        assert prior == StoredItem(key="k", value="old", version=1)

    def test_update_prior_not_returned_by_default(self, backend):
        backend.put_item("ks", "k", "old", 1)

        assert backend.update_item("ks", "k", "new", 2) is None

    def test_delete_returns_removed_item(self, backend):
        backend.put_item("ks", "k", "v", 1)

        assert backend.delete_item("ks", "k") == StoredItem(key="k", value="v", version=1)
        assert backend.get_item("ks", "k") is None

    def test_delete_missing_returns_none(self, backend):
        assert backend.delete_item("ks", "k") is None

    def test_delete_with_stale_version_keeps_item(self, backend):
        backend.put_item("ks", "k", "v", 1)

        with pytest.raises(ConditionFailedError):
            backend.delete_item("ks", "k", predicate=Predicate.version_equals(2))

        assert backend.get_item("ks", "k") is not None

    def test_projection(self, backend):
        backend.put_item("ks", "k", "v", 1)

        key_only = backend.get_item("ks", "k", ReadConsistency.EVENTUAL, [AttributeRole.KEY])
        assert key_only == StoredItem(key="k")

        with_version = backend.get_item("ks", "k", projection=[AttributeRole.KEY, AttributeRole.VERSION])
        assert with_version == StoredItem(key="k", version=1)

    def test_clear(self, backend):
        backend.put_item("ks", "k", "v", 1)

        backend.clear()

        assert backend.get_item("ks", "k") is None

    def test_concurrent_add_has_single_winner(self, backend):
        def attempt(i):
            try:
                backend.put_item("ks", "race", f"v{i}", i, predicate=Predicate.item_absent())
                return True
            except ConditionFailedError:
                return False

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(attempt, range(32)))

        assert results.count(True) == 1
