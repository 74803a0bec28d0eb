"""
Tests for the in-memory vector store.
"""

import pytest
import numpy as np
from policy_search.vector.index import IVectorStore, SimpleInMemoryVectorStore
from policy_search.vector.types import VectorRecord, QueryResult


def make_record(record_id, vector, text="", **metadata):
    return VectorRecord(id=record_id, vector=np.array(vector, dtype=float), text=text, metadata=metadata)


def test_vector_store_interface():
    """Test that SimpleInMemoryVectorStore implements IVectorStore interface."""
    assert isinstance(SimpleInMemoryVectorStore(), IVectorStore)


def test_add_single_record():
    """Test adding a single vector record."""
    store = SimpleInMemoryVectorStore()
    store.add(make_record("test_id", [1.0, 0.0, 0.0], "vacation", policyType="HR"))

    results = store.search(np.array([1.0, 0.0, 0.0]), top_k=1)
    assert len(results) == 1
    assert isinstance(results[0], QueryResult)
    assert results[0].id == "test_id"
    assert results[0].text == "vacation"
    assert results[0].metadata == {"policyType": "HR"}
    assert results[0].score == pytest.approx(1.0)


def test_search_orders_by_similarity():
    """Test that search returns results ordered by decreasing similarity."""
    store = SimpleInMemoryVectorStore()
    store.batch_add([
        make_record("far", [0.0, 1.0]),
        make_record("near", [1.0, 0.1]),
        make_record("middle", [1.0, 1.0]),
    ])

    results = store.search(np.array([1.0, 0.0]), top_k=3)

    assert [r.id for r in results] == ["near", "middle", "far"]
    assert results[0].score > results[1].score > results[2].score


def test_search_respects_top_k():
    """Test that at most top_k results are returned."""
    store = SimpleInMemoryVectorStore()
    store.batch_add([make_record(str(i), [1.0, float(i)]) for i in range(5)])

    assert len(store.search(np.array([1.0, 0.0]), top_k=2)) == 2
    assert store.search(np.array([1.0, 0.0]), top_k=0) == []


def test_search_empty_store_and_zero_query():
    """Test the empty cases."""
    store = SimpleInMemoryVectorStore()
    assert store.search(np.array([1.0, 0.0]), top_k=3) == []

    store.add(make_record("a", [1.0, 0.0]))
    assert store.search(np.array([0.0, 0.0]), top_k=3) == []


def test_add_replaces_existing_id():
    """Test that re-adding an id overwrites the record."""
    store = SimpleInMemoryVectorStore()
    store.add(make_record("a", [1.0, 0.0], "old"))
    store.add(make_record("a", [0.0, 1.0], "new"))

    assert store.count() == 1
    assert store.search(np.array([0.0, 1.0]), top_k=1)[0].text == "new"


def test_dimension_mismatch_raises():
    """Test that a fixed-dimension store rejects other sizes."""
    store = SimpleInMemoryVectorStore(dimension=3)

    with pytest.raises(ValueError):
        store.add(make_record("a", [1.0, 0.0]))


def test_record_without_vector_raises():
    store = SimpleInMemoryVectorStore()

    with pytest.raises(ValueError):
        store.add(VectorRecord(id="a", vector=None, text="x", metadata={}))


def test_delete_and_clear():
    """Test delete and clear operations."""
    store = SimpleInMemoryVectorStore()
    store.batch_add([make_record("a", [1.0, 0.0]), make_record("b", [0.0, 1.0])])

    store.delete("a")
    store.delete("missing")
    assert store.count() == 1
    assert [r.id for r in store.search(np.array([1.0, 0.0]), top_k=5)] == ["b"]

    store.clear()
    assert store.count() == 0


def test_returned_metadata_is_a_copy():
    """Test that mutating a result does not change the stored record."""
    store = SimpleInMemoryVectorStore()
    store.add(make_record("a", [1.0, 0.0], policyType="HR"))

    store.search(np.array([1.0, 0.0]), top_k=1)[0].metadata["policyType"] = "IT"

    assert store.search(np.array([1.0, 0.0]), top_k=1)[0].metadata == {"policyType": "HR"}
