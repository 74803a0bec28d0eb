"""
Tests for the Chroma vector store with a mocked chromadb client.
"""

import pytest
import numpy as np
from unittest.mock import MagicMock
from policy_search.vector.chroma_store import ChromaVectorStore, parse_endpoint
from policy_search.vector.index import IVectorStore
from policy_search.vector.types import VectorRecord


@pytest.fixture
def mock_client():
    """Mock chromadb client returning a mock collection."""
    client = MagicMock()
    collection = MagicMock()
    client.get_or_create_collection.return_value = collection
    return client


@pytest.fixture
def store(mock_client):
    return ChromaVectorStore(collection_name="policies", dimension=3, client=mock_client)


def test_parse_endpoint():
    """Test endpoint URL parsing into HttpClient arguments."""
    assert parse_endpoint("http://localhost:8000") == {"host": "localhost", "port": 8000, "ssl": False}
    assert parse_endpoint("https://chroma.internal") == {"host": "chroma.internal", "port": 443, "ssl": True}
    assert parse_endpoint("db:9000") == {"host": "db", "port": 9000, "ssl": False}


def test_parse_endpoint_rejects_missing_host():
    with pytest.raises(ValueError):
        parse_endpoint("http://")


def test_chroma_store_interface(store):
    assert isinstance(store, IVectorStore)


def test_collection_is_created_lazily_with_cosine_space(store, mock_client):
    """Test that the collection is bound on first use."""
    mock_client.get_or_create_collection.assert_not_called()

    store.count()
    store.count()

    mock_client.get_or_create_collection.assert_called_once_with(
        name="policies", metadata={"hnsw:space": "cosine"}
    )


def test_batch_add_upserts_records(store, mock_client):
    """Test that records are sent in a single upsert."""
    store.batch_add([
        VectorRecord(id="p1", vector=np.array([1.0, 0.0, 0.0]), text="Vacation", metadata={"policyType": "HR"}),
        VectorRecord(id="p2", vector=np.array([0.0, 1.0, 0.0]), text="Laptops", metadata={}),
    ])

    collection = mock_client.get_or_create_collection.return_value
    kwargs = collection.upsert.call_args.kwargs
    assert kwargs["ids"] == ["p1", "p2"]
    assert kwargs["documents"] == ["Vacation", "Laptops"]
    assert kwargs["metadatas"] == [{"policyType": "HR"}, None]
    assert kwargs["embeddings"] == [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]]


def test_batch_add_empty_is_noop(store, mock_client):
    store.batch_add([])
    mock_client.get_or_create_collection.assert_not_called()


def test_add_rejects_wrong_dimension(store):
    with pytest.raises(ValueError):
        store.add(VectorRecord(id="p1", vector=np.array([1.0, 0.0]), text="x", metadata={}))


def test_search_maps_distances_to_scores(store, mock_client):
    """Test that query results come back as QueryResults by decreasing similarity."""
    collection = mock_client.get_or_create_collection.return_value
    collection.query.return_value = {
        "ids": [["p1", "p2"]],
        "documents": [["Vacation policy text", "Sick leave text"]],
        "metadatas": [[{"policyType": "HR"}, None]],
        "distances": [[0.1, 0.4]],
    }

    results = store.search(np.array([1.0, 0.0, 0.0]), top_k=2)

    kwargs = collection.query.call_args.kwargs
    assert kwargs["n_results"] == 2
    assert kwargs["query_embeddings"] == [[1.0, 0.0, 0.0]]

    assert [r.id for r in results] == ["p1", "p2"]
    assert results[0].score == pytest.approx(0.9)
    assert results[1].score == pytest.approx(0.6)
    assert results[0].text == "Vacation policy text"
    assert results[1].metadata == {}


def test_search_empty_response(store, mock_client):
    collection = mock_client.get_or_create_collection.return_value
    collection.query.return_value = {"ids": [[]], "documents": [[]], "metadatas": [[]], "distances": [[]]}

    assert store.search(np.array([1.0, 0.0, 0.0]), top_k=3) == []


def test_search_errors_propagate(store, mock_client):
    """Test that connection failures are not swallowed."""
    collection = mock_client.get_or_create_collection.return_value
    collection.query.side_effect = ConnectionError("connection refused")

    with pytest.raises(ConnectionError):
        store.search(np.array([1.0, 0.0, 0.0]), top_k=3)


def test_delete_and_clear(store, mock_client):
    """Test delete by id and collection reset."""
    collection = mock_client.get_or_create_collection.return_value

    store.delete("p1")
    collection.delete.assert_called_once_with(ids=["p1"])

    store.clear()
    mock_client.delete_collection.assert_called_once_with(name="policies")

    store.count()
    assert mock_client.get_or_create_collection.call_count == 2
