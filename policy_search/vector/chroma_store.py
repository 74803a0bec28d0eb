"""
Chroma-backed vector store bound to one named collection on a Chroma HTTP server.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import numpy as np

from .types import VectorRecord, QueryResult
from .index import IVectorStore


def parse_endpoint(endpoint: str) -> Dict[str, Any]:
    """Split an endpoint URL such as http://localhost:8000 into HttpClient arguments."""
    parsed = urlparse(endpoint if "://" in endpoint else f"http://{endpoint}")
    if not parsed.hostname:
        raise ValueError(f"Invalid vector store endpoint: {endpoint!r}")

    ssl = parsed.scheme == "https"
    port = parsed.port or (443 if ssl else 8000)
    return {"host": parsed.hostname, "port": port, "ssl": ssl}


class ChromaVectorStore(IVectorStore):
    """Chroma implementation of IVectorStore.

    The collection uses cosine space, so a Chroma distance ``d`` maps back to a
    similarity score of ``1 - d``. Network and server errors from the client
    are not caught here.
    """

    def __init__(self, collection_name: str = "policies", endpoint: str = "http://localhost:8000",
                 dimension: int = 384, client=None):
        """
        Initialize the Chroma vector store.

        Args:
            collection_name: Name of the Chroma collection
            endpoint: URL of the Chroma server
            dimension: Expected vector dimension
            client: Pre-built chromadb client (tests inject a mock here)
        """
        self.collection_name = collection_name
        self.endpoint = endpoint
        self.dimension = dimension

        if client is None:
            import chromadb
            client = chromadb.HttpClient(**parse_endpoint(endpoint))
        self.client = client
        self._collection = None

    @property
    def collection(self):
        if self._collection is None:
            self._collection = self.client.get_or_create_collection(
                name=self.collection_name,
                metadata={"hnsw:space": "cosine"},
            )
        return self._collection

    def _check_dimension(self, vector) -> List[float]:
        if vector is None or len(vector) == 0:
            raise ValueError("Cannot store an empty vector")
        if len(vector) != self.dimension:
            raise ValueError(f"Vector dimension {len(vector)} does not match expected dimension {self.dimension}")
        return np.asarray(vector, dtype=np.float32).tolist()

    def add(self, record: VectorRecord) -> None:
        """Add or replace a single record in the collection."""
        self.batch_add([record])

    def batch_add(self, records: List[VectorRecord]) -> None:
        """Upsert multiple records in one request."""
        if not records:
            return

        embeddings = [self._check_dimension(record.vector) for record in records]
        self.collection.upsert(
            ids=[record.id for record in records],
            embeddings=embeddings,
            documents=[record.text for record in records],
            metadatas=[record.metadata or None for record in records],
        )

    def search(self, query_vector: np.ndarray, top_k: int = 5) -> List[QueryResult]:
        """Ask Chroma for the top_k nearest records."""
        if top_k < 1:
            return []

        response = self.collection.query(
            query_embeddings=[self._check_dimension(query_vector)],
            n_results=top_k,
            include=["documents", "metadatas", "distances"],
        )

        ids = _first_row(response.get("ids"))
        documents = _first_row(response.get("documents"))
        metadatas = _first_row(response.get("metadatas"))
        distances = _first_row(response.get("distances"))

        results = []
        for position, record_id in enumerate(ids):
            distance = distances[position] if position < len(distances) else None
            results.append(QueryResult(
                id=record_id,
                score=1.0 - float(distance) if distance is not None else 0.0,
                text=(documents[position] if position < len(documents) else None) or "",
                metadata=dict((metadatas[position] if position < len(metadatas) else None) or {}),
            ))

        # Chroma already orders by distance; re-sort so ties and mocks stay consistent
        results.sort(key=lambda result: result.score, reverse=True)
        return results

    def delete(self, record_id: str) -> None:
        """Delete a record by ID."""
        self.collection.delete(ids=[record_id])

    def clear(self) -> None:
        """Drop and recreate the collection."""
        self.client.delete_collection(name=self.collection_name)
        self._collection = None

    def count(self) -> int:
        return int(self.collection.count())


def _first_row(rows: Optional[List[List[Any]]]) -> List[Any]:
    # Chroma returns one row per query embedding
    if not rows:
        return []
    return list(rows[0] or [])
