"""
Vector store interface and the in-process cosine similarity store.
"""

from abc import ABC, abstractmethod
from typing import Dict, List

import numpy as np

from .types import VectorRecord, QueryResult


class IVectorStore(ABC):
    """Abstract interface for vector storage operations."""

    @abstractmethod
    def add(self, record: VectorRecord) -> None:
        """Add a single vector record to the store."""
        pass

    @abstractmethod
    def batch_add(self, records: List[VectorRecord]) -> None:
        """Add multiple vector records to the store."""
        pass

    @abstractmethod
    def search(self, query_vector: np.ndarray, top_k: int = 5) -> List[QueryResult]:
        """Search for similar vectors and return results by decreasing similarity."""
        pass

    @abstractmethod
    def delete(self, record_id: str) -> None:
        """Delete a vector record by ID."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear all records from the store."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of records currently stored."""
        pass


class SimpleInMemoryVectorStore(IVectorStore):
    """Simple in-memory implementation of IVectorStore using cosine similarity."""

    def __init__(self, dimension: int = None):
        self.dimension = dimension
        self._vectors: Dict[str, VectorRecord] = {}
        self._index: Dict[str, np.ndarray] = {}  # record_id -> normalized vector

    def add(self, record: VectorRecord) -> None:
        """Add or replace a single vector record."""
        if record.vector is None:
            raise ValueError(f"Record {record.id} has no vector")

        vector = np.asarray(record.vector, dtype=np.float64)
        if self.dimension is not None and vector.shape[0] != self.dimension:
            raise ValueError(f"Vector dimension {vector.shape[0]} does not match expected dimension {self.dimension}")

        self._vectors[record.id] = record

        norm = np.linalg.norm(vector)
        self._index[record.id] = vector / norm if norm > 0 else vector

    def batch_add(self, records: List[VectorRecord]) -> None:
        """Add multiple vector records to the store."""
        for record in records:
            self.add(record)

    def search(self, query_vector: np.ndarray, top_k: int = 5) -> List[QueryResult]:
        """Search for similar vectors and return ranked results."""
        if not self._index or top_k < 1:
            return []

        query = np.asarray(query_vector, dtype=np.float64)
        norm = np.linalg.norm(query)
        if norm == 0:
            return []
        normalized_query = query / norm

        similarities = {
            record_id: float(np.dot(normalized_query, stored))
            for record_id, stored in self._index.items()
        }

        # Stable sort keeps insertion order among equal scores
        ranked = sorted(similarities.items(), key=lambda item: item[1], reverse=True)

        results = []
        for record_id, score in ranked[:top_k]:
            record = self._vectors[record_id]
            results.append(QueryResult(
                id=record.id,
                score=score,
                text=record.text,
                metadata=dict(record.metadata)
            ))
        return results

    def delete(self, record_id: str) -> None:
        """Delete a vector record by ID."""
        self._vectors.pop(record_id, None)
        self._index.pop(record_id, None)

    def clear(self) -> None:
        """Clear all records from the store."""
        self._vectors.clear()
        self._index.clear()

    def count(self) -> int:
        return len(self._vectors)
