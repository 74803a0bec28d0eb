"""
Embedding providers for the policy collection.
The bag-of-words hash embedder is the default; sentence-transformers is optional.
"""

from abc import ABC, abstractmethod
import re
from typing import List, Sequence

import numpy as np

DEFAULT_DIMENSION = 384

_WHITESPACE = re.compile(r"\s+")


class IEmbeddingProvider(ABC):
    """Abstract interface for embedding providers."""

    name: str = "embedder"

    @abstractmethod
    def embed_text(self, text: str) -> List[float]:
        """Generate embedding vector for given text."""
        pass

    @abstractmethod
    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        pass

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        """Embed each text, one vector per input, in input order."""
        return [self.embed_text(text) for text in texts]


def string_hash(token: str) -> int:
    """
    32-bit signed string hash: hash = hash * 31 + code, wrapped at every step.

    Characters are consumed as UTF-16 code units so astral characters
    contribute their surrogate pair.
    """
    encoded = token.encode("utf-16-le", "surrogatepass")
    value = 0
    for i in range(0, len(encoded), 2):
        code = encoded[i] | (encoded[i + 1] << 8)
        value = (value * 31 + code) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def l2_normalize(vector: np.ndarray) -> np.ndarray:
    """Scale to unit length. A zero vector is returned unchanged."""
    norm = np.linalg.norm(vector)
    if norm == 0:
        return vector
    return vector / norm


class BagOfWordsHashEmbedding(IEmbeddingProvider):
    """Deterministic bag-of-words embedder built on a string hash.

    Each whitespace-separated lowercase token lands in bucket
    ``abs(hash) % dimension`` and adds ``1 / (position + 1)`` there, so earlier
    words weigh more. The accumulated vector is L2-normalized. This is not a
    language model; it only gives reproducible vectors where shared words mean
    nearby vectors.
    """

    name = "simple-text-embedder"

    def __init__(self, dimension: int = DEFAULT_DIMENSION):
        if dimension < 1:
            raise ValueError(f"Embedding dimension must be >= 1, got {dimension}")
        self.dimension = dimension

    def tokenize(self, text: str) -> List[str]:
        # Leading/trailing whitespace yields empty tokens; they are hashed too
        return _WHITESPACE.split(text.lower())

    def embed_vector(self, text: str) -> np.ndarray:
        vector = np.zeros(self.dimension, dtype=np.float64)
        for index, token in enumerate(self.tokenize(text)):
            bucket = abs(string_hash(token)) % self.dimension
            vector[bucket] += 1.0 / (index + 1)
        return l2_normalize(vector)

    def embed_text(self, text: str) -> List[float]:
        """Generate the normalized bag-of-words vector for text."""
        return self.embed_vector(text).tolist()

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        return self.dimension


class SentenceTransformerEmbedding(IEmbeddingProvider):
    """Sentence transformers embedding provider using pre-trained models.

    Defaults to all-MiniLM-L6-v2, which produces 384-dimensional vectors and
    therefore fits collections created with the hash embedder's dimension.
    """

    name = "sentence-transformer"

    def __init__(self, model_name: str = "all-MiniLM-L6-v2"):
        self.model_name = model_name
        self._model = None
        self._dimension = None

    @property
    def model(self):
        if self._model is None:
            from sentence_transformers import SentenceTransformer
            self._model = SentenceTransformer(self.model_name)
        return self._model

    def embed_text(self, text: str) -> List[float]:
        """Generate embedding vector using sentence transformers."""
        embedding = self.model.encode(text, convert_to_tensor=False, normalize_embeddings=True)
        return embedding.tolist()

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        embeddings = self.model.encode(list(texts), convert_to_tensor=False, normalize_embeddings=True)
        return [row.tolist() for row in embeddings]

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        if self._dimension is None:
            self._dimension = self.model.get_sentence_embedding_dimension()
        return self._dimension
