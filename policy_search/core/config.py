"""
Environment-driven configuration for the policy search service.
"""

import os
from dataclasses import dataclass

# Vector store connection
VECTOR_STORE_URL = os.getenv("VECTOR_STORE_URL", "http://localhost:8000")
COLLECTION_NAME = os.getenv("COLLECTION_NAME", "policies")
VECTOR_PROVIDER = os.getenv("VECTOR_PROVIDER", "chroma")  # chroma|memory

# Embeddings
EMBED_PROVIDER = os.getenv("EMBED_PROVIDER", "hash")  # hash|sentence-transformers
EMBED_DIM = int(os.getenv("EMBED_DIM", "384"))
EMBED_MODEL_NAME = os.getenv("EMBED_MODEL_NAME", "all-MiniLM-L6-v2")

# Retrieval
RETRIEVAL_TOP_K = int(os.getenv("RETRIEVAL_TOP_K", "3"))
PREVIEW_CHARS = int(os.getenv("PREVIEW_CHARS", "150"))

# Debug flag
DEBUG = os.getenv("DEBUG", "true").lower() == "true"

# Version string
VERSION = "1.0.0"

VALID_VECTOR_PROVIDERS = ["chroma", "memory"]
VALID_EMBED_PROVIDERS = ["hash", "sentence-transformers"]


@dataclass(frozen=True)
class CollectionConfig:
    """Settings binding one named collection to an embedder and a store endpoint.

    Built once at process start and only read afterwards.
    """

    collection_name: str = "policies"
    endpoint: str = "http://localhost:8000"
    vector_provider: str = "chroma"
    embed_provider: str = "hash"
    embed_dim: int = 384
    embed_model_name: str = "all-MiniLM-L6-v2"
    top_k: int = 3
    preview_chars: int = 150


def load_collection_config() -> CollectionConfig:
    """Read the collection settings from the environment."""
    return CollectionConfig(
        collection_name=os.getenv("COLLECTION_NAME", COLLECTION_NAME),
        endpoint=os.getenv("VECTOR_STORE_URL", VECTOR_STORE_URL),
        vector_provider=os.getenv("VECTOR_PROVIDER", VECTOR_PROVIDER),
        embed_provider=os.getenv("EMBED_PROVIDER", EMBED_PROVIDER),
        embed_dim=int(os.getenv("EMBED_DIM", str(EMBED_DIM))),
        embed_model_name=os.getenv("EMBED_MODEL_NAME", EMBED_MODEL_NAME),
        top_k=int(os.getenv("RETRIEVAL_TOP_K", str(RETRIEVAL_TOP_K))),
        preview_chars=int(os.getenv("PREVIEW_CHARS", str(PREVIEW_CHARS))),
    )


def get_embedding_provider(config: CollectionConfig = None):
    """Get the configured embedding provider implementation."""
    config = config or load_collection_config()

    if config.embed_provider == "sentence-transformers":
        from policy_search.vector.embeddings import SentenceTransformerEmbedding
        return SentenceTransformerEmbedding(config.embed_model_name)

    from policy_search.vector.embeddings import BagOfWordsHashEmbedding
    return BagOfWordsHashEmbedding(config.embed_dim)


def get_vector_store(config: CollectionConfig = None, dimension: int = None):
    """Get the configured vector store implementation."""
    config = config or load_collection_config()
    dimension = dimension or config.embed_dim

    if config.vector_provider == "memory":
        from policy_search.vector.index import SimpleInMemoryVectorStore
        return SimpleInMemoryVectorStore(dimension)

    from policy_search.vector.chroma_store import ChromaVectorStore
    return ChromaVectorStore(
        collection_name=config.collection_name,
        endpoint=config.endpoint,
        dimension=dimension,
    )


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "true").lower() == "true"


def validate_config(config: CollectionConfig = None):
    """Validate collection configuration and return any issues."""
    config = config or load_collection_config()
    issues = []

    if not config.collection_name.strip():
        issues.append("COLLECTION_NAME must not be empty")

    if config.vector_provider not in VALID_VECTOR_PROVIDERS:
        issues.append(f"Invalid VECTOR_PROVIDER: {config.vector_provider}")

    if config.embed_provider not in VALID_EMBED_PROVIDERS:
        issues.append(f"Invalid EMBED_PROVIDER: {config.embed_provider}")

    if config.embed_dim < 1:
        issues.append("EMBED_DIM must be >= 1")

    if config.top_k < 1:
        issues.append("RETRIEVAL_TOP_K must be >= 1")

    if config.preview_chars < 0:
        issues.append("PREVIEW_CHARS must be >= 0")

    if config.vector_provider == "chroma" and "://" in config.endpoint:
        if not config.endpoint.startswith(("http://", "https://")):
            issues.append(f"VECTOR_STORE_URL must be http(s): {config.endpoint}")

    return issues
