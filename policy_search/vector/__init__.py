"""
Vector layer for policy search: embedders, document types and vector stores.
"""

# Package initialization for vector module
from .index import IVectorStore, SimpleInMemoryVectorStore
from .chroma_store import ChromaVectorStore
from .types import (
    Document,
    DocumentContent,
    FlatText,
    QueryResult,
    StructuredContent,
    TextPart,
    VectorRecord,
    extract_text,
)
from .embeddings import IEmbeddingProvider, BagOfWordsHashEmbedding, SentenceTransformerEmbedding

__all__ = [
    'IVectorStore',
    'SimpleInMemoryVectorStore',
    'ChromaVectorStore',
    'Document',
    'DocumentContent',
    'FlatText',
    'QueryResult',
    'StructuredContent',
    'TextPart',
    'VectorRecord',
    'extract_text',
    'IEmbeddingProvider',
    'BagOfWordsHashEmbedding',
    'SentenceTransformerEmbedding'
]
