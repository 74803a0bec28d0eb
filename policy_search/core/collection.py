"""
Collection client: binds the policies collection to an embedder and a vector store,
and exposes the indexer and retriever for it.
"""

import uuid
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..vector.embeddings import IEmbeddingProvider
from ..vector.index import IVectorStore
from ..vector.types import Document, VectorRecord, extract_text, has_text
from .config import CollectionConfig, get_embedding_provider, get_vector_store, load_collection_config
from util.logging import logger


class PolicyIndexer:
    """Embeds documents and writes them to the bound collection."""

    def __init__(self, config: CollectionConfig, embedder: IEmbeddingProvider, store: IVectorStore):
        self.config = config
        self.embedder = embedder
        self.store = store

    def index(self, documents: Sequence[Document], ids: Optional[Sequence[Optional[str]]] = None) -> List[str]:
        """
        Index documents into the collection.

        Args:
            documents: Documents to store; the display text is what gets embedded
            ids: Optional record ids, one per document (None entries get a uuid)

        Returns:
            Ids of the documents that were stored, in input order
        """
        if ids is not None and len(ids) != len(documents):
            raise ValueError(f"Got {len(ids)} ids for {len(documents)} documents")

        texts = []
        kept = []
        for position, document in enumerate(documents):
            if not has_text(document):
                logger.warning(f"Skipping document {position} with no text content")
                continue
            text = extract_text(document)
            record_id = (ids[position] if ids is not None else None) or str(uuid.uuid4())
            texts.append(text)
            kept.append((record_id, document))

        if not kept:
            logger.log_index(self.config.collection_name, 0, skipped=len(documents))
            return []

        vectors = self.embedder.embed(texts)
        records = [
            VectorRecord(
                id=record_id,
                vector=np.asarray(vector, dtype=np.float64),
                text=text,
                metadata=dict(document.metadata),
            )
            for (record_id, document), text, vector in zip(kept, texts, vectors)
        ]
        self.store.batch_add(records)

        logger.log_index(self.config.collection_name, len(records), skipped=len(documents) - len(records))
        return [record.id for record in records]

    def index_texts(self, items: Sequence[Dict[str, Any]]) -> List[str]:
        """Index plain dicts of the form {text, metadata?, id?}."""
        documents = [Document.from_text(item.get("text") or "", item.get("metadata")) for item in items]
        return self.index(documents, ids=[item.get("id") for item in items])


class PolicyRetriever:
    """Finds the stored documents nearest to a query."""

    def __init__(self, config: CollectionConfig, embedder: IEmbeddingProvider, store: IVectorStore):
        self.config = config
        self.embedder = embedder
        self.store = store

    def retrieve(self, query: str, k: Optional[int] = None) -> List[Document]:
        """Return up to k documents ordered by decreasing similarity to query."""
        top_k = k if k is not None else self.config.top_k
        query_vector = np.asarray(self.embedder.embed_text(query), dtype=np.float64)
        results = self.store.search(query_vector, top_k)
        return [result.to_document() for result in results]


class CollectionClient:
    """A named collection bound to its embedder and vector store."""

    def __init__(self, config: CollectionConfig, embedder: IEmbeddingProvider, store: IVectorStore):
        self.config = config
        self.embedder = embedder
        self.store = store
        self._indexer = PolicyIndexer(config, embedder, store)
        self._retriever = PolicyRetriever(config, embedder, store)

    @property
    def collection_name(self) -> str:
        return self.config.collection_name

    @property
    def indexer(self) -> PolicyIndexer:
        return self._indexer

    @property
    def retriever(self) -> PolicyRetriever:
        return self._retriever

    def count(self) -> int:
        return self.store.count()


def build_collection_client(config: CollectionConfig = None, store: IVectorStore = None,
                            embedder: IEmbeddingProvider = None) -> CollectionClient:
    """Build the collection client from configuration; call once at process start."""
    config = config or load_collection_config()
    embedder = embedder or get_embedding_provider(config)
    if store is None:
        store = get_vector_store(config, dimension=embedder.get_dimension())

    logger.log_vector_operation("bind", config.collection_name, {
        "endpoint": config.endpoint,
        "provider": config.vector_provider,
        "embedder": embedder.name,
    })
    return CollectionClient(config, embedder, store)
