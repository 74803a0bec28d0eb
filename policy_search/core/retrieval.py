"""
Policy retrieval against the configured collection retriever.
"""

from typing import List, Optional

from ..vector.types import Document, extract_text
from .collection import CollectionClient
from util.logging import logger


def retrieve_similar_policies(client: CollectionClient, query: str, k: Optional[int] = None) -> List[Document]:
    """
    Retrieve the policies most similar to query and log a short summary of each.

    Args:
        client: Collection client whose retriever is queried
        query: Free-text policy question
        k: Number of documents to fetch (defaults to the configured top_k)

    Returns:
        Retrieved documents, unmodified, in decreasing similarity order.
        Store failures propagate to the caller.
    """
    documents = client.retriever.retrieve(query, k)

    logger.log_retrieval(
        query,
        [(extract_text(document), document.metadata) for document in documents],
        preview_chars=client.config.preview_chars,
    )
    return documents
