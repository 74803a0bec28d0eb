import pytest

from policy_search.core.collection import CollectionClient
from policy_search.core.config import CollectionConfig
from policy_search.vector.embeddings import BagOfWordsHashEmbedding
from policy_search.vector.index import SimpleInMemoryVectorStore


@pytest.fixture
def memory_client():
    """Collection client over an in-memory store with the hash embedder."""
    config = CollectionConfig(vector_provider="memory", top_k=3)
    embedder = BagOfWordsHashEmbedding(config.embed_dim)
    store = SimpleInMemoryVectorStore(config.embed_dim)
    return CollectionClient(config, embedder, store)


@pytest.fixture
def seeded_client(memory_client):
    """In-memory client holding a few HR and IT policies."""
    memory_client.indexer.index_texts([
        {"id": "vacation", "text": "Vacation policy: employees accrue two vacation days per month",
         "metadata": {"policyType": "HR"}},
        {"id": "sick", "text": "Sick leave policy: report sick leave to your manager before 9am",
         "metadata": {"policyType": "HR"}},
        {"id": "laptop", "text": "Laptop policy: company laptops must use disk encryption",
         "metadata": {"policyType": "IT"}},
        {"id": "expenses", "text": "Expense policy: submit receipts within 30 days"},
    ])
    return memory_client
