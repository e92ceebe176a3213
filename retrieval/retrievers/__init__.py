"""
Content retrievers.
"""
from retrieval.retrievers.base import (
    RETRIEVER_PURPOSES,
    BaseRetriever,
    RetrieverException,
    RetrieverKind,
)
from retrieval.retrievers.embedding_store import (
    EmbeddingStoreRetriever,
    HybridRetriever,
    keyword_score,
    query_terms,
)
from retrieval.retrievers.retriever_factory import build_retriever_registry

__all__ = [
    "RETRIEVER_PURPOSES",
    "BaseRetriever",
    "RetrieverException",
    "RetrieverKind",
    "EmbeddingStoreRetriever",
    "HybridRetriever",
    "keyword_score",
    "query_terms",
    "build_retriever_registry",
]
