"""
Retriever registry.
"""
from typing import Iterable, Optional, Union

from core.registry import StrategyRegistry, coerce_kind
from embeddings.base import BaseEmbedding
from retrieval.retrievers.base import BaseRetriever, RetrieverKind
from retrieval.retrievers.embedding_store import EmbeddingStoreRetriever, HybridRetriever
from vectorstore.base import BaseVectorStore

RetrieverRegistry = StrategyRegistry[RetrieverKind, BaseRetriever]


def build_retriever_registry(
    embedder: BaseEmbedding,
    vector_store: BaseVectorStore,
    max_results: int = 5,
    min_score: float = 0.6,
    enabled_kinds: Optional[Iterable[Union[RetrieverKind, str]]] = None,
    dynamic_max_results: bool = False,
    semantic_weight: float = 0.7,
    keyword_weight: float = 0.3
) -> RetrieverRegistry:
    """
    Create the retriever registry.

    Every implemented kind is registered; only those in ``enabled_kinds``
    (default: EMBEDDING_STORE) take part in routing.

    Raises:
        UnsupportedStrategyKind: If an enabled kind is not a retriever kind
    """
    if enabled_kinds is None:
        enabled_kinds = [RetrieverKind.EMBEDDING_STORE]
    enabled = {coerce_kind(RetrieverKind, k, "ContentRetriever") for k in enabled_kinds}

    return StrategyRegistry(
        RetrieverKind,
        [
            EmbeddingStoreRetriever(
                embedder, vector_store,
                max_results=max_results,
                min_score=min_score,
                dynamic_max_results=dynamic_max_results,
                enabled=RetrieverKind.EMBEDDING_STORE in enabled
            ),
            HybridRetriever(
                embedder, vector_store,
                max_results=max_results,
                min_score=min_score,
                semantic_weight=semantic_weight,
                keyword_weight=keyword_weight,
                enabled=RetrieverKind.HYBRID in enabled
            ),
        ],
        category="ContentRetriever"
    )
