"""
Retrievers backed by the embedding model and the vector store.
"""
from typing import List
import re

from domain.models import RetrievalMatch, RetrievalRequest
from embeddings.base import BaseEmbedding
from retrieval.retrievers.base import BaseRetriever, RetrieverKind
from vectorstore.base import BaseVectorStore


class EmbeddingStoreRetriever(BaseRetriever):
    """
    Semantic search: the query is embedded and matched against stored segments.

    With ``dynamic_max_results`` enabled, queries longer than
    ``long_query_threshold`` characters get ``dynamic_increment`` extra results.
    """

    kind = RetrieverKind.EMBEDDING_STORE

    def __init__(
        self,
        embedder: BaseEmbedding,
        vector_store: BaseVectorStore,
        max_results: int = 5,
        min_score: float = 0.6,
        dynamic_max_results: bool = False,
        long_query_threshold: int = 100,
        dynamic_increment: int = 5,
        enabled: bool = True
    ):
        self.embedder = embedder
        self.vector_store = vector_store
        self.dynamic_max_results = dynamic_max_results
        self.long_query_threshold = long_query_threshold
        self.dynamic_increment = dynamic_increment
        super().__init__(max_results=max_results, min_score=min_score, enabled=enabled)

    @property
    def description(self) -> str:
        return (
            f"Embedding store retriever (max_results={self.max_results}, "
            f"min_score={self.min_score}, dynamic={self.dynamic_max_results})"
        )

    def request_for(self, query: str) -> RetrievalRequest:
        max_results = self.max_results
        if self.dynamic_max_results and len(query) > self.long_query_threshold:
            max_results += self.dynamic_increment
        return RetrievalRequest(query=query, max_results=max_results, min_score=self.min_score)

    def _search(self, request: RetrievalRequest) -> List[RetrievalMatch]:
        query_embedding = self.embedder.embed_query(request.query)
        return self.vector_store.search(
            query_embedding,
            max_results=request.max_results,
            min_score=request.min_score
        )


_TERM = re.compile(r"\w+", re.UNICODE)


def query_terms(query: str, min_length: int = 3) -> List[str]:
    """Lower-cased distinct words of the query, in order"""
    terms = [t.lower() for t in _TERM.findall(query) if len(t) >= min_length]
    return list(dict.fromkeys(terms))


def keyword_score(text: str, terms: List[str]) -> float:
    """Fraction of query terms found in *text* (case-insensitive)."""
    if not terms:
        return 0.0
    lower = text.lower()
    hits = sum(1 for t in terms if t in lower)
    return hits / len(terms)


class HybridRetriever(EmbeddingStoreRetriever):
    """
    Semantic candidates re-ranked by a blended score:
    ``semantic_weight * relevance + keyword_weight * keyword_overlap``.
    """

    kind = RetrieverKind.HYBRID

    def __init__(
        self,
        embedder: BaseEmbedding,
        vector_store: BaseVectorStore,
        max_results: int = 5,
        min_score: float = 0.6,
        semantic_weight: float = 0.7,
        keyword_weight: float = 0.3,
        candidate_factor: int = 3,
        enabled: bool = True
    ):
        if semantic_weight < 0 or keyword_weight < 0 or semantic_weight + keyword_weight == 0:
            raise ValueError("weights must be non-negative and not both zero")
        total = semantic_weight + keyword_weight
        self.semantic_weight = semantic_weight / total
        self.keyword_weight = keyword_weight / total
        self.candidate_factor = candidate_factor
        super().__init__(
            embedder, vector_store,
            max_results=max_results, min_score=min_score, enabled=enabled
        )

    @property
    def description(self) -> str:
        return (
            f"Hybrid retriever (semantic={self.semantic_weight:.2f}, "
            f"keyword={self.keyword_weight:.2f}, max_results={self.max_results})"
        )

    def _search(self, request: RetrievalRequest) -> List[RetrievalMatch]:
        query_embedding = self.embedder.embed_query(request.query)
        candidates = self.vector_store.search(
            query_embedding,
            max_results=request.max_results * self.candidate_factor,
            min_score=0.0
        )

        terms = query_terms(request.query)
        rescored: List[RetrievalMatch] = []
        for match in candidates:
            blended = (
                self.semantic_weight * match.score
                + self.keyword_weight * keyword_score(match.segment.text, terms)
            )
            rescored.append(RetrievalMatch(segment=match.segment, score=min(1.0, blended)))
        return rescored
