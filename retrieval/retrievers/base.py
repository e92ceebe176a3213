"""
Base retriever module.
"""
from abc import abstractmethod
from enum import Enum
from typing import List
import logging

from core.registry import BaseStrategy
from domain.models import RetrievalMatch, RetrievalRequest

logger = logging.getLogger(__name__)


class RetrieverException(Exception):
    """Exception raised for retrieval errors."""


class RetrieverKind(str, Enum):
    EMBEDDING_STORE = "EMBEDDING_STORE"
    WEB_SEARCH = "WEB_SEARCH"
    SQL_DATABASE = "SQL_DATABASE"
    AZURE_AI_SEARCH = "AZURE_AI_SEARCH"
    HYBRID = "HYBRID"


# Shown to the language model router so it can pick retrievers by purpose
RETRIEVER_PURPOSES = {
    RetrieverKind.EMBEDDING_STORE: (
        "Semantic search over the ingested knowledge base. "
        "Best for questions about the content of loaded documents."
    ),
    RetrieverKind.WEB_SEARCH: (
        "Web search. Best for recent events or facts outside the knowledge base."
    ),
    RetrieverKind.SQL_DATABASE: (
        "Structured database queries. Best for exact figures, records and statistics."
    ),
    RetrieverKind.AZURE_AI_SEARCH: (
        "Azure AI Search index. Best for enterprise document collections."
    ),
    RetrieverKind.HYBRID: (
        "Semantic search re-ranked by keyword overlap. "
        "Best for questions that mention specific names or terms."
    ),
}


class BaseRetriever(BaseStrategy):
    """
    A retriever answers a RetrievalRequest with matches ordered by score
    descending, at most ``max_results`` of them, each scoring at least
    ``min_score``. Subclasses implement ``_search``; ``retrieve`` enforces
    those guarantees.
    """

    kind: RetrieverKind

    def __init__(self, max_results: int = 5, min_score: float = 0.6, enabled: bool = True):
        self.max_results = max_results
        self.min_score = min_score
        self.enabled = enabled
        self.request_for("probe").validate()

    def is_enabled(self) -> bool:
        return self.enabled

    @property
    def purpose(self) -> str:
        return RETRIEVER_PURPOSES.get(self.kind, self.description)

    def request_for(self, query: str) -> RetrievalRequest:
        """Request carrying this retriever's own limits"""
        return RetrievalRequest(query=query, max_results=self.max_results, min_score=self.min_score)

    def retrieve(self, request: RetrievalRequest) -> List[RetrievalMatch]:
        request.validate()
        matches = [m for m in self._search(request) if m.score >= request.min_score]
        matches.sort(key=lambda m: m.score, reverse=True)
        results = matches[:request.max_results]
        logger.debug(
            f"{self.kind.value} retrieved {len(results)} matches for '{request.query[:60]}'"
        )
        return results

    @abstractmethod
    def _search(self, request: RetrievalRequest) -> List[RetrievalMatch]:
        pass
