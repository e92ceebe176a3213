"""
Retrieval augmentor.

Runs the query side of the pipeline: transform the query, route each
resulting query, retrieve from every selected retriever and merge the
matches into one ordered context.
"""
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple
import logging

from core.registry import BaseStrategy
from domain.models import Query, RetrievalMatch, RetrievalRequest
from retrieval.query.base import BaseQueryTransformer
from retrieval.retrievers.base import BaseRetriever
from retrieval.routers.base_router import BaseQueryRouter

logger = logging.getLogger(__name__)

CONTEXT_SEPARATOR = "\n\n---\n\n"


class RetrievalAugmentorKind(str, Enum):
    DEFAULT = "DEFAULT"
    SIMPLE = "SIMPLE"
    ADVANCED = "ADVANCED"


@dataclass
class AugmentedContext:
    """Everything retrieved for one question"""
    query: Query
    queries: List[Query] = field(default_factory=list)
    matches: List[RetrievalMatch] = field(default_factory=list)
    context: str = ""

    @property
    def sources(self) -> List[str]:
        return [match.text for match in self.matches]

    @property
    def is_empty(self) -> bool:
        return not self.matches


def merge_matches(
    results: Sequence[List[RetrievalMatch]],
    limit: Optional[int] = None
) -> List[RetrievalMatch]:
    """
    Concatenate per-retriever results in routing order, keeping each list's
    score order. Repeated segment texts keep their first occurrence and at
    most ``limit`` matches are returned.
    """
    merged: List[RetrievalMatch] = []
    seen = set()
    for matches in results:
        for match in matches:
            if match.text in seen:
                continue
            seen.add(match.text)
            merged.append(match)
            if limit is not None and len(merged) >= limit:
                return merged
    return merged


class RetrievalAugmentor(BaseStrategy):
    """
    Query transform -> route -> retrieve (concurrently) -> merge.

    Retrievals for one question run in a thread pool; all of them must
    finish and the first failure is raised to the caller. ``max_results``
    and ``min_score`` override the retrievers' own limits when set; a
    retriever that widens its limit for a query (long queries) keeps that
    increment on top of the override. The merged context holds at most as
    many matches as the largest single request.
    """

    def __init__(
        self,
        kind: RetrievalAugmentorKind,
        query_transformer: BaseQueryTransformer,
        router: BaseQueryRouter,
        max_results: Optional[int] = None,
        min_score: Optional[float] = None,
        max_workers: int = 4,
        separator: str = CONTEXT_SEPARATOR
    ):
        self.kind = kind
        self.query_transformer = query_transformer
        self.router = router
        self.max_results = max_results
        self.min_score = min_score
        self.max_workers = max(1, max_workers)
        self.separator = separator

    @property
    def description(self) -> str:
        return (
            f"{self.kind.value.title()} augmentor (max_results={self.max_results}, "
            f"min_score={self.min_score}, query_transformer={self.query_transformer.kind.value}, "
            f"router={self.router.kind.value})"
        )

    def augment(self, question: str, chat_history: Sequence = ()) -> AugmentedContext:
        """
        Raises:
            NoRetrieversConfigured: If routing finds no enabled retriever
        """
        query = Query(text=question, chat_history=tuple(chat_history))
        queries = self.query_transformer.transform(query)

        tasks: List[Tuple[BaseRetriever, RetrievalRequest]] = []
        for transformed in queries:
            for retriever in self.router.route(transformed):
                tasks.append((retriever, self._request(retriever, transformed)))

        results = self._retrieve_all(tasks)
        limit = max((request.max_results for _, request in tasks), default=0)
        matches = merge_matches(results, limit=limit)

        logger.info(
            f"Augmented '{question[:60]}': {len(queries)} queries, "
            f"{len(tasks)} retrievals, {len(matches)} matches"
        )
        return AugmentedContext(
            query=query,
            queries=list(queries),
            matches=matches,
            context=self.separator.join(match.text for match in matches)
        )

    def _request(self, retriever: BaseRetriever, query: Query) -> RetrievalRequest:
        request = retriever.request_for(query.text)
        max_results = request.max_results
        if self.max_results is not None:
            # keep the extra results the retriever grants this query
            max_results = self.max_results + max(0, request.max_results - retriever.max_results)
        return RetrievalRequest(
            query=query.text,
            max_results=max_results,
            min_score=self.min_score if self.min_score is not None else request.min_score
        )

    def _retrieve_all(self, tasks: List[Tuple[BaseRetriever, RetrievalRequest]]) -> List[List[RetrievalMatch]]:
        if len(tasks) <= 1 or self.max_workers == 1:
            return [retriever.retrieve(request) for retriever, request in tasks]

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(tasks))) as executor:
            futures = [executor.submit(retriever.retrieve, request) for retriever, request in tasks]
            return [future.result() for future in futures]
