"""
Query routers.
"""
from typing import List, Optional, Sequence, Tuple, Union
import itertools
import logging
import re
import threading

from chat.llm_clients.base import BaseLLMClient
from chat.models import Message, MessageRole
from core.registry import StrategyRegistry
from domain.models import Query
from retrieval.retrievers.base import BaseRetriever, RetrieverKind
from retrieval.routers.base_router import BaseQueryRouter, QueryRouterKind

logger = logging.getLogger(__name__)

ROUTING_PROMPT = (
    "Based on the user query, determine the most suitable data source(s) "
    "to retrieve relevant information from the following options:\n"
    "{options}\n"
    "It is very important that your answer consists of either a single number "
    "or multiple numbers separated by commas and nothing else!\n"
    "User query: {query}"
)


class DefaultQueryRouter(BaseQueryRouter):
    """Routes every query to all enabled retrievers"""

    kind = QueryRouterKind.DEFAULT

    @property
    def description(self) -> str:
        return "Routes every query to all enabled retrievers"

    def route(self, query: Query) -> List[BaseRetriever]:
        return self.available()


class LanguageModelQueryRouter(BaseQueryRouter):
    """
    Lets the generative model pick retrievers from their descriptions.
    Answers that name no valid option route to all enabled retrievers.
    """

    kind = QueryRouterKind.LANGUAGE_MODEL

    def __init__(self, retrievers: StrategyRegistry[RetrieverKind, BaseRetriever], llm_client: BaseLLMClient):
        super().__init__(retrievers)
        self.llm_client = llm_client

    @property
    def description(self) -> str:
        return "Asks the generative model which retrievers fit the query"

    def route(self, query: Query) -> List[BaseRetriever]:
        candidates = self.available()
        if len(candidates) == 1:
            return candidates

        options = "\n".join(
            f"{number}: {retriever.purpose}"
            for number, retriever in enumerate(candidates, start=1)
        )
        prompt = ROUTING_PROMPT.format(options=options, query=query.text)
        answer = self.llm_client.generate([Message(role=MessageRole.USER, content=prompt)])

        selected: List[BaseRetriever] = []
        for token in re.findall(r"\d+", answer):
            index = int(token) - 1
            if 0 <= index < len(candidates) and candidates[index] not in selected:
                selected.append(candidates[index])

        if not selected:
            logger.warning(f"Unusable routing answer '{answer.strip()[:80]}', routing to all")
            return candidates
        logger.debug(f"Routed to {[r.kind.value for r in selected]}")
        return selected


class RuleBasedQueryRouter(BaseQueryRouter):
    """
    Routes with (regex, retriever kind) rules, case-insensitive.
    Queries matching no rule go to all enabled retrievers.
    """

    kind = QueryRouterKind.RULE_BASED

    def __init__(
        self,
        retrievers: StrategyRegistry[RetrieverKind, BaseRetriever],
        rules: Sequence[Tuple[str, Union[RetrieverKind, str]]] = ()
    ):
        super().__init__(retrievers)
        self.rules = [(re.compile(pattern, re.IGNORECASE), kind) for pattern, kind in rules]

    @property
    def description(self) -> str:
        return f"Routes by {len(self.rules)} keyword rules, falling back to all retrievers"

    def route(self, query: Query) -> List[BaseRetriever]:
        candidates = self.available()
        selected: List[BaseRetriever] = []
        for pattern, kind in self.rules:
            if not pattern.search(query.text):
                continue
            retriever = self.retrievers.find(kind)
            if retriever is not None and retriever in candidates and retriever not in selected:
                selected.append(retriever)
        return selected or candidates


class RoundRobinQueryRouter(BaseQueryRouter):
    """Sends each query to the next enabled retriever in turn"""

    kind = QueryRouterKind.ROUND_ROBIN

    def __init__(self, retrievers: StrategyRegistry[RetrieverKind, BaseRetriever]):
        super().__init__(retrievers)
        self._counter = itertools.count()
        self._lock = threading.Lock()

    @property
    def description(self) -> str:
        return "Rotates queries across the enabled retrievers"

    def route(self, query: Query) -> List[BaseRetriever]:
        candidates = self.available()
        with self._lock:
            position = next(self._counter)
        return [candidates[position % len(candidates)]]


def parse_rules(rules: Optional[dict]) -> List[Tuple[str, str]]:
    """Settings hold rules as a {pattern: retriever kind} mapping"""
    return list((rules or {}).items())
