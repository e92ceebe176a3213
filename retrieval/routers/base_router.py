"""
Base query router module.
"""
from abc import abstractmethod
from enum import Enum
from typing import List

from core.registry import BaseStrategy, StrategyRegistry
from domain.models import Query
from retrieval.retrievers.base import BaseRetriever, RetrieverKind


class NoRetrieversConfigured(Exception):
    """Raised when routing finds no enabled retriever"""
    pass


class QueryRouterKind(str, Enum):
    DEFAULT = "DEFAULT"
    LANGUAGE_MODEL = "LANGUAGE_MODEL"
    RULE_BASED = "RULE_BASED"
    ROUND_ROBIN = "ROUND_ROBIN"


class BaseQueryRouter(BaseStrategy):
    """Chooses which retrievers serve a query"""

    kind: QueryRouterKind

    def __init__(self, retrievers: StrategyRegistry[RetrieverKind, BaseRetriever]):
        self.retrievers = retrievers

    def available(self) -> List[BaseRetriever]:
        """
        Enabled retrievers in registration order.

        Raises:
            NoRetrieversConfigured: If none is enabled
        """
        enabled = self.retrievers.enabled()
        if not enabled:
            raise NoRetrieversConfigured("No enabled retriever is configured")
        return enabled

    @abstractmethod
    def route(self, query: Query) -> List[BaseRetriever]:
        """Non-empty, ordered list of retrievers for the query"""
        pass
