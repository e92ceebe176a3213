"""
Query router registry and selection.
"""
from typing import Optional, Sequence, Tuple, Union
import logging

from chat.llm_clients.base import BaseLLMClient
from core.registry import StrategyRegistry
from retrieval.retrievers.base import BaseRetriever, RetrieverKind
from retrieval.routers.base_router import BaseQueryRouter, QueryRouterKind
from retrieval.routers.routers import (
    DefaultQueryRouter,
    LanguageModelQueryRouter,
    RoundRobinQueryRouter,
    RuleBasedQueryRouter,
)

logger = logging.getLogger(__name__)

QueryRouterRegistry = StrategyRegistry[QueryRouterKind, BaseQueryRouter]


def build_router_registry(
    retrievers: StrategyRegistry[RetrieverKind, BaseRetriever],
    llm_client: Optional[BaseLLMClient] = None,
    rules: Sequence[Tuple[str, Union[RetrieverKind, str]]] = ()
) -> QueryRouterRegistry:
    """LANGUAGE_MODEL is only registered when a generative model is available"""
    routers = [
        DefaultQueryRouter(retrievers),
        RuleBasedQueryRouter(retrievers, rules),
        RoundRobinQueryRouter(retrievers),
    ]
    if llm_client is not None:
        routers.append(LanguageModelQueryRouter(retrievers, llm_client))
    return StrategyRegistry(QueryRouterKind, routers, category="QueryRouter")


def select_router(
    registry: QueryRouterRegistry,
    kind: Union[QueryRouterKind, str] = QueryRouterKind.DEFAULT
) -> BaseQueryRouter:
    """
    Resolve the configured router. A LANGUAGE_MODEL request without a
    registered model router falls back to DEFAULT.

    Raises:
        UnsupportedStrategyKind: For kinds that are neither registered nor LANGUAGE_MODEL
    """
    router = registry.find(kind)
    if router is not None:
        return router
    if str(getattr(kind, "value", kind)).strip().upper() == QueryRouterKind.LANGUAGE_MODEL.value:
        logger.info("No generative model configured, using DEFAULT query router")
        return registry.resolve(QueryRouterKind.DEFAULT)
    return registry.resolve(kind)
