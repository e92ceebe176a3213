"""
Query routers: choose the retrievers that serve a query.
"""
from retrieval.routers.base_router import BaseQueryRouter, NoRetrieversConfigured, QueryRouterKind
from retrieval.routers.routers import (
    DefaultQueryRouter,
    LanguageModelQueryRouter,
    RoundRobinQueryRouter,
    RuleBasedQueryRouter,
    parse_rules,
)
from retrieval.routers.router_factory import build_router_registry, select_router

__all__ = [
    "BaseQueryRouter",
    "NoRetrieversConfigured",
    "QueryRouterKind",
    "DefaultQueryRouter",
    "LanguageModelQueryRouter",
    "RoundRobinQueryRouter",
    "RuleBasedQueryRouter",
    "parse_rules",
    "build_router_registry",
    "select_router",
]
