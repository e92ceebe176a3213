"""
Retrieval augmentor presets.
"""
from typing import Union

from core.registry import StrategyRegistry
from retrieval.augmentor import RetrievalAugmentor, RetrievalAugmentorKind
from retrieval.query.query_transformer_factory import QueryTransformerRegistry, select_query_transformer
from retrieval.query.base import QueryTransformerKind
from retrieval.routers.base_router import QueryRouterKind
from retrieval.routers.router_factory import QueryRouterRegistry, select_router

AugmentorRegistry = StrategyRegistry[RetrievalAugmentorKind, RetrievalAugmentor]


def build_augmentor_registry(
    query_transformers: QueryTransformerRegistry,
    routers: QueryRouterRegistry,
    max_results: int = 5,
    min_score: float = 0.6,
    query_transformation: bool = False,
    router_kind: Union[QueryRouterKind, str] = QueryRouterKind.DEFAULT,
    max_workers: int = 4
) -> AugmentorRegistry:
    """
    DEFAULT follows the configured limits, transformation and router.
    SIMPLE is a narrow, strict lookup (3 results, min score 0.7).
    ADVANCED is a wide lookup (10, 0.5) with query transformation and
    model routing when a generative model is available.
    """
    default_router = routers.resolve(QueryRouterKind.DEFAULT)
    identity = query_transformers.resolve(QueryTransformerKind.DEFAULT)

    return StrategyRegistry(
        RetrievalAugmentorKind,
        [
            RetrievalAugmentor(
                RetrievalAugmentorKind.DEFAULT,
                select_query_transformer(query_transformers, query_transformation),
                select_router(routers, router_kind),
                max_results=max_results,
                min_score=min_score,
                max_workers=max_workers
            ),
            RetrievalAugmentor(
                RetrievalAugmentorKind.SIMPLE,
                identity,
                default_router,
                max_results=3,
                min_score=0.7,
                max_workers=max_workers
            ),
            RetrievalAugmentor(
                RetrievalAugmentorKind.ADVANCED,
                select_query_transformer(query_transformers, True),
                select_router(routers, QueryRouterKind.LANGUAGE_MODEL),
                max_results=10,
                min_score=0.5,
                max_workers=max_workers
            ),
        ],
        category="RetrievalAugmentor"
    )
