"""
Query transformer registry and selection.
"""
from typing import Optional
import logging

from chat.llm_clients.base import BaseLLMClient
from core.registry import StrategyRegistry
from retrieval.query.base import BaseQueryTransformer, QueryTransformerKind
from retrieval.query.transformers import (
    CompressingQueryTransformer,
    DefaultQueryTransformer,
    ExpandingQueryTransformer,
    RewritingQueryTransformer,
)

logger = logging.getLogger(__name__)

QueryTransformerRegistry = StrategyRegistry[QueryTransformerKind, BaseQueryTransformer]

# Preference order when query transformation is enabled
_PREFERENCE = (QueryTransformerKind.COMPRESSING, QueryTransformerKind.EXPANDING)


def build_query_transformer_registry(
    llm_client: Optional[BaseLLMClient] = None,
    expansion_count: int = 3
) -> QueryTransformerRegistry:
    """Model-backed transformers are only registered when a model is available"""
    transformers = [DefaultQueryTransformer(), RewritingQueryTransformer()]
    if llm_client is not None:
        transformers += [
            CompressingQueryTransformer(llm_client),
            ExpandingQueryTransformer(llm_client, n=expansion_count),
        ]
    return StrategyRegistry(QueryTransformerKind, transformers, category="QueryTransformer")


def select_query_transformer(registry: QueryTransformerRegistry, enabled: bool) -> BaseQueryTransformer:
    """
    Compressing if registered, else Expanding, else the identity transformer.
    Never fails because a preferred transformer is absent.
    """
    if enabled:
        for kind in _PREFERENCE:
            transformer = registry.find(kind)
            if transformer is not None:
                return transformer
        logger.info("No model-backed query transformer registered, using DEFAULT")

    default = registry.find(QueryTransformerKind.DEFAULT)
    return default if default is not None else DefaultQueryTransformer()
