"""
Query transformers applied before routing.
"""
from retrieval.query.base import BaseQueryTransformer, QueryTransformerKind
from retrieval.query.transformers import (
    CompressingQueryTransformer,
    DefaultQueryTransformer,
    ExpandingQueryTransformer,
    RewritingQueryTransformer,
)
from retrieval.query.query_transformer_factory import (
    build_query_transformer_registry,
    select_query_transformer,
)

__all__ = [
    "BaseQueryTransformer",
    "QueryTransformerKind",
    "CompressingQueryTransformer",
    "DefaultQueryTransformer",
    "ExpandingQueryTransformer",
    "RewritingQueryTransformer",
    "build_query_transformer_registry",
    "select_query_transformer",
]
