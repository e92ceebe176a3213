"""
Segment transformer registry and pipeline builders.
"""
from typing import Sequence, Union

from core.registry import StrategyRegistry
from ingestion.segment_transformers.base import BaseSegmentTransformer, SegmentTransformerKind
from ingestion.segment_transformers.cleanup import SegmentCleaner, SegmentFilter
from ingestion.segment_transformers.composite import CompositeSegmentTransformer
from ingestion.segment_transformers.enhancers import (
    SegmentMetadataEnhancer,
    SummaryEnhancer,
    TitleEnhancer,
)

SegmentTransformerRegistry = StrategyRegistry[SegmentTransformerKind, BaseSegmentTransformer]

DEFAULT_SEGMENT_PIPELINE = (
    SegmentTransformerKind.TITLE_ENHANCER,
    SegmentTransformerKind.METADATA_ENHANCER,
)

FULL_SEGMENT_PIPELINE = (
    SegmentTransformerKind.TITLE_ENHANCER,
    SegmentTransformerKind.SUMMARY_ENHANCER,
    SegmentTransformerKind.METADATA_ENHANCER,
)


def create_segment_composite(
    registry: SegmentTransformerRegistry,
    kinds: Sequence[Union[SegmentTransformerKind, str]]
) -> CompositeSegmentTransformer:
    """
    Raises:
        UnsupportedStrategyKind: If any kind is not registered
    """
    return CompositeSegmentTransformer([registry.resolve(kind) for kind in kinds])


def create_default_segment_pipeline(registry: SegmentTransformerRegistry) -> CompositeSegmentTransformer:
    """Title -> Metadata"""
    return create_segment_composite(registry, DEFAULT_SEGMENT_PIPELINE)


def create_full_segment_pipeline(registry: SegmentTransformerRegistry) -> CompositeSegmentTransformer:
    """Title -> Summary -> Metadata"""
    return create_segment_composite(registry, FULL_SEGMENT_PIPELINE)


def build_segment_transformer_registry(min_length: int = 1) -> SegmentTransformerRegistry:
    """COMPOSITE resolves to the default Title -> Metadata pipeline"""
    transformers = [
        TitleEnhancer(),
        SummaryEnhancer(),
        SegmentMetadataEnhancer(),
        SegmentCleaner(),
        SegmentFilter(min_length=min_length),
    ]
    base = StrategyRegistry(SegmentTransformerKind, transformers, category="SegmentTransformer")
    return StrategyRegistry(
        SegmentTransformerKind,
        transformers + [create_default_segment_pipeline(base)],
        category="SegmentTransformer"
    )
