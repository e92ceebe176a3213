"""
Segment transformers: enrich or drop segments after splitting.
"""
from ingestion.segment_transformers.base import BaseSegmentTransformer, SegmentTransformerKind
from ingestion.segment_transformers.cleanup import SegmentCleaner, SegmentFilter
from ingestion.segment_transformers.composite import CompositeSegmentTransformer
from ingestion.segment_transformers.enhancers import (
    SegmentMetadataEnhancer,
    SummaryEnhancer,
    TitleEnhancer,
)
from ingestion.segment_transformers.segment_transformer_factory import (
    DEFAULT_SEGMENT_PIPELINE,
    FULL_SEGMENT_PIPELINE,
    build_segment_transformer_registry,
    create_default_segment_pipeline,
    create_full_segment_pipeline,
    create_segment_composite,
)

__all__ = [
    "BaseSegmentTransformer",
    "SegmentTransformerKind",
    "SegmentCleaner",
    "SegmentFilter",
    "CompositeSegmentTransformer",
    "SegmentMetadataEnhancer",
    "SummaryEnhancer",
    "TitleEnhancer",
    "DEFAULT_SEGMENT_PIPELINE",
    "FULL_SEGMENT_PIPELINE",
    "build_segment_transformer_registry",
    "create_default_segment_pipeline",
    "create_full_segment_pipeline",
    "create_segment_composite",
]
