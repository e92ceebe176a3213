"""
Segment level cleaning and filtering.
"""
from typing import Optional

from ingestion.segment_transformers.base import BaseSegmentTransformer, SegmentTransformerKind
from ingestion.transformers.cleaning import clean_text
from domain.models import Segment


class SegmentCleaner(BaseSegmentTransformer):
    kind = SegmentTransformerKind.CLEANING

    @property
    def description(self) -> str:
        return "Applies document text cleaning to each segment"

    def transform(self, segment: Segment) -> Optional[Segment]:
        return segment.with_text(clean_text(segment.text))


class SegmentFilter(BaseSegmentTransformer):
    """Drops blank segments and segments shorter than min_length"""

    kind = SegmentTransformerKind.FILTERING

    def __init__(self, min_length: int = 1, enabled: bool = True):
        super().__init__(enabled=enabled)
        self.min_length = min_length

    @property
    def description(self) -> str:
        return f"Discards blank segments and segments shorter than {self.min_length} characters"

    def transform(self, segment: Segment) -> Optional[Segment]:
        if not segment.text.strip() or len(segment.text) < self.min_length:
            return None
        return segment
