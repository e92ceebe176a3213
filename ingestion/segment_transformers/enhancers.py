"""
Segment enhancers: prefix document context and add segment statistics.
"""
from typing import Optional, Sequence

from ingestion.segment_transformers.base import (
    BaseSegmentTransformer,
    SegmentTransformerKind,
    first_non_blank,
)
from domain.models import Segment

TITLE_KEYS = ("title", "document_title", "file_name")
SUMMARY_KEYS = ("summary", "document_summary")

TITLE_PREFIX = "【文档标题: {title}】\n\n"
SUMMARY_PREFIX = "【文档摘要: {summary}】\n\n"


class TitleEnhancer(BaseSegmentTransformer):
    """Prefixes the document title so that each segment carries its origin"""

    kind = SegmentTransformerKind.TITLE_ENHANCER

    def __init__(self, keys: Sequence[str] = TITLE_KEYS, enabled: bool = True):
        super().__init__(enabled=enabled)
        self.keys = tuple(keys)

    @property
    def description(self) -> str:
        return f"Prefixes the document title (from {', '.join(self.keys)})"

    def transform(self, segment: Segment) -> Optional[Segment]:
        title = first_non_blank(segment.metadata, self.keys)
        if title is None:
            return segment
        return segment.with_text(TITLE_PREFIX.format(title=title) + segment.text)


class SummaryEnhancer(BaseSegmentTransformer):
    kind = SegmentTransformerKind.SUMMARY_ENHANCER

    def __init__(self, keys: Sequence[str] = SUMMARY_KEYS, enabled: bool = True):
        super().__init__(enabled=enabled)
        self.keys = tuple(keys)

    @property
    def description(self) -> str:
        return f"Prefixes the document summary (from {', '.join(self.keys)})"

    def transform(self, segment: Segment) -> Optional[Segment]:
        summary = first_non_blank(segment.metadata, self.keys)
        if summary is None:
            return segment
        return segment.with_text(SUMMARY_PREFIX.format(summary=summary) + segment.text)


def count_lines(text: str) -> int:
    """Newline separated lines, ignoring trailing empty lines"""
    lines = text.split("\n")
    while len(lines) > 1 and not lines[-1]:
        lines.pop()
    return len(lines)


class SegmentMetadataEnhancer(BaseSegmentTransformer):
    kind = SegmentTransformerKind.METADATA_ENHANCER

    @property
    def description(self) -> str:
        return "Adds segment_char_count, segment_word_count and segment_line_count"

    def transform(self, segment: Segment) -> Optional[Segment]:
        text = segment.text
        return segment.with_metadata(
            segment_char_count=len(text),
            segment_word_count=len(text.split()),
            segment_line_count=count_lines(text)
        )
