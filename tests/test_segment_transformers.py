"""Tests for segment transformers."""
from unittest.mock import Mock

import pytest

from domain.models import Segment
from ingestion.segment_transformers import (
    CompositeSegmentTransformer,
    SegmentCleaner,
    SegmentFilter,
    SegmentMetadataEnhancer,
    SegmentTransformerKind,
    SummaryEnhancer,
    TitleEnhancer,
    build_segment_transformer_registry,
    create_default_segment_pipeline,
    create_full_segment_pipeline,
    create_segment_composite,
)
from ingestion.segment_transformers.enhancers import count_lines


class TestTitleEnhancer:
    """Tests for the title enhancer."""

    def test_prefixes_title(self):
        segment = Segment(text="body", metadata={"title": " Manual "})

        result = TitleEnhancer().transform(segment)

        assert result.text == "【文档标题: Manual】\n\nbody"
        assert result.metadata == segment.metadata

    def test_falls_back_to_file_name(self):
        segment = Segment(text="body", metadata={"title": "  ", "file_name": "a.txt"})

        assert TitleEnhancer().transform(segment).text.startswith("【文档标题: a.txt】")

    def test_no_title_passes_through(self):
        segment = Segment(text="body", metadata={"index": 0})

        assert TitleEnhancer().transform(segment) is segment


class TestSummaryEnhancer:
    """Tests for the summary enhancer."""

    def test_prefixes_summary(self):
        segment = Segment(text="body", metadata={"document_summary": "About X"})

        assert SummaryEnhancer().transform(segment).text == "【文档摘要: About X】\n\nbody"

    def test_no_summary_passes_through(self):
        segment = Segment(text="body")

        assert SummaryEnhancer().transform(segment) is segment


class TestSegmentMetadataEnhancer:
    """Tests for segment statistics."""

    def test_adds_counts_and_keeps_keys(self):
        segment = Segment(text="one two\nthree\n", metadata={"index": 3})

        result = SegmentMetadataEnhancer().transform(segment)

        assert result.metadata["index"] == 3
        assert result.metadata["segment_char_count"] == 14
        assert result.metadata["segment_word_count"] == 3
        assert result.metadata["segment_line_count"] == 2

    @pytest.mark.parametrize("text,lines", [("", 1), ("a", 1), ("a\nb", 2), ("a\n\n", 1), ("a\n\nb", 3)])
    def test_count_lines(self, text, lines):
        assert count_lines(text) == lines


class TestCleanupTransformers:
    """Tests for segment cleaning and filtering."""

    def test_cleaner(self):
        assert SegmentCleaner().transform(Segment(text=" a   b ")).text == "a b"

    def test_filter_drops_blank(self):
        assert SegmentFilter().transform(Segment(text="  ")) is None

    def test_filter_min_length(self):
        segment = Segment(text="abcd")

        assert SegmentFilter(min_length=5).transform(segment) is None
        assert SegmentFilter(min_length=4).transform(segment) is segment


class TestSegmentPipelines:
    """Tests for composite segment pipelines."""

    @pytest.fixture
    def registry(self):
        return build_segment_transformer_registry()

    def test_default_pipeline(self, registry):
        """Title first, then statistics over the prefixed text."""
        pipeline = create_default_segment_pipeline(registry)

        result = pipeline.transform(Segment(text="body", metadata={"title": "T"}))

        assert result.text == "【文档标题: T】\n\nbody"
        assert result.metadata["segment_char_count"] == len(result.text)
        assert result.metadata["segment_line_count"] == 3

    def test_full_pipeline_order(self, registry):
        pipeline = create_full_segment_pipeline(registry)

        result = pipeline.transform(Segment(text="b", metadata={"title": "T", "summary": "S"}))

        assert result.text == "【文档摘要: S】\n\n【文档标题: T】\n\nb"

    def test_discard_short_circuits(self):
        later = Mock()
        later.is_enabled.return_value = True
        composite = CompositeSegmentTransformer([SegmentFilter(), later])

        assert composite.transform(Segment(text="")) is None
        later.transform.assert_not_called()

    def test_transform_all_drops_discarded(self, registry):
        pipeline = create_segment_composite(registry, ["CLEANING", "FILTERING"])
        segments = [Segment(text=" x "), Segment(text="   "), Segment(text="y")]

        assert [s.text for s in pipeline.transform_all(segments)] == ["x", "y"]

    def test_composite_kind_is_default_pipeline(self, registry):
        composite = registry.resolve(SegmentTransformerKind.COMPOSITE)

        assert [t.kind for t in composite.transformers] == [
            SegmentTransformerKind.TITLE_ENHANCER,
            SegmentTransformerKind.METADATA_ENHANCER,
        ]
