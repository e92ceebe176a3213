"""Tests for document transformers and their pipelines."""
from datetime import datetime
from unittest.mock import Mock

import pytest

from core.registry import UnsupportedStrategyKind
from domain.models import Document
from ingestion.transformers import (
    CleaningTransformer,
    CompositeDocumentTransformer,
    DocumentTransformerKind,
    FilteringTransformer,
    HtmlToTextTransformer,
    MetadataEnhancerTransformer,
    SummarizerTransformer,
    build_document_transformer_registry,
    clean_text,
    create_composite,
    create_default_pipeline,
)
from ingestion.transformers.metadata_enhancer import (
    PROCESSED_AT_FORMAT,
    count_words,
    detect_language,
    length_category,
)


class TestCleaning:
    """Tests for the cleaning transformer."""

    def test_collapses_blank_lines_and_spaces(self):
        """Runs of blank lines and repeated spaces are collapsed."""
        assert clean_text("Line1\n\n\n\nLine2   with   spaces") == "Line1\n\nLine2 with spaces"

    def test_removes_invisible_characters(self):
        text = "a\x00b\u200bc\ufeffd\x07e\r\nf"

        assert clean_text(text) == "abcde\nf"

    def test_keeps_tabs_inside_lines(self):
        assert clean_text("col1\tcol2") == "col1\tcol2"

    def test_trims_blanks_around_newlines(self):
        assert clean_text("  first  \n\t  second \n") == "first\nsecond"

    @pytest.mark.parametrize("text", [
        "Line1\n\n\n\nLine2   with   spaces",
        "  a \t\n\n\n  b\u200b  c\x01 ",
        "a\n \n \nb",
        "\ufeffHeader\r\n\r\n\r\nBody  \t \n  tail",
        "",
    ])
    def test_idempotent(self, text):
        """Cleaning twice equals cleaning once."""
        once = clean_text(text)

        assert clean_text(once) == once

    def test_transformer_returns_new_document(self):
        doc = Document(text="a   b", metadata={"k": "v"})

        result = CleaningTransformer().transform(doc)

        assert result.text == "a b"
        assert result.metadata == {"k": "v"}
        assert doc.text == "a   b"


class TestFiltering:
    """Tests for the length filter."""

    @pytest.fixture
    def transformer(self):
        return FilteringTransformer()

    def test_accepts_document_unchanged(self, transformer):
        """Accepted documents are returned as the very same object."""
        doc = Document(text="x" * 50)

        assert transformer.transform(doc) is doc

    def test_discards_short_document(self, transformer):
        assert transformer.transform(Document(text="x" * 49)) is None

    def test_discards_long_document(self, transformer):
        assert transformer.transform(Document(text="x" * 50001)) is None
        assert transformer.transform(Document(text="x" * 50000)) is not None

    def test_discards_blank_document(self):
        transformer = FilteringTransformer(min_length=0)

        assert transformer.transform(Document(text="   \n ")) is None

    def test_invalid_bounds(self):
        with pytest.raises(ValueError):
            FilteringTransformer(min_length=10, max_length=5)

    def test_transform_all_keeps_order(self, transformer):
        docs = [Document(text="a" * 60), Document(text="b"), Document(text="c" * 70)]

        kept = transformer.transform_all(docs)

        assert [d.text[0] for d in kept] == ["a", "c"]


class TestMetadataEnhancer:
    """Tests for the metadata enhancer."""

    def test_adds_owned_keys(self):
        doc = Document(text="hello world again")

        result = MetadataEnhancerTransformer().transform(doc)

        assert result.metadata["word_count"] == 3
        assert result.metadata["char_count"] == 17
        assert result.metadata["length_category"] == "short"
        assert result.metadata["language"] == "en"
        datetime.strptime(result.metadata["processed_at"], PROCESSED_AT_FORMAT)

    def test_preserves_existing_keys(self):
        """Keys the enhancer does not own are never removed."""
        doc = Document(text="text", metadata={"file_name": "a.txt", "author": "x"})

        result = MetadataEnhancerTransformer().transform(doc)

        assert result.metadata["file_name"] == "a.txt"
        assert result.metadata["author"] == "x"

    @pytest.mark.parametrize("length,category", [
        (0, "short"), (499, "short"), (500, "medium"), (1999, "medium"),
        (2000, "long"), (9999, "long"), (10000, "very_long"),
    ])
    def test_length_category(self, length, category):
        assert length_category(length) == category

    def test_detect_language(self):
        assert detect_language("这是中文") == "zh"
        assert detect_language("mixed 中 text") == "zh"
        assert detect_language("plain english") == "en"
        assert detect_language("") == "en"

    def test_count_words(self):
        assert count_words("  one two\nthree  ") == 3
        assert count_words("") == 0


class TestHtmlToText:
    """Tests for the HTML to text transformer."""

    def test_extracts_visible_text(self):
        html = (
            "<html><head><title>Guide</title><style>p {}</style></head>"
            "<body><p>Hello</p><script>var x = 1;</script><p>World</p></body></html>"
        )

        result = HtmlToTextTransformer().transform(Document(text=html))

        assert "Hello" in result.text
        assert "World" in result.text
        assert "var x" not in result.text
        assert "<p>" not in result.text
        assert result.metadata["title"] == "Guide"

    def test_plain_text_passes_through(self):
        doc = Document(text="no markup here, 3 < 4")

        assert HtmlToTextTransformer().transform(doc) is doc

    def test_keeps_existing_title(self):
        doc = Document(text="<title>New</title><p>x</p>", metadata={"title": "Old"})

        assert HtmlToTextTransformer().transform(doc).metadata["title"] == "Old"


class TestSummarizer:
    """Tests for the model-backed summarizer."""

    def test_adds_summary(self):
        llm = Mock()
        llm.generate.return_value = "  A short summary.  "

        result = SummarizerTransformer(llm).transform(Document(text="long text"))

        assert result.metadata["summary"] == "A short summary."
        llm.generate.assert_called_once()

    def test_existing_summary_is_kept(self):
        llm = Mock()
        doc = Document(text="t", metadata={"summary": "given"})

        assert SummarizerTransformer(llm).transform(doc) is doc
        llm.generate.assert_not_called()


class TestCompositeDocumentTransformer:
    """Tests for composite pipelines and the registry."""

    @pytest.fixture
    def registry(self):
        return build_document_transformer_registry()

    def test_short_circuit(self):
        """A discarding stage stops the chain."""
        after = Mock()
        after.is_enabled.return_value = True
        composite = CompositeDocumentTransformer([FilteringTransformer(), after])

        assert composite.transform(Document(text="short")) is None
        after.transform.assert_not_called()

    def test_default_pipeline_discards_short_text(self, registry):
        """A 40 character document is filtered out by the default pipeline."""
        pipeline = create_default_pipeline(registry)

        assert pipeline.transform(Document(text="x" * 40)) is None

    def test_default_pipeline_keeps_long_text(self, registry):
        pipeline = create_default_pipeline(registry)
        text = "Some   text with\n\n\n\nenough characters to pass the length filter."

        result = pipeline.transform(Document(text=text))

        assert result.text == "Some text with\n\nenough characters to pass the length filter."
        assert result.metadata["word_count"] == 10

    def test_cleaning_only_pipeline(self, registry):
        pipeline = create_composite(registry, ["CLEANING"])

        result = pipeline.transform(Document(text="Line1\n\n\n\nLine2   with   spaces"))

        assert result.text == "Line1\n\nLine2 with spaces"

    def test_nested_composites(self, registry):
        inner = create_composite(registry, [DocumentTransformerKind.CLEANING])
        outer = CompositeDocumentTransformer([inner, MetadataEnhancerTransformer()])

        result = outer.transform(Document(text="a   b"))

        assert result.text == "a b"
        assert result.metadata["char_count"] == 3

    def test_summarizer_requires_model(self, registry):
        """Without a generative model SUMMARIZER is not registered."""
        assert DocumentTransformerKind.SUMMARIZER not in registry
        with pytest.raises(UnsupportedStrategyKind):
            create_composite(registry, ["SUMMARIZER"])

    def test_summarizer_registered_with_model(self):
        registry = build_document_transformer_registry(llm_client=Mock())

        assert registry.is_supported(DocumentTransformerKind.SUMMARIZER)

    def test_composite_kind_resolves_to_default_pipeline(self, registry):
        composite = registry.resolve(DocumentTransformerKind.COMPOSITE)

        assert [t.kind for t in composite.transformers] == [
            DocumentTransformerKind.CLEANING,
            DocumentTransformerKind.METADATA_ENHANCER,
            DocumentTransformerKind.FILTERING,
        ]

    def test_disabled_stage_skipped(self):
        composite = CompositeDocumentTransformer([FilteringTransformer(enabled=False)])
        doc = Document(text="tiny")

        assert composite.transform(doc) is doc
