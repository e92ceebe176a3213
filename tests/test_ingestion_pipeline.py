"""
Unit tests for IngestionOrchestrator.
"""
from unittest.mock import Mock
import pytest

from core.registry import UnsupportedStrategyKind
from domain.models import Document
from embeddings.base import EmbeddingConfig, EmbeddingException, HashEmbedding
from ingestion.loaders.base_loader import SourceNotFound
from ingestion.loaders.loader_factory import build_loader_registry
from ingestion.pipeline import IngestionOptions, IngestionOrchestrator, IngestionResult
from ingestion.segment_transformers.segment_transformer_factory import build_segment_transformer_registry
from ingestion.splitters.splitter_factory import build_splitter_registry
from ingestion.transformers.transformer_factory import build_document_transformer_registry
from vectorstore import InMemoryVectorStore

LONG_TEXT = (
    "Photosynthesis is the process used by plants to convert light energy "
    "into chemical energy that can later be released to fuel the organism."
)


def make_orchestrator(embedder=None, store=None, **overrides):
    embedder = embedder or HashEmbedding(EmbeddingConfig(dimension=8))
    store = store or InMemoryVectorStore(dimension=8)
    kwargs = dict(
        loaders=build_loader_registry(),
        document_transformers=build_document_transformer_registry(min_length=50),
        splitters=build_splitter_registry(max_segment_size=60, max_overlap_size=10),
        segment_transformers=build_segment_transformer_registry(),
        embedder=embedder,
        vector_store=store,
        default_splitter="RECURSIVE",
        default_document_pipeline=["CLEANING", "METADATA_ENHANCER", "FILTERING"],
        default_segment_pipeline=["TITLE_ENHANCER", "METADATA_ENHANCER"],
    )
    kwargs.update(overrides)
    return IngestionOrchestrator(**kwargs)


class TestIngestionResult:
    """Tests para IngestionResult"""

    def test_counts(self):
        result = IngestionResult(documents_loaded=3, documents_discarded=1, segment_ids=["a", "b"])

        assert result.documents_kept == 2
        assert result.segments_stored == 2

    def test_processing_time_before_completion(self):
        assert IngestionResult().processing_time == 0.0


class TestIngestText:
    """Tests de ingesta de texto"""

    @pytest.fixture
    def store(self):
        return InMemoryVectorStore(dimension=8)

    @pytest.fixture
    def orchestrator(self, store):
        return make_orchestrator(store=store)

    def test_short_text_filtered(self, orchestrator, store):
        """Un texto de 40 caracteres se descarta con el pipeline por defecto"""
        result = orchestrator.ingest_text("x" * 40)

        assert result.documents_loaded == 1
        assert result.documents_discarded == 1
        assert result.segments_created == 0
        assert result.segments_stored == 0
        assert store.count() == 0

    def test_cleaning_only(self, orchestrator, store):
        """Sólo limpieza: el segmento almacenado es el texto normalizado"""
        options = IngestionOptions(document_transformers=["CLEANING"], segment_transformers=[])

        result = orchestrator.ingest_text("Line1\n\n\n\nLine2   with   spaces", options=options)

        assert result.segments_stored == 1
        assert store.get(result.segment_ids[0]).text == "Line1\n\nLine2 with spaces"

    def test_default_pipeline_enriches_segments(self, orchestrator, store):
        result = orchestrator.ingest_text(LONG_TEXT, metadata={"title": "Plants"})

        assert result.segments_stored == result.segments_created > 1
        assert result.splitter == "RECURSIVE"
        assert result.completed_at is not None

        segment = store.get(result.segment_ids[0])
        assert segment.text.startswith("【文档标题: Plants】\n\n")
        assert segment.metadata["title"] == "Plants"
        assert segment.metadata["language"] == "en"
        assert segment.metadata["index"] == 0
        assert "segment_char_count" in segment.metadata

    def test_segments_respect_size(self, orchestrator, store):
        options = IngestionOptions(segment_transformers=[])

        result = orchestrator.ingest_text(LONG_TEXT, options=options)

        assert all(len(store.get(i).text) <= 60 for i in result.segment_ids)

    def test_transforms_disabled_per_call(self, orchestrator):
        options = IngestionOptions(transform_documents=False, transform_segments=False)

        result = orchestrator.ingest_text("x" * 40, options=options)

        assert result.documents_discarded == 0
        assert result.segments_stored == 1

    def test_transforms_disabled_globally(self):
        orchestrator = make_orchestrator(document_transformers_enabled=False)

        assert orchestrator.ingest_text("x" * 40).segments_stored == 1

    def test_segment_filter_counts_discards(self, orchestrator):
        options = IngestionOptions(
            transform_documents=False,
            splitter_kind="BY_PARAGRAPH",
            segment_transformers=["FILTERING"]
        )
        orchestrator.segment_transformers = build_segment_transformer_registry(min_length=5)

        result = orchestrator.ingest_text("abc\n\n" + "y" * 58, options=options)

        assert result.segments_created == 2
        assert result.segments_discarded == 1
        assert result.segments_stored == 1

    def test_unknown_splitter(self, orchestrator, store):
        with pytest.raises(UnsupportedStrategyKind, match="Unsupported DocumentSplitter kind: SEMANTIC"):
            orchestrator.ingest_text(LONG_TEXT, options=IngestionOptions(splitter_kind="SEMANTIC"))
        assert store.count() == 0

    def test_unregistered_transformer_fails_before_work(self, orchestrator, store):
        """SUMMARIZER no está registrado sin modelo generativo"""
        options = IngestionOptions(document_transformers=["CLEANING", "SUMMARIZER"])

        with pytest.raises(UnsupportedStrategyKind, match="SUMMARIZER"):
            orchestrator.ingest_text(LONG_TEXT, options=options)
        assert store.count() == 0

    def test_embedding_failure_stores_nothing(self, store):
        embedder = Mock()
        embedder.embed_texts.side_effect = EmbeddingException("model unavailable")
        orchestrator = make_orchestrator(embedder=embedder, store=store)

        with pytest.raises(EmbeddingException):
            orchestrator.ingest_text(LONG_TEXT)
        assert store.count() == 0

    def test_single_batch_embedding(self, store):
        embedder = HashEmbedding(EmbeddingConfig(dimension=8))
        spy = Mock(wraps=embedder.embed_texts)
        embedder.embed_texts = spy
        orchestrator = make_orchestrator(embedder=embedder, store=store)

        result = orchestrator.ingest_text(LONG_TEXT)

        spy.assert_called_once()
        assert len(spy.call_args[0][0]) == result.segments_stored


class TestIngestSource:
    """Tests de ingesta desde fuentes"""

    def test_directory(self, tmp_path):
        (tmp_path / "b.txt").write_text(LONG_TEXT, encoding="utf-8")
        (tmp_path / "a.md").write_text("# Title\n\n" + LONG_TEXT, encoding="utf-8")
        store = InMemoryVectorStore(dimension=8)
        orchestrator = make_orchestrator(store=store)

        result = orchestrator.ingest_source(str(tmp_path))

        assert result.documents_loaded == 2
        assert result.documents_discarded == 0
        file_names = {store.get(i).metadata["file_name"] for i in result.segment_ids}
        assert file_names == {"a.md", "b.txt"}

    def test_missing_source(self, tmp_path):
        orchestrator = make_orchestrator()

        with pytest.raises(SourceNotFound):
            orchestrator.ingest_source(str(tmp_path / "missing.txt"))

    def test_unknown_loader(self):
        orchestrator = make_orchestrator()

        with pytest.raises(UnsupportedStrategyKind, match="Unsupported DocumentLoader kind"):
            orchestrator.ingest_source("x", IngestionOptions(loader_kind="FTP"))

    def test_ingest_documents(self):
        store = InMemoryVectorStore(dimension=8)
        orchestrator = make_orchestrator(store=store)

        result = orchestrator.ingest_documents(
            [Document(text=LONG_TEXT), Document(text="too short")],
            IngestionOptions(segment_transformers=[])
        )

        assert result.documents_loaded == 2
        assert result.documents_discarded == 1
        assert store.count() == result.segments_stored
