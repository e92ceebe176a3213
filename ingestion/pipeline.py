"""
Ingestion pipeline.
Orchestrates Load -> [DocumentTransform] -> Split -> [SegmentTransform] ->
embed + store for one call, with every stage selected by kind.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Union
import logging

from core.registry import StrategyRegistry
from domain.models import Document, Segment
from embeddings.base import BaseEmbedding
from ingestion.loaders.base_loader import BaseLoader, LoaderKind
from ingestion.segment_transformers.base import BaseSegmentTransformer, SegmentTransformerKind
from ingestion.segment_transformers.segment_transformer_factory import create_segment_composite
from ingestion.splitters.base_splitter import BaseSplitter, SplitterKind
from ingestion.transformers.base_transformer import BaseDocumentTransformer, DocumentTransformerKind
from ingestion.transformers.transformer_factory import create_composite
from vectorstore.base import BaseVectorStore

logger = logging.getLogger(__name__)


@dataclass
class IngestionOptions:
    """
    Per-call stage selection.

    ``None`` for a kind list means "use the configured default pipeline";
    an empty list means "no transformers".
    """
    loader_kind: Union[LoaderKind, str] = LoaderKind.FILE_SYSTEM
    splitter_kind: Optional[Union[SplitterKind, str]] = None
    transform_documents: bool = True
    document_transformers: Optional[Sequence[Union[DocumentTransformerKind, str]]] = None
    transform_segments: bool = True
    segment_transformers: Optional[Sequence[Union[SegmentTransformerKind, str]]] = None


@dataclass
class IngestionResult:
    """Result of one ingestion call"""
    documents_loaded: int = 0
    documents_discarded: int = 0
    segments_created: int = 0
    segments_discarded: int = 0
    segment_ids: List[str] = field(default_factory=list)
    splitter: str = ""
    started_at: datetime = field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None

    @property
    def segments_stored(self) -> int:
        return len(self.segment_ids)

    @property
    def documents_kept(self) -> int:
        return self.documents_loaded - self.documents_discarded

    @property
    def processing_time(self) -> float:
        if self.completed_at is None:
            return 0.0
        return (self.completed_at - self.started_at).total_seconds()


class IngestionOrchestrator:
    """
    Runs the ingestion stages for a single call.

    Stages run sequentially and without retries; any stage failure aborts
    the call before anything is stored. All surviving segments of a call are
    embedded and stored with one batch request each.
    """

    def __init__(
        self,
        loaders: StrategyRegistry[LoaderKind, BaseLoader],
        document_transformers: StrategyRegistry[DocumentTransformerKind, BaseDocumentTransformer],
        splitters: StrategyRegistry[SplitterKind, BaseSplitter],
        segment_transformers: StrategyRegistry[SegmentTransformerKind, BaseSegmentTransformer],
        embedder: BaseEmbedding,
        vector_store: BaseVectorStore,
        default_splitter: Union[SplitterKind, str] = SplitterKind.RECURSIVE,
        default_document_pipeline: Sequence[Union[DocumentTransformerKind, str]] = (),
        default_segment_pipeline: Sequence[Union[SegmentTransformerKind, str]] = (),
        document_transformers_enabled: bool = True,
        segment_transformers_enabled: bool = True
    ):
        self.loaders = loaders
        self.document_transformers = document_transformers
        self.splitters = splitters
        self.segment_transformers = segment_transformers
        self.embedder = embedder
        self.vector_store = vector_store
        self.default_splitter = default_splitter
        self.default_document_pipeline = list(default_document_pipeline)
        self.default_segment_pipeline = list(default_segment_pipeline)
        self.document_transformers_enabled = document_transformers_enabled
        self.segment_transformers_enabled = segment_transformers_enabled

        logger.info(
            f"IngestionOrchestrator initialized with "
            f"embedder={embedder.__class__.__name__}, "
            f"vector_store={vector_store.__class__.__name__}"
        )

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def ingest_text(
        self,
        text: str,
        metadata: Optional[Dict[str, Any]] = None,
        options: Optional[IngestionOptions] = None
    ) -> IngestionResult:
        """Ingest raw text as a single document"""
        document = Document(text=text, metadata=dict(metadata or {}))
        return self.ingest_documents([document], options)

    def ingest_source(self, source: str, options: Optional[IngestionOptions] = None) -> IngestionResult:
        """
        Load every document behind a source with the selected loader and ingest them.

        Raises:
            UnsupportedStrategyKind: If a selected kind is not registered
            LoaderException: If the source cannot be found or read
            ParseError: If a document cannot be parsed
        """
        options = options or IngestionOptions()
        loader = self.loaders.resolve(options.loader_kind)
        logger.info(f"Loading '{source}' with {loader.kind.value} loader")
        documents = loader.load_documents(source)
        return self.ingest_documents(documents, options)

    def ingest_documents(
        self,
        documents: Sequence[Document],
        options: Optional[IngestionOptions] = None
    ) -> IngestionResult:
        options = options or IngestionOptions()
        # Resolve every stage before doing any work
        document_stage = self._document_stage(options)
        splitter = self.splitters.resolve(options.splitter_kind or self.default_splitter)
        segment_stage = self._segment_stage(options)

        result = IngestionResult(documents_loaded=len(documents), splitter=splitter.kind.value)

        if document_stage is not None:
            kept = document_stage.transform_all(documents)
            result.documents_discarded = len(documents) - len(kept)
            documents = kept

        segments = splitter.split_all(documents)
        result.segments_created = len(segments)

        if segment_stage is not None:
            kept_segments = segment_stage.transform_all(segments)
            result.segments_discarded = len(segments) - len(kept_segments)
            segments = kept_segments

        result.segment_ids = self._embed_and_store(segments)
        result.completed_at = datetime.now()

        logger.info(
            f"Ingestion completed: {result.documents_kept}/{result.documents_loaded} documents kept, "
            f"{result.segments_stored} segments stored "
            f"({result.segments_discarded} discarded) in {result.processing_time:.2f}s"
        )
        return result

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _document_stage(self, options: IngestionOptions) -> Optional[BaseDocumentTransformer]:
        if not (self.document_transformers_enabled and options.transform_documents):
            return None
        kinds = options.document_transformers
        if kinds is None:
            kinds = self.default_document_pipeline
        if not kinds:
            return None
        return create_composite(self.document_transformers, kinds)

    def _segment_stage(self, options: IngestionOptions) -> Optional[BaseSegmentTransformer]:
        if not (self.segment_transformers_enabled and options.transform_segments):
            return None
        kinds = options.segment_transformers
        if kinds is None:
            kinds = self.default_segment_pipeline
        if not kinds:
            return None
        return create_segment_composite(self.segment_transformers, kinds)

    def _embed_and_store(self, segments: List[Segment]) -> List[str]:
        if not segments:
            logger.info("No segments to store")
            return []

        embeddings = self.embedder.embed_texts([segment.text for segment in segments])
        return self.vector_store.add_all(segments, embeddings)
