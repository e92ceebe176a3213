"""
Outward surface of the pipeline.

``RagEngine`` is what the HTTP API and the CLI drive: ingest text or a
source, ask questions, and list the registered strategies per category.
"""
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging

from config.settings import Settings
from core.container import PipelineContainer, StrategyCategory, build_container
from domain.models import RagResponse
from ingestion.loaders.base_loader import LoaderKind
from ingestion.pipeline import IngestionOptions, IngestionResult

logger = logging.getLogger(__name__)


class RagEngine:
    """
    Example usage:
        engine = RagEngine.from_settings()
        engine.ingest_source("docs/manual.pdf")
        print(engine.query("How do I reset the device?"))
    """

    def __init__(self, container: PipelineContainer):
        self.container = container

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **collaborators) -> "RagEngine":
        """Build the engine from settings; collaborators are passed to ``build_container``"""
        return cls(build_container(settings, **collaborators))

    def ingest(
        self,
        text_or_source: str,
        options: Optional[IngestionOptions] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> IngestionResult:
        """
        Ingest a source when the value names one, raw text otherwise.

        Values count as sources when they are http(s) URLs, existing paths,
        or a loader kind other than FILE_SYSTEM was selected in ``options``.
        """
        if self._is_source(text_or_source, options):
            return self.ingest_source(text_or_source, options)
        return self.ingest_text(text_or_source, metadata=metadata, options=options)

    def ingest_text(
        self,
        text: str,
        metadata: Optional[Dict[str, Any]] = None,
        options: Optional[IngestionOptions] = None
    ) -> IngestionResult:
        return self.container.ingestion.ingest_text(text, metadata=metadata, options=options)

    def ingest_source(self, source: str, options: Optional[IngestionOptions] = None) -> IngestionResult:
        options = options or IngestionOptions()
        if options.loader_kind == LoaderKind.FILE_SYSTEM and source.lower().startswith(("http://", "https://")):
            options = replace(options, loader_kind=LoaderKind.URL)
        return self.container.ingestion.ingest_source(source, options)

    def query(self, question: str) -> str:
        return self.container.rag_service.query(question)

    def query_with_sources(self, question: str) -> RagResponse:
        return self.container.rag_service.query_with_sources(question)

    def list_strategies(self, category: Union[StrategyCategory, str]) -> Dict[str, str]:
        """
        Raises:
            UnsupportedStrategyKind: If the category is unknown
        """
        return self.container.list_strategies(category)

    @staticmethod
    def _is_source(value: str, options: Optional[IngestionOptions]) -> bool:
        if options is not None and str(getattr(options.loader_kind, "value", options.loader_kind)).upper() != LoaderKind.FILE_SYSTEM.value:
            return True
        if value.lower().startswith(("http://", "https://")):
            return True
        if "\n" in value or len(value) > 1024:
            return False
        try:
            return Path(value).exists()
        except OSError:
            return False
