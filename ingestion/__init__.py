"""
Ingestion module.

Turns raw sources into stored, searchable segments:

  ingestion.loaders               file system, URL and resource loaders
  ingestion.parsers               text, Markdown and PDF parsers
  ingestion.transformers          document cleaning, filtering and enrichment
  ingestion.splitters             paragraph, sentence, ... and recursive splitting
  ingestion.segment_transformers  segment enrichment and filtering
  ingestion.pipeline              per-call orchestration of all stages
"""
from ingestion.pipeline import IngestionOptions, IngestionOrchestrator, IngestionResult

__all__ = [
    "IngestionOptions",
    "IngestionOrchestrator",
    "IngestionResult",
]
