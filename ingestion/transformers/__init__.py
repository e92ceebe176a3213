"""
Document transformers: cleaning, filtering and enrichment of whole documents.
"""
from ingestion.transformers.base_transformer import (
    BaseDocumentTransformer,
    DocumentTransformerKind,
)
from ingestion.transformers.cleaning import CleaningTransformer, clean_text
from ingestion.transformers.composite import CompositeDocumentTransformer
from ingestion.transformers.filtering import FilteringTransformer
from ingestion.transformers.html_to_text import HtmlToTextTransformer
from ingestion.transformers.metadata_enhancer import MetadataEnhancerTransformer
from ingestion.transformers.summarizer import SummarizerTransformer
from ingestion.transformers.transformer_factory import (
    DEFAULT_PIPELINE,
    build_document_transformer_registry,
    create_composite,
    create_default_pipeline,
)

__all__ = [
    "BaseDocumentTransformer",
    "DocumentTransformerKind",
    "CleaningTransformer",
    "clean_text",
    "CompositeDocumentTransformer",
    "FilteringTransformer",
    "HtmlToTextTransformer",
    "MetadataEnhancerTransformer",
    "SummarizerTransformer",
    "DEFAULT_PIPELINE",
    "build_document_transformer_registry",
    "create_composite",
    "create_default_pipeline",
]
