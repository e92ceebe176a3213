"""
Document transformer registry and pipeline builders.
"""
from typing import Optional, Sequence, Union
import logging

from core.registry import StrategyRegistry
from chat.llm_clients.base import BaseLLMClient
from ingestion.transformers.base_transformer import (
    BaseDocumentTransformer,
    DocumentTransformerKind,
)
from ingestion.transformers.cleaning import CleaningTransformer
from ingestion.transformers.composite import CompositeDocumentTransformer
from ingestion.transformers.filtering import FilteringTransformer
from ingestion.transformers.html_to_text import HtmlToTextTransformer
from ingestion.transformers.metadata_enhancer import MetadataEnhancerTransformer
from ingestion.transformers.summarizer import SummarizerTransformer

logger = logging.getLogger(__name__)

DocumentTransformerRegistry = StrategyRegistry[DocumentTransformerKind, BaseDocumentTransformer]

DEFAULT_PIPELINE = (
    DocumentTransformerKind.CLEANING,
    DocumentTransformerKind.METADATA_ENHANCER,
    DocumentTransformerKind.FILTERING,
)


def create_composite(
    registry: DocumentTransformerRegistry,
    kinds: Sequence[Union[DocumentTransformerKind, str]]
) -> CompositeDocumentTransformer:
    """
    Build a composite from registered kinds, in the given order.

    Raises:
        UnsupportedStrategyKind: If any kind is not registered
    """
    return CompositeDocumentTransformer([registry.resolve(kind) for kind in kinds])


def create_default_pipeline(registry: DocumentTransformerRegistry) -> CompositeDocumentTransformer:
    """Cleaning -> MetadataEnhancer -> Filtering"""
    return create_composite(registry, DEFAULT_PIPELINE)


def build_document_transformer_registry(
    min_length: int = 50,
    max_length: int = 50000,
    llm_client: Optional[BaseLLMClient] = None
) -> DocumentTransformerRegistry:
    """
    Create the document transformer registry.

    SUMMARIZER is only registered when a generative model is available.
    COMPOSITE resolves to the default pipeline.
    """
    transformers = [
        CleaningTransformer(),
        FilteringTransformer(min_length=min_length, max_length=max_length),
        MetadataEnhancerTransformer(),
        HtmlToTextTransformer(),
    ]
    if llm_client is not None:
        transformers.append(SummarizerTransformer(llm_client))

    base = StrategyRegistry(DocumentTransformerKind, transformers, category="DocumentTransformer")
    default_pipeline = create_default_pipeline(base)
    return StrategyRegistry(
        DocumentTransformerKind,
        transformers + [default_pipeline],
        category="DocumentTransformer"
    )
