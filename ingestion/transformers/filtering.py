"""
Length-based document filter.
"""
from typing import Optional
import logging

from ingestion.transformers.base_transformer import (
    BaseDocumentTransformer,
    DocumentTransformerKind,
)
from domain.models import Document

logger = logging.getLogger(__name__)


class FilteringTransformer(BaseDocumentTransformer):
    """Discards blank documents and documents outside the length bounds"""

    kind = DocumentTransformerKind.FILTERING

    def __init__(self, min_length: int = 50, max_length: int = 50000, enabled: bool = True):
        super().__init__(enabled=enabled)
        if min_length < 0 or max_length < min_length:
            raise ValueError("expected 0 <= min_length <= max_length")
        self.min_length = min_length
        self.max_length = max_length

    @property
    def description(self) -> str:
        return (
            f"Discards documents shorter than {self.min_length} "
            f"or longer than {self.max_length} characters"
        )

    def transform(self, document: Document) -> Optional[Document]:
        length = len(document.text)

        if not document.text.strip():
            logger.debug("Discarding blank document")
            return None
        if length < self.min_length:
            logger.debug(f"Discarding document: {length} < min_length {self.min_length}")
            return None
        if length > self.max_length:
            logger.debug(f"Discarding document: {length} > max_length {self.max_length}")
            return None

        return document
