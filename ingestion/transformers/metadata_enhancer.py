"""
Document metadata enhancer.
"""
from datetime import datetime
from typing import Optional

from ingestion.transformers.base_transformer import (
    BaseDocumentTransformer,
    DocumentTransformerKind,
)
from domain.models import Document

PROCESSED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


def length_category(length: int) -> str:
    if length < 500:
        return "short"
    if length < 2000:
        return "medium"
    if length < 10000:
        return "long"
    return "very_long"


def detect_language(text: str) -> str:
    """'zh' when any CJK unified ideograph is present, otherwise 'en'"""
    if any("\u4e00" <= char <= "\u9fff" for char in text):
        return "zh"
    return "en"


def count_words(text: str) -> int:
    return len(text.split())


class MetadataEnhancerTransformer(BaseDocumentTransformer):
    """Adds counts, a timestamp, a length bucket and a language guess"""

    kind = DocumentTransformerKind.METADATA_ENHANCER

    @property
    def description(self) -> str:
        return "Adds word_count, char_count, processed_at, length_category and language"

    def transform(self, document: Document) -> Optional[Document]:
        text = document.text
        return document.with_metadata(
            word_count=count_words(text),
            char_count=len(text),
            processed_at=datetime.now().strftime(PROCESSED_AT_FORMAT),
            length_category=length_category(len(text)),
            language=detect_language(text)
        )
