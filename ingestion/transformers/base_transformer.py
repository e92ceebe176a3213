"""
Base document transformer module.
"""
from abc import abstractmethod
from enum import Enum
from typing import Iterable, List, Optional

from core.chain import transform_each
from core.registry import BaseStrategy
from domain.models import Document


class DocumentTransformerKind(str, Enum):
    CLEANING = "CLEANING"
    FILTERING = "FILTERING"
    METADATA_ENHANCER = "METADATA_ENHANCER"
    HTML_TO_TEXT = "HTML_TO_TEXT"
    SUMMARIZER = "SUMMARIZER"
    COMPOSITE = "COMPOSITE"


class BaseDocumentTransformer(BaseStrategy):
    """
    A document transformer maps a Document to a new Document, or to None
    when the document must be discarded. Inputs are never mutated.
    """

    kind: DocumentTransformerKind

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def is_enabled(self) -> bool:
        return self.enabled

    @abstractmethod
    def transform(self, document: Document) -> Optional[Document]:
        pass

    def transform_all(self, documents: Iterable[Document]) -> List[Document]:
        kept, _ = transform_each(self.transform, documents, self.__class__.__name__)
        return kept
