"""
Composite document transformer: an ordered, nestable chain.
"""
from typing import List, Optional, Sequence
import logging

from core.chain import run_chain
from ingestion.transformers.base_transformer import (
    BaseDocumentTransformer,
    DocumentTransformerKind,
)
from domain.models import Document

logger = logging.getLogger(__name__)


class CompositeDocumentTransformer(BaseDocumentTransformer):
    """
    Applies its transformers in order.

    The first stage that returns None discards the document and later stages
    never see it. Disabled stages are skipped.
    """

    kind = DocumentTransformerKind.COMPOSITE

    def __init__(self, transformers: Sequence[BaseDocumentTransformer], enabled: bool = True):
        super().__init__(enabled=enabled)
        self.transformers: List[BaseDocumentTransformer] = list(transformers)

    @property
    def description(self) -> str:
        names = " -> ".join(t.kind.value for t in self.transformers) or "empty"
        return f"Composite transformer: {names}"

    def transform(self, document: Document) -> Optional[Document]:
        outcome = run_chain(self.transformers, document)
        if not outcome.kept:
            logger.debug(f"Document discarded by {outcome.discarded_by}")
        return outcome.value
