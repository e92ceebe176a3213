"""
Composite segment transformer.
"""
from typing import List, Optional, Sequence
import logging

from core.chain import run_chain
from ingestion.segment_transformers.base import BaseSegmentTransformer, SegmentTransformerKind
from domain.models import Segment

logger = logging.getLogger(__name__)


class CompositeSegmentTransformer(BaseSegmentTransformer):
    """Ordered chain of segment transformers; a discard stops the chain"""

    kind = SegmentTransformerKind.COMPOSITE

    def __init__(self, transformers: Sequence[BaseSegmentTransformer], enabled: bool = True):
        super().__init__(enabled=enabled)
        self.transformers: List[BaseSegmentTransformer] = list(transformers)

    @property
    def description(self) -> str:
        names = " -> ".join(t.kind.value for t in self.transformers) or "empty"
        return f"Composite segment transformer: {names}"

    def transform(self, segment: Segment) -> Optional[Segment]:
        outcome = run_chain(self.transformers, segment)
        if not outcome.kept:
            logger.debug(f"Segment discarded by {outcome.discarded_by}")
        return outcome.value
