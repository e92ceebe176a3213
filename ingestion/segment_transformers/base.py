"""
Base segment transformer module.
"""
from abc import abstractmethod
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from core.chain import transform_each
from core.registry import BaseStrategy
from domain.models import Segment


class SegmentTransformerKind(str, Enum):
    TITLE_ENHANCER = "TITLE_ENHANCER"
    SUMMARY_ENHANCER = "SUMMARY_ENHANCER"
    METADATA_ENHANCER = "METADATA_ENHANCER"
    CLEANING = "CLEANING"
    FILTERING = "FILTERING"
    COMPOSITE = "COMPOSITE"


def first_non_blank(metadata: Mapping[str, Any], keys: Sequence[str]) -> Optional[str]:
    """Value of the first key holding a non-blank string, stripped"""
    for key in keys:
        value = metadata.get(key)
        if value is not None and str(value).strip():
            return str(value).strip()
    return None


class BaseSegmentTransformer(BaseStrategy):
    """Maps a Segment to a new Segment, or to None to discard it"""

    kind: SegmentTransformerKind

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def is_enabled(self) -> bool:
        return self.enabled

    @abstractmethod
    def transform(self, segment: Segment) -> Optional[Segment]:
        pass

    def transform_all(self, segments: Iterable[Segment]) -> List[Segment]:
        kept, _ = transform_each(self.transform, segments, self.__class__.__name__)
        return kept
