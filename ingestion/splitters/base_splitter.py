"""
Base splitter module.
Splitters cut a Document into Segments bounded by a maximum size, with a
bounded overlap between consecutive segments.
"""
from abc import abstractmethod
from enum import Enum
from typing import Iterable, List, Optional, Sequence
import logging

from core.registry import BaseStrategy
from domain.models import Document, Segment, SplitterConfig

logger = logging.getLogger(__name__)


class SplitterKind(str, Enum):
    BY_PARAGRAPH = "BY_PARAGRAPH"
    BY_LINE = "BY_LINE"
    BY_SENTENCE = "BY_SENTENCE"
    BY_WORD = "BY_WORD"
    BY_CHARACTER = "BY_CHARACTER"
    BY_REGEX = "BY_REGEX"
    RECURSIVE = "RECURSIVE"


class BaseSplitter(BaseStrategy):
    """Abstract base class for splitters"""

    kind: SplitterKind
    label = "Splitter"

    def __init__(self, max_segment_size: int = 300, max_overlap_size: int = 50):
        self.config = SplitterConfig(
            max_segment_size=max_segment_size,
            max_overlap_size=max_overlap_size
        )
        self.config.validate()

    @property
    def max_segment_size(self) -> int:
        return self.config.max_segment_size

    @property
    def max_overlap_size(self) -> int:
        return self.config.max_overlap_size

    @property
    def description(self) -> str:
        return (
            f"{self.label} (max_segment_size={self.max_segment_size}, "
            f"max_overlap_size={self.max_overlap_size})"
        )

    @abstractmethod
    def split_text(self, text: str) -> List[str]:
        """Split raw text into segment texts, in source order"""
        pass

    def split(self, document: Document) -> List[Segment]:
        """Split one document; every segment inherits the document metadata"""
        texts = self.split_text(document.text)
        return [Segment.from_document(document, text, index) for index, text in enumerate(texts)]

    def split_all(self, documents: Iterable[Document]) -> List[Segment]:
        segments: List[Segment] = []
        for document in documents:
            segments.extend(self.split(document))
        logger.debug(f"{self.__class__.__name__} produced {len(segments)} segments")
        return segments


class BoundarySplitter(BaseSplitter):
    """
    Greedy packing of boundary units (paragraphs, lines, sentences, words).

    Units are joined with ``joiner`` until the next one would exceed the
    maximum size. A new segment starts with the trailing units of the
    previous one whose joined length fits in the overlap. Units larger than
    the maximum are handed to ``sub_splitter``; without one they are emitted
    whole.
    """

    joiner = " "

    def __init__(
        self,
        max_segment_size: int = 300,
        max_overlap_size: int = 50,
        sub_splitter: Optional[BaseSplitter] = None
    ):
        super().__init__(max_segment_size, max_overlap_size)
        self.sub_splitter = sub_splitter

    @abstractmethod
    def split_units(self, text: str) -> List[str]:
        pass

    def split_text(self, text: str) -> List[str]:
        units = [unit.strip() for unit in self.split_units(text)]
        return self._merge([unit for unit in units if unit])

    def _joined_length(self, units: Sequence[str]) -> int:
        if not units:
            return 0
        return sum(len(u) for u in units) + len(self.joiner) * (len(units) - 1)

    def _overlap_tail(self, units: Sequence[str], next_unit: str) -> List[str]:
        tail: List[str] = []
        length = 0
        for unit in reversed(units):
            added = len(unit) + (len(self.joiner) if tail else 0)
            if length + added > self.max_overlap_size:
                break
            if length + added + len(self.joiner) + len(next_unit) > self.max_segment_size:
                break
            tail.insert(0, unit)
            length += added
        return tail

    def _merge(self, units: Sequence[str]) -> List[str]:
        segments: List[str] = []
        current: List[str] = []

        for unit in units:
            if len(unit) > self.max_segment_size:
                if current:
                    segments.append(self.joiner.join(current))
                    current = []
                if self.sub_splitter is not None:
                    segments.extend(self.sub_splitter.split_text(unit))
                else:
                    segments.append(unit)
                continue

            if self._joined_length(current + [unit]) <= self.max_segment_size:
                current.append(unit)
                continue

            segments.append(self.joiner.join(current))
            current = self._overlap_tail(current, unit) + [unit]

        if current:
            segments.append(self.joiner.join(current))
        return segments
