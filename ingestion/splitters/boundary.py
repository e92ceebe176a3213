"""
Splitters that cut on natural text boundaries.
"""
from typing import List, Optional
import re

from ingestion.splitters.base_splitter import BaseSplitter, BoundarySplitter, SplitterKind

_PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n")
_LINE_BREAK = re.compile(r"\r?\n")
_SENTENCE_END = re.compile(r"(?<=[.!?])\s+|(?<=[。！？；])")


class CharacterSplitter(BaseSplitter):
    """Fixed windows of max_segment_size characters, stepping size - overlap"""

    kind = SplitterKind.BY_CHARACTER
    label = "Character splitter"

    def split_text(self, text: str) -> List[str]:
        text = text.strip()
        if not text:
            return []
        if len(text) <= self.max_segment_size:
            return [text]

        step = self.max_segment_size - self.max_overlap_size
        windows = []
        start = 0
        while True:
            windows.append(text[start:start + self.max_segment_size])
            if start + self.max_segment_size >= len(text):
                break
            start += step
        return [window for window in windows if window.strip()]


class WordSplitter(BoundarySplitter):
    """Packs whitespace-separated words; a word longer than the limit is kept whole"""

    kind = SplitterKind.BY_WORD
    label = "Word splitter"
    joiner = " "

    def split_units(self, text: str) -> List[str]:
        return text.split()


class SentenceSplitter(BoundarySplitter):
    kind = SplitterKind.BY_SENTENCE
    label = "Sentence splitter"
    joiner = " "

    def __init__(
        self,
        max_segment_size: int = 300,
        max_overlap_size: int = 30,
        sub_splitter: Optional[BaseSplitter] = None
    ):
        if sub_splitter is None:
            sub_splitter = WordSplitter(max_segment_size, max_overlap_size)
        super().__init__(max_segment_size, max_overlap_size, sub_splitter)

    def split_units(self, text: str) -> List[str]:
        return _SENTENCE_END.split(text)


class ParagraphSplitter(BoundarySplitter):
    """Packs blank-line separated paragraphs; long paragraphs go to sentences"""

    kind = SplitterKind.BY_PARAGRAPH
    label = "Paragraph splitter"
    joiner = "\n\n"

    def __init__(
        self,
        max_segment_size: int = 500,
        max_overlap_size: int = 50,
        sub_splitter: Optional[BaseSplitter] = None
    ):
        if sub_splitter is None:
            sub_splitter = SentenceSplitter(max_segment_size, max_overlap_size)
        super().__init__(max_segment_size, max_overlap_size, sub_splitter)

    def split_units(self, text: str) -> List[str]:
        return _PARAGRAPH_BREAK.split(text)


class LineSplitter(BoundarySplitter):
    kind = SplitterKind.BY_LINE
    label = "Line splitter"
    joiner = "\n"

    def __init__(
        self,
        max_segment_size: int = 300,
        max_overlap_size: int = 30,
        sub_splitter: Optional[BaseSplitter] = None
    ):
        if sub_splitter is None:
            sub_splitter = SentenceSplitter(max_segment_size, max_overlap_size)
        super().__init__(max_segment_size, max_overlap_size, sub_splitter)

    def split_units(self, text: str) -> List[str]:
        return _LINE_BREAK.split(text)


class RegexSplitter(BoundarySplitter):
    """
    Splits on a user supplied pattern (without capturing groups) and joins
    packed units with ``joiner``.
    """

    kind = SplitterKind.BY_REGEX
    label = "Regex splitter"

    def __init__(
        self,
        pattern: str = r"\n\s*\n",
        joiner: str = "\n\n",
        max_segment_size: int = 300,
        max_overlap_size: int = 30,
        sub_splitter: Optional[BaseSplitter] = None
    ):
        if sub_splitter is None:
            sub_splitter = WordSplitter(max_segment_size, max_overlap_size)
        super().__init__(max_segment_size, max_overlap_size, sub_splitter)
        self.pattern = re.compile(pattern)
        self.joiner = joiner

    @property
    def description(self) -> str:
        return f"{super().description} pattern={self.pattern.pattern!r}"

    def split_units(self, text: str) -> List[str]:
        return self.pattern.split(text)
