"""
Recursive splitter.

Tries the coarsest boundary first and only descends to a finer one for the
pieces that are still too large.
"""
from typing import Dict, List, Optional, Sequence, Type

from ingestion.splitters.base_splitter import BaseSplitter, BoundarySplitter, SplitterKind
from ingestion.splitters.boundary import (
    CharacterSplitter,
    LineSplitter,
    ParagraphSplitter,
    SentenceSplitter,
    WordSplitter,
)

DEFAULT_LEVELS = ("paragraph", "sentence", "word", "character")

LEVELS: Dict[str, Type[BaseSplitter]] = {
    "paragraph": ParagraphSplitter,
    "line": LineSplitter,
    "sentence": SentenceSplitter,
    "word": WordSplitter,
    "character": CharacterSplitter,
}


def build_level_chain(
    levels: Sequence[str],
    max_segment_size: int,
    max_overlap_size: int
) -> BaseSplitter:
    """
    Chain splitters so that each level hands oversized pieces to the next.

    Raises:
        ValueError: On an unknown level, an empty list, or 'character' not last
    """
    names = [level.strip().lower() for level in levels]
    if not names:
        raise ValueError("at least one recursive level is required")
    for name in names:
        if name not in LEVELS:
            raise ValueError(f"Unknown recursive level '{name}'. Available: {list(LEVELS)}")
    if "character" in names[:-1]:
        raise ValueError("'character' can only be the last recursive level")

    child: Optional[BaseSplitter] = None
    for name in reversed(names):
        splitter = LEVELS[name](max_segment_size, max_overlap_size)
        if isinstance(splitter, BoundarySplitter):
            # the explicit chain replaces each level's default fallback
            splitter.sub_splitter = child
        child = splitter
    return child


class RecursiveSplitter(BaseSplitter):
    kind = SplitterKind.RECURSIVE
    label = "Recursive splitter"

    def __init__(
        self,
        max_segment_size: int = 300,
        max_overlap_size: int = 50,
        levels: Sequence[str] = DEFAULT_LEVELS
    ):
        super().__init__(max_segment_size, max_overlap_size)
        self.levels = tuple(level.strip().lower() for level in levels)
        self._root = build_level_chain(self.levels, max_segment_size, max_overlap_size)

    @property
    def description(self) -> str:
        return f"{super().description} levels={' > '.join(self.levels)}"

    def split_text(self, text: str) -> List[str]:
        return self._root.split_text(text)
