"""
Splitter registry.
"""
from typing import Sequence

from core.registry import StrategyRegistry
from ingestion.splitters.base_splitter import BaseSplitter, SplitterKind
from ingestion.splitters.boundary import (
    CharacterSplitter,
    LineSplitter,
    ParagraphSplitter,
    RegexSplitter,
    SentenceSplitter,
    WordSplitter,
)
from ingestion.splitters.recursive import DEFAULT_LEVELS, RecursiveSplitter

DEFAULT_SPLITTER = SplitterKind.RECURSIVE

SplitterRegistry = StrategyRegistry[SplitterKind, BaseSplitter]


def build_splitter_registry(
    max_segment_size: int = 300,
    max_overlap_size: int = 50,
    regex: str = r"\n\s*\n",
    regex_joiner: str = "\n\n",
    recursive_levels: Sequence[str] = DEFAULT_LEVELS
) -> SplitterRegistry:
    """Create one splitter per kind, all sharing the same size limits"""
    size, overlap = max_segment_size, max_overlap_size
    return StrategyRegistry(
        SplitterKind,
        [
            RecursiveSplitter(size, overlap, levels=recursive_levels),
            ParagraphSplitter(size, overlap),
            LineSplitter(size, overlap),
            SentenceSplitter(size, overlap),
            WordSplitter(size, overlap),
            CharacterSplitter(size, overlap),
            RegexSplitter(regex, regex_joiner, size, overlap),
        ],
        category="DocumentSplitter"
    )
