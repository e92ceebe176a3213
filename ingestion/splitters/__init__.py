"""
Splitters subpackage: cuts Documents into Segments.
"""
from ingestion.splitters.base_splitter import BaseSplitter, BoundarySplitter, SplitterKind
from ingestion.splitters.boundary import (
    CharacterSplitter,
    LineSplitter,
    ParagraphSplitter,
    RegexSplitter,
    SentenceSplitter,
    WordSplitter,
)
from ingestion.splitters.recursive import DEFAULT_LEVELS, RecursiveSplitter, build_level_chain
from ingestion.splitters.splitter_factory import DEFAULT_SPLITTER, build_splitter_registry

__all__ = [
    "BaseSplitter",
    "BoundarySplitter",
    "SplitterKind",
    "CharacterSplitter",
    "LineSplitter",
    "ParagraphSplitter",
    "RegexSplitter",
    "SentenceSplitter",
    "WordSplitter",
    "DEFAULT_LEVELS",
    "RecursiveSplitter",
    "build_level_chain",
    "DEFAULT_SPLITTER",
    "build_splitter_registry",
]
