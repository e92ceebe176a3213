"""
Retrieval module: retrievers, query transformation, routing and augmentation.
"""
from retrieval.augmentor import (
    CONTEXT_SEPARATOR,
    AugmentedContext,
    RetrievalAugmentor,
    RetrievalAugmentorKind,
    merge_matches,
)
from retrieval.augmentor_factory import build_augmentor_registry

__all__ = [
    "CONTEXT_SEPARATOR",
    "AugmentedContext",
    "RetrievalAugmentor",
    "RetrievalAugmentorKind",
    "merge_matches",
    "build_augmentor_registry",
]
