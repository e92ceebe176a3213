"""
Embeddings module for text vectorization.
"""
from embeddings.base import (
    BaseEmbedding,
    EmbeddingConfig,
    EmbeddingException,
    HashEmbedding,
)
from embeddings.factory import (
    create_embedder,
    get_provider_class,
    list_providers,
    register_provider,
)

# Import providers to auto-register them
import embeddings.providers  # noqa: F401

__all__ = [
    "BaseEmbedding",
    "EmbeddingConfig",
    "EmbeddingException",
    "HashEmbedding",
    "create_embedder",
    "get_provider_class",
    "list_providers",
    "register_provider",
]
