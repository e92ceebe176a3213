"""
Factory for creating embedding providers dynamically.
Providers register themselves by name and are instantiated from configuration.
"""
from typing import Dict, List, Optional, Type

from embeddings.base import BaseEmbedding, EmbeddingConfig, HashEmbedding

# Registry of embedding providers
_EMBEDDING_PROVIDERS: Dict[str, Type[BaseEmbedding]] = {}


def register_provider(name: str):
    """
    Decorator to register an embedding provider.

    Usage:
        @register_provider("my-provider")
        class MyEmbedding(BaseEmbedding):
            ...
    """
    def decorator(cls: Type[BaseEmbedding]) -> Type[BaseEmbedding]:
        _EMBEDDING_PROVIDERS[name] = cls
        return cls
    return decorator


register_provider("hash")(HashEmbedding)


def get_provider_class(provider: str) -> Type[BaseEmbedding]:
    """
    Raises:
        ValueError: If provider not found
    """
    if provider not in _EMBEDDING_PROVIDERS:
        available = ', '.join(_EMBEDDING_PROVIDERS.keys())
        raise ValueError(
            f"Unknown embedding provider: '{provider}'. "
            f"Available providers: {available}"
        )
    return _EMBEDDING_PROVIDERS[provider]


def create_embedder(provider: str, config: Optional[EmbeddingConfig] = None) -> BaseEmbedding:
    """
    Create an embedder based on the provider name.

    Raises:
        ValueError: If the provider is not registered

    Example:
        config = EmbeddingConfig(model_name="hash-embeddings", dimension=384)
        embedder = create_embedder("hash", config)
    """
    return get_provider_class(provider)(config or EmbeddingConfig())


def list_providers() -> List[str]:
    return list(_EMBEDDING_PROVIDERS.keys())
