"""
Factory Pattern for Vector Store providers.
Allows registration and creation of different vector store implementations.
"""
from typing import Dict, Type, List
import logging

from vectorstore.base import BaseVectorStore

logger = logging.getLogger(__name__)

# Global registry of vector store providers
_VECTOR_STORE_REGISTRY: Dict[str, Type[BaseVectorStore]] = {}


def register_vector_store(name: str):
    """
    Decorator to register a vector store provider.

    Usage:
        @register_vector_store("chroma")
        class ChromaVectorStore(BaseVectorStore):
            ...
    """
    def decorator(cls: Type[BaseVectorStore]) -> Type[BaseVectorStore]:
        if name in _VECTOR_STORE_REGISTRY:
            logger.warning(
                f"Vector store provider '{name}' is already registered. "
                f"Overwriting with {cls.__name__}"
            )
        _VECTOR_STORE_REGISTRY[name] = cls
        logger.debug(f"Registered vector store provider: {name} -> {cls.__name__}")
        return cls

    return decorator


def create_vector_store(provider: str, dimension: int, **kwargs) -> BaseVectorStore:
    """
    Factory function to create a vector store by provider name.

    Usage:
        vector_store = create_vector_store(provider="memory", dimension=384)

    Raises:
        ValueError: If provider is not registered
    """
    if provider not in _VECTOR_STORE_REGISTRY:
        raise ValueError(
            f"Vector store provider '{provider}' not found. "
            f"Available providers: {list_vector_stores()}"
        )

    provider_class = _VECTOR_STORE_REGISTRY[provider]
    instance = provider_class(dimension=dimension, **kwargs)
    logger.info(f"Created vector store: {provider} ({provider_class.__name__})")
    return instance


def list_vector_stores() -> List[str]:
    return sorted(_VECTOR_STORE_REGISTRY.keys())


def is_provider_available(provider: str) -> bool:
    return provider in _VECTOR_STORE_REGISTRY
