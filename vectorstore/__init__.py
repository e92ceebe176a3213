"""
Vector store module for segment storage and similarity search.
"""
from vectorstore.factory import (
    create_vector_store,
    list_vector_stores,
    register_vector_store,
    is_provider_available
)
from vectorstore.base import (
    BaseVectorStore,
    InMemoryVectorStore,
    VectorStoreException,
    cosine_similarity,
    relevance_from_cosine
)
from vectorstore.implementations.chroma import ChromaVectorStore, CHROMADB_AVAILABLE

register_vector_store("memory")(InMemoryVectorStore)

if CHROMADB_AVAILABLE:
    # Register ChromaDB only if chromadb package is available
    register_vector_store("chroma")(ChromaVectorStore)

__all__ = [
    "create_vector_store",
    "list_vector_stores",
    "register_vector_store",
    "is_provider_available",
    "BaseVectorStore",
    "InMemoryVectorStore",
    "ChromaVectorStore",
    "VectorStoreException",
    "cosine_similarity",
    "relevance_from_cosine",
    "CHROMADB_AVAILABLE",
]
