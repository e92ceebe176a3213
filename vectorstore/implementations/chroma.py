"""
ChromaDB implementation of vector store.
Provides persistent storage for segments using ChromaDB.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

try:
    import chromadb
    CHROMADB_AVAILABLE = True
except ImportError:
    CHROMADB_AVAILABLE = False
    chromadb = None  # type: ignore

from vectorstore.base import BaseVectorStore, VectorStoreException, new_segment_id
from domain.models import RetrievalMatch, Segment

logger = logging.getLogger(__name__)

_SCALARS = (str, int, float, bool)


def _chroma_metadata(metadata: Dict[str, Any]) -> Dict[str, Any]:
    """Chroma only stores scalar metadata values"""
    return {
        key: value if isinstance(value, _SCALARS) else str(value)
        for key, value in metadata.items()
        if value is not None
    }


class ChromaVectorStore(BaseVectorStore):
    """
    Vector store backed by a ChromaDB collection using cosine distance.
    Without a persist directory the collection lives in memory.
    """

    def __init__(
        self,
        dimension: int,
        collection_name: str = "rag_segments",
        persist_directory: Optional[str] = None,
        **kwargs
    ):
        if not CHROMADB_AVAILABLE:
            raise VectorStoreException(
                "ChromaDB is not installed. Install with: pip install chromadb"
            )

        super().__init__(dimension)
        self.collection_name = collection_name
        self.persist_directory = persist_directory

        try:
            if persist_directory:
                self.client = chromadb.PersistentClient(path=persist_directory)
            else:
                self.client = chromadb.EphemeralClient()
            self.collection = self.client.get_or_create_collection(
                name=collection_name,
                metadata={"hnsw:space": "cosine"}
            )
        except Exception as e:
            error_msg = f"Failed to initialize ChromaDB: {str(e)}"
            logger.error(error_msg)
            raise VectorStoreException(error_msg) from e

        logger.info(
            f"ChromaVectorStore initialized: collection='{collection_name}', "
            f"persist_dir='{persist_directory}'"
        )

    def add_all(self, segments: Sequence[Segment], embeddings: Sequence[List[float]]) -> List[str]:
        self._check_batch(segments, embeddings)
        if not segments:
            return []

        ids = [new_segment_id() for _ in segments]
        try:
            self.collection.add(
                ids=ids,
                embeddings=[list(e) for e in embeddings],
                documents=[s.text for s in segments],
                metadatas=[_chroma_metadata(s.metadata) for s in segments]
            )
        except Exception as e:
            error_msg = f"Error adding segments to ChromaDB: {str(e)}"
            logger.error(error_msg)
            raise VectorStoreException(error_msg) from e

        logger.info(f"Added {len(ids)} segments to ChromaDB")
        return ids

    def search(
        self,
        query_embedding: List[float],
        max_results: int = 5,
        min_score: float = 0.0
    ) -> List[RetrievalMatch]:
        self.validate_embedding(query_embedding)
        stored = self.count()
        if stored == 0:
            return []

        try:
            results = self.collection.query(
                query_embeddings=[query_embedding],
                n_results=min(max_results, stored),
                include=["documents", "metadatas", "distances"]
            )
        except Exception as e:
            error_msg = f"Error searching ChromaDB: {str(e)}"
            logger.error(error_msg)
            raise VectorStoreException(error_msg) from e

        documents = (results.get("documents") or [[]])[0]
        metadatas = (results.get("metadatas") or [[]])[0]
        distances = (results.get("distances") or [[]])[0]

        matches = []
        for text, metadata, distance in zip(documents, metadatas, distances):
            # cosine distance is 1 - cos, so relevance (cos + 1) / 2 is 1 - d / 2
            score = min(1.0, max(0.0, 1.0 - distance / 2.0))
            if score >= min_score:
                matches.append(RetrievalMatch(
                    segment=Segment(text=text or "", metadata=dict(metadata or {})),
                    score=score
                ))

        matches.sort(key=lambda m: m.score, reverse=True)
        return matches[:max_results]

    def delete(self, segment_id: str) -> bool:
        existing = self.collection.get(ids=[segment_id])
        if not existing.get("ids"):
            return False
        self.collection.delete(ids=[segment_id])
        return True

    def count(self) -> int:
        return self.collection.count()

    def clear(self) -> None:
        try:
            self.client.delete_collection(self.collection_name)
            self.collection = self.client.get_or_create_collection(
                name=self.collection_name,
                metadata={"hnsw:space": "cosine"}
            )
        except Exception as e:
            raise VectorStoreException(f"Error clearing ChromaDB: {str(e)}") from e
        logger.info(f"ChromaDB collection '{self.collection_name}' cleared")
