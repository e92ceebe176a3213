"""
Base module for vector store implementations.
Defines the abstract interface for storing segments and searching them by
embedding similarity.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple
import logging
import math
import threading
import uuid

from domain.models import RetrievalMatch, Segment

logger = logging.getLogger(__name__)


class VectorStoreException(Exception):
    """Exception raised for vector store errors"""
    pass


def cosine_similarity(vec1: List[float], vec2: List[float]) -> float:
    """
    Calcula la similitud coseno entre dos vectores.

    Returns:
        Similitud coseno entre -1 y 1

    Raises:
        ValueError: Si los vectores tienen diferentes dimensiones o están vacíos
    """
    if len(vec1) != len(vec2):
        raise ValueError(
            f"Vector dimension mismatch: {len(vec1)} vs {len(vec2)}"
        )
    if not vec1:
        raise ValueError("Vectors cannot be empty")

    dot_product = sum(a * b for a, b in zip(vec1, vec2))
    magnitude1 = math.sqrt(sum(a * a for a in vec1))
    magnitude2 = math.sqrt(sum(b * b for b in vec2))

    if magnitude1 == 0 or magnitude2 == 0:
        return 0.0
    return dot_product / (magnitude1 * magnitude2)


def relevance_from_cosine(similarity: float) -> float:
    """Maps cosine similarity [-1, 1] onto a relevance score [0, 1]"""
    return min(1.0, max(0.0, (similarity + 1.0) / 2.0))


def new_segment_id() -> str:
    return f"seg_{uuid.uuid4().hex}"


class BaseVectorStore(ABC):
    """
    Clase base abstracta para almacenes de vectores.
    Los scores devueltos por ``search`` son de relevancia, entre 0 y 1.
    """

    def __init__(self, dimension: int):
        if dimension <= 0:
            raise ValueError("dimension must be greater than 0")
        self.dimension = dimension
        logger.info(f"{self.__class__.__name__} initialized with dimension={dimension}")

    @abstractmethod
    def add_all(self, segments: Sequence[Segment], embeddings: Sequence[List[float]]) -> List[str]:
        """
        Store segments with their embeddings in one call.

        Returns:
            Ids assigned to the segments, in input order

        Raises:
            VectorStoreException: If storing fails
            ValueError: If lengths or dimensions do not match
        """
        pass

    def add(self, segment: Segment, embedding: List[float]) -> str:
        return self.add_all([segment], [embedding])[0]

    @abstractmethod
    def search(
        self,
        query_embedding: List[float],
        max_results: int = 5,
        min_score: float = 0.0
    ) -> List[RetrievalMatch]:
        """
        Return the most relevant segments, score descending, each with
        score >= min_score and at most max_results of them.
        """
        pass

    @abstractmethod
    def delete(self, segment_id: str) -> bool:
        pass

    @abstractmethod
    def count(self) -> int:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    def validate_embedding(self, embedding: List[float]) -> None:
        """
        Raises:
            ValueError: Si el embedding está vacío o tiene otra dimensión
        """
        if not embedding:
            raise ValueError("Embedding cannot be empty")
        if len(embedding) != self.dimension:
            raise ValueError(
                f"Embedding dimension mismatch: expected {self.dimension}, "
                f"got {len(embedding)}"
            )

    def _check_batch(self, segments: Sequence[Segment], embeddings: Sequence[List[float]]) -> None:
        if len(segments) != len(embeddings):
            raise ValueError(
                f"Got {len(segments)} segments but {len(embeddings)} embeddings"
            )
        for embedding in embeddings:
            self.validate_embedding(embedding)


class InMemoryVectorStore(BaseVectorStore):
    """
    Implementación en memoria del vector store.
    No persistente: los datos se pierden al terminar el proceso.
    """

    def __init__(self, dimension: int, **kwargs):
        super().__init__(dimension)
        self._entries: Dict[str, Tuple[Segment, List[float]]] = {}
        self._lock = threading.Lock()

    def add_all(self, segments: Sequence[Segment], embeddings: Sequence[List[float]]) -> List[str]:
        self._check_batch(segments, embeddings)
        ids = [new_segment_id() for _ in segments]
        with self._lock:
            for segment_id, segment, embedding in zip(ids, segments, embeddings):
                self._entries[segment_id] = (segment, list(embedding))
        logger.info(f"Added {len(ids)} segments to vector store")
        return ids

    def search(
        self,
        query_embedding: List[float],
        max_results: int = 5,
        min_score: float = 0.0
    ) -> List[RetrievalMatch]:
        self.validate_embedding(query_embedding)
        with self._lock:
            entries = list(self._entries.values())

        matches = []
        for segment, embedding in entries:
            score = relevance_from_cosine(cosine_similarity(query_embedding, embedding))
            if score >= min_score:
                matches.append(RetrievalMatch(segment=segment, score=score))

        matches.sort(key=lambda m: m.score, reverse=True)
        results = matches[:max_results]
        logger.debug(f"Search returned {len(results)} of {len(entries)} segments")
        return results

    def delete(self, segment_id: str) -> bool:
        with self._lock:
            return self._entries.pop(segment_id, None) is not None

    def get(self, segment_id: str) -> Optional[Segment]:
        with self._lock:
            entry = self._entries.get(segment_id)
        return entry[0] if entry else None

    def count(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.info("Vector store cleared")
