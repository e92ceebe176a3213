"""
Base module for embeddings generation.
Defines the abstract interface for embedding providers.
"""
from abc import ABC, abstractmethod
from typing import List, Optional
from dataclasses import dataclass
import hashlib
import logging
import random

logger = logging.getLogger(__name__)


class EmbeddingException(Exception):
    """Exception raised for embedding generation errors"""
    pass


@dataclass
class EmbeddingConfig:
    """Configuration for embedding generation"""
    model_name: str = "hash-embeddings"
    dimension: int = 384  # Dimensión del vector de embedding
    batch_size: int = 32  # Tamaño de lote para procesamiento batch
    normalize: bool = True  # Normalizar vectores

    def validate(self):
        """Valida la configuración"""
        if self.dimension <= 0:
            raise ValueError("dimension must be greater than 0")
        if self.batch_size <= 0:
            raise ValueError("batch_size must be greater than 0")


def l2_normalize(vector: List[float]) -> List[float]:
    magnitude = sum(x ** 2 for x in vector) ** 0.5
    if magnitude == 0:
        return vector
    return [x / magnitude for x in vector]


class BaseEmbedding(ABC):
    """
    Clase base abstracta para proveedores de embeddings.
    Define la interfaz que deben implementar todos los proveedores.
    """

    def __init__(self, config: Optional[EmbeddingConfig] = None):
        """
        Inicializa el proveedor de embeddings.

        Args:
            config: Configuración del embedding. Si es None, usa valores por defecto.
        """
        self.config = config or EmbeddingConfig()
        self.config.validate()
        self._validate_provider()
        logger.info(
            f"{self.__class__.__name__} initialized with model={self.config.model_name}, "
            f"dimension={self.config.dimension}"
        )

    @abstractmethod
    def _validate_provider(self):
        """
        Valida que el proveedor esté correctamente configurado.

        Raises:
            EmbeddingException: Si la validación falla
        """
        pass

    @abstractmethod
    def embed_text(self, text: str) -> List[float]:
        """
        Genera el embedding para un texto (segmento a almacenar).

        Raises:
            EmbeddingException: Si hay error en la generación
        """
        pass

    def embed_query(self, query: str) -> List[float]:
        """
        Genera el embedding de una consulta.
        Los modelos asimétricos sobrescriben este método.
        """
        return self.embed_text(query)

    def embed_texts(self, texts: List[str]) -> List[List[float]]:
        """
        Genera embeddings para múltiples textos, procesando en batches.

        Raises:
            EmbeddingException: Si hay error en la generación
        """
        if not texts:
            logger.warning("Empty text list provided")
            return []

        embeddings = []
        batch_size = self.config.batch_size

        try:
            for i in range(0, len(texts), batch_size):
                batch = texts[i:i + batch_size]
                embeddings.extend(self._embed_batch(batch))
                logger.debug(
                    f"Processed batch {i // batch_size + 1}, "
                    f"texts {i + 1}-{min(i + batch_size, len(texts))}"
                )
        except EmbeddingException:
            raise
        except Exception as e:
            error_msg = f"Error generating batch embeddings: {str(e)}"
            logger.error(error_msg)
            raise EmbeddingException(error_msg) from e

        logger.info(f"Generated {len(embeddings)} embeddings")
        return embeddings

    def _embed_batch(self, batch: List[str]) -> List[List[float]]:
        return [self.embed_text(text) for text in batch]

    def get_dimension(self) -> int:
        return self.config.dimension

    def get_model_name(self) -> str:
        return self.config.model_name

    def validate_embedding(self, embedding: List[float]) -> bool:
        """Comprueba que el vector tenga la dimensión configurada"""
        if not embedding:
            return False
        if len(embedding) != self.config.dimension:
            logger.warning(
                f"Invalid embedding dimension: expected {self.config.dimension}, "
                f"got {len(embedding)}"
            )
            return False
        return True

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"model={self.config.model_name}, "
            f"dimension={self.config.dimension})"
        )


class HashEmbedding(BaseEmbedding):
    """
    Embedding determinista sin dependencias, para desarrollo y tests.

    El vector se deriva de un SHA-256 del texto, por lo que es estable entre
    procesos. No captura semántica.
    """

    def _validate_provider(self):
        logger.debug("HashEmbedding provider validated")

    def embed_text(self, text: str) -> List[float]:
        if not text or not text.strip():
            raise EmbeddingException("Cannot embed empty text")

        seed = int.from_bytes(hashlib.sha256(text.encode("utf-8")).digest()[:8], "big")
        rng = random.Random(seed)
        embedding = [rng.random() for _ in range(self.config.dimension)]

        if self.config.normalize:
            embedding = l2_normalize(embedding)
        return embedding
