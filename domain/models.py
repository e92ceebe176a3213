"""
Domain models for the RAG pipeline engine.
Defines the units that flow through ingestion and retrieval.
"""
from dataclasses import dataclass, field, replace
from typing import List, Dict, Any, Tuple


@dataclass(frozen=True)
class Document:
    """Unidad de texto cargada desde una fuente, con su metadata"""
    text: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def with_text(self, text: str) -> "Document":
        """Devuelve un documento nuevo con el texto reemplazado"""
        return replace(self, text=text, metadata=dict(self.metadata))

    def with_metadata(self, **updates: Any) -> "Document":
        """Devuelve un documento nuevo con la metadata extendida"""
        metadata = dict(self.metadata)
        metadata.update(updates)
        return replace(self, metadata=metadata)


@dataclass(frozen=True)
class Segment:
    """Fragmento de un documento; es la unidad que se embebe y almacena"""
    text: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_document(cls, document: Document, text: str, index: int) -> "Segment":
        """Crea un segmento que hereda la metadata del documento origen"""
        metadata = dict(document.metadata)
        metadata["index"] = index
        return cls(text=text, metadata=metadata)

    def with_text(self, text: str) -> "Segment":
        return replace(self, text=text, metadata=dict(self.metadata))

    def with_metadata(self, **updates: Any) -> "Segment":
        metadata = dict(self.metadata)
        metadata.update(updates)
        return replace(self, metadata=metadata)


@dataclass(frozen=True)
class StrategyDescriptor:
    """Descripción pública de una estrategia registrada"""
    kind: str
    description: str
    enabled: bool = True


@dataclass
class SplitterConfig:
    """Configuración de tamaño para los splitters"""
    max_segment_size: int = 300  # Caracteres por segmento
    max_overlap_size: int = 50  # Overlap máximo entre segmentos consecutivos

    def validate(self):
        """Valida la configuración"""
        if self.max_segment_size <= 0:
            raise ValueError("max_segment_size must be greater than 0")
        if self.max_overlap_size < 0:
            raise ValueError("max_overlap_size cannot be negative")
        if self.max_overlap_size >= self.max_segment_size:
            raise ValueError("max_overlap_size must be smaller than max_segment_size")


@dataclass(frozen=True)
class RetrievalRequest:
    """Petición a un retriever"""
    query: str
    max_results: int = 5
    min_score: float = 0.6

    def validate(self):
        """Valida la petición"""
        if self.max_results <= 0:
            raise ValueError("max_results must be greater than 0")
        if not 0 <= self.min_score <= 1:
            raise ValueError("min_score must be between 0 and 1")


@dataclass(frozen=True)
class RetrievalMatch:
    """Segmento recuperado con su score de relevancia (0-1)"""
    segment: Segment
    score: float

    @property
    def text(self) -> str:
        return self.segment.text


@dataclass(frozen=True)
class Query:
    """Consulta del usuario, con el historial de conversación previo"""
    text: str
    chat_history: Tuple[Any, ...] = ()


@dataclass
class RagResponse:
    """Respuesta generada junto con los textos fuente usados como contexto"""
    answer: str
    sources: List[str] = field(default_factory=list)
