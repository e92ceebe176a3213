"""
Documents routes: REST endpoints for ingestion.

Endpoints
---------
POST /api/documents/ingest         Ingest raw text
POST /api/documents/ingest-source  Load a file, directory, URL or resource and ingest it
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from api.dependencies import get_engine
from api.errors import to_http_exception
from core.engine import RagEngine
from ingestion.pipeline import IngestionOptions, IngestionResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/documents", tags=["documents"])


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------

class IngestionOptionsModel(BaseModel):
    """Stage selection. Omitted transformer lists use the configured defaults."""
    splitter: Optional[str] = Field(default=None, description="Splitter kind, e.g. RECURSIVE")
    transform_documents: bool = True
    document_transformers: Optional[List[str]] = None
    transform_segments: bool = True
    segment_transformers: Optional[List[str]] = None

    def to_options(self, loader: str = "FILE_SYSTEM") -> IngestionOptions:
        return IngestionOptions(
            loader_kind=loader,
            splitter_kind=self.splitter,
            transform_documents=self.transform_documents,
            document_transformers=self.document_transformers,
            transform_segments=self.transform_segments,
            segment_transformers=self.segment_transformers,
        )


class IngestTextRequest(BaseModel):
    """Request body for POST /api/documents/ingest."""
    text: str = Field(..., min_length=1, description="Raw document text")
    metadata: Dict[str, Any] = Field(default_factory=dict)
    options: IngestionOptionsModel = Field(default_factory=IngestionOptionsModel)


class IngestSourceRequest(BaseModel):
    """Request body for POST /api/documents/ingest-source."""
    source: str = Field(..., min_length=1, description="Path, URL or resource name")
    loader: str = Field(default="FILE_SYSTEM", description="FILE_SYSTEM, URL or RESOURCE")
    options: IngestionOptionsModel = Field(default_factory=IngestionOptionsModel)


class IngestResponse(BaseModel):
    documents_loaded: int
    documents_discarded: int
    segments_created: int
    segments_discarded: int
    segments_stored: int
    segment_ids: List[str]
    splitter: str
    processing_time: float

    @classmethod
    def from_result(cls, result: IngestionResult) -> "IngestResponse":
        return cls(
            documents_loaded=result.documents_loaded,
            documents_discarded=result.documents_discarded,
            segments_created=result.segments_created,
            segments_discarded=result.segments_discarded,
            segments_stored=result.segments_stored,
            segment_ids=result.segment_ids,
            splitter=result.splitter,
            processing_time=result.processing_time,
        )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post(
    "/ingest",
    response_model=IngestResponse,
    status_code=status.HTTP_200_OK,
    summary="Ingest raw text",
)
def ingest_text(
    body: IngestTextRequest,
    engine: RagEngine = Depends(get_engine),
) -> IngestResponse:
    try:
        result = engine.ingest_text(body.text, metadata=body.metadata, options=body.options.to_options())
    except Exception as exc:
        raise to_http_exception(exc) from exc
    return IngestResponse.from_result(result)


@router.post(
    "/ingest-source",
    response_model=IngestResponse,
    status_code=status.HTTP_200_OK,
    summary="Load a source with the selected loader and ingest it",
)
def ingest_source(
    body: IngestSourceRequest,
    engine: RagEngine = Depends(get_engine),
) -> IngestResponse:
    """Every document behind *source* goes through the same pipeline. Any
    failure aborts the whole call and nothing is stored.
    """
    try:
        result = engine.ingest_source(body.source, options=body.options.to_options(loader=body.loader))
    except Exception as exc:
        raise to_http_exception(exc) from exc
    return IngestResponse.from_result(result)
