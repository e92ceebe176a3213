"""
RAG routes: REST endpoints for asking questions.

Endpoints
---------
POST   /api/rag/query               Answer a question
POST   /api/rag/query-with-sources  Answer a question and return the segments used
GET    /api/rag/history             Retrieve the current conversation history
DELETE /api/rag/history             Clear the conversation history
"""
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from api.dependencies import get_engine
from api.errors import to_http_exception
from core.engine import RagEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/rag", tags=["rag"])


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------

class QueryRequest(BaseModel):
    """Request body for the query endpoints."""
    question: str = Field(..., min_length=1, max_length=4000, description="User question")

    model_config = {"json_schema_extra": {"example": {"question": "What does the manual say about resets?"}}}


class QueryResponse(BaseModel):
    answer: str


class QueryWithSourcesResponse(BaseModel):
    answer: str
    sources: List[str] = Field(default_factory=list)


class HistoryMessageResponse(BaseModel):
    """A single message in the conversation history."""
    role: str
    content: str
    timestamp: str


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post(
    "/query",
    response_model=QueryResponse,
    status_code=status.HTTP_200_OK,
    summary="Ask a question",
)
def query(
    body: QueryRequest,
    engine: RagEngine = Depends(get_engine),
) -> QueryResponse:
    """Answer *question* from the ingested segments. When nothing relevant
    is found the fixed no-information message is returned.
    """
    try:
        answer = engine.query(body.question)
    except Exception as exc:
        raise to_http_exception(exc) from exc
    return QueryResponse(answer=answer)


@router.post(
    "/query-with-sources",
    response_model=QueryWithSourcesResponse,
    status_code=status.HTTP_200_OK,
    summary="Ask a question and get the supporting segments",
)
def query_with_sources(
    body: QueryRequest,
    engine: RagEngine = Depends(get_engine),
) -> QueryWithSourcesResponse:
    try:
        response = engine.query_with_sources(body.question)
    except Exception as exc:
        raise to_http_exception(exc) from exc
    return QueryWithSourcesResponse(answer=response.answer, sources=response.sources)


@router.get(
    "/history",
    response_model=List[HistoryMessageResponse],
    summary="Get current conversation history",
)
def get_history(
    engine: RagEngine = Depends(get_engine),
) -> List[HistoryMessageResponse]:
    messages = engine.container.rag_service.get_history_messages()
    return [
        HistoryMessageResponse(
            role=msg.role.value,
            content=msg.content,
            timestamp=msg.timestamp.isoformat(),
        )
        for msg in messages
    ]


@router.delete(
    "/history",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Clear conversation history",
)
def clear_history(
    engine: RagEngine = Depends(get_engine),
) -> None:
    engine.container.rag_service.clear_conversation()
