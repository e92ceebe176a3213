"""
Mapping from pipeline exceptions to HTTP errors.
"""
from __future__ import annotations

import logging

from fastapi import HTTPException, status

from chat.llm_clients.base import LLMException
from core.registry import UnsupportedStrategyKind
from embeddings.base import EmbeddingException
from ingestion.loaders.base_loader import SourceNotFound, SourceUnreadable
from ingestion.parsers.base_parser import ParseError
from retrieval.routers.base_router import NoRetrieversConfigured
from vectorstore.base import VectorStoreException

logger = logging.getLogger(__name__)

# First match wins, so subclasses come before their bases.
_STATUS_BY_EXCEPTION = (
    (UnsupportedStrategyKind, status.HTTP_400_BAD_REQUEST),
    (SourceNotFound, status.HTTP_404_NOT_FOUND),
    (SourceUnreadable, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (ParseError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (NoRetrieversConfigured, status.HTTP_503_SERVICE_UNAVAILABLE),
    (LLMException, status.HTTP_503_SERVICE_UNAVAILABLE),
    (EmbeddingException, status.HTTP_503_SERVICE_UNAVAILABLE),
    (VectorStoreException, status.HTTP_503_SERVICE_UNAVAILABLE),
    (ValueError, status.HTTP_400_BAD_REQUEST),
)


def to_http_exception(exc: Exception) -> HTTPException:
    """Translate a pipeline error; unknown errors become 500"""
    for exception_type, status_code in _STATUS_BY_EXCEPTION:
        if isinstance(exc, exception_type):
            logger.warning("%s: %s", type(exc).__name__, exc)
            return HTTPException(status_code=status_code, detail=str(exc))

    logger.exception("Unexpected error", exc_info=exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Internal error: {exc}",
    )
