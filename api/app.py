"""
FastAPI application factory.

Creates and configures the FastAPI app with:
- Lifespan startup/shutdown for engine initialization
- Document, RAG and strategy routes
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies import initialize_components, set_engine
from api.routes.chat import router as rag_router
from api.routes.documents import router as documents_router
from api.routes.strategies import router as strategies_router
from core.engine import RagEngine

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# CORS: origins allowed to call this API
# ---------------------------------------------------------------------------

ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------

def create_app(engine: Optional[RagEngine] = None) -> FastAPI:
    """Create and return the configured FastAPI application.

    Args:
        engine: Prebuilt engine to serve; built from settings on startup when omitted
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Initialize heavy components on startup; clean up on shutdown."""
        logger.info("Starting up, initializing RAG components...")
        if engine is None:
            initialize_components()
        else:
            set_engine(engine)
        logger.info("Startup complete. API is ready.")
        yield
        set_engine(None)
        logger.info("Shutting down.")

    app = FastAPI(
        title="RAG Pipeline API",
        description=(
            "REST API for a configurable Retrieval-Augmented Generation pipeline. "
            "Ingest documents and ask questions about their content."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(documents_router)
    app.include_router(rag_router)
    app.include_router(strategies_router)

    @app.get("/health", tags=["health"], summary="Health check")
    def health() -> dict:
        return {"status": "ok", "service": "rag-pipeline"}

    return app
