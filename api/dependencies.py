"""
Shared dependencies and application state for the FastAPI server.
The engine (every registry plus its collaborators) is built once at
startup and reused across requests.
"""
from __future__ import annotations

import logging
from typing import Optional

from config.settings import Settings
from core.engine import RagEngine

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Global singleton, populated during lifespan startup
# ---------------------------------------------------------------------------

_engine: Optional[RagEngine] = None


def get_engine() -> RagEngine:
    """FastAPI dependency: returns the initialized RagEngine."""
    if _engine is None:
        raise RuntimeError("RagEngine not initialized. Server may still be starting.")
    return _engine


def set_engine(engine: Optional[RagEngine]) -> None:
    global _engine
    _engine = engine


def initialize_components(settings: Optional[Settings] = None) -> RagEngine:
    """Build the engine and store it as the module-level singleton.
    Called once during FastAPI lifespan startup.
    """
    logger.info("Initializing RAG components...")
    engine = RagEngine.from_settings(settings)
    set_engine(engine)
    logger.info("All components initialized successfully")
    return engine
