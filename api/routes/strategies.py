"""
Strategy routes: what each registry offers.

Endpoints
---------
GET /api/strategies             List the strategy categories
GET /api/strategies/{category}  Registered kinds and their descriptions
"""
from __future__ import annotations

import logging
from typing import Dict, List

from fastapi import APIRouter, Depends

from api.dependencies import get_engine
from api.errors import to_http_exception
from core.container import StrategyCategory
from core.engine import RagEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/strategies", tags=["strategies"])


@router.get("", response_model=List[str], summary="List strategy categories")
def list_categories() -> List[str]:
    return [category.value for category in StrategyCategory]


@router.get("/{category}", response_model=Dict[str, str], summary="List strategies of a category")
def list_strategies(
    category: str,
    engine: RagEngine = Depends(get_engine),
) -> Dict[str, str]:
    try:
        return engine.list_strategies(category)
    except Exception as exc:
        raise to_http_exception(exc) from exc
