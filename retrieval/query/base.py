"""
Base query transformer module.
"""
from abc import abstractmethod
from enum import Enum
from typing import List

from core.registry import BaseStrategy
from domain.models import Query


class QueryTransformerKind(str, Enum):
    DEFAULT = "DEFAULT"
    COMPRESSING = "COMPRESSING"
    EXPANDING = "EXPANDING"
    REWRITING = "REWRITING"


class BaseQueryTransformer(BaseStrategy):
    """Turns one user query into one or more retrieval queries"""

    kind: QueryTransformerKind

    @abstractmethod
    def transform(self, query: Query) -> List[Query]:
        pass


def format_history(query: Query) -> str:
    lines = []
    for message in query.chat_history:
        role = getattr(message.role, "value", message.role)
        speaker = "User" if role == "user" else "AI"
        lines.append(f"{speaker}: {message.content}")
    return "\n".join(lines)
