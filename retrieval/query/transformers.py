"""
Query transformers: identity, history compression, expansion and rewriting.
"""
from typing import List
import logging
import re

from chat.llm_clients.base import BaseLLMClient
from chat.models import Message, MessageRole
from domain.models import Query
from retrieval.query.base import BaseQueryTransformer, QueryTransformerKind, format_history

logger = logging.getLogger(__name__)

COMPRESSING_PROMPT = (
    "Read the conversation and the follow-up question below. "
    "Rewrite the follow-up question as a single standalone question that keeps "
    "every detail needed to understand it without the conversation. "
    "Reply with the question only.\n\n"
    "Conversation:\n{history}\n\n"
    "Follow-up question: {query}"
)

EXPANDING_PROMPT = (
    "Generate {n} different versions of the question below, to improve search "
    "recall. Each version must keep the original meaning. "
    "Reply with one question per line and nothing else.\n\n"
    "Question: {query}"
)

_LIST_MARKER = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")

_QUESTION_LEAD = re.compile(
    r"^\s*(what|who|where|when|why|how|which|describe|explain"
    r"|¿qué|qué|¿cuál|cuál|¿dónde|dónde|¿cuándo|cuándo|¿cómo|cómo|¿quién|quién)\s+"
    r"(is|are|was|were|do|does|did|can|could|should|would|es|son|fue|era|está|están|hay)?\s*",
    re.IGNORECASE,
)


class DefaultQueryTransformer(BaseQueryTransformer):
    kind = QueryTransformerKind.DEFAULT

    @property
    def description(self) -> str:
        return "Passes the query through unchanged"

    def transform(self, query: Query) -> List[Query]:
        return [query]


class CompressingQueryTransformer(BaseQueryTransformer):
    """
    Folds the chat history into a standalone query with the generative model.
    Queries without history are returned as they are.
    """

    kind = QueryTransformerKind.COMPRESSING

    def __init__(self, llm_client: BaseLLMClient):
        self.llm_client = llm_client

    @property
    def description(self) -> str:
        return "Compresses chat history and the query into a standalone query"

    def transform(self, query: Query) -> List[Query]:
        if not query.chat_history:
            return [query]

        prompt = COMPRESSING_PROMPT.format(history=format_history(query), query=query.text)
        compressed = self.llm_client.generate([Message(role=MessageRole.USER, content=prompt)]).strip()
        if not compressed:
            logger.warning("Compression returned an empty query, keeping the original")
            return [query]

        logger.debug(f"Compressed query: '{query.text}' -> '{compressed}'")
        return [Query(text=compressed, chat_history=query.chat_history)]


class ExpandingQueryTransformer(BaseQueryTransformer):
    """Asks the generative model for ``n`` variants of the query"""

    kind = QueryTransformerKind.EXPANDING

    def __init__(self, llm_client: BaseLLMClient, n: int = 3):
        if n <= 0:
            raise ValueError("n must be greater than 0")
        self.llm_client = llm_client
        self.n = n

    @property
    def description(self) -> str:
        return f"Expands the query into {self.n} variants"

    def transform(self, query: Query) -> List[Query]:
        prompt = EXPANDING_PROMPT.format(n=self.n, query=query.text)
        answer = self.llm_client.generate([Message(role=MessageRole.USER, content=prompt)])

        variants = []
        for line in answer.splitlines():
            text = _LIST_MARKER.sub("", line).strip()
            if text and text not in variants:
                variants.append(text)

        if not variants:
            logger.warning("Expansion returned no variants, keeping the original query")
            return [query]
        return [Query(text=text, chat_history=query.chat_history) for text in variants[:self.n]]


class RewritingQueryTransformer(BaseQueryTransformer):
    """
    Rule based rewrite, no model required: adds a declarative variant of a
    question ("What is X?" -> "X") next to the original.
    """

    kind = QueryTransformerKind.REWRITING

    @property
    def description(self) -> str:
        return "Adds a declarative rewrite of questions"

    def transform(self, query: Query) -> List[Query]:
        declarative = _QUESTION_LEAD.sub("", query.text).strip(" ?¿")
        if not declarative or declarative.lower() == query.text.strip().lower():
            return [query]
        return [query, Query(text=declarative, chat_history=query.chat_history)]
