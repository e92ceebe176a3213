"""
Summarizing transformer backed by the generative model.
"""
from typing import Optional
import logging

from chat.llm_clients.base import BaseLLMClient
from chat.models import Message, MessageRole
from ingestion.transformers.base_transformer import (
    BaseDocumentTransformer,
    DocumentTransformerKind,
)
from domain.models import Document

logger = logging.getLogger(__name__)

SUMMARY_PROMPT = (
    "Summarize the following document in at most three sentences. "
    "Reply with the summary only.\n\n{text}"
)


class SummarizerTransformer(BaseDocumentTransformer):
    """
    Stores a model-written summary under the ``summary`` metadata key.
    Documents that already carry a summary are left untouched.
    """

    kind = DocumentTransformerKind.SUMMARIZER

    def __init__(self, llm_client: BaseLLMClient, max_input_chars: int = 4000, enabled: bool = True):
        super().__init__(enabled=enabled)
        self.llm_client = llm_client
        self.max_input_chars = max_input_chars

    @property
    def description(self) -> str:
        return "Adds a model-generated summary to the document metadata"

    def transform(self, document: Document) -> Optional[Document]:
        if str(document.metadata.get("summary") or "").strip():
            return document

        prompt = SUMMARY_PROMPT.format(text=document.text[:self.max_input_chars])
        summary = self.llm_client.generate([Message(role=MessageRole.USER, content=prompt)])
        logger.debug(f"Generated summary of {len(summary)} chars")
        return document.with_metadata(summary=summary.strip())
