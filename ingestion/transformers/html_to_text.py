"""
HTML to text transformer, using BeautifulSoup.
"""
from typing import Optional
import re

from bs4 import BeautifulSoup

from ingestion.transformers.base_transformer import (
    BaseDocumentTransformer,
    DocumentTransformerKind,
)
from domain.models import Document

_MARKUP = re.compile(r"<\s*/?\s*[a-zA-Z][^>]*>")


class HtmlToTextTransformer(BaseDocumentTransformer):
    """Extracts visible text from HTML documents; plain text passes through"""

    kind = DocumentTransformerKind.HTML_TO_TEXT

    def __init__(self, parser: str = "html.parser", enabled: bool = True):
        super().__init__(enabled=enabled)
        self.parser = parser

    @property
    def description(self) -> str:
        return "Extracts visible text from HTML markup"

    def transform(self, document: Document) -> Optional[Document]:
        if not _MARKUP.search(document.text):
            return document

        soup = BeautifulSoup(document.text, self.parser)
        for tag in soup(["script", "style", "noscript"]):
            tag.decompose()

        updates = {}
        if soup.title and soup.title.string and "title" not in document.metadata:
            updates["title"] = soup.title.string.strip()

        text = soup.get_text(separator="\n")
        return document.with_text(text).with_metadata(**updates)
