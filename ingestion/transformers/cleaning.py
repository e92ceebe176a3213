"""
Text cleaning transformer.
"""
from typing import Optional
import re

from ingestion.transformers.base_transformer import (
    BaseDocumentTransformer,
    DocumentTransformerKind,
)
from domain.models import Document

# Applied in order, character removal first.
_CLEANING_RULES = (
    (re.compile(r"[\x00-\x08\x0B-\x1F]"), ""),
    (re.compile(r"[\u200B-\u200D\uFEFF]"), ""),
    (re.compile(r"[ \t]+\n"), "\n"),
    (re.compile(r"\n[ \t]+"), "\n"),
    (re.compile(r" {2,}"), " "),
    (re.compile(r"\n{3,}"), "\n\n"),
)


def clean_text(text: str) -> str:
    """
    Normalise whitespace and drop invisible characters.

    Removes control characters other than tab and newline, zero-width
    characters and the BOM, trailing and leading blanks around line breaks,
    repeated spaces and runs of more than one blank line, then trims.
    """
    for pattern, replacement in _CLEANING_RULES:
        text = pattern.sub(replacement, text)
    return text.strip()


class CleaningTransformer(BaseDocumentTransformer):
    kind = DocumentTransformerKind.CLEANING

    @property
    def description(self) -> str:
        return "Removes control and zero-width characters and normalises whitespace"

    def transform(self, document: Document) -> Optional[Document]:
        return document.with_text(clean_text(document.text))
