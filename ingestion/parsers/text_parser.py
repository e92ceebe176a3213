"""
Plain text parser.
"""
from typing import BinaryIO

from ingestion.parsers.base_parser import BaseParser, ParserKind
from domain.models import Document


class TextParser(BaseParser):
    """Decodes the stream as text; also the fallback for unknown extensions"""

    kind = ParserKind.TEXT
    extensions = (
        "txt", "text", "html", "htm", "md", "markdown",
        "log", "csv", "json", "xml",
    )

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def parse(self, stream: BinaryIO) -> Document:
        text = self._decode(stream.read(), self.encoding)
        return Document(text=self._ensure_not_blank(text))
