"""
PDF parser implementation.
Extracts text from PDF documents using PyPDF2.
"""
from typing import BinaryIO, List
import logging

import PyPDF2

from ingestion.parsers.base_parser import BaseParser, ParserKind, ParseError
from domain.models import Document

logger = logging.getLogger(__name__)


class PDFParser(BaseParser):
    """Parser for PDF documents"""

    kind = ParserKind.PDF
    extensions = ("pdf",)

    def parse(self, stream: BinaryIO) -> Document:
        """
        Extract the text of every page, pages separated by a blank line.

        Raises:
            ParseError: If the PDF is malformed or has no extractable text
        """
        try:
            reader = PyPDF2.PdfReader(stream)
            page_count = len(reader.pages)
            content_parts: List[str] = []

            for page_num, page in enumerate(reader.pages, start=1):
                text = page.extract_text()
                if text and text.strip():
                    content_parts.append(text)
                else:
                    logger.debug(f"Page {page_num} has no extractable text")
        except Exception as e:
            raise ParseError(f"Error parsing PDF: {e}") from e

        content = "\n\n".join(content_parts)
        document = Document(
            text=self._ensure_not_blank(content),
            metadata={"page_count": page_count}
        )
        logger.info(f"Parsed PDF ({len(content)} chars, {page_count} pages)")
        return document
