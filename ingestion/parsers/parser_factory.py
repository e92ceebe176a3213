"""
Parser registry.
Selects a parser by kind, file extension or file name.
"""
from typing import Iterable, Optional
import logging

from core.registry import StrategyRegistry
from ingestion.parsers.base_parser import BaseParser, ParserKind, extension_of
from ingestion.parsers.markdown_parser import MarkdownParser
from ingestion.parsers.office_parser import MsOfficeParser
from ingestion.parsers.pdf_parser import PDFParser
from ingestion.parsers.text_parser import TextParser

logger = logging.getLogger(__name__)


class ParserRegistry(StrategyRegistry[ParserKind, BaseParser]):
    """Registry of document parsers with extension-based lookup"""

    def __init__(self, parsers: Iterable[BaseParser]):
        super().__init__(ParserKind, parsers, category="DocumentParser")

    def get_parser_by_extension(self, extension: Optional[str]) -> BaseParser:
        """
        Return the first registered parser that supports the extension.

        Matching is case-insensitive and ignores a leading dot. Unknown or
        empty extensions fall back to the TEXT parser.

        Raises:
            UnsupportedStrategyKind: If no parser matches and TEXT is not registered
        """
        normalized = (extension or "").strip().lower().lstrip(".")
        if normalized:
            for parser in self.list_all().values():
                if parser.is_enabled() and parser.supports(normalized):
                    return parser
            logger.debug(f"No parser for extension '{normalized}', using TEXT")
        return self.resolve(ParserKind.TEXT)

    def get_parser_by_file_name(self, file_name: str) -> BaseParser:
        return self.get_parser_by_extension(extension_of(file_name))


def build_parser_registry() -> ParserRegistry:
    """Registration order decides which parser wins a shared extension"""
    return ParserRegistry([
        MarkdownParser(),
        PDFParser(),
        MsOfficeParser(),
        TextParser(),
    ])
