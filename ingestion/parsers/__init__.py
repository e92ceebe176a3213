"""
Parsers subpackage for document ingestion.
Turns raw bytes into Documents.
"""
from ingestion.parsers.base_parser import BaseParser, ParseError, ParserKind, extension_of
from ingestion.parsers.parser_factory import ParserRegistry, build_parser_registry

__all__ = [
    "BaseParser",
    "ParseError",
    "ParserKind",
    "ParserRegistry",
    "build_parser_registry",
    "extension_of",
]
