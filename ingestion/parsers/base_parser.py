"""
Base parser module.
Defines the interface that turns raw bytes into a Document.
"""
from abc import abstractmethod
from enum import Enum
from pathlib import PurePath
from typing import BinaryIO, Tuple
import logging

from core.registry import BaseStrategy
from domain.models import Document

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Exception raised when a byte stream cannot be parsed"""
    pass


class ParserKind(str, Enum):
    TEXT = "TEXT"
    PDF = "PDF"
    MS_OFFICE = "MS_OFFICE"
    AUTO_DETECT = "AUTO_DETECT"
    MARKDOWN = "MARKDOWN"
    YAML = "YAML"


def extension_of(file_name: str) -> str:
    """
    Return the lower-cased extension of a file name, without the dot.

    Only the base name is considered. Names without a dot, names ending in a
    dot and hidden files such as ``.bashrc`` have no extension.
    """
    name = PurePath(file_name).name
    dot = name.rfind(".")
    if dot > 0 and dot < len(name) - 1:
        return name[dot + 1:].lower()
    return ""


class BaseParser(BaseStrategy):
    """
    Abstract base class for document parsers.

    Parsers hold no shared mutable state, so one instance can serve
    concurrent ingestion calls.
    """

    kind: ParserKind
    extensions: Tuple[str, ...] = ()

    def supports(self, extension: str) -> bool:
        return extension.lower().lstrip(".") in self.extensions

    @property
    def description(self) -> str:
        return f"{self.__class__.__name__} ({', '.join(self.extensions)})"

    @abstractmethod
    def parse(self, stream: BinaryIO) -> Document:
        """
        Parse a byte stream into a Document.

        Raises:
            ParseError: If the content is malformed, undecodable or blank
        """
        pass

    def _decode(self, data: bytes, encoding: str = "utf-8") -> str:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError as e:
            raise ParseError(f"{self.kind.value} parser could not decode input as {encoding}") from e

    def _ensure_not_blank(self, text: str) -> str:
        if not text or not text.strip():
            raise ParseError(f"{self.kind.value} parser produced a blank document")
        return text
