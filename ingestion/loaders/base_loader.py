"""
Base loader module.
Defines abstract interface for document loaders.
"""
from abc import abstractmethod
from enum import Enum
from typing import BinaryIO, List
import logging

from core.registry import BaseStrategy
from domain.models import Document
from ingestion.parsers.base_parser import BaseParser

logger = logging.getLogger(__name__)


class LoaderException(Exception):
    """Exception raised for document loading errors"""
    pass


class SourceNotFound(LoaderException):
    """The path, URL or resource does not resolve to anything"""
    pass


class SourceUnreadable(LoaderException):
    """The source exists but could not be read (I/O, permission, HTTP failure)"""
    pass


class LoaderKind(str, Enum):
    FILE_SYSTEM = "FILE_SYSTEM"
    URL = "URL"
    RESOURCE = "RESOURCE"


class BaseLoader(BaseStrategy):
    """
    Abstract base class for document loaders.
    Defines the interface for loading documents from a source descriptor.
    """

    kind: LoaderKind

    @abstractmethod
    def load_document(self, source: str) -> Document:
        """
        Load a single document.

        Args:
            source: Path, URL or resource name, depending on the loader

        Returns:
            Document with the parsed text and source metadata

        Raises:
            SourceNotFound: If the source does not resolve
            SourceUnreadable: If the source cannot be read
            ParseError: If the content cannot be parsed
        """
        pass

    def load_documents(self, source: str) -> List[Document]:
        """
        Load every document behind a source.
        Loaders without a batch notion return a single-element list.
        """
        return [self.load_document(source)]

    def _parse(self, parser: BaseParser, stream: BinaryIO, source: str) -> Document:
        logger.debug(f"Parsing {source} with {parser.__class__.__name__}")
        return parser.parse(stream)
