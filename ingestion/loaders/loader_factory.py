"""
Loader factory module.
Builds the loader registry and offers a convenience loading function.
"""
from typing import List, Optional, Union
import logging

from core.registry import StrategyRegistry
from ingestion.loaders.base_loader import BaseLoader, LoaderKind
from ingestion.loaders.filesystem_loader import FileSystemLoader
from ingestion.loaders.resource_loader import ResourceLoader
from ingestion.loaders.url_loader import UrlLoader
from ingestion.parsers.parser_factory import ParserRegistry, build_parser_registry
from domain.models import Document

logger = logging.getLogger(__name__)


def build_loader_registry(
    parsers: Optional[ParserRegistry] = None,
    resource_dir: str = "resources",
    url_timeout: int = 30
) -> StrategyRegistry[LoaderKind, BaseLoader]:
    """
    Create the loader registry.

    Args:
        parsers: Parser registry shared by all loaders
        resource_dir: Base directory for RESOURCE sources
        url_timeout: HTTP timeout in seconds for URL sources
    """
    parsers = parsers or build_parser_registry()
    return StrategyRegistry(
        LoaderKind,
        [
            FileSystemLoader(parsers),
            UrlLoader(parsers, timeout=url_timeout),
            ResourceLoader(parsers, resource_dir=resource_dir),
        ],
        category="DocumentLoader"
    )


def load_documents(
    source: str,
    kind: Union[LoaderKind, str] = LoaderKind.FILE_SYSTEM,
    registry: Optional[StrategyRegistry] = None
) -> List[Document]:
    """
    Convenience function to load documents with a given loader kind.

    Raises:
        UnsupportedStrategyKind: If the loader kind is not registered
        LoaderException: If loading fails
    """
    registry = registry or build_loader_registry()
    return registry.resolve(kind).load_documents(source)
