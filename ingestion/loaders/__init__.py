"""
Loaders subpackage for document ingestion.
Provides loaders for files, URLs and bundled resources.
"""
from ingestion.loaders.base_loader import (
    BaseLoader,
    LoaderException,
    LoaderKind,
    SourceNotFound,
    SourceUnreadable,
)
from ingestion.loaders.filesystem_loader import FileSystemLoader
from ingestion.loaders.url_loader import UrlLoader
from ingestion.loaders.resource_loader import ResourceLoader
from ingestion.loaders.loader_factory import build_loader_registry, load_documents

__all__ = [
    "BaseLoader",
    "LoaderException",
    "LoaderKind",
    "SourceNotFound",
    "SourceUnreadable",
    "FileSystemLoader",
    "UrlLoader",
    "ResourceLoader",
    "build_loader_registry",
    "load_documents",
]
