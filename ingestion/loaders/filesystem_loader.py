"""
File system loader.
Loads a single file or every file of a directory.
"""
from pathlib import Path
from typing import List, Union
import logging

from ingestion.loaders.base_loader import (
    BaseLoader,
    LoaderKind,
    SourceNotFound,
    SourceUnreadable,
)
from ingestion.parsers.parser_factory import ParserRegistry
from domain.models import Document

logger = logging.getLogger(__name__)


class FileSystemLoader(BaseLoader):
    """
    Loader for local files.
    The parser is chosen from each file's own extension.
    """

    kind = LoaderKind.FILE_SYSTEM

    def __init__(self, parsers: ParserRegistry):
        self.parsers = parsers

    @property
    def description(self) -> str:
        return "Loads files and directories from the local file system"

    def load_document(self, source: Union[str, Path]) -> Document:
        path = Path(source)

        if not path.exists():
            raise SourceNotFound(f"File not found: {source}")
        if not path.is_file():
            raise SourceUnreadable(f"Path is not a file: {source}")

        parser = self.parsers.get_parser_by_file_name(path.name)
        try:
            with open(path, "rb") as stream:
                document = self._parse(parser, stream, str(path))
        except OSError as e:
            raise SourceUnreadable(f"Error reading {source}: {e}") from e

        logger.info(f"Loaded file: {path.name} ({len(document.text)} chars)")
        return document.with_metadata(
            file_name=path.name,
            absolute_directory_path=str(path.resolve().parent)
        )

    def load_documents(self, source: Union[str, Path]) -> List[Document]:
        """
        Load a file, or every regular file of a directory sorted by name.
        Subdirectories are not descended into.
        """
        path = Path(source)

        if not path.exists():
            raise SourceNotFound(f"Path not found: {source}")
        if path.is_file():
            return [self.load_document(path)]

        try:
            files = sorted(
                (p for p in path.iterdir() if p.is_file()),
                key=lambda p: p.name
            )
        except OSError as e:
            raise SourceUnreadable(f"Error listing directory {source}: {e}") from e

        logger.info(f"Loading {len(files)} files from {path}")
        return [self.load_document(file_path) for file_path in files]
