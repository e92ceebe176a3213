"""
Resource loader.
Loads documents bundled with the application: either files under the
configured resource directory or package data addressed as ``package:path``.
"""
from importlib import resources
from pathlib import Path, PurePosixPath
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


class ResourceLoader(BaseLoader):
    """Loader for application-bundled resources"""

    kind = LoaderKind.RESOURCE

    def __init__(self, parsers: ParserRegistry, resource_dir: str = "resources"):
        self.parsers = parsers
        self.resource_dir = Path(resource_dir)

    @property
    def description(self) -> str:
        return f"Loads bundled resources from '{self.resource_dir}' or 'package:path'"

    def _locate(self, source: str):
        name = source.strip()
        package = None
        if ":" in name:
            package, _, name = name.partition(":")

        relative = PurePosixPath(name.lstrip("/"))
        if not relative.parts or ".." in relative.parts:
            raise SourceNotFound(f"Invalid resource name: {source}")

        if package:
            try:
                root = resources.files(package)
            except (ModuleNotFoundError, TypeError) as e:
                raise SourceNotFound(f"Resource package not found: {package}") from e
        else:
            root = self.resource_dir

        resource = root.joinpath(*relative.parts)
        if not resource.is_file():
            raise SourceNotFound(f"Resource not found: {source}")
        return resource

    def load_document(self, source: str) -> Document:
        resource = self._locate(source)
        parser = self.parsers.get_parser_by_file_name(resource.name)
        try:
            with resource.open("rb") as stream:
                document = self._parse(parser, stream, source)
        except OSError as e:
            raise SourceUnreadable(f"Error reading resource {source}: {e}") from e

        logger.info(f"Loaded resource: {source} ({len(document.text)} chars)")
        return document.with_metadata(file_name=resource.name, resource=source)
