"""
URL loader.
Downloads a document over HTTP with requests.
"""
from io import BytesIO
from pathlib import PurePosixPath
from urllib.parse import urlparse
import logging

import requests

from ingestion.loaders.base_loader import (
    BaseLoader,
    LoaderKind,
    SourceNotFound,
    SourceUnreadable,
)
from ingestion.parsers.parser_factory import ParserRegistry
from domain.models import Document

logger = logging.getLogger(__name__)

_NOT_FOUND_STATUSES = (404, 410)


class UrlLoader(BaseLoader):
    """Loader for documents reachable by URL"""

    kind = LoaderKind.URL

    def __init__(self, parsers: ParserRegistry, timeout: int = 30):
        self.parsers = parsers
        self.timeout = timeout

    @property
    def description(self) -> str:
        return f"Downloads documents over HTTP(S) (timeout={self.timeout}s)"

    def load_document(self, source: str) -> Document:
        try:
            response = requests.get(source, timeout=self.timeout)
        except (
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
            requests.exceptions.InvalidURL,
        ) as e:
            raise SourceNotFound(f"Invalid URL: {source}") from e
        except requests.exceptions.RequestException as e:
            raise SourceUnreadable(f"Error downloading {source}: {e}") from e

        if response.status_code in _NOT_FOUND_STATUSES:
            raise SourceNotFound(f"URL not found ({response.status_code}): {source}")
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise SourceUnreadable(f"HTTP error for {source}: {e}") from e

        path = urlparse(source).path
        file_name = PurePosixPath(path).name
        parser = self.parsers.get_parser_by_file_name(file_name)
        document = self._parse(parser, BytesIO(response.content), source)

        logger.info(f"Loaded URL: {source} ({len(document.text)} chars)")
        return document.with_metadata(url=source, file_name=file_name or urlparse(source).netloc)
