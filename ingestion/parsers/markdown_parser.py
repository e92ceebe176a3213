"""
Markdown parser.
Strips markup so that only readable text is embedded.
"""
from typing import BinaryIO
import re

from ingestion.parsers.base_parser import BaseParser, ParserKind
from domain.models import Document

_FENCE = re.compile(r"^```[^\n]*\n?", re.MULTILINE)
_IMAGE = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
_LINK = re.compile(r"\[([^\]]+)\]\([^)]*\)")
_HEADING = re.compile(r"^\s{0,3}#{1,6}\s+", re.MULTILINE)
_BLOCKQUOTE = re.compile(r"^\s{0,3}>\s?", re.MULTILINE)
_EMPHASIS = re.compile(r"(\*\*|__|\*|_|~~)(?=\S)(.+?)(?<=\S)\1")
_INLINE_CODE = re.compile(r"`([^`]*)`")
_RULE = re.compile(r"^\s{0,3}([-*_])(\s*\1){2,}\s*$", re.MULTILINE)


def markdown_to_text(markdown: str) -> str:
    """Remove the most common Markdown markup, keeping the text"""
    text = _FENCE.sub("", markdown)
    text = _IMAGE.sub(r"\1", text)
    text = _LINK.sub(r"\1", text)
    text = _RULE.sub("", text)
    text = _HEADING.sub("", text)
    text = _BLOCKQUOTE.sub("", text)
    text = _INLINE_CODE.sub(r"\1", text)
    text = _EMPHASIS.sub(r"\2", text)
    return text


class MarkdownParser(BaseParser):
    """Parser for .md / .markdown files"""

    kind = ParserKind.MARKDOWN
    extensions = ("md", "markdown")

    def parse(self, stream: BinaryIO) -> Document:
        text = markdown_to_text(self._decode(stream.read()))
        return Document(text=self._ensure_not_blank(text))
