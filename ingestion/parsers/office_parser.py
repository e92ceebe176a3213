"""
MS Office parser.
Extracts text from Word, PowerPoint and Excel (Office Open XML) files.

The libraries come from the optional ``office`` extra and are imported
when a document of their format is parsed.
"""
from io import BytesIO
from typing import BinaryIO, Callable, Dict, List, Tuple
import logging
import zipfile

from ingestion.parsers.base_parser import BaseParser, ParserKind, ParseError
from domain.models import Document

logger = logging.getLogger(__name__)

# Part that identifies each format inside the zip container
_MARKERS: Tuple[Tuple[str, str], ...] = (
    ("word/document.xml", "docx"),
    ("ppt/presentation.xml", "pptx"),
    ("xl/workbook.xml", "xlsx"),
)


def detect_office_format(data: bytes) -> str:
    """
    Return ``docx``, ``pptx`` or ``xlsx`` for an Office Open XML package.

    Raises:
        ParseError: If the bytes are not a zip archive or not an Office package
    """
    try:
        with zipfile.ZipFile(BytesIO(data)) as archive:
            names = set(archive.namelist())
    except zipfile.BadZipFile as e:
        raise ParseError("MS_OFFICE parser expects an Office Open XML file (docx, pptx, xlsx)") from e

    for marker, office_format in _MARKERS:
        if marker in names:
            return office_format
    raise ParseError("Zip archive is not a Word, PowerPoint or Excel document")


def _docx_text(data: bytes) -> Tuple[str, Dict]:
    from docx import Document as WordDocument

    doc = WordDocument(BytesIO(data))
    paragraphs = [p.text for p in doc.paragraphs if p.text.strip()]
    for table in doc.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                paragraphs.append("\t".join(cells))
    return "\n\n".join(paragraphs), {"paragraph_count": len(doc.paragraphs)}


def _pptx_text(data: bytes) -> Tuple[str, Dict]:
    from pptx import Presentation

    presentation = Presentation(BytesIO(data))
    slides: List[str] = []
    for slide in presentation.slides:
        lines = [
            shape.text_frame.text
            for shape in slide.shapes
            if shape.has_text_frame and shape.text_frame.text.strip()
        ]
        if lines:
            slides.append("\n".join(lines))
    return "\n\n".join(slides), {"slide_count": len(presentation.slides)}


def _xlsx_text(data: bytes) -> Tuple[str, Dict]:
    from openpyxl import load_workbook

    workbook = load_workbook(BytesIO(data), read_only=True, data_only=True)
    try:
        sheets: List[str] = []
        for sheet in workbook.worksheets:
            rows = []
            for row in sheet.iter_rows(values_only=True):
                cells = [str(value) for value in row if value is not None and str(value).strip()]
                if cells:
                    rows.append("\t".join(cells))
            if rows:
                sheets.append(f"{sheet.title}\n" + "\n".join(rows))
        return "\n\n".join(sheets), {"sheet_count": len(workbook.worksheets)}
    finally:
        workbook.close()


_EXTRACTORS: Dict[str, Callable[[bytes], Tuple[str, Dict]]] = {
    "docx": _docx_text,
    "pptx": _pptx_text,
    "xlsx": _xlsx_text,
}


class MsOfficeParser(BaseParser):
    """Parser for .docx, .pptx and .xlsx files"""

    kind = ParserKind.MS_OFFICE
    extensions = ("docx", "pptx", "xlsx")

    def parse(self, stream: BinaryIO) -> Document:
        """
        The format is detected from the package contents, not the file name.

        Raises:
            ParseError: If the file is not an Office document, the library for
                its format is not installed, or the content is blank
        """
        data = stream.read()
        office_format = detect_office_format(data)

        try:
            text, metadata = _EXTRACTORS[office_format](data)
        except ImportError as e:
            raise ParseError(
                f"Parsing {office_format} files requires the 'office' extra: {e}"
            ) from e
        except Exception as e:
            raise ParseError(f"Error parsing {office_format} document: {e}") from e

        metadata["office_format"] = office_format
        document = Document(text=self._ensure_not_blank(text), metadata=metadata)
        logger.info(f"Parsed {office_format} document ({len(text)} chars)")
        return document
