#extract.py - Format Extractors
import io
from enum import Enum
from typing import List

import pandas as pd
from docx import Document
from docx.table import Table
from pypdf import PdfReader

import config
import errors


class DocumentKind(str, Enum):
    PDF = "pdf"
    WORD = "docx"
    EXCEL = "xlsx"

    @classmethod
    def from_filename(cls, filename):
        """Resolves the upload's last extension, rejecting anything unknown."""
        extension = (filename or "").rsplit(".", 1)[-1].lower()
        try:
            return cls(extension)
        except ValueError:
            raise errors.UnsupportedFormat() from None

    @property
    def label(self):
        return {"pdf": "PDF", "docx": "Word", "xlsx": "Excel"}[self.value]


def _page_text(page):
    fragments = []

    def collect(text, cm, tm, font_dict, font_size):
        # line breaks are inserted by pypdf's layout pass, not drawn on the page
        if text.strip("\r\n"):
            fragments.append(text)

    page.extract_text(visitor_text=collect)
    return "".join(fragments)


def pdf_segments(file_bytes) -> List[str]:
    """One segment per page: the page's text fragments with no separator."""
    reader = PdfReader(io.BytesIO(file_bytes))
    return [_page_text(page) for page in reader.pages]


def word_segments(file_bytes) -> List[str]:
    """
    The whole body as a single segment. Paragraphs and table cells are read
    in document order and separated by blank lines.
    """
    doc = Document(io.BytesIO(file_bytes))
    blocks = []
    for block in doc.iter_inner_content():
        if isinstance(block, Table):
            for row in block.rows:
                blocks.extend(cell.text for cell in row.cells)
        else:
            blocks.append(block.text)
    return ["\n\n".join(blocks)]


def _row_text(values):
    cells = ["" if pd.isna(v) else str(v) for v in values]
    while cells and cells[-1] == "":
        cells.pop()
    return " ".join(cells)


def excel_segments(file_bytes) -> List[str]:
    """One segment per sheet: cells joined by spaces, rows by newlines."""
    sheets = pd.read_excel(io.BytesIO(file_bytes), sheet_name=None, header=None, dtype=object)
    return [
        "\n".join(_row_text(row) for row in df.itertuples(index=False))
        for df in sheets.values()
    ]


EXTRACTORS = {
    DocumentKind.PDF: pdf_segments,
    DocumentKind.WORD: word_segments,
    DocumentKind.EXCEL: excel_segments,
}


def extract_segments(kind: DocumentKind, file_bytes: bytes) -> List[str]:
    """
    Runs the extractor for an already resolved kind.
    Every library failure surfaces as errors.ParseError.
    """
    if len(file_bytes) > config.MAX_UPLOAD_BYTES:
        raise errors.ParseError(kind.label, f"file is larger than {config.MAX_UPLOAD_BYTES} bytes")
    try:
        return EXTRACTORS[kind](file_bytes)
    except Exception as e:
        raise errors.ParseError(kind.label, str(e)) from e
