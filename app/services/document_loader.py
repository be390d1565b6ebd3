"""
Document text extraction.

Turns an uploaded file into the plain text the sensitive-word filter
scans. One reader per supported extension; the heavier parsers are
imported only when their format is requested.
"""

from __future__ import annotations

import os
from typing import Callable, Dict

import pandas as pd

from app.errors import UnsupportedDocumentError


def _read_txt(path: str) -> str:
    # surrogateescape keeps invalid UTF-8 bytes for the filter to pass through
    with open(path, "r", encoding="utf-8", errors="surrogateescape") as f:
        return f.read()


def _read_csv(path: str) -> str:
    """Every cell, header row included, in row order."""
    try:
        df = pd.read_csv(
            path,
            dtype=str,
            header=None,
            keep_default_na=False,
            na_filter=False,
        )
    except pd.errors.EmptyDataError:
        return ""
    return " ".join(cell for cell in df.values.flatten() if cell)


def _read_pdf(path: str) -> str:
    import pdfplumber

    with pdfplumber.open(path) as pdf:
        texts = (page.extract_text() for page in pdf.pages)
        return "\n".join(t for t in texts if t)


def _read_docx(path: str) -> str:
    from docx import Document

    paragraphs = Document(path).paragraphs
    return "\n".join(p.text for p in paragraphs if p.text.strip())


def _read_image(path: str) -> str:
    import pytesseract
    from PIL import Image

    with Image.open(path) as img:
        return pytesseract.image_to_string(img)


_READERS: Dict[str, Callable[[str], str]] = {
    ".txt": _read_txt,
    ".csv": _read_csv,
    ".pdf": _read_pdf,
    ".docx": _read_docx,
    ".png": _read_image,
    ".jpg": _read_image,
    ".jpeg": _read_image,
}


def extract_text(path: str) -> str:
    """Return the text content of the document at *path*."""
    ext = os.path.splitext(path.lower())[1]
    reader = _READERS.get(ext)
    if reader is None:
        raise UnsupportedDocumentError(ext)
    return reader(path)
