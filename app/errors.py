"""
Exceptions raised by the collaborators around the filter core.

The automaton and the scanner never raise; only loading keywords and
reading uploaded documents can fail.
"""

from __future__ import annotations

from pathlib import Path


class KeywordLoadError(Exception):
    """The keyword source could not be read."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot load keywords from '{self.path}': {reason}")


class UnsupportedDocumentError(Exception):
    """The uploaded document has an extension we cannot extract text from."""

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__(f"Unsupported file type: '{extension}'")
