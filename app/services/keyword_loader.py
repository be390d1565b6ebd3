"""
Keyword source.

Reads the forbidden-phrase list (one keyword per line, or the first column
of a CSV sheet) and builds an ``Automaton`` from it.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, List

import pandas as pd

from app.config import KEYWORD_EXTENSIONS
from app.errors import KeywordLoadError
from app.services.automaton import Automaton

logger = logging.getLogger(__name__)


def iter_keywords(lines: Iterable[str]) -> Iterator[str]:
    """Yield each line stripped of surrounding whitespace, skipping blanks."""
    for line in lines:
        word = line.strip()
        if word:
            yield word


def _read_txt(path: Path) -> List[str]:
    with open(path, "r", encoding="utf-8") as f:
        return list(iter_keywords(f))


def _read_csv(path: Path) -> List[str]:
    # Words such as "NA" or "null" are keywords, not missing values.
    df = pd.read_csv(
        path,
        dtype=str,
        header=None,
        skip_blank_lines=True,
        keep_default_na=False,
        na_filter=False,
    )
    if df.empty:
        return []
    return list(iter_keywords(df.iloc[:, 0]))


def load_keywords(path: str | os.PathLike) -> List[str]:
    """
    Return the keywords stored at *path*.

    Raises ``KeywordLoadError`` when the file is missing, unreadable,
    not valid UTF-8 or of an unsupported type.
    """
    path = Path(path)
    ext = path.suffix.lower()

    if ext not in KEYWORD_EXTENSIONS:
        raise KeywordLoadError(
            path,
            f"unsupported extension '{ext}'. Allowed: {', '.join(sorted(KEYWORD_EXTENSIONS))}",
        )

    try:
        if ext == ".csv":
            keywords = _read_csv(path)
        else:
            keywords = _read_txt(path)
    except pd.errors.EmptyDataError:
        keywords = []
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
        raise KeywordLoadError(path, str(exc)) from exc

    logger.info("Loaded %d keywords from %s", len(keywords), path)
    return keywords


def build_automaton(path: str | os.PathLike) -> Automaton:
    return Automaton.from_keywords(load_keywords(path))
