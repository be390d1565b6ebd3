"""
Code point classification for the sensitive-word scanner.

A *symbol* is decoration (punctuation, whitespace, emoji, ...) that the
scanner skips over inside a partial match. Letters, numbers and anything in
the CJK block are matchable content.
"""

import unicodedata

from app.config import CJK_RANGE_END, CJK_RANGE_START

_SURROGATE_START = 0xD800
_SURROGATE_END = 0xDFFF


def is_symbol(ch: str) -> bool:
    """Return True if *ch* is neither a letter, a number nor a CJK code point."""
    if unicodedata.category(ch)[0] in ("L", "N"):
        return False
    cp = ord(ch)
    return cp < CJK_RANGE_START or cp > CJK_RANGE_END


def is_malformed(ch: str) -> bool:
    """
    Return True for a lone surrogate.

    Undecodable bytes read with ``errors="surrogateescape"`` show up as
    ``U+DC80``–``U+DCFF``; no well-formed text contains surrogates.
    """
    return _SURROGATE_START <= ord(ch) <= _SURROGATE_END
