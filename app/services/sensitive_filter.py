"""
Sensitive-word scanner.

Walks the input once against a built ``Automaton`` and rewrites every
keyword occurrence to a fixed mask. Symbols inside a partial match are
skipped, so a keyword still matches when punctuation is interleaved
between its characters (``a-b-c`` matches ``abc``).
"""

from __future__ import annotations

from typing import NamedTuple

from app.config import MASK_TOKEN
from app.services.automaton import Automaton
from app.utils.symbols import is_malformed, is_symbol


class FilterOutcome(NamedTuple):
    text: str
    hits: int


class SensitiveFilter:
    """
    Read-only view over an ``Automaton``.

    Any number of threads may call ``filter`` on one instance; the cursor
    lives on the stack of each call.
    """

    def __init__(self, automaton: Automaton, mask: str = MASK_TOKEN) -> None:
        self.automaton = automaton
        self.mask = mask

    def filter(self, text: str) -> str:
        return self.scan(text).text

    def filter_bytes(self, data: bytes) -> bytes:
        """UTF-8 entry point; invalid byte sequences come back unchanged."""
        text = data.decode("utf-8", errors="surrogateescape")
        return self.filter(text).encode("utf-8", errors="surrogateescape")

    def scan(self, text: str) -> FilterOutcome:
        """
        Rewrite *text* and count the substituted masks.

        ``start`` marks the first code point of the uncommitted candidate,
        ``position`` the code point under examination and ``state`` the
        automaton state reached by the candidate. While ``state`` is the
        root, ``start == position``.
        """
        if not text:
            return FilterOutcome(text, 0)

        root = self.automaton.root
        transition = self.automaton.transition
        out: list[str] = []
        hits = 0

        start = position = 0
        state = root
        end = len(text)

        while position < end:
            ch = text[position]
            malformed = is_malformed(ch)

            if malformed and state is root:
                out.append(ch)
                position += 1
                start = position
                continue

            if not malformed and is_symbol(ch):
                if state is root:
                    out.append(ch)
                    start += 1
                position += 1
                continue

            # A malformed unit inside a candidate is a miss like any other
            # unmatched code point.
            nxt = None if malformed else transition(state, ch)

            if nxt is None:
                out.append(text[start])
                position = start + 1
                start = position
                state = root
            elif nxt.terminal:
                out.append(self.mask)
                hits += 1
                position += 1
                start = position
                state = root
            else:
                state = nxt
                position += 1

        out.append(text[start:])
        return FilterOutcome("".join(out), hits)
