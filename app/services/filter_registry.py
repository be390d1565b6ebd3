"""
Holder of the active ``SensitiveFilter``.

A new keyword set is always built into a fresh automaton and swapped in
as a whole; the tree a running scan reads from is never mutated.
"""

from __future__ import annotations

import logging
import os
import threading
from typing import Iterable

from app.config import MASK_TOKEN
from app.errors import KeywordLoadError
from app.services.automaton import Automaton
from app.services.keyword_loader import build_automaton
from app.services.sensitive_filter import SensitiveFilter

logger = logging.getLogger(__name__)


class FilterRegistry:
    def __init__(self, keyword_path: str | os.PathLike, mask: str = MASK_TOKEN) -> None:
        self.keyword_path = keyword_path
        self.mask = mask
        self.load_error: str | None = None
        self._filter: SensitiveFilter | None = None
        self._lock = threading.Lock()
        # serialises build-and-install across reload/replace calls
        self._reload_lock = threading.Lock()

    def current(self) -> SensitiveFilter:
        """
        Return the active filter, loading the keyword source on first use.

        If that first load fails the registry falls back to an empty
        automaton, which leaves every text unchanged.
        """
        active = self._filter
        if active is not None:
            return active

        with self._lock:
            if self._filter is None:
                try:
                    automaton = build_automaton(self.keyword_path)
                except KeywordLoadError as exc:
                    logger.exception("Keyword load failed, filtering disabled")
                    self.load_error = str(exc)
                    automaton = Automaton()
                self._filter = SensitiveFilter(automaton, self.mask)
            return self._filter

    def reload(self) -> SensitiveFilter:
        """
        Rebuild from the keyword source and swap it in.

        On ``KeywordLoadError`` the previous filter stays active and the
        error propagates.
        """
        with self._reload_lock:
            automaton = build_automaton(self.keyword_path)
            return self._install(automaton)

    def replace(self, keywords: Iterable[str]) -> SensitiveFilter:
        """Install a filter built from an in-memory keyword list."""
        with self._reload_lock:
            return self._install(Automaton.from_keywords(keywords))

    @property
    def degraded(self) -> bool:
        """True while the identity fallback from a failed first load is active."""
        return self.load_error is not None

    def filter_content(self, text: str) -> str:
        return self.current().filter(text)

    def _install(self, automaton: Automaton) -> SensitiveFilter:
        new_filter = SensitiveFilter(automaton, self.mask)
        with self._lock:
            self._filter = new_filter
            self.load_error = None
        logger.info("Installed sensitive-word filter with %d keywords", len(automaton))
        return new_filter
