"""
Keyword automaton.

A prefix tree over Unicode code points. Every path from the root spells a
prefix of one or more inserted keywords; states where a full keyword ends
are flagged ``terminal``.
"""

from __future__ import annotations

from typing import Iterable


class State:
    __slots__ = ("children", "terminal")

    def __init__(self) -> None:
        self.children: dict[str, State] = {}
        self.terminal = False


class Automaton:
    """
    Owns the root state and every state below it.

    Build it completely before handing it to a scanner; once filtering
    starts the tree must be treated as read-only.
    """

    def __init__(self) -> None:
        self.root = State()
        self._size = 0

    @classmethod
    def from_keywords(cls, keywords: Iterable[str]) -> Automaton:
        automaton = cls()
        for keyword in keywords:
            automaton.insert(keyword)
        return automaton

    def insert(self, keyword: str) -> None:
        """
        Add *keyword*, sharing any prefix path already in the tree.

        An empty keyword is ignored: a terminal root would mask every
        position of every input.
        """
        if not keyword:
            return

        state = self.root
        for ch in keyword:
            child = state.children.get(ch)
            if child is None:
                child = State()
                state.children[ch] = child
            state = child

        if not state.terminal:
            state.terminal = True
            self._size += 1

    @staticmethod
    def transition(state: State, ch: str) -> State | None:
        return state.children.get(ch)

    @property
    def is_empty(self) -> bool:
        return self._size == 0

    def __len__(self) -> int:
        return self._size
