"""Zobrist keys and a transposition table keyed by them."""

from __future__ import annotations

from dataclasses import dataclass

from .game import N_GRIDS
from .mt19937 import MT19937_64


@dataclass
class ZobristEntry:
    """A cached search result."""

    key: int
    score: int
    move: int


class ZobristTable:
    """Random per-cell keys plus a cache of search results."""

    def __init__(self, rng: MT19937_64 | None = None):
        rng = rng if rng is not None else MT19937_64()
        self._keys = [(rng.rand(), rng.rand()) for _ in range(N_GRIDS)]
        self._entries: dict[int, ZobristEntry] = {}

    def key_for(self, index: int, player: str) -> int:
        """Return the key for ``player`` occupying cell ``index``."""
        return self._keys[index][1 if player == "X" else 0]

    def get(self, key: int) -> ZobristEntry | None:
        """Return the most recently stored entry for ``key``, if any."""
        return self._entries.get(key)

    def put(self, key: int, score: int, move: int) -> None:
        """Store a result for ``key``."""
        self._entries[key] = ZobristEntry(key, score, move)

    def clear(self) -> None:
        """Forget every stored entry; the keys stay the same."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: int) -> bool:
        return key in self._entries