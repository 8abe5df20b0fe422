"""Negamax search with principal-variation windows and a transposition table."""

from __future__ import annotations

from dataclasses import dataclass

from .game import EMPTY, N_GRIDS, available_moves, check_win, get_score, other_player
from .mt19937 import MT19937_64
from .zobrist import ZobristTable

MAX_SEARCH_DEPTH = 6
_LOSS_SCORE = -10000
_WINDOW = 100000


@dataclass(frozen=True)
class Move:
    """A search result: the value of the position and the chosen cell (-1 if none)."""

    score: int
    move: int


def _truncated_mean(total: int, count: int) -> int:
    quotient = abs(total) // count
    return quotient if total >= 0 else -quotient


class NegamaxAgent:
    """Iterative-deepening negamax player."""

    def __init__(self, rng: MT19937_64 | None = None):
        self._zobrist = ZobristTable(rng)
        self._hash = 0
        self._history_sum = [0] * N_GRIDS
        self._history_count = [0] * N_GRIDS

    def _history_value(self, move: int) -> int:
        count = self._history_count[move]
        if not count:
            return 0
        return _truncated_mean(self._history_sum[move], count)

    def _negamax(self, table: list[str], depth: int, player: str, alpha: int, beta: int) -> Move:
        if check_win(table) != EMPTY or depth == 0:
            return Move(get_score(table, player), -1)
        entry = self._zobrist.get(self._hash)
        if entry is not None:
            return Move(entry.score, entry.move)

        best_score, best_move = _LOSS_SCORE, -1
        opponent = other_player(player)
        moves = sorted(available_moves(table), key=lambda m: -self._history_value(m))
        for n, move in enumerate(moves):
            key = self._zobrist.key_for(move, player)
            table[move] = player
            self._hash ^= key
            if n == 0:
                score = -self._negamax(table, depth - 1, opponent, -beta, -alpha).score
            else:
                score = -self._negamax(table, depth - 1, opponent, -alpha - 1, -alpha).score
                if alpha < score < beta:
                    score = -self._negamax(table, depth - 1, opponent, -beta, -score).score
            self._history_count[move] += 1
            self._history_sum[move] += score
            if score > best_score:
                best_score, best_move = score, move
            table[move] = EMPTY
            self._hash ^= key
            alpha = max(alpha, score)
            if alpha >= beta:
                break

        self._zobrist.put(self._hash, best_score, best_move)
        return Move(best_score, best_move)

    def predict(self, table, player: str) -> Move:
        """Search the position for ``player`` and return the best move found."""
        self._history_sum = [0] * N_GRIDS
        self._history_count = [0] * N_GRIDS
        board = list(table)
        result = Move(_LOSS_SCORE, -1)
        for depth in range(2, MAX_SEARCH_DEPTH + 1, 2):
            result = self._negamax(board, depth, player, -_WINDOW, _WINDOW)
            self._zobrist.clear()
        return result