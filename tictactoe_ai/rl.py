"""State-value reinforcement learning agent and its model file."""

from __future__ import annotations

import os
import random
from dataclasses import dataclass
from typing import Any

import numpy as np

from .game import EMPTY, N_GRIDS

MODEL_NAME = "state_value.bin"
_CELL_CODES = {EMPTY: 0, "O": 1, "X": 2}
_CELLS = " OX"
_DTYPE = np.dtype("<f4")
_LOWEST = float(np.finfo(np.float32).min)


def state_count() -> int:
    """Number of distinct board encodings."""
    return 3**N_GRIDS


def table_to_hash(table) -> int:
    """Encode a board as a base-3 number, first cell most significant."""
    value = 0
    for cell in table:
        value = value * 3 + _CELL_CODES.get(cell, 0)
    return value


def hash_to_table(hash_value: int) -> list[str]:
    """Decode a base-3 number into a board."""
    cells = []
    for _ in range(N_GRIDS):
        hash_value, digit = divmod(hash_value, 3)
        cells.append(_CELLS[digit])
    cells.reverse()
    return cells


@dataclass(eq=False)
class RLAgent:
    """A player choosing the move whose after-state has the highest value.

    ``state_value`` is indexed by :func:`table_to_hash` of a board.
    """

    player: str
    state_value: Any

    def get_action_exploit(self, table, rng: random.Random | None = None) -> int:
        """Return the best-valued empty cell, ties broken at random; -1 if none."""
        rng = rng if rng is not None else random.Random()
        board = list(table)
        best_move, best_value = -1, _LOWEST
        candidates = 1
        for i, cell in enumerate(board):
            if cell != EMPTY:
                continue
            board[i] = self.player
            value = float(self.state_value[table_to_hash(board)])
            board[i] = EMPTY
            if value == best_value:
                candidates += 1
                if rng.randrange(candidates) == 0:
                    best_move = i
            elif value > best_value:
                candidates = 1
                best_value = value
                best_move = i
        return best_move

    def play(self, table, rng: random.Random | None = None) -> int:
        """Choose a move, mark it on ``table`` and return it."""
        move = self.get_action_exploit(table, rng)
        if move < 0:
            raise ValueError("no empty cell to play")
        table[move] = self.player
        return move


def load_model(player: str, path=MODEL_NAME) -> RLAgent:
    """Load the state values of ``player`` ('O' first, then 'X') from a model file."""
    count = state_count()
    block = count * _DTYPE.itemsize
    offset = 0 if player == "O" else block
    if os.path.getsize(path) < offset + block:
        raise ValueError(f"model file {os.fspath(path)!r} is too short")
    values = np.memmap(path, dtype=_DTYPE, mode="c", offset=offset, shape=(count,))
    return RLAgent(player, values)


def store_state_value(agents, path=MODEL_NAME) -> None:
    """Write the state values of the 'O' agent and then the 'X' agent."""
    first, second = agents
    with open(path, "wb") as fh:
        for agent in (first, second):
            fh.write(np.asarray(agent.state_value, dtype=_DTYPE).tobytes())