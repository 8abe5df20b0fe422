"""Self-play training of the two state-value agents."""

from __future__ import annotations

import argparse
import random

import numpy as np

from .game import (
    EMPTY,
    LINES,
    N_GRIDS,
    available_moves,
    calculate_win_value,
    check_win,
    get_score,
    new_table,
)
from .rl import MODEL_NAME, RLAgent, hash_to_table, state_count, table_to_hash

INITIAL_MULTIPLIER = 0.0001
LEARNING_RATE = 0.02
NUM_EPISODE = 10000
EPSILON_GREEDY = False
MONTE_CARLO = True

GAMMA = 0.99
REWARD_TRADEOFF = 1.0

EPSILON_START = 0.5
EPSILON_END = 0.001

_CHUNK = 1 << 18
_DTYPE = np.dtype("<f4")
_CODES = {"O": 1, "X": 2}
_SEGMENTS = np.array(
    [list(line.cells(i, j)) for line in LINES for i, j in line.starts()],
    dtype=np.intp,
)


def _f32(value: float) -> float:
    return float(np.float32(value))


class _StateValues:
    """Heuristic initial values for every state, overlaid with learned values."""

    def __init__(self, player: str):
        self.player = player
        self.learned: dict[int, float] = {}

    def __len__(self) -> int:
        return state_count()

    def _check(self, hash_value) -> int:
        hash_value = int(hash_value)
        if not 0 <= hash_value < state_count():
            raise IndexError(f"state {hash_value} out of range")
        return hash_value

    def __getitem__(self, hash_value) -> float:
        hash_value = self._check(hash_value)
        if hash_value in self.learned:
            return self.learned[hash_value]
        board = hash_to_table(hash_value)
        return _f32(get_score(board, self.player) * INITIAL_MULTIPLIER)

    def __setitem__(self, hash_value, value) -> None:
        self.learned[self._check(hash_value)] = _f32(value)

    def chunk(self, start: int, stop: int) -> np.ndarray:
        """Return the values of states ``start`` to ``stop - 1`` as float32."""
        start, stop = max(start, 0), min(stop, state_count())
        idx = np.arange(start, stop, dtype=np.int64)
        digits = np.empty((idx.size, N_GRIDS), dtype=np.int8)
        for k in range(N_GRIDS - 1, -1, -1):
            digits[:, k] = idx % 3
            idx //= 3
        own_code = _CODES[self.player]
        opp_code = 3 - own_code
        cells = digits[:, _SEGMENTS]
        own = (cells == own_code).sum(axis=2, dtype=np.int32)
        opp = (cells == opp_code).sum(axis=2, dtype=np.int32)
        positive = np.where((own > 0) & (opp == 0), np.power(10, np.maximum(own - 1, 0)), 0)
        negative = np.where((opp > 0) & (own == 0), np.power(10, np.maximum(opp - 1, 0)), 0)
        scores = (positive - negative).sum(axis=1, dtype=np.int64)
        values = (scores * INITIAL_MULTIPLIER).astype(_DTYPE)
        if self.learned:
            keys = np.fromiter(self.learned.keys(), dtype=np.int64, count=len(self.learned))
            learned = np.fromiter(self.learned.values(), dtype=_DTYPE, count=len(self.learned))
            selected = (keys >= start) & (keys < stop)
            values[keys[selected] - start] = learned[selected]
        return values

    def chunks(self):
        """Yield the whole value table in consecutive float32 blocks."""
        total = state_count()
        for start in range(0, total, _CHUNK):
            yield self.chunk(start, start + _CHUNK)

    def __array__(self, dtype=None, copy=None):
        return np.concatenate(list(self.chunks())).astype(dtype or _DTYPE)


def init_agent(player: str) -> RLAgent:
    """Create an agent whose values start at the scaled heuristic score."""
    if player not in _CODES:
        raise ValueError(f"not a player: {player!r}")
    return RLAgent(player, _StateValues(player))


class Trainer:
    """Trains an 'O' and an 'X' agent against each other."""

    def __init__(self, rng: random.Random | None = None, epsilon_greedy: bool = EPSILON_GREEDY):
        self.rng = rng if rng is not None else random.Random()
        self.epsilon_greedy = epsilon_greedy
        self.agents = (init_agent("O"), init_agent("X"))
        self.epsilon = EPSILON_START
        self._decay = (EPSILON_END / EPSILON_START) ** (1.0 / (NUM_EPISODE * N_GRIDS))

    def _choose(self, table: list[str], agent: RLAgent) -> int:
        if not self.epsilon_greedy:
            return agent.get_action_exploit(table, self.rng)
        if self.rng.random() < self.epsilon:
            moves = available_moves(table)
            return moves[self.rng.randrange(len(moves))]
        move = agent.get_action_exploit(table, self.rng)
        self.epsilon *= self._decay
        return move

    def update_state_value(self, after_state_hash: int, reward: float, next_value: float, agent: RLAgent) -> float:
        """Move the value of an after-state toward its target and return what feeds the previous step."""
        target = _f32(reward - GAMMA * next_value)
        old = agent.state_value[after_state_hash]
        agent.state_value[after_state_hash] = (1 - LEARNING_RATE) * old + LEARNING_RATE * target
        if MONTE_CARLO:
            return target
        return agent.state_value[after_state_hash]

    def train_episode(self, iteration: int) -> str:
        """Play one self-play game, update the values and return the outcome."""
        table = new_table()
        turn = 0 if iteration & 1 else 1
        hashes: list[int] = []
        rewards: list[float] = []
        win = EMPTY
        while win == EMPTY:
            agent = self.agents[turn]
            move = self._choose(table, agent)
            table[move] = agent.player
            win = check_win(table)
            hashes.append(table_to_hash(table))
            rewards.append(
                _f32(
                    (1 - REWARD_TRADEOFF) * get_score(table, agent.player)
                    + REWARD_TRADEOFF * calculate_win_value(win, agent.player)
                )
            )
            turn ^= 1
        last_mover = self.agents[turn ^ 1]
        next_value = 0.0
        for hash_value, reward in zip(reversed(hashes), reversed(rewards)):
            next_value = self.update_state_value(hash_value, reward, next_value, last_mover)
        return win

    def store(self, path=MODEL_NAME) -> None:
        """Write the 'O' values followed by the 'X' values."""
        with open(path, "wb") as fh:
            for agent in self.agents:
                for block in agent.state_value.chunks():
                    fh.write(block.astype(_DTYPE, copy=False).tobytes())


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Train the reinforcement learning agents.")
    parser.add_argument("--episodes", type=int, default=NUM_EPISODE)
    parser.add_argument("--output", default=MODEL_NAME)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--epsilon-greedy", action="store_true", default=EPSILON_GREEDY)
    args = parser.parse_args(argv)
    if args.episodes <= 0:
        parser.error("the number of episodes must be greater than 0")
    trainer = Trainer(random.Random(args.seed), args.epsilon_greedy)
    for i in range(args.episodes):
        trainer.train_episode(i)
    trainer.store(args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())