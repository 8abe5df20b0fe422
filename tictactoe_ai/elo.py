"""Round-robin matches between the agents with Elo ratings."""

from __future__ import annotations

import argparse
import random

from .game import DRAW, EMPTY, check_win, new_table
from .mcts import mcts
from .negamax import NegamaxAgent
from .rl import MODEL_NAME, load_model

AGENT_NAMES = ("Negamax", "MCTS", "RL")
NEGAMAX, MCTS, RL = range(len(AGENT_NAMES))

N_GAMES = 100
ELO_INIT = 1500
ELO_K = 32


def expected_score(ra: float, rb: float) -> float:
    """Expected score of a player rated ``ra`` against one rated ``rb``."""
    return 1 / (1 + 10 ** ((rb - ra) / 400))


def _check_pair(player1: int, player2: int) -> None:
    for player in (player1, player2):
        if player not in range(len(AGENT_NAMES)):
            raise ValueError(f"unknown agent: {player!r}")
    if player1 == player2:
        raise ValueError("an agent cannot play against itself")


class EloTable:
    """Ratings and win/draw/loss counts of every agent."""

    def __init__(self):
        n = len(AGENT_NAMES)
        self.ratings = [float(ELO_INIT)] * n
        self.wins = [0] * n
        self.draws = [0] * n
        self.losses = [0] * n

    def record(self, player1: int, player2: int, result: int) -> tuple[float, float]:
        """Record a game (1: first player won, 0: draw, -1: second won) and return the new ratings."""
        _check_pair(player1, player2)
        ra, rb = self.ratings[player1], self.ratings[player2]
        if result == 1:
            self.wins[player1] += 1
            self.losses[player2] += 1
            sa, sb = 1.0, 0.0
        elif result == 0:
            self.draws[player1] += 1
            self.draws[player2] += 1
            sa, sb = 0.5, 0.5
        elif result == -1:
            self.wins[player2] += 1
            self.losses[player1] += 1
            sa, sb = 0.0, 1.0
        else:
            raise ValueError(f"invalid result: {result!r}")
        self.ratings[player1] = ra + ELO_K * (sa - expected_score(ra, rb))
        self.ratings[player2] = rb + ELO_K * (sb - expected_score(rb, ra))
        return self.ratings[player1], self.ratings[player2]

    def render(self) -> str:
        """Return the table of ratings and results."""
        rows = [
            f"{'Agent Name':<10} | {'Elo Rating':<10} | {'Win':<10} | {'Draw':<10} | {'Lose':<10}",
            "---------------------------------------------------------",
        ]
        for i, name in enumerate(AGENT_NAMES):
            rows.append(
                f"{name:<10} | {self.ratings[i]:<10.2f} | {self.wins[i]:<10} | "
                f"{self.draws[i]:<10} | {self.losses[i]:<10}"
            )
        return "\n".join(rows) + "\n"


def play_game(player1: int, player2: int, rl_model_path=MODEL_NAME, rng: random.Random | None = None) -> int:
    """Play one game, ``player1`` as 'X'; return 1, 0 or -1 from its point of view."""
    _check_pair(player1, player2)
    rng = rng if rng is not None else random.Random()
    marks = {player1: "X", player2: "O"}
    print(f"Start a game: {AGENT_NAMES[player1]} v.s. {AGENT_NAMES[player2]}")

    rl_agent = load_model(marks[RL], rl_model_path) if RL in marks else None
    negamax_agent = NegamaxAgent() if NEGAMAX in marks else None

    table = new_table()
    current = player1
    while True:
        win = check_win(table)
        if win != EMPTY:
            if win == DRAW:
                return 0
            return 1 if win == "X" else -1
        mark = marks[current]
        if current == NEGAMAX:
            move = negamax_agent.predict(table, mark).move
        elif current == MCTS:
            move = mcts(table, mark, rng=rng)
        else:
            move = rl_agent.play(table, rng)
        table[move] = mark
        current = player2 if current == player1 else player1


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Rate the agents by playing them against each other.")
    parser.add_argument("--games", type=int, default=N_GAMES)
    parser.add_argument("--model", default=MODEL_NAME)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    rng = random.Random(args.seed)
    table = EloTable()
    n = len(AGENT_NAMES)
    for i in range(args.games):
        print(f"Running Game #{i + 1}")
        player1, player2 = rng.randrange(n), rng.randrange(n)
        while player1 == player2:
            player1, player2 = rng.randrange(n), rng.randrange(n)
        result = play_game(player1, player2, args.model, rng)
        table.record(player1, player2, result)
    print(table.render(), end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())