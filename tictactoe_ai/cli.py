"""Interactive game of a human ('X') against a computer agent ('O')."""

from __future__ import annotations

import argparse
import random
import sys

from .game import (
    BOARD_SIZE,
    DRAW,
    EMPTY,
    check_win,
    get_col,
    get_index,
    get_row,
    new_table,
    other_player,
    render_board,
)
from .mcts import mcts
from .negamax import NegamaxAgent
from .rl import MODEL_NAME, load_model

AGENTS = ("negamax", "mcts", "rl")


def parse_move(line: str) -> int:
    """Parse a cell such as 'b3' into a board index; raise ValueError if invalid."""
    x = y = 0
    parse_x = True
    for i, ch in enumerate(line):
        if ch.isascii() and ch.isalpha() and parse_x:
            if i > 0:
                raise ValueError("Invalid operation: multiple column alphabets detected")
            x = x * 26 + (ord(ch.lower()) - ord("a") + 1)
            if x > BOARD_SIZE:
                raise ValueError("Invalid operation: index exceeds board size")
            continue
        if x == 0:
            raise ValueError("Invalid operation: No leading alphabet")
        parse_x = False
        if ch in "0123456789":
            y = y * 10 + int(ch)
            if y == 0:
                raise ValueError("Invalid operation: index cannot be 0")
            if y > BOARD_SIZE:
                raise ValueError("Invalid operation: index exceeds board size")
            continue
        raise ValueError("Invalid operation")
    if x == 0:
        raise ValueError("Invalid operation: No leading alphabet")
    if parse_x:
        raise ValueError("Invalid operation: No row number")
    return get_index(y - 1, x - 1)


def format_moves(moves) -> str:
    """Return the move record as 'Moves: A1 -> B2 -> ...'."""
    return "Moves: " + " -> ".join(
        f"{chr(ord('A') + get_col(move))}{1 + get_row(move)}" for move in moves
    )


def _read_move(player: str) -> int | None:
    while True:
        try:
            line = input(f"{player}> ")
        except EOFError:
            return None
        if not line:
            continue
        try:
            return parse_move(line)
        except ValueError as exc:
            print(exc)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Play tic-tac-toe against the computer.")
    parser.add_argument("--agent", choices=AGENTS, default="negamax")
    parser.add_argument("--model", default=MODEL_NAME)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    rng = random.Random(args.seed)
    table = new_table()
    turn, ai = "X", "O"
    moves: list[int] = []

    rl_agent = negamax_agent = None
    if args.agent == "rl":
        try:
            rl_agent = load_model(ai, args.model)
        except (OSError, ValueError) as exc:
            print(f"Failed to open state value table, train first: {exc}", file=sys.stderr)
            return 1
    elif args.agent == "negamax":
        negamax_agent = NegamaxAgent()

    while True:
        win = check_win(table)
        if win == DRAW:
            print(render_board(table), end="")
            print("It is a draw!")
            break
        if win != EMPTY:
            print(render_board(table), end="")
            print(f"{win} won!")
            break

        if turn == ai:
            if rl_agent is not None:
                move = rl_agent.play(table, rng)
            elif negamax_agent is not None:
                move = negamax_agent.predict(table, ai).move
            else:
                move = mcts(table, ai, rng=rng)
            if move != -1:
                table[move] = ai
                moves.append(move)
        else:
            print(render_board(table), end="")
            while True:
                move = _read_move(turn)
                if move is None:
                    return 1
                if table[move] == EMPTY:
                    break
                print("Invalid operation: the position has been marked")
            table[move] = turn
            moves.append(move)
        turn = other_player(turn)

    print(format_moves(moves))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())