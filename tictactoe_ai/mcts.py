"""Monte Carlo tree search with UCT selection and random rollouts."""

from __future__ import annotations

import math
import random
import sys

from .game import EMPTY, available_moves, calculate_win_value, check_win, other_player

ITERATIONS = 100_000
EXPLORATION_FACTOR = math.sqrt(2)


class _Node:
    __slots__ = ("move", "player", "n_visits", "score", "parent", "children")

    def __init__(self, move: int, player: str, parent: _Node | None):
        self.move = move
        self.player = player
        self.n_visits = 0
        self.score = 0.0
        self.parent = parent
        self.children: list[_Node] = []


def uct_score(n_total: int, n_visits: int, score: float) -> float:
    """Upper confidence bound of a child; unvisited children rank highest."""
    if n_visits == 0:
        return sys.float_info.max
    return score / n_visits + EXPLORATION_FACTOR * math.sqrt(math.log(n_total) / n_visits)


def _select(node: _Node) -> _Node | None:
    best, best_score = None, -1.0
    for child in node.children:
        value = uct_score(node.n_visits, child.n_visits, child.score)
        if value > best_score:
            best, best_score = child, value
    return best


def _simulate(table: list[str], player: str, rng: random.Random) -> float:
    board = list(table)
    current = player
    while True:
        moves = available_moves(board)
        if not moves:
            break
        board[moves[rng.randrange(len(moves))]] = current
        win = check_win(board)
        if win != EMPTY:
            return calculate_win_value(win, player)
        current = other_player(current)
    return 0.5


def _backpropagate(node: _Node | None, score: float) -> None:
    while node is not None:
        node.n_visits += 1
        node.score += score
        node = node.parent
        score = 1 - score


def _expand(node: _Node, table: list[str]) -> None:
    child_player = other_player(node.player)
    node.children = [_Node(move, child_player, node) for move in available_moves(table)]


def mcts(table, player: str, iterations: int = ITERATIONS, rng: random.Random | None = None) -> int:
    """Return the move for ``player`` visited most often by the search."""
    if check_win(table) != EMPTY:
        raise ValueError("the game is already over")
    rng = rng if rng is not None else random.Random()
    root = _Node(-1, player, None)
    for _ in range(iterations):
        node = root
        board = list(table)
        while True:
            win = check_win(board)
            if win != EMPTY:
                _backpropagate(node, calculate_win_value(win, other_player(node.player)))
                break
            if node.n_visits == 0:
                _backpropagate(node, _simulate(board, node.player, rng))
                break
            if not node.children:
                _expand(node, board)
            node = _select(node)
            board[node.move] = other_player(node.player)
    if not root.children:
        raise ValueError("too few iterations to choose a move")
    return max(root.children, key=lambda child: child.n_visits).move