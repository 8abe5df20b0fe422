"""Tic-tac-toe on a 4x4 board with negamax, MCTS and reinforcement-learning agents."""

__version__ = "0.1.0"
__all__ = ["__version__"]