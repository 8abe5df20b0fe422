# tictactoe-ai

Tic-tac-toe on a 4×4 board where three in a row wins, with three computer
opponents:

- **Negamax** (`tictactoe_ai.negamax.NegamaxAgent`): iterative-deepening
  search to depth 6 with principal-variation windows, history-heuristic move
  ordering and a Zobrist transposition table.
- **MCTS** (`tictactoe_ai.mcts.mcts`): Monte Carlo tree search with UCT
  selection and random playouts, 100 000 iterations per move by default.
- **RL** (`tictactoe_ai.rl.RLAgent`): a state-value agent trained by
  self-play, with its values kept in a binary model file.

The board size and the length of a winning line are fixed by `BOARD_SIZE`
and `GOAL` in `tictactoe_ai.game`; no command changes them.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Playing

```
ttt
```

You play `X` and move first; the computer plays `O`. Enter a move as a column
letter followed by a row number, for example `b3`. Invalid input is explained
and asked for again; end of input quits. The board is redrawn before each of
your turns and at the end, after which the move list is printed, such as
`Moves: B3 -> A1 -> C2`.

Options:

- `--agent {negamax,mcts,rl}`: the opponent (default `negamax`).
- `--model PATH`: the model file for the RL agent (default `state_value.bin`).
- `--seed N`: seed for the random choices of the MCTS and RL agents.

## Training the RL agent

```
ttt-train
```

Plays self-play episodes between an `O` agent and an `X` agent, whose values
start from a scaled heuristic board score, and writes both value tables as
little-endian 32-bit floats (`O` first, then `X`) to `state_value.bin`. With
3^16 states per player the file is about 344 MB.

Options: `--episodes N` (default 10000), `--output PATH`, `--seed N`, and
`--epsilon-greedy` to explore random moves with a decaying probability.

## Rating the agents

```
ttt-elo
```

Plays games between randomly chosen pairs of different agents, the first of
the pair as `X`, and prints a table of Elo ratings (start 1500, K = 32) with
each agent's wins, draws and losses. Games that include the RL agent need a
trained model file. MCTS runs its full iteration count on every move, so a
tournament takes a while.

Options: `--games N` (default 100), `--model PATH`, `--seed N`.

## Using the library

```python
from tictactoe_ai.game import new_table, check_win, render_board
from tictactoe_ai.negamax import NegamaxAgent
from tictactoe_ai.mt19937 import MT19937_64

table = new_table()
agent = NegamaxAgent(MT19937_64(5489))
move = agent.predict(table, "O")
print(move.move, move.score)
```

- `tictactoe_ai.game`: `new_table`, `check_win` (returns `"X"` or `"O"` for a
  winner, `"D"` for a draw and `" "` while the game is open),
  `available_moves`, `get_score`, `calculate_win_value`, `render_board`.
- `tictactoe_ai.mcts.mcts(table, player, iterations, rng)` returns the most
  visited move; it raises `ValueError` if the game is already over.
- `tictactoe_ai.rl`: `load_model(player, path)` returns an `RLAgent`;
  `store_state_value`, `table_to_hash` and `hash_to_table` handle the model
  format.
- `tictactoe_ai.train.Trainer` runs episodes with `train_episode` and writes
  the model with `store`.
- `tictactoe_ai.elo`: `EloTable`, `expected_score` and `play_game`.
- `tictactoe_ai.mt19937.MT19937_64` is the 64-bit Mersenne Twister that seeds
  the Zobrist keys.