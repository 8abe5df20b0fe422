import random
import struct
from collections import defaultdict

import numpy as np
import pytest

from tictactoe_ai.game import EMPTY, N_GRIDS, new_table
from tictactoe_ai.rl import (
    RLAgent,
    hash_to_table,
    load_model,
    state_count,
    store_state_value,
    table_to_hash,
)

DRAW_BOARD = list("XXOOOOXXXXOOOOXX")


def test_empty_board_hashes_to_zero():
    assert table_to_hash(new_table()) == 0


def test_full_x_board_is_last_state():
    assert table_to_hash(["X"] * N_GRIDS) == state_count() - 1


def test_last_cell_is_least_significant():
    assert hash_to_table(1)[-1] == "O"
    assert hash_to_table(2)[-1] == "X"
    assert hash_to_table(2)[:-1] == [EMPTY] * (N_GRIDS - 1)


@pytest.mark.parametrize("board", [DRAW_BOARD, list("X O  X O XO   OX"), new_table()])
def test_hash_round_trip(board):
    assert hash_to_table(table_to_hash(board)) == board


def test_exploit_picks_highest_value():
    board = new_table()
    target = list(board)
    target[7] = "X"
    values = defaultdict(float)
    values[table_to_hash(target)] = 1.0
    agent = RLAgent("X", values)
    assert agent.get_action_exploit(board, random.Random(0)) == 7
    assert board == new_table()


def test_exploit_full_board_returns_minus_one():
    agent = RLAgent("O", defaultdict(float))
    assert agent.get_action_exploit(DRAW_BOARD, random.Random(0)) == -1


def test_play_full_board_raises():
    with pytest.raises(ValueError):
        RLAgent("O", defaultdict(float)).play(list(DRAW_BOARD), random.Random(0))


def test_play_marks_table():
    board = list(DRAW_BOARD)
    board[3] = EMPTY
    move = RLAgent("O", defaultdict(float)).play(board, random.Random(0))
    assert move == 3
    assert board[3] == "O"


def test_ties_are_broken_among_empty_cells():
    board = list(DRAW_BOARD)
    for cell in (0, 5, 10):
        board[cell] = EMPTY
    agent = RLAgent("X", defaultdict(float))
    chosen = {agent.get_action_exploit(board, random.Random(seed)) for seed in range(60)}
    assert chosen <= {0, 5, 10}
    assert len(chosen) > 1


def test_store_writes_o_then_x(tmp_path):
    path = tmp_path / "model.bin"
    o_agent = RLAgent("O", np.array([1.0, 2.0], dtype=np.float32))
    x_agent = RLAgent("X", np.array([3.0, 4.0], dtype=np.float32))
    store_state_value([o_agent, x_agent], path)
    assert np.fromfile(path, dtype="<f4").tolist() == [1.0, 2.0, 3.0, 4.0]


def test_load_short_file_raises(tmp_path):
    path = tmp_path / "model.bin"
    store_state_value(
        [RLAgent("O", np.zeros(3, np.float32)), RLAgent("X", np.zeros(3, np.float32))], path
    )
    with pytest.raises(ValueError):
        load_model("O", path)


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_model("O", tmp_path / "absent.bin")


def test_load_reads_each_players_block(tmp_path):
    path = tmp_path / "model.bin"
    count = state_count()
    with open(path, "wb") as fh:
        fh.truncate(2 * count * 4)
        fh.seek(5 * 4)
        fh.write(struct.pack("<f", 0.25))
        fh.seek((count + 5) * 4)
        fh.write(struct.pack("<f", -0.5))
    o_agent = load_model("O", path)
    x_agent = load_model("X", path)
    assert o_agent.player == "O"
    assert x_agent.player == "X"
    assert len(o_agent.state_value) == count
    assert float(o_agent.state_value[5]) == 0.25
    assert float(x_agent.state_value[5]) == -0.5
    assert float(x_agent.state_value[4]) == 0.0