import random

import pytest

from tictactoe_ai.elo import (
    AGENT_NAMES,
    ELO_INIT,
    MCTS,
    NEGAMAX,
    RL,
    EloTable,
    expected_score,
    play_game,
)
from tictactoe_ai.rl import state_count


@pytest.fixture
def zero_model(tmp_path):
    path = tmp_path / "model.bin"
    with open(path, "wb") as fh:
        fh.truncate(2 * state_count() * 4)
    return path


def test_expected_score_equal_ratings():
    assert expected_score(ELO_INIT, ELO_INIT) == pytest.approx(0.5)


@pytest.mark.parametrize("ra, rb", [(1500, 1600), (1200, 1800), (2000, 1400)])
def test_expected_scores_sum_to_one(ra, rb):
    assert expected_score(ra, rb) + expected_score(rb, ra) == pytest.approx(1.0)


def test_stronger_player_expected_higher():
    assert expected_score(1700, 1500) > expected_score(1500, 1700)


def test_record_win_updates_counts_and_conserves_rating():
    table = EloTable()
    new_a, new_b = table.record(NEGAMAX, MCTS, 1)
    assert new_a > ELO_INIT > new_b
    assert sum(table.ratings) == pytest.approx(ELO_INIT * len(AGENT_NAMES))
    assert table.wins[NEGAMAX] == 1
    assert table.losses[MCTS] == 1


def test_record_loss_for_first_player():
    table = EloTable()
    table.record(RL, NEGAMAX, -1)
    assert table.wins[NEGAMAX] == 1
    assert table.losses[RL] == 1
    assert table.ratings[NEGAMAX] > table.ratings[RL]


def test_draw_between_equals_keeps_ratings():
    table = EloTable()
    table.record(MCTS, RL, 0)
    assert table.ratings[MCTS] == pytest.approx(ELO_INIT)
    assert table.ratings[RL] == pytest.approx(ELO_INIT)
    assert table.draws[MCTS] == table.draws[RL] == 1


def test_record_rejects_same_player():
    with pytest.raises(ValueError):
        EloTable().record(RL, RL, 1)


def test_record_rejects_bad_result():
    with pytest.raises(ValueError):
        EloTable().record(NEGAMAX, RL, 2)


def test_render_layout():
    table = EloTable()
    lines = table.render().splitlines()
    assert len(lines) == 2 + len(AGENT_NAMES)
    assert lines[0] == "Agent Name | Elo Rating | Win        | Draw       | Lose      "
    assert lines[1] == "---------------------------------------------------------"
    assert lines[2].startswith("Negamax    | 1500.00")


def test_play_game_rejects_same_agent(zero_model):
    with pytest.raises(ValueError):
        play_game(MCTS, MCTS, zero_model, random.Random(0))


def test_play_game_missing_model(tmp_path):
    with pytest.raises(FileNotFoundError):
        play_game(RL, NEGAMAX, tmp_path / "missing.bin", random.Random(0))


def test_play_game_negamax_against_rl(zero_model, capsys):
    result = play_game(RL, NEGAMAX, zero_model, random.Random(1))
    assert result in (-1, 0, 1)
    assert "Start a game: RL v.s. Negamax" in capsys.readouterr().out