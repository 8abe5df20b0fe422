import random

import pytest

from tictactoe_ai.game import get_score
from tictactoe_ai.rl import hash_to_table, state_count, table_to_hash
from tictactoe_ai.train import (
    EPSILON_START,
    GAMMA,
    INITIAL_MULTIPLIER,
    Trainer,
    init_agent,
)

SAMPLE_HASHES = [0, 1, 2, 100, 12345, 777777, 9999999, state_count() - 1]


@pytest.mark.parametrize("player", ["O", "X"])
@pytest.mark.parametrize("hash_value", SAMPLE_HASHES)
def test_initial_value_is_scaled_heuristic(player, hash_value):
    agent = init_agent(player)
    expected = get_score(hash_to_table(hash_value), player) * INITIAL_MULTIPLIER
    assert agent.state_value[hash_value] == pytest.approx(expected, rel=1e-6, abs=1e-9)


@pytest.mark.parametrize("player", ["O", "X"])
@pytest.mark.parametrize("start", [0, 12345, 5000000, state_count() - 300])
def test_chunk_matches_lookup(player, start):
    values = init_agent(player).state_value
    block = values.chunk(start, start + 300)
    assert len(block) == 300
    for offset, value in enumerate(block):
        assert float(value) == pytest.approx(values[start + offset], rel=1e-6, abs=1e-9)


def test_chunk_includes_learned_values():
    agent = init_agent("X")
    agent.state_value[50] = 0.75
    block = agent.state_value.chunk(40, 60)
    assert float(block[10]) == pytest.approx(0.75)
    assert agent.state_value[50] == pytest.approx(0.75)


def test_init_agent_rejects_unknown_player():
    with pytest.raises(ValueError):
        init_agent("Z")


def test_state_value_index_out_of_range():
    agent = init_agent("O")
    with pytest.raises(IndexError):
        agent.state_value[state_count()]


def test_update_monte_carlo_return_and_direction():
    trainer = Trainer(random.Random(0))
    agent = trainer.agents[0]
    h = table_to_hash(["O"] + [" "] * 15)
    old = agent.state_value[h]
    returned = trainer.update_state_value(h, 1.0, 0.0, agent)
    assert returned == pytest.approx(1.0)
    assert old < agent.state_value[h] < 1.0


def test_update_discounts_next_value():
    trainer = Trainer(random.Random(0))
    agent = trainer.agents[1]
    returned = trainer.update_state_value(3, 0.0, 1.0, agent)
    assert returned == pytest.approx(-GAMMA, rel=1e-6)


def test_train_episode_outcome_and_learning():
    trainer = Trainer(random.Random(3))
    outcomes = [trainer.train_episode(i) for i in range(4)]
    assert set(outcomes) <= {"X", "O", "D"}
    learned = sum(len(agent.state_value.learned) for agent in trainer.agents)
    assert learned > 0


def test_training_is_deterministic_for_a_seed():
    first = Trainer(random.Random(11))
    second = Trainer(random.Random(11))
    assert [first.train_episode(i) for i in range(3)] == [second.train_episode(i) for i in range(3)]
    assert first.agents[0].state_value.learned == second.agents[0].state_value.learned


def test_epsilon_greedy_decays_epsilon():
    trainer = Trainer(random.Random(5), True)
    for i in range(5):
        assert trainer.train_episode(i) in {"X", "O", "D"}
    assert 0 < trainer.epsilon < EPSILON_START