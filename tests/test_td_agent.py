import copy
import logging

import numpy as np
import pytest

from threes_td.agents import LearnerState, TDAgent, WeightFileError, extract_tuples
from threes_td.config import DEFAULT_ALPHA
from threes_td.environment import ActionType, ILLEGAL


class ScriptedBoard:
    """Board double whose slides lead to fixed grids and total values."""

    def __init__(self, value, outcomes):
        self.value = value
        self.outcomes = outcomes
        self._grid = np.zeros((4, 4), dtype=np.uint8)

    def copy(self):
        return copy.deepcopy(self)

    def total_value(self):
        return self.value

    def grid(self):
        return self._grid.copy()

    def slide(self, opcode):
        if opcode not in self.outcomes:
            return ILLEGAL
        grid, value = self.outcomes[opcode]
        reward = value - self.value
        self._grid = np.array(grid, dtype=np.uint8)
        self.value = value
        return reward


def set_value(agent, tuples, per_table):
    for table, idx in zip(agent.network.weights, tuples):
        table[idx] = per_table


class TestConfiguration:
    def test_defaults(self):
        agent = TDAgent()
        assert agent.name() == "td"
        assert agent.role() == "slider"
        assert agent.alpha == DEFAULT_ALPHA
        assert agent.state is LearnerState.IDLE
        assert len(agent.network.weights) == 8

    def test_options(self):
        agent = TDAgent("name=learner alpha=0.5 init")
        assert agent.name() == "learner"
        assert agent.alpha == 0.5

    def test_load_and_save(self, tmp_path):
        path = tmp_path / "weights.bin"
        with TDAgent(f"save={path}") as agent:
            agent.network.weights[2][42] = 3.0
        assert path.exists()

        loaded = TDAgent(f"load={path}")
        assert loaded.network.weights[2][42] == 3.0
        assert np.count_nonzero(loaded.network.weights[0]) == 0

    def test_missing_load_file_is_fatal(self, tmp_path):
        with pytest.raises(WeightFileError):
            TDAgent(f"load={tmp_path / 'missing.bin'}")


class TestDecision:
    def test_ties_keep_lower_opcode(self, tie_board):
        for _ in range(3):
            agent = TDAgent()
            action = agent.take_action(tie_board)
            assert action.kind is ActionType.SLIDE
            assert action.opcode == 1

    def test_value_breaks_tie(self, tie_board):
        agent = TDAgent()
        left = extract_tuples(tie_board.afterstate(3))
        agent.network.adjust(left, 0.125)
        assert agent.take_action(tie_board).opcode == 3

    def test_logs_chosen_direction(self, tie_board, caplog):
        caplog.set_level(logging.DEBUG, logger="threes_td.agents.td_agent")
        TDAgent().take_action(tie_board)
        assert "Slide right, score 3.0000" in caplog.text

    def test_board_is_not_mutated(self, tie_board):
        before = tie_board.grid()
        TDAgent().take_action(tie_board)
        assert np.array_equal(tie_board.grid(), before)

    def test_single_legal_move(self):
        afterstate = np.arange(16).reshape(4, 4) % 4
        board = ScriptedBoard(10, {2: (afterstate, 13)})
        agent = TDAgent()

        action = agent.take_action(board)
        assert action.kind is ActionType.SLIDE
        assert action.opcode == 2
        assert agent.state is LearnerState.DECIDED
        assert agent.pending.tuples == extract_tuples(afterstate)
        assert agent.pending.estimate == 0.0

    def test_update_follows_previous_estimate(self):
        first = ScriptedBoard(0, {0: (np.full((4, 4), 3), 5)})
        second = ScriptedBoard(10, {2: (np.full((4, 4), 4), 13)})
        agent = TDAgent("alpha=0.1")

        agent.take_action(first)
        prev_tuples = agent.pending.tuples
        assert agent.pending.estimate == 0.0

        agent.take_action(second)
        # target 3 + 0, previous estimate 0
        for table, idx in zip(agent.network.weights, prev_tuples):
            assert table[idx] == pytest.approx(0.1 * 3)
            assert np.count_nonzero(table) == 1
        assert agent.pending.estimate == 0.0

    def test_first_turn_does_not_learn(self, tie_board):
        agent = TDAgent()
        agent.take_action(tie_board)
        for table in agent.network.weights:
            assert not table.any()

    def test_repeated_afterstate_estimate_includes_update(self, tie_board):
        agent = TDAgent("alpha=0.1")
        agent.take_action(tie_board)
        tuples = agent.pending.tuples
        agent.take_action(tie_board)
        assert agent.pending.tuples == tuples
        assert agent.pending.estimate == pytest.approx(8 * 0.1 * 3)


class TestTermination:
    def test_terminal_flush(self, tie_board):
        agent = TDAgent("alpha=0.1")
        right = extract_tuples(tie_board.afterstate(1))
        set_value(agent, right, 0.625)

        assert agent.take_action(tie_board).opcode == 1
        assert agent.pending.estimate == pytest.approx(5.0)

        agent.terminal_flush()
        assert agent.state is LearnerState.IDLE
        for table, idx in zip(agent.network.weights, right):
            assert table[idx] == pytest.approx(0.625 - 0.5)

    def test_flush_when_idle_is_a_no_op(self):
        agent = TDAgent()
        agent.terminal_flush()
        agent.close_episode()
        assert agent.state is LearnerState.IDLE
        for table in agent.network.weights:
            assert not table.any()

    def test_no_legal_move_on_fresh_agent(self, dead_board):
        agent = TDAgent()
        action = agent.take_action(dead_board)
        assert not action
        assert agent.state is LearnerState.IDLE
        for table in agent.network.weights:
            assert not table.any()

    def test_no_legal_move_flushes_pending(self, tie_board, dead_board):
        agent = TDAgent("alpha=0.1")
        right = extract_tuples(tie_board.afterstate(1))
        set_value(agent, right, 0.625)
        agent.take_action(tie_board)

        action = agent.take_action(dead_board)
        assert action.kind is ActionType.NONE
        assert agent.state is LearnerState.IDLE
        for table, idx in zip(agent.network.weights, right):
            assert table[idx] == pytest.approx(0.125)
            assert np.count_nonzero(table) == 1

    def test_close_episode_flushes(self, tie_board):
        agent = TDAgent("alpha=0.1")
        right = extract_tuples(tie_board.afterstate(1))
        set_value(agent, right, 0.625)
        agent.take_action(tie_board)

        agent.close_episode("end")
        assert agent.state is LearnerState.IDLE
        assert agent.network.estimate(right) == pytest.approx(8 * 0.125)

    def test_open_episode_discards_carried_state(self, tie_board):
        agent = TDAgent()
        agent.take_action(tie_board)
        agent.open_episode("start")
        assert agent.state is LearnerState.IDLE
        agent.take_action(tie_board)
        for table in agent.network.weights:
            assert not table.any()
