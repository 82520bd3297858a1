import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..config import DEFAULT_ALPHA, OPCODES, OPCODE_NAMES
from ..environment import Action, Board, ILLEGAL
from .base_agent import Agent
from .ntuple_network import NTupleNetwork, extract_tuples

logger = logging.getLogger(__name__)


class LearnerState(Enum):
    IDLE = 0
    DECIDED = 1


@dataclass(frozen=True)
class PendingCorrection:
    """Afterstate chosen on the previous turn and the value predicted for it."""
    tuples: Tuple[int, ...]
    estimate: float


class TDAgent(Agent):
    """
    Afterstate TD(0) slider backed by an N-tuple network.

    Each turn the agent scores every legal slide as reward + V(afterstate),
    plays the best one, and moves the value of the previous turn's
    afterstate toward that score. When the episode ends the last afterstate
    is moved toward zero.

    Options:
        init          allocate fresh zeroed tables (also done when no load is given)
        load=<path>   read the tables from a weight file at construction
        save=<path>   write the tables to a weight file on close()
        alpha=<float> learning rate, 0.0125 by default
    """

    def __init__(self, args: str = ""):
        super().__init__("name=td role=slider " + args)
        self.alpha = self.numeric("alpha") if self.has("alpha") else DEFAULT_ALPHA
        self.network = NTupleNetwork()
        if self.has("load"):
            self.network.load(self.property("load"))
        else:
            self.network.initialize()
        self._pending: Optional[PendingCorrection] = None

    @property
    def state(self) -> LearnerState:
        return LearnerState.IDLE if self._pending is None else LearnerState.DECIDED

    @property
    def pending(self) -> Optional[PendingCorrection]:
        return self._pending

    def _correct(self, target: float) -> None:
        pending = self._pending
        self.network.adjust(pending.tuples, self.alpha * (target - pending.estimate))

    def take_action(self, board: Board) -> Action:
        """
        Pick the slide with the highest reward + V(afterstate).

        The previous turn's afterstate is corrected toward this turn's best
        score. When no slide is legal the correction uses a target of 0
        (the terminal flush), the agent returns to IDLE and the null action
        is returned.
        """
        before = board.total_value()
        best_op = None
        best_value = 0.0
        best_tuples = None

        for op in OPCODES:
            after = board.copy()
            if after.slide(op) == ILLEGAL:
                continue
            reward = after.total_value() - before
            tuples = extract_tuples(after.grid())
            value = reward + self.network.estimate(tuples)
            if best_op is None or value > best_value:
                best_op, best_value, best_tuples = op, value, tuples

        if best_op is None:
            self.terminal_flush()
            return Action.null()

        if self._pending is not None:
            self._correct(best_value)
        self._pending = PendingCorrection(best_tuples, self.network.estimate(best_tuples))
        logger.debug(f"Slide {OPCODE_NAMES[best_op]}, score {best_value:.4f}")
        return Action.slide(best_op)

    def terminal_flush(self) -> None:
        """Teach the network that the last chosen afterstate led nowhere."""
        if self._pending is None:
            return
        logger.debug(f"Terminal flush, previous estimate {self._pending.estimate:.4f}")
        self._correct(0.0)
        self._pending = None

    def open_episode(self, flag: str = "") -> None:
        if self._pending is not None:
            logger.debug("Discarding carried afterstate from an unfinished episode")
        self._pending = None

    def close_episode(self, flag: str = "") -> None:
        self.terminal_flush()

    def close(self) -> None:
        if self.has("save"):
            self.network.save(self.property("save"))
