import numpy as np

from ..config import OPCODES
from ..environment import Action, Board, ILLEGAL, NO_SLIDE
from ..environment.board import BASIC_TILES
from .base_agent import Agent


class RandomAgent(Agent):
    """Base for agents with randomness; "seed=<int>" makes them reproducible."""

    def __init__(self, args: str = ""):
        super().__init__(args)
        seed = self.numeric("seed", int) if self.has("seed") else None
        self.rng = np.random.default_rng(seed)


class RandomPlacer(RandomAgent):
    """
    Environment agent: places the hinted tile on a random empty cell of the
    edge opposite to the last slide and draws the next hint from the bag.
    """

    # Candidate cells for each value of Board.last()
    SPACES = {
        0: (12, 13, 14, 15),
        1: (0, 4, 8, 12),
        2: (0, 1, 2, 3),
        3: (3, 7, 11, 15),
        NO_SLIDE: tuple(range(16)),
    }

    def __init__(self, args: str = ""):
        super().__init__("name=place role=placer " + args)

    def take_action(self, board: Board) -> Action:
        space = list(self.SPACES[board.last()])
        self.rng.shuffle(space)
        for pos in space:
            if board(pos) != 0:
                continue

            bag = [t for t in BASIC_TILES for _ in range(board.bag(t))]
            self.rng.shuffle(bag)
            tile = board.hint() or bag.pop()
            if not bag:
                bag = list(BASIC_TILES)
                self.rng.shuffle(bag)
            hint = bag.pop()
            return Action.place(pos, tile, hint)
        return Action.null()


class RandomSlider(RandomAgent):
    """Player agent: picks a uniformly random legal slide."""

    def __init__(self, args: str = ""):
        super().__init__("name=slide role=slider " + args)
        self.opcodes = list(OPCODES)

    def take_action(self, board: Board) -> Action:
        self.rng.shuffle(self.opcodes)
        for op in self.opcodes:
            if board.copy().slide(op) != ILLEGAL:
                return Action.slide(op)
        return Action.null()
