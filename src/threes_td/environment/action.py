from dataclasses import dataclass
from enum import Enum

from .board import Board, ILLEGAL


class ActionType(Enum):
    NONE = 0
    SLIDE = 1
    PLACE = 2


_SLIDE_NAMES = "URDL"


@dataclass(frozen=True)
class Action:
    """A move for either role: slide the tiles, place a tile, or nothing."""
    kind: ActionType = ActionType.NONE
    opcode: int = -1
    pos: int = -1
    tile: int = 0
    hint: int = 0

    @classmethod
    def null(cls) -> "Action":
        return cls()

    @classmethod
    def slide(cls, opcode: int) -> "Action":
        return cls(kind=ActionType.SLIDE, opcode=opcode)

    @classmethod
    def place(cls, pos: int, tile: int, hint: int) -> "Action":
        return cls(kind=ActionType.PLACE, pos=pos, tile=tile, hint=hint)

    def apply(self, board: Board) -> int:
        """Perform the action on the board and return its reward."""
        if self.kind is ActionType.SLIDE:
            return board.slide(self.opcode)
        if self.kind is ActionType.PLACE:
            return board.place(self.pos, self.tile, self.hint)
        return ILLEGAL

    def __bool__(self):
        return self.kind is not ActionType.NONE

    def __str__(self):
        if self.kind is ActionType.SLIDE:
            return "#" + _SLIDE_NAMES[self.opcode]
        if self.kind is ActionType.PLACE:
            return f"P{self.pos:X}{self.tile}+{self.hint}"
        return "null"
