"""
Threes! board and action encoding.
"""

from .board import Board, ILLEGAL, NO_SLIDE, tile_value, tile_score
from .action import Action, ActionType
