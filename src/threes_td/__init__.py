"""Threes! agent with an afterstate N-tuple TD learner."""

__version__ = "0.1.0"

# Import key components for convenient access
from .environment import Board, Action, ActionType, ILLEGAL
from .agents import (
    Agent, RandomPlacer, RandomSlider, TDAgent, NTupleNetwork,
    WeightFileError, extract_tuples, make_agent,
)
from .config import set_seeds
