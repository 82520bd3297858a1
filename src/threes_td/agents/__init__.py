"""
Agents for both roles of a Threes! game: random baselines and the
afterstate TD learner.
"""

from .base_agent import Agent, parse_properties
from .random_agents import RandomAgent, RandomPlacer, RandomSlider
from .ntuple_network import NTupleNetwork, WeightFileError, extract_tuples
from .td_agent import TDAgent, LearnerState, PendingCorrection

AGENT_TYPES = {
    "placer": RandomPlacer,
    "slider": RandomSlider,
    "learner": TDAgent,
}


def make_agent(kind: str, args: str = "") -> Agent:
    """
    Build an agent by kind.

    Args:
        kind: one of "placer", "slider" or "learner"
        args: "key=value" options passed to the agent

    Returns:
        The configured agent
    """
    if kind not in AGENT_TYPES:
        raise ValueError(f"Unknown agent kind: {kind!r} (expected one of {sorted(AGENT_TYPES)})")
    return AGENT_TYPES[kind](args)
