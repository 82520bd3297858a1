import random

import numpy as np


def set_seeds(seed: int = 42) -> None:
    np.random.seed(seed)
    random.seed(seed)


# Defaults for the afterstate learner. The learning rate can be overridden
# per agent with the "alpha=<float>" option.
DEFAULT_ALPHA = 0.0125

# Four row tuples and four column tuples, one table each, indexed by a
# 4-digit base-16 packing of the cells.
NUM_TABLES = 8
TABLE_SIZE = 16 ** 4

# Slide opcodes in enumeration order. The learner breaks ties in favour of
# the earlier entry.
OPCODES = (0, 1, 2, 3)
OPCODE_NAMES = {0: "up", 1: "right", 2: "down", 3: "left"}
