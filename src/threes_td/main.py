#!/usr/bin/env python
"""
Command-line tool for TD learner weight files.
"""

import logging
import sys

import numpy as np

from .agents import NTupleNetwork, WeightFileError
from .config import set_seeds
from .utils.cli import setup_logging, parse_args

logger = logging.getLogger(__name__)


def init_weights(path):
    network = NTupleNetwork()
    network.initialize()
    network.save(path)
    logger.info(f"Created {len(network.weights)} zeroed tables of {network.weights[0].size} weights")


def inspect_weights(path):
    network = NTupleNetwork()
    network.load(path)
    logger.info(f"{path}: {len(network.weights)} tables")
    for i, table in enumerate(network.weights):
        logger.info(
            f"Table {i}: non-zero = {np.count_nonzero(table)}, "
            f"min = {table.min():.4f}, max = {table.max():.4f}, mean = {table.mean():.6f}"
        )
    return network


def main(args=None):
    """Run the weight-file tool."""
    args = parse_args(args)
    setup_logging(args.log_file)
    set_seeds(args.seed)

    try:
        if args.command == "init":
            init_weights(args.path)
        elif args.command == "inspect":
            inspect_weights(args.path)
    except WeightFileError as e:
        logger.error(f"Weight file error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
