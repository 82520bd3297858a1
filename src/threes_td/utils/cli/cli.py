import argparse
import logging
import sys

def setup_logging(log_file="threes_td.log"):
    """
    Set up logging configuration.

    Args:
        log_file: Path to the log file
    """
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(sys.stdout)
        ]
    )

def parse_args(args=None):
    """
    Parse command-line arguments.

    Args:
        args: Command-line arguments (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Threes! TD learner weight-file tool"
    )

    # General options
    parser.add_argument("--seed", type=int, default=42,
                        help="Random seed (default: 42)")
    parser.add_argument("--log-file", type=str, default="threes_td.log",
                        help="Log file (default: threes_td.log)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init", help="Write a fresh zeroed weight file")
    init_parser.add_argument("path", help="Weight file to create")

    inspect_parser = subparsers.add_parser("inspect", help="Summarize the tables of a weight file")
    inspect_parser.add_argument("path", help="Weight file to read")

    return parser.parse_args(args)
