from .cli import setup_logging, parse_args
