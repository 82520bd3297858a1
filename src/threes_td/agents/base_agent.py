from types import MappingProxyType
from typing import Dict, Mapping

from ..environment import Action, Board


def parse_properties(args: str) -> Dict[str, str]:
    """
    Parse whitespace-separated "key=value" tokens.

    Later tokens overwrite earlier ones. A token without "=" maps to itself,
    so a bare flag such as "init" becomes {"init": "init"}.
    """
    meta = {}
    for pair in args.split():
        key, sep, value = pair.partition("=")
        meta[key] = value if sep else pair
    return meta


class Agent:
    """
    Base agent holding a read-only property table built from an argument
    string such as "name=td role=slider alpha=0.01".
    """

    def __init__(self, args: str = ""):
        self._meta: Mapping[str, str] = MappingProxyType(
            parse_properties("name=unknown role=unknown " + args))

    def open_episode(self, flag: str = "") -> None:
        pass

    def close_episode(self, flag: str = "") -> None:
        pass

    def take_action(self, board: Board) -> Action:
        return Action.null()

    def check_for_win(self, board: Board) -> bool:
        return False

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def has(self, key: str) -> bool:
        return key in self._meta

    def property(self, key: str) -> str:
        return self._meta[key]

    def numeric(self, key: str, kind=float):
        """Read a property as a number, e.g. numeric("seed", int)."""
        return kind(float(self._meta[key]))

    def notify(self, msg: str) -> None:
        """Set one "key=value" pair; the value is everything after the first "="."""
        key, sep, value = msg.partition("=")
        meta = dict(self._meta)
        meta[key] = value if sep else msg
        self._meta = MappingProxyType(meta)

    def name(self) -> str:
        return self.property("name")

    def role(self) -> str:
        return self.property("role")
