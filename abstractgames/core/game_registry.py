from __future__ import annotations
import importlib
import random
from typing import TYPE_CHECKING, Dict, Optional, Sequence, TypeVar

if TYPE_CHECKING:
    from abstractgames.core.base import GameBase, StateInput

G = TypeVar("G", bound="type[GameBase]")

_REG: Dict[str, "type[GameBase]"] = {}


def register_game(cls: G) -> G:
    _REG[cls.gameinfo.uid] = cls
    return cls


def _load_builtin() -> None:
    # importing the package registers the bundled games via side effects
    importlib.import_module("abstractgames.games")


def get_game(uid: str) -> "type[GameBase]":
    _load_builtin()
    if uid not in _REG:
        raise KeyError(f"Unknown game: {uid}")
    return _REG[uid]


def list_games() -> Dict[str, str]:
    _load_builtin()
    return {k: v.gameinfo.name for k, v in sorted(_REG.items())}


def game_factory(
    uid: str,
    state: Optional["StateInput"] = None,
    variants: Optional[Sequence[str]] = None,
    rng: Optional[random.Random] = None,
) -> "GameBase":
    """Fresh game (state None) or a rehydrated one of the registered class."""
    return get_game(uid)(state, variants, rng=rng)
