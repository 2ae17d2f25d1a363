# tests/integration/utils/helpers.py
import json
from typing import Dict, Iterable, Optional

from abstractgames.core.base import GameBase


def _play(game: GameBase, moves: Iterable[str]) -> GameBase:
    for m in moves:
        game.move(m)
    return game


def _with_board(game: GameBase, board: Dict[str, int], currplayer: Optional[int] = 1, **extra) -> GameBase:
    """Rehydrate `game` from its own serialization with the current board swapped out."""
    data = json.loads(game.serialize())
    snap = data["stack"][-1]
    snap["board"] = [[cell, owner] for cell, owner in board.items()]
    snap["currplayer"] = currplayer
    snap.update(extra)
    return type(game)(json.dumps(data), rng=game.rng)


def _piece_at(game: GameBase, row: int, col: int) -> str:
    return game.render()["pieces"].split("\n")[row][col]
