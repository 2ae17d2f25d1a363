from __future__ import annotations
from typing import Any, Dict, Optional
from abstractgames.core.messages import t


class GameError(Exception):
    """Root of every error the engine raises on purpose."""


class UserFacingError(GameError):
    """A mistake by the player (bad move, acting after game over).

    `client` holds the message that is safe to show to the end user.
    """

    def __init__(self, key: str, client: Optional[str] = None, **params: Any) -> None:
        self.key = key
        self.params: Dict[str, Any] = params
        self.client = client if client is not None else t(key, **params)
        super().__init__(self.client)


class FailsafeError(GameError):
    """validate_move() and moves() disagree about a move: a defect in the game code."""

    key = "VALIDATION_FAILSAFE"

    def __init__(self, move: str) -> None:
        self.move = move
        self.client = t(self.key, move=move)
        super().__init__(self.client)


class GameStateError(GameError):
    """Malformed serialized state, unknown variant or game uid mismatch."""


class InvalidCellError(GameError, ValueError):
    pass


class CellNotFoundError(GameError, KeyError):
    pass
