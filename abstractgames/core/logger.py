from __future__ import annotations

from typing import TYPE_CHECKING

from abstractgames.events import MoveEvent, MoveLogResult, event_bus

if TYPE_CHECKING:
    from abstractgames.core.primitives import MoveResult


def log_event(
    game: str,
    player: int | None,
    move: str,
    result: MoveLogResult,
    message: str | None = None,
    results: list[MoveResult] | None = None,
) -> None:
    event_bus.emit(
        MoveEvent(
            game=game,
            player=player,
            move=move,
            result=result,
            message=message,
            results=[r.model_dump() for r in results or []],
        )
    )


def log_illegal(game: str, player: int | None, move: str, explanation: str) -> None:
    log_event(game, player, move, MoveLogResult.ILLEGAL, explanation)


def log_failsafe(game: str, player: int | None, move: str, explanation: str) -> None:
    log_event(game, player, move, MoveLogResult.FAILSAFE, explanation)


def log_error(game: str, player: int | None, move: str, error: Exception) -> None:
    log_event(game, player, move, MoveLogResult.ERROR, str(error))
