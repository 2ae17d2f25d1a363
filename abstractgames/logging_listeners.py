from __future__ import annotations

import logging

from . import config
from .events import MoveEvent, MoveLogResult, event_bus

logger = logging.getLogger("abstractgames.moves")

_LEVELS = {
    MoveLogResult.APPLIED: logging.INFO,
    MoveLogResult.ILLEGAL: logging.WARNING,
    MoveLogResult.FAILSAFE: logging.ERROR,
    MoveLogResult.ERROR: logging.ERROR,
}


def _on_move_event(ev: MoveEvent) -> None:
    logger.log(
        _LEVELS[ev.result],
        "[%s] player=%s move=%r result=%s%s",
        ev.game,
        ev.player,
        ev.move,
        ev.result.value,
        f" ({ev.message})" if ev.message else "",
    )


def register_listeners() -> None:
    logger.setLevel(config.LOG_LEVEL)
    event_bus.subscribe(MoveEvent, _on_move_event)
