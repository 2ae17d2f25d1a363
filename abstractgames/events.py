from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar, cast

if TYPE_CHECKING:
    from collections.abc import Callable


class MoveLogResult(str, Enum):
    APPLIED = "applied"
    ILLEGAL = "illegal"
    FAILSAFE = "failsafe"
    ERROR = "error"


@dataclass
class MoveEvent:
    game: str
    player: int | None
    move: str
    result: MoveLogResult
    message: str | None = None
    results: list[dict[str, Any]] = field(default_factory=list)


T = TypeVar("T")


class EventBus:
    def __init__(self) -> None:
        self._subs: dict[type[Any], list[object]] = {}

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        lst = self._subs.setdefault(event_type, [])
        if handler not in lst:
            lst.append(cast("object", handler))

    def unsubscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        lst = self._subs.get(event_type, [])
        if handler in lst:
            lst.remove(handler)

    def emit(self, event: Any) -> None:
        et = type(event)
        for h in list(self._subs.get(et, [])):
            # handlers' exceptions propagate to the emitter
            cast("Callable[[Any], None]", h)(event)


# Global bus instance
event_bus = EventBus()
