# Shared fixtures: seeded generators, a clean event bus, and a move-log capture.

import logging
import random
from typing import Iterator, List

import pytest

from abstractgames.events import MoveEvent, event_bus
from abstractgames.logging_listeners import register_listeners

logger = logging.getLogger(__name__)


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def move_events() -> Iterator[List[MoveEvent]]:
    """Every MoveEvent emitted while the test runs."""
    seen: List[MoveEvent] = []
    event_bus.subscribe(MoveEvent, seen.append)
    try:
        yield seen
    finally:
        event_bus.unsubscribe(MoveEvent, seen.append)


@pytest.fixture(scope="session", autouse=True)
def _move_log() -> None:
    register_listeners()
    logger.info("[tests] move log listeners registered")
