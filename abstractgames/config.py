from __future__ import annotations
import os
from typing import Optional

LOG_LEVEL = os.getenv("ABSTRACTGAMES_LOG_LEVEL", "WARNING").upper()
# recheck untrusted moves against moves() after validation
FAILSAFE = os.getenv("ABSTRACTGAMES_FAILSAFE", "true").lower() != "false"
LOOP_MIN = int(os.getenv("ABSTRACTGAMES_LOOP_MIN", "6"))


def _seed() -> Optional[int]:
    raw = os.getenv("ABSTRACTGAMES_SEED")
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


SEED = _seed()
