from __future__ import annotations
import random
from typing import List, Optional, Sequence, TypeVar
from abstractgames import config

T = TypeVar("T")


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Seeded generator; falls back to ABSTRACTGAMES_SEED, then to OS entropy."""
    return random.Random(seed if seed is not None else config.SEED)


def copy_rng(rng: random.Random) -> random.Random:
    out = random.Random()
    out.setstate(rng.getstate())
    return out


def shuffle(items: Sequence[T], rng: random.Random) -> List[T]:
    """Fisher-Yates on a copy; the input is left alone."""
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = rng.randint(0, i)
        out[i], out[j] = out[j], out[i]
    return out


def random_int(upper: int, rng: random.Random) -> int:
    """Uniform integer in 1..upper (a die roll)."""
    if upper < 1:
        raise ValueError(f"upper must be at least 1, got {upper}")
    return rng.randint(1, upper)
