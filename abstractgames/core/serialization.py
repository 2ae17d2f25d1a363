"""Wire codecs for the container types that live inside move-states.

Ordered maps travel as arrays of ``[key, value]`` pairs and sets as sorted arrays.
Both decoders also accept the older ``{"dataType": "Map"|"Set", "value": [...]}``
envelope so stored games from before the codecs existed still load.
"""
from __future__ import annotations
import json
from typing import Annotated, Any, Dict, Set, TypeVar
from pydantic import BaseModel, BeforeValidator, PlainSerializer

K = TypeVar("K")
V = TypeVar("V")


def _unwrap(v: Any, kind: str) -> Any:
    if isinstance(v, dict) and v.get("dataType") == kind and "value" in v:
        return v["value"]
    return v


def _pairs_to_dict(v: Any) -> Any:
    v = _unwrap(v, "Map")
    if isinstance(v, (list, tuple)):
        out = {}
        for pair in v:
            if not isinstance(pair, (list, tuple)) or len(pair) != 2:
                raise ValueError(f"expected a [key, value] pair, got {pair!r}")
            key, val = pair
            out[tuple(key) if isinstance(key, list) else key] = val
        return out
    return v


def _dict_to_pairs(v: Dict[Any, Any]) -> list:
    return [[k, val] for k, val in v.items()]


def _unwrap_set(v: Any) -> Any:
    return _unwrap(v, "Set")


def _set_to_list(v: Set[Any]) -> list:
    return sorted(v)


# insertion-ordered dict, [[k, v], ...] on the wire
OrderedMap = Annotated[
    Dict[K, V],
    BeforeValidator(_pairs_to_dict),
    PlainSerializer(_dict_to_pairs, when_used="json"),
]

# set of cell labels, sorted list on the wire
CellSet = Annotated[
    Set[str],
    BeforeValidator(_unwrap_set),
    PlainSerializer(_set_to_list, when_used="json"),
]


def _normalise(o: Any) -> Any:
    # json.dumps(sort_keys=True) chokes on non-str keys; stringify them first
    if isinstance(o, dict):
        return {str(k): _normalise(v) for k, v in o.items()}
    if isinstance(o, (list, tuple)):
        return [_normalise(v) for v in o]
    if isinstance(o, (set, frozenset)):
        return sorted(_normalise(v) for v in o)
    if isinstance(o, BaseModel):
        return _normalise(o.model_dump())
    return o


def sorting_dumps(obj: Any) -> str:
    """Deterministic JSON: map keys sorted, sets sorted. Used for equality checks only."""
    return json.dumps(_normalise(obj), sort_keys=True, separators=(",", ":"))
