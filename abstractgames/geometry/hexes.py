"""Axial hex helpers, including edges and vertices treated as playable cells.

An edge (or vertex) is shared by several hexes but owned by exactly one of them, which
gives every edge a single canonical uid of the form ``"q,r,DIR"``.
"""
from __future__ import annotations
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Tuple

CompassDirection = str  # "N", "NE", "E", "SE", "S", "SW", "W", "NW"


class Orientation(str, Enum):
    POINTY = "pointy"
    FLAT = "flat"


class HexCoord(NamedTuple):
    q: int
    r: int


class HexPart(NamedTuple):
    """An edge or a vertex, anchored on its owning hex."""
    q: int
    r: int
    dir: str
    orientation: Orientation

    @property
    def uid(self) -> str:
        return f"{self.q},{self.r},{self.dir}"


HexEdge = HexPart
HexVertex = HexPart

_STEPS: Dict[Orientation, Dict[str, Tuple[int, int]]] = {
    Orientation.POINTY: {"NE": (1, -1), "E": (1, 0), "SE": (0, 1), "SW": (-1, 1), "W": (-1, 0), "NW": (0, -1)},
    Orientation.FLAT: {"N": (0, -1), "NE": (1, -1), "SE": (1, 0), "S": (0, 1), "SW": (-1, 1), "NW": (-1, 0)},
}


def directions(orientation: Orientation) -> List[str]:
    return list(_STEPS[orientation])


def next_hex(hex: HexCoord, dir: str, orientation: Orientation = Orientation.POINTY) -> Optional[HexCoord]:
    """The adjacent hex in `dir`, or None if `dir` is not a side of this orientation."""
    step = _STEPS[orientation].get(dir)
    if step is None:
        return None
    return HexCoord(hex.q + step[0], hex.r + step[1])


def hex_neighbours(hex: HexCoord, orientation: Orientation = Orientation.POINTY) -> List[HexCoord]:
    """All six surrounding hexes, clockwise from the first side. No bounds checking."""
    return [HexCoord(hex.q + dq, hex.r + dr) for dq, dr in _STEPS[orientation].values()]


def hex_distance(a: HexCoord, b: HexCoord) -> int:
    dq, dr = a.q - b.q, a.r - b.r
    return (abs(dq) + abs(dr) + abs(dq + dr)) // 2


def bearing(frm: HexCoord, to: HexCoord, orientation: Orientation = Orientation.POINTY) -> Optional[str]:
    """Direction of orthogonal line of sight from `frm` to `to`, None if there is none."""
    dq, dr = to.q - frm.q, to.r - frm.r
    if (dq, dr) == (0, 0):
        return None
    for d, (sq, sr) in _STEPS[orientation].items():
        # (dq, dr) must be a positive multiple of the unit step
        n = max(abs(dq), abs(dr))
        if (sq * n, sr * n) == (dq, dr):
            return d
    return None


def hex2edges(hex: HexCoord, orientation: Orientation = Orientation.POINTY) -> Dict[str, HexEdge]:
    q, r = hex
    o = orientation
    if o is Orientation.POINTY:
        return {
            "NE": HexPart(q, r, "NE", o),
            "E": HexPart(q + 1, r, "W", o),
            "SE": HexPart(q, r + 1, "NW", o),
            "SW": HexPart(q - 1, r + 1, "NE", o),
            "W": HexPart(q, r, "W", o),
            "NW": HexPart(q, r, "NW", o),
        }
    return {
        "N": HexPart(q, r, "N", o),
        "NE": HexPart(q, r, "NE", o),
        "SE": HexPart(q + 1, r, "NW", o),
        "S": HexPart(q, r + 1, "N", o),
        "SW": HexPart(q - 1, r + 1, "NE", o),
        "NW": HexPart(q, r, "NW", o),
    }


def edge2hexes(edge: HexEdge) -> Tuple[HexCoord, HexCoord]:
    """The two hexes that share an edge, owner first."""
    q, r = edge.q, edge.r
    if edge.orientation is Orientation.POINTY:
        other = {"NE": (q + 1, r - 1), "NW": (q, r - 1), "W": (q - 1, r)}.get(edge.dir)
    else:
        other = {"NE": (q + 1, r - 1), "NW": (q - 1, r), "N": (q, r - 1)}.get(edge.dir)
    if other is None:
        raise ValueError(f"Invalid edge: {edge.uid} ({edge.orientation.value})")
    return HexCoord(q, r), HexCoord(*other)


def hex2verts(hex: HexCoord, orientation: Orientation = Orientation.POINTY) -> Dict[str, HexVertex]:
    q, r = hex
    o = orientation
    if o is Orientation.POINTY:
        return {
            "N": HexPart(q, r, "N", o),
            "NE": HexPart(q + 1, r - 1, "S", o),
            "SE": HexPart(q, r + 1, "N", o),
            "S": HexPart(q, r, "S", o),
            "SW": HexPart(q - 1, r + 1, "N", o),
            "NW": HexPart(q, r - 1, "S", o),
        }
    return {
        "NE": HexPart(q, r, "NE", o),
        "E": HexPart(q + 1, r - 1, "SW", o),
        "SE": HexPart(q, r + 1, "NE", o),
        "SW": HexPart(q, r, "SW", o),
        "W": HexPart(q - 1, r + 1, "NE", o),
        "NW": HexPart(q, r - 1, "SW", o),
    }


def vert2hexes(vert: HexVertex) -> Tuple[HexCoord, HexCoord, HexCoord]:
    """The three hexes meeting at a vertex, owner first."""
    q, r = vert.q, vert.r
    if vert.orientation is Orientation.POINTY:
        table = {"N": ((q + 1, r - 1), (q, r - 1)), "S": ((q, r + 1), (q - 1, r + 1))}
    else:
        table = {"NE": ((q, r - 1), (q + 1, r - 1)), "SW": ((q, r + 1), (q - 1, r + 1))}
    others = table.get(vert.dir)
    if others is None:
        raise ValueError(f"Invalid vertex: {vert.uid} ({vert.orientation.value})")
    return HexCoord(q, r), HexCoord(*others[0]), HexCoord(*others[1])


def parse_part(uid: str, orientation: Orientation = Orientation.POINTY) -> HexPart:
    """Inverse of HexPart.uid."""
    try:
        q, r, d = uid.split(",")
        return HexPart(int(q), int(r), d.upper(), orientation)
    except ValueError as e:
        raise ValueError(f"Malformed edge/vertex uid: {uid!r}") from e
