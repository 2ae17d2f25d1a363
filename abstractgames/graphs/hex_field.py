from __future__ import annotations
from typing import List, Optional
import networkx as nx
from abstractgames.core.errors import InvalidCellError
from abstractgames.core.primitives import Coord
from abstractgames.geometry.hexes import HexCoord, Orientation, directions, next_hex
from .base import DirectedBase

ALL_COMPASS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


class HexFieldGraph(DirectedBase):
    """Rectangular field of offset hexes, labelled "x,y", with direction-tagged edges.

    `offset` follows the usual convention: 1 shoves odd rows (pointy) or odd columns
    (flat), -1 shoves even ones.
    """

    def __init__(self, width: int, height: int, orientation: Orientation = Orientation.POINTY, offset: int = 1) -> None:
        if offset not in (1, -1):
            raise ValueError(f"offset must be 1 or -1, got {offset}")
        self.orientation = Orientation(orientation)
        self.offset = offset
        super().__init__(width, height)

    @property
    def all_dirs(self) -> List[str]:
        return directions(self.orientation)

    def coords2algebraic(self, x: int, y: int) -> str:
        if not self.in_bounds(x, y):
            raise InvalidCellError(f"({x}, {y}) is outside the board")
        return f"{x},{y}"

    def algebraic2coords(self, cell: str) -> Coord:
        try:
            x, y = (int(n) for n in cell.split(","))
        except ValueError as e:
            raise InvalidCellError(f"Malformed cell label: {cell!r}") from e
        # int() also takes "01", " 1" and "+1"
        if cell != f"{x},{y}":
            raise InvalidCellError(f"Malformed cell label: {cell!r}")
        if not self.in_bounds(x, y):
            raise InvalidCellError(f"The cell is outside the board: {cell}")
        return x, y

    def to_axial(self, x: int, y: int) -> HexCoord:
        if self.orientation is Orientation.POINTY:
            return HexCoord(x - (y + self.offset * (y & 1)) // 2, y)
        return HexCoord(x, y - (x + self.offset * (x & 1)) // 2)

    def from_axial(self, h: HexCoord) -> Coord:
        if self.orientation is Orientation.POINTY:
            return h.q + (h.r + self.offset * (h.r & 1)) // 2, h.r
        return h.q, h.r + (h.q + self.offset * (h.q & 1)) // 2

    def add_edges(self, graph: nx.Graph) -> None:
        for row in self.rows():
            for x, y in row:
                here = self.to_axial(x, y)
                for d in self.all_dirs:
                    nb = next_hex(here, d, self.orientation)
                    tx, ty = self.from_axial(nb)
                    if self.in_bounds(tx, ty):
                        graph.add_edge(self.coords2algebraic(x, y), self.coords2algebraic(tx, ty), direction=d)

    def bearing(self, frm: str, to: str) -> Optional[str]:
        if not self.has_node(frm) or not self.has_node(to):
            return None
        for d in ALL_COMPASS:
            if to in self.ray(frm, d):
                return d
        return None
