from __future__ import annotations
from typing import List, Optional
import networkx as nx
from abstractgames.core.errors import InvalidCellError
from abstractgames.core.primitives import Coord
from abstractgames.geometry.algebraic import CELL_LABEL, label2number, number2label
from .base import BaseGraph



class HexTriGraph(BaseGraph):
    """Hex-of-hexes board whose rows grow from `minwidth` to `maxwidth` and shrink back.

    Labels are a row letter (bottom row is `a`) followed by a 1-based column number.
    """

    all_dirs = ("NE", "E", "SE", "SW", "W", "NW")

    def __init__(self, minwidth: int, maxwidth: int) -> None:
        if minwidth >= maxwidth:
            raise ValueError("The minimum width must be strictly less than the maximum width.")
        self.minwidth = minwidth
        self.maxwidth = maxwidth
        height = (maxwidth - minwidth) * 2 + 1
        self.midrow = height // 2
        super().__init__(maxwidth, height)

    def row_width(self, row: int) -> int:
        return self.minwidth + (self.midrow - abs(self.midrow - row))

    def coords2algebraic(self, x: int, y: int) -> str:
        if not self.in_bounds(x, y):
            raise InvalidCellError(f"({x}, {y}) is outside the board")
        return number2label(self.height - y - 1) + str(x + 1)

    def algebraic2coords(self, cell: str) -> Coord:
        m = CELL_LABEL.match(cell)
        if m is None:
            raise InvalidCellError(f"Malformed cell label: {cell!r}")
        y = self.height - label2number(m.group(1)) - 1
        x = int(m.group(2)) - 1
        if not self.in_bounds(x, y):
            raise InvalidCellError(f"The cell is outside the board: {cell}")
        return x, y

    def add_edges(self, graph: nx.Graph) -> None:
        for row in self.rows():
            for x, y in row:
                self._link(graph, (x, y), (x - 1, y))
                if y == 0:
                    continue
                # links are built upwards; the row above is shorter above the midline
                if y <= self.midrow:
                    self._link(graph, (x, y), (x, y - 1))
                    self._link(graph, (x, y), (x - 1, y - 1))
                else:
                    self._link(graph, (x, y), (x, y - 1))
                    self._link(graph, (x, y), (x + 1, y - 1))

    def step(self, x: int, y: int, dir: str) -> Coord:
        """One step in `dir` with no bounds checking."""
        if dir == "E":
            return x + 1, y
        if dir == "W":
            return x - 1, y
        if dir == "NE":
            return (x, y - 1) if y <= self.midrow else (x + 1, y - 1)
        if dir == "NW":
            return (x - 1, y - 1) if y <= self.midrow else (x, y - 1)
        if dir == "SE":
            return (x, y + 1) if y >= self.midrow else (x + 1, y + 1)
        if dir == "SW":
            return (x - 1, y + 1) if y >= self.midrow else (x, y + 1)
        raise ValueError(f"Invalid direction requested: {dir}")

    def move(self, x: int, y: int, dir: str, dist: int = 1) -> Optional[Coord]:
        cx, cy = x, y
        for _ in range(dist):
            cx, cy = self.step(cx, cy, dir)
            if not self.in_bounds(cx, cy):
                return None
        return cx, cy

    def ray(self, x: int, y: int, dir: str) -> List[Coord]:
        if not self.in_bounds(x, y):
            raise ValueError(f"({x}, {y}) is outside the board")
        out: List[Coord] = []
        nxt = self.move(x, y, dir)
        while nxt is not None:
            out.append(nxt)
            nxt = self.move(*nxt, dir)
        return out

    def dist_from_edge(self, cell: str) -> int:
        """0 on the perimeter, 1 one ring in, and so on."""
        x, y = self.algebraic2coords(cell)
        return min(len(self.ray(x, y, d)) for d in self.all_dirs)

    def perimeter(self) -> List[str]:
        return [c for row in self.list_cells(ordered=True) for c in row if self.dist_from_edge(c) == 0]

    def rot180(self, x: int, y: int) -> Coord:
        ny = self.height - 1 - y
        return self.row_width(ny) - 1 - x, ny
