from __future__ import annotations
from typing import Dict, List, Optional, Tuple
import networkx as nx
from abstractgames.core.errors import InvalidCellError
from abstractgames.core.primitives import Coord
from abstractgames.geometry.algebraic import CELL_LABEL, label2number, number2label
from .base import BaseGraph



class HexSlantedGraph(BaseGraph):
    """Rhombus of hexes (the Hex board). Columns are letters, rows count from 1 at y = 0.

    Each cell touches (x +- 1, y), (x, y +- 1), (x - 1, y + 1) and (x + 1, y - 1).
    """

    all_dirs = ("NE", "E", "SE", "SW", "W", "NW")
    steps: Dict[str, Tuple[int, int]] = {
        "E": (1, 0), "W": (-1, 0),
        "SE": (1, -1), "NW": (-1, 1),
        "SW": (0, -1), "NE": (0, 1),
    }

    def coords2algebraic(self, x: int, y: int) -> str:
        if not self.in_bounds(x, y):
            raise InvalidCellError(f"({x}, {y}) is outside the board")
        return number2label(x) + str(y + 1)

    def algebraic2coords(self, cell: str) -> Coord:
        m = CELL_LABEL.match(cell)
        if m is None:
            raise InvalidCellError(f"Malformed cell label: {cell!r}")
        x, y = label2number(m.group(1)), int(m.group(2)) - 1
        if not self.in_bounds(x, y):
            raise InvalidCellError(f"The cell is outside the board: {cell}")
        return x, y

    def add_edges(self, graph: nx.Graph) -> None:
        for row in self.rows():
            for x, y in row:
                self._link(graph, (x, y), (x - 1, y))
                self._link(graph, (x, y), (x, y + 1))
                self._link(graph, (x, y), (x - 1, y + 1))

    def move(self, x: int, y: int, dir: str, dist: int = 1) -> Optional[Coord]:
        if dir not in self.steps:
            raise ValueError(f"Invalid direction requested: {dir}")
        dx, dy = self.steps[dir]
        tx, ty = x + dx * dist, y + dy * dist
        return (tx, ty) if self.in_bounds(tx, ty) else None

    def ray(self, x: int, y: int, dir: str) -> List[Coord]:
        if not self.in_bounds(x, y):
            raise ValueError(f"({x}, {y}) is outside the board")
        out: List[Coord] = []
        nxt = self.move(x, y, dir)
        while nxt is not None:
            out.append(nxt)
            nxt = self.move(*nxt, dir)
        return out
