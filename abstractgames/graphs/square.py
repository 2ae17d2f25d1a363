from __future__ import annotations
from typing import Optional, Sequence, Union
import networkx as nx
from abstractgames.core.primitives import Coord
from abstractgames.geometry.rect_grid import DIRS_DIAG, DIRS_ORTH, RectGrid
from .base import SquareBase


class SquareGraph(SquareBase):
    """Every cell linked to all eight neighbours."""

    def add_edges(self, graph: nx.Graph) -> None:
        for row in self.rows():
            for x, y in row:
                self._link(graph, (x, y), (x + 1, y))
                self._link(graph, (x, y), (x, y - 1))
                self._link(graph, (x, y), (x + 1, y - 1))
                self._link(graph, (x, y), (x - 1, y - 1))


class SquareOrthGraph(SquareBase):
    allowed_dirs = DIRS_ORTH

    def add_edges(self, graph: nx.Graph) -> None:
        for row in self.rows():
            for x, y in row:
                self._link(graph, (x, y), (x + 1, y))
                self._link(graph, (x, y), (x, y - 1))

    def bearing(self, frm: str, to: str) -> Optional[str]:
        return RectGrid.bearing(*self.algebraic2coords(frm), *self.algebraic2coords(to))


class SquareDiagGraph(SquareBase):
    """Diagonal links only: the two colour complexes of a chequerboard."""

    allowed_dirs = DIRS_DIAG

    def add_edges(self, graph: nx.Graph) -> None:
        for row in self.rows():
            for x, y in row:
                self._link(graph, (x, y), (x + 1, y - 1))
                self._link(graph, (x, y), (x - 1, y - 1))


class Square3DGraph(SquareGraph):
    """Eight-way board whose cells carry an `elevation` (stacked platforms)."""

    def __init__(self, width: int, height: int, heightmap: Sequence[Sequence[float]]) -> None:
        super().__init__(width, height)
        if len(heightmap) != height or any(len(r) != width for r in heightmap):
            raise ValueError("Heightmap does not match the graph dimensions")
        for y, row in enumerate(heightmap):
            for x, h in enumerate(row):
                if isinstance(h, bool) or not isinstance(h, (int, float)):
                    raise ValueError("Heightmap must be a 2D array of numbers")
                self.graph.nodes[self.coords2algebraic(x, y)]["elevation"] = h

    def elevation(self, cell: Union[str, Coord]) -> float:
        label = cell if isinstance(cell, str) else self.coords2algebraic(*cell)
        self._require(label)
        return self.graph.nodes[label]["elevation"]
