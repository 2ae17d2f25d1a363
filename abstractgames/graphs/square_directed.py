from __future__ import annotations
import networkx as nx
from abstractgames.geometry.rect_grid import DIRS_ORTH
from .base import DirectedBase


class SquareOrthDirectedGraph(DirectedBase):
    """Orthogonal board with one directed edge per direction of travel.

    Games remove individual edges to allow entering a cell but not leaving it.
    """

    all_dirs = DIRS_ORTH

    def add_edges(self, graph: nx.Graph) -> None:
        for row in self.rows():
            for x, y in row:
                here = self.coords2algebraic(x, y)
                if x < self.width - 1:
                    right = self.coords2algebraic(x + 1, y)
                    graph.add_edge(here, right, direction="E")
                    graph.add_edge(right, here, direction="W")
                if y > 0:
                    up = self.coords2algebraic(x, y - 1)
                    graph.add_edge(here, up, direction="N")
                    graph.add_edge(up, here, direction="S")
