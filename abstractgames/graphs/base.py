from __future__ import annotations
from typing import Callable, Iterable, Iterator, List, Optional, Protocol, Sequence, Union, runtime_checkable
import networkx as nx
from abstractgames.core.errors import CellNotFoundError, InvalidCellError
from abstractgames.core.primitives import Coord
from abstractgames.geometry.algebraic import algebraic2coords, coords2algebraic
from abstractgames.geometry.rect_grid import DELTAS


@runtime_checkable
class IGraph(Protocol):
    def coords2algebraic(self, x: int, y: int) -> str: ...
    def algebraic2coords(self, cell: str) -> Coord: ...
    def list_cells(self, ordered: bool = False) -> Union[List[str], List[List[str]]]: ...
    def neighbours(self, cell: str) -> List[str]: ...
    def path(self, frm: str, to: str) -> Optional[List[str]]: ...


class BaseGraph:
    """Labelled cell graph over a networkx graph built from the board dimensions.

    Subclasses provide the labelling scheme (coords2algebraic / algebraic2coords), the
    row layout (rows) and the edges (add_edges).
    """

    directed = False

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.graph = self.build_graph()

    # --- labels ---------------------------------------------------------

    def coords2algebraic(self, x: int, y: int) -> str:
        if not self.in_bounds(x, y):
            raise InvalidCellError(f"({x}, {y}) is outside the board")
        return coords2algebraic(x, y, self.height)

    def algebraic2coords(self, cell: str) -> Coord:
        x, y = algebraic2coords(cell, self.height)
        if not self.in_bounds(x, y):
            raise InvalidCellError(f"The cell is outside the board: {cell}")
        return x, y

    def row_width(self, row: int) -> int:
        return self.width

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= y < self.height and 0 <= x < self.row_width(y)

    def rows(self) -> Iterator[List[Coord]]:
        for row in range(self.height):
            yield [(col, row) for col in range(self.row_width(row))]

    # --- construction ---------------------------------------------------

    def build_graph(self) -> nx.Graph:
        graph: nx.Graph = nx.DiGraph() if self.directed else nx.Graph()
        for row in self.rows():
            for col, r in row:
                graph.add_node(self.coords2algebraic(col, r))
        self.add_edges(graph)
        return graph

    def add_edges(self, graph: nx.Graph) -> None:
        raise NotImplementedError

    def _link(self, graph: nx.Graph, a: Coord, b: Coord, **attrs) -> None:
        if self.in_bounds(*a) and self.in_bounds(*b):
            graph.add_edge(self.coords2algebraic(*a), self.coords2algebraic(*b), **attrs)

    # --- queries --------------------------------------------------------

    def has_node(self, cell: str) -> bool:
        return self.graph.has_node(cell)

    def _require(self, cell: str) -> None:
        if not self.graph.has_node(cell):
            raise CellNotFoundError(f"The cell {cell} is not in the graph")

    def list_cells(self, ordered: bool = False) -> Union[List[str], List[List[str]]]:
        """Flat list of the nodes still in the graph, or every board cell row by row."""
        if not ordered:
            return list(self.graph.nodes)
        return [[self.coords2algebraic(x, y) for x, y in row] for row in self.rows()]

    def neighbours(self, cell: str) -> List[str]:
        self._require(cell)
        if self.graph.is_directed():
            # both directions, successors first
            return list(dict.fromkeys([*self.graph.successors(cell), *self.graph.predecessors(cell)]))
        return list(self.graph.neighbors(cell))

    def path(self, frm: str, to: str) -> Optional[List[str]]:
        self._require(frm)
        self._require(to)
        try:
            return nx.bidirectional_shortest_path(self.graph, frm, to)
        except nx.NetworkXNoPath:
            return None

    def is_connected(self) -> bool:
        g = self.graph.to_undirected(as_view=True) if self.graph.is_directed() else self.graph
        return g.number_of_nodes() > 0 and nx.is_connected(g)

    # --- drop-and-query -------------------------------------------------

    def drop(self, cells: Iterable[str]) -> "BaseGraph":
        """Remove nodes in place; absent labels are ignored."""
        self.graph.remove_nodes_from(list(cells))
        return self

    def subgraph_for(self, keep: Callable[[str], bool]) -> nx.Graph:
        """Independent copy holding only the nodes `keep` accepts."""
        return self.graph.subgraph([n for n in self.graph.nodes if keep(n)]).copy()


class SquareBase(BaseGraph):
    """Rectangular boards with a/1 style labels and compass moves in (x, y) space."""

    allowed_dirs: Sequence[str] = tuple(DELTAS)

    def move(self, x: int, y: int, dir: str, dist: int = 1) -> Optional[Coord]:
        if dir not in self.allowed_dirs:
            raise ValueError(f"Invalid direction requested: {dir}")
        dx, dy = DELTAS[dir]
        cx, cy = x, y
        for _ in range(dist):
            cx, cy = cx + dx, cy + dy
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


class DirectedBase(BaseGraph):
    """Graphs whose edges carry a `direction` attribute; moves walk labels, not coordinates."""

    directed = True

    def move(self, frm: str, dir: str, dist: int = 1) -> Optional[str]:
        self._require(frm)
        cur = frm
        for _ in range(dist):
            nxt = next((t for _, t, d in self.graph.out_edges(cur, data="direction") if d == dir), None)
            if nxt is None:
                return None
            cur = nxt
        return cur

    def ray(self, start: str, dir: str, include_first: bool = False) -> List[str]:
        out = [start] if include_first else []
        nxt = self.move(start, dir)
        while nxt is not None:
            out.append(nxt)
            nxt = self.move(nxt, dir)
        return out
