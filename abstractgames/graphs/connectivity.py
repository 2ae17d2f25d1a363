"""Connectivity queries for connection, territory and loop games.

The usual pattern is drop-and-query: build the player's subgraph with owner_graph(),
then ask for a path between two edge lines or for its components. Everything here
accepts either a BaseGraph or a bare networkx graph, and never mutates its input.
"""
from __future__ import annotations
from collections import deque
from typing import Any, Callable, Collection, Iterable, List, Mapping, Optional, Set, Union
import networkx as nx
from abstractgames import config
from abstractgames.core.errors import CellNotFoundError
from abstractgames.core.stackset import StackSet
from .base import BaseGraph

GraphLike = Union[BaseGraph, nx.Graph]


def _nx(g: GraphLike) -> nx.Graph:
    return g.graph if isinstance(g, BaseGraph) else g


def _require(g: nx.Graph, cell: str) -> None:
    if not g.has_node(cell):
        raise CellNotFoundError(f"The cell {cell} is not in the graph")


def owner_graph(graph: GraphLike, board: Mapping[str, Any], player: Any) -> nx.Graph:
    """Fresh undirected graph of the cells `player` owns, linked per the board topology."""
    g = _nx(graph)
    keep = [n for n in g.nodes if board.get(n) == player]
    sub = g.subgraph(keep)
    return (sub.to_undirected() if g.is_directed() else sub).copy()


def shortest_path_between(graph: GraphLike, sources: Iterable[str], targets: Iterable[str]) -> Optional[List[str]]:
    """Shortest path from any source to any target, or None.

    Labels missing from the graph are ignored, so edge-line sets can be passed as is.
    Among equally short paths the smallest target label wins.
    """
    g = _nx(graph)
    srcs = {c for c in sources if g.has_node(c)}
    tgts = {c for c in targets if g.has_node(c)}
    if not srcs or not tgts:
        return None
    dist, paths = nx.multi_source_dijkstra(g, srcs)
    reached = [t for t in tgts if t in dist]
    if not reached:
        return None
    return paths[min(reached, key=lambda t: (dist[t], t))]


def connected_components(graph: GraphLike) -> List[List[str]]:
    """Maximal groups, each sorted, ordered by their smallest member."""
    g = _nx(graph)
    comps = nx.weakly_connected_components(g) if g.is_directed() else nx.connected_components(g)
    return sorted((sorted(c) for c in comps), key=lambda c: c[0])


def group_of(graph: GraphLike, cell: str) -> Set[str]:
    g = _nx(graph)
    _require(g, cell)
    if g.is_directed():
        g = g.to_undirected(as_view=True)
    return set(nx.node_connected_component(g, cell))


def encloses(graph: GraphLike, group: Collection[str], start: str, outer: Collection[str]) -> bool:
    """True when a walk from `start` that never enters `group` cannot reach `outer`."""
    g = _nx(graph)
    _require(g, start)
    if start in group:
        return False
    seen = {start}
    frontier = deque([start])
    while frontier:
        cur = frontier.popleft()
        if cur in outer:
            return False
        for nb in g.neighbors(cur):
            if nb in seen or nb in group:
                continue
            seen.add(nb)
            frontier.append(nb)
    return True


def is_loop(graph: GraphLike, group: Collection[str], last: str, outer: Collection[str]) -> bool:
    """Does `group` cut some neighbour of `last` off from the outer ring?"""
    g = _nx(graph)
    return any(encloses(g, group, nb, outer) for nb in g.neighbors(last))


def _is_triangle(g: nx.Graph, a: str, b: str, c: str) -> bool:
    return g.has_edge(a, b) and g.has_edge(b, c) and g.has_edge(c, a)


def find_shortest_loops(
    graph: GraphLike,
    source: str,
    min_length: Optional[int] = None,
    accept: Optional[Callable[[List[str]], bool]] = None,
) -> List[List[str]]:
    """Every shortest simple cycle through `source` of at least `min_length` cells.

    Iterative-deepening DFS over `graph` (normally the player's group). Each cycle is
    returned closed, [source, ..., source], once per direction of travel. Paths that
    turn through a triangle are pruned since a shortest enclosing loop never does.
    """
    g = _nx(graph)
    _require(g, source)
    if min_length is None:
        min_length = config.LOOP_MIN

    for depth in range(min_length, g.number_of_nodes() + 1):
        found: List[List[str]] = []
        visited = StackSet.of(source, cycle=True)
        # children are popped from the end, so reverse to walk in label order
        stack = [sorted(g.neighbors(source), reverse=True)]
        while stack:
            children = stack[-1]
            if not children:
                stack.pop()
                visited.pop()
                continue
            child = children.pop()
            if visited.has(child):
                continue
            p = visited.path(child)
            if len(p) >= 3 and _is_triangle(g, *p[-3:]):
                continue
            if child == source:
                if len(p) - 1 >= min_length and (accept is None or accept(p)):
                    found.append(p)
                continue
            visited.push(child)
            if len(stack) < depth:
                stack.append(sorted(g.neighbors(child), reverse=True))
            else:
                visited.pop()
        if found:
            return found
    return []


def shortest_loop(
    graph: GraphLike,
    source: str,
    min_length: Optional[int] = None,
    accept: Optional[Callable[[List[str]], bool]] = None,
) -> Optional[List[str]]:
    """The lexicographically smallest of the shortest loops, or None."""
    loops = find_shortest_loops(graph, source, min_length, accept)
    return min(loops) if loops else None
