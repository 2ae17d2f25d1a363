import pytest

from abstractgames.core.errors import CellNotFoundError, InvalidCellError
from abstractgames.geometry.hexes import Orientation
from abstractgames.graphs.base import IGraph
from abstractgames.graphs.hex_field import HexFieldGraph
from abstractgames.graphs.hex_slanted import HexSlantedGraph
from abstractgames.graphs.hex_tri import HexTriGraph
from abstractgames.graphs.square import Square3DGraph, SquareDiagGraph, SquareGraph, SquareOrthGraph
from abstractgames.graphs.square_directed import SquareOrthDirectedGraph


def test_square_graph_edge_counts():
    assert SquareGraph(8, 8).graph.number_of_edges() == 56 + 56 + 2 * 49
    assert SquareOrthGraph(8, 8).graph.number_of_edges() == 112
    assert sorted(SquareGraph(3, 3).neighbours("a1")) == ["a2", "b1", "b2"]


def test_square_paths_respect_topology():
    orth = SquareOrthGraph(8, 8)
    assert len(orth.path("a1", "h8")) == 15
    assert len(SquareGraph(8, 8).path("a1", "h8")) == 8
    diag = SquareDiagGraph(8, 8)
    assert diag.path("a1", "a2") is None
    assert not diag.is_connected()
    with pytest.raises(CellNotFoundError):
        orth.path("a1", "z9")


def test_list_cells_ordered_rows_top_first():
    g = SquareOrthGraph(3, 2)
    assert g.list_cells(ordered=True) == [["a2", "b2", "c2"], ["a1", "b1", "c1"]]
    assert sorted(g.list_cells()) == ["a1", "a2", "b1", "b2", "c1", "c2"]


def test_drop_and_subgraph_leave_board_labels_intact():
    g = SquareOrthGraph(3, 3)
    sub = g.subgraph_for(lambda c: c.startswith("a"))
    assert sorted(sub.nodes) == ["a1", "a2", "a3"]
    assert g.graph.number_of_nodes() == 9
    g.drop(["b1", "b2", "b3", "zz"])
    assert g.path("a1", "c1") is None
    # ordered listing is about the board, not the surviving nodes
    assert len(g.list_cells(ordered=True)[0]) == 3


def test_square_moves_and_rays():
    g = SquareOrthGraph(4, 4)
    assert g.move(0, 3, "N", 2) == (0, 1)
    assert g.move(0, 0, "N") is None
    assert g.ray(0, 0, "E") == [(1, 0), (2, 0), (3, 0)]
    assert g.bearing("a1", "a4") == "N"
    with pytest.raises(ValueError):
        g.move(0, 0, "NE")
    with pytest.raises(ValueError):
        g.ray(9, 9, "E")


def test_square_3d_elevation():
    g = Square3DGraph(2, 2, [[0, 1], [2, 3.5]])
    assert g.elevation("a2") == 0
    assert g.elevation((1, 1)) == 3.5
    with pytest.raises(ValueError):
        Square3DGraph(2, 2, [[0, 1]])
    with pytest.raises(ValueError):
        Square3DGraph(1, 1, [["high"]])


def test_directed_square_follows_edge_directions():
    g = SquareOrthDirectedGraph(3, 3)
    assert g.move("a1", "E") == "b1"
    assert g.ray("a1", "N") == ["a2", "a3"]
    assert g.ray("a1", "N", include_first=True) == ["a1", "a2", "a3"]
    g.graph.remove_edge("a1", "b1")
    assert g.move("a1", "E") is None
    # b1 can still enter a1, so they remain neighbours
    assert "b1" in g.neighbours("a1")


def test_hex_slanted_neighbours_and_moves():
    g = HexSlantedGraph(11, 11)
    assert g.graph.number_of_nodes() == 121
    assert sorted(g.neighbours("a1")) == ["a2", "b1"]
    assert len(g.neighbours("f6")) == 6
    x, y = g.algebraic2coords("f6")
    for d in HexSlantedGraph.all_dirs:
        nb = g.move(x, y, d)
        assert g.coords2algebraic(*nb) in g.neighbours("f6")
    assert len(g.ray(0, 0, "NE")) == 10
    with pytest.raises(InvalidCellError):
        g.algebraic2coords("l1")


def test_hex_tri_shape():
    g = HexTriGraph(4, 7)
    assert g.height == 7
    assert [g.row_width(r) for r in range(7)] == [4, 5, 6, 7, 6, 5, 4]
    assert g.graph.number_of_nodes() == 37
    assert sorted(g.neighbours("g1")) == ["f1", "f2", "g2"]
    assert len(g.neighbours("d4")) == 6
    assert g.dist_from_edge("d4") == 3
    assert len(g.perimeter()) == 18
    assert g.rot180(0, 0) == (3, 6)
    with pytest.raises(ValueError):
        HexTriGraph(5, 5)


def test_hex_tri_steps_stay_adjacent():
    g = HexTriGraph(3, 5)
    for row in g.list_cells(ordered=True):
        for cell in row:
            x, y = g.algebraic2coords(cell)
            for d in HexTriGraph.all_dirs:
                nb = g.move(x, y, d)
                if nb is not None:
                    assert g.coords2algebraic(*nb) in g.neighbours(cell)


def test_hex_field_directed_edges():
    g = HexFieldGraph(5, 5, Orientation.POINTY)
    assert g.graph.out_degree("2,2") == 6
    assert g.move("0,0", "E", 2) == "2,0"
    assert g.move("0,0", "W") is None
    assert g.bearing("0,0", "4,0") == "E"
    assert g.bearing("0,0", "0,0") is None
    with pytest.raises(InvalidCellError):
        g.algebraic2coords("5,0")
    with pytest.raises(ValueError):
        HexFieldGraph(3, 3, offset=0)


def test_hex_field_labels_are_bounded_and_canonical():
    g = HexFieldGraph(3, 3)
    with pytest.raises(InvalidCellError):
        g.coords2algebraic(99, 99)
    with pytest.raises(InvalidCellError):
        g.coords2algebraic(-1, 0)
    for label in ("01,1", " 1,1", "+1,1", "1, 1"):
        with pytest.raises(InvalidCellError):
            g.algebraic2coords(label)
    assert g.algebraic2coords("1,1") == (1, 1)


@pytest.mark.parametrize("label", ["a01", "a011", "b02"])
def test_hex_graphs_reject_padded_labels(label):
    for g in (HexSlantedGraph(11, 11), HexTriGraph(4, 7)):
        with pytest.raises(InvalidCellError):
            g.algebraic2coords(label)


def test_every_graph_satisfies_the_protocol():
    graphs = [
        SquareGraph(3, 3),
        SquareOrthGraph(3, 3),
        SquareDiagGraph(3, 3),
        SquareOrthDirectedGraph(3, 3),
        HexSlantedGraph(3, 3),
        HexTriGraph(2, 3),
        HexFieldGraph(3, 3),
    ]
    for g in graphs:
        assert isinstance(g, IGraph)
