# tests/integration/test_loop.py
from abstractgames.games.loop import LoopGame
from tests.integration.utils.helpers import _piece_at, _play, _with_board


def _ring(g: LoopGame, centre: str):
    return sorted(g.graph.neighbours(centre))


def test_fresh_board():
    g = LoopGame()
    assert len(g.moves()) == 37
    assert len(LoopGame(variants=["size-5"]).moves()) == 61
    g.move(g.moves()[0])
    assert g.currplayer == 2


def test_closing_a_ring_wins():
    g = LoopGame()
    ring = _ring(g, "d4")
    board = {c: 1 for c in ring[:-1]}
    board.update({"a1": 2, "a2": 2, "a3": 2, "a4": 2, "g1": 2})
    g = _with_board(g, board, currplayer=1)
    assert g.winning_loop(ring[0]) is None
    g.move(ring[-1])
    assert g.gameover
    assert g.winner == [1]
    assert g.loop[0] == g.loop[-1] == ring[-1]
    assert set(g.loop) == set(ring)
    assert g.render()["annotations"][-1]["type"] == "move"


def test_a_ring_on_the_edge_does_not_count():
    # every neighbour of a perimeter cell is on or next to the outer ring
    g = LoopGame()
    ring = _ring(g, "g2")
    board = {c: 1 for c in ring[:-1]}
    g = _with_board(g, board, currplayer=1)
    g.move(ring[-1])
    assert not g.gameover


def test_stones_render_by_row():
    g = _play(LoopGame(), ["g1", "a1"])
    assert _piece_at(g, 0, 0) == "A"
    assert _piece_at(g, 6, 0) == "B"


def test_empty_partial_leaves_the_board_alone():
    g = LoopGame()
    g.move("", partial=True)
    assert g.board == {}
    g.move("a1")
    assert g.stack[-1].board == {"a1": 1}
    assert g.stack[-1].results[0].who == 1
    assert not g.validate_move("a01").valid
