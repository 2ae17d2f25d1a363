# tests/integration/test_hex.py
import pytest

from abstractgames.core.errors import GameStateError, UserFacingError
from abstractgames.games.hex import HexGame
from tests.integration.utils.helpers import _piece_at, _play, _with_board


def test_fresh_board_first_move_and_render():
    g = HexGame()
    moves = g.moves()
    assert len(moves) == 11 * 11
    first = moves[0]
    assert first == "a1"
    g.move(first)
    assert g.currplayer == 2
    assert len(g.stack) == 2
    # a1 is the bottom-left cell, drawn on the last row
    assert _piece_at(g, 10, 0) == "A"
    assert g.render()["annotations"][0] == {"type": "enter", "targets": [{"row": 10, "col": 0}]}


def test_player_one_connects_top_to_bottom():
    g = HexGame(variants=["size-7"])
    board = {f"d{n}": 1 for n in range(1, 7)}
    board.update({"a1": 2, "b1": 2, "c1": 2, "e1": 2, "f1": 2, "g1": 2})
    g = _with_board(g, board, currplayer=1)
    assert g.connection(1) is None
    g.move("d7")
    assert g.gameover
    assert g.winner == [1]
    assert g.connpath == [f"d{n}" for n in range(7, 0, -1)]
    assert [r.type for r in g.stack[-1].results] == ["place", "eog", "winners"]


def test_player_two_connects_left_to_right():
    g = HexGame(variants=["size-7"])
    board = {c: 2 for c in ["a4", "b4", "c4", "d4", "e4", "f4"]}
    board.update({f"a{n}": 1 for n in (1, 2, 3, 5, 6, 7)})
    g = _with_board(g, board, currplayer=2)
    g.move("g4")
    assert g.winner == [2]
    assert g.get_player_result(2) == 1
    assert g.get_player_result(1) == 0
    assert g.moves() == []
    with pytest.raises(UserFacingError) as exc:
        g.move("g5")
    assert exc.value.key == "MOVES_GAMEOVER"


def test_validation_messages():
    g = _play(HexGame(variants=["size-7"]), ["c3"])
    assert g.validate_move("").complete == -1
    assert not g.validate_move("c3").valid
    assert "occupied" in g.validate_move("c3").message
    assert not g.validate_move("h1").valid
    assert not g.validate_move("??").valid
    ok = g.validate_move(" C4 ")
    assert ok.valid and ok.complete == 1


def test_clicks_translate_to_cells():
    g = HexGame(variants=["size-7"])
    res = g.handle_click("", 6, 0)
    assert res.move == "a1" and res.valid and res.complete == 1
    g.move("a1")
    assert not g.handle_click("", 6, 0).valid
    # off-board clicks come back as a generic failure instead of raising
    bad = g.handle_click("", 40, 40)
    assert not bad.valid


def test_board_size_variants_are_exclusive():
    assert HexGame(variants=["size-9"]).boardsize == 9
    assert HexGame(variants=["size-9", "size-9"]).variants == ["size-9"]
    with pytest.raises(GameStateError):
        HexGame(variants=["size-7", "size-9"])
    with pytest.raises(GameStateError):
        HexGame(variants=["giant"])


def test_partial_moves_never_reach_history():
    g = HexGame(variants=["size-7"])
    g.move("", partial=True)
    assert g.board == {}
    g.move("a1", partial=True)
    assert g.board == {"a1": 1}
    assert len(g.stack) == 1 and g.currplayer == 1
    # the next full move starts from the saved position
    g.move("b2")
    assert g.board == {"b2": 1}
    assert g.stack[-1].board == {"b2": 1}


def test_padded_cell_is_an_invalid_cell():
    g = HexGame(variants=["size-7"])
    res = g.validate_move("a01")
    assert not res.valid
    assert "a01" in res.message
    with pytest.raises(UserFacingError) as exc:
        g.move("a01")
    assert exc.value.key == "VALIDATION_GENERAL"
