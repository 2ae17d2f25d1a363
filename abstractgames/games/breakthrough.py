from __future__ import annotations
import re
from typing import Any, Dict, List, Optional
from pydantic import Field
from abstractgames.core.base import GameBase, MoveState
from abstractgames.core.errors import InvalidCellError
from abstractgames.core.game_registry import register_game
from abstractgames.core.info_builder import GameInfo, VariantInfo
from abstractgames.core.messages import t
from abstractgames.core.primitives import MoveResult, ValidationResult
from abstractgames.core.serialization import OrderedMap
from abstractgames.geometry.algebraic import cell_sort_key
from abstractgames.geometry.rect_grid import RectGrid

SIZE = 8
FORWARD = {1: ("N", "NE", "NW"), 2: ("S", "SE", "SW")}
HOME_RANKS = {1: ("1", "2"), 2: ("7", "8")}
GOAL_RANK = {1: "8", 2: "1"}
PIECES = {1: "A", 2: "B"}

_FULL = re.compile(r"^([a-z]+\d+)([-x])([a-z]+\d+)$")


def _move_key(m: str) -> tuple:
    # bombardments after ordinary moves, then by origin and destination cell
    if m.startswith("x"):
        return (1, cell_sort_key(m[1:]))
    frm, sep, to = _FULL.match(m).groups()
    return (0, cell_sort_key(frm), cell_sort_key(to), sep)


class BreakthroughState(MoveState):
    board: OrderedMap[str, int] = Field(default_factory=dict)  # cell -> owner


@register_game
class BreakthroughGame(GameBase):
    """Two rows of pawns each; first to the far rank (or last army standing) wins."""

    gameinfo = GameInfo(
        name="Breakthrough",
        uid="breakthrough",
        variants=[
            VariantInfo(
                uid="bombardment",
                group="ruleset",
                description="No captures; instead a piece may detonate, removing itself and every adjacent piece.",
            ),
        ],
        categories=["goal>breakthrough", "mechanic>capture", "mechanic>move", "board>shape>rect"],
    )
    state_model = BreakthroughState

    board: Dict[str, int]

    def configure(self) -> None:
        self.grid = RectGrid(SIZE, SIZE)
        self.bombardment = "bombardment" in self.variants

    def initial_state(self) -> BreakthroughState:
        board: Dict[str, int] = {}
        for player, ranks in HOME_RANKS.items():
            for rank in ranks:
                for x in range(SIZE):
                    board[self.grid.coords2algebraic(x, SIZE - int(rank))] = player
        return BreakthroughState(version=self.gameinfo.version, board=board, currplayer=1)

    def moves(self, player: Optional[int] = None) -> List[str]:
        if self.gameover:
            return []
        if player is None:
            player = self.currplayer
        moves: List[str] = []
        for piece in [c for c, owner in self.board.items() if owner == player]:
            x, y = self.grid.algebraic2coords(piece)
            for d in FORWARD[player]:
                ray = self.grid.ray(x, y, d)
                if not ray:
                    continue
                nxt = self.grid.coords2algebraic(*ray[0])
                owner = self.board.get(nxt)
                if owner is None:
                    moves.append(f"{piece}-{nxt}")
                elif owner != player and len(d) == 2 and not self.bombardment:
                    moves.append(f"{piece}x{nxt}")
            if self.bombardment:
                moves.append(f"x{piece}")
        return sorted(moves, key=_move_key)

    def click(self, move: str, row: int, col: int, piece: Optional[str] = None) -> Optional[str]:
        cell = self.grid.coords2algebraic(col, row)
        if move == "":
            return cell if cell in self.board else ""
        if self.bombardment and move == cell:
            return f"x{cell}"
        if move.startswith("x"):
            return cell
        prev = re.split(r"[-x]", move)[0]
        px, py = self.grid.algebraic2coords(prev)
        if RectGrid.distance(px, py, col, row) == 1:
            owner = self.board.get(cell)
            if owner is None:
                return f"{prev}-{cell}"
            return f"{prev}x{cell}" if owner != self.currplayer else cell
        return cell if cell in self.board else ""

    def _check_piece(self, cell: str) -> Optional[ValidationResult]:
        """Invalid result unless `cell` is on the board and holds one of our pieces."""
        try:
            self.grid.algebraic2coords(cell)
        except InvalidCellError:
            return ValidationResult(valid=False, message=t("validation._general.INVALIDCELL", cell=cell))
        if cell not in self.board:
            return ValidationResult(valid=False, message=t("validation._general.NOPIECE", where=cell))
        if self.board[cell] != self.currplayer:
            return ValidationResult(valid=False, message=t("validation._general.UNCONTROLLED"))
        return None

    def validate(self, m: str) -> ValidationResult:
        if m == "":
            return ValidationResult(valid=True, complete=-1, message=t("validation.breakthrough.INITIAL_INSTRUCTIONS"))

        if m.startswith("x"):
            if not self.bombardment:
                return ValidationResult(valid=False, message=t("validation.breakthrough.NO_BOMBARDMENT"))
            bad = self._check_piece(m[1:])
            if bad is not None:
                return bad
            return ValidationResult(valid=True, complete=1, message=t("validation._general.VALID_MOVE"))

        if "-" not in m and "x" not in m:
            bad = self._check_piece(m)
            if bad is not None:
                return bad
            return ValidationResult(valid=True, complete=-1, message=t("validation.breakthrough.PARTIAL"))

        match = _FULL.match(m)
        if match is None:
            return ValidationResult(valid=False, message=t("validation._general.BAD_SYNTAX", move=m))
        frm, sep, to = match.groups()
        try:
            self.grid.algebraic2coords(to)
        except InvalidCellError:
            return ValidationResult(valid=False, message=t("validation._general.INVALIDCELL", cell=to))
        bad = self._check_piece(frm)
        if bad is not None:
            return bad
        fx, fy = self.grid.algebraic2coords(frm)
        tx, ty = self.grid.algebraic2coords(to)
        if RectGrid.distance(fx, fy, tx, ty) > 1:
            return ValidationResult(valid=False, message=t("validation.breakthrough.TOO_FAR"))
        # y counts down from the top, so player 1 must decrease it
        if (self.currplayer == 1 and ty >= fy) or (self.currplayer == 2 and ty <= fy):
            return ValidationResult(valid=False, message=t("validation.breakthrough.MOVE_BACKWARDS"))

        if sep == "-":
            if to in self.board:
                return ValidationResult(valid=False, message=t("validation._general.MOVE4CAPTURE", where=to))
        else:
            if self.bombardment:
                return ValidationResult(valid=False, message=t("validation.breakthrough.NO_CAPTURES", where=to))
            if fx == tx:
                return ValidationResult(valid=False, message=t("validation.breakthrough.STRAIGHT_CAPTURE"))
            if to not in self.board:
                return ValidationResult(valid=False, message=t("validation._general.CAPTURE4MOVE", where=to))
            if self.board[to] == self.currplayer:
                return ValidationResult(valid=False, message=t("validation._general.SELFCAPTURE"))
        return ValidationResult(valid=True, complete=1, message=t("validation._general.VALID_MOVE"))

    def execute(self, m: str, partial: bool) -> None:
        # a bare selection leaves the board alone
        if partial and "-" not in m and "x" not in m:
            return
        if m.startswith("x"):
            cell = m[1:]
            del self.board[cell]
            self.results.append(MoveResult(type="detonate", where=cell))
            x, y = self.grid.algebraic2coords(cell)
            for n in (self.grid.coords2algebraic(*pt) for pt in self.grid.adjacencies(x, y)):
                owner = self.board.pop(n, None)
                if owner is not None:
                    what = "mine" if owner == self.currplayer else "theirs"
                    self.results.append(MoveResult(type="destroy", what=what, where=n))
            return
        frm, sep, to = _FULL.match(m).groups()
        del self.board[frm]
        self.board[to] = self.currplayer
        self.results.append(MoveResult(type="move", frm=frm, to=to))
        if sep == "x":
            self.results.append(MoveResult(type="capture", where=to))

    def check_eog(self) -> None:
        # currplayer has already advanced
        prev = 2 if self.currplayer == 1 else 1
        # a piece on the goal rank has no moves left, so look for it first
        if any(owner == prev and cell.endswith(GOAL_RANK[prev]) for cell, owner in self.board.items()):
            self.end_game([prev])
        elif not self.moves():
            self.end_game([prev])
        elif not self.moves(prev):
            self.end_game([self.currplayer])

    def _rowcol(self, cell: str) -> Dict[str, int]:
        x, y = self.grid.algebraic2coords(cell)
        return {"row": y, "col": x}

    def render(self) -> Dict[str, Any]:
        rows = []
        for y in range(SIZE):
            cells = [self.grid.coords2algebraic(x, y) for x in range(SIZE)]
            rows.append("".join(PIECES.get(self.board.get(c), "-") for c in cells))
        rep: Dict[str, Any] = {
            "board": {"style": "squares-checkered", "width": SIZE, "height": SIZE},
            "legend": {"A": {"name": "piece", "player": 1}, "B": {"name": "piece", "player": 2}},
            "pieces": "\n".join(rows),
            "annotations": [],
        }
        for r in self.stack[-1].results:
            if r.type == "move":
                rep["annotations"].append({"type": "move", "targets": [self._rowcol(r.frm), self._rowcol(r.to)]})
            elif r.type in ("capture", "detonate", "destroy"):
                rep["annotations"].append({"type": "exit", "targets": [self._rowcol(r.where)]})
        return rep
