from __future__ import annotations
from typing import Any, Dict, List, Optional
from pydantic import Field
from abstractgames.core.base import GameBase, MoveState
from abstractgames.core.errors import InvalidCellError
from abstractgames.core.game_registry import register_game
from abstractgames.core.info_builder import GameInfo, VariantInfo
from abstractgames.core.messages import t
from abstractgames.core.primitives import MoveResult, ValidationResult
from abstractgames.core.serialization import OrderedMap
from abstractgames.geometry.algebraic import sort_cells
from abstractgames.graphs.connectivity import owner_graph, shortest_path_between
from abstractgames.graphs.hex_slanted import HexSlantedGraph

PIECES = {1: "A", 2: "B"}


class HexState(MoveState):
    board: OrderedMap[str, int] = Field(default_factory=dict)  # cell -> owner
    connpath: List[str] = Field(default_factory=list)


@register_game
class HexGame(GameBase):
    """Connect your two sides of the rhombus. Player 1 runs top to bottom, player 2 left to right."""

    gameinfo = GameInfo(
        name="Hex",
        uid="hex",
        variants=[
            VariantInfo(uid="size-7", group="board", description="7x7 board"),
            VariantInfo(uid="size-9", group="board", description="9x9 board"),
            VariantInfo(uid="size-13", group="board", description="13x13 board"),
        ],
        categories=["goal>connect", "mechanic>place", "board>shape>rhombus"],
    )
    state_model = HexState

    board: Dict[str, int]
    connpath: List[str]

    def configure(self) -> None:
        self.boardsize = 11
        for v in self.variants:
            if v.startswith("size-"):
                self.boardsize = int(v[len("size-"):])
        self.graph = HexSlantedGraph(self.boardsize, self.boardsize)
        n = self.boardsize
        # player -> (one edge line, the opposite one)
        self.lines = {
            1: ([self.graph.coords2algebraic(x, n - 1) for x in range(n)],
                [self.graph.coords2algebraic(x, 0) for x in range(n)]),
            2: ([self.graph.coords2algebraic(0, y) for y in range(n)],
                [self.graph.coords2algebraic(n - 1, y) for y in range(n)]),
        }

    def initial_state(self) -> HexState:
        return HexState(version=self.gameinfo.version, board={}, currplayer=1)

    def moves(self, player: Optional[int] = None) -> List[str]:
        if self.gameover:
            return []
        return sort_cells(c for c in self.graph.list_cells() if c not in self.board)

    def click(self, move: str, row: int, col: int, piece: Optional[str] = None) -> Optional[str]:
        return self.graph.coords2algebraic(col, self.boardsize - 1 - row)

    def validate(self, m: str) -> ValidationResult:
        if m == "":
            return ValidationResult(valid=True, complete=-1, message=t("validation.hex.INITIAL_INSTRUCTIONS"))
        try:
            self.graph.algebraic2coords(m)
        except InvalidCellError:
            return ValidationResult(valid=False, message=t("validation._general.INVALIDCELL", cell=m))
        if m in self.board:
            return ValidationResult(valid=False, message=t("validation._general.OCCUPIED", where=m))
        return ValidationResult(valid=True, complete=1, message=t("validation._general.VALID_MOVE"))

    def execute(self, m: str, partial: bool) -> None:
        if m == "":
            return
        self.board[m] = self.currplayer
        self.results.append(MoveResult(type="place", who=self.currplayer, where=m))

    def connection(self, player: int) -> Optional[List[str]]:
        """Shortest chain of `player` stones joining their two edges, if any."""
        g = owner_graph(self.graph, self.board, player)
        start, finish = self.lines[player]
        return shortest_path_between(g, start, finish)

    def check_eog(self) -> None:
        for player in (1, 2):
            path = self.connection(player)
            if path is not None:
                self.connpath = path
                self.end_game([player])
                return

    def _rowcol(self, cell: str) -> Dict[str, int]:
        x, y = self.graph.algebraic2coords(cell)
        return {"row": self.boardsize - 1 - y, "col": x}

    def render(self) -> Dict[str, Any]:
        n = self.boardsize
        rows = []
        for row in range(n):
            cells = [self.graph.coords2algebraic(x, n - 1 - row) for x in range(n)]
            rows.append("".join(PIECES.get(self.board.get(c), "-") for c in cells))
        rep: Dict[str, Any] = {
            "board": {"style": "hex-slanted", "width": n, "height": n},
            "legend": {"A": {"name": "piece", "player": 1}, "B": {"name": "piece", "player": 2}},
            "pieces": "\n".join(rows),
            "annotations": [],
        }
        for r in self.stack[-1].results:
            if r.type == "place":
                rep["annotations"].append({"type": "enter", "targets": [self._rowcol(r.where)]})
        if self.connpath:
            rep["annotations"].append({"type": "move", "arrow": False, "targets": [self._rowcol(c) for c in self.connpath]})
        return rep
