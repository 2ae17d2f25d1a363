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
from abstractgames.graphs.connectivity import find_shortest_loops, group_of, is_loop, owner_graph
from abstractgames.graphs.hex_tri import HexTriGraph

PIECES = {1: "A", 2: "B"}


class LoopState(MoveState):
    board: OrderedMap[str, int] = Field(default_factory=dict)  # cell -> owner
    loop: List[str] = Field(default_factory=list)


@register_game
class LoopGame(GameBase):
    """Place stones on a hex-hex board. Surround at least one cell with a closed ring of your stones to win."""

    gameinfo = GameInfo(
        name="Loop",
        uid="loop",
        variants=[
            VariantInfo(uid="size-5", group="board", description="Side length 5"),
            VariantInfo(uid="size-6", group="board", description="Side length 6"),
        ],
        categories=["goal>loop", "mechanic>place", "board>shape>hex"],
    )
    state_model = LoopState

    board: Dict[str, int]
    loop: List[str]

    def configure(self) -> None:
        self.boardsize = 4
        for v in self.variants:
            if v.startswith("size-"):
                self.boardsize = int(v[len("size-"):])
        self.graph = HexTriGraph(self.boardsize, self.boardsize * 2 - 1)
        self.outer = set(self.graph.perimeter())

    def initial_state(self) -> LoopState:
        return LoopState(version=self.gameinfo.version, board={}, currplayer=1)

    def moves(self, player: Optional[int] = None) -> List[str]:
        if self.gameover:
            return []
        return sort_cells(c for c in self.graph.list_cells() if c not in self.board)

    def click(self, move: str, row: int, col: int, piece: Optional[str] = None) -> Optional[str]:
        return self.graph.coords2algebraic(col, row)

    def validate(self, m: str) -> ValidationResult:
        if m == "":
            return ValidationResult(valid=True, complete=-1, message=t("validation.loop.INITIAL_INSTRUCTIONS"))
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

    def winning_loop(self, last: str) -> Optional[List[str]]:
        """The loop closed by the stone on `last`, or None.

        An empty list means the group encloses territory but no single simple ring
        through `last` does on its own.
        """
        player = self.board[last]
        mine = owner_graph(self.graph, self.board, player)
        group = group_of(mine, last)
        if not is_loop(self.graph, group, last, self.outer):
            return None
        ring = owner_graph(self.graph, {c: player for c in group}, player)
        loops = find_shortest_loops(ring, last, accept=lambda p: is_loop(self.graph, set(p), last, self.outer))
        return min(loops) if loops else []

    def check_eog(self) -> None:
        if self.lastmove is None:
            return
        found = self.winning_loop(self.lastmove)
        if found is not None:
            self.loop = found
            self.end_game([self.board[self.lastmove]])
        elif not self.moves():
            self.end_game([1, 2])

    def render(self) -> Dict[str, Any]:
        rows = []
        for row in self.graph.list_cells(ordered=True):
            rows.append("".join(PIECES.get(self.board.get(c), "-") for c in row))
        rep: Dict[str, Any] = {
            "board": {"style": "hex-of-hex", "minWidth": self.graph.minwidth, "maxWidth": self.graph.maxwidth},
            "legend": {"A": {"name": "piece", "player": 1}, "B": {"name": "piece", "player": 2}},
            "pieces": "\n".join(rows),
            "annotations": [],
        }
        for r in self.stack[-1].results:
            if r.type == "place":
                x, y = self.graph.algebraic2coords(r.where)
                rep["annotations"].append({"type": "enter", "targets": [{"row": y, "col": x}]})
        if self.loop:
            targets = []
            for c in self.loop:
                x, y = self.graph.algebraic2coords(c)
                targets.append({"row": y, "col": x})
            rep["annotations"].append({"type": "move", "arrow": False, "targets": targets})
        return rep
