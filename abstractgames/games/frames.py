from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple
from pydantic import Field
from abstractgames.core.base import GameBaseSimultaneous, MoveState
from abstractgames.core.errors import InvalidCellError
from abstractgames.core.game_registry import register_game
from abstractgames.core.info_builder import GameInfo, VariantInfo
from abstractgames.core.messages import t
from abstractgames.core.primitives import MoveResult, ValidationResult
from abstractgames.core.serialization import OrderedMap
from abstractgames.geometry.algebraic import sort_cells
from abstractgames.geometry.rect_grid import RectGrid

SIZE = 19
NEUTRAL = 0
PIECES = {NEUTRAL: "C", 1: "A", 2: "B"}


class FramesState(MoveState):
    currplayer: Optional[int] = None
    board: OrderedMap[str, int] = Field(default_factory=dict)  # cell -> owner, 0 is neutral
    scores: Tuple[int, int] = (0, 0)


@register_game
class FramesGame(GameBaseSimultaneous):
    """Both players place a stone at once; the pair frames a rectangle that scores for whoever dominates it."""

    gameinfo = GameInfo(
        name="Frames",
        uid="frames",
        variants=[VariantInfo(uid="short", description="First to 5 points wins.")],
        flags=["simultaneous", "scores"],
        categories=["goal>score>race", "mechanic>place", "mechanic>simultaneous", "board>shape>rect"],
    )
    state_model = FramesState
    position_fields = ("board", "scores")

    board: Dict[str, int]
    scores: Tuple[int, int]

    def configure(self) -> None:
        self.grid = RectGrid(SIZE, SIZE)
        self.target = 5 if "short" in self.variants else 10

    def initial_state(self) -> FramesState:
        return FramesState(version=self.gameinfo.version, board={"j10": NEUTRAL}, currplayer=None)

    def moves(self, player: Optional[int] = None) -> List[str]:
        if self.gameover:
            return []
        empty = (self.grid.coords2algebraic(x, y) for x, y in self.grid.list_cells())
        return sort_cells(c for c in empty if c not in self.board)

    def random_move(self) -> Optional[str]:
        moves = self.moves()
        if not moves:
            return None
        return ",".join(self.rng.choice(moves) for _ in range(self.numplayers))

    def click_simultaneous(
        self, move: str, row: int, col: int, player: int, piece: Optional[str] = None
    ) -> Optional[str]:
        return self.grid.coords2algebraic(col, row)

    def validate(self, m: str) -> ValidationResult:
        if m == "":
            return ValidationResult(valid=True, complete=-1, message=t("validation.frames.INITIAL_INSTRUCTIONS"))
        try:
            self.grid.algebraic2coords(m)
        except InvalidCellError:
            return ValidationResult(valid=False, message=t("validation._general.INVALIDCELL", cell=m))
        if m in self.board:
            return ValidationResult(valid=False, message=t("validation._general.OCCUPIED", where=m))
        return ValidationResult(valid=True, complete=1, message=t("validation._general.VALID_MOVE"))

    def execute(self, m: str, partial: bool) -> None:
        left, right = self.split_move(m)
        if partial:
            # show a pending sub-move on the live board only
            if left:
                self.board[left] = 1
            elif right:
                self.board[right] = 2
            return

        if left == right:
            self.board[left] = NEUTRAL
            self.results.append(MoveResult(type="place", who=NEUTRAL, where=left))
            return
        self.board[left] = 1
        self.board[right] = 2
        self.results.append(MoveResult(type="place", who=1, where=left))
        self.results.append(MoveResult(type="place", who=2, where=right))
        counts = self.frame_counts(left, right)
        if counts[0] != counts[1]:
            who = 1 if counts[0] > counts[1] else 2
            scores = list(self.scores)
            scores[who - 1] += 1
            self.scores = (scores[0], scores[1])
            self.results.append(MoveResult(type="deltaScore", delta=1, who=who))

    def frame_counts(self, a: str, b: str) -> Tuple[int, int]:
        """Player stones strictly inside the rectangle with corners a and b."""
        x1, y1 = self.grid.algebraic2coords(a)
        x2, y2 = self.grid.algebraic2coords(b)
        counts = [0, 0]
        for x in range(min(x1, x2) + 1, max(x1, x2)):
            for y in range(min(y1, y2) + 1, max(y1, y2)):
                owner = self.board.get(self.grid.coords2algebraic(x, y))
                if owner in (1, 2):
                    counts[owner - 1] += 1
        return counts[0], counts[1]

    def check_eog(self) -> None:
        for player in (1, 2):
            if self.scores[player - 1] >= self.target:
                self.end_game([player])
                return

    def get_player_score(self, player: int) -> int:
        return self.scores[player - 1]

    def status(self) -> str:
        out = super().status()
        out += "**Scores**\n\n"
        for p in (1, 2):
            out += f"Player {p}: {self.scores[p - 1]}\n\n"
        return out

    def _rowcol(self, cell: str) -> Dict[str, int]:
        x, y = self.grid.algebraic2coords(cell)
        return {"row": y, "col": x}

    def render(self) -> Dict[str, Any]:
        rows = []
        for y in range(SIZE):
            cells = [self.grid.coords2algebraic(x, y) for x in range(SIZE)]
            rows.append("".join(PIECES.get(self.board.get(c), "-") for c in cells))
        rep: Dict[str, Any] = {
            "board": {"style": "vertex", "width": SIZE, "height": SIZE},
            "legend": {
                "A": {"name": "piece", "player": 1},
                "B": {"name": "piece", "player": 2},
                "C": {"name": "piece", "player": 3},
            },
            "pieces": "\n".join(rows),
            "annotations": [],
        }
        placed = [r.where for r in self.stack[-1].results if r.type == "place"]
        for cell in placed:
            rep["annotations"].append({"type": "enter", "targets": [self._rowcol(cell)]})
        if len(placed) == 2:
            a, b = self._rowcol(placed[0]), self._rowcol(placed[1])
            corners = [
                {"row": a["row"], "col": a["col"]}, {"row": a["row"], "col": b["col"]},
                {"row": b["row"], "col": b["col"]}, {"row": b["row"], "col": a["col"]},
            ]
            rep["annotations"].append({"type": "move", "arrow": False, "targets": corners + corners[:1]})
        return rep
