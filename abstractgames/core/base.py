"""The state-machine contract every game implements.

A game instance keeps a history stack of frozen move-state snapshots plus live fields
mirroring the newest one. Live fields are private deep copies of the snapshot they were
loaded from, and every pushed snapshot is a deep copy of the live fields, so mutating a
live board never reaches the history.

Subclasses set `gameinfo` and `state_model` and implement:
    initial_state()            first snapshot for a fresh game
    moves(player=None)         sorted legal complete moves
    validate(m)                ValidationResult for a normalised (partial) move
    execute(m, partial)        mutate live fields and fill self.results
    check_eog()                set gameover/winner via end_game()
    render()                   pure render dict
and optionally configure() (variant parameters) and click() (UI click to move string).
"""
from __future__ import annotations
import random
from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, Generic, List, Mapping, Optional, Sequence, TypeVar, Union
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from abstractgames import config
from abstractgames.core.errors import FailsafeError, GameError, GameStateError, UserFacingError
from abstractgames.core.info_builder import GameInfo, build_game_info
from abstractgames.core.logger import log_error, log_event, log_failsafe, log_illegal
from abstractgames.core.messages import t
from abstractgames.core.primitives import ClickResult, MoveOutcome, MoveResult, ValidationResult
from abstractgames.core.rng import copy_rng, make_rng
from abstractgames.core.serialization import sorting_dumps
from abstractgames.events import MoveLogResult

SPECIAL_MOVES = ("resign", "timeout", "draw", "abandoned")
# snapshot bookkeeping that does not describe the position
META_FIELDS = frozenset({"version", "timestamp", "results", "lastmove"})


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def normalise_move(m: str) -> str:
    """Move strings are case and whitespace insensitive."""
    return "".join(m.split()).lower()


class MoveState(BaseModel):
    """One ply of history. Game snapshots subclass this and add their board fields."""
    model_config = ConfigDict(frozen=True)

    version: str = "1"
    results: List[MoveResult] = Field(default_factory=list)
    timestamp: str = Field(default_factory=_now)
    lastmove: Optional[str] = None
    currplayer: Optional[int] = 1


S = TypeVar("S", bound=MoveState)


class GameRecord(BaseModel, Generic[S]):
    """Full serialized game: header plus the history stack (index -1 is current)."""
    game: str
    numplayers: int
    variants: List[str] = Field(default_factory=list)
    gameover: bool = False
    winner: List[int] = Field(default_factory=list)
    stack: List[S] = Field(default_factory=list)


StateInput = Union[str, Mapping[str, Any], GameRecord]


class GameBase:
    gameinfo: ClassVar[GameInfo]
    state_model: ClassVar[type[MoveState]] = MoveState
    # fields compared by state_count() when no explicit values are given
    position_fields: ClassVar[Sequence[str]] = ("board", "currplayer")

    def __init__(
        self,
        state: Optional[StateInput] = None,
        variants: Optional[Sequence[str]] = None,
        *,
        numplayers: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.rng = rng if rng is not None else make_rng()
        self.results: List[MoveResult] = []
        self.lastmove: Optional[str] = None
        self.currplayer: Optional[int] = 1
        if state is None:
            self.numplayers = numplayers if numplayers is not None else self.gameinfo.playercounts[0]
            if self.numplayers not in self.gameinfo.playercounts:
                raise GameStateError(f"{self.gameinfo.name} cannot be played by {self.numplayers} players.")
            self.variants = self.check_variants(variants or [])
            self.gameover = False
            self.winner: List[int] = []
            self.configure()
            self.stack: List[MoveState] = [self.initial_state()]
        else:
            rec = self.parse_state(state)
            self.numplayers = rec.numplayers
            self.variants = self.check_variants(rec.variants)
            self.gameover = rec.gameover
            self.winner = list(rec.winner)
            self.configure()
            self.stack = list(rec.stack)
            if not self.stack:
                raise GameStateError("The serialized state has an empty stack.")
        self.load()

    # --- construction -----------------------------------------------------

    @classmethod
    def record_model(cls) -> type[GameRecord]:
        return GameRecord[cls.state_model]  # type: ignore[valid-type]

    @classmethod
    def parse_state(cls, state: StateInput) -> GameRecord:
        model = cls.record_model()
        try:
            if isinstance(state, str):
                rec = model.model_validate_json(state)
            elif isinstance(state, BaseModel):
                rec = model.model_validate(state.model_dump())
            else:
                rec = model.model_validate(state)
        except ValidationError as e:
            raise GameStateError(f"Malformed {cls.gameinfo.uid} state: {e}") from e
        if rec.game != cls.gameinfo.uid:
            raise GameStateError(f"The {cls.gameinfo.name} engine cannot process a game of '{rec.game}'.")
        return rec

    @classmethod
    def check_variants(cls, variants: Sequence[str]) -> List[str]:
        """Known uids only, at most one per group; duplicates collapse."""
        known = {v.uid: v for v in cls.gameinfo.variants}
        out: List[str] = []
        groups: Dict[str, str] = {}
        for v in variants:
            if v not in known:
                raise GameStateError(f"Unrecognised variant for {cls.gameinfo.name}: {v}")
            group = known[v].group
            if group is not None:
                if group in groups and groups[group] != v:
                    raise GameStateError(f"Variants {groups[group]} and {v} cannot be combined.")
                groups[group] = v
            if v not in out:
                out.append(v)
        return out

    def configure(self) -> None:
        """Resolve self.variants into numeric parameters."""

    def initial_state(self) -> MoveState:
        raise NotImplementedError

    # --- snapshots --------------------------------------------------------

    def _live_fields(self) -> List[str]:
        return [n for n in self.state_model.model_fields if n not in ("version", "timestamp")]

    def load(self, idx: int = -1) -> "GameBase":
        n = len(self.stack)
        i = idx + n if idx < 0 else idx
        if i < 0 or i >= n:
            raise IndexError("Could not load the requested state from the stack.")
        snap = self.stack[i]
        for name in self._live_fields():
            setattr(self, name, deepcopy(getattr(snap, name)))
        return self

    def save_state(self) -> None:
        fields = {name: deepcopy(getattr(self, name)) for name in self._live_fields()}
        self.stack.append(self.state_model(version=self.gameinfo.version, timestamp=_now(), **fields))

    def _record(self, stack: List[MoveState]) -> GameRecord:
        return self.record_model()(
            game=self.gameinfo.uid,
            numplayers=self.numplayers,
            variants=list(self.variants),
            gameover=self.gameover,
            winner=list(self.winner),
            stack=stack,
        )

    def state(self) -> GameRecord:
        return self._record([s.model_copy(deep=True) for s in self.stack])

    def move_state(self) -> MoveState:
        return self.stack[-1].model_copy(deep=True)

    def serialize(self) -> str:
        return self._record(self.stack).model_dump_json()

    def clone(self) -> "GameBase":
        return type(self)(self.serialize(), rng=copy_rng(self.rng))

    # --- queries ----------------------------------------------------------

    def moves(self, player: Optional[int] = None) -> List[str]:
        raise NotImplementedError

    def validate(self, m: str) -> ValidationResult:
        raise NotImplementedError

    def validate_move(self, m: str) -> ValidationResult:
        """Never raises: unexpected errors come back as a generic invalid result."""
        m = normalise_move(m)
        try:
            return self.validate(m)
        except Exception as e:  # arbitrary client input must not escape as an exception
            return ValidationResult(valid=False, message=t("validation._general.GENERIC", move=m, message=str(e)))

    def click(self, move: str, row: int, col: int, piece: Optional[str] = None) -> Optional[str]:
        """Translate a click into a new candidate move string; None when clicks are unsupported."""
        return None

    def handle_click(self, move: str, row: int, col: int, piece: Optional[str] = None) -> ClickResult:
        try:
            newmove = self.click(move, row, col, piece)
            if newmove is None:
                return ClickResult(move=move, valid=False, message=t("validation._general.DEFAULT_HANDLER"))
            result = self.validate_move(newmove)
            return ClickResult(move=normalise_move(newmove), **result.model_dump())
        except Exception as e:  # clicks on arbitrary coordinates are client input too
            return ClickResult(move=move, valid=False, message=t("validation._general.GENERIC", move=move, message=str(e)))

    def render(self) -> Dict[str, Any]:
        raise NotImplementedError

    def random_move(self) -> Optional[str]:
        moves = self.moves()
        return self.rng.choice(moves) if moves else None

    # --- transitions ------------------------------------------------------

    def check_move(self, m: str, partial: bool, player: Optional[int] = None) -> None:
        """validate_move, then the moves() failsafe for complete submissions."""
        result = self.validate_move(m)
        if not result.valid:
            raise UserFacingError("VALIDATION_GENERAL", result.message, move=m)
        if partial:
            return
        if result.complete != 1:
            raise UserFacingError("MOVE_INCOMPLETE", move=m)
        if config.FAILSAFE and m not in self.moves(player):
            raise FailsafeError(m)

    def execute(self, m: str, partial: bool) -> None:
        raise NotImplementedError

    def check_eog(self) -> None:
        raise NotImplementedError

    def advance(self) -> None:
        self.currplayer = self.currplayer % self.numplayers + 1

    def move(self, m: str, *, partial: bool = False, trusted: bool = False) -> "GameBase":
        m = normalise_move(m)
        player = self.currplayer
        uid = self.gameinfo.uid
        try:
            if self.gameover:
                raise UserFacingError("MOVES_GAMEOVER")
            if not partial:
                # full moves start from the last saved position, not a partial preview
                self.load()
            if not trusted:
                self.check_move(m, partial)
            self.results = []
            try:
                self.execute(m, partial)
            except Exception:
                # drop whatever execute() half-applied to the live fields
                self.load()
                raise
        except UserFacingError as e:
            log_illegal(uid, player, m, e.client)
            raise
        except FailsafeError as e:
            log_failsafe(uid, player, m, e.client)
            raise
        except Exception as e:
            log_error(uid, player, m, e)
            raise
        if partial:
            return self
        self.lastmove = m
        self.advance()
        self.check_eog()
        self.save_state()
        log_event(uid, player, m, MoveLogResult.APPLIED, results=self.results)
        return self

    def apply(self, m: str, *, partial: bool = False) -> MoveOutcome:
        """move() for callers that want a result instead of catching user errors.

        Failsafe and programmer errors still raise.
        """
        try:
            self.move(m, partial=partial)
        except UserFacingError as e:
            return MoveOutcome(ok=False, error=e.client, key=e.key)
        return MoveOutcome(ok=True)

    def end_game(self, winners: Sequence[int]) -> None:
        self.gameover = True
        self.winner = list(winners)
        self.results.append(MoveResult(type="eog"))
        self.results.append(MoveResult(type="winners", players=list(self.winner)))

    # --- special moves ----------------------------------------------------

    def resign(self, player: int) -> "GameBase":
        return self._eog(player, "resign", MoveResult(type="resigned", player=player))

    def timeout(self, player: int) -> "GameBase":
        return self._eog(player, "timeout", MoveResult(type="timeout", player=player))

    def draw(self) -> "GameBase":
        return self._eog(None, "draw", MoveResult(type="drawagreed"))

    def abandoned(self) -> "GameBase":
        return self._eog(None, "abandoned", MoveResult(type="gameabandoned"))

    def _special_lastmove(self, player: Optional[int], move: str) -> str:
        return move

    def _eog(self, player: Optional[int], move: str, result: MoveResult) -> "GameBase":
        if self.gameover:
            raise UserFacingError("MOVES_GAMEOVER")
        players = list(range(1, self.numplayers + 1))
        if player is not None and player not in players:
            raise GameStateError(t("BAD_PLAYER", player=player))
        self.results = [result]
        self.lastmove = self._special_lastmove(player, move)
        # one player resigning or timing out hands the win to everybody else
        winners = [] if result.type == "gameabandoned" else [p for p in players if p != player]
        self.end_game(winners)
        self.save_state()
        log_event(self.gameinfo.uid, player, move, MoveLogResult.APPLIED, results=self.results)
        return self

    def undo(self) -> "GameBase":
        if len(self.stack) < 2:
            raise UserFacingError("INITIAL_UNDO")
        self.stack.pop()
        # gameover is terminal, so every earlier snapshot was in progress
        self.gameover = False
        self.winner = []
        return self.load()

    # --- history ----------------------------------------------------------

    def move_history(self) -> List[List[str]]:
        """Rounds of moves, one entry per player per round."""
        played = [s.lastmove or "" for s in self.stack[1:]]
        return [played[i:i + self.numplayers] for i in range(0, len(played), self.numplayers)]

    def results_history(self) -> List[List[Dict[str, Any]]]:
        return [[r.model_dump() for r in s.results] for s in self.stack if s.results]

    def status(self) -> str:
        out = ""
        if self.gameover:
            out += f"**GAME OVER**\n\nWinner: {', '.join(str(w) for w in self.winner)}\n\n"
        if self.variants:
            out += "**Variants**: " + ", ".join(self.variants) + "\n\n"
        return out

    def get_player_result(self, player: int) -> Optional[int]:
        if not self.gameover:
            return None
        return 1 if player in self.winner else 0

    def state_count(self, to_check: Optional[Mapping[str, Any]] = None) -> int:
        """How many snapshots match the given field values (default: the current position)."""
        if to_check is None:
            cur = self.stack[-1]
            to_check = {k: getattr(cur, k) for k in self.position_fields}
        fields = self.state_model.model_fields
        for key in to_check:
            if key not in fields:
                raise KeyError(f"The key {key} does not exist in the state.")
        src = sorting_dumps(dict(to_check))
        return sum(1 for s in self.stack if sorting_dumps({k: getattr(s, k) for k in to_check}) == src)

    def _position(self, snap: MoveState) -> str:
        return sorting_dumps(snap.model_dump(exclude=set(META_FIELDS)))

    def same_move(self, move1: str, move2: str) -> bool:
        """Do two move strings lead to the same position? move1 must be the last move played."""
        move1, move2 = normalise_move(move1), normalise_move(move2)
        if move1 == move2:
            return True
        if move1 in SPECIAL_MOVES or move2 in SPECIAL_MOVES:
            return False
        if self.lastmove != move1:
            raise ValueError(f"To compare moves the current state must follow {move1}, not {self.lastmove}")
        cloned = self.clone()
        cloned.stack.pop()
        cloned.gameover = False
        cloned.winner = []
        cloned.load()
        try:
            cloned.move(move2)
        except UserFacingError:
            return False
        return self._position(self.stack[-1]) == cloned._position(cloned.stack[-1])

    def info(self) -> Dict[str, Any]:
        return build_game_info(type(self), self)


class GameBaseSimultaneous(GameBase):
    """All players submit one sub-move each, joined with commas, resolved together.

    Snapshots carry currplayer None; nobody is on move.
    """

    def is_eliminated(self, player: int) -> bool:
        return False

    def advance(self) -> None:
        pass

    def split_move(self, m: str) -> List[str]:
        parts = normalise_move(m).split(",")
        if len(parts) != self.numplayers:
            raise UserFacingError("MOVES_SIMULTANEOUS_PARTIAL", expected=self.numplayers, got=len(parts))
        return parts

    def check_move(self, m: str, partial: bool, player: Optional[int] = None) -> None:
        parts = self.split_move(m)
        for idx, sub in enumerate(parts):
            p = idx + 1
            if sub == "":
                if partial or self.is_eliminated(p):
                    continue
                raise UserFacingError("MOVES_SIMULTANEOUS_PARTIAL", expected=self.numplayers, got=sum(1 for s in parts if s))
            super().check_move(sub, partial, p)

    def handle_click_simultaneous(
        self, move: str, row: int, col: int, player: int, piece: Optional[str] = None
    ) -> ClickResult:
        """Like handle_click, for one player's sub-move only."""
        try:
            newmove = self.click_simultaneous(move, row, col, player, piece)
            if newmove is None:
                return ClickResult(move=move, valid=False, message=t("validation._general.DEFAULT_HANDLER"))
            result = self.validate_move(newmove)
            return ClickResult(move=normalise_move(newmove) if result.valid else "", **result.model_dump())
        except Exception as e:  # clicks on arbitrary coordinates are client input too
            return ClickResult(move=move, valid=False, message=t("validation._general.GENERIC", move=move, message=str(e)))

    def click_simultaneous(
        self, move: str, row: int, col: int, player: int, piece: Optional[str] = None
    ) -> Optional[str]:
        return None

    def handle_click(self, move: str, row: int, col: int, piece: Optional[str] = None) -> ClickResult:
        return ClickResult(move=move, valid=False, message=t("validation._general.DEFAULT_HANDLER"))

    def move_history(self) -> List[List[str]]:
        return [(s.lastmove or "").split(",") for s in self.stack[1:]]

    def _special_lastmove(self, player: Optional[int], move: str) -> str:
        if player is None:
            return ",".join(move for _ in range(self.numplayers))
        return ",".join(move if p == player else "" for p in range(1, self.numplayers + 1))
