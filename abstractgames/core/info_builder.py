from __future__ import annotations
from typing import TYPE_CHECKING, Annotated, Any, Dict, List, Literal, Optional, Union, get_args, get_origin
from pydantic import BaseModel, Field
from pydantic_core import PydanticUndefined

if TYPE_CHECKING:
    from abstractgames.core.base import GameBase


class VariantInfo(BaseModel):
    uid: str
    group: Optional[str] = None  # at most one variant per group
    description: str = ""


class GameInfo(BaseModel):
    name: str
    uid: str
    playercounts: List[int] = Field(default_factory=lambda: [2])
    version: str = "1"
    variants: List[VariantInfo] = Field(default_factory=list)
    # e.g. "simultaneous", "pie", "scores", "limited-pieces"
    flags: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)


def _placeholder(tp: Any) -> Any:
    origin = get_origin(tp)
    if origin is Annotated:
        return _placeholder(get_args(tp)[0])
    if origin is Literal:
        return get_args(tp)[0]
    if origin in (list, tuple, set, frozenset):
        return []
    if origin is dict:
        return {}
    if origin is Union:
        args = [a for a in get_args(tp) if a is not type(None)]
        return _placeholder(args[0]) if args else None
    if isinstance(tp, type) and issubclass(tp, BaseModel):
        return build_template(tp)
    return {int: 0, float: 0.0, bool: False, str: ""}.get(tp)


def build_template(model_cls: type[BaseModel]) -> Dict[str, Any]:
    """Defaults where a field has one, typed placeholders elsewhere, nested models recursed."""
    out: Dict[str, Any] = {}
    for name, f in model_cls.model_fields.items():
        if f.default is not PydanticUndefined:
            val = f.default
        elif f.default_factory is not None:
            val = f.default_factory()
        else:
            val = _placeholder(f.annotation)
        if isinstance(val, BaseModel):
            val = val.model_dump(mode="json")
        elif isinstance(val, (set, frozenset)):
            val = sorted(val)
        out[name] = val
    return out


def build_game_info(game_cls: type["GameBase"], game: Optional["GameBase"] = None) -> Dict[str, Any]:
    """Metadata, snapshot schema and template, plus legal moves of `game` as examples."""
    info = game_cls.gameinfo
    return {
        "game": info.model_dump(),
        "state": {
            "schema": game_cls.state_model.model_json_schema(),
            "template": build_template(game_cls.state_model),
        },
        "examples": game.moves()[:10] if game is not None and not game.gameover else [],
        "notes": "Templates are built from model defaults; board maps travel as [cell, value] pairs.",
    }
