from __future__ import annotations
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict

Coord = tuple[int, int]  # (x, y), y counted from the top row
Complete = Literal[-1, 0, 1]


class ValidationResult(BaseModel):
    """Feedback for a (possibly partial) move string.

    complete: 1 ready to submit, -1 needs more input, 0 valid but nothing further implied.
    """
    valid: bool
    message: str
    complete: Optional[Complete] = None
    canrender: Optional[bool] = None


class ClickResult(ValidationResult):
    move: str


class MoveOutcome(BaseModel):
    """Result-style answer for callers that prefer not to catch (see GameBase.apply)."""
    ok: bool
    error: Optional[str] = None
    key: Optional[str] = None


class MoveResult(BaseModel):
    """One semantic effect of a move (place, move, capture, eog, winners...)."""
    model_config = ConfigDict(extra="allow")
    type: str
