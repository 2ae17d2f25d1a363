from __future__ import annotations
from typing import Any, Dict

# English catalogue; keys mirror the ones the UI layer localises.
MESSAGES: Dict[str, str] = {
    "MOVES_GAMEOVER": "The game is over. No further moves can be made.",
    "MOVES_SIMULTANEOUS_PARTIAL": "Every player must submit a move ({expected} expected, got {got}).",
    "MOVE_INCOMPLETE": "The move '{move}' is not complete yet.",
    "VALIDATION_GENERAL": "The move '{move}' is not valid.",
    "VALIDATION_FAILSAFE": "The move '{move}' passed validation but is not a legal move. This is a bug.",
    "INITIAL_UNDO": "There is nothing to undo.",
    "BAD_PLAYER": "Player {player} is not part of this game.",
    "validation._general.GENERIC": "An error occurred while validating the move '{move}': {message}",
    "validation._general.INVALIDCELL": "'{cell}' is not a valid cell.",
    "validation._general.OCCUPIED": "The cell {where} is already occupied.",
    "validation._general.DEFAULT_HANDLER": "This game does not support clicking.",
    "validation._general.NOPIECE": "There is no piece at {where}.",
    "validation._general.UNCONTROLLED": "You can only move your own pieces.",
    "validation._general.BAD_SYNTAX": "Could not parse '{move}'.",
    "validation._general.VALID_MOVE": "The move is valid and can be submitted.",
    "validation._general.MOVE4CAPTURE": "There is a piece at {where}. Use 'x' to capture it.",
    "validation._general.CAPTURE4MOVE": "There is nothing to capture at {where}. Use '-' to move there.",
    "validation._general.SELFCAPTURE": "You cannot capture your own pieces.",
    "validation.hex.INITIAL_INSTRUCTIONS": "Click an empty cell to place a stone.",
    "validation.breakthrough.INITIAL_INSTRUCTIONS": "Select one of your pieces to move.",
    "validation.breakthrough.MOVE_BACKWARDS": "Pieces may only move forward.",
    "validation.breakthrough.TOO_FAR": "Pieces may only move one space.",
    "validation.breakthrough.STRAIGHT_CAPTURE": "Pieces may only capture diagonally.",
    "validation.breakthrough.NO_BOMBARDMENT": "Bombardment is only available in the bombardment variant.",
    "validation.breakthrough.PARTIAL": "Select where to move the piece, or an enemy piece to capture.",
    "validation.breakthrough.NO_CAPTURES": "Captures are not allowed in the bombardment variant ({where}).",
    "validation.frames.INITIAL_INSTRUCTIONS": "Click an empty intersection to place a stone.",
    "validation.loop.INITIAL_INSTRUCTIONS": "Click an empty cell to place a stone.",
}


def t(key: str, **params: Any) -> str:
    """Render a catalogue message; unknown keys render as themselves."""
    template = MESSAGES.get(key, key)
    return template.format(**params) if params else template
