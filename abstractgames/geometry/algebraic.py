"""Cell labels for rectangular boards: column word + row number counted from the bottom.

Column words run a..z, aa..az, ba.. (bijective base 26), so boards wider than 26 still
get unique, reversible labels.
"""
from __future__ import annotations
import re
from abstractgames.core.errors import InvalidCellError
from abstractgames.core.primitives import Coord

Letters = "abcdefghijklmnopqrstuvwxyz"
CELL_LABEL = re.compile(r"^([a-z]+)([1-9][0-9]*)$")


def number2label(n: int) -> str:
    """0 -> a, 25 -> z, 26 -> aa."""
    if n < 0:
        raise ValueError(f"column index must be non-negative, got {n}")
    out = ""
    n += 1
    while n > 0:
        n, rem = divmod(n - 1, 26)
        out = Letters[rem] + out
    return out


def label2number(label: str) -> int:
    n = 0
    for ch in label:
        idx = Letters.find(ch)
        if idx < 0:
            raise InvalidCellError(f"The column label is invalid: {label}")
        n = n * 26 + idx + 1
    return n - 1


def coords2algebraic(x: int, y: int, height: int) -> str:
    if x < 0 or y < 0 or y >= height:
        raise InvalidCellError(f"Coordinates ({x}, {y}) are outside a board of height {height}")
    return number2label(x) + str(height - y)


def algebraic2coords(cell: str, height: int) -> Coord:
    m = CELL_LABEL.match(cell)
    if m is None:
        raise InvalidCellError(f"Malformed cell label: {cell!r}")
    x = label2number(m.group(1))
    row = int(m.group(2))
    if row < 1 or row > height:
        raise InvalidCellError(f"The row label is out of range: {cell}")
    return x, height - row


def cell_sort_key(cell: str) -> tuple:
    """Natural order for a1-style labels (a2 before a10); other labels sort as text."""
    m = CELL_LABEL.match(cell)
    if m is None:
        return (1, cell)
    return (0, len(m.group(1)), m.group(1), int(m.group(2)))


def sort_cells(cells) -> list:
    return sorted(cells, key=cell_sort_key)
