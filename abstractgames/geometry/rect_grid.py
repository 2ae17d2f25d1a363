from __future__ import annotations
import math
from typing import List, Literal, Optional, Tuple
from abstractgames.core.primitives import Coord
from abstractgames.geometry.algebraic import algebraic2coords, coords2algebraic
from abstractgames.core.errors import InvalidCellError

DirectionCardinal = Literal["N", "E", "S", "W"]
DirectionDiagonal = Literal["NE", "SE", "SW", "NW"]
Direction = Literal["N", "NE", "E", "SE", "S", "SW", "W", "NW"]

DIRS_ORTH: Tuple[DirectionCardinal, ...] = ("N", "E", "S", "W")
DIRS_DIAG: Tuple[DirectionDiagonal, ...] = ("NE", "SE", "SW", "NW")
DIRS_ALL: Tuple[Direction, ...] = DIRS_ORTH + DIRS_DIAG

# unit steps; y grows downwards so N is -1
DELTAS = {
    "N": (0, -1), "NE": (1, -1), "E": (1, 0), "SE": (1, 1),
    "S": (0, 1), "SW": (-1, 1), "W": (-1, 0), "NW": (-1, -1),
}
OPPOSITE = {"N": "S", "NE": "SW", "E": "W", "SE": "NW", "S": "N", "SW": "NE", "W": "E", "NW": "SE"}
KNIGHT_JUMPS = [(1, -2), (-1, -2), (1, 2), (-1, 2), (2, -1), (2, 1), (-2, -1), (-2, 1)]


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


class RectGrid:
    """A width x height board addressed as (x, y) with (0, 0) in the top-left corner."""

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height

    @staticmethod
    def move(x: int, y: int, dir: Direction, dist: int = 1) -> Coord:
        """Step `dist` cells in `dir`. No bounds checking."""
        if dir not in DELTAS:
            raise ValueError(f"Unrecognized direction given ({dir})")
        dx, dy = DELTAS[dir]
        return x + dx * dist, y + dy * dist

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _require(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise ValueError(f"({x}, {y}) is outside the {self.width}x{self.height} grid")

    def coords2algebraic(self, x: int, y: int) -> str:
        if not self.in_bounds(x, y):
            raise InvalidCellError(f"({x}, {y}) is outside the {self.width}x{self.height} grid")
        return coords2algebraic(x, y, self.height)

    def algebraic2coords(self, cell: str) -> Coord:
        x, y = algebraic2coords(cell, self.height)
        if x >= self.width:
            raise InvalidCellError(f"The column label is out of range: {cell}")
        return x, y

    def list_cells(self) -> List[Coord]:
        return [(x, y) for y in range(self.height) for x in range(self.width)]

    def adjacencies(self, x: int, y: int, diag: bool = True) -> List[Coord]:
        """In-bounds neighbours, orthogonal first (N E S W) then diagonal (NE SE SW NW)."""
        self._require(x, y)
        dirs = DIRS_ALL if diag else DIRS_ORTH
        out = []
        for d in dirs:
            nx, ny = RectGrid.move(x, y, d)
            if self.in_bounds(nx, ny):
                out.append((nx, ny))
        return out

    def knights(self, x: int, y: int) -> List[Coord]:
        self._require(x, y)
        return [(x + dx, y + dy) for dx, dy in KNIGHT_JUMPS if self.in_bounds(x + dx, y + dy)]

    def ray(self, x: int, y: int, dir: Direction) -> List[Coord]:
        """Cells from (x, y) to the edge in `dir`, origin excluded."""
        self._require(x, y)
        out: List[Coord] = []
        nx, ny = RectGrid.move(x, y, dir)
        while self.in_bounds(nx, ny):
            out.append((nx, ny))
            nx, ny = RectGrid.move(nx, ny, dir)
        return out

    def is_orth(self, x1: int, y1: int, x2: int, y2: int) -> bool:
        return self.in_bounds(x1, y1) and self.in_bounds(x2, y2) and (x1 == x2 or y1 == y2)

    def is_diag(self, x1: int, y1: int, x2: int, y2: int) -> bool:
        return self.in_bounds(x1, y1) and self.in_bounds(x2, y2) and abs(x2 - x1) == abs(y2 - y1)

    @staticmethod
    def bearing(x1: int, y1: int, x2: int, y2: int) -> Optional[Direction]:
        """Compass direction from the first point to the second, None if not on a line."""
        dx, dy = x2 - x1, y2 - y1
        if (dx, dy) == (0, 0):
            return None
        if dx != 0 and dy != 0 and abs(dx) != abs(dy):
            return None
        step = (_sign(dx), _sign(dy))
        return next(d for d, delta in DELTAS.items() if delta == step)  # type: ignore[return-value]

    @staticmethod
    def between(x1: int, y1: int, x2: int, y2: int) -> List[Coord]:
        """Strictly interior cells of the line joining two aligned points."""
        d = RectGrid.bearing(x1, y1, x2, y2)
        if d is None:
            return []
        out: List[Coord] = []
        nx, ny = RectGrid.move(x1, y1, d)
        while (nx, ny) != (x2, y2):
            out.append((nx, ny))
            nx, ny = RectGrid.move(nx, ny, d)
        return out

    @staticmethod
    def distance(x1: int, y1: int, x2: int, y2: int) -> int:
        """Chebyshev (king-move) distance."""
        return max(abs(x2 - x1), abs(y2 - y1))

    @staticmethod
    def true_distance(x1: int, y1: int, x2: int, y2: int) -> float:
        return math.hypot(x2 - x1, y2 - y1)

    @staticmethod
    def manhattan(x1: int, y1: int, x2: int, y2: int) -> int:
        return abs(x2 - x1) + abs(y2 - y1)
