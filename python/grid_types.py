"""
Shared type definitions for the pipe maze solver.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Cardinal direction of a pipe opening or a move."""

    N = "N"  # Up (decreasing row)
    E = "E"  # Right (increasing col)
    S = "S"  # Down (increasing row)
    W = "W"  # Left (decreasing col)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @property
    def delta(self) -> tuple[int, int]:
        """(row_delta, col_delta) of a single step."""
        return _DELTAS[self]


_OPPOSITES = {
    Direction.N: Direction.S,
    Direction.E: Direction.W,
    Direction.S: Direction.N,
    Direction.W: Direction.E,
}

_DELTAS = {
    Direction.N: (-1, 0),
    Direction.E: (0, 1),
    Direction.S: (1, 0),
    Direction.W: (0, -1),
}


class Region(Enum):
    """Classification of an inflated grid cell."""

    LOOP = "loop"
    INTERIOR = "interior"
    EXTERIOR = "exterior"


# =============================================================================
# Errors
# =============================================================================


class ParseError(ValueError):
    """Input text is not a well-formed pipe grid."""


class TopologyError(ValueError):
    """The pipes do not form a single walkable loop through the start."""


# =============================================================================
# Pipe Definition Types
# =============================================================================


@dataclass(frozen=True)
class Ground:
    """A cell with no openings."""

    pass


@dataclass(frozen=True)
class Start:
    """The start cell before its openings are known."""

    pass


@dataclass(frozen=True)
class Connected:
    """A pipe with exactly two openings."""

    a: Direction
    b: Direction

    def __post_init__(self) -> None:
        if self.a == self.b:
            raise ValueError(f"Pipe openings must differ, got {self.a.value} twice")

    @property
    def openings(self) -> tuple[Direction, Direction]:
        return (self.a, self.b)

    def has_opening(self, direction: Direction) -> bool:
        return direction == self.a or direction == self.b

    def exit_for(self, arrival: Direction) -> Direction:
        """The opening to leave through after arriving through `arrival`."""
        return self.b if arrival == self.a else self.a


Pipe = Ground | Start | Connected


@dataclass(frozen=True)
class Position:
    """A (row, col) location in a grid."""

    row: int
    col: int

    def step(self, direction: Direction) -> Position:
        dr, dc = direction.delta
        return Position(self.row + dr, self.col + dc)


@dataclass(frozen=True)
class Grid:
    """A rectangular 2D grid of pipes."""

    cells: tuple[tuple[Pipe, ...], ...]

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.row < self.rows and 0 <= pos.col < self.cols

    def at(self, pos: Position) -> Pipe:
        return self.cells[pos.row][pos.col]

    def with_cell(self, pos: Position, pipe: Pipe) -> Grid:
        """Return a copy of this grid with one cell replaced."""
        row = self.cells[pos.row]
        new_row = row[: pos.col] + (pipe,) + row[pos.col + 1 :]
        return Grid(self.cells[: pos.row] + (new_row,) + self.cells[pos.row + 1 :])


@dataclass(frozen=True)
class PipeLoop:
    """
    The closed loop through the start cell.

    `positions` is the cycle in walking order, beginning with the start
    (counted once).
    """

    start: Position
    positions: tuple[Position, ...]

    @property
    def length(self) -> int:
        return len(self.positions)

    @property
    def members(self) -> frozenset[Position]:
        return frozenset(self.positions)


@dataclass(frozen=True)
class InflatedGrid:
    """
    A (2R-1)x(2C-1) grid with connector cells between source cells.

    Even/even coordinates hold source pipes; every other coordinate is a
    connector, either a straight pipe (when the loop runs through it) or
    Ground.
    """

    cells: tuple[tuple[Pipe, ...], ...]
    loop: frozenset[Position]

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.row < self.rows and 0 <= pos.col < self.cols

    def on_border(self, pos: Position) -> bool:
        return pos.row == 0 or pos.col == 0 or pos.row == self.rows - 1 or pos.col == self.cols - 1

    @staticmethod
    def to_inflated(pos: Position) -> Position:
        return Position(pos.row * 2, pos.col * 2)

    @staticmethod
    def is_source(pos: Position) -> bool:
        return pos.row % 2 == 0 and pos.col % 2 == 0


Classification = dict[Position, Region]
