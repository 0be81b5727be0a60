"""
Grid parsing for pipe maze input.

One row per line, one cell per character:
    | - L J 7 F   pipes
    .             ground
    S             the start cell (exactly one)
"""

from __future__ import annotations

import logging

from grid_types import Connected, Direction, Grid, Ground, ParseError, Pipe, Position, Start

__all__ = ["PIPE_GLYPHS", "parse_grid"]

logger = logging.getLogger(__name__)

PIPE_GLYPHS: dict[str, Pipe] = {
    "|": Connected(Direction.N, Direction.S),
    "-": Connected(Direction.W, Direction.E),
    "L": Connected(Direction.N, Direction.E),
    "J": Connected(Direction.N, Direction.W),
    "7": Connected(Direction.S, Direction.W),
    "F": Connected(Direction.S, Direction.E),
    ".": Ground(),
    "S": Start(),
}


def parse_grid(text: str) -> tuple[Grid, Position]:
    """
    Parse a pipe maze into a Grid and the start position.

    Trailing blank lines and carriage returns are ignored. The start cell
    is left as a Start placeholder.

    Args:
        text: Grid text, one row per line

    Returns:
        (grid, start position)

    Raises:
        ParseError: On an unknown character, ragged rows, an empty grid,
            or a start count other than one
    """
    row_strings = [line.rstrip("\r") for line in text.rstrip("\r\n").split("\n")]
    if not row_strings or not row_strings[0]:
        raise ParseError("Empty grid: expected at least one non-empty row")

    rows: list[tuple[Pipe, ...]] = []
    starts: list[Position] = []

    for row_idx, row_str in enumerate(row_strings):
        cells: list[Pipe] = []

        for col_idx, char in enumerate(row_str):
            pipe = PIPE_GLYPHS.get(char)
            if pipe is None:
                raise ParseError(
                    f"Invalid character {char!r}\n"
                    f"  Row {row_idx}, column {col_idx}: \"{row_str}\"\n"
                    f"  Valid characters: {' '.join(PIPE_GLYPHS)}"
                )
            if isinstance(pipe, Start):
                starts.append(Position(row_idx, col_idx))
            cells.append(pipe)

        rows.append(tuple(cells))

    # Validate all rows have same length
    cols = len(rows[0])
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{row_strings[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise ParseError(error_msg)

    if len(starts) != 1:
        found = ", ".join(f"({p.row}, {p.col})" for p in starts) or "none"
        raise ParseError(
            f"Expected exactly one start cell 'S', found {len(starts)}\n"
            f"  Start cells: {found}"
        )

    grid = Grid(tuple(rows))
    logger.debug("parse_grid: %dx%d grid, start at (%d, %d)", grid.rows, grid.cols, starts[0].row, starts[0].col)
    return grid, starts[0]
