"""
ASCII rendering for pipe mazes.

Provides two views:
1. The source grid with box-drawing pipes, loop highlighted
2. The interior/exterior classification at source resolution
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from grid_types import Connected, Direction, Grid, Ground, InflatedGrid, Pipe, PipeLoop, Position, Region, Start

if TYPE_CHECKING:
    from pipe_loop import Analysis

logger = logging.getLogger(__name__)

PIPE_SYMBOLS: dict[frozenset[Direction], str] = {
    frozenset({Direction.N, Direction.S}): "│",
    frozenset({Direction.W, Direction.E}): "─",
    frozenset({Direction.N, Direction.E}): "└",
    frozenset({Direction.N, Direction.W}): "┘",
    frozenset({Direction.S, Direction.W}): "┐",
    frozenset({Direction.S, Direction.E}): "┌",
}


def pipe_symbol(pipe: Pipe) -> str:
    """Single display character for a pipe."""
    match pipe:
        case Ground():
            return "·"
        case Start():
            return "S"
        case Connected(a=a, b=b):
            return PIPE_SYMBOLS[frozenset({a, b})]


def _plain(s: str) -> str:
    return s


def _boxed(body: list[str], width: int, title: str, colorize: Callable[[str], str]) -> list[str]:
    """Surround rendered rows with a titled border."""
    title = f" {title} "
    top = "┌" + "─" * width + "┐"
    if len(title) <= width:
        title_start = (width - len(title)) // 2
        top = "┌" + "─" * title_start + title + "─" * (width - title_start - len(title)) + "┐"

    lines = [colorize(top)]
    for row in body:
        lines.append(colorize("│") + row + colorize("│"))
    lines.append(colorize("└" + "─" * width + "┘"))
    return lines


def render_grid(
    grid: Grid,
    loop: PipeLoop | None = None,
    cell_width: int = 1,
    highlight_pos: Position | None = None,
    color: bool = True,
    title: str = "maze",
) -> str:
    """
    Render a grid as box-drawing characters.

    Args:
        grid: The grid to render
        loop: Optional loop whose members are drawn in color
        cell_width: Characters per cell (default 1)
        highlight_pos: Optional position drawn with a white background
        color: If False, emit no ANSI escapes
        title: Border title

    Returns:
        Rendered string, one line per grid row plus the border
    """
    members = loop.members if loop is not None else frozenset()
    loop_color = chalk.yellowBright if color else _plain
    other_color = chalk.white if color else _plain
    border_color = chalk.green if color else _plain

    body: list[str] = []
    for r_idx, row in enumerate(grid.cells):
        parts: list[str] = []
        for c_idx, pipe in enumerate(row):
            pos = Position(r_idx, c_idx)
            char = pipe_symbol(pipe)
            content = char if cell_width == 1 else char.center(cell_width)

            if pos == highlight_pos:
                # Without color the cursor is drawn as '@'
                content = chalk.bgWhite.black(content) if color else "@".center(cell_width)
            elif pos in members:
                content = loop_color(content)
            else:
                content = other_color(content)
            parts.append(content)
        body.append("".join(parts))

    return "\n".join(_boxed(body, grid.cols * cell_width, title, border_color))


def render_classification(analysis: Analysis, color: bool = True) -> str:
    """
    Render the region of every source cell.

    Loop cells show their pipe, enclosed cells 'I' and outside cells 'O'.
    The answers follow on a line below the box.
    """
    grid = analysis.grid
    region_colors: dict[Region, Callable[[str], str]] = {
        Region.LOOP: chalk.yellowBright if color else _plain,
        Region.INTERIOR: chalk.greenBright if color else _plain,
        Region.EXTERIOR: chalk.blue if color else _plain,
    }
    region_chars = {Region.INTERIOR: "I", Region.EXTERIOR: "O"}

    body: list[str] = []
    for r_idx, row in enumerate(grid.cells):
        parts: list[str] = []
        for c_idx, pipe in enumerate(row):
            region = analysis.classification[InflatedGrid.to_inflated(Position(r_idx, c_idx))]
            char = pipe_symbol(pipe) if region is Region.LOOP else region_chars[region]
            parts.append(region_colors[region](char))
        body.append("".join(parts))

    summary = f"farthest {analysis.solution.farthest}, enclosed {analysis.solution.enclosed}"
    logger.debug("render_classification: %dx%d, %s", grid.rows, grid.cols, summary)
    border_color = chalk.green if color else _plain
    lines = _boxed(body, grid.cols, "regions", border_color)
    lines.append(summary)
    return "\n".join(lines)
