"""
Closed-loop analysis for pipe mazes.
Pipeline: parse -> resolve start -> walk loop -> inflate -> classify regions -> count.
"""

from __future__ import annotations

import logging
import sys
from collections import deque
from dataclasses import dataclass
from enum import Enum
from itertools import chain
from pathlib import Path
from typing import Iterable, Iterator

from ascii_render import render_classification
from grid_parser import parse_grid
from grid_types import (
    Classification,
    Connected,
    Direction,
    Grid,
    Ground,
    InflatedGrid,
    ParseError,
    Pipe,
    PipeLoop,
    Position,
    Region,
    TopologyError,
)

logger = logging.getLogger(__name__)


class WalkState(Enum):
    """State of a LoopWalker."""

    WALKING = "walking"
    CLOSED = "closed"  # Returned to the start; terminal


class Worklist(Enum):
    """Expansion order for region flood fills."""

    STACK = "stack"  # Depth-first
    QUEUE = "queue"  # Breadth-first


@dataclass(frozen=True)
class ClassifierRules:
    """Rules governing region classification."""

    worklist: Worklist = Worklist.STACK


@dataclass(frozen=True)
class Solution:
    """The two answers for a maze."""

    farthest: int
    enclosed: int


@dataclass(frozen=True)
class Analysis:
    """Every intermediate product of the pipeline, for rendering and inspection."""

    grid: Grid  # Start cell resolved
    start: Position
    loop: PipeLoop
    inflated: InflatedGrid
    classification: Classification
    solution: Solution


# =============================================================================
# Start Resolution
# =============================================================================


def resolve_start(grid: Grid, start: Position) -> Grid:
    """
    Infer the start cell's two openings from its neighbours.

    A direction qualifies when the neighbour that way is a pipe opening back
    toward the start.

    Returns:
        A copy of the grid with the start cell replaced by its resolved pipe

    Raises:
        TopologyError: If anything other than exactly two directions qualify
    """
    connected: list[Direction] = []

    for direction in Direction:
        neighbour = start.step(direction)
        if not grid.in_bounds(neighbour):
            continue
        match grid.at(neighbour):
            case Connected() as pipe if pipe.has_opening(direction.opposite):
                connected.append(direction)
            case _:
                pass

    if len(connected) != 2:
        found = ", ".join(d.value for d in connected) or "none"
        raise TopologyError(
            f"Could not resolve the start pipe at ({start.row}, {start.col})\n"
            f"  Expected exactly 2 connecting neighbours, found {len(connected)}: {found}"
        )

    pipe = Connected(connected[0], connected[1])
    logger.debug("resolve_start: (%d, %d) -> %s%s", start.row, start.col, pipe.a.value, pipe.b.value)
    return grid.with_cell(start, pipe)


# =============================================================================
# Loop Walking
# =============================================================================


class LoopWalker:
    """
    Cursor that follows the loop one pipe at a time, yielding each position.

    The walker leaves the start through `direction` and stops after yielding
    the start again.

    Usage:
        walker = LoopWalker(grid, start, Direction.E)
        for pos in walker:
            print(pos)
        print(walker.steps)  # Loop length once closed
    """

    def __init__(
        self,
        grid: Grid,
        start: Position,
        direction: Direction,
        max_steps: int | None = None,
    ) -> None:
        pipe = grid.at(start)
        if not isinstance(pipe, Connected) or not pipe.has_opening(direction):
            raise TopologyError(
                f"Cannot leave ({start.row}, {start.col}) heading {direction.value}\n"
                f"  Cell is {pipe}"
            )

        self.grid = grid
        self.start = start
        self.position = start
        self.heading = direction  # Next move
        self.arrival: Direction | None = None  # Opening we came in through
        self.steps = 0
        self.state = WalkState.WALKING
        self.max_steps = max_steps if max_steps is not None else grid.rows * grid.cols

    @property
    def closed(self) -> bool:
        return self.state is WalkState.CLOSED

    def __iter__(self) -> Iterator[Position]:
        return self

    def __next__(self) -> Position:
        if self.state is WalkState.CLOSED:
            raise StopIteration

        if self.steps >= self.max_steps:
            raise TopologyError(
                f"Loop from ({self.start.row}, {self.start.col}) did not close within {self.max_steps} steps"
            )

        move = self.heading
        target = self.position.step(move)
        if not self.grid.in_bounds(target):
            raise TopologyError(
                f"Loop leaves the grid\n"
                f"  Moving {move.value} from ({self.position.row}, {self.position.col})"
            )

        arrival = move.opposite
        match self.grid.at(target):
            case Connected() as pipe if pipe.has_opening(arrival):
                self.heading = pipe.exit_for(arrival)
            case pipe:
                raise TopologyError(
                    f"Loop is broken at ({target.row}, {target.col})\n"
                    f"  Arrived from {arrival.value} but cell is {pipe}"
                )

        self.position = target
        self.arrival = arrival
        self.steps += 1
        if target == self.start:
            self.state = WalkState.CLOSED
        return target


def _start_openings(grid: Grid, start: Position) -> tuple[Direction, Direction]:
    pipe = grid.at(start)
    if not isinstance(pipe, Connected):
        raise TopologyError(f"Start cell ({start.row}, {start.col}) is not a resolved pipe: {pipe}")
    return pipe.openings


def walk_loop(grid: Grid, start: Position, max_steps: int | None = None) -> PipeLoop:
    """Walk the loop once from the start and collect its positions in order."""
    first, _ = _start_openings(grid, start)
    walker = LoopWalker(grid, start, first, max_steps)
    visited = list(walker)

    # The final yield is the start itself
    loop = PipeLoop(start, (start, *visited[:-1]))
    logger.debug("walk_loop: length %d", loop.length)
    return loop


def farthest_distance(grid: Grid, start: Position) -> int:
    """
    Distance along the loop from the start to the point farthest from it.

    Two walkers leave the start in opposite directions in lock-step; the
    position where they meet is the farthest point.
    """
    first, second = _start_openings(grid, start)
    forward = LoopWalker(grid, start, first)
    backward = LoopWalker(grid, start, second)

    for i, (pos1, pos2) in enumerate(zip(forward, backward)):
        if pos1 == pos2:
            return i + 1

    raise TopologyError(f"Walkers from ({start.row}, {start.col}) never met")


# =============================================================================
# Inflation
# =============================================================================


def _joins(grid: Grid, members: frozenset[Position], pos: Position, direction: Direction) -> bool:
    """True if pos and its neighbour in `direction` are loop pipes opening onto each other."""
    neighbour = pos.step(direction)
    if pos not in members or neighbour not in members:
        return False
    match grid.at(pos), grid.at(neighbour):
        case Connected() as here, Connected() as there:
            return here.has_opening(direction) and there.has_opening(direction.opposite)
        case _:
            return False


def inflate(grid: Grid, loop: PipeLoop) -> InflatedGrid:
    """
    Double the grid's resolution, inserting a connector between every pair of
    adjacent cells.

    A connector is occupied by the loop only when the loop runs straight
    through it. Every other connector is Ground, so a flood fill can squeeze
    between two pipes that touch without joining.
    """
    members = loop.members
    rows, cols = 2 * grid.rows - 1, 2 * grid.cols - 1
    cells: list[list[Pipe]] = [[Ground() for _ in range(cols)] for _ in range(rows)]
    occupied: set[Position] = set()

    for r, row in enumerate(grid.cells):
        for c, pipe in enumerate(row):
            pos = Position(r, c)
            cells[2 * r][2 * c] = pipe
            if pos in members:
                occupied.add(InflatedGrid.to_inflated(pos))

            if c + 1 < grid.cols and _joins(grid, members, pos, Direction.E):
                cells[2 * r][2 * c + 1] = Connected(Direction.W, Direction.E)
                occupied.add(Position(2 * r, 2 * c + 1))

            if r + 1 < grid.rows and _joins(grid, members, pos, Direction.S):
                cells[2 * r + 1][2 * c] = Connected(Direction.N, Direction.S)
                occupied.add(Position(2 * r + 1, 2 * c))

    inflated = InflatedGrid(tuple(tuple(row) for row in cells), frozenset(occupied))
    logger.debug("inflate: %dx%d -> %dx%d, %d loop cells", grid.rows, grid.cols, rows, cols, len(occupied))
    return inflated


# =============================================================================
# Region Classification
# =============================================================================


def _loop_adjacent_seeds(inflated: InflatedGrid) -> Iterator[Position]:
    """Non-loop cells touching the loop, including diagonally."""
    for pos in sorted(inflated.loop, key=lambda p: (p.row, p.col)):
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                neighbour = Position(pos.row + dr, pos.col + dc)
                if inflated.in_bounds(neighbour) and neighbour not in inflated.loop:
                    yield neighbour


def _all_cells(inflated: InflatedGrid) -> Iterator[Position]:
    for r in range(inflated.rows):
        for c in range(inflated.cols):
            yield Position(r, c)


def _flood(
    inflated: InflatedGrid,
    seed: Position,
    classification: Classification,
    worklist: Worklist,
) -> Region:
    """
    Flood from `seed` until the region is known, then label everything seen.

    Reaching an already classified cell or the border settles the region
    early; exhausting the worklist means the region is enclosed.
    """
    to_visit: deque[Position] = deque([seed])
    seen: set[Position] = {seed}
    region = Region.INTERIOR

    while to_visit:
        current = to_visit.pop() if worklist is Worklist.STACK else to_visit.popleft()

        known = classification.get(current)
        if known is not None:
            region = known
            break

        if inflated.on_border(current):
            region = Region.EXTERIOR
            break

        for direction in Direction:
            neighbour = current.step(direction)
            if neighbour not in inflated.loop and neighbour not in seen:
                seen.add(neighbour)
                to_visit.append(neighbour)

    for pos in seen:
        classification.setdefault(pos, region)
    return region


def classify_regions(
    inflated: InflatedGrid,
    rules: ClassifierRules = ClassifierRules(),
    seeds: Iterable[Position] | None = None,
) -> Classification:
    """
    Label every inflated cell as loop, interior or exterior.

    Fills start from `seeds` (by default the cells touching the loop), then
    from any cell still unlabelled, so the result covers the whole grid and
    does not depend on seed order or worklist policy.

    Args:
        inflated: The inflated grid
        rules: ClassifierRules choosing the worklist policy
        seeds: Optional explicit seed order

    Returns:
        Classification mapping every inflated position to a Region
    """
    classification: Classification = {pos: Region.LOOP for pos in inflated.loop}
    if seeds is None:
        seeds = _loop_adjacent_seeds(inflated)

    fills = 0
    for seed in chain(seeds, _all_cells(inflated)):
        if not inflated.in_bounds(seed):
            raise ValueError(f"Seed ({seed.row}, {seed.col}) is outside the {inflated.rows}x{inflated.cols} grid")
        if seed in classification:
            continue
        _flood(inflated, seed, classification, rules.worklist)
        fills += 1

    logger.debug("classify_regions: %d fills over %d cells (%s)", fills, len(classification), rules.worklist.value)
    return classification


# =============================================================================
# Area
# =============================================================================


def count_enclosed(classification: Classification) -> int:
    """Number of source cells inside the loop; connector cells never count."""
    return sum(
        1
        for pos, region in classification.items()
        if region is Region.INTERIOR and InflatedGrid.is_source(pos)
    )


def enclosed_positions(classification: Classification) -> list[Position]:
    """Source-grid positions of the enclosed cells, row-major."""
    return sorted(
        (
            Position(pos.row // 2, pos.col // 2)
            for pos, region in classification.items()
            if region is Region.INTERIOR and InflatedGrid.is_source(pos)
        ),
        key=lambda p: (p.row, p.col),
    )


# =============================================================================
# Pipeline
# =============================================================================


def analyze(text: str, rules: ClassifierRules = ClassifierRules()) -> Analysis:
    """
    Run the full pipeline over maze text.

    Raises:
        ParseError: If the text is not a valid grid
        TopologyError: If the start or the loop is malformed
    """
    raw_grid, start = parse_grid(text)
    grid = resolve_start(raw_grid, start)
    loop = walk_loop(grid, start)
    farthest = farthest_distance(grid, start)
    inflated = inflate(grid, loop)
    classification = classify_regions(inflated, rules)
    solution = Solution(farthest, count_enclosed(classification))

    logger.info(
        "analyze: %dx%d grid, loop length %d, farthest %d, enclosed %d",
        grid.rows,
        grid.cols,
        loop.length,
        solution.farthest,
        solution.enclosed,
    )
    return Analysis(grid, start, loop, inflated, classification, solution)


def solve(text: str) -> Solution:
    """Farthest loop distance and enclosed cell count for maze text."""
    return analyze(text).solution


def main(argv: list[str] | None = None) -> int:
    """
    Command-line entry point: pipe_loop.py PATH [--render]

    Prints the farthest distance and the enclosed count on separate lines.
    Returns 0 on success, 2 on bad usage, 1 on unreadable or malformed input.
    """
    args = sys.argv[1:] if argv is None else argv
    render_requested = "--render" in args
    paths = [arg for arg in args if arg != "--render"]

    logging.basicConfig(
        level=logging.INFO if render_requested else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if len(paths) != 1:
        print("usage: pipe_loop.py PATH [--render]", file=sys.stderr)
        return 2

    path = paths[0]
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Could not read {path}: {e}", file=sys.stderr)
        return 1

    try:
        result = analyze(text)
    except (ParseError, TopologyError) as e:
        print(f"Error in {path}: {e}", file=sys.stderr)
        return 1

    if render_requested:
        logger.info("classification:\n%s", render_classification(result, color=False))

    print(result.solution.farthest)
    print(result.solution.enclosed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
