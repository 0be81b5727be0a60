#!/usr/bin/env python3
"""
Demonstration of the pipe maze solver on built-in layouts.
"""

from pipe_loop import analyze
from ascii_render import render_classification, render_grid

LAYOUTS = dict(
    square=(
        ".....\n"
        ".S-7.\n"
        ".|.|.\n"
        ".L-J.\n"
        "....."
    ),
    winding=(
        "..F7.\n"
        ".FJ|.\n"
        "SJ.L7\n"
        "|F--J\n"
        "LJ..."
    ),
    stray=(
        "-L|F7\n"
        "7S-7|\n"
        "L|7||\n"
        "-L-J|\n"
        "L|-JF"
    ),
    squeeze=(
        "..........\n"
        ".S------7.\n"
        ".|F----7|.\n"
        ".||....||.\n"
        ".||....||.\n"
        ".|L-7F-J|.\n"
        ".|..||..|.\n"
        ".L--JL--J.\n"
        ".........."
    ),
    tangled=(
        ".F----7F7F7F7F-7....\n"
        ".|F--7||||||||FJ....\n"
        ".||.FJ||||||||L7....\n"
        "FJL7L7LJLJ||LJ.L-7..\n"
        "L--J.L7...LJS7F-7L7.\n"
        "....F-J..F7FJ|L7L7L7\n"
        "....L7.F7||L7|.L7L7|\n"
        ".....|FJLJ|FJ|F7|.LJ\n"
        "....FJL-7.||.||||...\n"
        "....L---J.LJ.LJLJ..."
    ),
)


def main() -> None:
    """Solve and render every built-in layout."""
    for name, text in LAYOUTS.items():
        print(f"Layout: {name}")
        print("-" * 40)
        result = analyze(text)
        print(render_grid(result.grid, result.loop, title=name))
        print(render_classification(result))
        print(f"Farthest: {result.solution.farthest}")
        print(f"Enclosed: {result.solution.enclosed}")
        print()


if __name__ == "__main__":
    main()
