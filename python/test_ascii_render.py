"""Tests for the ASCII renderer and the interactive walk viewer."""

from rich.panel import Panel

from ascii_render import pipe_symbol, render_classification, render_grid
from demo import LAYOUTS
from grid_parser import PIPE_GLYPHS, parse_grid
from grid_types import Ground, Position, Start
from interactive_demo import InteractiveWalk
from pipe_loop import analyze


class TestPipeSymbol:
    """Tests for pipe_symbol."""

    def test_every_glyph_has_symbol(self) -> None:
        symbols = {glyph: pipe_symbol(pipe) for glyph, pipe in PIPE_GLYPHS.items()}

        assert symbols == {
            "|": "│",
            "-": "─",
            "L": "└",
            "J": "┘",
            "7": "┐",
            "F": "┌",
            ".": "·",
            "S": "S",
        }

    def test_ground_and_start(self) -> None:
        assert pipe_symbol(Ground()) == "·"
        assert pipe_symbol(Start()) == "S"


class TestRenderGrid:
    """Tests for render_grid with color disabled."""

    def test_unresolved_grid(self) -> None:
        grid, _ = parse_grid(LAYOUTS["square"])
        lines = render_grid(grid, color=False).split("\n")

        assert lines == [
            "┌─────┐",
            "│·····│",
            "│·S─┐·│",
            "│·│·│·│",
            "│·└─┘·│",
            "│·····│",
            "└─────┘",
        ]

    def test_resolved_start(self) -> None:
        result = analyze(LAYOUTS["square"])
        lines = render_grid(result.grid, result.loop, color=False).split("\n")

        assert lines[2] == "│·┌─┐·│"

    def test_title_in_border(self) -> None:
        grid, _ = parse_grid(LAYOUTS["squeeze"])
        lines = render_grid(grid, color=False).split("\n")

        assert lines[0] == "┌── maze ──┐"

    def test_highlight_without_color(self) -> None:
        result = analyze(LAYOUTS["square"])
        lines = render_grid(result.grid, highlight_pos=Position(1, 1), color=False).split("\n")

        assert lines[2] == "│·@─┐·│"

    def test_cell_width(self) -> None:
        grid, _ = parse_grid("S7\nLJ")
        lines = render_grid(grid, cell_width=3, color=False).split("\n")

        assert lines[1] == "│ S  ┐ │"

    def test_color_output_contains_pipes(self) -> None:
        result = analyze(LAYOUTS["square"])
        text = render_grid(result.grid, result.loop, highlight_pos=result.start)

        assert "┐" in text
        assert "┘" in text


class TestRenderClassification:
    """Tests for render_classification."""

    def test_square(self) -> None:
        lines = render_classification(analyze(LAYOUTS["square"]), color=False).split("\n")

        assert lines[1:6] == [
            "│OOOOO│",
            "│O┌─┐O│",
            "│O│I│O│",
            "│O└─┘O│",
            "│OOOOO│",
        ]

    def test_squeeze_pockets(self) -> None:
        lines = render_classification(analyze(LAYOUTS["squeeze"]), color=False).split("\n")

        assert lines[4] == "│O││OOOO││O│"
        assert lines[7] == "│O│II││II│O│"

    def test_summary_line(self) -> None:
        lines = render_classification(analyze(LAYOUTS["tangled"]), color=False).split("\n")

        assert lines[-1].endswith("enclosed 8")
        assert "regions" in lines[0]


class TestInteractiveWalk:
    """Tests for the viewer's walker controls (no keyboard loop)."""

    def test_step(self) -> None:
        viewer = InteractiveWalk(analyze(LAYOUTS["square"]))

        assert viewer.step()
        assert viewer.walker.position == Position(1, 2)
        assert viewer.status_message.startswith("✓ Moved to [1, 2]")

    def test_run_to_close(self) -> None:
        viewer = InteractiveWalk(analyze(LAYOUTS["square"]))
        viewer.run_to_close()

        assert viewer.walker.closed
        assert viewer.walker.steps == 8
        assert viewer.status_message == "✓ Closed after 8 steps"
        assert not viewer.step()
        assert viewer.status_message == "Loop already closed"

    def test_reset(self) -> None:
        viewer = InteractiveWalk(analyze(LAYOUTS["square"]))
        viewer.step()
        viewer.reset()

        assert viewer.walker.steps == 0
        assert viewer.walker.position == Position(1, 1)

    def test_generate_display(self) -> None:
        viewer = InteractiveWalk(analyze(LAYOUTS["squeeze"]))
        viewer.step()

        panel = viewer.generate_display()

        assert isinstance(panel, Panel)
        assert "step 1/44" in panel.renderable.plain
