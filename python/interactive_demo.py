"""
Interactive viewer for the loop walk.
Display a maze and step a walker around its loop with keyboard commands.
"""

from pathlib import Path
import logging

import readchar, sys
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_grid
from demo import LAYOUTS
from grid_types import ParseError, TopologyError
from pipe_loop import Analysis, LoopWalker, analyze


class InteractiveWalk:
    """Interactive step-through of a LoopWalker."""

    def __init__(self, analysis: Analysis) -> None:
        self.analysis = analysis
        self.console = Console()
        self.status_message = "Ready"
        self.walker = self._new_walker()

    def _new_walker(self) -> LoopWalker:
        first, _ = self.analysis.grid.at(self.analysis.start).openings
        return LoopWalker(self.analysis.grid, self.analysis.start, first)

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        pos = self.walker.position
        grid_text = render_grid(
            self.analysis.grid,
            self.analysis.loop,
            cell_width=2,
            highlight_pos=pos,
        )

        status = Text()
        status.append("Walker: ", style="bold")
        status.append(f"[{pos.row}, {pos.col}] ")
        status.append(f"step {self.walker.steps}/{self.analysis.loop.length}")
        if self.walker.closed:
            status.append(" (closed)", style="green")
        status.append("\n\n")

        # Convert ANSI-colored grid text to Rich Text properly
        status.append(Text.from_ansi(grid_text))
        status.append("\n\n")
        status.append("Farthest: ", style="bold")
        status.append(f"{self.analysis.solution.farthest}   ")
        status.append("Enclosed: ", style="bold")
        status.append(f"{self.analysis.solution.enclosed}\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  N / Space - Step\n")
        status.append("  B - Run until the loop closes\n")
        status.append("  R - Reset walker\n")
        status.append("  Q - Quit\n\n")

        # Status line at the bottom
        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Pipe Maze Loop Walk", border_style="green", width=80)

    def step(self) -> bool:
        """Advance the walker by one pipe. Returns False if it could not move."""
        try:
            pos = next(self.walker)
        except StopIteration:
            self.status_message = "Loop already closed"
            return False
        except TopologyError as e:
            self.status_message = f"✗ {e}".replace("\n", " ")
            return False
        arrival = self.walker.arrival.value if self.walker.arrival else "?"
        self.status_message = f"✓ Moved to [{pos.row}, {pos.col}] from {arrival}"
        return True

    def run_to_close(self) -> None:
        """Step until the walker is back at the start."""
        while not self.walker.closed:
            if not self.step():
                return
        self.status_message = f"✓ Closed after {self.walker.steps} steps"

    def reset(self) -> None:
        """Put the walker back on the start."""
        self.walker = self._new_walker()
        self.status_message = "Walker reset to start"

    def run(self) -> None:
        """Run the interactive viewer."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    # Update display
                    live.update(self.generate_display())

                    # Get single key press
                    key = readchar.readkey()

                    # Handle key press
                    if key.lower() == 'q':
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key.lower() == 'r':
                        self.reset()
                    elif key.lower() == 'n' or key == ' ':
                        self.step()
                    elif key.lower() == 'b':
                        self.run_to_close()
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


def main(text: str) -> int:
    """Analyze maze text and start the viewer."""
    try:
        analysis = analyze(text)
    except (ParseError, TopologyError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    InteractiveWalk(analysis).run()
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format='%(levelname)s: %(message)s')

    arg = sys.argv[1] if len(sys.argv) > 1 else 'squeeze'
    text = LAYOUTS[arg] if arg in LAYOUTS else Path(arg).read_text(encoding="utf-8")
    sys.exit(main(text))
