"""Tests for the pipe maze grid parser."""

import pytest

from grid_parser import PIPE_GLYPHS, parse_grid
from grid_types import Connected, Direction, Ground, ParseError, Position, Start


class TestPipeGlyphs:
    """Tests for the glyph table."""

    def test_straight_pipes(self) -> None:
        assert PIPE_GLYPHS["|"] == Connected(Direction.N, Direction.S)
        assert PIPE_GLYPHS["-"] == Connected(Direction.W, Direction.E)

    def test_bends(self) -> None:
        assert set(PIPE_GLYPHS["L"].openings) == {Direction.N, Direction.E}
        assert set(PIPE_GLYPHS["J"].openings) == {Direction.N, Direction.W}
        assert set(PIPE_GLYPHS["7"].openings) == {Direction.S, Direction.W}
        assert set(PIPE_GLYPHS["F"].openings) == {Direction.S, Direction.E}

    def test_ground_and_start(self) -> None:
        assert PIPE_GLYPHS["."] == Ground()
        assert PIPE_GLYPHS["S"] == Start()

    def test_connected_rejects_equal_openings(self) -> None:
        with pytest.raises(ValueError, match="must differ"):
            Connected(Direction.N, Direction.N)

    def test_exit_for(self) -> None:
        pipe = PIPE_GLYPHS["L"]
        assert pipe.exit_for(Direction.N) == Direction.E
        assert pipe.exit_for(Direction.E) == Direction.N


class TestParseGrid:
    """Tests for parse_grid."""

    def test_simple_grid(self) -> None:
        """Cells map through the glyph table and the start is located."""
        grid, start = parse_grid("S7\nLJ")

        assert grid.rows == 2
        assert grid.cols == 2
        assert start == Position(0, 0)
        assert grid.at(Position(0, 0)) == Start()
        assert grid.at(Position(0, 1)) == PIPE_GLYPHS["7"]
        assert grid.at(Position(1, 0)) == PIPE_GLYPHS["L"]
        assert grid.at(Position(1, 1)) == PIPE_GLYPHS["J"]

    def test_start_in_middle(self) -> None:
        grid, start = parse_grid(".....\n.S-7.\n.|.|.\n.L-J.\n.....")

        assert (grid.rows, grid.cols) == (5, 5)
        assert start == Position(1, 1)

    def test_trailing_newline_ignored(self) -> None:
        grid, _ = parse_grid("S7\nLJ\n")
        assert grid.rows == 2

    def test_crlf_line_endings(self) -> None:
        grid, start = parse_grid("..\r\nS7\r\nLJ\r\n")
        assert (grid.rows, grid.cols) == (3, 2)
        assert start == Position(1, 0)

    def test_error_invalid_character(self) -> None:
        with pytest.raises(ParseError, match="Invalid character 'x'"):
            parse_grid("S7\nLx")

    def test_error_invalid_character_location(self) -> None:
        with pytest.raises(ParseError, match="Row 1, column 1"):
            parse_grid("S7\nLx")

    def test_error_inconsistent_row_lengths(self) -> None:
        with pytest.raises(ParseError, match="Inconsistent row lengths"):
            parse_grid("S-7\nL-J\n..")

    def test_error_no_start(self) -> None:
        with pytest.raises(ParseError, match="found 0"):
            parse_grid("F7\nLJ")

    def test_error_two_starts(self) -> None:
        with pytest.raises(ParseError, match="found 2"):
            parse_grid("S7\nLS")

    def test_error_empty(self) -> None:
        with pytest.raises(ParseError, match="Empty grid"):
            parse_grid("")

    def test_parse_error_is_value_error(self) -> None:
        """Parse errors can be handled as ValueError."""
        with pytest.raises(ValueError):
            parse_grid("?")
