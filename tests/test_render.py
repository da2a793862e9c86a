"""Tests for the render module."""

import pytest

from render import (
    format_board,
    format_grid,
    print_board,
    render_svg,
    tile_polygon,
)
from wfc_core import UNDETERMINED, create_board, update_adjacent_cells


class TestConsole:
    """Tests for the text views."""

    def test_format_board_marks(self, line_catalog):
        board = create_board(3, 1)
        board[0][0].resolve(line_catalog.get('─'))
        update_adjacent_cells(board, 0, 0)

        assert format_board(board) == '─#*'

    def test_format_board_rows(self):
        assert format_board(create_board(2, 2)) == '**\n**'

    def test_print_board_adds_separator(self, line_catalog, capsys):
        board = create_board(1, 1)
        board[0][0].resolve(line_catalog.get('│'))
        print_board(board)

        assert capsys.readouterr().out == '│\n\n\n'

    def test_format_grid(self):
        assert format_grid([['╔', '╗'], ['╚', UNDETERMINED]]) == '╔╗\n╚*'


class TestTilePolygon:
    """Tests for per-tile pipe geometry."""

    def test_blank_tile_has_no_geometry(self, box_catalog):
        assert tile_polygon(box_catalog.get(' '), 0, 0) is None

    def test_single_horizontal_spans_cell(self, box_catalog):
        poly = tile_polygon(box_catalog.get('─'), 0, 0)

        assert poly.bounds == pytest.approx((-50, -15, 50, 15))

    def test_double_cross_area(self, box_catalog):
        poly = tile_polygon(box_catalog.get('╬'), 0, 0)

        # two 100x60 bars sharing a 60x60 center
        assert poly.area == pytest.approx(8400)

    def test_offset_and_cell_size(self, box_catalog):
        poly = tile_polygon(box_catalog.get('│'), 200, 100, cell_size=50)

        assert poly.bounds == pytest.approx((192.5, 75, 207.5, 125))

    def test_mixed_junction_uses_widest_center(self, box_catalog):
        poly = tile_polygon(box_catalog.get('╨'), 0, 0)

        minx, miny, maxx, maxy = poly.bounds
        assert (minx, maxx) == pytest.approx((-50, 50))
        assert miny == pytest.approx(-50)
        assert maxy == pytest.approx(30)


class TestRenderSvg:
    """Tests for SVG output."""

    def test_blank_grid_has_no_outlines(self, box_catalog):
        svg = render_svg([[' ', ' ']], box_catalog)

        assert '<svg' in svg
        assert '<path' not in svg

    def test_connected_pipe_is_one_outline(self, box_catalog):
        svg = render_svg([['─', '─', '─']], box_catalog)

        assert svg.count('<path') == 1

    def test_separate_pipes_are_separate_outlines(self, box_catalog):
        svg = render_svg([['│', ' ', '│']], box_catalog)

        assert svg.count('<path') == 2

    def test_ring_draws_inner_outline(self, box_catalog):
        svg = render_svg([['╔', '╗'], ['╚', '╝']], box_catalog)

        assert svg.count('<path') == 2

    def test_canvas_size(self, box_catalog):
        svg = render_svg([['─', '─', '─'], ['─', '─', '─']], box_catalog, cell_size=40)

        assert 'width="120"' in svg
        assert 'height="80"' in svg

    def test_skips_undetermined_and_unknown(self, box_catalog):
        svg = render_svg([[UNDETERMINED, 'Z', '─']], box_catalog)

        assert svg.count('<path') == 1

    def test_progress_callback(self, box_catalog):
        calls = []
        render_svg([['─', '─'], ['─', '─']], box_catalog,
                   progress_callback=lambda *args: calls.append(args))

        assert calls == [(1, 4), (2, 4), (3, 4), (4, 4)]
