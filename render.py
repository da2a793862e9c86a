import drawsvg as draw
from shapely.geometry import box
from shapely.ops import unary_union

from tiles import DIRECTIONS, connector, default_catalog
from wfc_core import UNDETERMINED

ACTIVE_MARK = '#'
UNDETERMINED_MARK = '*'

# Arm half-width per connector code, as a fraction of the cell size
# 1 = double line (wide pipe), 2 = single line (narrow pipe)
CONNECTOR_HALF_WIDTH = {1: 0.30, 2: 0.15}
OTHER_HALF_WIDTH = 0.08


# ============================================================================
# CONSOLE
# ============================================================================

def format_board(board):
    """Text view of a working board: active cells as '#', undetermined as '*'."""
    lines = []
    for row in board:
        line = []
        for cell in row:
            if cell.active:
                line.append(ACTIVE_MARK)
            elif cell.glyph is UNDETERMINED:
                line.append(UNDETERMINED_MARK)
            else:
                line.append(cell.glyph)
        lines.append(''.join(line))
    return '\n'.join(lines)


def print_board(board, file=None):
    print(format_board(board), file=file)
    print('\n', file=file)


def format_grid(grid):
    return '\n'.join(
        ''.join(UNDETERMINED_MARK if glyph is UNDETERMINED else glyph for glyph in row)
        for row in grid
    )


# ============================================================================
# SVG
# ============================================================================

def _half_width(code, cell_size):
    return CONNECTOR_HALF_WIDTH.get(code, OTHER_HALF_WIDTH) * cell_size


def tile_polygon(tile, xloc, yloc, cell_size=100):
    """Pipe outline of one tile centered at (xloc, yloc).

    Each non-zero connector becomes an arm from the center to the cell edge,
    so arms of matching neighbors meet edge to edge. Returns None for a blank
    tile.
    """
    half = cell_size / 2.0
    parts = []
    center_hw = 0
    for direction in DIRECTIONS:
        code = connector(tile, direction)
        if not code:
            continue
        hw = _half_width(code, cell_size)
        center_hw = max(center_hw, hw)
        if direction == 'up':
            parts.append(box(xloc - hw, yloc - half, xloc + hw, yloc))
        elif direction == 'down':
            parts.append(box(xloc - hw, yloc, xloc + hw, yloc + half))
        elif direction == 'left':
            parts.append(box(xloc - half, yloc - hw, xloc, yloc + hw))
        else:
            parts.append(box(xloc, yloc - hw, xloc + half, yloc + hw))
    if not parts:
        return None
    parts.append(box(xloc - center_hw, yloc - center_hw,
                     xloc + center_hw, yloc + center_hw))
    return unary_union(parts).buffer(0)


def _ring_to_lines(ring, sw):
    coords = []
    for x, y in ring.coords:
        coords.extend((x, y))
    return draw.Lines(*coords, close=True, fill='none', stroke='black', stroke_width=sw)


def _draw_polygon(drawing, poly, sw):
    drawing.append(_ring_to_lines(poly.exterior, sw))
    for interior in poly.interiors:
        drawing.append(_ring_to_lines(interior, sw))


def render_svg(grid, catalog=None, stroke_width=0.5, cell_size=100,
               progress_callback=None):
    """Render a grid of glyphs to an SVG string.

    Tile outlines are unioned across the whole grid first, so connected
    pipes are drawn as one continuous outline with no seams between cells.

    Args:
        grid: rows of glyphs (undetermined cells are skipped)
        catalog: TileCatalog used to look up connector codes
        stroke_width: width of pipe outlines
        cell_size: side length of one cell in SVG units
        progress_callback: called as (tiles_done, total_tiles)
    """
    if catalog is None:
        catalog = default_catalog()
    height = len(grid)
    width = len(grid[0]) if height > 0 else 0

    d = draw.Drawing(width * cell_size, height * cell_size,
                     origin='center', displayInline=False)

    total = width * height
    polygons = []
    for row in range(height):
        for col in range(width):
            tile = catalog.get(grid[row][col]) if grid[row][col] is not UNDETERMINED else None
            if tile is not None:
                xloc = (col - (width - 1) / 2.0) * cell_size
                yloc = (row - (height - 1) / 2.0) * cell_size
                poly = tile_polygon(tile, xloc, yloc, cell_size)
                if poly is not None and not poly.is_empty:
                    polygons.append(poly)
            if progress_callback:
                progress_callback(row * width + col + 1, total)

    if polygons:
        merged = unary_union(polygons).buffer(0)
        if merged.geom_type == 'Polygon':
            _draw_polygon(d, merged, stroke_width)
        elif merged.geom_type in ('MultiPolygon', 'GeometryCollection'):
            for geom in merged.geoms:
                if geom.geom_type == 'Polygon':
                    _draw_polygon(d, geom, stroke_width)

    return d.as_svg()
