from collections import namedtuple


# ============================================================================
# DIRECTIONS
# ============================================================================

# 4-neighbor lattice, (row, col) offsets
DIRECTIONS = ('up', 'right', 'down', 'left')
DIRECTION_OFFSETS = {
    'up': (-1, 0), 'right': (0, 1), 'down': (1, 0), 'left': (0, -1),
}
OPPOSITE = {
    'up': 'down', 'right': 'left', 'down': 'up', 'left': 'right',
}


class CatalogError(ValueError):
    """Raised for a malformed tile definition or catalog."""


TileDefinition = namedtuple('TileDefinition', ['glyph', 'up', 'right', 'down', 'left'])


def connector(tile, direction):
    """Connector code on the given side of a tile."""
    return getattr(tile, direction)


def make_tile(glyph, sides):
    """Build a TileDefinition from a glyph and an (up, right, down, left) tuple."""
    if not isinstance(glyph, str) or len(glyph) != 1:
        raise CatalogError("glyph must be a single character, got {!r}".format(glyph))
    sides = tuple(sides)
    if len(sides) != 4:
        raise CatalogError("tile {!r} needs 4 connector codes, got {}".format(glyph, len(sides)))
    for code in sides:
        if isinstance(code, bool) or not isinstance(code, int) or code < 0:
            raise CatalogError(
                "tile {!r} has invalid connector code {!r}".format(glyph, code))
    return TileDefinition(glyph, *sides)


# ============================================================================
# REFERENCE TILE SET
# ============================================================================

# Connector codes: 0 = blank, 1 = double line, 2 = single line
# Sides are (up, right, down, left)
BOX_DRAWING_TILES = [
    (' ', (0, 0, 0, 0)),
    # Double line
    ('╠', (1, 1, 1, 0)),
    ('╦', (0, 1, 1, 1)),
    ('╣', (1, 0, 1, 1)),
    ('╩', (1, 1, 0, 1)),
    ('╔', (0, 1, 1, 0)),
    ('╗', (0, 0, 1, 1)),
    ('╚', (1, 1, 0, 0)),
    ('╝', (1, 0, 0, 1)),
    ('╬', (1, 1, 1, 1)),
    ('║', (1, 0, 1, 0)),
    ('═', (0, 1, 0, 1)),
    # Single line
    ('├', (2, 2, 2, 0)),
    ('┬', (0, 2, 2, 2)),
    ('┤', (2, 0, 2, 2)),
    ('┴', (2, 2, 0, 2)),
    ('┌', (0, 2, 2, 0)),
    ('┐', (0, 0, 2, 2)),
    ('└', (2, 2, 0, 0)),
    ('┘', (2, 0, 0, 2)),
    ('┼', (2, 2, 2, 2)),
    ('│', (2, 0, 2, 0)),
    ('─', (0, 2, 0, 2)),
    # Mixed double/single junctions
    ('╨', (1, 2, 0, 2)),
    ('╡', (2, 0, 2, 1)),
    ('╥', (0, 2, 1, 2)),
    ('╞', (2, 1, 2, 0)),
]


class TileCatalog:
    """Ordered, immutable set of tile definitions with an adjacency table.

    The compatibility table is built once: for every glyph and direction it
    holds the glyphs whose facing connector matches, so propagation never
    scans the catalog.
    """

    def __init__(self, tiles):
        tiles = tuple(tiles)
        if not tiles:
            raise CatalogError("catalog must contain at least one tile")
        by_glyph = {}
        for tile in tiles:
            if not isinstance(tile, TileDefinition):
                tile = make_tile(tile[0], tile[1:])
            if tile.glyph in by_glyph:
                raise CatalogError("duplicate glyph {!r} in catalog".format(tile.glyph))
            by_glyph[tile.glyph] = tile
        self._tiles = tuple(by_glyph.values())
        self._by_glyph = by_glyph
        self._index = {tile.glyph: i for i, tile in enumerate(self._tiles)}
        self.glyphs = frozenset(by_glyph)

        # _compat[glyph][direction] = glyphs that may sit on that side of glyph
        self._compat = {}
        for tile in self._tiles:
            self._compat[tile.glyph] = {}
            for direction in DIRECTIONS:
                code = connector(tile, direction)
                opp = OPPOSITE[direction]
                self._compat[tile.glyph][direction] = frozenset(
                    t.glyph for t in self._tiles if connector(t, opp) == code
                )

    @classmethod
    def from_table(cls, table):
        """Build a catalog from (glyph, (up, right, down, left)) rows."""
        return cls(make_tile(glyph, sides) for glyph, sides in table)

    @property
    def tiles(self):
        return self._tiles

    def __len__(self):
        return len(self._tiles)

    def __iter__(self):
        return iter(self._tiles)

    def __contains__(self, glyph):
        return glyph in self._by_glyph

    def __repr__(self):
        return "TileCatalog({})".format(''.join(t.glyph for t in self._tiles))

    def get(self, glyph):
        """Tile for a glyph, or None when the glyph is not in the catalog."""
        return self._by_glyph.get(glyph)

    def index(self, glyph):
        return self._index[glyph]

    def compatible(self, glyph, direction):
        """Glyphs that can be placed on the `direction` side of `glyph`."""
        return self._compat[glyph][direction]


def default_catalog():
    return TileCatalog.from_table(BOX_DRAWING_TILES)
