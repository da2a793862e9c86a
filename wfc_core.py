import logging
import random
from collections import namedtuple

from tiles import DIRECTIONS, DIRECTION_OFFSETS, OPPOSITE, default_catalog

logger = logging.getLogger(__name__)

UNDETERMINED = None
UNCONSTRAINED_ENTROPY = 13  # no resolved neighbor yet
EXHAUSTED_ENTROPY = 99      # constraints intersect to nothing

MAX_ATTEMPTS = 200


class ConfigError(ValueError):
    """Grid dimensions the engine cannot run with."""


class Contradiction(RuntimeError):
    """The cell picked for collapse has no tile left that fits its neighbors."""

    def __init__(self, position, iteration=None):
        self.position = position
        self.iteration = iteration
        super().__init__("no tile fits cell {} (iteration {})".format(position, iteration))


CollapseEvent = namedtuple('CollapseEvent', ['iteration', 'glyph', 'position'])
GenerationResult = namedtuple('GenerationResult', ['grid', 'trace'])


# ============================================================================
# CELLS
# ============================================================================

class Cell:
    """Working state of one grid position."""

    __slots__ = ('glyph', 'possibilities', 'allowed', 'entropy', 'active')

    def __init__(self):
        self.glyph = UNDETERMINED
        self.possibilities = {direction: set() for direction in DIRECTIONS}
        self.allowed = []
        self.entropy = UNCONSTRAINED_ENTROPY
        self.active = False

    def __repr__(self):
        return "Cell(glyph={!r}, entropy={}, active={})".format(
            self.glyph, self.entropy, self.active)

    @property
    def resolved(self):
        return self.glyph is not UNDETERMINED

    def clear_possibilities(self):
        for poss in self.possibilities.values():
            poss.clear()

    def update_entropy(self, catalog, directions):
        """Intersect the possibility sets of `directions` into allowed tiles.

        `directions` are the sides that have an in-bounds neighbor; grid
        edges never constrain a cell. A constrained side with an empty set
        still takes part, which is how a contradiction shows up here.
        """
        sets = [self.possibilities[d] for d in directions]
        if not sets:
            self.allowed = []
            self.entropy = UNCONSTRAINED_ENTROPY
            return

        allowed = set(sets[0])
        for other in sets[1:]:
            allowed &= other

        tiles = []
        for glyph in allowed:
            tile = catalog.get(glyph)
            if tile is not None:
                tiles.append(tile)
        tiles.sort(key=lambda tile: catalog.index(tile.glyph))
        self.allowed = tiles
        self.entropy = len(tiles) if tiles else EXHAUSTED_ENTROPY

    def resolve(self, tile):
        self.glyph = tile.glyph
        self.active = False


# ============================================================================
# BOARD
# ============================================================================

def validate_dimensions(width, height):
    for name, value in (('width', width), ('height', height)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError("{} must be an integer, got {!r}".format(name, value))
        if value < 1:
            raise ConfigError("{} must be positive, got {}".format(name, value))


def create_board(width, height):
    """Create `height` rows of `width` undetermined, inactive cells."""
    validate_dimensions(width, height)
    return [[Cell() for _ in range(width)] for _ in range(height)]


def neighbors(board, row, col):
    """Yield (direction, (row, col)) for each in-bounds neighbor."""
    height = len(board)
    width = len(board[0])
    for direction in DIRECTIONS:
        dr, dc = DIRECTION_OFFSETS[direction]
        nr, nc = row + dr, col + dc
        if 0 <= nr < height and 0 <= nc < width:
            yield direction, (nr, nc)


def grid_glyphs(board):
    return [[cell.glyph for cell in row] for row in board]


# ============================================================================
# PROPAGATION
# ============================================================================

def update_entropies(board, catalog):
    """Recompute possibility sets, allowed tiles and entropy of the frontier.

    Only active, undetermined cells are evaluated. A resolved neighbor
    restricts its side to the tiles whose facing connector matches; an
    undetermined neighbor leaves the side open to the whole catalog.
    """
    all_glyphs = catalog.glyphs
    for i, row in enumerate(board):
        for j, cell in enumerate(row):
            cell.clear_possibilities()
            if not cell.active or cell.resolved:
                continue

            directions = []
            for direction, (ni, nj) in neighbors(board, i, j):
                neighbor = board[ni][nj]
                if neighbor.resolved:
                    # Tiles whose `direction` side matches the neighbor's facing side
                    cell.possibilities[direction].update(
                        catalog.compatible(neighbor.glyph, OPPOSITE[direction])
                        if neighbor.glyph in catalog else ()
                    )
                else:
                    cell.possibilities[direction].update(all_glyphs)
                directions.append(direction)

            cell.update_entropy(catalog, directions)


# ============================================================================
# SELECTION & COLLAPSE
# ============================================================================

def find_lowest_entropy_cells(board):
    """Positions of the eligible cells that share the minimum entropy.

    Eligible means active and undetermined. Before the first collapse no cell
    is active, so every undetermined cell is eligible.
    """
    candidates = [
        (i, j) for i, row in enumerate(board) for j, cell in enumerate(row)
        if cell.active and not cell.resolved
    ]
    if not candidates:
        candidates = [
            (i, j) for i, row in enumerate(board) for j, cell in enumerate(row)
            if not cell.resolved
        ]
    if not candidates:
        return []

    lowest = min(board[i][j].entropy for i, j in candidates)
    return [(i, j) for i, j in candidates if board[i][j].entropy == lowest]


def choose_lowest_entropy_position(board, rng):
    cells = find_lowest_entropy_cells(board)
    if not cells:
        return None
    return rng.choice(cells)


def collapse_cell(board, row, col, catalog, rng, first=False, iteration=None):
    """Assign a concrete tile to the cell at (row, col) and return it.

    The first collapse of a run has no resolved neighbor to go by, so it
    draws from the whole catalog.
    """
    cell = board[row][col]
    if first:
        tile = rng.choice(catalog.tiles)
    else:
        if not cell.allowed:
            raise Contradiction((row, col), iteration)
        tile = rng.choice(cell.allowed)
    cell.resolve(tile)
    return tile


def update_adjacent_cells(board, row, col):
    """Deactivate the collapsed cell and activate its undetermined neighbors."""
    board[row][col].active = False
    for _, (ni, nj) in neighbors(board, row, col):
        neighbor = board[ni][nj]
        if not neighbor.resolved:
            neighbor.active = True


# ============================================================================
# RUNS
# ============================================================================

def generate(catalog=None, width=10, height=10, rng=None,
             progress_callback=None, step_callback=None):
    """Collapse a width x height grid, one cell per iteration.

    Raises Contradiction if a selected cell has no allowed tile; there is no
    backtracking. `rng` needs a `choice(sequence)` method and defaults to the
    module-level random source.

    Args:
        catalog: TileCatalog to draw from (default: box-drawing set)
        progress_callback: called as (cells_collapsed, total_cells)
        step_callback: called as (board, CollapseEvent) after every collapse
    """
    if catalog is None:
        catalog = default_catalog()
    if rng is None:
        rng = random
    board = create_board(width, height)
    total_cells = width * height
    trace = []

    for iteration in range(total_cells):
        first = iteration == 0
        if not first:
            update_entropies(board, catalog)

        row, col = choose_lowest_entropy_position(board, rng)
        tile = collapse_cell(board, row, col, catalog, rng,
                             first=first, iteration=iteration)
        update_adjacent_cells(board, row, col)

        event = CollapseEvent(iteration, tile.glyph, (row, col))
        trace.append(event)
        logger.debug("chosen %r at %s (iteration %d)", tile.glyph, (row, col), iteration)

        if step_callback:
            step_callback(board, event)
        if progress_callback:
            progress_callback(iteration + 1, total_cells)

    return GenerationResult(grid_glyphs(board), trace)


def generate_with_retries(catalog=None, width=10, height=10, rng=None,
                          max_attempts=MAX_ATTEMPTS, progress_callback=None,
                          step_callback=None):
    """Run generate() until a grid completes. Returns a GenerationResult, or None.

    A contradiction discards the whole grid and starts over with the same
    random source, so every attempt sees fresh choices.
    """
    validate_dimensions(width, height)
    if max_attempts < 1:
        raise ConfigError("max_attempts must be at least 1, got {}".format(max_attempts))

    for attempt in range(1, max_attempts + 1):
        if progress_callback:
            def run_progress(cells, total, attempt=attempt):
                progress_callback(attempt, max_attempts, cells, total)
        else:
            run_progress = None

        try:
            return generate(catalog, width, height, rng=rng,
                            progress_callback=run_progress,
                            step_callback=step_callback)
        except Contradiction as exc:
            logger.info("attempt %d/%d: %s, restarting", attempt, max_attempts, exc)

    logger.warning("no %dx%d grid completed in %d attempts", width, height, max_attempts)
    return None
