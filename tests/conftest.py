"""Shared pytest fixtures for the box-drawing WFC tests."""

import pytest

from tiles import TileCatalog, default_catalog


class ScriptedChoice:
    """Random source that replays a fixed list of indices.

    Each call to choice() consumes the next index (modulo the sequence
    length); once the script runs out it always picks the first element.
    """

    def __init__(self, indices=()):
        self._indices = list(indices)
        self.calls = []

    def choice(self, seq):
        seq = list(seq)
        self.calls.append(seq)
        index = self._indices.pop(0) if self._indices else 0
        return seq[index % len(seq)]


# =============================================================================
# Catalogs
# =============================================================================

@pytest.fixture
def box_catalog() -> TileCatalog:
    """The full 27-tile box-drawing catalog."""
    return default_catalog()


@pytest.fixture
def blank_catalog() -> TileCatalog:
    """A single blank tile."""
    return TileCatalog.from_table([(' ', (0, 0, 0, 0))])


@pytest.fixture
def horizontal_catalog() -> TileCatalog:
    """Only the double horizontal bar, which pairs with itself left to right."""
    return TileCatalog.from_table([('═', (0, 1, 0, 1))])


@pytest.fixture
def clashing_catalog() -> TileCatalog:
    """Two tiles that cannot sit next to each other (or themselves) on any side."""
    return TileCatalog.from_table([
        ('A', (1, 3, 2, 4)),
        ('B', (5, 7, 6, 8)),
    ])


@pytest.fixture
def line_catalog() -> TileCatalog:
    """Blank, horizontal and vertical single lines."""
    return TileCatalog.from_table([
        (' ', (0, 0, 0, 0)),
        ('─', (0, 2, 0, 2)),
        ('│', (2, 0, 2, 0)),
    ])


# =============================================================================
# Random sources
# =============================================================================

@pytest.fixture
def scripted():
    """Factory for ScriptedChoice random sources."""
    return ScriptedChoice
