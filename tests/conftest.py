from __future__ import annotations

import random

import pytest

from tilemaze.compositor.tile_ranges import TileRanges
from tilemaze.pieces.catalog import DictPieceCatalog, build_procedural_catalog


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source so failures reproduce."""
    return random.Random(1234)


@pytest.fixture
def tile_ranges() -> TileRanges:
    return TileRanges.default()


@pytest.fixture
def procedural_catalog(tile_ranges: TileRanges) -> DictPieceCatalog:
    """12x12 wall-ring pieces for every door pattern."""
    return build_procedural_catalog(12, 12, tile_ranges)
