"""Tile compositing: room piece injection, wall shadows and prop scatter."""

from .compositor import (
    EMPTY_TILE,
    SHADOW_NEIGHBOR_ORDER,
    Layer,
    MapLayers,
    TileBoundsError,
    TileCompositor,
)
from .tile_ranges import TileRange, TileRanges

__all__ = [
    "EMPTY_TILE",
    "SHADOW_NEIGHBOR_ORDER",
    "Layer",
    "MapLayers",
    "TileBoundsError",
    "TileCompositor",
    "TileRange",
    "TileRanges",
]
