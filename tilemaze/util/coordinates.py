"""Conversion and bounds helpers for flat, row-major tile layers."""

from __future__ import annotations

from tilemaze.types import MapTilePos, TileCoord, TileIndex


def is_valid_tile_pos(
    pos: MapTilePos, map_width: TileCoord, map_height: TileCoord
) -> bool:
    """Check if a tile position is within map bounds."""
    x, y = pos
    return 0 <= x < map_width and 0 <= y < map_height


def tile_index(x: TileCoord, y: TileCoord, map_width: TileCoord) -> TileIndex:
    """Row-major index of (x, y). Does not bounds-check."""
    return y * map_width + x


def index_to_pos(index: TileIndex, map_width: TileCoord) -> MapTilePos:
    y, x = divmod(index, map_width)
    return (x, y)


def chebyshev_distance(a: MapTilePos, b: MapTilePos) -> int:
    """King-move distance between two tiles."""
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))
