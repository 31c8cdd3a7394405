from __future__ import annotations

from typing import TypeAlias

# =============================================================================
# SPATIAL TYPES
# =============================================================================

TileCoord: TypeAlias = int  # Always integer tile position

# Map coordinates - absolute tile positions inside the composited map
MapTileCoord: TypeAlias = TileCoord  # Example: x=5, y=3
MapTilePos: TypeAlias = tuple[MapTileCoord, MapTileCoord]  # Example: (5, 3)

# Room grid coordinates - one step is one whole room
GridCoord: TypeAlias = int  # Example: column=2, row=1
GridPos: TypeAlias = tuple[GridCoord, GridCoord]  # Example: (2, 1) = third room, second row

# =============================================================================
# TILE TYPES
# =============================================================================

# Unsigned tile ID as stored in a layer. 0 is the empty/transparent sentinel.
TileID: TypeAlias = int

# Flat index into a row-major layer: y * width + x
TileIndex: TypeAlias = int

# =============================================================================
# TOPOLOGY TYPES
# =============================================================================

# Door flags ordered North, East, South, West
DoorPattern: TypeAlias = tuple[bool, bool, bool, bool]

# =============================================================================
# RANDOMNESS
# =============================================================================

RandomSeed: TypeAlias = int | float | str | bytes | bytearray | None
