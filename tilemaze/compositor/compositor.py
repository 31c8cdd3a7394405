"""Raster compositing of room pieces into background, wall and prop layers.

Layers are flat ``uint32`` numpy arrays of ``width * height`` tile IDs in
row-major order (``index = y * width + x``). 2-D work happens on
``reshape(height, width)`` views, so writes land in the flat arrays directly.

Pass order matters: pieces are injected into the walls layer first; shadow
derivation and prop distribution both read the finished walls layer and write
to disjoint layers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

from tilemaze.types import MapTilePos, TileCoord, TileID, TileIndex
from tilemaze.util.coordinates import is_valid_tile_pos, tile_index

from .tile_ranges import TileRanges

if TYPE_CHECKING:
    from tilemaze.maze.room_graph import RoomGraph
    from tilemaze.util.rng import RNG

logger = logging.getLogger(__name__)

EMPTY_TILE: TileID = 0

# Neighbour scan order for shadows: (dx, dy) of West, North, East, South
SHADOW_NEIGHBOR_ORDER: tuple[tuple[int, int], ...] = (
    (-1, 0),
    (0, -1),
    (1, 0),
    (0, 1),
)


class TileBoundsError(IndexError):
    """Raised when a coordinate or region falls outside the layer extents.

    This is a contract violation (usually a room grid that does not fit the
    map), so it is never clamped or wrapped.
    """

    pass


class Layer(Enum):
    BACKGROUND = "background"
    WALLS = "walls"
    PROPS = "props"


@dataclass(frozen=True, eq=False)
class MapLayers:
    """Finished, read-only layers handed to serialization.

    Attributes:
        width: Map width in tiles.
        height: Map height in tiles.
        background: Floor and shadow tiles.
        walls: Structural wall tiles; 0 where walkable.
        props: Decorative tiles; 0 where empty.
    """

    width: TileCoord
    height: TileCoord
    background: np.ndarray
    walls: np.ndarray
    props: np.ndarray

    def layer(self, kind: Layer) -> np.ndarray:
        return getattr(self, kind.value)

    def grid(self, kind: Layer) -> np.ndarray:
        """2-D ``(height, width)`` view of a layer."""
        return self.layer(kind).reshape(self.height, self.width)


class TileCompositor:
    """Owns the three map layers and runs the compositing passes.

    Attributes:
        width: Map width in tiles.
        height: Map height in tiles.
        tile_ranges: Meaning of tile IDs (walls, floors, props, shadows).
        rng: Random source for prop selection.
        background: Flat background layer, pre-filled with ``background_fill``.
        walls: Flat walls layer, initially empty.
        props: Flat props layer, initially empty.
    """

    def __init__(
        self,
        width: TileCoord,
        height: TileCoord,
        tile_ranges: TileRanges,
        rng: RNG,
        background_fill: TileID | None = None,
    ) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"Map must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        self.tile_ranges = tile_ranges
        self.rng = rng

        if background_fill is None:
            background_fill = tile_ranges.floors.first
        size = width * height
        self.background = np.full(size, background_fill, dtype=np.uint32)
        self.walls = np.zeros(size, dtype=np.uint32)
        self.props = np.zeros(size, dtype=np.uint32)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def layer(self, kind: Layer) -> np.ndarray:
        return getattr(self, kind.value)

    def grid(self, kind: Layer) -> np.ndarray:
        return self.layer(kind).reshape(self.height, self.width)

    def index(self, x: TileCoord, y: TileCoord) -> TileIndex:
        """Flat index of (x, y).

        Raises:
            TileBoundsError: If (x, y) is outside the map.
        """
        if not is_valid_tile_pos((x, y), self.width, self.height):
            raise TileBoundsError(
                f"Tile ({x}, {y}) outside {self.width}x{self.height} map"
            )
        return tile_index(x, y, self.width)

    def get_tile(self, kind: Layer, x: TileCoord, y: TileCoord) -> TileID:
        return int(self.layer(kind)[self.index(x, y)])

    def set_tile(self, kind: Layer, x: TileCoord, y: TileCoord, tile: TileID) -> None:
        self.layer(kind)[self.index(x, y)] = tile

    # ------------------------------------------------------------------
    # Injection
    # ------------------------------------------------------------------

    def inject(
        self,
        kind: Layer,
        fragment: np.ndarray,
        origin_x: TileCoord,
        origin_y: TileCoord,
        frag_width: TileCoord,
        frag_height: TileCoord,
    ) -> None:
        """Copy a fragment into a layer, skipping its empty (0) tiles.

        Zeros in the fragment never overwrite existing content, so irregular
        room art leaves neighbouring rooms' edges intact.

        Raises:
            ValueError: If the fragment does not hold ``frag_width *
                frag_height`` tiles.
            TileBoundsError: If any part of the fragment lands off the map.
        """
        fragment = np.asarray(fragment)
        if fragment.size != frag_width * frag_height:
            raise ValueError(
                f"Fragment has {fragment.size} tiles, expected "
                f"{frag_width}x{frag_height}"
            )
        if (
            origin_x < 0
            or origin_y < 0
            or origin_x + frag_width > self.width
            or origin_y + frag_height > self.height
        ):
            raise TileBoundsError(
                f"{frag_width}x{frag_height} fragment at ({origin_x}, {origin_y}) "
                f"does not fit {self.width}x{self.height} map"
            )

        source = fragment.reshape(frag_height, frag_width)
        target = self.grid(kind)[
            origin_y : origin_y + frag_height, origin_x : origin_x + frag_width
        ]
        mask = source != EMPTY_TILE
        target[mask] = source[mask]

    def inject_rooms(
        self, graph: RoomGraph, room_width: TileCoord, room_height: TileCoord
    ) -> int:
        """Inject every room's resolved piece into the walls layer.

        Rooms without a resolved piece (isolated rooms) are skipped.

        Returns:
            Number of rooms injected.
        """
        injected = 0
        for room in graph:
            if room.resolved_piece is None:
                continue
            self.inject(
                Layer.WALLS,
                room.resolved_piece.tile_data,
                room.column * room_width,
                room.row * room_height,
                room_width,
                room_height,
            )
            injected += 1
        logger.debug(f"Injected {injected} room pieces into the walls layer")
        return injected

    # ------------------------------------------------------------------
    # Shadows
    # ------------------------------------------------------------------

    def derive_shadows(self) -> int:
        """Write wall shadows onto floor tiles of the background layer.

        Each walkable floor tile (floor ID in the background, nothing in the
        walls layer) takes the shadow of its first walled neighbour, scanning
        west, north, east, south. Off-map neighbours count as open. The result
        depends only on the walls layer, so repeated runs agree.

        Returns:
            Number of shadow tiles written.
        """
        walls = self.grid(Layer.WALLS)
        background = self.grid(Layer.BACKGROUND)
        wall_range = self.tile_ranges.walls

        floor = self.tile_ranges.floors.contains(background) & (walls == EMPTY_TILE)

        conditions: list[np.ndarray] = []
        choices: list[np.ndarray] = []
        for dx, dy in SHADOW_NEIGHBOR_ORDER:
            neighbor = self._shifted(walls, dx, dy)
            conditions.append(floor & wall_range.contains(neighbor))
            # Summed in int64; MapConfig.validate keeps shadow IDs within uint32
            choices.append(neighbor.astype(np.int64) + self.tile_ranges.shadow_offset)

        shaded = np.select(conditions, choices, default=background)
        written = int(np.count_nonzero(shaded != background))
        background[...] = shaded
        logger.debug(f"Derived {written} shadow tiles")
        return written

    @staticmethod
    def _shifted(grid: np.ndarray, dx: int, dy: int) -> np.ndarray:
        """Array whose [y, x] holds grid[y + dy, x + dx], EMPTY off the edge."""
        height, width = grid.shape
        out = np.zeros_like(grid)
        src_y = slice(max(dy, 0), height + min(dy, 0))
        src_x = slice(max(dx, 0), width + min(dx, 0))
        dst_y = slice(max(-dy, 0), height + min(-dy, 0))
        dst_x = slice(max(-dx, 0), width + min(-dx, 0))
        out[dst_y, dst_x] = grid[src_y, src_x]
        return out

    # ------------------------------------------------------------------
    # Props
    # ------------------------------------------------------------------

    def walkable_mask(self) -> np.ndarray:
        """``(height, width)`` mask of open floor: floor or shadow, no wall."""
        background = self.grid(Layer.BACKGROUND)
        floors = self.tile_ranges.floors.contains(background)
        shadows = self.tile_ranges.shadows.contains(background)
        return (floors | shadows) & (self.grid(Layer.WALLS) == EMPTY_TILE)

    def distribute_props(self, spacing: int, min_distance: int) -> list[MapTilePos]:
        """Scatter props on a fixed stride grid with a spacing check.

        Samples every ``spacing`` tiles on both axes. A walkable sample gets a
        random prop unless the props layer already has one within
        ``min_distance`` (Chebyshev). Greedy, single pass; spacing is only
        guaranteed between the sampled positions.

        Returns:
            Positions where props were placed, in placement order.
        """
        if spacing < 1:
            raise ValueError(f"Prop spacing must be at least 1, got {spacing}")
        if min_distance < 0:
            raise ValueError(f"Prop distance must be non-negative, got {min_distance}")

        walkable = self.walkable_mask()
        props = self.grid(Layer.PROPS)
        placed: list[MapTilePos] = []

        for y in range(0, self.height, spacing):
            for x in range(0, self.width, spacing):
                if not walkable[y, x]:
                    continue
                nearby = props[
                    max(y - min_distance, 0) : y + min_distance + 1,
                    max(x - min_distance, 0) : x + min_distance + 1,
                ]
                if np.any(nearby != EMPTY_TILE):
                    continue
                props[y, x] = self.tile_ranges.props.random_tile(self.rng)
                placed.append((x, y))

        logger.debug(f"Placed {len(placed)} props")
        return placed

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export(self) -> MapLayers:
        """Read-only snapshot of the three layers."""
        layers = {}
        for kind in Layer:
            data = self.layer(kind).copy()
            data.setflags(write=False)
            layers[kind.value] = data
        return MapLayers(width=self.width, height=self.height, **layers)
