"""Validated settings for one map generation run."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations

from tilemaze import config
from tilemaze.compositor.tile_ranges import TileRanges
from tilemaze.types import RandomSeed, TileCoord

# Layers store tile IDs as uint32
MAX_TILE_ID = 0xFFFFFFFF


class ConfigurationError(ValueError):
    """Raised when settings are inconsistent, before any generation work."""

    pass


@dataclass
class MapConfig:
    """Every input the generation core consumes.

    Field defaults come from ``tilemaze.config``.

    Attributes:
        map_width: Map width in tiles.
        map_height: Map height in tiles.
        columns: Room grid columns.
        rows: Room grid rows.
        room_width: Room piece width in tiles.
        room_height: Room piece height in tiles.
        tile_ranges: Wall, floor, prop ranges and shadow offset.
        loops_enabled: Run loop injection after the spanning tree.
        loop_iterations: Loop injection attempts.
        prop_spacing: Stride of the prop sampling grid.
        prop_min_distance: Radius searched for an existing prop.
        max_iterations: Traversal step ceiling.
        seed: Master seed; None for a different map every run.
    """

    map_width: TileCoord = config.MAP_WIDTH
    map_height: TileCoord = config.MAP_HEIGHT
    columns: int = config.ROOM_COLUMNS
    rows: int = config.ROOM_ROWS
    room_width: TileCoord = config.ROOM_WIDTH
    room_height: TileCoord = config.ROOM_HEIGHT
    tile_ranges: TileRanges = field(default_factory=TileRanges.default)
    loops_enabled: bool = config.LOOPS_ENABLED
    loop_iterations: int = config.LOOP_ITERATIONS
    prop_spacing: int = config.DISTANCE_BETWEEN_PROPS
    prop_min_distance: int = config.DISTANCE_BETWEEN_POOPS
    max_iterations: int = config.MAX_GENERATION_ITERATIONS
    seed: RandomSeed = config.RANDOM_SEED

    def validate(self) -> None:
        """Reject inconsistent settings.

        Raises:
            ConfigurationError: Describing the first problem found.
        """
        for name in (
            "map_width",
            "map_height",
            "columns",
            "rows",
            "room_width",
            "room_height",
        ):
            value = getattr(self, name)
            if value < 1:
                raise ConfigurationError(f"{name} must be positive, got {value}")

        if self.columns * self.room_width > self.map_width:
            raise ConfigurationError(
                f"{self.columns} columns of {self.room_width} tiles do not fit "
                f"a map {self.map_width} tiles wide"
            )
        if self.rows * self.room_height > self.map_height:
            raise ConfigurationError(
                f"{self.rows} rows of {self.room_height} tiles do not fit "
                f"a map {self.map_height} tiles high"
            )
        if self.columns * self.rows < 2:
            raise ConfigurationError(
                f"A {self.columns}x{self.rows} grid has no room to connect to"
            )

        if self.loop_iterations < 0:
            raise ConfigurationError(
                f"loop_iterations must be non-negative, got {self.loop_iterations}"
            )
        if self.prop_spacing < 1:
            raise ConfigurationError(
                f"prop_spacing must be at least 1, got {self.prop_spacing}"
            )
        if self.prop_min_distance < 0:
            raise ConfigurationError(
                f"prop_min_distance must be non-negative, got {self.prop_min_distance}"
            )
        if self.max_iterations < 1:
            raise ConfigurationError(
                f"max_iterations must be at least 1, got {self.max_iterations}"
            )

        ranges = self.tile_ranges.named_ranges()
        for name, tile_range in ranges.items():
            if tile_range.contains(0):
                raise ConfigurationError(
                    f"{name} range {tile_range.first}..{tile_range.last} "
                    "includes the empty tile 0"
                )
            if tile_range.first < 1 or tile_range.last > MAX_TILE_ID:
                raise ConfigurationError(
                    f"{name} range {tile_range.first}..{tile_range.last} "
                    f"is outside tile IDs 1..{MAX_TILE_ID}"
                )
        for (name_a, range_a), (name_b, range_b) in combinations(ranges.items(), 2):
            if range_a.overlaps(range_b):
                raise ConfigurationError(f"{name_a} and {name_b} tile ranges overlap")
