"""Tile ID ranges that give layer values their meaning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from tilemaze import config
from tilemaze.types import TileID

if TYPE_CHECKING:
    from tilemaze.util.rng import RNG


@dataclass(frozen=True)
class TileRange:
    """Inclusive range of tile IDs, ``first..last``."""

    first: TileID
    last: TileID

    def __post_init__(self) -> None:
        if self.first > self.last:
            raise ValueError(f"Empty tile range {self.first}..{self.last}")

    def __len__(self) -> int:
        return self.last - self.first + 1

    def contains(self, tile: TileID | np.ndarray) -> bool | np.ndarray:
        """Membership test. Works element-wise on numpy arrays."""
        if isinstance(tile, np.ndarray):
            return (tile >= self.first) & (tile <= self.last)
        return self.first <= tile <= self.last

    def overlaps(self, other: TileRange) -> bool:
        return self.first <= other.last and other.first <= self.last

    def offset(self, amount: int) -> TileRange:
        return TileRange(self.first + amount, self.last + amount)

    def random_tile(self, rng: RNG) -> TileID:
        return rng.randint(self.first, self.last)


@dataclass(frozen=True)
class TileRanges:
    """The tile catalog as seen by the compositor.

    Attributes:
        walls: IDs that block movement and cast shadows.
        floors: Walkable ground IDs.
        props: Decorative IDs scattered on the floor.
        shadow_offset: Added to a wall ID to get its shadow ID.
    """

    walls: TileRange
    floors: TileRange
    props: TileRange
    shadow_offset: int

    @classmethod
    def default(cls) -> TileRanges:
        return cls(
            walls=TileRange(config.WALL_TILE_FIRST, config.WALL_TILE_LAST),
            floors=TileRange(config.FLOOR_TILE_FIRST, config.FLOOR_TILE_LAST),
            props=TileRange(config.PROP_TILE_FIRST, config.PROP_TILE_LAST),
            shadow_offset=config.SHADOW_OFFSET,
        )

    @property
    def shadows(self) -> TileRange:
        return self.walls.offset(self.shadow_offset)

    def shadow_for(self, wall_tile: TileID) -> TileID:
        return wall_tile + self.shadow_offset

    def named_ranges(self) -> dict[str, TileRange]:
        return {
            "walls": self.walls,
            "floors": self.floors,
            "props": self.props,
            "shadows": self.shadows,
        }
