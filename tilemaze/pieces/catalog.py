"""Piece catalog contract and an in-memory implementation.

A catalog maps a door pattern to the weighted tile-art variations for that
room shape. Loading presets from disk is someone else's job; this module only
defines the lookup contract, a dict-backed catalog, and a procedural catalog
that draws plain wall rings so generation works without any assets.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import numpy as np

from tilemaze import config

from .selector import (
    PIECE_TYPE_BY_PATTERN,
    PIECE_TYPES,
    piece_type_for,
    unpack_door_pattern,
)

if TYPE_CHECKING:
    from tilemaze.compositor.tile_ranges import TileRanges
    from tilemaze.types import DoorPattern, TileCoord


@dataclass(frozen=True, eq=False)
class PieceVariation:
    """One tile-art fragment for a piece type.

    Attributes:
        tile_data: Flat row-major fragment, ``room_width * room_height`` IDs.
            Stored as a read-only uint32 copy and shared by every room that
            resolves to it.
        weight: Positive relative weight for random selection.
        name: Optional label for debugging.
    """

    tile_data: np.ndarray
    weight: float = 1.0
    name: str = ""

    def __post_init__(self) -> None:
        if not math.isfinite(self.weight) or self.weight <= 0:
            raise ValueError(f"Variation weight must be positive, got {self.weight}")
        data = np.array(self.tile_data, dtype=np.uint32).ravel()
        data.setflags(write=False)
        object.__setattr__(self, "tile_data", data)


class PieceCatalog(Protocol):
    """Lookup contract consumed by PieceSelector.

    Must return a non-empty sequence for each of the 15 patterns with at least
    one open door. The all-closed pattern is outside the contract.
    """

    def lookup(self, door_pattern: DoorPattern) -> Sequence[PieceVariation]: ...


class DictPieceCatalog:
    """Catalog backed by a ``piece type -> variations`` mapping."""

    def __init__(
        self,
        room_width: TileCoord,
        room_height: TileCoord,
        pieces: Mapping[str, Sequence[PieceVariation]],
    ) -> None:
        missing = [
            piece_type for piece_type in PIECE_TYPES if not pieces.get(piece_type)
        ]
        if missing:
            raise ValueError(f"Catalog is missing piece types: {', '.join(missing)}")

        expected = room_width * room_height
        for piece_type, variations in pieces.items():
            for variation in variations:
                if variation.tile_data.size != expected:
                    raise ValueError(
                        f"{piece_type} variation has {variation.tile_data.size} "
                        f"tiles, expected {room_width}x{room_height}"
                    )

        self.room_width = room_width
        self.room_height = room_height
        self._pieces: dict[str, tuple[PieceVariation, ...]] = {
            piece_type: tuple(variations) for piece_type, variations in pieces.items()
        }

    def lookup(self, door_pattern: DoorPattern) -> Sequence[PieceVariation]:
        return self._pieces[piece_type_for(door_pattern)]

    def variations(self, piece_type: str) -> Sequence[PieceVariation]:
        return self._pieces[piece_type]


# Offsets into the wall range used by procedural pieces
WALL_TOP = 0
WALL_BOTTOM = 1
WALL_LEFT = 2
WALL_RIGHT = 3
WALL_TOP_LEFT = 4
WALL_TOP_RIGHT = 5
WALL_BOTTOM_LEFT = 6
WALL_BOTTOM_RIGHT = 7
WALL_PILLAR = 8

# Smallest room that fits a 2x2 pillar with a free tile around it
_MIN_PILLAR_ROOM = 7


def _draw_room(
    door_pattern: DoorPattern,
    room_width: TileCoord,
    room_height: TileCoord,
    door_width: int,
    first_wall: int,
) -> np.ndarray:
    north, east, south, west = door_pattern
    tiles = np.zeros((room_height, room_width), dtype=np.uint32)

    tiles[0, :] = first_wall + WALL_TOP
    tiles[-1, :] = first_wall + WALL_BOTTOM
    tiles[:, 0] = first_wall + WALL_LEFT
    tiles[:, -1] = first_wall + WALL_RIGHT
    tiles[0, 0] = first_wall + WALL_TOP_LEFT
    tiles[0, -1] = first_wall + WALL_TOP_RIGHT
    tiles[-1, 0] = first_wall + WALL_BOTTOM_LEFT
    tiles[-1, -1] = first_wall + WALL_BOTTOM_RIGHT

    # Centred gaps line up with the neighbouring room's matching door
    gap_x = slice((room_width - door_width) // 2, (room_width + door_width) // 2)
    gap_y = slice((room_height - door_width) // 2, (room_height + door_width) // 2)
    if north:
        tiles[0, gap_x] = 0
    if south:
        tiles[-1, gap_x] = 0
    if west:
        tiles[gap_y, 0] = 0
    if east:
        tiles[gap_y, -1] = 0
    return tiles


def build_procedural_catalog(
    room_width: TileCoord,
    room_height: TileCoord,
    tile_ranges: TileRanges,
    door_width: int = config.DOOR_WIDTH,
    pillar_weight: float = config.PILLAR_VARIATION_WEIGHT,
) -> DictPieceCatalog:
    """Build a catalog of wall-ring rooms for all 15 door patterns.

    Each side and corner uses its own wall ID so shadows stay directional.
    Rooms of at least 7x7 also get a rarer variation with a 2x2 pillar in the
    middle.

    Raises:
        ValueError: If the room cannot hold a door gap between two corners, or
            the wall range has fewer than 9 IDs.
    """
    if door_width < 1:
        raise ValueError(f"door_width must be at least 1, got {door_width}")
    if room_width < door_width + 2 or room_height < door_width + 2:
        raise ValueError(
            f"{room_width}x{room_height} room too small for {door_width}-wide doors"
        )
    if len(tile_ranges.walls) <= WALL_PILLAR:
        raise ValueError(
            f"Procedural pieces need {WALL_PILLAR + 1} wall IDs, "
            f"range has {len(tile_ranges.walls)}"
        )

    first_wall = tile_ranges.walls.first
    with_pillar = room_width >= _MIN_PILLAR_ROOM and room_height >= _MIN_PILLAR_ROOM
    pieces: dict[str, list[PieceVariation]] = {}

    for key, piece_type in PIECE_TYPE_BY_PATTERN.items():
        tiles = _draw_room(
            unpack_door_pattern(key), room_width, room_height, door_width, first_wall
        )
        variations = [PieceVariation(tiles, 1.0, name=piece_type)]

        if with_pillar:
            pillar = tiles.copy()
            cx, cy = room_width // 2, room_height // 2
            pillar[cy - 1 : cy + 1, cx - 1 : cx + 1] = first_wall + WALL_PILLAR
            variations.append(
                PieceVariation(pillar, pillar_weight, name=f"{piece_type}_pillar")
            )

        pieces[piece_type] = variations

    return DictPieceCatalog(room_width, room_height, pieces)
