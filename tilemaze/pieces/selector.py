"""Door pattern to piece type mapping and weighted variation choice."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tilemaze.maze.room import Room
    from tilemaze.types import DoorPattern
    from tilemaze.util.rng import RNG

    from .catalog import PieceCatalog, PieceVariation


class InvalidDoorPatternError(ValueError):
    """Raised for a door pattern that has no piece type.

    The all-closed pattern means a room was never connected, which is a
    generator defect; it must not be papered over with a default piece.
    """

    pass


# Key bits: North=8, East=4, South=2, West=1 (NESW read as a binary number)
PIECE_TYPE_BY_PATTERN: dict[int, str] = {
    0b1111: "intersection",
    0b1110: "t_down",
    0b1101: "t_up",
    0b1100: "corner_bottom_left",
    0b1011: "t_left",
    0b1010: "vertical_hallway",
    0b1001: "corner_bottom_right",
    0b1000: "end_up",
    0b0111: "t_right",
    0b0110: "corner_upper_left",
    0b0101: "horizontal_hallway",
    0b0100: "end_right",
    0b0011: "corner_upper_right",
    0b0010: "end_down",
    0b0001: "end_left",
}

PIECE_TYPES: tuple[str, ...] = tuple(PIECE_TYPE_BY_PATTERN.values())


def pack_door_pattern(doors: Sequence[bool]) -> int:
    """Pack four NESW door flags into a 4-bit key, North as the high bit."""
    if len(doors) != 4:
        raise InvalidDoorPatternError(f"Expected 4 door flags, got {len(doors)}")
    key = 0
    for is_open in doors:
        key = (key << 1) | bool(is_open)
    return key


def unpack_door_pattern(key: int) -> DoorPattern:
    north, east, south, west = (bool(key & bit) for bit in (8, 4, 2, 1))
    return (north, east, south, west)


def piece_type_for(doors: Sequence[bool]) -> str:
    """Piece type name for a door pattern.

    Raises:
        InvalidDoorPatternError: For the all-closed pattern or anything that is
            not four flags.
    """
    key = pack_door_pattern(doors)
    try:
        return PIECE_TYPE_BY_PATTERN[key]
    except KeyError:
        raise InvalidDoorPatternError(
            f"No piece type for door pattern {key:04b} (NESW)"
        ) from None


class PieceSelector:
    """Resolves concrete tile data for a room's door pattern.

    The catalog supplies the candidate variations; this class picks one by
    weight using the shared random stream.
    """

    def __init__(self, catalog: PieceCatalog, rng: RNG) -> None:
        self.catalog = catalog
        self.rng = rng

    def variations_for(self, doors: Sequence[bool]) -> Sequence[PieceVariation]:
        piece_type = piece_type_for(doors)
        variations = self.catalog.lookup(tuple(doors))
        if not variations:
            raise InvalidDoorPatternError(f"Catalog has no variations for {piece_type}")
        return variations

    def choose(self, variations: Sequence[PieceVariation]) -> PieceVariation:
        """Cumulative-weight sampling over ``variations``.

        Draws ``u`` in [0, total) and returns the first entry whose running
        weight exceeds it. Weights need not sum to 1.
        """
        if len(variations) == 1:
            return variations[0]

        total = sum(variation.weight for variation in variations)
        threshold = self.rng.random() * total
        cumulative = 0.0
        for variation in variations:
            cumulative += variation.weight
            if cumulative > threshold:
                return variation
        # Float rounding can leave threshold == total
        return variations[-1]

    def select(self, doors: Sequence[bool]) -> PieceVariation:
        return self.choose(self.variations_for(doors))

    def resolve(self, room: Room) -> PieceVariation:
        """Select a variation for ``room`` and store it on the room."""
        room.resolved_piece = self.select(room.doors)
        return room.resolved_piece
