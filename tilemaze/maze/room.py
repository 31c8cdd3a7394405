"""Rooms of the maze grid and the four cardinal door directions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tilemaze.pieces.catalog import PieceVariation
    from tilemaze.types import DoorPattern, GridCoord, GridPos


class Direction(IntEnum):
    """Door slot index. Values double as positions in ``Room.doors``."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


# (d_column, d_row) for one step in each direction
DIR_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}


def opposite(direction: Direction) -> Direction:
    """North <-> South, East <-> West."""
    return Direction((direction + 2) % 4)


@dataclass(eq=False)
class Room:
    """One cell of the room grid.

    Attributes:
        column: Grid column, 0-based.
        row: Grid row, 0-based.
        doors: Four door flags indexed by ``Direction``.
        visited: Whether generation has joined this room to the maze.
        is_start: True only for the traversal root.
        resolved_piece: Tile art chosen for the final door pattern, or None
            before piece selection.
    """

    column: GridCoord
    row: GridCoord
    doors: list[bool] = field(default_factory=lambda: [False, False, False, False])
    visited: bool = False
    is_start: bool = False
    resolved_piece: PieceVariation | None = None

    @property
    def pos(self) -> GridPos:
        return (self.column, self.row)

    @property
    def door_pattern(self) -> DoorPattern:
        north, east, south, west = self.doors
        return (north, east, south, west)

    @property
    def open_door_count(self) -> int:
        return sum(self.doors)

    @property
    def is_dead_end(self) -> bool:
        return self.open_door_count == 1

    def __repr__(self) -> str:
        flags = "".join("1" if d else "0" for d in self.doors)
        return f"Room(column={self.column}, row={self.row}, doors={flags})"
