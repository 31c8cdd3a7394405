"""Maze topology: rooms, the room grid, and the generator that connects them."""

from .generator import (
    GenerationOutcome,
    GenerationReport,
    GenerationState,
    MazeGenerator,
)
from .room import DIR_OFFSETS, Direction, Room, opposite
from .room_graph import RoomGraph

__all__ = [
    "DIR_OFFSETS",
    "Direction",
    "GenerationOutcome",
    "GenerationReport",
    "GenerationState",
    "MazeGenerator",
    "Room",
    "RoomGraph",
    "opposite",
]
