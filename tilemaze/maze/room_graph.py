"""Bounds-checked grid of rooms with door adjacency queries."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator

from tilemaze.types import GridCoord, GridPos

from .room import DIR_OFFSETS, Direction, Room, opposite


class RoomGraph:
    """The ``columns x rows`` matrix of rooms plus the traversal stack.

    Rooms are created empty (no doors, unvisited). Iteration yields rooms in
    raster order: row by row, left to right.
    """

    def __init__(self, columns: GridCoord, rows: GridCoord) -> None:
        if columns < 1 or rows < 1:
            raise ValueError(f"Room grid must be at least 1x1, got {columns}x{rows}")
        self.columns = columns
        self.rows = rows
        self._rooms: list[list[Room]] = [
            [Room(column, row) for column in range(columns)] for row in range(rows)
        ]
        self.stack: list[Room] = []

    def __len__(self) -> int:
        return self.columns * self.rows

    def __iter__(self) -> Iterator[Room]:
        for row in self._rooms:
            yield from row

    def in_bounds(self, column: GridCoord, row: GridCoord) -> bool:
        return 0 <= column < self.columns and 0 <= row < self.rows

    def room(self, column: GridCoord, row: GridCoord) -> Room:
        if not self.in_bounds(column, row):
            raise IndexError(
                f"Room ({column}, {row}) outside {self.columns}x{self.rows} grid"
            )
        return self._rooms[row][column]

    def neighbor(self, room: Room, direction: Direction) -> Room | None:
        """Room one step in ``direction``, or None past the grid edge."""
        dc, dr = DIR_OFFSETS[direction]
        column, row = room.column + dc, room.row + dr
        if not self.in_bounds(column, row):
            return None
        return self._rooms[row][column]

    def open_door(self, room: Room, direction: Direction) -> None:
        """Open one side of a door. Callers keep the pair symmetric."""
        room.doors[direction] = True

    def connect(self, room: Room, direction: Direction) -> Room:
        """Open the door pair between ``room`` and its neighbor.

        Returns:
            The neighbor on the other side.

        Raises:
            IndexError: If there is no neighbor in that direction.
        """
        other = self.neighbor(room, direction)
        if other is None:
            raise IndexError(f"{room!r} has no neighbor to the {direction.name}")
        self.open_door(room, direction)
        self.open_door(other, opposite(direction))
        return other

    @property
    def start_room(self) -> Room | None:
        for room in self:
            if room.is_start:
                return room
        return None

    def open_door_pairs(self) -> int:
        """Number of undirected door connections."""
        # Count each pair once from its west/north member
        return sum(
            room.doors[Direction.EAST] + room.doors[Direction.SOUTH] for room in self
        )

    def is_symmetric(self) -> bool:
        for room in self:
            for direction in Direction:
                if not room.doors[direction]:
                    continue
                other = self.neighbor(room, direction)
                if other is None or not other.doors[opposite(direction)]:
                    return False
        return True

    def reachable_from(self, start: Room) -> set[GridPos]:
        """Grid positions reachable from ``start`` through open doors (BFS)."""
        seen = {start.pos}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for direction in Direction:
                if not current.doors[direction]:
                    continue
                other = self.neighbor(current, direction)
                if other is not None and other.pos not in seen:
                    seen.add(other.pos)
                    queue.append(other)
        return seen

    def is_connected(self) -> bool:
        start = self.start_room or self._rooms[0][0]
        return len(self.reachable_from(start)) == len(self)

    def render_ascii(self) -> str:
        """Debug drawing: ``+`` corners, ``-``/``|`` walls, ``S`` start room."""
        lines: list[str] = []
        for row in self._rooms:
            top = "+"
            middle = "|"
            for room in row:
                top += "   +" if room.doors[Direction.NORTH] else "---+"
                mark = "S" if room.is_start else " "
                middle += f" {mark} "
                middle += " " if room.doors[Direction.EAST] else "|"
            lines.extend([top, middle])
        lines.append("+" + "---+" * self.columns)
        return "\n".join(lines)
