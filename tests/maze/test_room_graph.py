"""Tests for rooms, directions and the room grid."""

from __future__ import annotations

import pytest

from tilemaze.maze import DIR_OFFSETS, Direction, Room, RoomGraph, opposite

# =============================================================================
# Direction / Room
# =============================================================================


class TestDirection:
    def test_door_slot_order(self) -> None:
        """North, East, South, West map to slots 0..3."""
        assert [int(d) for d in Direction] == [0, 1, 2, 3]
        assert Direction.NORTH == 0
        assert Direction.WEST == 3

    def test_opposite_pairs(self) -> None:
        assert opposite(Direction.NORTH) == Direction.SOUTH
        assert opposite(Direction.SOUTH) == Direction.NORTH
        assert opposite(Direction.EAST) == Direction.WEST
        assert opposite(Direction.WEST) == Direction.EAST

    def test_opposite_is_an_involution(self) -> None:
        for direction in Direction:
            assert opposite(opposite(direction)) == direction
            assert opposite(direction) != direction

    def test_offsets_cancel_for_opposites(self) -> None:
        for direction in Direction:
            dx, dy = DIR_OFFSETS[direction]
            ox, oy = DIR_OFFSETS[opposite(direction)]
            assert (dx + ox, dy + oy) == (0, 0)


class TestRoom:
    def test_new_room_is_empty(self) -> None:
        room = Room(2, 3)
        assert room.doors == [False, False, False, False]
        assert not room.visited
        assert not room.is_start
        assert room.resolved_piece is None
        assert room.pos == (2, 3)

    def test_rooms_do_not_share_door_lists(self) -> None:
        a, b = Room(0, 0), Room(1, 0)
        a.doors[Direction.EAST] = True
        assert b.doors == [False, False, False, False]

    @pytest.mark.parametrize(
        ("doors", "dead_end"),
        [
            ([False, False, False, False], False),
            ([True, False, False, False], True),
            ([False, False, False, True], True),
            ([True, True, False, False], False),
            ([True, True, True, True], False),
        ],
    )
    def test_dead_end_means_exactly_one_door(
        self, doors: list[bool], dead_end: bool
    ) -> None:
        room = Room(0, 0, doors=doors)
        assert room.is_dead_end is dead_end

    def test_door_pattern_is_a_tuple_snapshot(self) -> None:
        room = Room(0, 0, doors=[True, False, True, False])
        assert room.door_pattern == (True, False, True, False)
        assert room.open_door_count == 2


# =============================================================================
# RoomGraph
# =============================================================================


class TestRoomGraph:
    def test_allocates_empty_rooms(self) -> None:
        graph = RoomGraph(4, 3)

        assert len(graph) == 12
        assert all(not room.visited for room in graph)
        assert all(room.open_door_count == 0 for room in graph)
        assert graph.stack == []
        assert graph.start_room is None

    def test_iterates_in_raster_order(self) -> None:
        graph = RoomGraph(3, 2)
        positions = [room.pos for room in graph]
        assert positions == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]

    def test_rejects_empty_grid(self) -> None:
        with pytest.raises(ValueError):
            RoomGraph(0, 3)

    def test_room_out_of_bounds_raises(self) -> None:
        graph = RoomGraph(2, 2)
        with pytest.raises(IndexError):
            graph.room(2, 0)
        with pytest.raises(IndexError):
            graph.room(0, -1)

    def test_neighbor_steps(self) -> None:
        """North decrements row, East increments column, and so on."""
        graph = RoomGraph(3, 3)
        center = graph.room(1, 1)

        assert graph.neighbor(center, Direction.NORTH) is graph.room(1, 0)
        assert graph.neighbor(center, Direction.EAST) is graph.room(2, 1)
        assert graph.neighbor(center, Direction.SOUTH) is graph.room(1, 2)
        assert graph.neighbor(center, Direction.WEST) is graph.room(0, 1)

    def test_neighbor_past_edge_is_none(self) -> None:
        graph = RoomGraph(2, 2)
        corner = graph.room(0, 0)

        assert graph.neighbor(corner, Direction.NORTH) is None
        assert graph.neighbor(corner, Direction.WEST) is None
        assert graph.neighbor(graph.room(1, 1), Direction.EAST) is None
        assert graph.neighbor(graph.room(1, 1), Direction.SOUTH) is None

    def test_open_door_sets_only_one_side(self) -> None:
        graph = RoomGraph(2, 1)
        left, right = graph.room(0, 0), graph.room(1, 0)

        graph.open_door(left, Direction.EAST)

        assert left.doors[Direction.EAST]
        assert not right.doors[Direction.WEST]
        assert not graph.is_symmetric()

    def test_connect_opens_both_sides(self) -> None:
        graph = RoomGraph(2, 2)
        top = graph.room(0, 0)

        bottom = graph.connect(top, Direction.SOUTH)

        assert bottom is graph.room(0, 1)
        assert top.doors[Direction.SOUTH]
        assert bottom.doors[Direction.NORTH]
        assert graph.is_symmetric()
        assert graph.open_door_pairs() == 1

    def test_connect_past_edge_raises(self) -> None:
        graph = RoomGraph(2, 2)
        with pytest.raises(IndexError):
            graph.connect(graph.room(0, 0), Direction.NORTH)

    def test_reachable_from_follows_open_doors(self) -> None:
        graph = RoomGraph(3, 1)
        graph.connect(graph.room(0, 0), Direction.EAST)

        assert graph.reachable_from(graph.room(0, 0)) == {(0, 0), (1, 0)}
        assert not graph.is_connected()

        graph.connect(graph.room(1, 0), Direction.EAST)
        assert graph.is_connected()

    def test_render_ascii_shows_doors_and_start(self) -> None:
        graph = RoomGraph(2, 1)
        graph.room(0, 0).is_start = True
        graph.connect(graph.room(0, 0), Direction.EAST)

        assert graph.render_ascii() == "\n".join(
            [
                "+---+---+",
                "| S     |",
                "+---+---+",
            ]
        )
