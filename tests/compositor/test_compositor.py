"""Tests for layer injection, shadow derivation and prop distribution."""

from __future__ import annotations

import random

import numpy as np
import pytest

from tilemaze.compositor import (
    EMPTY_TILE,
    Layer,
    TileBoundsError,
    TileCompositor,
    TileRanges,
)
from tilemaze.maze import MazeGenerator
from tilemaze.pieces import DictPieceCatalog, PieceSelector
from tilemaze.util.coordinates import chebyshev_distance


@pytest.fixture
def compositor(tile_ranges: TileRanges, rng: random.Random) -> TileCompositor:
    return TileCompositor(8, 6, tile_ranges, rng)


class TestLayers:
    def test_initial_layers(self, compositor: TileCompositor) -> None:
        assert compositor.background.shape == (48,)
        assert compositor.background.dtype == np.uint32
        assert np.all(compositor.background == compositor.tile_ranges.floors.first)
        assert not compositor.walls.any()
        assert not compositor.props.any()

    def test_grid_is_a_view_of_the_flat_layer(self, compositor: TileCompositor) -> None:
        compositor.grid(Layer.WALLS)[2, 3] = 7
        assert compositor.walls[2 * 8 + 3] == 7
        assert compositor.get_tile(Layer.WALLS, 3, 2) == 7

    def test_set_tile_is_row_major(self, compositor: TileCompositor) -> None:
        compositor.set_tile(Layer.PROPS, 7, 5, 50)
        assert compositor.props[47] == 50

    @pytest.mark.parametrize(("x", "y"), [(-1, 0), (8, 0), (0, 6), (0, -1)])
    def test_out_of_bounds_access_raises(
        self, compositor: TileCompositor, x: int, y: int
    ) -> None:
        with pytest.raises(TileBoundsError):
            compositor.get_tile(Layer.BACKGROUND, x, y)
        with pytest.raises(IndexError):
            compositor.set_tile(Layer.WALLS, x, y, 1)

    def test_empty_map_rejected(self, tile_ranges: TileRanges) -> None:
        with pytest.raises(ValueError):
            TileCompositor(0, 4, tile_ranges, random.Random(0))


# =============================================================================
# Injection
# =============================================================================


class TestInject:
    def test_zeros_do_not_overwrite(self, tile_ranges: TileRanges) -> None:
        compositor = TileCompositor(2, 2, tile_ranges, random.Random(0))
        compositor.walls[:] = 9

        compositor.inject(Layer.WALLS, np.array([0, 5, 0, 7]), 0, 0, 2, 2)

        assert compositor.walls.tolist() == [9, 5, 9, 7]

    def test_all_zero_fragment_is_a_noop(self, compositor: TileCompositor) -> None:
        compositor.walls[:] = np.arange(48, dtype=np.uint32)
        before = compositor.walls.copy()
        empty = np.zeros(6, dtype=np.uint32)

        for origin_y in range(0, 4):
            for origin_x in range(0, 7):
                compositor.inject(Layer.WALLS, empty, origin_x, origin_y, 2, 3)
                assert np.array_equal(compositor.walls, before)

    def test_fragment_lands_at_origin(self, compositor: TileCompositor) -> None:
        fragment = np.array([1, 2, 3, 4, 5, 6], dtype=np.uint32)
        compositor.inject(Layer.WALLS, fragment, 5, 4, 3, 2)

        grid = compositor.grid(Layer.WALLS)
        assert grid[4, 5:8].tolist() == [1, 2, 3]
        assert grid[5, 5:8].tolist() == [4, 5, 6]
        assert np.count_nonzero(compositor.walls) == 6

    @pytest.mark.parametrize(
        ("origin_x", "origin_y"), [(-1, 0), (0, -1), (7, 0), (0, 5), (7, 5)]
    )
    def test_fragment_past_edge_raises(
        self, compositor: TileCompositor, origin_x: int, origin_y: int
    ) -> None:
        fragment = np.ones(4, dtype=np.uint32)
        with pytest.raises(TileBoundsError):
            compositor.inject(Layer.WALLS, fragment, origin_x, origin_y, 2, 2)
        assert not compositor.walls.any()

    def test_fragment_size_mismatch_raises(self, compositor: TileCompositor) -> None:
        with pytest.raises(ValueError, match="expected 2x2"):
            compositor.inject(Layer.WALLS, np.ones(5), 0, 0, 2, 2)

    def test_inject_rooms_places_each_resolved_piece(
        self,
        tile_ranges: TileRanges,
        procedural_catalog: DictPieceCatalog,
    ) -> None:
        rng = random.Random(17)
        selector = PieceSelector(procedural_catalog, rng)
        graph = MazeGenerator(3, 2, rng, selector=selector).generate()
        compositor = TileCompositor(36, 24, tile_ranges, rng)

        assert compositor.inject_rooms(graph, 12, 12) == 6

        grid = compositor.grid(Layer.WALLS)
        for room in graph:
            block = grid[
                room.row * 12 : (room.row + 1) * 12,
                room.column * 12 : (room.column + 1) * 12,
            ]
            assert np.array_equal(
                block.ravel(), room.resolved_piece.tile_data
            )

    def test_inject_rooms_skips_unresolved(
        self, tile_ranges: TileRanges, rng: random.Random
    ) -> None:
        graph = MazeGenerator(2, 2, rng).generate()
        compositor = TileCompositor(24, 24, tile_ranges, rng)

        assert compositor.inject_rooms(graph, 12, 12) == 0
        assert not compositor.walls.any()


# =============================================================================
# Shadows
# =============================================================================


class TestShadows:
    def test_floor_next_to_wall_gets_shadow(self, compositor: TileCompositor) -> None:
        compositor.set_tile(Layer.WALLS, 3, 2, 4)

        compositor.derive_shadows()

        # East of the wall sees it to the west, south of it sees it to the north
        assert compositor.get_tile(Layer.BACKGROUND, 4, 2) == 24
        assert compositor.get_tile(Layer.BACKGROUND, 3, 3) == 24
        assert compositor.get_tile(Layer.BACKGROUND, 2, 2) == 24
        assert compositor.get_tile(Layer.BACKGROUND, 3, 1) == 24
        # Diagonals are not neighbours
        assert compositor.get_tile(Layer.BACKGROUND, 4, 3) == 41

    def test_west_wins_over_north(self, compositor: TileCompositor) -> None:
        compositor.set_tile(Layer.WALLS, 0, 1, 3)  # west of (1, 1)
        compositor.set_tile(Layer.WALLS, 1, 0, 5)  # north of (1, 1)

        compositor.derive_shadows()

        assert compositor.get_tile(Layer.BACKGROUND, 1, 1) == 23

    def test_north_wins_over_east_and_south(self, compositor: TileCompositor) -> None:
        compositor.set_tile(Layer.WALLS, 4, 1, 6)  # north of (4, 2)
        compositor.set_tile(Layer.WALLS, 5, 2, 7)  # east
        compositor.set_tile(Layer.WALLS, 4, 3, 8)  # south

        compositor.derive_shadows()

        assert compositor.get_tile(Layer.BACKGROUND, 4, 2) == 26

    def test_wall_tiles_keep_their_background(
        self, compositor: TileCompositor
    ) -> None:
        compositor.set_tile(Layer.WALLS, 1, 1, 2)
        compositor.set_tile(Layer.WALLS, 2, 1, 2)

        compositor.derive_shadows()

        assert compositor.get_tile(Layer.BACKGROUND, 1, 1) == 41
        assert compositor.get_tile(Layer.BACKGROUND, 2, 1) == 41

    def test_map_edge_is_not_a_wall(self, compositor: TileCompositor) -> None:
        written = compositor.derive_shadows()
        assert written == 0
        assert np.all(compositor.background == 41)

    def test_non_floor_background_is_left_alone(self, tile_ranges: TileRanges) -> None:
        compositor = TileCompositor(3, 1, tile_ranges, random.Random(0), 0)
        compositor.set_tile(Layer.WALLS, 0, 0, 1)

        assert compositor.derive_shadows() == 0
        assert compositor.background.tolist() == [0, 0, 0]

    def test_shadows_are_deterministic_and_idempotent(
        self, tile_ranges: TileRanges, procedural_catalog: DictPieceCatalog
    ) -> None:
        rng = random.Random(5)
        graph = MazeGenerator(
            3, 3, rng, selector=PieceSelector(procedural_catalog, rng)
        ).generate()

        first = TileCompositor(36, 36, tile_ranges, random.Random(0))
        second = TileCompositor(36, 36, tile_ranges, random.Random(1))
        for compositor in (first, second):
            compositor.inject_rooms(graph, 12, 12)
            assert compositor.derive_shadows() > 0

        assert np.array_equal(first.background, second.background)
        assert first.derive_shadows() == 0

    def test_shadow_ids_mirror_wall_ids(
        self, tile_ranges: TileRanges, compositor: TileCompositor
    ) -> None:
        compositor.grid(Layer.WALLS)[0, :] = np.arange(1, 9, dtype=np.uint32)

        compositor.derive_shadows()

        row_below = compositor.grid(Layer.BACKGROUND)[1]
        walls = compositor.grid(Layer.WALLS)[0]
        # Row 1 has no walls, so every tile takes the wall north of it
        assert row_below.tolist() == [w + tile_ranges.shadow_offset for w in walls]


# =============================================================================
# Props
# =============================================================================


class TestProps:
    def test_walkable_mask(self, compositor: TileCompositor) -> None:
        compositor.set_tile(Layer.WALLS, 2, 2, 1)
        compositor.derive_shadows()
        mask = compositor.walkable_mask()

        assert not mask[2, 2]
        assert mask[2, 3]  # shadow tile
        assert mask[0, 0]

    def test_props_are_spaced_apart(self, tile_ranges: TileRanges) -> None:
        compositor = TileCompositor(30, 30, tile_ranges, random.Random(2))
        placed = compositor.distribute_props(spacing=2, min_distance=3)

        assert len(placed) > 1
        for i, first in enumerate(placed):
            for second in placed[i + 1 :]:
                assert chebyshev_distance(first, second) > 3

    def test_props_use_prop_range_on_walkable_tiles(
        self, tile_ranges: TileRanges, procedural_catalog: DictPieceCatalog
    ) -> None:
        rng = random.Random(9)
        graph = MazeGenerator(
            3, 3, rng, selector=PieceSelector(procedural_catalog, rng)
        ).generate()
        compositor = TileCompositor(36, 36, tile_ranges, rng)
        compositor.inject_rooms(graph, 12, 12)
        compositor.derive_shadows()
        walkable = compositor.walkable_mask()

        placed = compositor.distribute_props(spacing=5, min_distance=7)

        props = compositor.grid(Layer.PROPS)
        assert placed
        for x, y in placed:
            assert walkable[y, x]
            assert tile_ranges.props.contains(int(props[y, x]))
        assert np.count_nonzero(props) == len(placed)
        for i, first in enumerate(placed):
            for second in placed[i + 1 :]:
                assert chebyshev_distance(first, second) > 7

    def test_samples_follow_stride(self, tile_ranges: TileRanges) -> None:
        compositor = TileCompositor(20, 20, tile_ranges, random.Random(4))
        placed = compositor.distribute_props(spacing=5, min_distance=0)

        assert placed == [(x, y) for y in range(0, 20, 5) for x in range(0, 20, 5)]

    def test_no_walkable_tiles_no_props(self, tile_ranges: TileRanges) -> None:
        compositor = TileCompositor(10, 10, tile_ranges, random.Random(0), 0)
        assert compositor.distribute_props(spacing=1, min_distance=0) == []
        assert np.all(compositor.props == EMPTY_TILE)

    @pytest.mark.parametrize(("spacing", "distance"), [(0, 1), (1, -1)])
    def test_invalid_prop_settings(
        self, compositor: TileCompositor, spacing: int, distance: int
    ) -> None:
        with pytest.raises(ValueError):
            compositor.distribute_props(spacing, distance)


# =============================================================================
# Export
# =============================================================================


class TestExport:
    def test_export_is_a_readonly_copy(self, compositor: TileCompositor) -> None:
        compositor.set_tile(Layer.WALLS, 1, 1, 3)
        layers = compositor.export()

        assert layers.width == 8
        assert layers.height == 6
        assert layers.grid(Layer.WALLS)[1, 1] == 3
        with pytest.raises(ValueError):
            layers.walls[0] = 1

        compositor.set_tile(Layer.WALLS, 1, 1, 4)
        assert layers.layer(Layer.WALLS)[9] == 3
