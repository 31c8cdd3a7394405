"""Generation context for the maze pipeline.

The GenerationContext is a mutable container that holds all state during one
map generation. Each layer in the pipeline receives the same context and
modifies it in place, so the tile arrays are never copied between passes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tilemaze import config
from tilemaze.compositor.compositor import TileCompositor
from tilemaze.maze.generator import GenerationReport
from tilemaze.pieces.catalog import build_procedural_catalog
from tilemaze.pieces.selector import PieceSelector
from tilemaze.util.rng import RNGProvider

if TYPE_CHECKING:
    from tilemaze.compositor.compositor import MapLayers
    from tilemaze.map_config import MapConfig
    from tilemaze.maze.room_graph import RoomGraph
    from tilemaze.pieces.catalog import PieceCatalog
    from tilemaze.util.rng import RNG


@dataclass
class GeneratedMap:
    """Everything a generation run produces.

    Attributes:
        layers: Read-only background, walls and props layers.
        graph: The finished room topology.
        report: Generation statistics and anomalies.
    """

    layers: MapLayers
    graph: RoomGraph
    report: GenerationReport


@dataclass
class GenerationContext:
    """Mutable state container passed through the generation pipeline.

    Attributes:
        config: Validated settings for this run.
        rng: The single random stream every pass draws from, in order.
        catalog: Tile art lookup for door patterns.
        selector: Weighted variation picker over ``catalog``.
        compositor: Owner of the three tile layers.
        graph: Room topology, set by the maze layer.
        report: Generation statistics, set by the maze layer.
        pieces_injected: Whether room pieces are in the walls layer yet.
    """

    config: MapConfig
    rng: RNG
    catalog: PieceCatalog
    selector: PieceSelector
    compositor: TileCompositor
    graph: RoomGraph | None = None
    report: GenerationReport = field(default_factory=GenerationReport)
    pieces_injected: bool = False

    @classmethod
    def create(
        cls,
        map_config: MapConfig,
        catalog: PieceCatalog | None = None,
        rng: RNG | None = None,
    ) -> GenerationContext:
        """Create a fresh context with empty layers.

        Args:
            map_config: Settings for the run. Must already be validated.
            catalog: Piece lookup; a procedural wall-ring catalog if None.
            rng: Random source; derived from ``map_config.seed`` if None.

        Returns:
            A new GenerationContext ready for layer processing.
        """
        if rng is None:
            rng = RNGProvider(map_config.seed).get(config.RNG_DOMAIN)
        if catalog is None:
            catalog = build_procedural_catalog(
                map_config.room_width,
                map_config.room_height,
                map_config.tile_ranges,
            )

        compositor = TileCompositor(
            map_config.map_width,
            map_config.map_height,
            map_config.tile_ranges,
            rng,
        )

        return cls(
            config=map_config,
            rng=rng,
            catalog=catalog,
            selector=PieceSelector(catalog, rng),
            compositor=compositor,
        )

    def require_graph(self) -> RoomGraph:
        if self.graph is None:
            raise RuntimeError("Maze topology has not been generated yet")
        return self.graph

    def require_pieces(self) -> None:
        if not self.pieces_injected:
            raise RuntimeError("Room pieces must be injected before this pass")

    def to_generated_map(self) -> GeneratedMap:
        return GeneratedMap(
            layers=self.compositor.export(),
            graph=self.require_graph(),
            report=self.report,
        )
