"""Pipeline generator that orchestrates layer-based map generation.

The PipelineGenerator runs a sequence of GenerationLayers, each transforming
a shared GenerationContext. This keeps each pass focused on one aspect of the
map while the context owns the buffers for the duration of the run.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .context import GeneratedMap, GenerationContext

if TYPE_CHECKING:
    from tilemaze.map_config import MapConfig
    from tilemaze.pieces.catalog import PieceCatalog
    from tilemaze.util.rng import RNG

    from .layer import GenerationLayer

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Map generator that runs layers sequentially on a shared context.

    Example:
        generator = PipelineGenerator(
            layers=[
                MazeTopologyLayer(),
                RoomPieceLayer(),
                ShadowLayer(),
                PropScatterLayer(),
            ],
            config=MapConfig(seed=12345),
        )
        generated = generator.generate()

    Attributes:
        layers: List of GenerationLayer instances to apply.
        config: Settings for every run of this generator.
        catalog: Piece lookup; None means the procedural catalog.
    """

    def __init__(
        self,
        layers: list[GenerationLayer],
        config: MapConfig,
        catalog: PieceCatalog | None = None,
    ) -> None:
        """Initialize the pipeline generator.

        Raises:
            ConfigurationError: If ``config`` is inconsistent.
        """
        config.validate()
        self.layers = layers
        self.config = config
        self.catalog = catalog

    def generate(self, rng: RNG | None = None) -> GeneratedMap:
        """Generate a map by running all layers in sequence.

        Args:
            rng: Random source for this run. Derived from the config seed
                when None.

        Returns:
            GeneratedMap with the finished layers, room graph and report.
        """
        settings = self.config
        logger.info(
            f"Generating {settings.columns}x{settings.rows} rooms of "
            f"{settings.room_width}x{settings.room_height} tiles "
            f"({len(self.layers)} layers)"
        )
        ctx = GenerationContext.create(settings, catalog=self.catalog, rng=rng)

        for layer in self.layers:
            layer.apply(ctx)

        generated = ctx.to_generated_map()
        logger.info(
            f"Generated {self.config.map_width}x{self.config.map_height} map: "
            f"{len(generated.graph)} rooms, {generated.report.props_placed} props"
        )
        return generated
