"""Factory functions for creating pre-configured pipelines.

These functions provide convenient ways to create common pipeline
configurations without needing to manually assemble layers.

Currently implemented:
- "maze": Grid-of-rooms maze with wall pieces, shadows and props
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tilemaze.map_config import MapConfig

from .layers import MazeTopologyLayer, PropScatterLayer, RoomPieceLayer, ShadowLayer
from .pipeline import PipelineGenerator

if TYPE_CHECKING:
    from tilemaze.pieces.catalog import PieceCatalog

    from .context import GeneratedMap


def create_pipeline(
    name: str,
    config: MapConfig | None = None,
    catalog: PieceCatalog | None = None,
) -> PipelineGenerator:
    """Create a pre-configured pipeline by name.

    Available pipelines:
    - "maze": Room maze with shadows and props

    Args:
        name: Name of the pipeline configuration to use.
        config: Settings; ``MapConfig()`` defaults if None.
        catalog: Piece lookup; procedural pieces if None.

    Returns:
        A configured PipelineGenerator ready to generate maps.

    Raises:
        ValueError: If the pipeline name is not recognized.
    """
    if name == "maze":
        return create_maze_pipeline(config, catalog)
    raise ValueError(f"Unknown pipeline name: {name!r}")


def create_maze_pipeline(
    config: MapConfig | None = None,
    catalog: PieceCatalog | None = None,
) -> PipelineGenerator:
    """Create the maze pipeline.

    The maze pipeline generates:
    1. A connected room graph with a piece chosen per room (MazeTopologyLayer)
    2. Room pieces stamped into the walls layer (RoomPieceLayer)
    3. Floor shadows next to walls (ShadowLayer)
    4. Evenly spread props (PropScatterLayer)
    """
    layers = [
        MazeTopologyLayer(),
        # Must finish before the two passes that read the walls layer
        RoomPieceLayer(),
        ShadowLayer(),
        PropScatterLayer(),
    ]
    return PipelineGenerator(
        layers=layers,
        config=config if config is not None else MapConfig(),
        catalog=catalog,
    )


def generate_map(
    config: MapConfig | None = None,
    catalog: PieceCatalog | None = None,
) -> GeneratedMap:
    """Generate one maze map with the default pipeline."""
    return create_maze_pipeline(config, catalog).generate()
