"""Pipeline-based maze map generation.

Each layer transforms a shared GenerationContext, and the pipeline returns a
GeneratedMap holding the three finished tile layers.

Example usage:
    from tilemaze.pipeline import generate_map

    generated = generate_map(MapConfig(seed=7))
    walls = generated.layers.walls

The pipeline can also be assembled manually:
    from tilemaze.pipeline import (
        PipelineGenerator,
        MazeTopologyLayer,
        RoomPieceLayer,
        ShadowLayer,
    )

    generator = PipelineGenerator(
        layers=[MazeTopologyLayer(), RoomPieceLayer(), ShadowLayer()],
        config=MapConfig(loops_enabled=False),
    )
"""

from .context import GeneratedMap, GenerationContext
from .factory import create_maze_pipeline, create_pipeline, generate_map
from .layer import GenerationLayer
from .layers import (
    MazeTopologyLayer,
    PropScatterLayer,
    RoomPieceLayer,
    ShadowLayer,
)
from .pipeline import PipelineGenerator

__all__ = [
    "GeneratedMap",
    "GenerationContext",
    "GenerationLayer",
    "MazeTopologyLayer",
    "PipelineGenerator",
    "PropScatterLayer",
    "RoomPieceLayer",
    "ShadowLayer",
    "create_maze_pipeline",
    "create_pipeline",
    "generate_map",
]
