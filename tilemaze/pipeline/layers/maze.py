"""Room topology layer: runs the maze generator and resolves room pieces."""

from __future__ import annotations

from tilemaze.maze.generator import MazeGenerator
from tilemaze.pipeline.context import GenerationContext
from tilemaze.pipeline.layer import GenerationLayer


class MazeTopologyLayer(GenerationLayer):
    """Builds the connected room graph and picks a piece for every room.

    Piece selection happens inside the generator's finalizing phase so the
    random draws stay in the order traversal, repair, loops, variations.
    """

    def apply(self, ctx: GenerationContext) -> None:
        settings = ctx.config
        generator = MazeGenerator(
            settings.columns,
            settings.rows,
            ctx.rng,
            max_iterations=settings.max_iterations,
            loops_enabled=settings.loops_enabled,
            loop_iterations=settings.loop_iterations,
            selector=ctx.selector,
        )
        ctx.graph = generator.generate()
        ctx.report = generator.report
