"""Room piece layer: stamps each room's tile art into the walls layer."""

from __future__ import annotations

from tilemaze.pipeline.context import GenerationContext
from tilemaze.pipeline.layer import GenerationLayer


class RoomPieceLayer(GenerationLayer):
    """Injects resolved pieces at ``(column * room_width, row * room_height)``.

    Must run before ShadowLayer and PropScatterLayer, which read the finished
    walls layer.
    """

    def apply(self, ctx: GenerationContext) -> None:
        graph = ctx.require_graph()
        settings = ctx.config
        ctx.compositor.inject_rooms(graph, settings.room_width, settings.room_height)
        ctx.pieces_injected = True
