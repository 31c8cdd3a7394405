"""Prop layer for scattering decorations across open floor.

Props are placed on a fixed stride grid and skipped when another prop is
already close, giving a roughly even but random spread.
"""

from __future__ import annotations

from tilemaze.pipeline.context import GenerationContext
from tilemaze.pipeline.layer import GenerationLayer


class PropScatterLayer(GenerationLayer):
    """Scatters random prop tiles on walkable floor.

    Spacing defaults to the run's config so one pipeline definition can serve
    different map settings.
    """

    def __init__(
        self,
        spacing: int | None = None,
        min_distance: int | None = None,
    ) -> None:
        """Initialize the prop layer.

        Args:
            spacing: Stride of the sampling grid. None uses
                ``ctx.config.prop_spacing``.
            min_distance: Radius checked for existing props. None uses
                ``ctx.config.prop_min_distance``.
        """
        self.spacing = spacing
        self.min_distance = min_distance

    def apply(self, ctx: GenerationContext) -> None:
        ctx.require_pieces()
        spacing = self.spacing if self.spacing is not None else ctx.config.prop_spacing
        min_distance = (
            self.min_distance
            if self.min_distance is not None
            else ctx.config.prop_min_distance
        )
        placed = ctx.compositor.distribute_props(spacing, min_distance)
        ctx.report.props_placed = len(placed)
