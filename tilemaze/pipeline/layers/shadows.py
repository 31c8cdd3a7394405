"""Shadow layer: darkens floor tiles next to walls."""

from __future__ import annotations

from tilemaze.pipeline.context import GenerationContext
from tilemaze.pipeline.layer import GenerationLayer


class ShadowLayer(GenerationLayer):
    """Writes ``wall + shadow_offset`` onto floor tiles bordering a wall."""

    def apply(self, ctx: GenerationContext) -> None:
        ctx.require_pieces()
        ctx.compositor.derive_shadows()
