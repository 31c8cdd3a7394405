"""Abstract base class for generation layers.

Each layer in the pipeline implements the GenerationLayer interface and
transforms the GenerationContext in some way: building the room topology,
writing room pieces, deriving shadows, or scattering props.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .context import GenerationContext


class GenerationLayer(ABC):
    """Abstract base class for map generation layers.

    Layers are applied sequentially by the PipelineGenerator. Each layer
    receives a GenerationContext and modifies it in place.
    """

    @abstractmethod
    def apply(self, ctx: GenerationContext) -> None:
        """Apply this layer's generation logic to the context.

        This method may:
        - Build or change the room graph (ctx.graph)
        - Write tiles through ctx.compositor
        - Draw from ctx.rng, in pipeline order

        Args:
            ctx: The generation context to modify.
        """
        raise NotImplementedError
