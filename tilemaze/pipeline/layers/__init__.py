"""Generation layers for the maze pipeline.

Each layer transforms the GenerationContext in a specific way:
- Topology layer: Builds the connected room graph and resolves pieces
- Piece layer: Writes room art into the walls layer
- Shadow layer: Derives floor shadows from wall adjacency
- Prop layer: Scatters decorations with spacing constraints
"""

from .maze import MazeTopologyLayer
from .pieces import RoomPieceLayer
from .props import PropScatterLayer
from .shadows import ShadowLayer

__all__ = [
    "MazeTopologyLayer",
    "PropScatterLayer",
    "RoomPieceLayer",
    "ShadowLayer",
]
