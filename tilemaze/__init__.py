"""Grid-of-rooms maze generation for tile-based games.

Builds a connected room topology, stamps room pieces into a walls layer,
derives floor shadows and scatters props. The three finished layers are
plain uint32 arrays ready for an external serializer.

    from tilemaze import MapConfig, generate_map

    generated = generate_map(MapConfig(seed=1))
"""

from tilemaze.map_config import ConfigurationError, MapConfig
from tilemaze.pipeline import GeneratedMap, generate_map

__all__ = [
    "ConfigurationError",
    "GeneratedMap",
    "MapConfig",
    "generate_map",
]
