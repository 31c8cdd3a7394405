"""
Configuration constants.

Default values for map generation. ``MapConfig`` fields fall back to these;
the generation components themselves take every value explicitly.
"""

from tilemaze.types import RandomSeed, TileID

# =============================================================================
# GENERAL
# =============================================================================

# None = fresh entropy per run. Set an int/str for reproducible maps.
RANDOM_SEED: RandomSeed = None

# Name of the single RNG stream consumed by a generation run
RNG_DOMAIN = "map.maze"

# =============================================================================
# ROOM GRID
# =============================================================================

ROOM_COLUMNS = 6
ROOM_ROWS = 6

# Size of one room piece in tiles
ROOM_WIDTH = 12
ROOM_HEIGHT = 12

# Width of the gap cut into a wall for an open door (procedural pieces)
DOOR_WIDTH = 2

# =============================================================================
# MAP
# =============================================================================

MAP_WIDTH = ROOM_COLUMNS * ROOM_WIDTH
MAP_HEIGHT = ROOM_ROWS * ROOM_HEIGHT

# =============================================================================
# TILE CATALOG
# =============================================================================

# Inclusive ID ranges. 0 is reserved for "empty".
WALL_TILE_FIRST: TileID = 1
WALL_TILE_LAST: TileID = 20

# shadow = wall + offset, so shadows occupy 21..40
SHADOW_OFFSET = 20

FLOOR_TILE_FIRST: TileID = 41
FLOOR_TILE_LAST: TileID = 48

PROP_TILE_FIRST: TileID = 49
PROP_TILE_LAST: TileID = 60

# Relative weight of the pillar variation against a plain room (1.0)
PILLAR_VARIATION_WEIGHT = 0.25

# =============================================================================
# GENERATION
# =============================================================================

# Upper bound on traversal steps. A full DFS takes 2 * rooms - 1 steps.
MAX_GENERATION_ITERATIONS = 5000

# Loop injection ("wacking"): extra door pairs after the spanning tree
LOOPS_ENABLED = True
LOOP_ITERATIONS = 35

# =============================================================================
# PROPS
# =============================================================================

# Stride of the sampling grid used for prop placement
DISTANCE_BETWEEN_PROPS = 5

# Radius searched for an existing prop before placing another
DISTANCE_BETWEEN_POOPS = 7
