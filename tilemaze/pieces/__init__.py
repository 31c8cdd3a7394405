"""Room pieces: the catalog contract and door-pattern based selection."""

from .catalog import (
    DictPieceCatalog,
    PieceCatalog,
    PieceVariation,
    build_procedural_catalog,
)
from .selector import (
    PIECE_TYPE_BY_PATTERN,
    PIECE_TYPES,
    InvalidDoorPatternError,
    PieceSelector,
    pack_door_pattern,
    piece_type_for,
    unpack_door_pattern,
)

__all__ = [
    "PIECE_TYPES",
    "PIECE_TYPE_BY_PATTERN",
    "DictPieceCatalog",
    "InvalidDoorPatternError",
    "PieceCatalog",
    "PieceSelector",
    "PieceVariation",
    "build_procedural_catalog",
    "pack_door_pattern",
    "piece_type_for",
    "unpack_door_pattern",
]
