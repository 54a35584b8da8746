"""
Tileset loading, validation and lookup.
"""

from .errors import (
    CountMismatchError,
    DimensionMismatchError,
    DuplicateCombinationError,
    DuplicateIdError,
    MissingCombinationError,
    NotFoundError,
    ParseError,
    TilesetError,
    UnknownAttributeError,
    ValidationError,
    ValidationKind,
)
from .loader import TilesetLoader, load_tileset
from .models import PieceTile, TileDefinition, Tileset
from .registry import TilesetRegistry

__all__ = [
    "TilesetLoader",
    "load_tileset",
    "TilesetRegistry",
    "TileDefinition",
    "Tileset",
    "PieceTile",
    "TilesetError",
    "ParseError",
    "ValidationError",
    "ValidationKind",
    "CountMismatchError",
    "DimensionMismatchError",
    "DuplicateIdError",
    "UnknownAttributeError",
    "MissingCombinationError",
    "DuplicateCombinationError",
    "NotFoundError",
]
