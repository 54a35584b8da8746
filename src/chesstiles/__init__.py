"""
Chess piece tileset registry.

Loads Tiled tileset metadata for a chess piece sprite sheet, validates it,
and maps piece identities (color, type) to tiles and back.
"""

from .core.types import STANDARD_CHESS_PIECES, Color, PieceIdentity, PieceType
from .tileset import (
    NotFoundError,
    ParseError,
    PieceTile,
    TileDefinition,
    Tileset,
    TilesetError,
    TilesetLoader,
    TilesetRegistry,
    ValidationError,
    load_tileset,
)

__all__ = [
    "Color",
    "PieceType",
    "PieceIdentity",
    "STANDARD_CHESS_PIECES",
    "TileDefinition",
    "Tileset",
    "PieceTile",
    "TilesetLoader",
    "TilesetRegistry",
    "load_tileset",
    "TilesetError",
    "ParseError",
    "ValidationError",
    "NotFoundError",
]
