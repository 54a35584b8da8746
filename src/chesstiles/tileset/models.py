from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from chesstiles.core.types import Color, PieceIdentity, PieceType


def _frozen_mapping(data: Optional[Mapping[str, str]] = None) -> Mapping[str, str]:
    return MappingProxyType(dict(data or {}))


@dataclass(frozen=True, slots=True)
class TileDefinition:
    """
    One <tile> entry as declared in the document.

    color and piece_type are the raw property strings; the registry
    normalizes them when it builds.
    """

    id: int
    color: str
    piece_type: str
    image_path: str
    width: int
    height: int
    properties: Mapping[str, str] = field(default_factory=_frozen_mapping, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.properties, MappingProxyType):
            object.__setattr__(self, "properties", _frozen_mapping(self.properties))


@dataclass(frozen=True, slots=True)
class Tileset:
    name: str
    tile_width: int
    tile_height: int
    tile_count: int
    tiles: Tuple[TileDefinition, ...]
    columns: Optional[int] = None
    version: Optional[str] = None

    @property
    def tile_size(self) -> Tuple[int, int]:
        return self.tile_width, self.tile_height


@dataclass(frozen=True, slots=True)
class PieceTile:
    """A validated tile: canonical piece identity plus the image it renders with."""

    id: int
    color: Color
    piece_type: PieceType
    image_path: str
    width: int
    height: int

    @property
    def identity(self) -> PieceIdentity:
        return self.color, self.piece_type

    @property
    def fen_letter(self) -> str:
        letter = self.piece_type.letter
        return letter.upper() if self.color == Color.WHITE else letter
