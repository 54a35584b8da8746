"""
Validated, indexed view of a Tileset.

Build order (the first failing check is the one reported):
    1. tile count matches the declared tilecount
    2. every image matches the tileset's tile size
    3. tile ids are unique
    4. color / type strings name a known Color / PieceType (any case)
    5. every required piece identity appears, and none appears twice

Once built, a registry is never mutated; readers can share it without locks.
To reload, build a new registry and swap the reference.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import AbstractSet, Dict, Iterator, List, Mapping, Tuple, Union

from chesstiles.core.types import (
    STANDARD_CHESS_PIECES,
    Color,
    PieceIdentity,
    PieceType,
    identity_to_str,
)

from .errors import (
    CountMismatchError,
    DimensionMismatchError,
    DuplicateCombinationError,
    DuplicateIdError,
    MissingCombinationError,
    NotFoundError,
    UnknownAttributeError,
    ValidationError,
)
from .models import PieceTile, TileDefinition, Tileset

logger = logging.getLogger(__name__)


def _coerce_color(color: Union[Color, str]) -> Color:
    if isinstance(color, Color):
        return color
    parsed = Color.from_name(color) if isinstance(color, str) else None
    if parsed is None:
        raise NotFoundError(f"unknown color: {color!r}")
    return parsed


def _coerce_piece_type(piece_type: Union[PieceType, str]) -> PieceType:
    if isinstance(piece_type, PieceType):
        return piece_type
    parsed = PieceType.from_name(piece_type) if isinstance(piece_type, str) else None
    if parsed is None:
        raise NotFoundError(f"unknown piece type: {piece_type!r}")
    return parsed


class TilesetRegistry:
    """
    Bidirectional O(1) lookup between piece identities and tiles.

    Create with TilesetRegistry.build(); the constructor is not meant to be
    called directly.
    """

    __slots__ = ("_name", "_tile_size", "_by_identity", "_by_id")

    def __init__(
        self,
        name: str,
        tile_size: Tuple[int, int],
        by_identity: Dict[PieceIdentity, PieceTile],
        by_id: Dict[int, PieceTile],
    ) -> None:
        self._name = name
        self._tile_size = tile_size
        self._by_identity: Mapping[PieceIdentity, PieceTile] = MappingProxyType(by_identity)
        self._by_id: Mapping[int, PieceTile] = MappingProxyType(by_id)

    @classmethod
    def build(
        cls,
        tileset: Tileset,
        required: AbstractSet[PieceIdentity] = STANDARD_CHESS_PIECES,
    ) -> "TilesetRegistry":
        """
        Validate a tileset and index it.

        Args:
            tileset: Parsed tileset (see TilesetLoader)
            required: Piece identities the target game needs; each must be
                present exactly once. Defaults to the 12 standard chess pieces.

        Raises:
            ValidationError: One of its subclasses, for the first failed check
        """
        try:
            _check_count(tileset)
            _check_dimensions(tileset)
            _check_unique_ids(tileset)
            pieces = [_normalize(tile) for tile in tileset.tiles]
            by_identity = _index_identities(pieces, required)
        except ValidationError as exc:
            logger.warning("Tileset %r rejected: %s", tileset.name, exc)
            raise

        by_id = {tile.id: tile for tile in sorted(pieces, key=lambda t: t.id)}
        logger.info(
            "Built tile registry %r: %d tile(s), %dx%d",
            tileset.name,
            len(by_id),
            tileset.tile_width,
            tileset.tile_height,
        )
        return cls(tileset.name, tileset.tile_size, by_identity, by_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def resolve(self, color: Union[Color, str], piece_type: Union[PieceType, str]) -> PieceTile:
        """
        Tile for a piece identity. Names are accepted in any case.

        Raises:
            NotFoundError: If the identity is not in this tileset
        """
        identity = (_coerce_color(color), _coerce_piece_type(piece_type))
        try:
            return self._by_identity[identity]
        except KeyError:
            raise NotFoundError(f"no tile for {identity_to_str(identity)}") from None

    def resolve_by_id(self, tile_id: int) -> PieceTile:
        """
        Raises:
            NotFoundError: If no tile has this id
        """
        # True == 1, but bools are never tile ids
        if isinstance(tile_id, bool):
            raise NotFoundError(f"no tile with id {tile_id!r}")
        try:
            return self._by_id[tile_id]
        except (KeyError, TypeError):
            raise NotFoundError(f"no tile with id {tile_id!r}") from None

    @property
    def name(self) -> str:
        return self._name

    @property
    def tile_size(self) -> Tuple[int, int]:
        return self._tile_size

    @property
    def by_identity(self) -> Mapping[PieceIdentity, PieceTile]:
        return self._by_identity

    @property
    def by_id(self) -> Mapping[int, PieceTile]:
        return self._by_id

    def identities(self) -> List[PieceIdentity]:
        return sorted(self._by_identity)

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[PieceTile]:
        return iter(self._by_id.values())

    def __contains__(self, identity: object) -> bool:
        return identity in self._by_identity

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TilesetRegistry):
            return NotImplemented
        return (
            self._name == other._name
            and self._tile_size == other._tile_size
            and dict(self._by_id) == dict(other._by_id)
            and dict(self._by_identity) == dict(other._by_identity)
        )

    def __repr__(self) -> str:
        return f"TilesetRegistry(name={self._name!r}, tiles={len(self._by_id)})"


# =============================================================================
# Validation steps
# =============================================================================

def _check_count(tileset: Tileset) -> None:
    if len(tileset.tiles) != tileset.tile_count:
        raise CountMismatchError(
            f"tilecount is {tileset.tile_count} but {len(tileset.tiles)} tile(s) are declared",
            expected=tileset.tile_count,
            actual=len(tileset.tiles),
        )


def _check_dimensions(tileset: Tileset) -> None:
    expected = tileset.tile_size
    for tile in tileset.tiles:
        if (tile.width, tile.height) != expected:
            raise DimensionMismatchError(
                f"tile {tile.id} is {tile.width}x{tile.height}, "
                f"expected {expected[0]}x{expected[1]}",
                tile_id=tile.id,
                expected=expected,
                actual=(tile.width, tile.height),
            )


def _check_unique_ids(tileset: Tileset) -> None:
    seen = set()
    for tile in tileset.tiles:
        if tile.id in seen:
            raise DuplicateIdError(f"tile id {tile.id} is declared more than once", tile_id=tile.id)
        seen.add(tile.id)


def _normalize(tile: TileDefinition) -> PieceTile:
    color = Color.from_name(tile.color)
    if color is None:
        raise UnknownAttributeError(
            f"tile {tile.id} has unknown color {tile.color!r}",
            tile_id=tile.id,
            attribute="color",
            value=tile.color,
        )
    piece_type = PieceType.from_name(tile.piece_type)
    if piece_type is None:
        raise UnknownAttributeError(
            f"tile {tile.id} has unknown type {tile.piece_type!r}",
            tile_id=tile.id,
            attribute="type",
            value=tile.piece_type,
        )
    return PieceTile(
        id=tile.id,
        color=color,
        piece_type=piece_type,
        image_path=tile.image_path,
        width=tile.width,
        height=tile.height,
    )


def _index_identities(
    pieces: List[PieceTile],
    required: AbstractSet[PieceIdentity],
) -> Dict[PieceIdentity, PieceTile]:
    by_identity: Dict[PieceIdentity, PieceTile] = {}
    duplicates: List[Tuple[PieceTile, PieceTile]] = []
    for piece in pieces:
        previous = by_identity.get(piece.identity)
        if previous is not None:
            duplicates.append((previous, piece))
            continue
        by_identity[piece.identity] = piece

    # A relabelled tile leaves one identity missing and another doubled;
    # the missing one is what gets reported.
    missing = sorted(set(required).difference(by_identity))
    if missing:
        names = ", ".join(identity_to_str(identity) for identity in missing)
        raise MissingCombinationError(f"no tile for {names}", missing=tuple(missing))

    if duplicates:
        previous, piece = duplicates[0]
        raise DuplicateCombinationError(
            f"{identity_to_str(piece.identity)} is declared by tiles "
            f"{previous.id} and {piece.id}",
            identity=piece.identity,
            tile_ids=(previous.id, piece.id),
        )
    return by_identity
