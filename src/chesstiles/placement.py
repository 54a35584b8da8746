"""
FEN -> Tiled piece layer.

Turns the piece-placement field of a FEN into tile objects for a Tiled map
"Piece Layer", using a registry to pick each piece's tile.

Tiled anchors tile objects at their bottom-left corner, so the piece on the
first FEN rank (rank 8, the top row) sits at y = 1 * tile_height and the
last rank at y = 8 * tile_height.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import List, Tuple

from chesstiles.core.types import Color, PieceType, identity_from_letter
from chesstiles.tileset.registry import TilesetRegistry

PIECE_LAYER_NAME = "Piece Layer"

# (square, color, piece type); square uses a1=0 .. h8=63
Placement = Tuple[int, Color, PieceType]


def parse_placement(fen: str) -> List[Placement]:
    """
    Parse the piece-placement field of a FEN.

    Accepts a full FEN ("... w KQkq - 0 1") or the placement field alone.
    Pieces are returned in FEN order: rank 8 to rank 1, file a to h.
    """
    fields = fen.strip().split()
    if not fields:
        raise ValueError(f"empty FEN: {fen!r}")

    ranks = fields[0].split("/")
    if len(ranks) != 8:
        raise ValueError(f"invalid FEN ranks: {fen!r}")

    placements: List[Placement] = []
    for fen_rank_idx, rank_str in enumerate(ranks):
        rank = 7 - fen_rank_idx  # FEN rank 8..1 -> internal rank 7..0
        file = 0
        for ch in rank_str:
            if ch.isdigit():
                file += int(ch)
                continue

            identity = identity_from_letter(ch)
            if identity is None:
                raise ValueError(f"invalid FEN piece: {ch!r}")
            if not (0 <= file < 8):
                raise ValueError(f"invalid FEN file overflow: {fen!r}")
            color, pt = identity
            placements.append((rank * 8 + file, color, pt))
            file += 1

        if file != 8:
            raise ValueError(f"invalid FEN rank width: {fen!r}")

    return placements


@dataclass(frozen=True, slots=True)
class PieceObject:
    """One <object> of a Tiled object layer."""

    object_id: int
    gid: int
    x: int
    y: int
    width: int
    height: int
    color: Color
    piece_type: PieceType


def piece_layer(registry: TilesetRegistry, fen: str, first_gid: int = 1) -> List[PieceObject]:
    """
    Build the piece objects for a position.

    Args:
        registry: Tile lookup for the piece tileset
        fen: FEN, or just its placement field
        first_gid: The tileset's firstgid in the target map

    Raises:
        ValueError: If the FEN placement is malformed
        NotFoundError: If a piece has no tile in the registry
    """
    if first_gid < 1:
        raise ValueError(f"first_gid must be >= 1, got {first_gid}")

    tile_w, tile_h = registry.tile_size
    objects: List[PieceObject] = []
    for object_id, (sq, color, pt) in enumerate(parse_placement(fen), start=1):
        tile = registry.resolve(color, pt)
        rank, file = divmod(sq, 8)
        objects.append(
            PieceObject(
                object_id=object_id,
                gid=first_gid + tile.id,
                x=file * tile_w,
                y=(8 - rank) * tile_h,
                width=tile.width,
                height=tile.height,
                color=color,
                piece_type=pt,
            )
        )
    return objects


def piece_layer_element(
    registry: TilesetRegistry,
    fen: str,
    first_gid: int = 1,
    layer_id: int = 2,
) -> ET.Element:
    """<objectgroup> element holding one tile object per piece."""
    group = ET.Element("objectgroup", {"id": str(layer_id), "name": PIECE_LAYER_NAME})
    for obj in piece_layer(registry, fen, first_gid=first_gid):
        el = ET.SubElement(
            group,
            "object",
            {
                "id": str(obj.object_id),
                "gid": str(obj.gid),
                "x": str(obj.x),
                "y": str(obj.y),
                "width": str(obj.width),
                "height": str(obj.height),
            },
        )
        props = ET.SubElement(el, "properties")
        ET.SubElement(props, "property", {"name": "type", "value": obj.piece_type.label})
        ET.SubElement(props, "property", {"name": "color", "value": obj.color.label})
    return group


def piece_layer_xml(registry: TilesetRegistry, fen: str, first_gid: int = 1) -> str:
    group = piece_layer_element(registry, fen, first_gid=first_gid)
    ET.indent(group, space=" ")
    return ET.tostring(group, encoding="unicode")
