import json

import pytest

from chesstiles.tileset.loader import TilesetLoader
from chesstiles.tileset.registry import TilesetRegistry

# The 12 tiles of ChessPieceObjects.tsx: blacks 0-5, whites 6-11,
# types alphabetical within each color.
CHESS_TILES = [
    (0, "black", "bishop", "bb.png"),
    (1, "black", "king", "bk.png"),
    (2, "black", "knight", "bn.png"),
    (3, "black", "pawn", "bp.png"),
    (4, "black", "queen", "bq.png"),
    (5, "black", "rook", "br.png"),
    (6, "white", "bishop", "wb.png"),
    (7, "white", "king", "wk.png"),
    (8, "white", "knight", "wn.png"),
    (9, "white", "pawn", "wp.png"),
    (10, "white", "queen", "wq.png"),
    (11, "white", "rook", "wr.png"),
]


def build_tsx(
    tiles=CHESS_TILES,
    tilewidth=64,
    tileheight=64,
    tilecount=None,
    name="ChessPieceObjects",
    color_first=False,
    sizes=None,
):
    """
    Render a TSX document.

    sizes maps tile id -> (width, height) for images that should differ from
    the tileset's tile size.
    """
    sizes = sizes or {}
    if tilecount is None:
        tilecount = len(tiles)

    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<tileset version="1.10" tiledversion="1.11.0" name="{name}" '
        f'tilewidth="{tilewidth}" tileheight="{tileheight}" tilecount="{tilecount}" columns="0">',
        ' <grid orientation="orthogonal" width="1" height="1"/>',
    ]
    for tile_id, color, piece_type, image in tiles:
        width, height = sizes.get(tile_id, (tilewidth, tileheight))
        props = [
            f'   <property name="type" value="{piece_type}"/>',
            f'   <property name="color" value="{color}"/>',
        ]
        if color_first:
            props.reverse()
        lines.append(f' <tile id="{tile_id}">')
        lines.append("  <properties>")
        lines.extend(props)
        lines.append("  </properties>")
        lines.append(f'  <image source="{image}" width="{width}" height="{height}"/>')
        lines.append(" </tile>")
    lines.append("</tileset>")
    return "\n".join(lines)


def build_tiled_json(tiles=CHESS_TILES, tilewidth=64, tileheight=64):
    return json.dumps(
        {
            "type": "tileset",
            "version": "1.10",
            "name": "ChessPieceObjects",
            "tilewidth": tilewidth,
            "tileheight": tileheight,
            "tilecount": len(tiles),
            "columns": 0,
            "tiles": [
                {
                    "id": tile_id,
                    "image": image,
                    "imagewidth": tilewidth,
                    "imageheight": tileheight,
                    "properties": [
                        {"name": "color", "type": "string", "value": color},
                        {"name": "type", "type": "string", "value": piece_type},
                    ],
                }
                for tile_id, color, piece_type, image in tiles
            ],
        }
    )


def build_normalized(tiles=CHESS_TILES, size=64):
    return {
        "name": "ChessPieceObjects",
        "tileWidth": size,
        "tileHeight": size,
        "tileCount": len(tiles),
        "tiles": [
            {
                "id": tile_id,
                "properties": {"type": piece_type, "color": color},
                "image": {"source": image, "width": size, "height": size},
            }
            for tile_id, color, piece_type, image in tiles
        ],
    }


@pytest.fixture
def make_tsx():
    return build_tsx


@pytest.fixture
def make_tiled_json():
    return build_tiled_json


@pytest.fixture
def make_normalized():
    return build_normalized


@pytest.fixture
def loader():
    return TilesetLoader()


@pytest.fixture
def tileset(loader):
    return loader.load(build_tsx())


@pytest.fixture
def registry(tileset):
    return TilesetRegistry.build(tileset)
