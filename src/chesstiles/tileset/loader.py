"""
Tileset document loader.

Reads a Tiled tileset description into a Tileset value. Three shapes are
understood:

Tiled TSX (XML):
    <tileset name="..." tilewidth="64" tileheight="64" tilecount="12">
      <tile id="0">
        <properties>
          <property name="type" value="bishop"/>
          <property name="color" value="black"/>
        </properties>
        <image source="bb.png" width="64" height="64"/>
      </tile>
      ...
    </tileset>

Tiled JSON (.tsj):
    {"tilewidth": 64, "tileheight": 64, "tilecount": 12,
     "tiles": [{"id": 0, "image": "bb.png", "imagewidth": 64, "imageheight": 64,
                "properties": [{"name": "type", "value": "bishop"}, ...]}]}

Normalized mapping (dict or JSON text):
    {"name": ..., "tileWidth": 64, "tileHeight": 64, "tileCount": 12,
     "tiles": [{"id": 0, "properties": {"type": "bishop", "color": "black"},
                "image": {"source": "bb.png", "width": 64, "height": 64}}]}

Properties are looked up by name, so their order inside a tile does not
matter. Values are kept exactly as declared; case normalization is the
registry's job.
"""

from __future__ import annotations

import json
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from .errors import ParseError
from .models import TileDefinition, Tileset

logger = logging.getLogger(__name__)

Source = Union[str, bytes, Mapping[str, Any]]

TYPE_PROPERTY = "type"
COLOR_PROPERTY = "color"

_BOM_AND_SPACE = b"\xef\xbb\xbf \t\r\n"


def _parse_int(value: Any, what: str, minimum: int, tile_id: Optional[Any] = None) -> int:
    if isinstance(value, bool) or value is None:
        raise ParseError(f"{what} must be an integer, got {value!r}", tile_id)
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            raise ParseError(f"{what} must be an integer, got {value!r}", tile_id) from None
    else:
        raise ParseError(f"{what} must be an integer, got {value!r}", tile_id)

    if parsed < minimum:
        bound = "positive" if minimum == 1 else "non-negative"
        raise ParseError(f"{what} must be {bound}, got {parsed}", tile_id)
    return parsed


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _require_piece_properties(properties: Dict[str, str], tile_id: Any) -> None:
    for name in (TYPE_PROPERTY, COLOR_PROPERTY):
        if name not in properties:
            raise ParseError(f"missing required property {name!r}", tile_id)


class TilesetLoader:
    """
    Parses tileset documents into Tileset values.

    The loader keeps no state between calls; one instance can be reused or
    shared freely.
    """

    def load(self, source: Source) -> Tileset:
        """
        Parse a tileset from XML/JSON text or bytes, or from an already
        decoded mapping.

        Raises:
            ParseError: If the document is malformed or misses required fields
        """
        if isinstance(source, Mapping):
            return self.load_mapping(source)

        if isinstance(source, bytes):
            head = source.lstrip(_BOM_AND_SPACE)[:1].decode("ascii", "replace")
        elif isinstance(source, str):
            head = source.lstrip("\ufeff \t\r\n")[:1]
        else:
            raise ParseError(f"unsupported tileset source type: {type(source).__name__}")

        if head == "<":
            return self.load_xml(source)
        if head == "{":
            return self.load_json(source)
        raise ParseError("unrecognized tileset document (expected XML or JSON)")

    def load_file(self, path: Union[str, Path]) -> Tileset:
        """
        Read and parse a tileset file (.tsx or .tsj/.json).

        Raises:
            FileNotFoundError: If the file doesn't exist
            ParseError: If the file contents are not a valid tileset
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Tileset file not found: {path}")
        logger.debug("Reading tileset file %s", path)
        return self.load(path.read_bytes())

    # ------------------------------------------------------------------
    # XML (TSX)
    # ------------------------------------------------------------------

    def load_xml(self, text: Union[str, bytes]) -> Tileset:
        try:
            root = ET.fromstring(text)
        except ET.ParseError as exc:
            raise ParseError(f"malformed tileset XML: {exc}") from exc

        element = self._find_tileset_element(root)
        tile_width = _parse_int(element.get("tilewidth"), "tilewidth", 1)
        tile_height = _parse_int(element.get("tileheight"), "tileheight", 1)
        tile_count = _parse_int(element.get("tilecount"), "tilecount", 0)
        columns = element.get("columns")

        tiles = tuple(self._parse_xml_tile(tile) for tile in element.findall("tile"))
        logger.debug("Parsed TSX tileset %r: %d tile element(s)", element.get("name"), len(tiles))

        return Tileset(
            name=element.get("name", ""),
            tile_width=tile_width,
            tile_height=tile_height,
            tile_count=tile_count,
            tiles=tiles,
            columns=_parse_int(columns, "columns", 0) if columns is not None else None,
            version=element.get("version"),
        )

    @staticmethod
    def _find_tileset_element(root: ET.Element) -> ET.Element:
        if root.tag == "tileset":
            return root
        # A .tmx map may embed its tileset instead of referencing a .tsx file.
        if root.tag == "map":
            for child in root.findall("tileset"):
                if child.get("source") is None:
                    return child
        raise ParseError(f"missing <tileset> root element (found <{root.tag}>)")

    def _parse_xml_tile(self, tile: ET.Element) -> TileDefinition:
        raw_id = tile.get("id")
        tile_id = _parse_int(raw_id, "tile id", 0)

        properties: Dict[str, str] = {}
        props_el = tile.find("properties")
        if props_el is not None:
            for prop in props_el.findall("property"):
                name = prop.get("name")
                if name is None:
                    raise ParseError("property without a name", tile_id)
                # Multi-line string properties store their value as element text.
                value = prop.get("value")
                if value is None:
                    value = prop.text or ""
                properties[name.strip().lower()] = value
        _require_piece_properties(properties, tile_id)

        image = tile.find("image")
        if image is None:
            raise ParseError("missing <image> element", tile_id)
        source = image.get("source")
        if not source:
            raise ParseError("image has no source", tile_id)

        return TileDefinition(
            id=tile_id,
            color=properties[COLOR_PROPERTY],
            piece_type=properties[TYPE_PROPERTY],
            image_path=source,
            width=_parse_int(image.get("width"), "image width", 1, tile_id),
            height=_parse_int(image.get("height"), "image height", 1, tile_id),
            properties=properties,
        )

    # ------------------------------------------------------------------
    # JSON / mapping
    # ------------------------------------------------------------------

    def load_json(self, text: Union[str, bytes]) -> Tileset:
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise ParseError(f"malformed tileset JSON: {exc}") from exc
        if not isinstance(data, Mapping):
            raise ParseError("tileset JSON must be an object")
        return self.load_mapping(data)

    def load_mapping(self, data: Mapping[str, Any]) -> Tileset:
        """
        Build a Tileset from a decoded Tiled JSON or normalized mapping.

        Both the Tiled spelling (tilewidth, imagewidth, property lists) and the
        normalized spelling (tileWidth, nested image object, property dicts)
        are accepted.
        """
        root = data.get("tileset", data)
        if not isinstance(root, Mapping) or _first(root, "tilewidth", "tileWidth") is None:
            raise ParseError("missing tileset root (no tile width declared)")

        raw_tiles = root.get("tiles", [])
        if not isinstance(raw_tiles, list):
            raise ParseError("'tiles' must be a list")

        tiles = tuple(self._parse_mapping_tile(tile) for tile in raw_tiles)
        logger.debug("Parsed JSON tileset %r: %d tile object(s)", root.get("name"), len(tiles))

        columns = root.get("columns")
        version = root.get("version")
        return Tileset(
            name=str(root.get("name", "")),
            tile_width=_parse_int(_first(root, "tilewidth", "tileWidth"), "tilewidth", 1),
            tile_height=_parse_int(_first(root, "tileheight", "tileHeight"), "tileheight", 1),
            tile_count=_parse_int(_first(root, "tilecount", "tileCount"), "tilecount", 0),
            tiles=tiles,
            columns=_parse_int(columns, "columns", 0) if columns is not None else None,
            version=str(version) if version is not None else None,
        )

    def _parse_mapping_tile(self, tile: Any) -> TileDefinition:
        if not isinstance(tile, Mapping):
            raise ParseError(f"tile entry must be an object, got {tile!r}")
        tile_id = _parse_int(tile.get("id"), "tile id", 0)

        properties = self._mapping_properties(tile.get("properties"), tile_id)
        _require_piece_properties(properties, tile_id)

        image = tile.get("image")
        if isinstance(image, Mapping):
            source = image.get("source")
            width = image.get("width")
            height = image.get("height")
        else:
            source = image
            width = _first(tile, "imagewidth", "imageWidth")
            height = _first(tile, "imageheight", "imageHeight")
        if not source or not isinstance(source, str):
            raise ParseError("missing image source", tile_id)

        return TileDefinition(
            id=tile_id,
            color=properties[COLOR_PROPERTY],
            piece_type=properties[TYPE_PROPERTY],
            image_path=source,
            width=_parse_int(width, "image width", 1, tile_id),
            height=_parse_int(height, "image height", 1, tile_id),
            properties=properties,
        )

    @staticmethod
    def _mapping_properties(raw: Any, tile_id: int) -> Dict[str, str]:
        if raw is None:
            return {}

        pairs: List[tuple] = []
        if isinstance(raw, Mapping):
            pairs = list(raw.items())
        elif isinstance(raw, list):
            for prop in raw:
                if not isinstance(prop, Mapping) or "name" not in prop:
                    raise ParseError(f"malformed property entry {prop!r}", tile_id)
                pairs.append((prop["name"], prop.get("value")))
        else:
            raise ParseError("'properties' must be an object or a list", tile_id)

        properties: Dict[str, str] = {}
        for name, value in pairs:
            key = str(name).strip().lower()
            if isinstance(value, str):
                properties[key] = value
            elif key in (TYPE_PROPERTY, COLOR_PROPERTY):
                raise ParseError(f"property {key!r} must be a string, got {value!r}", tile_id)
            elif isinstance(value, bool):
                # Tiled's XML spelling for bool properties
                properties[key] = "true" if value else "false"
            else:
                properties[key] = str(value)
        return properties


def load_tileset(source: Source) -> Tileset:
    return TilesetLoader().load(source)
