"""
pygame surfaces for a tile registry.

The registry only knows image paths; this is the piece of the rendering side
that turns them into surfaces, keyed the same way the registry is.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Union

import pygame

from chesstiles.config import TilesetConfig
from chesstiles.core.types import PieceIdentity
from chesstiles.tileset.registry import TilesetRegistry

logger = logging.getLogger(__name__)


def _has_display_surface() -> bool:
    return pygame.display.get_init() and pygame.display.get_surface() is not None


def load_piece_surfaces(
    registry: TilesetRegistry,
    image_dir: Union[str, Path],
    size: Optional[int] = None,
    strict: bool = False,
) -> Dict[PieceIdentity, pygame.Surface]:
    """
    Load one surface per piece identity in the registry.

    Args:
        registry: Built tile registry
        image_dir: Directory the tiles' image paths are relative to
        size: Square pixel size to scale to; None keeps the tile size
        strict: Raise instead of skipping when an image file is missing

    Returns:
        {(color, piece type): surface}; pieces whose image is missing are
        absent unless strict is set.

    Raises:
        FileNotFoundError: strict and an image file is missing
    """
    image_dir = Path(image_dir)
    target = (size, size) if size is not None else registry.tile_size
    convert = _has_display_surface()

    pieces: Dict[PieceIdentity, pygame.Surface] = {}
    for tile in registry:
        png_path = image_dir / tile.image_path
        if not png_path.is_file():
            if strict:
                raise FileNotFoundError(f"Piece image not found: {png_path}")
            logger.warning("Missing image for tile %d (%s): %s", tile.id, tile.fen_letter, png_path)
            continue

        img = pygame.image.load(str(png_path))
        if convert:
            img = img.convert_alpha()
        if img.get_size() != target:
            img = pygame.transform.smoothscale(img, target)
        pieces[tile.identity] = img

    logger.debug("Loaded %d/%d piece surface(s) from %s", len(pieces), len(registry), image_dir)
    return pieces


def load_configured_surfaces(
    registry: TilesetRegistry,
    config: Optional[TilesetConfig] = None,
    strict: bool = False,
) -> Dict[PieceIdentity, pygame.Surface]:
    """
    load_piece_surfaces() with the image directory and sprite size taken from
    the configuration (CHESSTILES_IMAGE_DIR, CHESSTILES_SPRITE_SIZE).

    Raises:
        ValueError: If the configuration is invalid
        FileNotFoundError: strict and an image file is missing
    """
    config = config or TilesetConfig.from_env()
    errors = config.validate()
    if errors:
        raise ValueError("invalid tileset configuration: " + "; ".join(errors))
    return load_piece_surfaces(
        registry,
        config.resolved_image_dir(),
        size=config.sprite_size,
        strict=strict,
    )
