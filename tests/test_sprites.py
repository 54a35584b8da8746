import logging

import pygame
import pytest

from chesstiles.config import TilesetConfig
from chesstiles.core.types import Color, PieceType
from chesstiles.sprites import load_configured_surfaces, load_piece_surfaces

from conftest import CHESS_TILES


def _write_pngs(directory, size=64, skip=()):
    for tile_id, _, _, image in CHESS_TILES:
        if tile_id in skip:
            continue
        surf = pygame.Surface((size, size), pygame.SRCALPHA)
        surf.fill((tile_id * 20, 0, 0, 255))
        pygame.image.save(surf, str(directory / image))


def test_loads_every_piece(registry, tmp_path) -> None:
    _write_pngs(tmp_path)
    pieces = load_piece_surfaces(registry, tmp_path)
    assert len(pieces) == 12
    assert pieces[(Color.WHITE, PieceType.QUEEN)].get_size() == (64, 64)


def test_scales_to_requested_size(registry, tmp_path) -> None:
    _write_pngs(tmp_path)
    pieces = load_piece_surfaces(registry, tmp_path, size=32)
    assert all(s.get_size() == (32, 32) for s in pieces.values())


def test_scales_mismatched_images_to_tile_size(registry, tmp_path) -> None:
    _write_pngs(tmp_path, size=128)
    pieces = load_piece_surfaces(registry, tmp_path)
    assert pieces[(Color.BLACK, PieceType.PAWN)].get_size() == (64, 64)


def test_missing_images_are_skipped(registry, tmp_path, caplog) -> None:
    _write_pngs(tmp_path, skip={10})
    with caplog.at_level(logging.WARNING, logger="chesstiles.sprites"):
        pieces = load_piece_surfaces(registry, tmp_path)
    assert len(pieces) == 11
    assert (Color.WHITE, PieceType.QUEEN) not in pieces
    assert "wq.png" in caplog.text


def test_missing_images_strict(registry, tmp_path) -> None:
    _write_pngs(tmp_path, skip={0})
    with pytest.raises(FileNotFoundError):
        load_piece_surfaces(registry, tmp_path, strict=True)


def test_configured_image_dir_and_size(registry, tmp_path) -> None:
    images = tmp_path / "img"
    images.mkdir()
    _write_pngs(images)
    config = TilesetConfig(tileset_path=tmp_path / "pieces.tsx", image_dir=images, sprite_size=32)
    pieces = load_configured_surfaces(registry, config)
    assert len(pieces) == 12
    assert all(s.get_size() == (32, 32) for s in pieces.values())


def test_configured_defaults_to_tileset_dir(registry, tmp_path) -> None:
    _write_pngs(tmp_path)
    config = TilesetConfig(tileset_path=tmp_path / "pieces.tsx")
    pieces = load_configured_surfaces(registry, config)
    assert pieces[(Color.BLACK, PieceType.KING)].get_size() == (64, 64)


def test_configured_from_env(registry, tmp_path, monkeypatch) -> None:
    _write_pngs(tmp_path)
    monkeypatch.delenv("CHESSTILES_REQUIRED_SET", raising=False)
    monkeypatch.setenv("CHESSTILES_IMAGE_DIR", str(tmp_path))
    monkeypatch.setenv("CHESSTILES_SPRITE_SIZE", "48")
    pieces = load_configured_surfaces(registry)
    assert pieces[(Color.WHITE, PieceType.ROOK)].get_size() == (48, 48)


def test_configured_rejects_bad_size(registry, tmp_path) -> None:
    config = TilesetConfig(tileset_path=tmp_path / "pieces.tsx", sprite_size=0)
    with pytest.raises(ValueError, match="CHESSTILES_SPRITE_SIZE"):
        load_configured_surfaces(registry, config)
