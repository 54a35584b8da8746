"""
chesstiles configuration.

Controls which tileset document is loaded, where its images live, and which
piece identities the target game requires. All settings can be overridden
via environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Dict, FrozenSet, Optional

from chesstiles.core.types import STANDARD_CHESS_PIECES, Color, PieceIdentity, PieceType, identities_for

DEFAULT_TILESET_NAME = "ChessPieceObjects.tsx"

# Named required-combination presets; a variant game adds its own entry here
# instead of the registry hardcoding standard chess.
REQUIRED_SETS: Dict[str, FrozenSet[PieceIdentity]] = {
    "standard": STANDARD_CHESS_PIECES,
    "white-only": identities_for((Color.WHITE,), PieceType),
    "black-only": identities_for((Color.BLACK,), PieceType),
    "none": frozenset(),
}


def default_tileset_path() -> Path:
    """Path of the bundled 12-piece tileset."""
    return Path(str(resources.files("chesstiles") / "data" / DEFAULT_TILESET_NAME))


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass
class TilesetConfig:
    """Configuration for loading the piece tileset."""

    tileset_path: Path = field(
        default_factory=lambda: Path(os.getenv("CHESSTILES_TILESET") or default_tileset_path())
    )
    # None -> resolve images next to the tileset document
    image_dir: Optional[Path] = field(
        default_factory=lambda: Path(os.environ["CHESSTILES_IMAGE_DIR"])
        if os.getenv("CHESSTILES_IMAGE_DIR")
        else None
    )
    required_set: str = field(
        default_factory=lambda: os.getenv("CHESSTILES_REQUIRED_SET", "standard").strip().lower()
    )
    sprite_size: Optional[int] = field(default_factory=lambda: _optional_int("CHESSTILES_SPRITE_SIZE"))

    @classmethod
    def from_env(cls) -> "TilesetConfig":
        """Create config from environment variables."""
        return cls()

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []
        if self.tileset_path == Path():
            errors.append("CHESSTILES_TILESET is required")
        if self.required_set not in REQUIRED_SETS:
            known = ", ".join(sorted(REQUIRED_SETS))
            errors.append(f"CHESSTILES_REQUIRED_SET must be one of: {known}")
        if self.sprite_size is not None and self.sprite_size <= 0:
            errors.append("CHESSTILES_SPRITE_SIZE must be a positive integer")
        return errors

    def required_pieces(self) -> FrozenSet[PieceIdentity]:
        try:
            return REQUIRED_SETS[self.required_set]
        except KeyError:
            raise ValueError(f"unknown required set: {self.required_set!r}") from None

    def resolved_image_dir(self) -> Path:
        return self.image_dir if self.image_dir is not None else self.tileset_path.parent
