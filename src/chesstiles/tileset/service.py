"""
Glue between configuration and the loader/registry.

A host application owns a RegistryHandle (or just the registry returned by
open_registry) and passes it to whatever needs tile lookups. There is no
process-wide registry.
"""

from __future__ import annotations

import logging
from typing import Optional

from chesstiles.config import TilesetConfig

from .loader import TilesetLoader
from .registry import TilesetRegistry

logger = logging.getLogger(__name__)


def open_registry(config: Optional[TilesetConfig] = None) -> TilesetRegistry:
    """
    Read, parse and validate the configured tileset.

    Raises:
        ValueError: If the configuration is invalid
        FileNotFoundError: If the tileset file doesn't exist
        ParseError / ValidationError: If the tileset is unusable
    """
    config = config or TilesetConfig.from_env()
    errors = config.validate()
    if errors:
        raise ValueError("invalid tileset configuration: " + "; ".join(errors))

    tileset = TilesetLoader().load_file(config.tileset_path)
    return TilesetRegistry.build(tileset, required=config.required_pieces())


class RegistryHandle:
    """
    Holds the current registry and swaps it on reload.

    Readers call handle.registry and keep using whatever they got; a reload
    never touches a registry that was already handed out.
    """

    def __init__(self, config: Optional[TilesetConfig] = None):
        self._config = config or TilesetConfig.from_env()
        self._registry = open_registry(self._config)

    @property
    def registry(self) -> TilesetRegistry:
        return self._registry

    @property
    def config(self) -> TilesetConfig:
        return self._config

    def reload(self, config: Optional[TilesetConfig] = None) -> TilesetRegistry:
        """
        Build a fresh registry and swap it in.

        On any error the previous registry stays current and the error
        propagates to the caller.
        """
        config = config or self._config
        try:
            registry = open_registry(config)
        except Exception:
            logger.warning("Tileset reload from %s failed; keeping %r", config.tileset_path, self._registry)
            raise

        self._registry = registry
        self._config = config
        logger.info("Reloaded tileset from %s", config.tileset_path)
        return registry
