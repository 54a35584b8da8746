"""
Tileset error taxonomy.

ParseError       - the document is not a structurally valid tileset
ValidationError  - well formed, but semantically inconsistent
NotFoundError    - query against a built registry for an unknown identity / id

Every error is terminal for the load/build call that raised it.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class TilesetError(Exception):
    """Base class for every error raised by chesstiles."""


class ParseError(TilesetError, ValueError):
    def __init__(self, message: str, tile_id: Optional[Any] = None):
        if tile_id is not None:
            message = f"tile {tile_id}: {message}"
        super().__init__(message)
        self.tile_id = tile_id


class ValidationKind(Enum):
    COUNT_MISMATCH = "CountMismatch"
    DIMENSION_MISMATCH = "DimensionMismatch"
    DUPLICATE_ID = "DuplicateId"
    UNKNOWN_ATTRIBUTE = "UnknownAttribute"
    MISSING_COMBINATION = "MissingCombination"
    DUPLICATE_COMBINATION = "DuplicateCombination"


class ValidationError(TilesetError, ValueError):
    kind: ValidationKind

    def __init__(self, message: str, **context: Any):
        super().__init__(f"{self.kind.value}: {message}")
        self.context = context


class CountMismatchError(ValidationError):
    kind = ValidationKind.COUNT_MISMATCH


class DimensionMismatchError(ValidationError):
    kind = ValidationKind.DIMENSION_MISMATCH


class DuplicateIdError(ValidationError):
    kind = ValidationKind.DUPLICATE_ID


class UnknownAttributeError(ValidationError):
    kind = ValidationKind.UNKNOWN_ATTRIBUTE


class MissingCombinationError(ValidationError):
    kind = ValidationKind.MISSING_COMBINATION


class DuplicateCombinationError(ValidationError):
    kind = ValidationKind.DUPLICATE_COMBINATION


class NotFoundError(TilesetError, LookupError):
    pass
