from __future__ import annotations

from enum import IntEnum
from typing import FrozenSet, Optional, Tuple


class Color(IntEnum):
    WHITE = 0
    BLACK = 1

    def other(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_name(cls, text: str) -> Optional["Color"]:
        """'white', 'Black', ' BLACK ' -> Color; anything else -> None."""
        return cls.__members__.get(text.strip().upper())


class PieceType(IntEnum):
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def letter(self) -> str:
        return PIECE_LETTERS[self]

    @classmethod
    def from_name(cls, text: str) -> Optional["PieceType"]:
        return cls.__members__.get(text.strip().upper())


PieceIdentity = Tuple[Color, PieceType]

PIECE_LETTERS = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}


def identity_from_letter(ch: str) -> Optional[PieceIdentity]:
    """
    FEN letter -> (color, piece type).
    Uppercase is white, lowercase is black: 'Q' -> (WHITE, QUEEN).
    """
    if len(ch) != 1:
        return None
    pt = next((p for p, letter in PIECE_LETTERS.items() if letter == ch.lower()), None)
    if pt is None:
        return None
    color = Color.WHITE if ch.isupper() else Color.BLACK
    return color, pt


def identity_to_str(identity: PieceIdentity) -> str:
    color, pt = identity
    return f"{color.label} {pt.label}"


def identities_for(colors, piece_types) -> FrozenSet[PieceIdentity]:
    return frozenset((c, pt) for c in colors for pt in piece_types)


STANDARD_CHESS_PIECES: FrozenSet[PieceIdentity] = identities_for(Color, PieceType)
