"""Colored piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesspos.core.enums import Color, PieceType

# Lowercase FEN letter ↔ piece type; case carries the color.
_TYPE_BY_LETTER: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}
_LETTER_BY_TYPE: dict[PieceType, str] = {v: k for k, v in _TYPE_BY_LETTER.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """A piece kind owned by one side."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        letter = _LETTER_BY_TYPE[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        ptype = (
            _TYPE_BY_LETTER.get(char.lower())
            if len(char) == 1 and char.isascii()
            else None
        )
        if ptype is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return cls(Color.WHITE if char.isupper() else Color.BLACK, ptype)

    def promoted(self, piece_type: PieceType) -> Piece:
        """Same-colored piece of another kind."""
        return Piece(self.color, piece_type)
