"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from chesspos.core.enums import PieceType
from chesspos.core.errors import InvalidMoveTextError
from chesspos.core.types import Square, parse_square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}
_PROMO_TYPES: dict[str, PieceType] = {v: k for k, v in _PROMO_CHARS.items()}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    A move knows nothing about captures, checks or castling; those are
    derived from the position it is applied to.
    """

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)

    @classmethod
    def from_uci(cls, text: str) -> Move:
        """Parse long-algebraic text such as ``e2e4`` or ``e7e8q``."""
        if len(text) not in (4, 5):
            raise InvalidMoveTextError(f"Invalid move text: {text!r}")
        try:
            from_sq = parse_square(text[0:2])
            to_sq = parse_square(text[2:4])
        except ValueError:
            raise InvalidMoveTextError(f"Invalid move text: {text!r}") from None

        promotion: PieceType | None = None
        if len(text) == 5:
            promotion = _PROMO_TYPES.get(text[4].lower())
            if promotion is None:
                raise InvalidMoveTextError(f"Invalid promotion piece in {text!r}")
        return cls(from_sq, to_sq, promotion)


MoveList: TypeAlias = list[Move]
