"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from chesspos.core.enums import Color, PieceType
from chesspos.core.piece import Piece
from chesspos.core.types import (
    Square,
    array_indices_to_square,
    make_square,
    square_to_array_indices,
)

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _empty_grid() -> list[list[Piece | None]]:
    return [[None] * 8 for _ in range(8)]


class Board:
    """Mutable 8x8 grid of optional pieces.

    ``squares[row][col]`` uses storage coordinates: row 0 is rank 8 and
    row 7 is rank 1, col 0 is the a-file.  Square-indexed access
    (``board[sq]``) goes through the coordinate mapping in
    :mod:`chesspos.core.types`.
    """

    __slots__ = ("squares",)

    def __init__(self) -> None:
        self.squares: list[list[Piece | None]] = _empty_grid()

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        row, col = square_to_array_indices(sq)
        return self.squares[row][col]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        row, col = square_to_array_indices(sq)
        self.squares[row][col] = piece

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for every occupied square, a8 first."""
        for row, rank_cells in enumerate(self.squares):
            for col, piece in enumerate(rank_cells):
                if piece is not None:
                    yield array_indices_to_square(row, col), piece

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        target = Piece(color, piece_type)
        return [sq for sq, piece in self.occupied() if piece == target]

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` when it has none."""
        king = Piece(color, PieceType.KING)
        for sq, piece in self.occupied():
            if piece == king:
                return sq
        return None

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b.squares = [rank_cells.copy() for rank_cells in self.squares]
        return b

    def clear(self) -> None:
        self.squares = _empty_grid()

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f in range(8):
            b[make_square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[make_square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)

        for f, pt in enumerate(_BACK_RANK):
            b[make_square(f, 0)] = Piece(Color.WHITE, pt)
            b[make_square(f, 7)] = Piece(Color.BLACK, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.squares == other.squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for row, rank_cells in enumerate(self.squares):
            cells = [str(p) if p else "." for p in rank_cells]
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
