"""FEN parsing and serialization."""

from __future__ import annotations

import logging

from chesspos.core.board import Board
from chesspos.core.enums import CastlingRights, Color
from chesspos.core.errors import (
    FenActiveColorError,
    FenCastlingError,
    FenEnPassantError,
    FenFieldCountError,
    FenFormatError,
    FenFullmoveNumberError,
    FenHalfmoveClockError,
    FenPieceError,
    FenRankLengthError,
)
from chesspos.core.piece import Piece
from chesspos.core.position import Position
from chesspos.core.types import Square, make_square, square_name

_LOGGER = logging.getLogger(__name__)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}

# En-passant target rank (0-based) allowed for each side to move.
_EP_RANK: dict[Color, int] = {Color.WHITE: 5, Color.BLACK: 2}

_DIGITS = "0123456789"


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    Raises a :class:`~chesspos.core.errors.FenError` subclass naming the
    first field that is malformed.
    """
    parts = fen.split()
    if len(parts) != 6:
        raise FenFieldCountError(fen, f"expected 6 fields, got {len(parts)}")

    placement, side_part, castling_part, ep_part, half_part, full_part = parts

    board = _parse_placement(placement)
    side = _parse_side(side_part)
    castling = _parse_castling(castling_part)
    ep = _parse_en_passant(ep_part, side)

    if not (half_part.isascii() and half_part.isdigit()):
        raise FenHalfmoveClockError(half_part)
    halfmove = int(half_part)

    if not (full_part.isascii() and full_part.isdigit()) or int(full_part) == 0:
        raise FenFullmoveNumberError(full_part)
    fullmove = int(full_part)

    _LOGGER.debug("Parsed FEN %r", fen)
    return Position(board, side, castling, ep, halfmove, fullmove)


def _parse_placement(placement: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise FenFormatError(placement, f"expected 8 ranks, found {len(ranks)}")

    board = Board()
    for row, rank_text in enumerate(ranks):
        rank = 7 - row
        file = 0
        for ch in rank_text:
            if file >= 8 and ch not in _DIGITS:
                raise FenRankLengthError(rank_text, f"too many squares in rank {rank + 1}")
            if ch in _DIGITS:
                step = int(ch)
                if not (1 <= step <= 8):
                    raise FenFormatError(placement, f"invalid digit {ch!r}")
                if file + step > 8:
                    raise FenRankLengthError(rank_text, f"rank {rank + 1} overflows")
                file += step
            else:
                try:
                    board[make_square(file, rank)] = Piece.from_char(ch)
                except ValueError:
                    raise FenPieceError(ch) from None
                file += 1
        if file != 8:
            raise FenRankLengthError(rank_text, f"rank {rank + 1} has {file} files")
    return board


def _parse_side(text: str) -> Color:
    if text == "w":
        return Color.WHITE
    if text == "b":
        return Color.BLACK
    raise FenActiveColorError(text)


def _parse_castling(text: str) -> CastlingRights:
    castling = CastlingRights.NONE
    if text == "-":
        return castling
    for ch in text:
        right = _CASTLING_CHARS.get(ch)
        if right is None:
            raise FenCastlingError(text)
        castling |= right
    return castling


def _parse_en_passant(text: str, side: Color) -> Square | None:
    if text == "-":
        return None
    if len(text) != 2 or text[0] not in "abcdefgh" or text[1] not in "12345678":
        raise FenEnPassantError(text)
    rank = int(text[1]) - 1
    if rank != _EP_RANK[side]:
        raise FenEnPassantError(text, f"not a passed-over square with {side} to move")
    return make_square(ord(text[0]) - ord("a"), rank)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN (history is not represented)."""
    # 1. Board
    rows: list[str] = []
    for rank_cells in pos.board.squares:
        empty = 0
        row = ""
        for piece in rank_cells:
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if pos.castling & right
    )
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return f"{board_str} {side_str} {castling_str} {ep_str} {pos.halfmove_clock} {pos.fullmove_number}"
