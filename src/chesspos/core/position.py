"""Position — complete game state (board + metadata) with make/unmake."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chesspos.core.board import Board
from chesspos.core.enums import CastlingRights, Color, PieceType
from chesspos.core.errors import EmptyHistoryError
from chesspos.core.move import Move
from chesspos.core.piece import Piece
from chesspos.core.result import GameResult
from chesspos.core.types import (
    A1,
    A8,
    H1,
    H8,
    Square,
    file_of,
    make_square,
    rank_of,
    square_name,
)

_LOGGER = logging.getLogger(__name__)

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    A1: CastlingRights.WHITE_QUEENSIDE,
    H1: CastlingRights.WHITE_KINGSIDE,
    A8: CastlingRights.BLACK_QUEENSIDE,
    H8: CastlingRights.BLACK_KINGSIDE,
}

_KING_RIGHTS: dict[Color, CastlingRights] = {
    Color.WHITE: CastlingRights.WHITE_BOTH,
    Color.BLACK: CastlingRights.BLACK_BOTH,
}


@dataclass(frozen=True, slots=True)
class UndoSnapshot:
    """State saved before each move that the board alone cannot give back."""

    captured_piece: Piece | None
    en_passant: Square | None
    castling: CastlingRights
    halfmove_clock: int


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """One applied move together with its undo snapshot."""

    move: Move
    snapshot: UndoSnapshot


def _castle_rook_files(from_sq: Square, to_sq: Square) -> tuple[int, int]:
    """(home file, post-castle file) of the rook for a two-file king move."""
    if file_of(to_sq) > file_of(from_sq):
        return 7, 5
    return 0, 3


class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    Supports :meth:`make_move` / :meth:`unmake_move` with an exact undo
    record, and keeps an append-only :attr:`history` of applied moves that
    :meth:`undo_move` pops from.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "history",
        "result",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self.history: list[HistoryEntry] = []
        self.result = GameResult.in_progress()

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position."""
        return cls()

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move) -> UndoSnapshot:
        """Apply *move* and push it onto the history.

        *move* must come from the move generator for this very position;
        a move from an empty square is a programming error.
        """
        board = self.board
        piece = board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {square_name(move.from_sq)}")

        captured = board[move.to_sq]
        snapshot = UndoSnapshot(
            captured_piece=captured,
            en_passant=self.en_passant,
            castling=self.castling,
            halfmove_clock=self.halfmove_clock,
        )
        self.history.append(HistoryEntry(move, snapshot))

        self.en_passant = None
        board[move.to_sq] = piece
        board[move.from_sq] = None

        is_capture = captured is not None
        if piece.piece_type == PieceType.PAWN:
            if move.promotion is not None:
                board[move.to_sq] = piece.promoted(move.promotion)

            if abs(rank_of(move.to_sq) - rank_of(move.from_sq)) == 2:
                self.en_passant = make_square(
                    file_of(move.from_sq),
                    (rank_of(move.from_sq) + rank_of(move.to_sq)) // 2,
                )
            elif self._is_en_passant_capture(move, snapshot):
                board[self._en_passant_victim_square(move)] = None
                is_capture = True

        if piece.piece_type == PieceType.PAWN or is_capture:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        # Slide the rook for castling
        if (
            piece.piece_type == PieceType.KING
            and abs(file_of(move.to_sq) - file_of(move.from_sq)) == 2
        ):
            home_file, castled_file = _castle_rook_files(move.from_sq, move.to_sq)
            r = rank_of(move.from_sq)
            rook = board[make_square(home_file, r)]
            if rook is not None:
                board[make_square(castled_file, r)] = rook
                board[make_square(home_file, r)] = None

        self._update_castling(move, piece, captured)

        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1
        self.side_to_move = self.side_to_move.opposite
        return snapshot

    def unmake_move(self, move: Move, snapshot: UndoSnapshot) -> None:
        """Exactly reverse :meth:`make_move`; history is left untouched."""
        board = self.board
        self.side_to_move = self.side_to_move.opposite
        if self.side_to_move == Color.BLACK:
            self.fullmove_number -= 1

        self.castling = snapshot.castling
        self.en_passant = snapshot.en_passant
        self.halfmove_clock = snapshot.halfmove_clock

        piece = board[move.to_sq]
        if piece is None:
            raise ValueError(f"No piece on {square_name(move.to_sq)} to take back")

        # Promotion always starts from a pawn
        if move.promotion is not None:
            piece = Piece(piece.color, PieceType.PAWN)

        board[move.from_sq] = piece
        board[move.to_sq] = snapshot.captured_piece

        if piece.piece_type == PieceType.PAWN and self._is_en_passant_capture(
            move, snapshot
        ):
            board[self._en_passant_victim_square(move)] = Piece(
                piece.color.opposite, PieceType.PAWN
            )

        # Undo rook slide for castling
        if (
            piece.piece_type == PieceType.KING
            and abs(file_of(move.to_sq) - file_of(move.from_sq)) == 2
        ):
            home_file, castled_file = _castle_rook_files(move.from_sq, move.to_sq)
            r = rank_of(move.from_sq)
            rook = board[make_square(castled_file, r)]
            if rook is not None:
                board[make_square(home_file, r)] = rook
                board[make_square(castled_file, r)] = None

    def undo_move(self) -> Move:
        """Take back the last move in :attr:`history` and return it."""
        if not self.history:
            _LOGGER.warning("Undo requested with empty move history")
            raise EmptyHistoryError()

        entry = self.history.pop()
        self.unmake_move(entry.move, entry.snapshot)
        self.result = GameResult.in_progress()
        _LOGGER.debug("Undid %s (%d moves left in history)", entry.move, len(self.history))
        return entry.move

    # ── En passant / castling bookkeeping ────────────────────────────────

    @staticmethod
    def _is_en_passant_capture(move: Move, snapshot: UndoSnapshot) -> bool:
        """Diagonal pawn step onto the previous target with nothing captured there."""
        return (
            file_of(move.from_sq) != file_of(move.to_sq)
            and snapshot.captured_piece is None
            and snapshot.en_passant == move.to_sq
        )

    @staticmethod
    def _en_passant_victim_square(move: Move) -> Square:
        # The passed pawn stands beside the capturer, one rank behind the target.
        return make_square(file_of(move.to_sq), rank_of(move.from_sq))

    def _update_castling(
        self, move: Move, piece: Piece, captured: Piece | None
    ) -> None:
        castling = self.castling
        if piece.piece_type == PieceType.KING:
            castling &= ~_KING_RIGHTS[piece.color]
        if move.from_sq in _ROOK_CORNERS:
            castling &= ~_ROOK_CORNERS[move.from_sq]
        if (
            captured is not None
            and captured.piece_type == PieceType.ROOK
            and move.to_sq in _ROOK_CORNERS
        ):
            castling &= ~_ROOK_CORNERS[move.to_sq]
        self.castling = castling

    # ── Utilities ────────────────────────────────────────────────────────

    def piece_at(self, sq: Square) -> Piece | None:
        return self.board[sq]

    def has_castling_right(self, right: CastlingRights) -> bool:
        return bool(self.castling & right)

    def copy(self) -> Position:
        """Independent copy without history."""
        pos = Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )
        pos.result = self.result
        return pos

    def __repr__(self) -> str:
        ep = square_name(self.en_passant) if self.en_passant is not None else "-"
        return (
            f"Position(side_to_move={self.side_to_move}, castling={self.castling!r}, "
            f"en_passant={ep}, halfmove_clock={self.halfmove_clock}, "
            f"fullmove_number={self.fullmove_number})\n{self.board!r}"
        )
