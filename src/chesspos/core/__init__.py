"""Core domain layer — pure chess logic with zero external dependencies.

Quick start::

    from chesspos.core import MoveGenerator, Rules, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    gen = MoveGenerator(pos)
    for move in gen.generate_legal_moves():
        print(move)

    pos.make_move(gen.generate_legal_moves()[0])
    Rules.update_result(pos)
    pos.undo_move()
"""

from chesspos.core.board import Board
from chesspos.core.enums import CastlingRights, Color, PieceType, ResultKind
from chesspos.core.errors import (
    ChessError,
    EmptyHistoryError,
    FenActiveColorError,
    FenCastlingError,
    FenEnPassantError,
    FenError,
    FenFieldCountError,
    FenFormatError,
    FenFullmoveNumberError,
    FenHalfmoveClockError,
    FenPieceError,
    FenRankLengthError,
    InvalidMoveTextError,
)
from chesspos.core.move import Move, MoveList
from chesspos.core.move_generator import PROMOTION_TYPES, MoveGenerator
from chesspos.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from chesspos.core.perft import perft, perft_divide
from chesspos.core.piece import Piece
from chesspos.core.position import HistoryEntry, Position, UndoSnapshot
from chesspos.core.result import GameResult
from chesspos.core.rules import Rules
from chesspos.core.types import (
    Square,
    array_indices_to_square,
    file_of,
    make_square,
    parse_square,
    rank_file_to_square,
    rank_of,
    square_name,
    square_to_array_indices,
    square_to_rank_file,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "PieceType",
    "ResultKind",
    # Types / helpers
    "Square",
    "array_indices_to_square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_file_to_square",
    "rank_of",
    "square_name",
    "square_to_array_indices",
    "square_to_rank_file",
    # Domain objects
    "Board",
    "GameResult",
    "HistoryEntry",
    "Move",
    "MoveGenerator",
    "MoveList",
    "PROMOTION_TYPES",
    "Piece",
    "Position",
    "Rules",
    "UndoSnapshot",
    "perft",
    "perft_divide",
    # Notation
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
    # Errors
    "ChessError",
    "EmptyHistoryError",
    "FenActiveColorError",
    "FenCastlingError",
    "FenEnPassantError",
    "FenError",
    "FenFieldCountError",
    "FenFormatError",
    "FenFullmoveNumberError",
    "FenHalfmoveClockError",
    "FenPieceError",
    "FenRankLengthError",
    "InvalidMoveTextError",
]
