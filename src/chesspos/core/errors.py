"""Exception hierarchy for the core.

FEN errors also derive from :class:`ValueError` so callers that only care
about "bad input" can keep catching that.
"""

from __future__ import annotations


class ChessError(Exception):
    """Base class for all recoverable chesspos errors."""


# ── FEN ──────────────────────────────────────────────────────────────────────


class FenError(ChessError, ValueError):
    """A FEN string could not be parsed."""

    field_name = "fen"

    def __init__(self, value: str, detail: str = "") -> None:
        self.value = value
        self.detail = detail
        message = f"Invalid FEN {self.field_name}: {value!r}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class FenFieldCountError(FenError):
    field_name = "field count"


class FenFormatError(FenError):
    field_name = "piece placement"


class FenPieceError(FenError):
    field_name = "piece character"


class FenRankLengthError(FenError):
    field_name = "rank"


class FenActiveColorError(FenError):
    field_name = "active color"


class FenCastlingError(FenError):
    field_name = "castling rights"


class FenEnPassantError(FenError):
    field_name = "en-passant target"


class FenHalfmoveClockError(FenError):
    field_name = "halfmove clock"


class FenFullmoveNumberError(FenError):
    field_name = "fullmove number"


# ── Moves / history ──────────────────────────────────────────────────────────


class InvalidMoveTextError(ChessError, ValueError):
    """Text is not a long-algebraic (UCI) move such as ``e2e4`` or ``a7a8q``."""


class EmptyHistoryError(ChessError):
    """Raised by :meth:`Position.undo_move` when there is no move to undo."""

    def __init__(self) -> None:
        super().__init__("No move to undo")
