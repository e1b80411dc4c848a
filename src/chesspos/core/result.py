"""Game result value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesspos.core.enums import Color, ResultKind


@dataclass(frozen=True, slots=True)
class GameResult:
    """Outcome of a game: in progress, checkmate (with winner) or stalemate."""

    kind: ResultKind = ResultKind.IN_PROGRESS
    winner: Color | None = None

    @classmethod
    def in_progress(cls) -> GameResult:
        return cls()

    @classmethod
    def checkmate(cls, winner: Color) -> GameResult:
        return cls(ResultKind.CHECKMATE, winner)

    @classmethod
    def stalemate(cls) -> GameResult:
        return cls(ResultKind.STALEMATE)

    @property
    def is_terminal(self) -> bool:
        return self.kind != ResultKind.IN_PROGRESS

    def __str__(self) -> str:
        if self.kind == ResultKind.CHECKMATE:
            return f"checkmate, {self.winner} wins"
        if self.kind == ResultKind.STALEMATE:
            return "stalemate"
        return "in progress"
