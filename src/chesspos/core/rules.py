"""High-level chess rules: check, checkmate and stalemate classification."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chesspos.core.move_generator import MoveGenerator
from chesspos.core.result import GameResult

if TYPE_CHECKING:
    from chesspos.core.position import Position

_LOGGER = logging.getLogger(__name__)


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # Product policy: only checkmate and stalemate end the game.  The
    # halfmove clock is tracked by Position but no draw rule acts on it.

    @staticmethod
    def is_in_check(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if not Rules.is_in_check(position):
            return False
        gen = MoveGenerator(position)
        return len(gen.generate_legal_moves()) == 0

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        gen = MoveGenerator(position)
        return len(gen.generate_legal_moves()) == 0

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Derive the result of *position* without touching its stored result."""
        gen = MoveGenerator(position)
        if gen.generate_legal_moves():
            return GameResult.in_progress()
        if gen.is_in_check(position.side_to_move):
            return GameResult.checkmate(position.side_to_move.opposite)
        return GameResult.stalemate()

    @staticmethod
    def update_result(position: Position) -> GameResult:
        """Advance the sticky result of *position* and return it.

        In progress may become checkmate or stalemate; a terminal result
        never changes again.
        """
        if position.result.is_terminal:
            return position.result

        result = Rules.game_result(position)
        if result.is_terminal:
            _LOGGER.debug("Game over after %d plies: %s", len(position.history), result)
            position.result = result
        return position.result

    @staticmethod
    def is_game_over(position: Position) -> bool:
        return position.result.is_terminal
