"""Perft — leaf-node counting over the legal move tree.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesspos.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chesspos.core.move import Move
    from chesspos.core.position import Position


def perft(position: Position, depth: int) -> int:
    """Count leaf nodes at *depth* using make/undo on *position*."""
    if depth == 0:
        return 1
    moves = MoveGenerator(position).generate_legal_moves()
    if depth == 1:
        return len(moves)
    nodes = 0
    for move in moves:
        position.make_move(move)
        nodes += perft(position, depth - 1)
        position.undo_move()
    return nodes


def perft_divide(position: Position, depth: int) -> dict[Move, int]:
    """Per-root-move leaf counts; the values sum to ``perft(position, depth)``."""
    counts: dict[Move, int] = {}
    if depth < 1:
        return counts
    for move in MoveGenerator(position).generate_legal_moves():
        position.make_move(move)
        counts[move] = perft(position, depth - 1)
        position.undo_move()
    return counts
