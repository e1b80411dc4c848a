"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from chesspos.core.notation import STARTING_FEN, position_from_fen
from chesspos.core.position import Position

KIWIPETE_FEN = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


@pytest.fixture
def start_position() -> Position:
    """A fresh standard starting position."""
    return position_from_fen(STARTING_FEN)


@pytest.fixture
def kiwipete() -> Position:
    """Kiwipete: castling, en passant, promotions and pins all in one."""
    return position_from_fen(KIWIPETE_FEN)
