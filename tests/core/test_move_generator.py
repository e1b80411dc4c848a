"""Tests for pseudo-legal/legal move generation and attack detection."""

import logging

import pytest

from chesspos.core.enums import Color, PieceType
from chesspos.core.move import Move
from chesspos.core.move_generator import PROMOTION_TYPES, MoveGenerator
from chesspos.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from chesspos.core.perft import perft, perft_divide
from chesspos.core.position import Position
from chesspos.core.types import parse_square


def _gen(fen: str) -> MoveGenerator:
    return MoveGenerator(position_from_fen(fen))


def _uci(moves: list[Move]) -> set[str]:
    return {str(m) for m in moves}


def _from(moves: list[Move], square: str) -> set[str]:
    origin = parse_square(square)
    return {str(m) for m in moves if m.from_sq == origin}


class TestStartingPosition:
    def test_twenty_legal_moves(self, start_position: Position) -> None:
        assert len(MoveGenerator(start_position).generate_legal_moves()) == 20

    def test_twenty_pseudo_legal_moves(self, start_position: Position) -> None:
        assert len(MoveGenerator(start_position).generate_pseudo_legal_moves()) == 20

    def test_black_also_has_twenty(self) -> None:
        gen = _gen("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR b KQkq - 0 1")
        assert len(gen.generate_legal_moves()) == 20

    def test_only_side_to_move_is_generated(self, start_position: Position) -> None:
        moves = MoveGenerator(start_position).generate_pseudo_legal_moves()
        assert all(start_position.board[m.from_sq].color == Color.WHITE for m in moves)

    def test_generation_does_not_mutate(self, start_position: Position) -> None:
        before = position_to_fen(start_position)
        MoveGenerator(start_position).generate_legal_moves()
        assert position_to_fen(start_position) == before
        assert start_position.history == []


class TestKnight:
    def test_centrality(self) -> None:
        moves = _gen("8/8/8/8/3N4/8/8/8 w - - 0 1").generate_pseudo_legal_moves()
        expected = {"d4c2", "d4e2", "d4b3", "d4f3", "d4b5", "d4f5", "d4c6", "d4e6"}
        assert _uci(moves) == expected
        assert len(moves) == 8

    def test_corner(self) -> None:
        moves = _gen("8/8/8/8/8/8/8/N7 w - - 0 1").generate_pseudo_legal_moves()
        assert _uci(moves) == {"a1b3", "a1c2"}

    def test_friendly_blocks_enemy_captured(self) -> None:
        moves = _gen("8/8/8/8/3N4/1P6/4p3/8 w - - 0 1").generate_pseudo_legal_moves()
        knight = _from(moves, "d4")
        assert "d4b3" not in knight
        assert "d4e2" in knight
        assert len(knight) == 7


class TestPawn:
    def test_single_and_double_push(self, start_position: Position) -> None:
        moves = MoveGenerator(start_position).generate_pseudo_legal_moves()
        assert _from(moves, "e2") == {"e2e3", "e2e4"}

    def test_double_push_needs_both_squares_empty(self) -> None:
        blocked_far = _gen("4k3/8/8/8/4n3/8/4P3/4K3 w - - 0 1")
        assert _from(blocked_far.generate_pseudo_legal_moves(), "e2") == {"e2e3"}
        blocked_near = _gen("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1")
        assert _from(blocked_near.generate_pseudo_legal_moves(), "e2") == set()

    def test_no_double_push_off_start_rank(self) -> None:
        gen = _gen("4k3/8/8/8/8/4P3/8/4K3 w - - 0 1")
        assert _from(gen.generate_pseudo_legal_moves(), "e3") == {"e3e4"}

    def test_black_pawns_move_down(self) -> None:
        gen = _gen("4k3/3p4/8/8/8/8/8/4K3 b - - 0 1")
        assert _from(gen.generate_pseudo_legal_moves(), "d7") == {"d7d6", "d7d5"}

    def test_diagonal_captures_only_enemies(self) -> None:
        gen = _gen("4k3/8/8/3p1N2/4P3/8/8/4K3 w - - 0 1")
        assert _from(gen.generate_pseudo_legal_moves(), "e4") == {"e4e5", "e4d5"}

    def test_edge_file_captures_one_side(self) -> None:
        gen = _gen("4k3/8/8/1p6/P7/8/8/4K3 w - - 0 1")
        assert _from(gen.generate_pseudo_legal_moves(), "a4") == {"a4a5", "a4b5"}

    def test_promotion_push_yields_four_moves(self) -> None:
        moves = _gen("k7/4P3/8/8/8/8/8/4K3 w - - 0 1").generate_pseudo_legal_moves()
        promos = [m for m in moves if m.from_sq == parse_square("e7")]
        assert {m.promotion for m in promos} == set(PROMOTION_TYPES)
        assert len(promos) == 4
        assert all(m.to_sq == parse_square("e8") for m in promos)

    def test_promotion_with_capture(self) -> None:
        moves = _gen("3r2k1/4P3/8/8/8/8/8/4K3 w - - 0 1").generate_pseudo_legal_moves()
        assert _from(moves, "e7") == {
            "e7e8q", "e7e8r", "e7e8b", "e7e8n",
            "e7d8q", "e7d8r", "e7d8b", "e7d8n",
        }

    def test_black_promotion(self) -> None:
        moves = _gen("4k3/8/8/8/8/8/p7/4K3 b - - 0 1").generate_pseudo_legal_moves()
        assert _from(moves, "a2") == {"a2a1q", "a2a1r", "a2a1b", "a2a1n"}

    def test_promotion_order(self) -> None:
        assert PROMOTION_TYPES == (
            PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT,
        )


class TestEnPassant:
    FEN = "rnbqkbnr/ppp1pppp/8/3pP3/8/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 3"

    def test_offered_to_adjacent_pawn(self) -> None:
        moves = _gen(self.FEN).generate_legal_moves()
        assert "e5d6" in _uci(moves)

    def test_target_is_destination(self) -> None:
        moves = _gen(self.FEN).generate_pseudo_legal_moves()
        ep = [m for m in moves if m.from_sq == parse_square("e5") and m.to_sq != parse_square("e6")]
        assert ep == [Move(parse_square("e5"), parse_square("d6"))]

    def test_not_offered_without_target(self) -> None:
        moves = _gen(self.FEN.replace(" d6 ", " - ")).generate_pseudo_legal_moves()
        assert _from(moves, "e5") == {"e5e6"}

    def test_not_offered_to_distant_pawn(self) -> None:
        gen = _gen("4k3/8/8/3p3P/8/8/8/4K3 w - d6 0 1")
        assert _from(gen.generate_pseudo_legal_moves(), "h5") == {"h5h6"}

    def test_black_en_passant(self) -> None:
        gen = _gen("4k3/8/8/8/3Pp3/8/8/4K3 b - d3 0 1")
        assert _from(gen.generate_legal_moves(), "e4") == {"e4e3", "e4d3"}

    def test_en_passant_exposing_king_is_illegal(self) -> None:
        gen = _gen("8/8/8/KPp4r/8/8/8/7k w - c6 0 1")
        assert "b5c6" in _uci(gen.generate_pseudo_legal_moves())
        assert "b5c6" not in _uci(gen.generate_legal_moves())


class TestSliders:
    def test_rook_on_empty_board(self) -> None:
        moves = _gen("8/8/8/8/8/8/8/R7 w - - 0 1").generate_pseudo_legal_moves()
        assert len(moves) == 14

    def test_bishop_on_empty_board(self) -> None:
        moves = _gen("8/8/8/8/3B4/8/8/8 w - - 0 1").generate_pseudo_legal_moves()
        assert len(moves) == 13

    def test_queen_on_empty_board(self) -> None:
        moves = _gen("8/8/8/8/3Q4/8/8/8 w - - 0 1").generate_pseudo_legal_moves()
        assert len(moves) == 27

    def test_ray_stops_before_friend_and_on_enemy(self) -> None:
        moves = _gen("8/8/8/8/8/8/8/R2P2n1 w - - 0 1").generate_pseudo_legal_moves()
        rook = _from(moves, "a1")
        assert {"a1b1", "a1c1"} <= rook
        assert "a1d1" not in rook
        assert "a1g1" not in rook

        moves = _gen("8/8/8/8/8/8/8/R5n1 w - - 0 1").generate_pseudo_legal_moves()
        rook = _from(moves, "a1")
        assert "a1g1" in rook
        assert "a1h1" not in rook


class TestKing:
    def test_corner_king(self) -> None:
        moves = _gen("8/8/8/8/8/8/8/K7 w - - 0 1").generate_pseudo_legal_moves()
        assert _uci(moves) == {"a1a2", "a1b1", "a1b2"}

    def test_cannot_step_into_check(self) -> None:
        gen = _gen("4k3/8/8/8/8/8/r7/4K3 w - - 0 1")
        assert _from(gen.generate_legal_moves(), "e1") == {"e1d1", "e1f1"}


class TestCastling:
    OPEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"

    def test_both_sides_generated(self) -> None:
        moves = _uci(_gen(self.OPEN).generate_legal_moves())
        assert {"e1g1", "e1c1"} <= moves

    def test_black_both_sides(self) -> None:
        moves = _uci(_gen(self.OPEN.replace(" w ", " b ")).generate_legal_moves())
        assert {"e8g8", "e8c8"} <= moves

    def test_requires_right(self) -> None:
        moves = _uci(_gen(self.OPEN.replace("KQkq", "kq")).generate_pseudo_legal_moves())
        assert "e1g1" not in moves
        assert "e1c1" not in moves

    def test_requires_empty_squares_between(self) -> None:
        moves = _uci(_gen("r3k2r/8/8/8/8/8/8/RN2K1NR w KQkq - 0 1").generate_pseudo_legal_moves())
        assert "e1g1" not in moves
        assert "e1c1" not in moves

    def test_queenside_b_file_must_be_empty(self) -> None:
        moves = _uci(_gen("4k3/8/8/8/8/8/8/RN2K3 w Q - 0 1").generate_pseudo_legal_moves())
        assert "e1c1" not in moves

    def test_requires_rook_on_corner(self) -> None:
        moves = _uci(_gen("4k3/8/8/8/8/8/8/4K3 w K - 0 1").generate_pseudo_legal_moves())
        assert "e1g1" not in moves

    def test_landing_square_attacked_is_illegal(self) -> None:
        gen = _gen("4k1r1/8/8/8/8/8/8/4K2R w K - 0 1")
        assert "e1g1" in _uci(gen.generate_pseudo_legal_moves())
        assert "e1g1" not in _uci(gen.generate_legal_moves())

    def test_transit_square_attack_is_not_checked(self) -> None:
        # f1 is covered by the rook on f8, yet only the landing square g1 is
        # tested, so castling through f1 is still reported as legal.
        gen = _gen("4kr2/8/8/8/8/8/8/4K2R w K - 0 1")
        assert gen.is_square_attacked(parse_square("f1"), Color.BLACK)
        assert "e1g1" in _uci(gen.generate_legal_moves())

    def test_castling_out_of_check_is_not_rejected(self) -> None:
        gen = _gen("4r1k1/8/8/8/8/8/8/4K2R w K - 0 1")
        assert gen.is_in_check(Color.WHITE)
        assert "e1g1" in _uci(gen.generate_legal_moves())


class TestAttackDetection:
    def test_pawn_attacks_diagonals_regardless_of_occupancy(self) -> None:
        gen = _gen("4k3/8/8/8/8/8/4P3/4K3 w - - 0 1")
        assert gen.is_square_attacked(parse_square("d3"), Color.WHITE)
        assert gen.is_square_attacked(parse_square("f3"), Color.WHITE)
        assert not gen.is_square_attacked(parse_square("e3"), Color.WHITE)

    def test_black_pawn_attacks_downward(self) -> None:
        gen = _gen("4k3/4p3/8/8/8/8/8/4K3 w - - 0 1")
        assert gen.is_square_attacked(parse_square("d6"), Color.BLACK)
        assert not gen.is_square_attacked(parse_square("e6"), Color.BLACK)

    def test_independent_of_side_to_move(self) -> None:
        white = _gen("4k3/8/8/8/3N4/8/8/4K3 w - - 0 1")
        black = _gen("4k3/8/8/8/3N4/8/8/4K3 b - - 0 1")
        target = parse_square("e6")
        assert white.is_square_attacked(target, Color.WHITE)
        assert black.is_square_attacked(target, Color.WHITE)

    def test_slider_blocked(self) -> None:
        gen = _gen("4k3/8/8/8/8/8/8/R1n4K b - - 0 1")
        assert gen.is_square_attacked(parse_square("b1"), Color.WHITE)
        assert gen.is_square_attacked(parse_square("c1"), Color.WHITE)
        assert not gen.is_square_attacked(parse_square("d1"), Color.WHITE)

    def test_queen_diagonal_and_king_adjacency(self) -> None:
        gen = _gen("4k3/8/8/8/8/8/8/Q3K3 w - - 0 1")
        assert gen.is_square_attacked(parse_square("h8"), Color.WHITE)
        assert gen.is_square_attacked(parse_square("f2"), Color.WHITE)
        assert not gen.is_square_attacked(parse_square("g3"), Color.WHITE)

    def test_empty_board_attacks_nothing(self) -> None:
        gen = MoveGenerator(position_from_fen("8/8/8/8/8/8/8/8 w - - 0 1"))
        assert not any(gen.is_square_attacked(sq, Color.WHITE) for sq in range(64))


class TestLegalFilter:
    def test_pinned_piece_cannot_leave_line(self) -> None:
        gen = _gen("4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
        assert _from(gen.generate_legal_moves(), "e2") == set()
        assert _from(gen.generate_pseudo_legal_moves(), "e2")

    def test_must_answer_check(self) -> None:
        gen = _gen("4k3/8/8/8/8/8/3PPP2/r3K3 w - - 0 1")
        assert _uci(gen.generate_legal_moves()) == set()

    def test_legal_is_subset_of_pseudo_legal(self, kiwipete: Position) -> None:
        gen = MoveGenerator(kiwipete)
        assert set(gen.generate_legal_moves()) <= set(gen.generate_pseudo_legal_moves())

    def test_side_without_king_has_no_legal_moves(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        gen = _gen("8/8/8/8/3N4/8/8/8 w - - 0 1")
        with caplog.at_level(logging.WARNING, logger="chesspos.core.move_generator"):
            assert gen.generate_legal_moves() == []
        assert "No white king" in caplog.text


# ── Perft (positions that never castle through an attacked square) ──────────

POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"


class TestPerftStarting:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 1) == 20

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 2) == 400

    def test_depth_3(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 3) == 8_902

    @pytest.mark.slow
    def test_depth_4(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 4) == 197_281

    def test_perft_restores_position(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        perft(pos, 3)
        assert position_to_fen(pos) == STARTING_FEN
        assert pos.history == []

    def test_divide_sums_to_perft(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        counts = perft_divide(pos, 2)
        assert len(counts) == 20
        assert all(n == 20 for n in counts.values())
        assert sum(counts.values()) == 400


class TestPerftPos3:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(POS3), 1) == 14

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(POS3), 2) == 191

    def test_depth_3(self) -> None:
        assert perft(position_from_fen(POS3), 3) == 2_812


class TestPerftKiwipete:
    def test_depth_1(self, kiwipete: Position) -> None:
        assert perft(kiwipete, 1) == 48
