"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chesspos.core.enums import CastlingRights, Color, PieceType
from chesspos.core.move import Move, MoveList
from chesspos.core.types import Square, file_of, make_square, rank_of

if TYPE_CHECKING:
    from chesspos.core.position import Position

_LOGGER = logging.getLogger(__name__)

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

# Per color: (forward rank step, start rank, far rank, en-passant capture rank)
_PAWN_RANKS: dict[Color, tuple[int, int, int, int]] = {
    Color.WHITE: (1, 1, 7, 4),
    Color.BLACK: (-1, 6, 0, 3),
}

# Per castling right: (king home, king landing, rook home, squares strictly between)
_CASTLING_PATHS: dict[CastlingRights, tuple[Square, Square, Square, tuple[Square, ...]]] = {
    CastlingRights.WHITE_KINGSIDE: (4, 6, 7, (5, 6)),
    CastlingRights.WHITE_QUEENSIDE: (4, 2, 0, (1, 2, 3)),
    CastlingRights.BLACK_KINGSIDE: (60, 62, 63, (61, 62)),
    CastlingRights.BLACK_QUEENSIDE: (60, 58, 56, (57, 58, 59)),
}
_COLOR_CASTLING: dict[Color, tuple[CastlingRights, CastlingRights]] = {
    Color.WHITE: (CastlingRights.WHITE_KINGSIDE, CastlingRights.WHITE_QUEENSIDE),
    Color.BLACK: (CastlingRights.BLACK_KINGSIDE, CastlingRights.BLACK_QUEENSIDE),
}


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if 0 <= af < 8 and 0 <= ar < 8:
                moves.append(make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


def _build_pawn_attacks(forward: int) -> tuple[tuple[Square, ...], ...]:
    return _build_targets(((-1, forward), (1, forward)))


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_PAWN_ATTACKS: dict[Color, tuple[tuple[Square, ...], ...]] = {
    Color.WHITE: _build_pawn_attacks(1),
    Color.BLACK: _build_pawn_attacks(-1),
}

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDER_RAYS: dict[PieceType, tuple[tuple[tuple[Square, ...], ...], ...]] = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.QUEEN: _QUEEN_RAYS,
}


class MoveGenerator:
    """Generates moves for the side to move of a :class:`Position`.

    Legality is decided by playing each candidate on a throwaway copy of
    the position, so the wrapped position is never mutated.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> MoveList:
        """All strictly legal moves for the side to move."""
        legal: MoveList = []
        moving_color = self._pos.side_to_move
        opponent = moving_color.opposite

        for move in self.generate_pseudo_legal_moves():
            trial = self._pos.copy()
            trial.make_move(move)
            king_sq = trial.board.king_square(moving_color)
            if king_sq is None:
                _LOGGER.warning(
                    "No %s king on board; discarding %s", moving_color, move
                )
                continue
            if not MoveGenerator(trial).is_square_attacked(king_sq, opponent):
                legal.append(move)
        return legal

    def generate_pseudo_legal_moves(self) -> MoveList:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: MoveList = []
        color = self._pos.side_to_move

        for sq, piece in self._board.occupied():
            if piece.color != color:
                continue
            ptype = piece.piece_type
            if ptype == PieceType.PAWN:
                self._gen_pawn(sq, color, moves)
            elif ptype == PieceType.KNIGHT:
                self._gen_stepper(sq, color, _KNIGHT_TARGETS[sq], moves)
            elif ptype == PieceType.KING:
                self._gen_stepper(sq, color, _KING_TARGETS[sq], moves)
                self._gen_castling(sq, color, moves)
            else:
                self._gen_sliding(sq, color, _SLIDER_RAYS[ptype][sq], moves)
        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._board.king_square(color)
        if king_sq is None:
            return False
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?

        Whose turn it is, pins and checks are all ignored.
        """
        board = self._board
        for from_sq, piece in board.occupied():
            if piece.color != by_color:
                continue
            ptype = piece.piece_type
            if ptype == PieceType.PAWN:
                if sq in _PAWN_ATTACKS[by_color][from_sq]:
                    return True
            elif ptype == PieceType.KNIGHT:
                if sq in _KNIGHT_TARGETS[from_sq]:
                    return True
            elif ptype == PieceType.KING:
                if sq in _KING_TARGETS[from_sq]:
                    return True
            else:
                for ray in _SLIDER_RAYS[ptype][from_sq]:
                    for to_sq in ray:
                        if to_sq == sq:
                            return True
                        if board[to_sq] is not None:
                            break
        return False

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: MoveList) -> None:
        board = self._board
        forward, start_rank, far_rank, ep_rank = _PAWN_RANKS[color]
        file_idx = file_of(sq)
        rank_idx = rank_of(sq)
        next_rank = rank_idx + forward
        if not 0 <= next_rank < 8:
            return

        one_step = make_square(file_idx, next_rank)
        if board.is_empty(one_step):
            self._add_pawn_move(sq, one_step, next_rank == far_rank, moves)
            if rank_idx == start_rank:
                two_step = make_square(file_idx, next_rank + forward)
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step))

        for cap_sq in _PAWN_ATTACKS[color][sq]:
            target = board[cap_sq]
            if target is not None and target.color != color:
                self._add_pawn_move(sq, cap_sq, next_rank == far_rank, moves)

        ep = self._pos.en_passant
        if (
            ep is not None
            and rank_idx == ep_rank
            and ep in _PAWN_ATTACKS[color][sq]
            and board.is_empty(ep)
        ):
            moves.append(Move(sq, ep))

    @staticmethod
    def _add_pawn_move(
        from_sq: Square, to_sq: Square, promotes: bool, moves: MoveList
    ) -> None:
        if promotes:
            for pt in PROMOTION_TYPES:
                moves.append(Move(from_sq, to_sq, pt))
        else:
            moves.append(Move(from_sq, to_sq))

    def _gen_stepper(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: MoveList,
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: MoveList,
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: MoveList) -> None:
        # Only the landing square is checked for attacks, later, by the
        # legality filter; start and transit squares are not.
        board = self._board
        for right in _COLOR_CASTLING[color]:
            if not self._pos.castling & right:
                continue
            home, landing, rook_home, between = _CASTLING_PATHS[right]
            if king_sq != home:
                continue
            rook = board[rook_home]
            if rook is None or rook.color != color or rook.piece_type != PieceType.ROOK:
                continue
            if all(board.is_empty(s) for s in between):
                moves.append(Move(king_sq, landing))
