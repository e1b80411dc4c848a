"""Command-line entry point.

Usage::

    chesspos                                  # starting position
    chesspos --fen "k7/2K5/1Q6/8/8/8/8/8 b - - 0 1"
    chesspos --moves f2f3 e7e5 g2g4 d8h4
    chesspos --perft 3
"""

from __future__ import annotations

import argparse
import logging
import sys

from chesspos.core.errors import ChessError
from chesspos.core.move import Move
from chesspos.core.move_generator import MoveGenerator
from chesspos.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from chesspos.core.perft import perft_divide
from chesspos.core.position import Position
from chesspos.core.rules import Rules

_LOGGER = logging.getLogger(__name__)

_EXIT_USAGE = 2


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="chesspos",
        description="Inspect a chess position: legal moves, check and game status",
    )
    p.add_argument("--fen", default=STARTING_FEN, help="Start from a FEN position")
    p.add_argument(
        "--moves",
        nargs="*",
        default=[],
        metavar="UCI",
        help="Moves to play first, in long algebraic form (e2e4, e7e8q)",
    )
    p.add_argument("--perft", type=int, metavar="N", help="Print perft divide to depth N")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default WARNING)",
    )
    return p


def _play(position: Position, texts: list[str]) -> None:
    for text in texts:
        move = Move.from_uci(text)
        if move not in MoveGenerator(position).generate_legal_moves():
            raise ChessError(f"Illegal move in this position: {text}")
        position.make_move(move)
        Rules.update_result(position)
        _LOGGER.info("Played %s", move)


def _status_line(position: Position) -> str:
    status = str(position.result)
    if not position.result.is_terminal and Rules.is_in_check(position):
        status += ", check"
    return status


def main(argv: list[str] | None = None) -> int:
    """Run the command line and return the process exit status."""
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        position = position_from_fen(args.fen)
        Rules.update_result(position)
        _play(position, args.moves)
    except ChessError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return _EXIT_USAGE

    print(f"fen: {position_to_fen(position)}")
    print(f"status: {_status_line(position)}")
    legal = sorted(str(m) for m in MoveGenerator(position).generate_legal_moves())
    print(f"legal moves ({len(legal)}): {' '.join(legal)}")

    if args.perft is not None:
        counts = perft_divide(position, args.perft)
        for move_text, nodes in sorted((str(m), n) for m, n in counts.items()):
            print(f"{move_text}: {nodes}")
        print(f"nodes: {sum(counts.values())}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
