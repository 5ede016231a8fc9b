"""Fixed regression checks on the move generator itself.

These run before any puzzle content is validated. A failure here means the
rules oracle is broken, so puzzle verdicts computed with it are not to be
trusted.
"""

from __future__ import annotations

import logging

from mateboard.core.enums import Color, PieceType
from mateboard.core.move import Move
from mateboard.core.move_generator import (
    apply_move,
    generate_legal_moves,
    generate_pseudo_legal_moves,
)
from mateboard.core.piece import Piece
from mateboard.core.rules import is_checkmate
from mateboard.core.types import Square
from mateboard.validation.models import SelfTestResult

_LOGGER = logging.getLogger(__name__)

_SIZE = 8

# Row/column swaps show up first on these two neighbours of (3, 3).
_KING_CENTER = Square(3, 3)
_KING_TARGETS = frozenset(
    Square(3 + dx, 3 + dy)
    for dx in (-1, 0, 1)
    for dy in (-1, 0, 1)
    if (dx, dy) != (0, 0)
)


def _destinations(moves: list[Move], from_sq: Square) -> set[Square]:
    return {m.to_sq for m in moves if m.from_sq == from_sq}


def _check_lone_king(errors: list[str]) -> None:
    pieces = [Piece(Color.WHITE, PieceType.KING, *_KING_CENTER)]
    moves = generate_legal_moves(pieces, _SIZE, Color.WHITE)
    targets = _destinations(moves, _KING_CENTER)
    if len(moves) != 8:
        errors.append(f"King at [3, 3] should have 8 moves, got {len(moves)}")
    if targets != _KING_TARGETS:
        missing = ", ".join(map(str, sorted(_KING_TARGETS - targets)))
        extra = ", ".join(map(str, sorted(targets - _KING_TARGETS)))
        errors.append(
            f"King at [3, 3] targets wrong squares (missing {missing}, extra {extra})"
        )
    for sq in (Square(2, 3), Square(3, 2)):
        if sq not in targets:
            errors.append(f"King at [3, 3] missing move to {sq}")


def _check_corner_rook(errors: list[str]) -> None:
    pieces = [Piece(Color.WHITE, PieceType.ROOK, 0, 0)]
    moves = generate_pseudo_legal_moves(pieces, _SIZE, Color.WHITE)
    if len(moves) != 14:
        errors.append(f"Rook at [0, 0] should have 14 pseudo moves, got {len(moves)}")


def _check_pawn_direction(errors: list[str]) -> None:
    white = [Piece(Color.WHITE, PieceType.PAWN, 0, 1)]
    targets = _destinations(
        generate_pseudo_legal_moves(white, _SIZE, Color.WHITE), Square(0, 1)
    )
    if targets != {Square(0, 2), Square(0, 3)}:
        errors.append("White pawn at [0, 1] should move to [0, 2] and [0, 3]")

    black = [Piece(Color.BLACK, PieceType.PAWN, 0, 6)]
    targets = _destinations(
        generate_pseudo_legal_moves(black, _SIZE, Color.BLACK), Square(0, 6)
    )
    if targets != {Square(0, 5), Square(0, 4)}:
        errors.append("Black pawn at [0, 6] should move to [0, 5] and [0, 4]")


def _check_rook_mate(errors: list[str]) -> None:
    pieces = [
        Piece(Color.WHITE, PieceType.KING, 6, 5),
        Piece(Color.WHITE, PieceType.ROOK, 0, 6),
        Piece(Color.BLACK, PieceType.KING, 7, 7),
    ]
    after = apply_move(pieces, Move.of((0, 6), (0, 7)), _SIZE)
    if not is_checkmate(after, Color.BLACK, _SIZE):
        errors.append("Rook mate on the back rank not recognised as checkmate")

    # Undefended rook next to the king: check, but the king takes it.
    pieces = [
        Piece(Color.WHITE, PieceType.KING, 0, 0),
        Piece(Color.WHITE, PieceType.ROOK, 0, 6),
        Piece(Color.BLACK, PieceType.KING, 7, 7),
    ]
    after = apply_move(pieces, Move.of((0, 6), (7, 6)), _SIZE)
    if is_checkmate(after, Color.BLACK, _SIZE):
        errors.append("King able to capture the checking rook reported as mated")


_CHECKS = (
    _check_lone_king,
    _check_corner_rook,
    _check_pawn_direction,
    _check_rook_mate,
)


def run_self_test() -> SelfTestResult:
    """Run every fixed check and collect the failures."""
    errors: list[str] = []
    for check in _CHECKS:
        check(errors)

    if errors:
        _LOGGER.error("Move generator self-test FAILED")
        for error in errors:
            _LOGGER.error("  %s", error)
    else:
        _LOGGER.debug("Move generator self-test passed")
    return SelfTestResult(passed=not errors, errors=tuple(errors))
