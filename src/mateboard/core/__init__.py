"""Core domain layer: variable-size chess rules with zero external dependencies.

Quick start::

    from mateboard.core import Color, Move, Piece, PieceType, generate_legal_moves

    pieces = [Piece(Color.WHITE, PieceType.KING, 2, 2)]
    for move in generate_legal_moves(pieces, 5, Color.WHITE):
        print(move)
"""

from mateboard.core.board import (
    count_kings,
    find_king,
    last_rank,
    occupancy_errors,
    piece_at,
    pieces_of,
    render,
    start_rank,
)
from mateboard.core.enums import PROMOTION_TYPES, Color, GameResult, PieceType
from mateboard.core.move import Move
from mateboard.core.move_generator import (
    MoveGenerator,
    apply_move,
    generate_legal_moves,
    generate_pseudo_legal_moves,
    is_in_check,
    is_square_attacked,
    legal_moves_from,
)
from mateboard.core.piece import Piece
from mateboard.core.rules import Rules, is_checkmate, is_stalemate
from mateboard.core.types import (
    MAX_BOARD_SIZE,
    MIN_BOARD_SIZE,
    Square,
    check_board_size,
    on_board,
    square_str,
)

__all__ = [
    # Enums
    "Color",
    "GameResult",
    "PROMOTION_TYPES",
    "PieceType",
    # Types / helpers
    "MAX_BOARD_SIZE",
    "MIN_BOARD_SIZE",
    "Square",
    "check_board_size",
    "on_board",
    "square_str",
    # Domain objects
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
    # Board queries
    "count_kings",
    "find_king",
    "last_rank",
    "occupancy_errors",
    "piece_at",
    "pieces_of",
    "render",
    "start_rank",
    # Engine functions
    "apply_move",
    "generate_legal_moves",
    "generate_pseudo_legal_moves",
    "is_checkmate",
    "is_in_check",
    "is_square_attacked",
    "is_stalemate",
    "legal_moves_from",
]
