"""High-level rules: check, checkmate and stalemate detection."""

from __future__ import annotations

from collections.abc import Iterable

from mateboard.core.enums import Color, GameResult
from mateboard.core.move_generator import MoveGenerator
from mateboard.core.piece import Piece


class Rules:
    """Static rule-checker over a flat piece collection.

    Draws by repetition, move counters or material are not modelled.
    """

    @staticmethod
    def is_in_check(pieces: Iterable[Piece], color: Color, size: int) -> bool:
        return MoveGenerator(pieces, size).is_in_check(color)

    @staticmethod
    def is_checkmate(pieces: Iterable[Piece], color: Color, size: int) -> bool:
        gen = MoveGenerator(pieces, size)
        if not gen.is_in_check(color):
            return False
        return len(gen.generate_legal_moves(color)) == 0

    @staticmethod
    def is_stalemate(pieces: Iterable[Piece], color: Color, size: int) -> bool:
        gen = MoveGenerator(pieces, size)
        if gen.is_in_check(color):
            return False
        return len(gen.generate_legal_moves(color)) == 0

    @staticmethod
    def game_result(pieces: Iterable[Piece], color: Color, size: int) -> GameResult:
        """Result of the position with *color* to move."""
        gen = MoveGenerator(pieces, size)
        if gen.generate_legal_moves(color):
            return GameResult.IN_PROGRESS
        if gen.is_in_check(color):
            return (
                GameResult.BLACK_WINS if color == Color.WHITE else GameResult.WHITE_WINS
            )
        return GameResult.STALEMATE


is_checkmate = Rules.is_checkmate
is_stalemate = Rules.is_stalemate
