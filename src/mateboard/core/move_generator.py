"""Legal and pseudo-legal move generation, attack detection, move application.

Every function takes a snapshot of the position (a flat piece collection
plus the board size) and returns new values; nothing is mutated in place.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from mateboard.core.board import find_king, last_rank, piece_at, start_rank
from mateboard.core.enums import PROMOTION_TYPES, Color, PieceType
from mateboard.core.move import Move
from mateboard.core.piece import Piece
from mateboard.core.types import Square, on_board

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


class MoveGenerator:
    """Generates moves for one position snapshot.

    The snapshot is indexed by square once on construction; the pieces
    themselves are never modified.
    """

    __slots__ = ("_pieces", "_size", "_occupancy")

    def __init__(self, pieces: Iterable[Piece], size: int) -> None:
        self._pieces = tuple(pieces)
        self._size = size
        self._occupancy: dict[tuple[int, int], Piece] = {
            (p.x, p.y): p for p in self._pieces
        }

    # -- Public API ---------------------------------------------------------

    def generate_pseudo_legal_moves(self, color: Color) -> list[Move]:
        """All pseudo-legal moves of *color* (may leave own king in check)."""
        moves: list[Move] = []
        for piece in self._pieces:
            if piece.color == color:
                self._gen_piece(piece, moves)
        return moves

    def generate_legal_moves(self, color: Color) -> list[Move]:
        """All strictly legal moves of *color*."""
        legal: list[Move] = []
        append_legal = legal.append
        for move in self.generate_pseudo_legal_moves(color):
            after = apply_move(self._pieces, move, self._size)
            if not is_in_check(after, color, self._size):
                append_legal(move)
        return legal

    # -- Attack detection ---------------------------------------------------

    def is_square_attacked(self, sq: tuple[int, int], by_color: Color) -> bool:
        """Is *sq* the target of any pseudo-legal move of *by_color*?"""
        x, y = sq
        return any(
            m.to_sq.x == x and m.to_sq.y == y
            for m in self.generate_pseudo_legal_moves(by_color)
        )

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent? False without a king."""
        king = find_king(self._pieces, color)
        if king is None:
            return False
        return self.is_square_attacked(king.square, color.opposite)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_piece(self, piece: Piece, moves: list[Move]) -> None:
        piece_type = piece.piece_type
        if piece_type == PieceType.KING:
            self._gen_steps(piece, KING_OFFSETS, moves)
        elif piece_type == PieceType.QUEEN:
            self._gen_sliding(piece, QUEEN_DIRS, moves)
        elif piece_type == PieceType.ROOK:
            self._gen_sliding(piece, ROOK_DIRS, moves)
        elif piece_type == PieceType.BISHOP:
            self._gen_sliding(piece, BISHOP_DIRS, moves)
        elif piece_type == PieceType.KNIGHT:
            self._gen_steps(piece, KNIGHT_OFFSETS, moves)
        elif piece_type == PieceType.PAWN:
            self._gen_pawn(piece, moves)
        else:
            raise AssertionError(f"Unhandled piece type: {piece_type!r}")

    def _gen_steps(
        self,
        piece: Piece,
        offsets: tuple[tuple[int, int], ...],
        moves: list[Move],
    ) -> None:
        occupancy = self._occupancy
        from_sq = piece.square
        for dx, dy in offsets:
            nx = piece.x + dx
            ny = piece.y + dy
            if not on_board(nx, ny, self._size):
                continue
            target = occupancy.get((nx, ny))
            if target is None or target.color != piece.color:
                moves.append(Move(from_sq, Square(nx, ny)))

    def _gen_sliding(
        self,
        piece: Piece,
        directions: tuple[tuple[int, int], ...],
        moves: list[Move],
    ) -> None:
        occupancy = self._occupancy
        from_sq = piece.square
        for dx, dy in directions:
            nx = piece.x + dx
            ny = piece.y + dy
            while on_board(nx, ny, self._size):
                target = occupancy.get((nx, ny))
                if target is None:
                    moves.append(Move(from_sq, Square(nx, ny)))
                    nx += dx
                    ny += dy
                    continue
                if target.color != piece.color:
                    moves.append(Move(from_sq, Square(nx, ny)))
                break

    def _gen_pawn(self, piece: Piece, moves: list[Move]) -> None:
        occupancy = self._occupancy
        size = self._size
        color = piece.color
        step = color.forward
        promo_rank = last_rank(color, size)
        from_sq = piece.square

        ny = piece.y + step
        if on_board(piece.x, ny, size) and (piece.x, ny) not in occupancy:
            _add_pawn_move(moves, from_sq, Square(piece.x, ny), ny == promo_rank)
            if piece.y == start_rank(color, size):
                ny2 = piece.y + 2 * step
                if on_board(piece.x, ny2, size) and (piece.x, ny2) not in occupancy:
                    _add_pawn_move(
                        moves, from_sq, Square(piece.x, ny2), ny2 == promo_rank
                    )

        for dx in (-1, 1):
            nx = piece.x + dx
            if not on_board(nx, ny, size):
                continue
            target = occupancy.get((nx, ny))
            if target is not None and target.color != color:
                _add_pawn_move(moves, from_sq, Square(nx, ny), ny == promo_rank)


def _add_pawn_move(
    moves: list[Move], from_sq: Square, to_sq: Square, promotes: bool
) -> None:
    if promotes:
        for pt in PROMOTION_TYPES:
            moves.append(Move(from_sq, to_sq, pt))
    else:
        moves.append(Move(from_sq, to_sq))


# -- Functional API ---------------------------------------------------------


def generate_pseudo_legal_moves(
    pieces: Iterable[Piece], size: int, color: Color
) -> list[Move]:
    """Moves obeying movement and blocking rules, ignoring own-king safety."""
    return MoveGenerator(pieces, size).generate_pseudo_legal_moves(color)


def generate_legal_moves(
    pieces: Iterable[Piece], size: int, color: Color
) -> list[Move]:
    """Pseudo-legal moves that do not leave *color*'s own king in check."""
    return MoveGenerator(pieces, size).generate_legal_moves(color)


def legal_moves_from(
    pieces: Iterable[Piece], size: int, sq: tuple[int, int]
) -> list[Move]:
    """Legal moves of the piece on *sq*; empty when the square is empty."""
    pieces = tuple(pieces)
    piece = piece_at(pieces, sq)
    if piece is None:
        return []
    return [
        m
        for m in generate_legal_moves(pieces, size, piece.color)
        if m.from_sq == piece.square
    ]


def is_square_attacked(
    pieces: Iterable[Piece], sq: tuple[int, int], by_color: Color, size: int
) -> bool:
    return MoveGenerator(pieces, size).is_square_attacked(sq, by_color)


def is_in_check(pieces: Iterable[Piece], color: Color, size: int) -> bool:
    return MoveGenerator(pieces, size).is_in_check(color)


def apply_move(pieces: Iterable[Piece], move: Move, size: int) -> tuple[Piece, ...]:
    """Return the position after *move*; the input collection is untouched.

    A piece on the destination square is captured. A pawn reaching its last
    rank takes the kind named by ``move.promotion``, which is mandatory there.

    Raises:
        ValueError: if a pawn reaches its last rank without a promotion.
    """
    pieces = tuple(pieces)
    mover = piece_at(pieces, move.from_sq)
    if mover is None:
        _LOGGER.warning("apply_move: no piece at from square for %s", move)
        return pieces

    if (
        move.promotion is None
        and mover.piece_type == PieceType.PAWN
        and move.to_sq[1] == last_rank(mover.color, size)
    ):
        raise ValueError(f"Pawn move {move} reaches the last rank without a promotion")

    vacated = {tuple(move.from_sq), tuple(move.to_sq)}
    remaining = tuple(p for p in pieces if (p.x, p.y) not in vacated)
    return remaining + (mover.moved_to(move.to_sq, move.promotion),)
