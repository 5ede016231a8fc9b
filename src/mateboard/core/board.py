"""Queries over a flat piece collection.

Positions are plain iterables of :class:`Piece`; every helper here is a
total function, so a lookup on an empty square returns ``None`` instead of
raising.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from mateboard.core.enums import Color, PieceType
from mateboard.core.piece import Piece
from mateboard.core.types import on_board, square_str


def piece_at(pieces: Iterable[Piece], sq: tuple[int, int]) -> Piece | None:
    """Piece standing on *sq*, or ``None``."""
    x, y = sq
    for piece in pieces:
        if piece.x == x and piece.y == y:
            return piece
    return None


def pieces_of(pieces: Iterable[Piece], color: Color) -> list[Piece]:
    """All pieces belonging to *color*."""
    return [p for p in pieces if p.color == color]


def find_king(pieces: Iterable[Piece], color: Color) -> Piece | None:
    """First king of *color*, or ``None`` if it has none."""
    for piece in pieces:
        if piece.piece_type == PieceType.KING and piece.color == color:
            return piece
    return None


def count_kings(pieces: Iterable[Piece], color: Color) -> int:
    return sum(
        1 for p in pieces if p.piece_type == PieceType.KING and p.color == color
    )


def last_rank(color: Color, size: int) -> int:
    """Row on which *color*'s pawns promote."""
    return size - 1 if color == Color.WHITE else 0


def start_rank(color: Color, size: int) -> int:
    """Row from which *color*'s pawns may advance two squares."""
    return 1 if color == Color.WHITE else size - 2


def occupancy_errors(pieces: Iterable[Piece], size: int) -> list[str]:
    """Describe off-board pieces and squares holding more than one piece."""
    errors: list[str] = []
    squares: Counter[tuple[int, int]] = Counter()
    for piece in pieces:
        if not on_board(piece.x, piece.y, size):
            errors.append(f"Piece off the {size}x{size} board: {piece.label}")
        squares[(piece.x, piece.y)] += 1
    for sq, count in sorted(squares.items()):
        if count > 1:
            errors.append(f"Square {square_str(sq)} holds {count} pieces")
    return errors


def render(pieces: Iterable[Piece], size: int) -> str:
    """Text diagram of the position, top row first."""
    grid = [["." for _ in range(size)] for _ in range(size)]
    for piece in pieces:
        if on_board(piece.x, piece.y, size):
            grid[piece.y][piece.x] = str(piece)
    rows = [f"{y} {' '.join(grid[y])}" for y in range(size - 1, -1, -1)]
    rows.append("  " + " ".join(str(x) for x in range(size)))
    return "\n".join(rows)
