"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from mateboard.core.enums import Color, PieceType
from mateboard.core.types import Square


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable piece standing on a square.

    Positions are flat collections of these; there is no board matrix.
    """

    color: Color
    piece_type: PieceType
    x: int
    y: int

    @property
    def square(self) -> Square:
        return Square(self.x, self.y)

    def moved_to(self, sq: Square, piece_type: PieceType | None = None) -> Piece:
        """Copy of this piece standing on *sq*, optionally changing its type."""
        return Piece(
            self.color,
            self.piece_type if piece_type is None else piece_type,
            sq[0],
            sq[1],
        )

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Letter (uppercase = white, lowercase = black)."""
        letter = self.piece_type.code
        return letter if self.color == Color.WHITE else letter.lower()

    @property
    def label(self) -> str:
        """Human-readable description, e.g. 'white rook at [0, 3]'."""
        return f"{self.color} {self.piece_type} at [{self.x}, {self.y}]"
