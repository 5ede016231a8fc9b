"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from mateboard.core.enums import PieceType
from mateboard.core.types import Square, square_str


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single move.

    Promotion contract: a pawn move that lands on the mover's last rank
    must name its promotion piece explicitly. The generator emits one move
    per promotion choice, and a final-rank pawn move without ``promotion``
    is never legal. Moves of any other kind carry ``promotion=None``.
    """

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None

    @classmethod
    def of(
        cls,
        from_xy: tuple[int, int],
        to_xy: tuple[int, int],
        promotion: PieceType | None = None,
    ) -> Move:
        """Build a move from plain ``(x, y)`` pairs."""
        return cls(Square(*from_xy), Square(*to_xy), promotion)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_str(self.from_sq)}->{square_str(self.to_sq)}"
        if self.promotion is not None:
            base += f"={self.promotion.code}"
        return base
