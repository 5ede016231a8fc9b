"""Core enumerations for the puzzle rules engine."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def forward(self) -> int:
        """Pawn direction along y: +1 for white, -1 for black."""
        return 1 if self is Color.WHITE else -1

    @property
    def code(self) -> str:
        """Single-letter code used by puzzle records ('w' / 'b')."""
        return "w" if self is Color.WHITE else "b"

    @classmethod
    def from_code(cls, code: str) -> Color:
        """Parse 'w' / 'b' or a full color name."""
        value = code.strip().lower()
        if value in ("w", "white"):
            return cls.WHITE
        if value in ("b", "black"):
            return cls.BLACK
        raise ValueError(f"Invalid color: {code!r}")

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def code(self) -> str:
        """Single uppercase letter, e.g. 'N' for knight."""
        return _PIECE_CODES[self]

    @classmethod
    def from_code(cls, code: str) -> PieceType:
        """Parse 'K', 'q', 'knight', ... into a piece type."""
        value = code.strip()
        if len(value) == 1:
            for piece_type, letter in _PIECE_CODES.items():
                if letter == value.upper():
                    return piece_type
        else:
            try:
                return cls[value.upper()]
            except KeyError:
                pass
        raise ValueError(f"Invalid piece type: {code!r}")

    def __str__(self) -> str:
        return self.name.lower()


class GameResult(IntEnum):
    """Outcome of a position with respect to the side to move."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    STALEMATE = 3


_PIECE_CODES: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)
