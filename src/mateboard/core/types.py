"""Square type and coordinate helpers.

Board layout for an N x N board (4 <= N <= 8):
    x is the column, growing to the right,
    y is the row, growing upward from White's side,
    (0, 0) is the bottom-left corner from White's point of view.
"""

from __future__ import annotations

from typing import NamedTuple

MIN_BOARD_SIZE = 4
MAX_BOARD_SIZE = 8


class Square(NamedTuple):
    """Board coordinate ``(x, y)``."""

    x: int
    y: int

    def __str__(self) -> str:
        return square_str(self)


def on_board(x: int, y: int, size: int) -> bool:
    """Whether ``(x, y)`` lies on a *size* x *size* board."""
    return 0 <= x < size and 0 <= y < size


def check_board_size(size: int) -> int:
    """Return *size* unchanged, or raise if it is not a supported board size."""
    if isinstance(size, bool) or not isinstance(size, int):
        raise ValueError(f"Board size must be an integer, got {size!r}")
    if not MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE:
        raise ValueError(
            f"Board size must be between {MIN_BOARD_SIZE} and "
            f"{MAX_BOARD_SIZE}, got {size}"
        )
    return size


def square_str(sq: tuple[int, int]) -> str:
    """Diagnostic form, e.g. ``(3, 2)`` -> ``'[3, 2]'``."""
    return f"[{sq[0]}, {sq[1]}]"
