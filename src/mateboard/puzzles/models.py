"""Puzzle data models.

Puzzles are built once from static content and never mutated; validators
and play sessions derive their own working copies of ``pieces``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from mateboard.core.enums import Color
from mateboard.core.move import Move
from mateboard.core.piece import Piece


class ObjectiveKind(StrEnum):
    """What the first mover has to achieve."""

    MATE = "mate"


@dataclass(slots=True, frozen=True)
class Objective:
    kind: ObjectiveKind = ObjectiveKind.MATE
    depth: int = 1
    note: str | None = None


@dataclass(slots=True, frozen=True)
class PuzzleLineMove:
    """One scripted ply of the solution, annotated with the side playing it."""

    color: Color
    move: Move


@dataclass(slots=True, frozen=True)
class Puzzle:
    """A puzzle definition with its unique intended solution line."""

    id: str
    size: int
    side_to_move: Color
    pieces: tuple[Piece, ...]
    line: tuple[PuzzleLineMove, ...]
    objective: Objective = field(default_factory=Objective)
    title: str = ""
    pack: str = ""
    difficulty: int = 1

    @property
    def expected_plies(self) -> int:
        """Plies a mate line of the objective depth should contain."""
        return 2 * self.objective.depth - 1
