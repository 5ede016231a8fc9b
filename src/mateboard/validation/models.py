"""Data models produced by puzzle validation."""

from __future__ import annotations

from dataclasses import dataclass

from mateboard.core.move import Move


@dataclass(slots=True, frozen=True)
class SelfTestResult:
    """Outcome of the move-generator regression checks."""

    passed: bool
    errors: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class PuzzleValidationResult:
    """Pass/fail verdict for one puzzle.

    ``failing_move_index`` is the zero-based position in the puzzle line of
    the first rejected ply; ``legal_moves_at_failure`` lists the legal moves
    from that ply's ``from`` square, when a piece of the right side stood
    there.
    """

    puzzle_id: str
    passed: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    failing_move_index: int | None = None
    failing_move: Move | None = None
    legal_moves_at_failure: tuple[Move, ...] | None = None


@dataclass(slots=True, frozen=True)
class BatchValidationReport:
    """Self-test outcome plus per-puzzle results for a whole collection."""

    self_test: SelfTestResult
    results: tuple[PuzzleValidationResult, ...]

    @property
    def total_puzzles(self) -> int:
        return len(self.results)

    @property
    def passed_puzzles(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed_puzzles(self) -> tuple[PuzzleValidationResult, ...]:
        return tuple(r for r in self.results if not r.passed)

    @property
    def trusted(self) -> bool:
        """Puzzle verdicts mean nothing if the generator failed its self-test."""
        return self.self_test.passed

    @property
    def passed(self) -> bool:
        return self.trusted and not self.failed_puzzles
