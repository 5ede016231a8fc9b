"""Puzzle validator: replays scripted solution lines through the rules engine.

Content problems never raise; they are collected as human-readable strings
in the returned result, so one broken puzzle does not stop a batch. Only a
malformed board size, which makes every engine answer meaningless, raises
``ValueError``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from mateboard.core.board import count_kings, occupancy_errors, piece_at, render
from mateboard.core.enums import Color
from mateboard.core.move import Move
from mateboard.core.move_generator import MoveGenerator, apply_move
from mateboard.core.piece import Piece
from mateboard.core.types import check_board_size, square_str
from mateboard.puzzles.models import ObjectiveKind, Puzzle
from mateboard.validation import selftest
from mateboard.validation.models import (
    BatchValidationReport,
    PuzzleValidationResult,
    SelfTestResult,
)

_LOGGER = logging.getLogger(__name__)


class _Failure(Exception):
    """Stops a replay at the first rejected ply."""

    def __init__(
        self,
        message: str,
        index: int,
        move: Move,
        legal_moves: tuple[Move, ...] | None = None,
    ) -> None:
        super().__init__(message)
        self.index = index
        self.move = move
        self.legal_moves = legal_moves


def _format_moves(moves: Iterable[Move]) -> str:
    text = ", ".join(str(m) for m in moves)
    return text or "none"


def _setup_errors(pieces: tuple[Piece, ...], size: int) -> list[str]:
    errors: list[str] = []
    for color in (Color.WHITE, Color.BLACK):
        kings = count_kings(pieces, color)
        if kings != 1:
            errors.append(f"Expected 1 {color} king, found {kings}")
    errors.extend(occupancy_errors(pieces, size))
    return errors


def _replay(puzzle: Puzzle) -> tuple[tuple[Piece, ...], Color]:
    """Play the whole line; raise :class:`_Failure` at the first bad ply."""
    size = puzzle.size
    pieces = tuple(puzzle.pieces)
    current = puzzle.side_to_move

    for index, line_move in enumerate(puzzle.line):
        move = line_move.move
        if line_move.color != current:
            raise _Failure(
                f"Move {index}: expected {current} to move, "
                f"line says {line_move.color}",
                index,
                move,
            )

        piece = piece_at(pieces, move.from_sq)
        if piece is None:
            raise _Failure(
                f"Move {index}: no piece at from square {square_str(move.from_sq)}",
                index,
                move,
            )
        if piece.color != current:
            raise _Failure(
                f"Move {index}: {piece.label} does not belong to {current}",
                index,
                move,
            )

        # Fresh legal-move list for this ply.
        legal = MoveGenerator(pieces, size).generate_legal_moves(current)
        if move not in legal:
            from_square = tuple(m for m in legal if m.from_sq == move.from_sq)
            raise _Failure(
                f"Move {index}: illegal move {move} for {piece.label}; "
                f"legal moves from that square: {_format_moves(from_square)}",
                index,
                move,
                from_square,
            )

        pieces = apply_move(pieces, move, size)
        current = current.opposite

    return pieces, current


def _mate_errors(pieces: tuple[Piece, ...], color: Color, size: int) -> list[str]:
    gen = MoveGenerator(pieces, size)
    in_check = gen.is_in_check(color)
    legal = gen.generate_legal_moves(color)
    if in_check and not legal:
        return []
    if not in_check:
        if not legal:
            return [f"Final position: {color} is stalemated, not checkmated"]
        return [f"Final position: {color} is not in check"]

    escaping = piece_at(pieces, legal[0].from_sq)
    escapes = [m for m in legal if m.from_sq == legal[0].from_sq]
    assert escaping is not None
    return [
        f"Final position: {color} is in check but not mated; "
        f"{escaping.label} escapes with {_format_moves(escapes)}"
    ]


def validate_puzzle(puzzle: Puzzle) -> PuzzleValidationResult:
    """Replay *puzzle*'s line and certify each ply and the final mate.

    Raises:
        ValueError: if the puzzle's board size is not supported.
    """
    size = check_board_size(puzzle.size)
    pieces = tuple(puzzle.pieces)

    errors = _setup_errors(pieces, size)
    if errors:
        return PuzzleValidationResult(puzzle.id, passed=False, errors=tuple(errors))

    warnings: list[str] = []
    if (
        puzzle.objective.kind == ObjectiveKind.MATE
        and len(puzzle.line) != puzzle.expected_plies
    ):
        warnings.append(
            f"Mate in {puzzle.objective.depth} should take "
            f"{puzzle.expected_plies} plies, line has {len(puzzle.line)}"
        )

    try:
        final_pieces, final_side = _replay(puzzle)
    except _Failure as failure:
        return PuzzleValidationResult(
            puzzle.id,
            passed=False,
            errors=(str(failure),),
            warnings=tuple(warnings),
            failing_move_index=failure.index,
            failing_move=failure.move,
            legal_moves_at_failure=failure.legal_moves,
        )

    if puzzle.objective.kind == ObjectiveKind.MATE:
        errors.extend(_mate_errors(final_pieces, final_side, size))

    if not errors:
        return PuzzleValidationResult(puzzle.id, passed=True, warnings=tuple(warnings))

    _LOGGER.debug("Final position of %s:\n%s", puzzle.id, render(final_pieces, size))
    # The last ply was meant to deliver mate and did not.
    last_index = len(puzzle.line) - 1 if puzzle.line else None
    return PuzzleValidationResult(
        puzzle.id,
        passed=False,
        errors=tuple(errors),
        warnings=tuple(warnings),
        failing_move_index=last_index,
        failing_move=puzzle.line[-1].move if puzzle.line else None,
    )


def validate_puzzles(
    puzzles: Iterable[Puzzle], *, run_self_test: bool = True
) -> BatchValidationReport:
    """Validate every puzzle independently, after the generator self-test.

    With ``run_self_test=False`` the self-test is skipped and reported
    as passed with no checks run.
    """
    puzzles = list(puzzles)
    _LOGGER.info("Validating %d puzzles", len(puzzles))

    self_test = selftest.run_self_test() if run_self_test else SelfTestResult(True)
    if not self_test.passed:
        _LOGGER.error("Self-test failed; puzzle verdicts below are not trustworthy")

    results: list[PuzzleValidationResult] = []
    for puzzle in puzzles:
        result = validate_puzzle(puzzle)
        results.append(result)
        if result.passed:
            _LOGGER.debug("Puzzle %s passed", puzzle.id)
            continue
        _LOGGER.warning("Puzzle %s FAILED", puzzle.id)
        for error in result.errors:
            _LOGGER.warning("  - %s", error)
        if result.failing_move_index is not None:
            _LOGGER.warning(
                "  Failing move %d: %s", result.failing_move_index, result.failing_move
            )

    report = BatchValidationReport(self_test=self_test, results=tuple(results))
    _LOGGER.info(
        "Validation complete. Passed: %d/%d",
        report.passed_puzzles,
        report.total_puzzles,
    )
    return report
