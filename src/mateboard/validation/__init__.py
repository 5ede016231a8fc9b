"""Puzzle validation APIs."""

from mateboard.validation.models import (
    BatchValidationReport,
    PuzzleValidationResult,
    SelfTestResult,
)
from mateboard.validation.selftest import run_self_test
from mateboard.validation.validator import validate_puzzle, validate_puzzles

__all__ = [
    "BatchValidationReport",
    "PuzzleValidationResult",
    "SelfTestResult",
    "run_self_test",
    "validate_puzzle",
    "validate_puzzles",
]
