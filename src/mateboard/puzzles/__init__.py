"""Puzzle content: models, record schema and the puzzle store."""

from mateboard.puzzles.models import Objective, ObjectiveKind, Puzzle, PuzzleLineMove
from mateboard.puzzles.schema import (
    PuzzleFormatError,
    PuzzleRecord,
    load_puzzles,
    parse_puzzle,
    parse_puzzles,
    puzzle_to_record,
)
from mateboard.puzzles.store import PuzzleStore

__all__ = [
    "Objective",
    "ObjectiveKind",
    "Puzzle",
    "PuzzleFormatError",
    "PuzzleLineMove",
    "PuzzleRecord",
    "PuzzleStore",
    "load_puzzles",
    "parse_puzzle",
    "parse_puzzles",
    "puzzle_to_record",
]
