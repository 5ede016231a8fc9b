"""Puzzle record schema and loaders for static puzzle content.

Records follow the shape::

    {"id": ..., "title": ..., "pack": ..., "size": 5, "difficulty": 1,
     "sideToMoveFirst": "w",
     "pieces": [{"kind": "K", "side": "w", "x": 0, "y": 0}, ...],
     "objective": {"kind": "mate", "depth": 1, "note": null},
     "line": [{"side": "w", "from": [0, 3], "to": [4, 3], "promotion": null}]}

Only the structure is checked here; chess legality is the validator's job.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from mateboard.core.enums import PROMOTION_TYPES, Color, PieceType
from mateboard.core.move import Move
from mateboard.core.piece import Piece
from mateboard.core.types import MAX_BOARD_SIZE, MIN_BOARD_SIZE
from mateboard.puzzles.models import Objective, ObjectiveKind, Puzzle, PuzzleLineMove

_LOGGER = logging.getLogger(__name__)


class PuzzleFormatError(ValueError):
    """Raised when puzzle content does not match the record schema."""


def _parse_color(value: Any) -> Any:
    if isinstance(value, str):
        return Color.from_code(value)
    return value


def _parse_piece_type(value: Any) -> Any:
    if isinstance(value, str):
        return PieceType.from_code(value)
    return value


RecordColor = Annotated[Color, BeforeValidator(_parse_color)]
RecordPieceType = Annotated[PieceType, BeforeValidator(_parse_piece_type)]


class PieceRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: RecordPieceType
    side: RecordColor
    x: int
    y: int

    def to_piece(self) -> Piece:
        return Piece(self.side, self.kind, self.x, self.y)


class ObjectiveRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["mate"] = "mate"
    depth: int = Field(1, ge=1)
    note: str | None = None

    def to_objective(self) -> Objective:
        return Objective(ObjectiveKind(self.kind), self.depth, self.note)


class LineMoveRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    side: RecordColor
    from_sq: tuple[int, int] = Field(alias="from")
    to_sq: tuple[int, int] = Field(alias="to")
    promotion: PieceType | None = None

    @field_validator("promotion", mode="before")
    @classmethod
    def _check_promotion(cls, value: Any) -> Any:
        if value is None:
            return None
        piece_type = _parse_piece_type(value)
        if piece_type not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {value!r}")
        return piece_type

    def to_line_move(self) -> PuzzleLineMove:
        return PuzzleLineMove(
            self.side, Move.of(self.from_sq, self.to_sq, self.promotion)
        )


class PuzzleRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(min_length=1)
    title: str = ""
    pack: str = ""
    size: int = Field(ge=MIN_BOARD_SIZE, le=MAX_BOARD_SIZE)
    difficulty: int = Field(1, ge=1, le=5)
    side_to_move_first: RecordColor = Field(alias="sideToMoveFirst")
    pieces: list[PieceRecord]
    objective: ObjectiveRecord = Field(default_factory=ObjectiveRecord)
    line: list[LineMoveRecord]

    def to_puzzle(self) -> Puzzle:
        return Puzzle(
            id=self.id,
            title=self.title,
            pack=self.pack,
            size=self.size,
            difficulty=self.difficulty,
            side_to_move=self.side_to_move_first,
            pieces=tuple(p.to_piece() for p in self.pieces),
            objective=self.objective.to_objective(),
            line=tuple(m.to_line_move() for m in self.line),
        )


def parse_puzzle(data: dict[str, Any]) -> Puzzle:
    """Build a :class:`Puzzle` from one record mapping."""
    try:
        return PuzzleRecord.model_validate(data).to_puzzle()
    except ValidationError as exc:
        puzzle_id = data.get("id", "?") if isinstance(data, dict) else "?"
        raise PuzzleFormatError(f"Invalid puzzle record {puzzle_id!r}: {exc}") from exc


def parse_puzzles(data: Iterable[dict[str, Any]]) -> list[Puzzle]:
    """Build puzzles from a sequence of records; ids must be unique."""
    puzzles: list[Puzzle] = []
    seen: set[str] = set()
    for record in data:
        puzzle = parse_puzzle(record)
        if puzzle.id in seen:
            raise PuzzleFormatError(f"Duplicate puzzle id: {puzzle.id!r}")
        seen.add(puzzle.id)
        puzzles.append(puzzle)
    return puzzles


def load_puzzles(path: str | Path) -> list[Puzzle]:
    """Load puzzles from a JSON file holding a list (or ``{"puzzles": [...]}``)."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise PuzzleFormatError(f"{path}: not valid JSON ({exc})") from exc
    except UnicodeDecodeError as exc:
        raise PuzzleFormatError(f"{path}: not valid UTF-8 ({exc})") from exc
    except OSError as exc:
        raise PuzzleFormatError(f"{path}: cannot be read ({exc})") from exc

    if isinstance(data, dict):
        data = data.get("puzzles")
    if not isinstance(data, list):
        raise PuzzleFormatError(f"{path}: expected a list of puzzle records")

    puzzles = parse_puzzles(data)
    _LOGGER.info("Loaded %d puzzles from %s", len(puzzles), path)
    return puzzles


def puzzle_to_record(puzzle: Puzzle) -> dict[str, Any]:
    """Inverse of :func:`parse_puzzle`, using the short record codes."""
    return {
        "id": puzzle.id,
        "title": puzzle.title,
        "pack": puzzle.pack,
        "size": puzzle.size,
        "difficulty": puzzle.difficulty,
        "sideToMoveFirst": puzzle.side_to_move.code,
        "pieces": [
            {"kind": p.piece_type.code, "side": p.color.code, "x": p.x, "y": p.y}
            for p in puzzle.pieces
        ],
        "objective": {
            "kind": str(puzzle.objective.kind),
            "depth": puzzle.objective.depth,
            "note": puzzle.objective.note,
        },
        "line": [
            {
                "side": lm.color.code,
                "from": list(lm.move.from_sq),
                "to": list(lm.move.to_sq),
                "promotion": lm.move.promotion.code if lm.move.promotion else None,
            }
            for lm in puzzle.line
        ],
    }
