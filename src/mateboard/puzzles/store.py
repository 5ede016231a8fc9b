"""In-memory facade over a static puzzle collection."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from datetime import date, datetime, timezone

from mateboard.puzzles.models import Puzzle

_LOGGER = logging.getLogger(__name__)

_EPOCH = date(1970, 1, 1)


class PuzzleStore:
    """Read-only access, lookup and filtering for a puzzle collection."""

    __slots__ = ("_puzzles", "_by_id")

    def __init__(self, puzzles: Iterable[Puzzle]) -> None:
        self._puzzles: tuple[Puzzle, ...] = tuple(puzzles)
        self._by_id: dict[str, Puzzle] = {p.id: p for p in self._puzzles}

    def __len__(self) -> int:
        return len(self._puzzles)

    def __iter__(self) -> Iterator[Puzzle]:
        return iter(self._puzzles)

    def all(self) -> list[Puzzle]:
        return list(self._puzzles)

    def get(self, puzzle_id: str) -> Puzzle | None:
        return self._by_id.get(puzzle_id)

    def daily(self, day: date | datetime) -> Puzzle | None:
        """Deterministic puzzle of the day: UTC days since epoch modulo count.

        Aware datetimes are converted to UTC first; naive ones are taken as is.
        """
        if not self._puzzles:
            return None
        if isinstance(day, datetime):
            if day.tzinfo is not None:
                day = day.astimezone(timezone.utc)
            day = day.date()
        index = (day - _EPOCH).days % len(self._puzzles)
        return self._puzzles[index]

    def filter(
        self,
        *,
        size: int | None = None,
        difficulty: int | None = None,
        objective_kind: str | None = None,
        pack: str | None = None,
    ) -> list[Puzzle]:
        """Puzzles matching every criterion that is not ``None``."""
        return [
            p
            for p in self._puzzles
            if (size is None or p.size == size)
            and (difficulty is None or p.difficulty == difficulty)
            and (objective_kind is None or p.objective.kind == objective_kind)
            and (pack is None or p.pack == pack)
        ]

    def packs(self) -> list[str]:
        return sorted({p.pack for p in self._puzzles})

    def objective_kinds(self) -> list[str]:
        return sorted({str(p.objective.kind) for p in self._puzzles})

    def playable(self, *, dev_mode: bool = False) -> list[Puzzle]:
        """Puzzles offered for play.

        In dev mode every puzzle is validated and the failing ones are
        withheld; otherwise the collection is returned as is.
        """
        if not dev_mode:
            return list(self._puzzles)

        from mateboard.validation.validator import validate_puzzle

        playable: list[Puzzle] = []
        for puzzle in self._puzzles:
            result = validate_puzzle(puzzle)
            if result.passed:
                playable.append(puzzle)
            else:
                _LOGGER.warning(
                    "Withholding puzzle %s: %s", puzzle.id, "; ".join(result.errors)
                )
        return playable
