"""PuzzleSession: plays one puzzle a ply at a time.

The session owns the ephemeral replay state (current pieces, side to move,
index into the solution line) and checks the solver's moves against the
scripted line. Scheduling the opponent's reply, animation and progress
persistence belong to the caller: after a correct move the session waits
in ``SessionPhase.AWAITING_REPLY`` until :meth:`PuzzleSession.play_reply`
is called.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum, auto

from mateboard.core.board import find_king
from mateboard.core.enums import Color
from mateboard.core.move import Move
from mateboard.core.move_generator import MoveGenerator, apply_move
from mateboard.core.piece import Piece
from mateboard.core.rules import Rules
from mateboard.core.types import Square, check_board_size
from mateboard.puzzles.models import Puzzle

_LOGGER = logging.getLogger(__name__)


class SessionPhase(IntEnum):
    """Finite-state-machine states of a puzzle session."""

    AWAITING_MOVE = auto()
    AWAITING_REPLY = auto()
    SOLVED = auto()
    FINISHED = auto()  # line exhausted without mate


class MoveOutcome(IntEnum):
    """How a submitted move was received."""

    CORRECT = auto()
    WRONG = auto()  # legal, but not the scripted move
    ILLEGAL = auto()
    IGNORED = auto()  # not the solver's turn


# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, Color], None]  # move, mover
WrongMoveCallback = Callable[[Move, int], None]  # move, attempts so far
FinishedCallback = Callable[[bool], None]  # solved


@dataclass
class SessionEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_wrong_move: list[WrongMoveCallback] = field(default_factory=list)
    on_finished: list[FinishedCallback] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class _Snapshot:
    pieces: tuple[Piece, ...]
    side_to_move: Color
    line_index: int


class PuzzleSession:
    """Interactive replay of a single puzzle's solution line.

    Args:
        puzzle: The puzzle to play; never modified.
        reset_on_wrong_move: Restart from the initial position after a wrong
            move instead of only rejecting it.
    """

    __slots__ = (
        "_puzzle",
        "_reset_on_wrong_move",
        "_pieces",
        "_side",
        "_line_index",
        "_phase",
        "_history",
        "_last_move",
        "_wrong_attempts",
        "events",
    )

    def __init__(self, puzzle: Puzzle, *, reset_on_wrong_move: bool = False) -> None:
        check_board_size(puzzle.size)
        self._puzzle = puzzle
        self._reset_on_wrong_move = reset_on_wrong_move
        self._wrong_attempts = 0
        self.events = SessionEvents()
        self._reset_position()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def puzzle(self) -> Puzzle:
        return self._puzzle

    @property
    def pieces(self) -> tuple[Piece, ...]:
        return self._pieces

    @property
    def side_to_move(self) -> Color:
        return self._side

    @property
    def solver(self) -> Color:
        """The side the player controls."""
        return self._puzzle.side_to_move

    @property
    def line_index(self) -> int:
        return self._line_index

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def wrong_attempts(self) -> int:
        return self._wrong_attempts

    @property
    def last_move(self) -> Move | None:
        return self._last_move

    @property
    def is_over(self) -> bool:
        return self._phase in (SessionPhase.SOLVED, SessionPhase.FINISHED)

    @property
    def checked_king_square(self) -> Square | None:
        """Square of the side-to-move's king when it is in check."""
        if not Rules.is_in_check(self._pieces, self._side, self._puzzle.size):
            return None
        king = find_king(self._pieces, self._side)
        return king.square if king is not None else None

    def expected_move(self) -> Move | None:
        """Next scripted move, or ``None`` once the line is exhausted."""
        line = self._puzzle.line
        if self._line_index >= len(line):
            return None
        return line[self._line_index].move

    def hint(self) -> Move | None:
        """The scripted move, but only when it is the solver's turn."""
        if self._phase != SessionPhase.AWAITING_MOVE:
            return None
        return self.expected_move()

    # ── Queries for move highlighting ────────────────────────────────────

    def legal_moves_from(self, sq: tuple[int, int]) -> list[Move]:
        """Legal moves of the side-to-move's piece on *sq*."""
        if self._phase != SessionPhase.AWAITING_MOVE:
            return []
        gen = MoveGenerator(self._pieces, self._puzzle.size)
        return [m for m in gen.generate_legal_moves(self._side) if m.from_sq == sq]

    def legal_destinations(self, sq: tuple[int, int]) -> list[Square]:
        """Distinct destination squares for the piece on *sq*."""
        seen: dict[Square, None] = {}
        for move in self.legal_moves_from(sq):
            seen.setdefault(move.to_sq, None)
        return list(seen)

    # ── Play ─────────────────────────────────────────────────────────────

    def submit_move(self, move: Move) -> MoveOutcome:
        """Check the solver's *move* against the line and apply it if correct."""
        if self._phase != SessionPhase.AWAITING_MOVE:
            return MoveOutcome.IGNORED

        if move not in self.legal_moves_from(move.from_sq):
            _LOGGER.debug("Illegal move attempt %s", move)
            return MoveOutcome.ILLEGAL

        if move != self.expected_move():
            self._wrong_attempts += 1
            _LOGGER.debug(
                "Wrong move %s in %s (expected %s)",
                move,
                self._puzzle.id,
                self.expected_move(),
            )
            if self._reset_on_wrong_move:
                self._reset_position()
            for cb in self.events.on_wrong_move:
                cb(move, self._wrong_attempts)
            return MoveOutcome.WRONG

        self._advance(move)
        return MoveOutcome.CORRECT

    def play_reply(self) -> Move | None:
        """Play the opponent's scripted reply; ``None`` if none is due."""
        if self._phase != SessionPhase.AWAITING_REPLY:
            return None
        move = self.expected_move()
        assert move is not None
        self._advance(move)
        return move

    def undo(self) -> bool:
        """Take back plies until it is the solver's turn again."""
        if not self._history:
            return False
        snapshot = self._history.pop()
        while snapshot.side_to_move != self.solver and self._history:
            snapshot = self._history.pop()
        self._pieces = snapshot.pieces
        self._side = snapshot.side_to_move
        self._line_index = snapshot.line_index
        self._last_move = None
        self._phase = SessionPhase.AWAITING_MOVE
        return True

    def restart(self) -> None:
        """Back to the initial position; wrong attempts are kept."""
        self._reset_position()

    # ── Internals ────────────────────────────────────────────────────────

    def _reset_position(self) -> None:
        self._pieces = tuple(self._puzzle.pieces)
        self._side = self._puzzle.side_to_move
        self._line_index = 0
        self._history: list[_Snapshot] = []
        self._last_move = None
        self._phase = SessionPhase.AWAITING_MOVE
        if not self._puzzle.line:
            self._finish()

    def _advance(self, move: Move) -> None:
        mover = self._side
        self._history.append(_Snapshot(self._pieces, self._side, self._line_index))
        self._pieces = apply_move(self._pieces, move, self._puzzle.size)
        self._side = mover.opposite
        self._line_index += 1
        self._last_move = move

        for cb in self.events.on_move:
            cb(move, mover)

        line = self._puzzle.line
        if self._line_index >= len(line):
            self._finish()
        elif line[self._line_index].color != self.solver:
            self._phase = SessionPhase.AWAITING_REPLY
        else:
            self._phase = SessionPhase.AWAITING_MOVE

    def _finish(self) -> None:
        solved = Rules.is_checkmate(self._pieces, self._side, self._puzzle.size)
        self._phase = SessionPhase.SOLVED if solved else SessionPhase.FINISHED
        if solved:
            _LOGGER.info("Puzzle %s solved", self._puzzle.id)
        else:
            _LOGGER.warning(
                "Puzzle %s line complete but not checkmate", self._puzzle.id
            )
        for cb in self.events.on_finished:
            cb(solved)
