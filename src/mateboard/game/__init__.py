"""Play layer: a single-puzzle session driven one ply at a time.

Quick start::

    from mateboard.game import MoveOutcome, PuzzleSession

    session = PuzzleSession(puzzle)
    if session.submit_move(move) == MoveOutcome.CORRECT:
        session.play_reply()
"""

from mateboard.game.session import (
    MoveOutcome,
    PuzzleSession,
    SessionEvents,
    SessionPhase,
)

__all__ = [
    "MoveOutcome",
    "PuzzleSession",
    "SessionEvents",
    "SessionPhase",
]
