"""Raw puzzle records shared by the tests."""

from typing import Any


def back_rank_record() -> dict[str, Any]:
    """5x5 mate in 1: the rook lands beside the king, guarded by its own king."""
    return {
        "id": "back-rank",
        "title": "Back Rank Mate",
        "pack": "Beginner",
        "size": 5,
        "difficulty": 1,
        "sideToMoveFirst": "w",
        "pieces": [
            {"kind": "K", "side": "w", "x": 3, "y": 2},
            {"kind": "R", "side": "w", "x": 0, "y": 3},
            {"kind": "K", "side": "b", "x": 4, "y": 4},
            {"kind": "N", "side": "b", "x": 3, "y": 4},
        ],
        "objective": {"kind": "mate", "depth": 1},
        "line": [{"side": "w", "from": [0, 3], "to": [4, 3]}],
    }


def ladder_record() -> dict[str, Any]:
    """5x5 mate in 2 with two rooks climbing to the top row."""
    return {
        "id": "rook-ladder",
        "title": "Rook Ladder",
        "pack": "Intermediate",
        "size": 5,
        "difficulty": 2,
        "sideToMoveFirst": "w",
        "pieces": [
            {"kind": "K", "side": "w", "x": 4, "y": 0},
            {"kind": "R", "side": "w", "x": 4, "y": 1},
            {"kind": "R", "side": "w", "x": 0, "y": 2},
            {"kind": "K", "side": "b", "x": 2, "y": 3},
        ],
        "objective": {"kind": "mate", "depth": 2},
        "line": [
            {"side": "w", "from": [4, 1], "to": [4, 3]},
            {"side": "b", "from": [2, 3], "to": [2, 4]},
            {"side": "w", "from": [0, 2], "to": [0, 4]},
        ],
    }


def promotion_record() -> dict[str, Any]:
    """6x6 mate in 1 by promoting a pawn to a queen on the top row."""
    return {
        "id": "promotion",
        "title": "Promote and Mate",
        "pack": "Intermediate",
        "size": 6,
        "difficulty": 3,
        "sideToMoveFirst": "w",
        "pieces": [
            {"kind": "K", "side": "w", "x": 5, "y": 3},
            {"kind": "P", "side": "w", "x": 0, "y": 4},
            {"kind": "K", "side": "b", "x": 5, "y": 5},
        ],
        "objective": {"kind": "mate", "depth": 1},
        "line": [{"side": "w", "from": [0, 4], "to": [0, 5], "promotion": "Q"}],
    }

