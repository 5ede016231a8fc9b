"""Tests for puzzle records: parsing, loading and serialisation."""

import json
from pathlib import Path

import pytest
from puzzle_records import back_rank_record, ladder_record, promotion_record

from mateboard.core.enums import Color, PieceType
from mateboard.core.move import Move
from mateboard.core.piece import Piece
from mateboard.puzzles import (
    ObjectiveKind,
    PuzzleFormatError,
    PuzzleLineMove,
    load_puzzles,
    parse_puzzle,
    parse_puzzles,
    puzzle_to_record,
)


class TestParsePuzzle:
    def test_fields(self) -> None:
        puzzle = parse_puzzle(ladder_record())
        assert puzzle.id == "rook-ladder"
        assert puzzle.size == 5
        assert puzzle.side_to_move == Color.WHITE
        assert puzzle.difficulty == 2
        assert puzzle.pack == "Intermediate"
        assert puzzle.objective.kind == ObjectiveKind.MATE
        assert puzzle.objective.depth == 2
        assert puzzle.expected_plies == 3
        assert Piece(Color.BLACK, PieceType.KING, 2, 3) in puzzle.pieces
        assert puzzle.line[1] == PuzzleLineMove(Color.BLACK, Move.of((2, 3), (2, 4)))

    def test_promotion_field(self) -> None:
        puzzle = parse_puzzle(promotion_record())
        assert puzzle.line[0].move.promotion == PieceType.QUEEN

    def test_long_codes_are_accepted(self) -> None:
        record = back_rank_record()
        record["sideToMoveFirst"] = "white"
        record["pieces"][1] = {"kind": "rook", "side": "White", "x": 0, "y": 3}
        puzzle = parse_puzzle(record)
        assert Piece(Color.WHITE, PieceType.ROOK, 0, 3) in puzzle.pieces

    def test_defaults(self) -> None:
        record = back_rank_record()
        for key in ("title", "pack", "difficulty", "objective"):
            del record[key]
        puzzle = parse_puzzle(record)
        assert puzzle.title == ""
        assert puzzle.difficulty == 1
        assert puzzle.objective.depth == 1

    def test_unknown_top_level_keys_are_ignored(self) -> None:
        record = back_rank_record()
        record["author"] = "someone"
        assert parse_puzzle(record).id == "back-rank"


class TestFormatErrors:
    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("size", 3),
            ("size", 9),
            ("difficulty", 6),
            ("sideToMoveFirst", "green"),
            ("id", ""),
        ],
    )
    def test_invalid_top_level_value(self, key: str, value: object) -> None:
        record = back_rank_record()
        record[key] = value
        with pytest.raises(PuzzleFormatError):
            parse_puzzle(record)

    def test_missing_line(self) -> None:
        record = back_rank_record()
        del record["line"]
        with pytest.raises(PuzzleFormatError, match="back-rank"):
            parse_puzzle(record)

    def test_unknown_piece_kind(self) -> None:
        record = back_rank_record()
        record["pieces"][0]["kind"] = "Z"
        with pytest.raises(PuzzleFormatError):
            parse_puzzle(record)

    def test_cannot_promote_to_king(self) -> None:
        record = promotion_record()
        record["line"][0]["promotion"] = "K"
        with pytest.raises(PuzzleFormatError):
            parse_puzzle(record)

    def test_unknown_objective(self) -> None:
        record = back_rank_record()
        record["objective"] = {"kind": "win-material", "depth": 1}
        with pytest.raises(PuzzleFormatError):
            parse_puzzle(record)

    def test_zero_depth(self) -> None:
        record = back_rank_record()
        record["objective"]["depth"] = 0
        with pytest.raises(PuzzleFormatError):
            parse_puzzle(record)

    def test_format_error_is_a_value_error(self) -> None:
        assert issubclass(PuzzleFormatError, ValueError)


class TestParsePuzzles:
    def test_many(self) -> None:
        puzzles = parse_puzzles([back_rank_record(), ladder_record()])
        assert [p.id for p in puzzles] == ["back-rank", "rook-ladder"]

    def test_duplicate_ids(self) -> None:
        with pytest.raises(PuzzleFormatError, match="Duplicate"):
            parse_puzzles([back_rank_record(), back_rank_record()])


class TestLoadPuzzles:
    def test_list_file(self, tmp_path: Path) -> None:
        path = tmp_path / "puzzles.json"
        path.write_text(json.dumps([back_rank_record(), ladder_record()]))
        assert len(load_puzzles(path)) == 2

    def test_wrapped_file(self, tmp_path: Path) -> None:
        path = tmp_path / "puzzles.json"
        path.write_text(json.dumps({"puzzles": [promotion_record()]}))
        assert load_puzzles(str(path))[0].id == "promotion"

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("[{")
        with pytest.raises(PuzzleFormatError, match="not valid JSON"):
            load_puzzles(path)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "latin.json"
        path.write_bytes(b'[{"id": "\xff"}]')
        with pytest.raises(PuzzleFormatError, match="not valid UTF-8"):
            load_puzzles(path)

    def test_unreadable_path(self, tmp_path: Path) -> None:
        with pytest.raises(PuzzleFormatError, match="cannot be read"):
            load_puzzles(tmp_path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(PuzzleFormatError, match="cannot be read"):
            load_puzzles(tmp_path / "absent.json")

    def test_wrong_top_level_shape(self, tmp_path: Path) -> None:
        path = tmp_path / "odd.json"
        path.write_text(json.dumps({"items": []}))
        with pytest.raises(PuzzleFormatError, match="expected a list"):
            load_puzzles(path)


class TestPuzzleToRecord:
    def test_record_parses_back_to_same_puzzle(self) -> None:
        puzzle = parse_puzzle(promotion_record())
        record = puzzle_to_record(puzzle)
        assert record["line"][0]["promotion"] == "Q"
        assert record["sideToMoveFirst"] == "w"
        assert parse_puzzle(record) == puzzle
