"""Tests for the command-line interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from puzzle_records import back_rank_record, ladder_record, promotion_record

from mateboard import __version__
from mateboard.app import cli
from mateboard.core import move_generator


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    for name in ("LOG_LEVEL", "DEV_MODE", "SELF_TEST", "VERBOSE"):
        monkeypatch.delenv(f"MATEBOARD_{name}", raising=False)
    return CliRunner()


def _write(tmp_path: Path, records: list[dict]) -> str:
    path = tmp_path / "puzzles.json"
    path.write_text(json.dumps(records))
    return str(path)


def _broken_record() -> dict:
    record = ladder_record()
    record["id"] = "broken"
    record["line"][0]["to"] = [3, 3]
    return record


class TestValidate:
    def test_all_pass(self, runner: CliRunner, tmp_path: Path) -> None:
        path = _write(tmp_path, [back_rank_record(), ladder_record()])
        result = runner.invoke(cli, ["validate", path])
        assert result.exit_code == 0
        assert "Passed 2/2 puzzles" in result.output

    def test_content_failure(self, runner: CliRunner, tmp_path: Path) -> None:
        path = _write(tmp_path, [back_rank_record(), _broken_record()])
        result = runner.invoke(cli, ["validate", path])
        assert result.exit_code == 1
        assert "FAIL broken" in result.output
        assert "failing move 0" in result.output
        assert "Passed 1/2 puzzles" in result.output

    def test_verbose_lists_passing(self, runner: CliRunner, tmp_path: Path) -> None:
        path = _write(tmp_path, [back_rank_record()])
        result = runner.invoke(cli, ["validate", "-v", path])
        assert "PASS back-rank" in result.output

    def test_self_test_failure(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        broken = tuple(
            (-2, 0) if offset == (-1, 0) else offset
            for offset in move_generator.KING_OFFSETS
        )
        monkeypatch.setattr(move_generator, "KING_OFFSETS", broken)
        path = _write(tmp_path, [promotion_record()])

        result = runner.invoke(cli, ["validate", path])
        assert result.exit_code == 2
        assert "SELF-TEST FAILED" in result.output

        skipped = runner.invoke(cli, ["validate", "--no-self-test", path])
        assert skipped.exit_code == 0

    def test_undecodable_file(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "puzzles.json"
        path.write_bytes(b'[{"id": "\xff"}]')
        result = runner.invoke(cli, ["validate", str(path)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "not valid UTF-8" in result.output

    def test_malformed_file(self, runner: CliRunner, tmp_path: Path) -> None:
        record = back_rank_record()
        record["size"] = 12
        result = runner.invoke(cli, ["validate", _write(tmp_path, [record])])
        assert result.exit_code == 1
        assert "Invalid puzzle record 'back-rank'" in result.output


class TestOtherCommands:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert __version__ in result.output

    def test_selftest(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["selftest"])
        assert result.exit_code == 0
        assert "Self-test passed" in result.output

    def test_list_with_filters(self, runner: CliRunner, tmp_path: Path) -> None:
        records = [back_rank_record(), ladder_record(), promotion_record()]
        path = _write(tmp_path, records)
        result = runner.invoke(cli, ["list", path, "--size", "5"])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert [line.split("\t")[0] for line in lines] == ["back-rank", "rook-ladder"]

    def test_list_dev_mode_hides_failures(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        path = _write(tmp_path, [back_rank_record(), _broken_record()])
        assert "broken" in runner.invoke(cli, ["list", path]).output
        args = ["--log-level", "ERROR", "list", "--dev-mode", path]
        result = runner.invoke(cli, args)
        assert "broken" not in result.output
        assert "back-rank" in result.output

    def test_show(self, runner: CliRunner, tmp_path: Path) -> None:
        path = _write(tmp_path, [back_rank_record()])
        result = runner.invoke(cli, ["show", path, "back-rank"])
        assert result.exit_code == 0
        assert "white to move, mate in 1" in result.output
        assert "0. white: [0, 3]->[4, 3]" in result.output
        assert "PASS back-rank" in result.output

    def test_show_unknown_id(self, runner: CliRunner, tmp_path: Path) -> None:
        path = _write(tmp_path, [back_rank_record()])
        result = runner.invoke(cli, ["show", path, "nope"])
        assert result.exit_code == 1
        assert "No puzzle with id 'nope'" in result.output
