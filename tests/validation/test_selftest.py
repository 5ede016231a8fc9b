"""Tests for the move-generator self-test."""

import logging

import pytest

from mateboard.core import move_generator
from mateboard.validation import run_self_test


class TestSelfTest:
    def test_correct_generator_passes(self) -> None:
        result = run_self_test()
        assert result.passed
        assert result.errors == ()

    def test_broken_king_offset_fails(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        broken = tuple(
            (-2, 0) if offset == (-1, 0) else offset
            for offset in move_generator.KING_OFFSETS
        )
        monkeypatch.setattr(move_generator, "KING_OFFSETS", broken)

        with caplog.at_level(logging.ERROR, logger="mateboard.validation.selftest"):
            result = run_self_test()

        assert not result.passed
        assert any("missing move to [2, 3]" in e for e in result.errors)
        assert "self-test FAILED" in caplog.text

    def test_missing_rook_direction_fails(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(move_generator, "ROOK_DIRS", ((-1, 0), (0, -1), (0, 1)))
        result = run_self_test()
        assert not result.passed
        assert "Rook at [0, 0] should have 14 pseudo moves, got 7" in result.errors
