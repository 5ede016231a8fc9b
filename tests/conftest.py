"""Shared pytest fixtures used across the test suite."""

import pytest
from puzzle_records import back_rank_record, ladder_record, promotion_record

from mateboard.puzzles import Puzzle, parse_puzzle


@pytest.fixture
def back_rank_puzzle() -> Puzzle:
    return parse_puzzle(back_rank_record())


@pytest.fixture
def ladder_puzzle() -> Puzzle:
    return parse_puzzle(ladder_record())


@pytest.fixture
def promotion_puzzle() -> Puzzle:
    return parse_puzzle(promotion_record())
