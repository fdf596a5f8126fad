"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from dataclasses import replace

import pytest

from oxchess.core.notation import STARTING_FEN, position_from_fen
from oxchess.core.position import Position
from oxchess.core.types import E1, E8


@pytest.fixture
def start() -> Position:
    """The standard starting position."""
    return position_from_fen(STARTING_FEN)


@pytest.fixture
def no_kings(start: Position) -> Position:
    """Starting position with both kings lifted off the board."""
    board = start.board.copy()
    board[E1] = None
    board[E8] = None
    return replace(start, board=board, repetitions={})
