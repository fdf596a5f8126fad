"""Domain errors raised by the rules core."""

from __future__ import annotations

from typing import Any


class ChessError(ValueError):
    """Base class for every error raised by :mod:`oxchess.core`."""


class InvalidSquare(ChessError):
    """A square name is not one of the 64 ``<file><rank>`` combinations."""


class MalformedPlacement(ChessError):
    """The piece-placement field of a position string is structurally wrong."""


class InvalidFen(ChessError):
    """A position string cannot be decoded (field count, side, clocks)."""


class IllegalMove(ChessError):
    """The requested move is not among the legal moves of the position."""

    def __init__(self, request: Any) -> None:
        self.request = request
        super().__init__(f"Illegal move: {request}")
