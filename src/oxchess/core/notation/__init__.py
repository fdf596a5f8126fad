"""Notation package: FEN parsing, serialization and validation."""

from oxchess.core.notation.fen import (
    STARTING_FEN,
    position_from_fen,
    position_to_fen,
    trim_fen,
    validate_fen,
)
from oxchess.core.notation.models import FenValidation

__all__ = [
    "STARTING_FEN",
    "FenValidation",
    "position_from_fen",
    "position_to_fen",
    "trim_fen",
    "validate_fen",
]
