"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from oxchess.core import Rules, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    pos = pos.make_move("e2", "e4")
    for move in pos.legal_moves():
        print(move)
    print(Rules.is_game_over(pos))
"""

from oxchess.core.attacks import is_king_attacked, is_square_attacked
from oxchess.core.board import Board
from oxchess.core.enums import CastlingRights, Color, GameResult, MoveFlag, PieceType
from oxchess.core.errors import (
    ChessError,
    IllegalMove,
    InvalidFen,
    InvalidSquare,
    MalformedPlacement,
)
from oxchess.core.move import Move, MoveRequest
from oxchess.core.move_generator import MoveGenerator
from oxchess.core.notation import (
    STARTING_FEN,
    FenValidation,
    position_from_fen,
    position_to_fen,
    trim_fen,
    validate_fen,
)
from oxchess.core.perft import perft, perft_divide
from oxchess.core.piece import Piece
from oxchess.core.position import Position
from oxchess.core.rules import Rules
from oxchess.core.types import (
    BOARD_SQUARES,
    Square,
    file_of,
    is_on_board,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Errors
    "ChessError",
    "IllegalMove",
    "InvalidFen",
    "InvalidSquare",
    "MalformedPlacement",
    # Types / helpers
    "BOARD_SQUARES",
    "Square",
    "file_of",
    "is_on_board",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "MoveRequest",
    "Piece",
    "Position",
    "Rules",
    # Attacks
    "is_king_attacked",
    "is_square_attacked",
    # Notation
    "STARTING_FEN",
    "FenValidation",
    "position_from_fen",
    "position_to_fen",
    "trim_fen",
    "validate_fen",
    # Move-count oracle
    "perft",
    "perft_divide",
]
