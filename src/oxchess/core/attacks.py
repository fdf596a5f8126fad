"""Attack detection over the 0x88 board.

The difference between an attacker's square and a target square is unique
for every (direction, distance) pair, so one lookup tells which piece types
could hit the target from there on an empty board.  ``ATTACKS`` holds that
piece-type bitmask and ``RAYS`` the single step that walks from the
attacker toward the target; both are indexed by ``attacker - target + 119``.
"""

from __future__ import annotations

from typing import Final

from oxchess.core.board import Board
from oxchess.core.enums import Color, PieceType
from oxchess.core.types import BOARD_SQUARES, Square, is_on_board

PIECE_MASKS: Final[dict[PieceType, int]] = {
    PieceType.PAWN: 0x01,
    PieceType.KNIGHT: 0x02,
    PieceType.BISHOP: 0x04,
    PieceType.ROOK: 0x08,
    PieceType.QUEEN: 0x10,
    PieceType.KING: 0x20,
}

PAWN_CAPTURE_OFFSETS: Final[tuple[int, ...]] = (-17, -15, 15, 17)
KNIGHT_OFFSETS: Final[tuple[int, ...]] = (-18, -33, -31, -14, 18, 33, 31, 14)
BISHOP_DIRS: Final[tuple[int, ...]] = (-17, -15, 17, 15)
ROOK_DIRS: Final[tuple[int, ...]] = (-16, 1, 16, -1)
QUEEN_DIRS: Final[tuple[int, ...]] = (-17, -16, -15, 1, 17, 16, 15, -1)
KING_OFFSETS: Final[tuple[int, ...]] = QUEEN_DIRS

_TABLE_SIZE: Final = 239
_TABLE_BIAS: Final = 119


# -- Precomputed lookup tables ---------------------------------------------


def _build_tables() -> tuple[tuple[int, ...], tuple[int, ...]]:
    attacks = [0] * _TABLE_SIZE
    rays = [0] * _TABLE_SIZE

    def mark_steps(from_sq: Square, offsets: tuple[int, ...], mask: int) -> None:
        for offset in offsets:
            to_sq = from_sq + offset
            if is_on_board(to_sq):
                attacks[from_sq - to_sq + _TABLE_BIAS] |= mask

    def mark_slides(from_sq: Square, directions: tuple[int, ...], mask: int) -> None:
        for step in directions:
            to_sq = from_sq + step
            while is_on_board(to_sq):
                index = from_sq - to_sq + _TABLE_BIAS
                attacks[index] |= mask
                rays[index] = step
                to_sq += step

    for sq in BOARD_SQUARES:
        mark_steps(sq, PAWN_CAPTURE_OFFSETS, PIECE_MASKS[PieceType.PAWN])
        mark_steps(sq, KNIGHT_OFFSETS, PIECE_MASKS[PieceType.KNIGHT])
        mark_steps(sq, KING_OFFSETS, PIECE_MASKS[PieceType.KING])
        mark_slides(sq, BISHOP_DIRS, PIECE_MASKS[PieceType.BISHOP])
        mark_slides(sq, ROOK_DIRS, PIECE_MASKS[PieceType.ROOK])
        mark_slides(sq, QUEEN_DIRS, PIECE_MASKS[PieceType.QUEEN])

    return tuple(attacks), tuple(rays)


ATTACKS, RAYS = _build_tables()


# -- Queries ----------------------------------------------------------------


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    Occupancy of *sq* itself is ignored: a piece "attacks" squares held by
    its own side as well.
    """
    for from_sq, piece in board.occupied():
        if piece.color != by_color:
            continue

        diff = from_sq - sq
        if diff == 0:
            continue

        index = diff + _TABLE_BIAS
        if not ATTACKS[index] & PIECE_MASKS[piece.piece_type]:
            continue

        piece_type = piece.piece_type
        if piece_type == PieceType.PAWN:
            # Pawns only strike forward: white from below, black from above.
            if (diff > 0) == (by_color == Color.WHITE):
                return True
            continue

        if piece_type == PieceType.KNIGHT or piece_type == PieceType.KING:
            return True

        step = RAYS[index]
        walk = from_sq + step
        while walk != sq:
            if board[walk] is not None:
                break
            walk += step
        else:
            return True

    return False


def is_king_attacked(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked?  A board without that king never is."""
    king_sq = board.king_square(color)
    if king_sq is None:
        return False
    return is_square_attacked(board, king_sq, color.opposite)
