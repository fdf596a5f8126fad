"""FEN parsing, serialization and validation."""

from __future__ import annotations

import logging
import re
from typing import Final

from oxchess.core.attacks import is_king_attacked
from oxchess.core.board import Board
from oxchess.core.enums import CastlingRights, Color, MoveFlag, PieceType
from oxchess.core.errors import InvalidFen
from oxchess.core.move import Move
from oxchess.core.notation.models import FenValidation
from oxchess.core.position import Position
from oxchess.core.types import Square, is_on_board, parse_square, square_name

_LOGGER = logging.getLogger(__name__)

STARTING_FEN: Final = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# Appended, in order, to position strings that stop after the side to move.
_DEFAULT_TAIL: Final = ("-", "-", "0", "1")

_CASTLING_CHARS: Final[tuple[tuple[str, CastlingRights], ...]] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)

_EP_FIELD_RE: Final = re.compile(r"^(-|[a-h][36])$")
_CASTLING_FIELD_RE: Final = re.compile(r"[^kKqQ-]")
_SIDE_FIELD_RE: Final = re.compile(r"^(w|b)$")
_PIECE_CHAR_RE: Final = re.compile(r"^[prnbqkPRNBQK]$")
_INT_RE: Final = re.compile(r"^[+-]?[0-9]+$")


def trim_fen(fen: str) -> str:
    """First four fields of *fen*: the part that decides legal continuations."""
    return " ".join(fen.split(" ")[:4])


def position_from_fen(fen: str = STARTING_FEN) -> Position:
    """Parse a FEN string into a :class:`Position`.

    At least two fields are required; missing trailing fields default to
    ``- - 0 1`` and anything after the sixth field is ignored.
    """
    parts = fen.split()[:6]
    if len(parts) < 2:
        raise InvalidFen(f"Invalid FEN (need at least 2 fields): {fen!r}")
    parts += _DEFAULT_TAIL[len(parts) - 2 :]

    placement, side_part, castling_part, ep_part, half_part, full_part = parts

    # 1. Piece placement
    board = Board.from_placement(placement)

    # 2. Side to move
    try:
        side = Color.from_char(side_part)
    except ValueError as exc:
        raise InvalidFen(f"Invalid FEN side-to-move field: {side_part!r}") from exc

    # 3. Castling
    castling = CastlingRights.NONE
    for ch, right in _CASTLING_CHARS:
        if ch in castling_part:
            castling |= right

    # 4. En passant
    ep: Square | None = None if ep_part == "-" else parse_square(ep_part)

    # 5–6. Clocks
    try:
        halfmove = int(half_part)
        fullmove = int(full_part)
    except ValueError as exc:
        raise InvalidFen(f"Invalid FEN move counters: {fen!r}") from exc
    if halfmove < 0:
        raise InvalidFen(f"Invalid FEN halfmove clock: {half_part!r}")
    if fullmove < 1:
        raise InvalidFen(f"Invalid FEN fullmove number: {full_part!r}")

    return Position(board, side, castling, ep, halfmove, fullmove)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN.

    The en-passant square is written only when a pawn of the side to move
    can legally take on it; otherwise the field is ``-``.
    """
    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if pos.castling & right)
    return " ".join(
        (
            pos.board.to_placement(),
            pos.side_to_move.fen_char,
            castling_str or "-",
            _en_passant_field(pos),
            str(pos.halfmove_clock),
            str(pos.fullmove_number),
        )
    )


def _en_passant_field(pos: Position) -> str:
    ep = pos.en_passant
    if ep is None:
        return "-"

    color = pos.side_to_move
    # Square of the pawn that just advanced two ranks.
    big_pawn_sq = ep + (16 if color == Color.WHITE else -16)
    for sq in (big_pawn_sq + 1, big_pawn_sq - 1):
        if not is_on_board(sq):
            continue
        piece = pos.board[sq]
        if piece is None or piece.color != color or piece.piece_type != PieceType.PAWN:
            continue
        board = pos.board_after(Move(sq, ep, MoveFlag.EP_CAPTURE))
        if not is_king_attacked(board, color):
            return square_name(ep)
    return "-"


def validate_fen(fen: str) -> FenValidation:
    """Check *fen* against the structural rules of a position string.

    Never raises; the first violated rule is reported in ``error``.
    """
    error = _first_fen_error(fen)
    if error is None:
        return FenValidation(ok=True)
    _LOGGER.debug("%s: %r", error, fen)
    return FenValidation(ok=False, error=error)


def _first_fen_error(fen: str) -> str | None:
    tokens = fen.split()
    if len(tokens) != 6:
        return "Invalid FEN: must contain six space-delimited fields"

    if not _is_int(tokens[5]) or int(tokens[5]) <= 0:
        return "Invalid FEN: move number must be a positive integer"

    if not _is_int(tokens[4]) or int(tokens[4]) < 0:
        return "Invalid FEN: half move counter number must be a non-negative integer"

    if not _EP_FIELD_RE.match(tokens[3]):
        return "Invalid FEN: en-passant square is invalid"

    if _CASTLING_FIELD_RE.search(tokens[2]):
        return "Invalid FEN: castling availability is invalid"

    if not _SIDE_FIELD_RE.match(tokens[1]):
        return "Invalid FEN: side-to-move is invalid"

    rows = tokens[0].split("/")
    if len(rows) != 8:
        return "Invalid FEN: piece data does not contain 8 '/'-delimited rows"

    for row in rows:
        sum_fields = 0
        previous_was_number = False
        for ch in row:
            if ch in "0123456789":
                if previous_was_number:
                    return "Invalid FEN: piece data is invalid (consecutive number)"
                sum_fields += int(ch)
                previous_was_number = True
            else:
                if not _PIECE_CHAR_RE.match(ch):
                    return "Invalid FEN: piece data is invalid (invalid piece)"
                sum_fields += 1
                previous_was_number = False
        if sum_fields != 8:
            return "Invalid FEN: piece data is invalid (too many squares in rank)"

    # The target must sit behind a pawn of the side that just moved.
    if (tokens[3][-1] == "3" and tokens[1] == "w") or (
        tokens[3][-1] == "6" and tokens[1] == "b"
    ):
        return "Invalid FEN: illegal en-passant square"

    for color, king in (("white", "K"), ("black", "k")):
        count = tokens[0].count(king)
        if count == 0:
            return f"Invalid FEN: missing {color} king"
        if count > 1:
            return f"Invalid FEN: too many {color} kings"

    if any(ch in "Pp" for ch in rows[0] + rows[7]):
        return "Invalid FEN: some pawns are on the edge rows"

    return None


def _is_int(text: str) -> bool:
    return _INT_RE.match(text) is not None
