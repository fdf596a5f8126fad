"""Board - sparse 0x88 piece placement (the position store)."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Final

from oxchess.core.enums import Color, PieceType
from oxchess.core.errors import MalformedPlacement
from oxchess.core.piece import Piece
from oxchess.core.types import BOARD_SIZE, BOARD_SQUARES, Square, file_of, rank_of

_PIECE_CHARS: Final = frozenset("prnbqkPRNBQK")

# Standard 32-piece set, used to work out which pieces are off the board.
_INITIAL_SET: Final[tuple[PieceType, ...]] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
) + (PieceType.PAWN,) * 8
_OFFBOARD_FIRST_ID: Final = 128

_BOX_TOP: Final = "   ┌────────────────────────┐\n"
_BOX_BOTTOM: Final = "   └────────────────────────┘\n"
_FILE_LEGEND: Final = "     a  b  c  d  e  f  g  h"


class Board:
    """Fixed 128-slot board; padding slots are never occupied."""

    __slots__ = ("_squares",)

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * BOARD_SIZE

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        if sq & 0x88:
            raise IndexError(f"Square {sq:#x} is off the board")
        self._squares[sq] = piece

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """``(square, piece)`` pairs in a8 … h1 scan order."""
        squares = self._squares
        for sq in BOARD_SQUARES:
            piece = squares[sq]
            if piece is not None:
                yield sq, piece

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        return [
            sq
            for sq, piece in self.occupied()
            if piece.color == color and piece.piece_type == piece_type
        ]

    def king_square(self, color: Color) -> Square | None:
        """First square holding *color*'s king, or ``None`` if there is none."""
        for sq, piece in self.occupied():
            if piece.piece_type == PieceType.KING and piece.color == color:
                return sq
        return None

    def offboard_pieces(self) -> list[Piece]:
        """Pieces of the standard set that are not on the board.

        Ids are synthetic (numbered from 128) since these pieces were never
        placed.
        """
        remaining: list[tuple[Color, PieceType] | None] = [
            (color, pt) for pt in _INITIAL_SET for color in (Color.BLACK, Color.WHITE)
        ]
        for _, piece in self.occupied():
            key = (piece.color, piece.piece_type)
            if key in remaining:
                remaining[remaining.index(key)] = None

        missing = [entry for entry in remaining if entry is not None]
        return [
            Piece(_OFFBOARD_FIRST_ID + i, color, pt)
            for i, (color, pt) in enumerate(missing)
        ]

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        return b

    # -- Placement field ----------------------------------------------------

    @classmethod
    def from_placement(cls, placement: str) -> Board:
        """Decode the piece-placement field (rank 8 first).

        Pieces get ids 1, 2, 3 … in scan order.
        """
        ranks = placement.split("/")
        if len(ranks) != 8:
            raise MalformedPlacement(
                f"Placement must contain 8 '/'-delimited ranks: {placement!r}"
            )

        board = cls()
        next_id = 1
        for row, rank_text in enumerate(ranks):
            file = 0
            previous_was_digit = False
            for ch in rank_text:
                if ch in "0123456789":
                    if previous_was_digit:
                        raise MalformedPlacement(
                            f"Consecutive digits in rank {rank_text!r}: {placement!r}"
                        )
                    step = int(ch)
                    if not (1 <= step <= 8):
                        raise MalformedPlacement(
                            f"Invalid digit {ch!r} in placement: {placement!r}"
                        )
                    file += step
                    previous_was_digit = True
                elif ch in _PIECE_CHARS:
                    if file < 8:
                        board._squares[(row << 4) | file] = Piece.from_char(ch, next_id)
                        next_id += 1
                    file += 1
                    previous_was_digit = False
                else:
                    raise MalformedPlacement(
                        f"Invalid piece character {ch!r} in placement: {placement!r}"
                    )
            if file != 8:
                raise MalformedPlacement(
                    f"Rank {rank_text!r} does not span 8 files: {placement!r}"
                )
        return board

    def to_placement(self) -> str:
        """Encode the board as a placement field."""
        rows: list[str] = []
        for row in range(8):
            empty = 0
            text = ""
            for file in range(8):
                piece = self._squares[(row << 4) | file]
                if piece is None:
                    empty += 1
                    continue
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
            if empty:
                text += str(empty)
            rows.append(text)
        return "/".join(rows)

    # -- Rendering ----------------------------------------------------------

    def render(self, pretty: bool = True) -> str:
        """Boxed 8x8 text diagram, rank 8 at the top.

        With *pretty* the pieces are drawn as Unicode chess symbols,
        otherwise as their placement letters.
        """
        out = _BOX_TOP
        for sq in BOARD_SQUARES:
            if file_of(sq) == 0:
                out += f" {rank_of(sq) + 1} │"
            piece = self._squares[sq]
            if piece is None:
                out += " · "
            else:
                out += f" {piece.symbol if pretty else piece} "
            if file_of(sq) == 7:
                out += "│\n"
        return out + _BOX_BOTTOM + _FILE_LEGEND

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return self.render(pretty=False)
