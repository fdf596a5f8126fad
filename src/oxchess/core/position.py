"""Complete game state (board + metadata) as an immutable value."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Final

from oxchess.core.board import Board
from oxchess.core.enums import CastlingRights, Color, MoveFlag, PieceType
from oxchess.core.errors import IllegalMove, InvalidSquare
from oxchess.core.move import Move, MoveRequest
from oxchess.core.move_generator import MoveGenerator
from oxchess.core.piece import Piece
from oxchess.core.types import A1, A8, H1, H8, Square, parse_square

_LOGGER = logging.getLogger(__name__)

# Corner squares whose rook carries a castling right.
_ROOK_HOMES: Final[dict[Color, tuple[tuple[Square, CastlingRights], ...]]] = {
    Color.WHITE: (
        (A1, CastlingRights.WHITE_QUEENSIDE),
        (H1, CastlingRights.WHITE_KINGSIDE),
    ),
    Color.BLACK: (
        (A8, CastlingRights.BLACK_QUEENSIDE),
        (H8, CastlingRights.BLACK_KINGSIDE),
    ),
}


def _revoke_rook_right(
    castling: CastlingRights, color: Color, sq: Square
) -> CastlingRights:
    for home, right in _ROOK_HOMES[color]:
        if sq == home and castling & right:
            return castling & ~right
    return castling


@dataclass(frozen=True, slots=True)
class Position:
    """Full chess position: board + side to move + castling + en passant +
    clocks + captured pieces + repetition table.

    A position is never modified; :meth:`apply_move` returns a new one and
    copies the board, captured list and repetition table it changes.
    Leaving ``repetitions`` empty seeds it with the position itself.
    """

    board: Board
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    captured: tuple[Piece, ...] = ()
    repetitions: Mapping[str, int] = field(default_factory=dict)

    # Compared by value; the board inside is mutable, so not hashable.
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        table = dict(self.repetitions) if self.repetitions else {self.repetition_key(): 1}
        object.__setattr__(self, "repetitions", MappingProxyType(table))

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position."""
        from oxchess.core.notation.fen import STARTING_FEN, position_from_fen

        return position_from_fen(STARTING_FEN)

    # ── Move generation ──────────────────────────────────────────────────

    def legal_moves(
        self,
        piece: PieceType | str | None = None,
        square: Square | str | None = None,
    ) -> list[Move]:
        """Legal moves for the side to move.

        *piece* (a type or its letter) and *square* (an index or a name)
        narrow the origin squares.  An unknown square name or piece letter
        matches nothing and yields an empty list.
        """
        piece_type: PieceType | None = None
        if isinstance(piece, str):
            try:
                piece_type = PieceType.from_letter(piece)
            except ValueError:
                return []
        elif piece is not None:
            piece_type = piece

        if isinstance(square, str):
            try:
                square = parse_square(square.lower())
            except InvalidSquare:
                return []

        return MoveGenerator(self).generate_legal_moves(piece_type, square)

    # ── State transition ─────────────────────────────────────────────────

    def board_after(self, move: Move) -> Board:
        """Board that results from playing *move* (no bookkeeping)."""
        if self.board[move.from_sq] is None:
            return self.board
        return self._play_on_board(move)[0]

    def apply_move(self, move: Move) -> Position:
        """Return the position after *move*; ``self`` is left untouched.

        *move* is trusted to be pseudo-legal.  An empty origin square makes
        this a no-op that returns ``self``.
        """
        piece = self.board[move.from_sq]
        if piece is None:
            return self

        us = self.side_to_move
        them = us.opposite
        board, taken = self._play_on_board(move)

        # Castling rights
        castling = self.castling
        if piece.piece_type == PieceType.KING:
            castling &= ~CastlingRights.both(us)
        if castling & CastlingRights.both(us):
            castling = _revoke_rook_right(castling, us, move.from_sq)
        if castling & CastlingRights.both(them):
            castling = _revoke_rook_right(castling, them, move.to_sq)

        # En passant target for the opponent
        en_passant: Square | None = None
        if move.flags & MoveFlag.BIG_PAWN:
            en_passant = move.to_sq + (16 if us == Color.WHITE else -16)

        # Clocks
        if piece.piece_type == PieceType.PAWN or move.is_capture or taken:
            halfmove_clock = 0
        else:
            halfmove_clock = self.halfmove_clock + 1

        fullmove_number = self.fullmove_number
        if us == Color.BLACK:
            fullmove_number += 1

        moved = replace(
            self,
            board=board,
            side_to_move=them,
            castling=castling,
            en_passant=en_passant,
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
            captured=self.captured + tuple(taken),
        )
        repetitions = dict(self.repetitions)
        key = moved.repetition_key()
        repetitions[key] = repetitions.get(key, 0) + 1
        return replace(moved, repetitions=repetitions)

    def make_move(
        self,
        from_sq: Square | str,
        to_sq: Square | str,
        promotion: PieceType | str | None = None,
    ) -> Position:
        """Play the legal move matching the request.

        Raises :class:`~oxchess.core.errors.IllegalMove` when no legal move
        goes from *from_sq* to *to_sq* (with the requested *promotion* when
        the move promotes).
        """
        if isinstance(promotion, str):
            try:
                promotion = PieceType.from_letter(promotion)
            except ValueError:
                # Unknown letters match no promotion but leave other moves playable.
                promotion = None
        request = MoveRequest(
            parse_square(from_sq) if isinstance(from_sq, str) else from_sq,
            parse_square(to_sq) if isinstance(to_sq, str) else to_sq,
            promotion,
        )

        for move in self.legal_moves():
            if request.matches(move):
                return self.apply_move(move)

        _LOGGER.debug("Rejected move request %s in %r", request, self.repetition_key())
        raise IllegalMove(request)

    def _play_on_board(self, move: Move) -> tuple[Board, list[Piece]]:
        board = self.board.copy()
        piece = board[move.from_sq]
        assert piece is not None
        taken: list[Piece] = []

        target = board[move.to_sq]
        if target is not None:
            taken.append(target)

        if move.promotion is not None:
            piece = piece.promoted(move.promotion)
        board[move.to_sq] = piece
        board[move.from_sq] = None

        # En passant: the captured pawn sits behind the target square
        if move.flags & MoveFlag.EP_CAPTURE:
            ep_capture_sq = move.to_sq + (16 if self.side_to_move == Color.WHITE else -16)
            ep_pawn = board[ep_capture_sq]
            if ep_pawn is not None:
                taken.append(ep_pawn)
                board[ep_capture_sq] = None

        # Slide the rook for castling
        if piece.piece_type == PieceType.KING:
            if move.flags & MoveFlag.KSIDE_CASTLE:
                rook_from, rook_to = move.to_sq + 1, move.to_sq - 1
            elif move.flags & MoveFlag.QSIDE_CASTLE:
                rook_from, rook_to = move.to_sq - 2, move.to_sq + 1
            else:
                return board, taken
            rook = board[rook_from]
            if rook is not None:
                board[rook_to] = rook
                board[rook_from] = None

        return board, taken

    # ── Repetition bookkeeping ───────────────────────────────────────────

    def repetition_key(self) -> str:
        """Placement, side, castling and en-passant fields of the position."""
        from oxchess.core.notation.fen import position_to_fen, trim_fen

        return trim_fen(position_to_fen(self))

    def repetition_count(self) -> int:
        """How many times the current position occurred in game history."""
        return self.repetitions.get(self.repetition_key(), 0)
