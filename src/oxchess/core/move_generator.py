"""Legal and pseudo-legal move generation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from oxchess.core.attacks import (
    BISHOP_DIRS,
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    QUEEN_DIRS,
    ROOK_DIRS,
    is_king_attacked,
    is_square_attacked,
)
from oxchess.core.enums import CastlingRights, Color, MoveFlag, PieceType
from oxchess.core.move import Move
from oxchess.core.types import BOARD_SQUARES, E1, E8, Square, is_on_board

if TYPE_CHECKING:
    from oxchess.core.piece import Piece
    from oxchess.core.position import Position


# (single push, double push, capture offsets) per color
_PAWN_OFFSETS: Final[dict[Color, tuple[int, int, tuple[int, int]]]] = {
    Color.WHITE: (-16, -32, (-17, -15)),
    Color.BLACK: (16, 32, (17, 15)),
}
_PAWN_START_ROW: Final[dict[Color, int]] = {Color.WHITE: 6, Color.BLACK: 1}

_PROMOTION_TYPES: Final[tuple[PieceType, ...]] = (
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.ROOK,
    PieceType.QUEEN,
)

_STEP_OFFSETS: Final[dict[PieceType, tuple[int, ...]]] = {
    PieceType.KNIGHT: KNIGHT_OFFSETS,
    PieceType.KING: KING_OFFSETS,
}
_SLIDE_DIRS: Final[dict[PieceType, tuple[int, ...]]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}

_KING_HOME: Final[dict[Color, Square]] = {Color.WHITE: E1, Color.BLACK: E8}


class MoveGenerator:
    """Generates moves for the side to move of a :class:`Position`.

    Hypothetical moves are played on copies of the board, so the position
    is never touched.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(
        self,
        piece_type: PieceType | None = None,
        square: Square | None = None,
    ) -> list[Move]:
        """All strictly legal moves, optionally for one piece type / square."""
        return self.filter_legal(self.generate_pseudo_legal_moves(piece_type, square))

    def filter_legal(self, candidates: list[Move]) -> list[Move]:
        """Drop the candidates that leave the mover's king attacked."""
        moving_color = self._pos.side_to_move
        board_after = self._pos.board_after
        return [
            move
            for move in candidates
            if not is_king_attacked(board_after(move), moving_color)
        ]

    def generate_pseudo_legal_moves(
        self,
        piece_type: PieceType | None = None,
        square: Square | None = None,
    ) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Move] = []
        color = self._pos.side_to_move
        board = self._board

        if square is None:
            origins: tuple[Square, ...] = BOARD_SQUARES
        elif is_on_board(square):
            origins = (square,)
        else:
            return moves

        for sq in origins:
            piece = board[sq]
            if piece is None or piece.color != color:
                continue
            if piece_type is not None and piece.piece_type != piece_type:
                continue

            if piece.piece_type == PieceType.PAWN:
                self._gen_pawn(sq, color, moves)
            elif piece.piece_type in _SLIDE_DIRS:
                self._gen_sliding(sq, piece, _SLIDE_DIRS[piece.piece_type], moves)
            else:
                self._gen_steps(sq, piece, _STEP_OFFSETS[piece.piece_type], moves)
                if piece.piece_type == PieceType.KING:
                    self._gen_castling(sq, color, moves)

        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        return is_king_attacked(self._board, color)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return is_square_attacked(self._board, sq, by_color)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        single, double, captures = _PAWN_OFFSETS[color]
        candidates: list[Move] = []

        to_sq = sq + single
        if is_on_board(to_sq) and board.is_empty(to_sq):
            candidates.append(Move(sq, to_sq))
            to_sq = sq + double
            if (sq >> 4) == _PAWN_START_ROW[color] and board.is_empty(to_sq):
                candidates.append(Move(sq, to_sq, MoveFlag.BIG_PAWN))

        for offset in captures:
            to_sq = sq + offset
            if not is_on_board(to_sq):
                continue
            target = board[to_sq]
            if target is not None and target.color != color:
                candidates.append(Move(sq, to_sq, MoveFlag.CAPTURE))
            elif to_sq == self._pos.en_passant:
                candidates.append(Move(sq, to_sq, MoveFlag.EP_CAPTURE))

        for move in candidates:
            to_row = move.to_sq >> 4
            if to_row == 0 or to_row == 7:
                flags = MoveFlag.PROMOTION | (move.flags & MoveFlag.CAPTURE)
                for pt in _PROMOTION_TYPES:
                    moves.append(Move(move.from_sq, move.to_sq, flags, pt))
            else:
                moves.append(move)

    def _gen_steps(
        self,
        sq: Square,
        piece: Piece,
        offsets: tuple[int, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for offset in offsets:
            to_sq = sq + offset
            if not is_on_board(to_sq):
                continue
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq))
            elif target.color != piece.color:
                moves.append(Move(sq, to_sq, MoveFlag.CAPTURE))

    def _gen_sliding(
        self,
        sq: Square,
        piece: Piece,
        directions: tuple[int, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for step in directions:
            to_sq = sq + step
            while is_on_board(to_sq):
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    to_sq += step
                    continue
                if target.color != piece.color:
                    moves.append(Move(sq, to_sq, MoveFlag.CAPTURE))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        # Rights from a position string can outlive a displaced king.
        if king_sq != _KING_HOME[color]:
            return

        board = self._board
        opponent = color.opposite
        castling = self._pos.castling

        if (
            castling & CastlingRights.kingside(color)
            and board.is_empty(king_sq + 1)
            and board.is_empty(king_sq + 2)
            and not is_square_attacked(board, king_sq, opponent)
            and not is_square_attacked(board, king_sq + 1, opponent)
            and not is_square_attacked(board, king_sq + 2, opponent)
        ):
            moves.append(Move(king_sq, king_sq + 2, MoveFlag.KSIDE_CASTLE))

        if (
            castling & CastlingRights.queenside(color)
            and board.is_empty(king_sq - 1)
            and board.is_empty(king_sq - 2)
            and board.is_empty(king_sq - 3)
            and not is_square_attacked(board, king_sq, opponent)
            and not is_square_attacked(board, king_sq - 1, opponent)
            and not is_square_attacked(board, king_sq - 2, opponent)
        ):
            moves.append(Move(king_sq, king_sq - 2, MoveFlag.QSIDE_CASTLE))
