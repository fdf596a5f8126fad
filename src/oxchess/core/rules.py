"""High-level chess rules: checkmate, stalemate, draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from oxchess.core.attacks import is_king_attacked
from oxchess.core.enums import Color, GameResult, PieceType
from oxchess.core.move_generator import MoveGenerator
from oxchess.core.types import file_of, rank_of

if TYPE_CHECKING:
    from oxchess.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # Draw policy: every draw condition ends the game, there are no claims.

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return is_king_attacked(position.board, position.side_to_move)

    @staticmethod
    def has_legal_moves(position: Position) -> bool:
        return bool(MoveGenerator(position).generate_legal_moves())

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return Rules.is_in_check(position) and not Rules.has_legal_moves(position)

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        return not Rules.is_in_check(position) and not Rules.has_legal_moves(position)

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K vs K, K+minor vs K, or kings plus bishops all on one square colour.

        Other material alongside same-coloured bishops is not recognised.
        """
        counts: dict[PieceType, int] = dict.fromkeys(PieceType, 0)
        bishop_colors: list[int] = []
        total = 0
        for sq, piece in position.board.occupied():
            counts[piece.piece_type] += 1
            if piece.piece_type == PieceType.BISHOP:
                bishop_colors.append((file_of(sq) + rank_of(sq)) % 2)
            total += 1

        # K vs K
        if total == 2:
            return True

        # K+minor vs K
        if total == 3 and (counts[PieceType.BISHOP] == 1 or counts[PieceType.KNIGHT] == 1):
            return True

        # Kings + any number of bishops sharing a square colour
        if total == counts[PieceType.BISHOP] + 2:
            return len(set(bishop_colors)) <= 1

        return False

    @staticmethod
    def is_fifty_move_rule(position: Position) -> bool:
        return position.halfmove_clock >= 100  # 100 half-moves = 50 full moves

    @staticmethod
    def is_threefold_repetition(position: Position) -> bool:
        return position.repetition_count() >= 3

    @staticmethod
    def is_draw(position: Position) -> bool:
        return (
            Rules.is_fifty_move_rule(position)
            or Rules.is_stalemate(position)
            or Rules.is_insufficient_material(position)
            or Rules.is_threefold_repetition(position)
        )

    @staticmethod
    def is_game_over(position: Position) -> bool:
        return Rules.is_checkmate(position) or Rules.is_draw(position)

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Determine the current game result."""
        if Rules.is_checkmate(position):
            return (
                GameResult.BLACK_WINS
                if position.side_to_move == Color.WHITE
                else GameResult.WHITE_WINS
            )
        if Rules.is_draw(position):
            return GameResult.DRAW
        return GameResult.IN_PROGRESS
