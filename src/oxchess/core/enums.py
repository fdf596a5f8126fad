"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def fen_char(self) -> str:
        """Side-to-move field of a position string: ``w`` or ``b``."""
        return "w" if self == Color.WHITE else "b"

    @classmethod
    def from_char(cls, char: str) -> Color:
        if char == "w":
            return cls.WHITE
        if char == "b":
            return cls.BLACK
        raise ValueError(f"Invalid side-to-move: {char!r}")

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def letter(self) -> str:
        """Lowercase notation letter, e.g. ``n`` for a knight."""
        return "pnbrqk"[self.value - 1]

    @classmethod
    def from_letter(cls, letter: str) -> PieceType:
        """Parse a piece letter in either case."""
        index = "pnbrqk".find(letter.lower()) if len(letter) == 1 else -1
        if index < 0:
            raise ValueError(f"Invalid piece letter: {letter!r}")
        return cls(index + 1)


class MoveFlag(IntFlag):
    """Move classification bits, derived during generation."""

    NONE = 0
    NORMAL = 1
    CAPTURE = 2
    BIG_PAWN = 4
    EP_CAPTURE = 8
    PROMOTION = 16
    KSIDE_CASTLE = 32
    QSIDE_CASTLE = 64


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @staticmethod
    def kingside(color: Color) -> CastlingRights:
        if color == Color.WHITE:
            return CastlingRights.WHITE_KINGSIDE
        return CastlingRights.BLACK_KINGSIDE

    @staticmethod
    def queenside(color: Color) -> CastlingRights:
        if color == Color.WHITE:
            return CastlingRights.WHITE_QUEENSIDE
        return CastlingRights.BLACK_QUEENSIDE

    @staticmethod
    def both(color: Color) -> CastlingRights:
        if color == Color.WHITE:
            return CastlingRights.WHITE_BOTH
        return CastlingRights.BLACK_BOTH


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
