"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass

from oxchess.core.enums import MoveFlag, PieceType
from oxchess.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single candidate move.

    ``flags`` is a classification computed by the generator; when a caller
    asks for a move by squares the flags are re-derived, never trusted.
    """

    from_sq: Square
    to_sq: Square
    flags: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    # ── Classification ───────────────────────────────────────────────────

    @property
    def is_capture(self) -> bool:
        return bool(self.flags & (MoveFlag.CAPTURE | MoveFlag.EP_CAPTURE))

    @property
    def is_en_passant(self) -> bool:
        return bool(self.flags & MoveFlag.EP_CAPTURE)

    @property
    def is_big_pawn(self) -> bool:
        return bool(self.flags & MoveFlag.BIG_PAWN)

    @property
    def is_promotion(self) -> bool:
        return bool(self.flags & MoveFlag.PROMOTION)

    @property
    def is_castle(self) -> bool:
        return bool(self.flags & (MoveFlag.KSIDE_CASTLE | MoveFlag.QSIDE_CASTLE))

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += self.promotion.letter
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)


@dataclass(frozen=True, slots=True)
class MoveRequest:
    """A caller's ``{from, to, promotion?}`` request, before it is matched."""

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None

    def matches(self, move: Move) -> bool:
        """Whether the legal *move* answers this request.

        The promotion piece only has to agree when *move* is a promotion;
        an extra promotion letter on an ordinary move is ignored.
        """
        if move.from_sq != self.from_sq or move.to_sq != self.to_sq:
            return False
        return move.promotion is None or move.promotion == self.promotion

    def __str__(self) -> str:
        text = f"{{from: {square_name(self.from_sq)}, to: {square_name(self.to_sq)}"
        if self.promotion is not None:
            text += f", promotion: {self.promotion.letter}"
        return text + "}"
