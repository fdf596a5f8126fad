"""Square type alias and coordinate helpers.

Board layout (0x88, rank 8 first):
    a8=0x00, b8=0x01, ..., h8=0x07
    a7=0x10, b7=0x11, ..., h7=0x17
    ...
    a1=0x70, b1=0x71, ..., h1=0x77

Every index whose ``0x88`` bits are set is padding and never holds a piece.
The difference between two on-board indices is unique per (direction,
distance) pair, which is what the attack tables rely on.
"""

from __future__ import annotations

from typing import Final, TypeAlias

from oxchess.core.errors import InvalidSquare

Square: TypeAlias = int  # 0–119, padding excluded

BOARD_SIZE: Final = 128
OFF_BOARD_MASK: Final = 0x88

_FILES: Final = "abcdefgh"
_RANKS: Final = "12345678"


def is_on_board(sq: int) -> bool:
    """Whether *sq* is one of the 64 real squares."""
    return (sq & OFF_BOARD_MASK) == 0


def file_of(sq: Square) -> int:
    """File index 0–7 (a–h)."""
    return sq & 7


def rank_of(sq: Square) -> int:
    """Rank index 0–7 (1–8)."""
    return 7 - (sq >> 4)


def make_square(file: int, rank: int) -> Square:
    """Create square from file (0–7) and rank (0–7)."""
    return ((7 - rank) << 4) | file


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. 0x74 → 'e1'."""
    return _FILES[file_of(sq)] + _RANKS[rank_of(sq)]


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → 0x44."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise InvalidSquare(f"Invalid square name: {name!r}")
    return make_square(_FILES.index(name[0]), _RANKS.index(name[1]))


# All 64 squares in scan order (a8 … h1).
BOARD_SQUARES: Final[tuple[Square, ...]] = tuple(
    sq for sq in range(BOARD_SIZE) if is_on_board(sq)
)


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = range(0x00, 0x08)
A7, B7, C7, D7, E7, F7, G7, H7 = range(0x10, 0x18)
A6, B6, C6, D6, E6, F6, G6, H6 = range(0x20, 0x28)
A5, B5, C5, D5, E5, F5, G5, H5 = range(0x30, 0x38)
A4, B4, C4, D4, E4, F4, G4, H4 = range(0x40, 0x48)
A3, B3, C3, D3, E3, F3, G3, H3 = range(0x50, 0x58)
A2, B2, C2, D2, E2, F2, G2, H2 = range(0x60, 0x68)
A1, B1, C1, D1, E1, F1, G1, H1 = range(0x70, 0x78)
