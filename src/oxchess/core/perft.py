"""Perft utilities for move generation correctness checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from oxchess.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from oxchess.core.position import Position


def perft(position: Position, depth: int) -> int:
    """Count leaf nodes of the legal move tree at *depth*."""
    if depth < 0:
        raise ValueError("Depth must be >= 0")
    if depth == 0:
        return 1

    moves = MoveGenerator(position).generate_legal_moves()
    if depth == 1:
        return len(moves)

    return sum(perft(position.apply_move(move), depth - 1) for move in moves)


def perft_divide(position: Position, depth: int) -> dict[str, int]:
    """Leaf counts per root move, keyed by UCI string."""
    if depth < 1:
        raise ValueError("Depth must be >= 1 for perft divide")

    result: dict[str, int] = {}
    for move in MoveGenerator(position).generate_legal_moves():
        result[move.uci] = perft(position.apply_move(move), depth - 1)
    return dict(sorted(result.items()))
