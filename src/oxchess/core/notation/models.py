"""Shared notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FenValidation:
    """Outcome of :func:`~oxchess.core.notation.fen.validate_fen`."""

    ok: bool
    error: str | None = None

    def __bool__(self) -> bool:
        return self.ok
