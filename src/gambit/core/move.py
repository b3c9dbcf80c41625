"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import MoveFlag, PieceType
from gambit.core.types import Square, square_name

_CASTLING_SIDES: dict[MoveFlag, str] = {
    MoveFlag.CASTLE_KINGSIDE: "kingside",
    MoveFlag.CASTLE_QUEENSIDE: "queenside",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    Castling is a king move; the rook relocation happens when the move is
    applied. Promotion is always to a queen.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    @property
    def castling_side(self) -> str | None:
        """``"kingside"`` / ``"queenside"`` for castling moves, else None."""
        return _CASTLING_SIDES.get(self.flag)

    @property
    def is_castling(self) -> bool:
        return self.flag in _CASTLING_SIDES

    @property
    def is_en_passant(self) -> bool:
        return self.flag == MoveFlag.EN_PASSANT

    @property
    def is_promotion(self) -> bool:
        return self.flag == MoveFlag.PROMOTION

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += "q"
        return base
