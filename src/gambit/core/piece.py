"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from gambit.core.enums import Color, PieceType

# Lowercase FEN letter per kind; white pieces use the uppercase form.
_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_KINDS: dict[str, PieceType] = {letter: kind for kind, letter in _LETTERS.items()}

# White glyphs run U+2654 (king) .. U+2659 (pawn), black ones follow.
_GLYPH_ORDER: tuple[PieceType, ...] = (
    PieceType.KING,
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.PAWN,
)


@dataclass(frozen=True, slots=True)
class Piece:
    """A piece of one color and kind.

    ``has_moved`` is part of the value: a piece that moves is replaced on its
    destination square by :meth:`moved`.
    """

    color: Color
    piece_type: PieceType
    has_moved: bool = False

    def moved(self) -> Piece:
        """The same piece after it has made a move."""
        if self.has_moved:
            return self
        return replace(self, has_moved=True)

    def is_a(self, color: Color, piece_type: PieceType) -> bool:
        return self.color == color and self.piece_type == piece_type

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str, *, has_moved: bool = False) -> Piece:
        """Piece for a FEN letter: 'N' is a white knight, 'n' a black one."""
        kind = _KINDS.get(char.lower()) if len(char) == 1 else None
        if kind is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, kind, has_moved)

    @property
    def symbol(self) -> str:
        """Unicode chess glyph, e.g. ♞."""
        index = _GLYPH_ORDER.index(self.piece_type) + 6 * int(self.color)
        return chr(0x2654 + index)
