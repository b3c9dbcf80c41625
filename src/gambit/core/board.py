"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from gambit.core.enums import Color, PieceType
from gambit.core.piece import Piece
from gambit.core.types import ALL_SQUARES, Square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 grid of optional pieces with a king-square cache."""

    __slots__ = ("_grid", "_king_squares")

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._grid[sq[0]][sq[1]]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        rank, file = sq
        old_piece = self._grid[rank][file]
        if (
            old_piece is not None
            and old_piece.piece_type == PieceType.KING
            and self._king_squares[int(old_piece.color)] == sq
        ):
            self._king_squares[int(old_piece.color)] = None

        self._grid[rank][file] = piece

        if piece is not None and piece.piece_type == PieceType.KING:
            self._king_squares[int(piece.color)] = Square(rank, file)

    def is_empty(self, sq: Square) -> bool:
        return self._grid[sq[0]][sq[1]] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self, color: Color) -> Iterator[tuple[Square, Piece]]:
        """``(square, piece)`` pairs for every piece of *color*, top row first."""
        for sq in ALL_SQUARES:
            piece = self._grid[sq.rank][sq.file]
            if piece is not None and piece.color == color:
                yield sq, piece

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        return [sq for sq, p in self.occupied(color) if p.piece_type == piece_type]

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [sq for sq, _ in self.occupied(color)]

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self._king_squares[int(color)]
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        """Independent copy; pieces are immutable so rows are copied shallowly."""
        b = Board()
        b._grid = [row.copy() for row in self._grid]
        b._king_squares = self._king_squares.copy()
        return b

    def clear(self) -> None:
        self._grid = [[None] * 8 for _ in range(8)]
        self._king_squares = [None, None]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position: black on ranks 0-1, white on 6-7."""
        b = cls()
        for file, pt in enumerate(_BACK_RANK):
            b[Square(0, file)] = Piece(Color.BLACK, pt)
            b[Square(1, file)] = Piece(Color.BLACK, PieceType.PAWN)
            b[Square(6, file)] = Piece(Color.WHITE, PieceType.PAWN)
            b[Square(7, file)] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(8):
            row = []
            for file in range(8):
                p = self._grid[rank][file]
                row.append(str(p) if p else ".")
            rows.append(f"{8 - rank} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
