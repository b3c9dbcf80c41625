"""Square type and coordinate helpers.

Board layout follows the display, top row first:
    rank 0 = the 8th rank (black's back rank), rank 7 = the 1st rank
    file 0 = the a-file, file 7 = the h-file

So ``Square(7, 4)`` is e1 and ``Square(0, 4)`` is e8.
"""

from __future__ import annotations

from typing import NamedTuple

from gambit.core.errors import MalformedCoordinate


class Square(NamedTuple):
    """Board coordinate ``(rank, file)``, both 0–7."""

    rank: int
    file: int

    def __str__(self) -> str:
        return square_name(self)


def is_on_board(rank: int, file: int) -> bool:
    """True iff both coordinates are in [0, 7]."""
    return 0 <= rank < 8 and 0 <= file < 8


def make_square(rank: int, file: int) -> Square:
    """Create a square, rejecting off-board coordinates."""
    if not is_on_board(rank, file):
        raise MalformedCoordinate(f"Square out of range: ({rank}, {file})")
    return Square(rank, file)


def coerce_square(value: Square | tuple[int, int]) -> Square:
    """Validate a caller-supplied ``(rank, file)`` pair."""
    try:
        rank, file = value
    except (TypeError, ValueError):
        raise MalformedCoordinate(f"Not a (rank, file) pair: {value!r}") from None
    if not isinstance(rank, int) or not isinstance(file, int):
        raise MalformedCoordinate(f"Coordinates must be integers: {value!r}")
    return make_square(rank, file)


def offset(sq: Square, d_rank: int, d_file: int) -> Square | None:
    """Square at a relative offset from *sq*, or None when it falls off."""
    rank = sq.rank + d_rank
    file = sq.file + d_file
    if 0 <= rank < 8 and 0 <= file < 8:
        return Square(rank, file)
    return None


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (7, 4) → 'e1'."""
    return chr(ord("a") + sq.file) + str(8 - sq.rank)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → (4, 4)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise MalformedCoordinate(f"Invalid square name: {name!r}")
    return Square(8 - int(name[1]), ord(name[0]) - ord("a"))


def square_id(sq: Square) -> int:
    """Row-major index 0–63 (a8=0, h8=7, ..., h1=63)."""
    return sq.rank * 8 + sq.file


def square_from_id(index: int) -> Square:
    """Inverse of :func:`square_id`."""
    if not 0 <= index < 64:
        raise MalformedCoordinate(f"Square id out of range: {index}")
    return Square(index // 8, index % 8)


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(rank, file) for rank in range(8) for file in range(8)
)


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = (Square(0, f) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(1, f) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(2, f) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(3, f) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(4, f) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(5, f) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(6, f) for f in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = (Square(7, f) for f in range(8))
