"""FEN parsing and serialization.

FEN only describes placement, so ``has_moved`` is inferred on load: kings and
corner rooks count as unmoved exactly when a matching castling right is
listed, pawns when they stand on their starting rank.
"""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, PieceType
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.types import A1, A8, H1, H8, Square, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}

_ROOK_HOMES: dict[Square, CastlingRights] = {
    H1: CastlingRights.WHITE_KINGSIDE,
    A1: CastlingRights.WHITE_QUEENSIDE,
    H8: CastlingRights.BLACK_KINGSIDE,
    A8: CastlingRights.BLACK_QUEENSIDE,
}


def _infer_has_moved(piece: Piece, sq: Square, castling: CastlingRights) -> Piece:
    color = piece.color
    if piece.piece_type == PieceType.KING:
        unmoved = sq == Square(color.back_rank, 4) and bool(
            castling & CastlingRights.both(color)
        )
    elif piece.piece_type == PieceType.ROOK:
        right = _ROOK_HOMES.get(sq)
        unmoved = (
            right is not None
            and bool(right & CastlingRights.both(color))
            and bool(castling & right)
        )
    elif piece.piece_type == PieceType.PAWN:
        unmoved = sq.rank == color.pawn_rank
    else:
        unmoved = True
    return Piece(color, piece.piece_type, has_moved=not unmoved)


def _parse_clock(
    parts: list[str], index: int, name: str, *, default: int, minimum: int
) -> int:
    if len(parts) <= index:
        return default
    try:
        value = int(parts[index])
    except ValueError:
        raise ValueError(f"Invalid FEN {name}: {parts[index]!r}") from None
    if value < minimum:
        raise ValueError(f"Invalid FEN {name}: {parts[index]!r}")
    return value


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement (first row of the FEN is rank 0)
    rows = placement.split("/")
    if len(rows) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    placed: list[tuple[Square, Piece]] = []
    for rank, row_text in enumerate(rows):
        file = 0
        for ch in row_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                placed.append((Square(rank, file), Piece.from_char(ch)))
                file += 1
            if file > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None or ch in seen:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except ValueError:
            raise ValueError(f"Invalid FEN en-passant square: {ep_part!r}") from None
        # The skipped square sits behind the pawn that just double-stepped
        expected_rank = 2 if side == Color.WHITE else 5
        if ep.rank != expected_rank:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )

    # 5–6. Clocks (optional)
    halfmove = _parse_clock(parts, 4, "halfmove clock", default=0, minimum=0)
    fullmove = _parse_clock(parts, 5, "fullmove number", default=1, minimum=1)

    board = Board()
    for sq, piece in placed:
        board[sq] = _infer_has_moved(piece, sq, castling)
    for color in Color:
        if len(board.pieces(color, PieceType.KING)) != 1:
            raise ValueError(f"Invalid FEN: need exactly one {color} king: {fen!r}")

    return Position(board, side, castling, ep, halfmove, fullmove)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    # 1. Board
    rows: list[str] = []
    for rank in range(8):
        empty = 0
        row = ""
        for file in range(8):
            piece = pos.board[Square(rank, file)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if pos.castling & right
    )
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return (
        f"{board_str} {side_str} {castling_str} {ep_str} "
        f"{pos.halfmove_clock} {pos.fullmove_number}"
    )
