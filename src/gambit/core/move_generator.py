"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING, assert_never

from gambit.core.enums import CastlingRights, Color, MoveFlag, PieceType
from gambit.core.move import Move
from gambit.core.types import ALL_SQUARES, Square, offset

if TYPE_CHECKING:
    from gambit.core.piece import Piece
    from gambit.core.position import Position


# Offsets are (d_rank, d_file).
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

KING_HOME_FILE = 4


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[Square, ...]]:
    targets: dict[Square, tuple[Square, ...]] = {}
    for sq in ALL_SQUARES:
        moves = (offset(sq, dr, df) for dr, df in offsets)
        targets[sq] = tuple(to_sq for to_sq in moves if to_sq is not None)
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[tuple[Square, ...], ...]]:
    rays_per_square: dict[Square, tuple[tuple[Square, ...], ...]] = {}
    for sq in ALL_SQUARES:
        square_rays: list[tuple[Square, ...]] = []
        for dr, df in directions:
            ray: list[Square] = []
            to_sq = offset(sq, dr, df)
            while to_sq is not None:
                ray.append(to_sq)
                to_sq = offset(to_sq, dr, df)
            square_rays.append(tuple(ray))
        rays_per_square[sq] = tuple(square_rays)
    return rays_per_square


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`.

    The generator mutates the position via ``make_move`` / ``unmake_move``
    internally but always restores it before returning.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        return self._filter_legal(self.generate_pseudo_legal_moves())

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of the piece on *sq*.

        Empty for an empty square or a piece of the side not to move.
        """
        piece = self._board[sq]
        if piece is None or piece.color != self._pos.side_to_move:
            return []
        moves: list[Move] = []
        self._gen_piece(sq, piece, moves)
        return self._filter_legal(moves)

    def has_legal_moves(self) -> bool:
        """Whether the side to move has at least one legal move."""
        color = self._pos.side_to_move
        for sq, piece in self._board.occupied(color):
            moves: list[Move] = []
            self._gen_piece(sq, piece, moves)
            if self._filter_legal(moves):
                return True
        return False

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Move] = []
        for sq, piece in self._board.occupied(self._pos.side_to_move):
            self._gen_piece(sq, piece, moves)
        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._board.king_square(color)
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?

        Works from the target square outward using the capture patterns, so
        it never calls back into move generation or the legality filter.
        """
        board = self._board

        # A pawn of by_color attacks one step forward diagonally
        for df in (-1, 1):
            from_sq = offset(sq, -by_color.forward, df)
            if from_sq is not None:
                piece = board[from_sq]
                if piece is not None and piece.is_a(by_color, PieceType.PAWN):
                    return True

        for from_sq in _KNIGHT_TARGETS[sq]:
            piece = board[from_sq]
            if piece is not None and piece.is_a(by_color, PieceType.KNIGHT):
                return True

        for from_sq in _KING_TARGETS[sq]:
            piece = board[from_sq]
            if piece is not None and piece.is_a(by_color, PieceType.KING):
                return True

        if self._ray_attack(sq, by_color, _BISHOP_RAYS[sq], PieceType.BISHOP):
            return True
        return self._ray_attack(sq, by_color, _ROOK_RAYS[sq], PieceType.ROOK)

    def _ray_attack(
        self,
        sq: Square,
        by_color: Color,
        rays: tuple[tuple[Square, ...], ...],
        slider: PieceType,
    ) -> bool:
        board = self._board
        for ray in rays:
            for from_sq in ray:
                piece = board[from_sq]
                if piece is None:
                    continue
                if piece.color == by_color and piece.piece_type in (
                    slider,
                    PieceType.QUEEN,
                ):
                    return True
                break
        return False

    # -- Legality filter ----------------------------------------------------

    def _filter_legal(self, moves: list[Move]) -> list[Move]:
        legal: list[Move] = []
        moving_color = self._pos.side_to_move
        append_legal = legal.append

        for move in moves:
            self._pos.make_move(move)
            try:
                if not self.is_in_check(moving_color):
                    append_legal(move)
            finally:
                self._pos.unmake_move(move)
        return legal

    # -- Piece-specific generators (private) -------------------------------

    def _gen_piece(self, sq: Square, piece: Piece, moves: list[Move]) -> None:
        color = piece.color
        match piece.piece_type:
            case PieceType.PAWN:
                self._gen_pawn(sq, color, moves)
            case PieceType.KNIGHT:
                self._gen_steps(sq, color, _KNIGHT_TARGETS[sq], moves)
            case PieceType.BISHOP:
                self._gen_sliding(sq, color, _BISHOP_RAYS[sq], moves)
            case PieceType.ROOK:
                self._gen_sliding(sq, color, _ROOK_RAYS[sq], moves)
            case PieceType.QUEEN:
                self._gen_sliding(sq, color, _QUEEN_RAYS[sq], moves)
            case PieceType.KING:
                self._gen_steps(sq, color, _KING_TARGETS[sq], moves)
                if not piece.has_moved:
                    self._gen_castling(sq, color, moves)
            case _:
                assert_never(piece.piece_type)

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        forward = color.forward
        last_rank = color.opposite.back_rank

        one_step = offset(sq, forward, 0)
        if one_step is not None and board.is_empty(one_step):
            self._add_pawn_move(sq, one_step, last_rank, moves)
            if sq.rank == color.pawn_rank:
                two_step = offset(one_step, forward, 0)
                if two_step is not None and board.is_empty(two_step):
                    moves.append(Move(sq, two_step, MoveFlag.DOUBLE_PAWN))

        for df in (-1, 1):
            cap_sq = offset(sq, forward, df)
            if cap_sq is None:
                continue
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    self._add_pawn_move(sq, cap_sq, last_rank, moves)
            elif cap_sq == self._pos.en_passant:
                moves.append(Move(sq, cap_sq, MoveFlag.EN_PASSANT))

    @staticmethod
    def _add_pawn_move(
        sq: Square, to_sq: Square, last_rank: int, moves: list[Move]
    ) -> None:
        if to_sq.rank == last_rank:
            moves.append(Move(sq, to_sq, MoveFlag.PROMOTION, PieceType.QUEEN))
        else:
            moves.append(Move(sq, to_sq))

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        rank = color.back_rank
        if king_sq != Square(rank, KING_HOME_FILE):
            return
        if self.is_in_check(color):
            return

        castling = self._pos.castling

        if castling & CastlingRights.kingside(color) and self._can_castle(
            color, rank, rook_file=7, empty_files=(5, 6), path_files=(5, 6)
        ):
            moves.append(Move(king_sq, Square(rank, 6), MoveFlag.CASTLE_KINGSIDE))

        if castling & CastlingRights.queenside(color) and self._can_castle(
            color, rank, rook_file=0, empty_files=(1, 2, 3), path_files=(3, 2)
        ):
            moves.append(Move(king_sq, Square(rank, 2), MoveFlag.CASTLE_QUEENSIDE))

    def _can_castle(
        self,
        color: Color,
        rank: int,
        *,
        rook_file: int,
        empty_files: tuple[int, ...],
        path_files: tuple[int, ...],
    ) -> bool:
        board = self._board
        rook = board[Square(rank, rook_file)]
        if rook is None or not rook.is_a(color, PieceType.ROOK) or rook.has_moved:
            return False
        if any(not board.is_empty(Square(rank, f)) for f in empty_files):
            return False
        opponent = color.opposite
        return not any(
            self.is_square_attacked(Square(rank, f), opponent) for f in path_files
        )
