"""Position: complete game state (board + metadata) with make/unmake."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, MoveFlag, PieceType
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import A1, A8, H1, H8, Square


@dataclass(slots=True)
class _PositionState:
    """Snapshot saved before each move so we can undo it."""

    castling: CastlingRights
    en_passant: Square | None
    halfmove_clock: int
    moved_piece: Piece
    captured_piece: Piece | None
    captured_sq: Square
    rook_piece: Piece | None


# Castling side -> (rook origin file, rook destination file)
_ROOK_FILES: dict[MoveFlag, tuple[int, int]] = {
    MoveFlag.CASTLE_KINGSIDE: (7, 5),
    MoveFlag.CASTLE_QUEENSIDE: (0, 3),
}


class Position:
    """Full chess position: board + side to move + castling + en passant.

    Supports :meth:`make_move` / :meth:`unmake_move` via an internal history
    stack. Each entry records exactly what a move touched, so a move made
    only to be inspected (the legality filter does this) leaves no trace
    once it is unmade.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "_history",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self._history: list[_PositionState] = []

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move) -> None:
        """Apply *move*, pushing undo state onto the history stack.

        The move is trusted to be pseudo-legal; legality is the generator's
        job.
        """
        board = self.board
        piece = board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        captured_sq = move.to_sq
        # En passant: the captured pawn sits beside the destination
        if move.flag == MoveFlag.EN_PASSANT:
            captured_sq = Square(move.from_sq.rank, move.to_sq.file)
        captured = board[captured_sq]

        rook_squares = self._castling_rook_squares(move)
        rook = board[rook_squares[0]] if rook_squares is not None else None

        self._history.append(
            _PositionState(
                castling=self.castling,
                en_passant=self.en_passant,
                halfmove_clock=self.halfmove_clock,
                moved_piece=piece,
                captured_piece=captured,
                captured_sq=captured_sq,
                rook_piece=rook,
            )
        )

        board[move.from_sq] = None
        if captured is not None:
            board[captured_sq] = None

        placed = piece.moved()
        if (
            piece.piece_type == PieceType.PAWN
            and move.to_sq.rank == piece.color.opposite.back_rank
        ):
            placed = Piece(piece.color, PieceType.QUEEN, has_moved=True)
        board[move.to_sq] = placed

        # Slide the rook for castling
        if rook_squares is not None:
            rook_from, rook_to = rook_squares
            if rook is None:
                raise ValueError(f"No rook on {rook_from} to castle with")
            board[rook_from] = None
            board[rook_to] = rook.moved()

        # En passant target for the opponent
        if (
            piece.piece_type == PieceType.PAWN
            and abs(move.to_sq.rank - move.from_sq.rank) == 2
        ):
            self.en_passant = Square(
                (move.from_sq.rank + move.to_sq.rank) // 2, move.from_sq.file
            )
        else:
            self.en_passant = None

        self._update_castling(move, piece)

        if piece.piece_type == PieceType.PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1

        self.side_to_move = self.side_to_move.opposite

    def unmake_move(self, move: Move) -> None:
        """Undo the last :meth:`make_move`."""
        state = self._history.pop()
        board = self.board

        self.side_to_move = self.side_to_move.opposite
        if self.side_to_move == Color.BLACK:
            self.fullmove_number -= 1

        board[move.to_sq] = None
        board[move.from_sq] = state.moved_piece
        if state.captured_piece is not None:
            board[state.captured_sq] = state.captured_piece

        rook_squares = self._castling_rook_squares(move)
        if rook_squares is not None:
            rook_from, rook_to = rook_squares
            board[rook_to] = None
            board[rook_from] = state.rook_piece

        self.castling = state.castling
        self.en_passant = state.en_passant
        self.halfmove_clock = state.halfmove_clock

    @property
    def ply_count(self) -> int:
        """Number of moves on the undo stack."""
        return len(self._history)

    # ── Castling bookkeeping ─────────────────────────────────────────────

    _ROOK_CORNERS: dict[Square, CastlingRights] = {
        A1: CastlingRights.WHITE_QUEENSIDE,
        H1: CastlingRights.WHITE_KINGSIDE,
        A8: CastlingRights.BLACK_QUEENSIDE,
        H8: CastlingRights.BLACK_KINGSIDE,
    }

    @staticmethod
    def _castling_rook_squares(move: Move) -> tuple[Square, Square] | None:
        files = _ROOK_FILES.get(move.flag)
        if files is None:
            return None
        rank = move.from_sq.rank
        return Square(rank, files[0]), Square(rank, files[1])

    def _update_castling(self, move: Move, piece: Piece) -> None:
        next_castling = self.castling
        if piece.piece_type == PieceType.KING:
            next_castling &= ~CastlingRights.both(piece.color)

        # A rook leaving its corner, or being captured there
        for sq in (move.from_sq, move.to_sq):
            if sq in self._ROOK_CORNERS:
                next_castling &= ~self._ROOK_CORNERS[sq]

        self.castling = next_castling

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Independent copy without history."""
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )

    def __repr__(self) -> str:
        return (
            f"Position(side_to_move={self.side_to_move}, castling={self.castling!r})"
            f"\n{self.board!r}"
        )
