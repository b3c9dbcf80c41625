"""Tests for Position make/unmake."""

import pytest

from gambit.core.enums import CastlingRights, Color, MoveFlag, PieceType
from gambit.core.fen import position_from_fen, position_to_fen
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.types import (
    A1,
    A2,
    A7,
    A8,
    C1,
    D1,
    D5,
    D6,
    D7,
    E1,
    E2,
    E3,
    E4,
    E5,
    F1,
    G1,
    H1,
    H8,
)

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


class TestMakeUnmake:
    def test_side_switches(self) -> None:
        pos = Position()
        pos.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert pos.side_to_move == Color.BLACK

    def test_unmake_restores_side(self) -> None:
        pos = Position()
        move = Move(E2, E4, MoveFlag.DOUBLE_PAWN)
        pos.make_move(move)
        pos.unmake_move(move)
        assert pos.side_to_move == Color.WHITE

    def test_moved_piece_is_marked(self) -> None:
        pos = Position()
        pos.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert pos.board[E4] == Piece(Color.WHITE, PieceType.PAWN, has_moved=True)
        assert pos.board[E2] is None

    def test_unmake_restores_unmoved_flag(self) -> None:
        pos = Position()
        move = Move(E2, E4, MoveFlag.DOUBLE_PAWN)
        pos.make_move(move)
        pos.unmake_move(move)
        assert pos.board[E2] == Piece(Color.WHITE, PieceType.PAWN)
        assert pos.board == Position().board

    def test_unmake_restores_fen_for_every_move(self) -> None:
        """After make+unmake of every legal move, FEN and board must match."""
        pos = position_from_fen(KIWIPETE)
        fen_before = position_to_fen(pos)
        board_before = pos.board.copy()
        for move in MoveGenerator(pos).generate_legal_moves():
            pos.make_move(move)
            pos.unmake_move(move)
            assert position_to_fen(pos) == fen_before, f"Failed for {move}"
            assert pos.board == board_before, f"has_moved leak for {move}"

    def test_ply_count(self) -> None:
        pos = Position()
        pos.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert pos.ply_count == 1

    def test_missing_piece_raises(self) -> None:
        pos = Position()
        with pytest.raises(ValueError, match="No piece"):
            pos.make_move(Move(E4, E5))


class TestEnPassantTarget:
    def test_set_after_double_step(self) -> None:
        pos = Position()
        pos.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert pos.en_passant == E3

    def test_cleared_after_other_move(self) -> None:
        pos = Position()
        pos.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        pos.make_move(Move(D7, D6))
        assert pos.en_passant is None

    def test_en_passant_removes_captured_pawn(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        move = Move(E5, D6, MoveFlag.EN_PASSANT)
        pos.make_move(move)
        assert pos.board[D6] == Piece(Color.WHITE, PieceType.PAWN, has_moved=True)
        assert pos.board[D5] is None
        pos.unmake_move(move)
        assert pos.board[D5] is not None and pos.board[D5].color == Color.BLACK
        assert pos.board[D6] is None
        assert pos.en_passant == D6


class TestCastlingApplication:
    def test_kingside_moves_rook(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        pos.make_move(Move(E1, G1, MoveFlag.CASTLE_KINGSIDE))
        assert pos.board[G1] == Piece(Color.WHITE, PieceType.KING, has_moved=True)
        assert pos.board[F1] == Piece(Color.WHITE, PieceType.ROOK, has_moved=True)
        assert pos.board[H1] is None
        assert pos.board[E1] is None
        assert not pos.castling & CastlingRights.WHITE_BOTH
        assert pos.castling & CastlingRights.BLACK_BOTH == CastlingRights.BLACK_BOTH

    def test_queenside_moves_rook(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        pos.make_move(Move(E1, C1, MoveFlag.CASTLE_QUEENSIDE))
        assert pos.board[C1] is not None and pos.board[C1].piece_type == PieceType.KING
        assert pos.board[D1] is not None and pos.board[D1].piece_type == PieceType.ROOK
        assert pos.board[A1] is None

    def test_unmake_castling_restores_rook(self) -> None:
        fen = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"
        pos = position_from_fen(fen)
        board_before = pos.board.copy()
        move = Move(E1, G1, MoveFlag.CASTLE_KINGSIDE)
        pos.make_move(move)
        pos.unmake_move(move)
        assert pos.board == board_before
        assert position_to_fen(pos) == fen

    def test_rook_move_clears_one_side(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        pos.make_move(Move(A1, A2))
        assert not pos.castling & CastlingRights.WHITE_QUEENSIDE
        assert pos.castling & CastlingRights.WHITE_KINGSIDE

    def test_capturing_rook_on_corner_clears_right(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        pos.make_move(Move(H1, H8))
        assert not pos.castling & CastlingRights.BLACK_KINGSIDE
        assert not pos.castling & CastlingRights.WHITE_KINGSIDE


class TestPromotion:
    def test_pawn_becomes_queen(self) -> None:
        pos = position_from_fen("7k/P7/8/8/8/8/8/K7 w - - 0 1")
        move = Move(A7, A8, MoveFlag.PROMOTION, PieceType.QUEEN)
        pos.make_move(move)
        assert pos.board[A8] == Piece(Color.WHITE, PieceType.QUEEN, has_moved=True)

    def test_unmake_promotion_restores_pawn(self) -> None:
        pos = position_from_fen("7k/P7/8/8/8/8/8/K7 w - - 0 1")
        move = Move(A7, A8, MoveFlag.PROMOTION, PieceType.QUEEN)
        pos.make_move(move)
        pos.unmake_move(move)
        piece = pos.board[A7]
        assert piece is not None and piece.piece_type == PieceType.PAWN
        assert pos.board[A8] is None

    def test_promotion_does_not_depend_on_flag(self) -> None:
        pos = position_from_fen("7k/P7/8/8/8/8/8/K7 w - - 0 1")
        pos.make_move(Move(A7, A8))
        piece = pos.board[A8]
        assert piece is not None and piece.piece_type == PieceType.QUEEN

    def test_copy_is_independent(self) -> None:
        pos = Position()
        clone = pos.copy()
        clone.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert pos.board[E2] is not None
        assert pos.side_to_move == Color.WHITE
        assert clone.board[H8] == pos.board[H8]
