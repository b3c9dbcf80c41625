"""Tests for Rules: check, checkmate, stalemate, status snapshots."""

from gambit.core.enums import Color, GameResult, MoveFlag
from gambit.core.fen import position_from_fen
from gambit.core.move import Move
from gambit.core.position import Position
from gambit.core.rules import GameStatus, Rules
from gambit.core.types import D8, E2, E4, H4

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


class TestCheck:
    def test_starting_not_in_check(self) -> None:
        assert not Rules.is_in_check(Position())

    def test_fools_mate_in_check(self) -> None:
        assert Rules.is_in_check(position_from_fen(FOOLS_MATE))


class TestCheckmate:
    def test_fools_mate(self) -> None:
        pos = position_from_fen(FOOLS_MATE)
        assert Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.BLACK_WINS

    def test_back_rank_mate(self) -> None:
        # R on a8 checks black king d8; white king d6 covers all escapes
        pos = position_from_fen("R2k4/8/3K4/8/8/8/8/8 b - - 0 1")
        assert Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.WHITE_WINS

    def test_not_checkmate_when_can_escape(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)

    def test_not_checkmate_when_attacker_can_be_captured(self) -> None:
        # Fool's mate pattern, but the knight on g2 can take the queen
        pos = position_from_fen(
            "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP1NP/RNBQKB1R w KQkq - 1 3"
        )
        assert Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)


class TestStalemate:
    def test_king_trapped(self) -> None:
        # Black king on h8, white K on f6, white Q on g6
        pos = position_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        assert Rules.is_stalemate(pos)
        assert not Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.DRAW

    def test_not_stalemate_when_has_moves(self) -> None:
        pos = position_from_fen("7k/8/5K2/8/8/8/8/8 b - - 0 1")
        assert not Rules.is_stalemate(pos)


class TestStatus:
    def test_initial_status(self) -> None:
        status = Rules.status(Position())
        assert status == GameStatus(side_to_move=Color.WHITE)
        assert not status.is_terminal
        assert status.result == GameResult.IN_PROGRESS

    def test_status_carries_last_move(self) -> None:
        pos = Position()
        move = Move(E2, E4, MoveFlag.DOUBLE_PAWN)
        pos.make_move(move)
        status = Rules.status(pos, last_move=move)
        assert status.last_move == move
        assert status.side_to_move == Color.BLACK

    def test_checkmate_status(self) -> None:
        status = Rules.status(
            position_from_fen(FOOLS_MATE), last_move=Move(D8, H4)
        )
        assert status.is_check and status.is_checkmate
        assert not status.is_stalemate
        assert status.is_terminal

    def test_status_does_not_mutate(self) -> None:
        pos = position_from_fen(FOOLS_MATE)
        before = pos.board.copy()
        Rules.status(pos)
        assert pos.board == before
