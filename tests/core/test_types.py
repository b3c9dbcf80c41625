"""Tests for square helpers."""

import pytest

from gambit.core.errors import MalformedCoordinate
from gambit.core.types import (
    A1,
    A8,
    E1,
    E4,
    H1,
    H8,
    Square,
    coerce_square,
    is_on_board,
    make_square,
    offset,
    parse_square,
    square_from_id,
    square_id,
    square_name,
)


class TestIsOnBoard:
    def test_corners(self) -> None:
        for rank, file in ((0, 0), (0, 7), (7, 0), (7, 7)):
            assert is_on_board(rank, file)

    def test_outside(self) -> None:
        for rank, file in ((-1, 0), (0, -1), (8, 0), (0, 8), (9, 9)):
            assert not is_on_board(rank, file)


class TestSquareNames:
    def test_layout_top_row_is_eighth_rank(self) -> None:
        assert A8 == Square(0, 0)
        assert H8 == Square(0, 7)
        assert A1 == Square(7, 0)
        assert H1 == Square(7, 7)

    def test_square_name(self) -> None:
        assert square_name(E1) == "e1"
        assert str(E4) == "e4"

    def test_parse_square(self) -> None:
        assert parse_square("e1") == Square(7, 4)
        assert parse_square("e4") == E4

    def test_parse_invalid(self) -> None:
        for bad in ("", "e9", "i1", "e", "e10"):
            with pytest.raises(MalformedCoordinate):
                parse_square(bad)


class TestConstruction:
    def test_make_square_rejects_off_board(self) -> None:
        with pytest.raises(MalformedCoordinate, match="out of range"):
            make_square(8, 0)

    def test_coerce_accepts_plain_tuple(self) -> None:
        sq = coerce_square((6, 4))
        assert isinstance(sq, Square)
        assert sq.rank == 6 and sq.file == 4

    def test_coerce_rejects_garbage(self) -> None:
        for bad in (None, (1,), (1, 2, 3), ("a", 1), (-1, 3)):
            with pytest.raises(MalformedCoordinate):
                coerce_square(bad)  # type: ignore[arg-type]

    def test_offset_bounds(self) -> None:
        assert offset(E4, -1, 1) == parse_square("f5")
        assert offset(H8, -1, 0) is None
        assert offset(A1, 0, -1) is None


class TestSquareIds:
    def test_row_major(self) -> None:
        assert square_id(A8) == 0
        assert square_id(H1) == 63

    def test_round_trip_all(self) -> None:
        assert [square_id(square_from_id(i)) for i in range(64)] == list(range(64))

    def test_out_of_range(self) -> None:
        with pytest.raises(MalformedCoordinate):
            square_from_id(64)
