"""Tests for 0x88 square addressing."""

import pytest

from oxchess.core.errors import InvalidSquare
from oxchess.core.types import (
    A1,
    A8,
    BOARD_SQUARES,
    E2,
    E4,
    H1,
    H8,
    file_of,
    is_on_board,
    make_square,
    parse_square,
    rank_of,
    square_name,
)


class TestSquareIndex:
    def test_corners(self) -> None:
        assert A8 == 0
        assert H8 == 7
        assert A1 == 112
        assert H1 == 119

    def test_rank_and_file(self) -> None:
        assert file_of(E4) == 4
        assert rank_of(E4) == 3
        assert make_square(4, 3) == E4

    def test_on_board(self) -> None:
        assert is_on_board(E2)
        assert not is_on_board(8)
        assert not is_on_board(H1 + 1)
        assert not is_on_board(A8 - 1)

    def test_board_squares_cover_64(self) -> None:
        assert len(BOARD_SQUARES) == 64
        assert BOARD_SQUARES[0] == A8
        assert BOARD_SQUARES[-1] == H1
        assert all(is_on_board(sq) for sq in BOARD_SQUARES)


class TestSquareNames:
    def test_round_trip_all_squares(self) -> None:
        for sq in BOARD_SQUARES:
            assert parse_square(square_name(sq)) == sq

    def test_names(self) -> None:
        assert square_name(A8) == "a8"
        assert square_name(H1) == "h1"
        assert parse_square("e4") == 0x44

    @pytest.mark.parametrize("name", ["e9", "i1", "a0", "", "e", "e44", "E4"])
    def test_invalid_name_raises(self, name: str) -> None:
        with pytest.raises(InvalidSquare):
            parse_square(name)

    def test_invalid_square_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_square("z9")
