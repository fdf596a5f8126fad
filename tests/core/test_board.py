"""Tests for Board: placement field, piece ids, rendering."""

import pytest

from oxchess.core.board import Board
from oxchess.core.enums import Color, PieceType
from oxchess.core.errors import MalformedPlacement
from oxchess.core.notation import STARTING_FEN
from oxchess.core.piece import Piece
from oxchess.core.types import A1, A8, E1, E2, E4, E8, H1, H8, parse_square

STARTING_PLACEMENT = STARTING_FEN.split()[0]


class TestFromPlacement:
    def test_starting_ids_follow_scan_order(self) -> None:
        board = Board.from_placement(STARTING_PLACEMENT)
        assert board[A8] == Piece(1, Color.BLACK, PieceType.ROOK)
        assert board[E8] == Piece(5, Color.BLACK, PieceType.KING)
        assert board[H8] == Piece(8, Color.BLACK, PieceType.ROOK)
        assert board[parse_square("a7")] == Piece(9, Color.BLACK, PieceType.PAWN)
        assert board[E2] == Piece(21, Color.WHITE, PieceType.PAWN)
        assert board[A1] == Piece(25, Color.WHITE, PieceType.ROOK)
        assert board[E1] == Piece(29, Color.WHITE, PieceType.KING)
        assert board[H1] == Piece(32, Color.WHITE, PieceType.ROOK)

    def test_sparse_ids(self) -> None:
        board = Board.from_placement(
            "r3k2r/ppp2p1p/2n1p1p1/8/2B2P1q/2NPb1n1/PP4PP/R2Q3K"
        )
        assert board[A8] == Piece(1, Color.BLACK, PieceType.ROOK)
        assert board[E8] == Piece(2, Color.BLACK, PieceType.KING)
        assert board[H8] == Piece(3, Color.BLACK, PieceType.ROOK)
        assert board[parse_square("h4")] == Piece(14, Color.BLACK, PieceType.QUEEN)
        assert board[parse_square("e3")] == Piece(17, Color.BLACK, PieceType.BISHOP)
        assert board[H1] == Piece(25, Color.WHITE, PieceType.KING)

    def test_padding_stays_empty(self) -> None:
        board = Board.from_placement(STARTING_PLACEMENT)
        assert all(board[sq] is None for sq in range(128) if sq & 0x88)

    @pytest.mark.parametrize(
        "placement",
        [
            "8/8/8/8/8/8/8",
            "8/8/8/8/8/8/8/8/8",
            "9/8/8/8/8/8/8/8",
            "44/8/8/8/8/8/8/8",
            "7/8/8/8/8/8/8/8",
            "ppppppppp/8/8/8/8/8/8/8",
            "8/8/8/8/8/8/8/7x",
            "0p7/8/8/8/8/8/8/8",
        ],
    )
    def test_malformed_placement_raises(self, placement: str) -> None:
        with pytest.raises(MalformedPlacement):
            Board.from_placement(placement)


class TestToPlacement:
    @pytest.mark.parametrize(
        "placement",
        [
            STARTING_PLACEMENT,
            "k7/8/8/8/8/8/8/7K",
            "r3k2r/ppp2p1p/2n1p1p1/8/2B2P1q/2NPb1n1/PP4PP/R2Q3K",
            "8/8/8/8/8/8/8/8",
        ],
    )
    def test_round_trip(self, placement: str) -> None:
        assert Board.from_placement(placement).to_placement() == placement


class TestBoardOperations:
    def test_set_and_get(self) -> None:
        board = Board()
        piece = Piece(1, Color.WHITE, PieceType.PAWN)
        board[E4] = piece
        assert board[E4] == piece
        assert board.is_empty(E2)

    def test_padding_write_rejected(self) -> None:
        with pytest.raises(IndexError):
            Board()[0x08] = Piece(1, Color.WHITE, PieceType.PAWN)

    def test_copy_independence(self) -> None:
        board = Board.from_placement(STARTING_PLACEMENT)
        copy = board.copy()
        assert board == copy
        copy[E1] = None
        assert board != copy
        assert board[E1] == Piece(29, Color.WHITE, PieceType.KING)

    def test_king_square(self) -> None:
        board = Board.from_placement(STARTING_PLACEMENT)
        assert board.king_square(Color.WHITE) == E1
        assert board.king_square(Color.BLACK) == E8

    def test_king_square_missing(self) -> None:
        assert Board().king_square(Color.WHITE) is None

    def test_pieces(self) -> None:
        board = Board.from_placement(STARTING_PLACEMENT)
        assert board.pieces(Color.WHITE, PieceType.ROOK) == [A1, H1]
        assert len(board.pieces(Color.BLACK, PieceType.PAWN)) == 8

    def test_occupied_scan_order(self) -> None:
        board = Board.from_placement("k7/8/8/8/8/8/8/7K")
        assert [(sq, str(p)) for sq, p in board.occupied()] == [(A8, "k"), (H1, "K")]


class TestOffboardPieces:
    def test_full_board_has_none(self) -> None:
        assert Board.from_placement(STARTING_PLACEMENT).offboard_pieces() == []

    def test_bare_kings(self) -> None:
        pieces = Board.from_placement("4k3/8/8/8/8/8/8/4K3").offboard_pieces()
        assert len(pieces) == 30
        assert pieces[0] == Piece(128, Color.BLACK, PieceType.ROOK)
        assert pieces[1] == Piece(129, Color.WHITE, PieceType.ROOK)
        assert all(p.piece_type != PieceType.KING for p in pieces)
        assert [p.id for p in pieces] == list(range(128, 158))

    def test_missing_pawn(self) -> None:
        board = Board.from_placement(
            "rnbqkbnr/ppp1pppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
        )
        assert board.offboard_pieces() == [Piece(128, Color.BLACK, PieceType.PAWN)]


class TestRender:
    FEN = "r4rk1/4nqpp/1p1p4/2pPpp2/bPP1P3/R1B1NQ2/P4PPP/1R4K1"

    def test_pretty_symbols(self) -> None:
        expected = "\n".join(
            [
                "   ┌────────────────────────┐",
                " 8 │ ♜  ·  ·  ·  ·  ♜  ♚  · │",
                " 7 │ ·  ·  ·  ·  ♞  ♛  ♟  ♟ │",
                " 6 │ ·  ♟  ·  ♟  ·  ·  ·  · │",
                " 5 │ ·  ·  ♟  ♙  ♟  ♟  ·  · │",
                " 4 │ ♝  ♙  ♙  ·  ♙  ·  ·  · │",
                " 3 │ ♖  ·  ♗  ·  ♘  ♕  ·  · │",
                " 2 │ ♙  ·  ·  ·  ·  ♙  ♙  ♙ │",
                " 1 │ ·  ♖  ·  ·  ·  ·  ♔  · │",
                "   └────────────────────────┘",
                "     a  b  c  d  e  f  g  h",
            ]
        )
        assert Board.from_placement(self.FEN).render() == expected

    def test_letters(self) -> None:
        expected = "\n".join(
            [
                "   ┌────────────────────────┐",
                " 8 │ r  ·  ·  ·  ·  r  k  · │",
                " 7 │ ·  ·  ·  ·  n  q  p  p │",
                " 6 │ ·  p  ·  p  ·  ·  ·  · │",
                " 5 │ ·  ·  p  P  p  p  ·  · │",
                " 4 │ b  P  P  ·  P  ·  ·  · │",
                " 3 │ R  ·  B  ·  N  Q  ·  · │",
                " 2 │ P  ·  ·  ·  ·  P  P  P │",
                " 1 │ ·  R  ·  ·  ·  ·  K  · │",
                "   └────────────────────────┘",
                "     a  b  c  d  e  f  g  h",
            ]
        )
        assert Board.from_placement(self.FEN).render(pretty=False) == expected
