import pytest

from chessrules.board import Board
from chessrules.constants import BISHOP, BLACK, PAWN, ROOK, WHITE, owner
from chessrules.context import MovedSquares, MoveContext
from chessrules.errors import InvalidSquareError
from chessrules.movegen import legal_moves, pseudo_moves
from chessrules.square import Square, parse_square as sq, square_name


def _names(squares) -> set[str]:
    return {square_name(s) for s in squares}


def _count_side(board: Board, side: int) -> int:
    return sum(len(legal_moves(board, square)) for square, piece in board.occupied() if owner(piece) == side)


def test_start_position_has_20_legal_moves_per_side() -> None:
    board = Board.starting()
    assert _count_side(board, WHITE) == 20
    assert _count_side(board, BLACK) == 20


def test_pawn_single_and_double_push() -> None:
    board = Board.starting()
    assert _names(pseudo_moves(board, sq("e2"))) == {"e3", "e4"}
    assert _names(pseudo_moves(board, sq("d7"))) == {"d6", "d5"}


def test_pawn_double_push_needs_both_squares_empty() -> None:
    board = Board.starting()
    board.set_piece(sq("e4"), -PAWN)
    assert _names(pseudo_moves(board, sq("e2"))) == {"e3"}
    board.set_piece(sq("e3"), -PAWN)
    assert pseudo_moves(board, sq("e2")) == []


def test_pawn_captures_only_opponents() -> None:
    board = Board.from_diagram(
        """
        . . . . k . . .
        . . . . . . . .
        . . . . . . . .
        . . . p . N . .
        . . . . P . . .
        . . . . . . . .
        . . . . . . . .
        . . . . K . . .
        """
    )
    assert _names(pseudo_moves(board, sq("e4"))) == {"e5", "d5"}


def test_knight_jumps() -> None:
    board = Board.starting()
    assert _names(pseudo_moves(board, sq("g1"))) == {"f3", "h3"}

    lone = Board.from_diagram("\n".join(["k......."] + ["........"] * 3 + ["...N...."] + ["........"] * 2 + ["K......."]))
    assert len(pseudo_moves(lone, sq("d4"))) == 8
    corner = Board.from_diagram("\n".join(["k......."] + ["........"] * 6 + ["N...K..."]))
    assert _names(pseudo_moves(corner, sq("a1"))) == {"b3", "c2"}


def test_sliders_stop_at_first_piece() -> None:
    board = Board.from_diagram(
        """
        . . . . k . . .
        . . . . . . . .
        . . . r . . . .
        . . . . . . . .
        . R . . . . . P
        . . . . . . . .
        . . . . . . . .
        . . . . K . . .
        """
    )
    rook = _names(pseudo_moves(board, sq("b4")))
    assert rook == {"a4", "c4", "d4", "e4", "f4", "g4", "b5", "b6", "b7", "b8", "b3", "b2", "b1"}

    bishop_board = Board.from_diagram(
        """
        . . . . k . . .
        . . . . . . . .
        . . . . . p . .
        . . . . . . . .
        . . . B . . . .
        . . . . . . . .
        . P . . . . . .
        . . . . K . . .
        """
    )
    bishop = _names(pseudo_moves(bishop_board, sq("d4")))
    assert bishop == {"c5", "b6", "a7", "e5", "f6", "c3", "e3", "f2", "g1"}


def test_queen_is_union_of_rook_and_bishop() -> None:
    diagram = "\n".join(["k......."] + ["........"] * 3 + ["...Q...."] + ["........"] * 2 + ["......K."])
    board = Board.from_diagram(diagram)
    queen = set(pseudo_moves(board, sq("d4")))

    board.set_piece(sq("d4"), ROOK)
    rook = set(pseudo_moves(board, sq("d4")))
    board.set_piece(sq("d4"), BISHOP)
    bishop = set(pseudo_moves(board, sq("d4")))
    assert queen == rook | bishop


def test_empty_square_yields_no_moves() -> None:
    board = Board.starting()
    assert pseudo_moves(board, sq("e4")) == []
    assert legal_moves(board, sq("e4")) == []


def test_out_of_range_square_raises() -> None:
    with pytest.raises(InvalidSquareError):
        pseudo_moves(Board.starting(), Square(8, 8))


def test_generation_is_pure() -> None:
    board = Board.starting()
    before = board.copy()
    first = legal_moves(board, sq("b1"))
    second = legal_moves(board, sq("b1"))
    assert first == second
    assert board == before


def test_pinned_piece_has_no_legal_moves() -> None:
    board = Board.from_diagram(
        """
        k . . . r . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . B . . .
        . . . . K . . .
        """
    )
    assert pseudo_moves(board, sq("e2"))
    assert legal_moves(board, sq("e2")) == []


def test_illegal_move_leaving_king_in_check_filtered_out() -> None:
    board = Board.from_diagram(
        """
        . . . . k . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . r . . .
        R . . . K . . .
        """
    )
    assert "a2" not in _names(legal_moves(board, sq("a1")))
    king = _names(legal_moves(board, sq("e1")))
    assert "d1" in king
    assert "e2" in king
    assert "d2" not in king


def test_en_passant_needs_context() -> None:
    board = Board.from_diagram(
        """
        . . . . k . . .
        . . . . . . . .
        . . . . . . . .
        . . . p P . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . K . . .
        """
    )
    context = MoveContext(moved=MovedSquares(), en_passant=sq("d6"))
    assert "d6" not in _names(legal_moves(board, sq("e5")))
    assert "d6" in _names(legal_moves(board, sq("e5"), context))


def test_context_variants_agree_without_special_moves() -> None:
    board = Board.starting()
    context = MoveContext(moved=MovedSquares())
    for square, _ in board.occupied():
        assert legal_moves(board, square) == legal_moves(board, square, context)
