import pytest

from chessrules.board import Board
from chessrules.constants import BLACK, EMPTY, KING, KNIGHT, PAWN, ROOK, WHITE, GameState
from chessrules.errors import IllegalMoveError, InvalidSquareError
from chessrules.game import Game
from chessrules.movegen import legal_moves
from chessrules.square import Square, parse_square as sq, square_name


CASTLING_DIAGRAM = """
. . . . k . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
R . . . K . . R
"""


def _names(squares) -> set[str]:
    return {square_name(s) for s in squares}


def _play(game: Game, *moves: str) -> None:
    for text in moves:
        game.play(sq(text[:2]), sq(text[2:]))


def _castling_game(**replacements: str) -> Game:
    board = Board.from_diagram(CASTLING_DIAGRAM)
    for name, symbol in replacements.items():
        board.set_piece(sq(name), {"r": -ROOK, "n": -KNIGHT, "k": -KING, ".": EMPTY}[symbol])
    return Game(board)


def test_apply_move_updates_turn_and_last_move() -> None:
    game = Game()
    game.apply_move(sq("g1"), sq("f3"))
    assert game.turn == BLACK
    assert game.board.piece_at(sq("f3")) == KNIGHT
    assert game.board.piece_at(sq("g1")) == EMPTY
    assert game.last_move.uci() == "g1f3"
    assert game.en_passant is None


def test_double_push_sets_en_passant_for_one_move() -> None:
    game = Game()
    _play(game, "e2e4")
    assert game.en_passant == sq("e3")
    _play(game, "g8f6")
    assert game.en_passant is None


def test_en_passant_capture_available_only_immediately() -> None:
    game = Game()
    _play(game, "e2e4", "a7a6", "e4e5", "d7d5")
    assert "d6" in _names(game.legal_moves(sq("e5")))

    later = game.copy()
    _play(later, "g1f3", "h7h6")
    assert "d6" not in _names(later.legal_moves(sq("e5")))

    _play(game, "e5d6")
    assert game.board.piece_at(sq("d6")) == PAWN
    assert game.board.piece_at(sq("d5")) == EMPTY
    assert game.en_passant is None


def test_black_en_passant_capture() -> None:
    game = Game()
    _play(game, "a2a3", "d7d5", "a3a4", "d5d4", "e2e4")
    assert "e3" in _names(game.legal_moves(sq("d4")))
    _play(game, "d4e3")
    assert game.board.piece_at(sq("e3")) == -PAWN
    assert game.board.piece_at(sq("e4")) == EMPTY


def test_castling_offered_when_path_clear_and_safe() -> None:
    game = _castling_game()
    assert {"g1", "c1"} <= _names(game.legal_moves(sq("e1")))


def test_kingside_castle_moves_rook() -> None:
    game = _castling_game()
    _play(game, "e1g1")
    assert game.board.piece_at(sq("g1")) == KING
    assert game.board.piece_at(sq("f1")) == ROOK
    assert game.board.piece_at(sq("h1")) == EMPTY
    assert game.board.piece_at(sq("e1")) == EMPTY


def test_queenside_castle_moves_rook() -> None:
    game = _castling_game()
    _play(game, "e1c1")
    assert game.board.piece_at(sq("c1")) == KING
    assert game.board.piece_at(sq("d1")) == ROOK
    assert game.board.piece_at(sq("a1")) == EMPTY


def test_castling_blocked_through_attacked_square() -> None:
    game = _castling_game(f8="r")
    moves = _names(game.legal_moves(sq("e1")))
    assert "g1" not in moves
    assert "c1" in moves


def test_castling_blocked_onto_attacked_square() -> None:
    game = _castling_game(g8="r")
    moves = _names(game.legal_moves(sq("e1")))
    assert "g1" not in moves
    assert "c1" in moves


def test_castling_needs_rook_on_home_square() -> None:
    game = _castling_game(h1="n")
    assert not game.moved.has_moved(sq("h1"))
    moves = _names(game.legal_moves(sq("e1")))
    assert "g1" not in moves
    assert "c1" in moves


def test_castling_blocked_while_in_check() -> None:
    game = _castling_game(e8=".", a8="k", e7="r")
    moves = _names(game.legal_moves(sq("e1")))
    assert "g1" not in moves
    assert "c1" not in moves


def test_castling_blocked_by_piece_between() -> None:
    board = Board.from_diagram(CASTLING_DIAGRAM)
    board.set_piece(sq("b1"), KNIGHT)
    game = Game(board)
    moves = _names(game.legal_moves(sq("e1")))
    assert "g1" in moves
    assert "c1" not in moves


def test_castling_not_offered_without_context() -> None:
    game = _castling_game()
    assert not {"g1", "c1"} & _names(legal_moves(game.board, sq("e1")))


def test_rook_moving_away_and_back_disables_castling() -> None:
    game = _castling_game()
    _play(game, "h1h2", "e8d8", "h2h1", "d8e8")
    moves = _names(game.legal_moves(sq("e1")))
    assert "g1" not in moves
    assert "c1" in moves
    assert game.moved.has_moved(sq("h1"))


def test_king_moving_away_and_back_disables_both_sides() -> None:
    game = _castling_game()
    _play(game, "e1f1", "e8d8", "f1e1", "d8e8")
    assert not {"g1", "c1"} & _names(game.legal_moves(sq("e1")))


def test_apply_move_is_all_or_nothing() -> None:
    game = Game()
    before = game.copy()
    with pytest.raises(InvalidSquareError):
        game.apply_move(sq("e2"), Square(4, 9))
    assert game.board == before.board
    assert game.moved == before.moved
    assert game.turn == WHITE


def test_play_rejects_wrong_side_and_illegal_targets() -> None:
    game = Game()
    with pytest.raises(IllegalMoveError):
        game.play(sq("e7"), sq("e5"))
    with pytest.raises(IllegalMoveError):
        game.play(sq("e2"), sq("e5"))
    with pytest.raises(IllegalMoveError):
        game.play(sq("e4"), sq("e5"))
    assert game.board == Board.starting()
    assert game.turn == WHITE


def test_checkmate_ends_the_game() -> None:
    game = Game()
    _play(game, "f2f3", "e7e5", "g2g4", "d8h4")
    assert game.state is GameState.BLACK_WINS
    assert game.is_over()
    with pytest.raises(IllegalMoveError):
        game.play(sq("a2"), sq("a3"))


def test_scholars_mate_white_wins() -> None:
    game = Game()
    _play(game, "e2e4", "e7e5", "f1c4", "b8c6", "d1h5", "g8f6", "h5f7")
    assert game.state is GameState.WHITE_WINS


def test_pawn_on_last_rank_stays_a_pawn() -> None:
    board = Board.from_diagram(
        """
        k . . . . . . .
        . . . . P . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . K . . .
        """
    )
    game = Game(board)
    _play(game, "e7e8")
    assert game.board.piece_at(sq("e8")) == PAWN
