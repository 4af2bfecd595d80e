import pytest

from perfectplay.game_basics import (
    EMPTY,
    O,
    X,
    InvalidBoardError,
    check_shape,
    empty_board,
    get_winner,
    is_draw,
    is_terminal,
    is_valid_state,
    legal_moves,
    next_player,
    parse_board,
    pretty,
    serialize_board,
    validate_board,
)

DRAW = [1, 1, 2, 2, 2, 1, 1, 2, 1]


def test_winner_rows_columns_diagonals():
    assert get_winner(parse_board("111220000")) == X
    assert get_winner(parse_board("120120100")) == X
    assert get_winner(parse_board("211020002")) == O
    assert get_winner(parse_board("110220000")) == EMPTY


def test_draw_and_terminal():
    assert is_draw(DRAW)
    assert is_terminal(DRAW)
    assert not is_draw(empty_board())
    assert not is_terminal(empty_board())
    # full board with a winner is not a draw
    full_win = [1, 1, 1, 2, 2, 1, 2, 1, 2]
    assert get_winner(full_win) == X
    assert not is_draw(full_win)


def test_legal_moves_ascending():
    assert legal_moves(empty_board()) == list(range(9))
    assert legal_moves(parse_board("X...O...X")) == [1, 2, 3, 5, 6, 7]
    assert legal_moves(DRAW) == []


def test_next_player_alternation():
    b = empty_board()
    assert next_player(b) == X
    for i in range(9):
        b2 = b[:]
        b2[i] = X
        assert next_player(b2) == O


def test_parse_board_glyphs_and_digits_agree():
    assert parse_board("X.O......") == parse_board("102000000")
    assert parse_board("x-o______") == [1, 0, 2, 0, 0, 0, 0, 0, 0]
    assert serialize_board(parse_board("X.O......")) == "102000000"


@pytest.mark.parametrize("bad", ["abc", "0123456789", "12345678", "00000000z"])
def test_parse_board_rejects_malformed(bad: str):
    with pytest.raises(InvalidBoardError):
        parse_board(bad)


@pytest.mark.parametrize("bad", [
    "111000000",  # X moved three times in a row
    "222000000",  # O moved first
    "111222000",  # both players have a line
    "111220200",  # O moved after X already won
    "222110110",  # X moved after O already won
])
def test_validate_board_rejects_unreachable(bad: str):
    b = parse_board(bad)
    assert is_valid_state(b) is False
    with pytest.raises(InvalidBoardError):
        validate_board(b)


def test_validate_board_accepts_reachable():
    for raw in ["000000000", "100000000", "100020000", "111220000", "121121212"]:
        validate_board(parse_board(raw))


def test_validate_board_rejects_bad_shape():
    with pytest.raises(InvalidBoardError):
        validate_board([0] * 8)
    with pytest.raises(InvalidBoardError):
        validate_board([0] * 8 + [3])


def test_pretty_layout():
    assert pretty(parse_board("X.O.X...O")) == "X| |O\n-+-+-\n |X| \n-+-+-\n | |O"


def test_float_and_bool_cells_fail_shape_check():
    for cell in (1.0, True):
        board = [cell] + [EMPTY] * 8
        assert is_valid_state(board) is False
        with pytest.raises(InvalidBoardError):
            check_shape(board)
