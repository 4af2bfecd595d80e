from perfectplay.game_basics import O, X, parse_board
from perfectplay.tactics import blocking_moves, fork_moves, immediate_winning_moves


def test_immediate_wins():
    b = parse_board("110220000")
    assert immediate_winning_moves(b, X) == [2]
    assert immediate_winning_moves(b, O) == [5]


def test_blocking_moves_are_opponent_wins():
    b = parse_board("110020000")
    assert blocking_moves(b, O) == [2]
    assert blocking_moves(b, X) == []


def test_fork_detected():
    # X on opposite corners, O on an edge: X at 6 threatens 3 and 7
    b = parse_board("120000001")
    assert 6 in fork_moves(b, X)


def test_board_not_modified():
    b = parse_board("110020000")
    before = list(b)
    immediate_winning_moves(b, X)
    fork_moves(b, X)
    assert b == before
