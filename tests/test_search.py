import pytest

from perfectplay.game_basics import InvalidBoardError, O, X, empty_board, parse_board
from perfectplay.search import SearchStats, best_move, move_scores
from perfectplay.tactics import blocking_moves


def test_empty_board_all_moves_draw_and_lowest_index_wins_tie():
    scores = move_scores(empty_board())
    assert sorted(scores) == list(range(9))
    assert set(scores.values()) == {0}
    assert best_move(empty_board()) == (0, 0)


def test_immediate_win_scores_nine():
    # X to move, row 0 completes at 2
    b = parse_board("110220000")
    assert best_move(b) == (2, 9)


def test_immediate_win_for_o():
    # O to move, column 1 completes at 7
    b = parse_board("120120001")
    move, score = best_move(b)
    assert (move, score) == (7, 9)


def test_forced_block():
    # O to move, X threatens 0-1-2 and O has no win of its own
    b = parse_board("110020000")
    move, _ = best_move(b)
    assert move in blocking_moves(b, O)
    assert move == 2


def test_non_blocking_moves_lose_at_second_ply():
    b = parse_board("110020000")
    scores = move_scores(b)
    for mv, sc in scores.items():
        if mv != 2:
            assert sc == -8
    assert scores[2] > -8
    assert best_move(b) == (2, scores[2])


def test_win_preferred_over_block():
    # X to move: X can win at 2, O threatens 5
    b = parse_board("110220000")
    assert blocking_moves(b, X) == [5]
    assert best_move(b)[0] == 2


@pytest.mark.parametrize("raw", [
    "111220000",  # X won
    "112120200",  # O won
    "112221121",  # draw
])
def test_terminal_positions_are_noops(raw: str):
    b = parse_board(raw)
    assert best_move(b) == (None, None)
    assert move_scores(b) == {}


def test_caller_board_is_not_modified():
    b = parse_board("100020000")
    before = list(b)
    best_move(b)
    move_scores(b)
    assert b == before


def test_tuple_boards_are_accepted():
    assert best_move(tuple(parse_board("110220000"))) == (2, 9)


def test_stats_show_pruning_saves_work():
    pruned = SearchStats()
    full = SearchStats()
    b = parse_board("100000000")
    assert best_move(b, stats=pruned) == best_move(b, prune=False, stats=full)
    assert pruned.cutoffs > 0
    assert full.cutoffs == 0
    assert pruned.nodes < full.nodes


def test_shape_is_checked_even_when_trusting_caller():
    with pytest.raises(InvalidBoardError):
        best_move([0] * 10)
    with pytest.raises(InvalidBoardError):
        best_move([0, 0, 0, 0, 5, 0, 0, 0, 0])


@pytest.mark.parametrize("cell", [1.0, True, "1", None])
def test_non_integer_cells_are_rejected(cell):
    board = [cell, 0, 0, 0, 0, 0, 0, 0, 0]
    with pytest.raises(InvalidBoardError):
        best_move(board)
    with pytest.raises(InvalidBoardError):
        best_move(board, strict=True)


def test_strict_mode_rejects_unreachable_boards():
    bad = parse_board("111000000")
    with pytest.raises(InvalidBoardError):
        best_move(bad, strict=True)
    # trusting mode searches it as given: O to move, X already won
    assert best_move(bad) == (None, None)
