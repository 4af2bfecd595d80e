import pytest

from perfectplay.game_basics import parse_board, serialize_board
from perfectplay.symmetry import (
    ALL_SYMS,
    apply_action_transform,
    canonical_form,
    orbit_size,
    transform_board,
)


def test_rot90_matches_grid_rotation():
    b = list(range(9))
    assert transform_board(b, 'rot90') == [6, 3, 0, 7, 4, 1, 8, 5, 2]


def test_unknown_transform_raises():
    with pytest.raises(ValueError):
        transform_board([0] * 9, 'spin')
    with pytest.raises(ValueError):
        apply_action_transform(0, 'spin')


def test_action_transform_tracks_cells():
    b = parse_board("X.O......")
    for op in ALL_SYMS:
        tb = transform_board(b, op)
        for i in range(9):
            assert tb[apply_action_transform(i, op)] == b[i]


def test_canonical_form_shared_by_orbit():
    b = parse_board("100020000")
    canon = canonical_form(b)
    for op in ALL_SYMS:
        assert canonical_form(transform_board(b, op)) == canon
    assert canon == min(serialize_board(transform_board(b, op)) for op in ALL_SYMS)


def test_orbit_sizes():
    assert orbit_size([0] * 9) == 1
    assert orbit_size(parse_board("000010000")) == 1
    assert orbit_size(parse_board("100000000")) == 4
    assert orbit_size(parse_board("120000000")) == 8
