"""
Board symmetries (the dihedral group of the square).
The 8 transforms map reachable positions onto reachable positions with the
same game value, so exports can keep one representative per orbit.
"""
from typing import Dict, List, Sequence

from .game_basics import serialize_board

ALL_SYMS = ['id', 'rot90', 'rot180', 'rot270', 'hflip', 'vflip', 'd1', 'd2']

# board index each output cell is read from
_PERMS: Dict[str, List[int]] = {
    'id': [0, 1, 2, 3, 4, 5, 6, 7, 8],
    'rot90': [6, 3, 0, 7, 4, 1, 8, 5, 2],
    'rot180': [8, 7, 6, 5, 4, 3, 2, 1, 0],
    'rot270': [2, 5, 8, 1, 4, 7, 0, 3, 6],
    'hflip': [2, 1, 0, 5, 4, 3, 8, 7, 6],
    'vflip': [6, 7, 8, 3, 4, 5, 0, 1, 2],
    'd1': [0, 3, 6, 1, 4, 7, 2, 5, 8],
    'd2': [8, 5, 2, 7, 4, 1, 6, 3, 0],
}


def transform_board(board: Sequence[int], kind: str) -> List[int]:
    try:
        perm = _PERMS[kind]
    except KeyError:
        raise ValueError(f"Unknown transformation: {kind}") from None
    return [board[i] for i in perm]


def _index_map(kind: str) -> List[int]:
    mapping = [0] * 9
    for out_idx, src_idx in enumerate(_PERMS[kind]):
        mapping[src_idx] = out_idx
    return mapping


SYMM_INDEX_MAPS = {k: _index_map(k) for k in ALL_SYMS}


def apply_action_transform(action: int, kind: str) -> int:
    """Where cell ``action`` lands after ``transform_board(..., kind)``."""
    if kind not in SYMM_INDEX_MAPS:
        raise ValueError(f"Unknown transformation: {kind}")
    return SYMM_INDEX_MAPS[kind][action]


def canonical_form(board: Sequence[int]) -> str:
    return min(serialize_board(transform_board(board, k)) for k in ALL_SYMS)


def orbit_size(board: Sequence[int]) -> int:
    return len({serialize_board(transform_board(board, k)) for k in ALL_SYMS})
