"""
Tactics and simple motifs: immediate wins, forced blocks, forks.
These are one-ply lookups, handy for explaining what the search picked.
"""
from typing import List, Sequence

from .game_basics import EMPTY, get_winner, opponent


def immediate_winning_moves(board: Sequence[int], player: int) -> List[int]:
    wins: List[int] = []
    b = list(board)
    for i, v in enumerate(board):
        if v != EMPTY:
            continue
        b[i] = player
        if get_winner(b) == player:
            wins.append(i)
        b[i] = EMPTY
    return wins


def blocking_moves(board: Sequence[int], player: int) -> List[int]:
    """Cells ``player`` must take to stop the opponent winning next move."""
    return immediate_winning_moves(board, opponent(player))


def fork_moves(board: Sequence[int], player: int) -> List[int]:
    forks: List[int] = []
    for i, v in enumerate(board):
        if v != EMPTY:
            continue
        b = list(board)
        b[i] = player
        if len(immediate_winning_moves(b, player)) >= 2:
            forks.append(i)
    return forks
