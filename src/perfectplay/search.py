"""
Exact game-theoretic search: minimax with alpha-beta pruning.
Scoring is from the perspective of the maximizing player:
- Win = +10 - depth (faster wins score higher).
- Loss = -10 + depth (slower losses score higher).
- Draw = 0.
Depth counts plies below the root move, so an immediate win scores 9.
Tie-break policy:
- Root moves are scanned in ascending index order and only a strictly
  greater score replaces the incumbent, so ties go to the lowest index.
"""
from __future__ import annotations

import logging
import math
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .game_basics import (
    EMPTY,
    check_shape,
    get_winner,
    is_draw,
    legal_moves,
    next_player,
    opponent,
    player_name,
    serialize_board,
    validate_board,
)
from .symmetry import canonical_form

WIN_SCORE = 10


@dataclass
class SearchStats:
    nodes: int = 0
    leaves: int = 0
    cutoffs: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {'nodes': self.nodes, 'leaves': self.leaves, 'cutoffs': self.cutoffs}


@contextmanager
def placed(board: List[int], idx: int, player: int) -> Iterator[List[int]]:
    """Temporarily put ``player`` on ``idx``; the cell is emptied again on exit."""
    board[idx] = player
    try:
        yield board
    finally:
        board[idx] = EMPTY


def minimax(
    board: List[int],
    depth: int,
    alpha: float,
    beta: float,
    maximizing: int,
    to_move: int,
    *,
    prune: bool = True,
    stats: Optional[SearchStats] = None,
) -> int:
    if stats is not None:
        stats.nodes += 1
    w = get_winner(board)
    if w != EMPTY:
        if stats is not None:
            stats.leaves += 1
        return WIN_SCORE - depth if w == maximizing else -WIN_SCORE + depth
    if is_draw(board):
        if stats is not None:
            stats.leaves += 1
        return 0

    nxt = opponent(to_move)
    if to_move == maximizing:
        best = -math.inf
        for mv in legal_moves(board):
            with placed(board, mv, to_move):
                score = minimax(board, depth + 1, alpha, beta, maximizing, nxt,
                                prune=prune, stats=stats)
            best = max(best, score)
            alpha = max(alpha, best)
            if prune and beta <= alpha:
                if stats is not None:
                    stats.cutoffs += 1
                break
    else:
        best = math.inf
        for mv in legal_moves(board):
            with placed(board, mv, to_move):
                score = minimax(board, depth + 1, alpha, beta, maximizing, nxt,
                                prune=prune, stats=stats)
            best = min(best, score)
            beta = min(beta, best)
            if prune and beta <= alpha:
                if stats is not None:
                    stats.cutoffs += 1
                break
    return int(best)


def _root_scores(
    board: List[int], prune: bool, stats: Optional[SearchStats]
) -> Iterator[Tuple[int, int]]:
    player = next_player(board)
    for mv in legal_moves(board):
        with placed(board, mv, player):
            score = minimax(board, 1, -math.inf, math.inf, player, opponent(player),
                            prune=prune, stats=stats)
        yield mv, score


def _prepare(board: Sequence[int], strict: bool) -> List[int]:
    if strict:
        validate_board(board)
    else:
        check_shape(board)
    return list(board)


def best_move(
    board: Sequence[int],
    *,
    prune: bool = True,
    stats: Optional[SearchStats] = None,
    strict: bool = False,
) -> Tuple[Optional[int], Optional[int]]:
    """Return ``(move, score)`` for the side to move, or ``(None, None)`` if the game is over.

    The caller's board is never modified. With ``strict=True`` unreachable
    boards raise InvalidBoardError instead of being searched as given.
    """
    work = _prepare(board, strict)
    if get_winner(work) != EMPTY or is_draw(work):
        return None, None
    best: Optional[int] = None
    best_score = -math.inf
    for mv, score in _root_scores(work, prune, stats):
        if score > best_score:
            best_score = score
            best = mv
    if stats is not None:
        logging.debug(
            "best_move board=%s to_move=%s move=%s score=%s nodes=%d cutoffs=%d",
            serialize_board(work), player_name(next_player(work)), best, best_score,
            stats.nodes, stats.cutoffs,
        )
    return best, int(best_score)


def move_scores(
    board: Sequence[int],
    *,
    prune: bool = True,
    stats: Optional[SearchStats] = None,
    strict: bool = False,
) -> Dict[int, int]:
    """Root score of every legal move, evaluated exactly as best_move does."""
    work = _prepare(board, strict)
    if get_winner(work) != EMPTY or is_draw(work):
        return {}
    return dict(_root_scores(work, prune, stats))


def reachable_states() -> Iterator[Tuple[int, ...]]:
    """Enumerate all states reachable from the empty board (breadth-first)."""
    start = tuple([EMPTY] * 9)
    q = deque([start])
    seen = {start}
    while q:
        s = q.popleft()
        yield s
        if get_winner(s) != EMPTY or is_draw(s):
            continue
        p = next_player(s)
        for mv in legal_moves(s):
            child = s[:mv] + (p,) + s[mv + 1:]
            if child not in seen:
                seen.add(child)
                q.append(child)


def solve_all_reachable(canonical_only: bool = False) -> Dict[str, Dict]:
    """Best move and score for every reachable state, keyed by serialized board."""
    solved: Dict[str, Dict] = {}
    total = SearchStats()
    for s in reachable_states():
        key = serialize_board(s)
        if canonical_only and canonical_form(s) != key:
            continue
        stats = SearchStats()
        move, score = best_move(s, stats=stats)
        total.nodes += stats.nodes
        total.leaves += stats.leaves
        total.cutoffs += stats.cutoffs
        solved[key] = {
            'to_move': None if move is None else next_player(s),
            'move': move,
            'score': score,
            'nodes': stats.nodes,
        }
    logging.debug("solve_all_reachable states=%d %s", len(solved), total.as_dict())
    return solved
