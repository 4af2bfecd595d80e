"""
Perfect self-play: both sides repeatedly take the selected best move.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .game_basics import (
    EMPTY,
    empty_board,
    get_winner,
    is_draw,
    next_player,
    player_name,
    pretty,
    validate_board,
)
from .search import best_move


@dataclass
class GameRecord:
    start: List[int]
    plies: List[Tuple[int, int, int]] = field(default_factory=list)  # (player, move, score)
    final: List[int] = field(default_factory=list)
    winner: int = EMPTY

    @property
    def moves(self) -> List[int]:
        return [mv for _, mv, _ in self.plies]

    @property
    def result(self) -> str:
        return f"{player_name(self.winner)} wins" if self.winner != EMPTY else "Draw"


def play_perfect_game(board: Optional[Sequence[int]] = None) -> GameRecord:
    cur = empty_board() if board is None else list(board)
    validate_board(cur)
    record = GameRecord(start=list(cur))
    while get_winner(cur) == EMPTY and not is_draw(cur):
        p = next_player(cur)
        move, score = best_move(cur)
        cur[move] = p
        record.plies.append((p, move, score))
        logging.info("%s plays %d (score %d)\n%s", player_name(p), move, score, pretty(cur))
    record.final = cur
    record.winner = get_winner(cur)
    logging.info("Result: %s", record.result)
    return record
