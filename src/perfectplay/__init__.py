"""perfectplay package.

Exact tic-tac-toe search (minimax with alpha-beta pruning), perfect
self-play, symmetry helpers, a lookup-table export, and a simple CLI.

Convenience imports are exposed for common workflows.
"""

from .game_basics import InvalidBoardError, get_winner, is_draw, legal_moves, next_player
from .search import best_move, minimax, move_scores, solve_all_reachable
from .selfplay import play_perfect_game
from .table import ExportArgs, run_export

__version__ = "0.1.0"

__all__ = [
    "InvalidBoardError",
    "get_winner",
    "is_draw",
    "legal_moves",
    "next_player",
    "best_move",
    "minimax",
    "move_scores",
    "solve_all_reachable",
    "play_perfect_game",
    "run_export",
    "ExportArgs",
]
