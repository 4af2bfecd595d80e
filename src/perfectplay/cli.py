from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .game_basics import (
    InvalidBoardError,
    empty_board,
    is_terminal,
    next_player,
    parse_board,
    player_name,
    pretty,
    serialize_board,
    validate_board,
)
from .search import SearchStats, best_move, move_scores
from .selfplay import play_perfect_game
from .symmetry import canonical_form, orbit_size
from .table import ExportArgs, default_out, run_export
from .tactics import blocking_moves, fork_moves, immediate_winning_moves
from .tracking import maybe_mlflow_run

BOARD_HELP = "Board string, 9 cells of 0/1/2 or ./X/O, e.g. 100020000 or X...O...."


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="perfectplay", description="Perfect-play tic-tac-toe search")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )

    p_sol = sub.add_parser("solve", help="Best move and score for the side to move")
    p_sol.add_argument("--board", help=BOARD_HELP + " (omit with --stdin)")
    p_sol.add_argument(
        "--stdin", action="store_true", help="Read many boards from stdin and stream CSV output"
    )
    p_sol.add_argument(
        "--no-pruning",
        dest="prune",
        action="store_false",
        help="Search exhaustively without alpha-beta cutoffs",
    )

    p_sc = sub.add_parser("scores", help="Root score of every legal move")
    p_sc.add_argument("--board", required=True, help=BOARD_HELP)

    p_play = sub.add_parser("play", help="Play out a game with perfect moves for both sides")
    p_play.add_argument("--board", default=None, help=BOARD_HELP + " (default: empty board)")

    p_tac = sub.add_parser("tactics", help="List immediate wins, blocks and forks for side-to-move")
    p_tac.add_argument("--board", required=True, help=BOARD_HELP)

    p_sym = sub.add_parser("symmetry", help="Show the canonical form and orbit size of a board")
    p_sym.add_argument("--board", required=True, help=BOARD_HELP)

    p_export = sub.add_parser(
        "export",
        help="Export the perfect-play table (CSV by default; parquet requires pandas+pyarrow)",
    )
    p_export.add_argument(
        "--out", type=Path, default=None,
        help="Output directory (default: $PERFECTPLAY_DATA_RAW or ./data_raw)",
    )
    p_export.add_argument(
        "--canonical-only", action="store_true", help="Only export one position per symmetry orbit"
    )
    p_export.add_argument(
        "--format",
        choices=["csv", "parquet", "both"],
        default="csv",
        help="Export format: csv (default), parquet, both",
    )
    p_export.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_export.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs/artifacts (for mlflow local backend)",
    )

    return p


def _print_info() -> None:
    import importlib.util
    import platform
    import sys

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["pandas", "pyarrow", "mlflow"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _read_board(raw: Optional[str]) -> List[int]:
    if raw is None:
        raise InvalidBoardError("--board is required (or use --stdin where supported)")
    board = parse_board(raw)
    validate_board(board)
    return board


def _solve_stdin(prune: bool) -> int:
    import csv as _csv
    import sys as _sys

    w = _csv.writer(_sys.stdout)
    w.writerow(["board", "to_move", "move", "score"])
    for line in _sys.stdin:
        raw = line.rstrip("\r\n")
        if not raw:
            continue
        try:
            b = _read_board(raw)
        except InvalidBoardError as e:
            logging.warning("Skipping %r: %s", raw, e)
            continue
        move, score = best_move(b, prune=prune)
        to_move = "" if is_terminal(b) else player_name(next_player(b))
        w.writerow([serialize_board(b), to_move, "" if move is None else move,
                    "" if score is None else score])
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("perfectplay"))
        except Exception:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    if ns.cmd == "export":
        with maybe_mlflow_run(ns.tracking == "mlflow", run_name="perfect_play_export", log_dir=ns.log_dir):
            out = run_export(ExportArgs(
                out=ns.out if ns.out is not None else default_out(),
                canonical_only=ns.canonical_only,
                verbose=ns.verbose,
                cli_argv=list(argv) if argv is not None else None,
                format=ns.format,
            ))
        logging.info("Exported perfect-play table to: %s", out)
        return 0

    if ns.cmd == "solve" and ns.stdin:
        return _solve_stdin(ns.prune)

    if ns.cmd in {"solve", "scores", "play", "tactics", "symmetry"}:
        try:
            if ns.cmd == "play" and ns.board is None:
                b = empty_board()
            else:
                b = _read_board(ns.board)
        except InvalidBoardError as e:
            logging.error("%s", e)
            return 2
    else:
        parser.print_help()
        return 0

    if ns.cmd == "solve":
        stats = SearchStats()
        move, score = best_move(b, prune=ns.prune, stats=stats)
        if move is None:
            logging.info("game over: no move applies")
        else:
            logging.info("to_move=%s move=%s score=%s", player_name(next_player(b)), move, score)
        logging.debug("nodes=%d leaves=%d cutoffs=%d", stats.nodes, stats.leaves, stats.cutoffs)
        return 0

    if ns.cmd == "scores":
        scores = move_scores(b)
        logging.info(
            "to_move=%s scores=%s",
            player_name(next_player(b)) if scores else "-",
            " ".join(f"{mv}:{sc}" for mv, sc in scores.items()),
        )
        return 0

    if ns.cmd == "play":
        print(pretty(b))
        record = play_perfect_game(b)
        print("\nmoves=" + " ".join(map(str, record.moves)))
        print(pretty(record.final))
        print(f"\nResult: {record.result}")
        return 0

    if ns.cmd == "tactics":
        p = next_player(b)
        logging.info(
            "to_move=%s wins=%s blocks=%s forks=%s",
            player_name(p),
            immediate_winning_moves(b, p),
            blocking_moves(b, p),
            fork_moves(b, p),
        )
        return 0

    # symmetry
    logging.info("canonical_form=%s orbit_size=%d", canonical_form(b), orbit_size(b))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
