#!/usr/bin/env python3
"""
Compare alpha-beta search against exhaustive minimax.

For each opening depth, every reachable non-terminal position is searched
with and without pruning; node counts and wall time are reported and the
best moves/scores are checked to be identical.
"""
from __future__ import annotations

import argparse
import logging
import math
import statistics as stats
import time
from pathlib import Path
from typing import Dict, List, Tuple

from perfectplay.game_basics import EMPTY, get_winner, is_draw
from perfectplay.search import SearchStats, best_move, reachable_states
from perfectplay.tracking import log_metrics, log_params, maybe_mlflow_run


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    half = 1.96 * (s / math.sqrt(len(values)))
    return m, half


def _positions(marks: int) -> List[Tuple[int, ...]]:
    return [
        s for s in reachable_states()
        if sum(1 for v in s if v != EMPTY) == marks and get_winner(s) == EMPTY and not is_draw(s)
    ]


def bench_depth(marks: int) -> Dict[str, float]:
    pruned = SearchStats()
    full = SearchStats()
    t_pruned: List[float] = []
    t_full: List[float] = []
    for s in _positions(marks):
        t0 = time.perf_counter()
        a = best_move(s, stats=pruned)
        t1 = time.perf_counter()
        b = best_move(s, prune=False, stats=full)
        t2 = time.perf_counter()
        if a != b:
            raise AssertionError(f"pruning changed the result for {s}: {a} != {b}")
        t_pruned.append(t1 - t0)
        t_full.append(t2 - t1)
    m_p, h_p = ci95(t_pruned)
    m_f, h_f = ci95(t_full)
    return {
        "positions": float(len(t_pruned)),
        "nodes_pruned": float(pruned.nodes),
        "nodes_full": float(full.nodes),
        "cutoffs": float(pruned.cutoffs),
        "node_ratio": pruned.nodes / full.nodes if full.nodes else float("nan"),
        "time_pruned_mean_s": m_p,
        "time_pruned_ci95_s": h_p,
        "time_full_mean_s": m_f,
        "time_full_ci95_s": h_f,
    }


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Benchmark alpha-beta pruning against plain minimax")
    ap.add_argument("--min-marks", type=int, default=2, help="Fewest marks on benchmarked boards")
    ap.add_argument("--tracking", choices=["none", "mlflow"], default="none")
    ap.add_argument("--log-dir", type=Path, default=Path("runs"))
    ns = ap.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    with maybe_mlflow_run(ns.tracking == "mlflow", run_name="pruning_benchmark", log_dir=ns.log_dir):
        log_params({"min_marks": ns.min_marks})
        for marks in range(ns.min_marks, 9):
            res = bench_depth(marks)
            logging.info(
                "marks=%d positions=%d nodes %d -> %d (%.1f%%) cutoffs=%d time %.5fs -> %.5fs",
                marks, res["positions"], res["nodes_full"], res["nodes_pruned"],
                100.0 * res["node_ratio"], res["cutoffs"],
                res["time_full_mean_s"], res["time_pruned_mean_s"],
            )
            log_metrics({f"{k}_m{marks}": v for k, v in res.items()})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
