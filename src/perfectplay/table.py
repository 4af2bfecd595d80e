"""
Perfect-play lookup table export.

Solves every reachable position (or one per symmetry orbit) and writes the
best move and score for each, with a manifest for reproducibility.
"""
from __future__ import annotations

import csv
import hashlib
import importlib.util
import json
import logging
import os
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from .game_basics import X, O, get_winner, is_draw, player_name
from .search import solve_all_reachable
from .symmetry import canonical_form, orbit_size
from .tracking import log_artifact, log_metrics, log_params

TABLE_VERSION = "1.0.0"
FIELDNAMES = ['board', 'to_move', 'best_move', 'score', 'nodes', 'canonical_form', 'orbit_size']


def default_out() -> Path:
    p = os.getenv("PERFECTPLAY_DATA_RAW")
    return Path(p) if p else Path.cwd() / "data_raw"


@dataclass
class ExportArgs:
    out: Path = field(default_factory=default_out)
    canonical_only: bool = False
    verbose: bool = False
    cli_argv: List[str] | None = None
    format: str = "csv"  # one of: "csv", "parquet", "both"


def _schema_hash(fieldnames: List[str]) -> str:
    payload = "\n".join(sorted(fieldnames)).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open('rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            h.update(chunk)
    return h.hexdigest()


def build_table(canonical_only: bool = False) -> List[Dict[str, Any]]:
    solved = solve_all_reachable(canonical_only=canonical_only)
    rows: List[Dict[str, Any]] = []
    for key in sorted(solved):
        sol = solved[key]
        board = [int(c) for c in key]
        rows.append({
            'board': key,
            'to_move': player_name(sol['to_move']) if sol['to_move'] is not None else '',
            'best_move': sol['move'],
            'score': sol['score'],
            'nodes': sol['nodes'],
            'canonical_form': canonical_form(board),
            'orbit_size': orbit_size(board),
        })
    return rows


def _terminal_split(rows: List[Dict[str, Any]]) -> Dict[str, int]:
    split = {"x": 0, "o": 0, "draw": 0, "nonterminal": 0}
    for r in rows:
        board = [int(c) for c in r['board']]
        w = get_winner(board)
        if w == X:
            split["x"] += 1
        elif w == O:
            split["o"] += 1
        elif is_draw(board):
            split["draw"] += 1
        else:
            split["nonterminal"] += 1
    return split


def _package_versions() -> Dict[str, str]:
    versions: Dict[str, str] = {}
    for pkg in ["pandas", "pyarrow", "mlflow"]:
        if importlib.util.find_spec(pkg) is None:
            continue
        mod = __import__(pkg)
        ver = getattr(mod, "__version__", None)
        if ver:
            versions[pkg] = ver
    return versions


def run_export(args: ExportArgs) -> Path:
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s")
    fmt = (args.format or "csv").lower()
    if fmt not in {"csv", "parquet", "both"}:
        raise ValueError(f"Unknown export format: {args.format}")
    have_parquet = (importlib.util.find_spec('pandas') is not None
                    and importlib.util.find_spec('pyarrow') is not None)
    msg = ("Parquet dependencies not available (install pandas and pyarrow). "
           "Use pip install .[parquet] to enable parquet support.")
    if fmt == "parquet" and not have_parquet:
        # nothing has been written yet
        raise RuntimeError(msg)

    args.out.mkdir(parents=True, exist_ok=True)
    logging.info("Solving all reachable states%s…", " (canonical only)" if args.canonical_only else "")
    rows = build_table(canonical_only=args.canonical_only)
    logging.info("Solved %d states", len(rows))

    table_csv = args.out / 'perfect_play.csv'
    table_parquet = args.out / 'perfect_play.parquet'
    wrote_csv = False
    wrote_parquet = False

    if fmt in {"csv", "both"}:
        with table_csv.open('w', newline='') as f:
            w = csv.DictWriter(f, fieldnames=FIELDNAMES)
            w.writeheader()
            for r in rows:
                w.writerow(r)
        wrote_csv = True
        logging.info("Wrote CSV: %s (%d rows)", table_csv, len(rows))

    if fmt in {"parquet", "both"}:
        if have_parquet:
            import pandas as pd  # type: ignore

            df = pd.DataFrame(rows, columns=FIELDNAMES)
            df['best_move'] = df['best_move'].astype('Int64')
            df['score'] = df['score'].astype('Int64')
            df.to_parquet(table_parquet, index=False)
            wrote_parquet = True
            logging.info("Wrote Parquet file: %s", table_parquet)
        else:
            logging.warning("%s Proceeding with CSV only; manifest will record parquet_written=false.", msg)

    files: Dict[str, Any] = {
        "table_csv": str(table_csv) if wrote_csv else None,
        "table_parquet": str(table_parquet) if wrote_parquet else None,
    }
    checksums = {label: sha256_file(Path(p)) for label, p in files.items() if p is not None}
    split = _terminal_split(rows)
    total_nodes = sum(r['nodes'] for r in rows)

    manifest = {
        "table_version": TABLE_VERSION,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "args": {
            "canonical_only": args.canonical_only,
            "format": fmt,
        },
        "cli_argv": args.cli_argv,
        "python": {
            "python_version": sys.version.split(" ")[0],
            "packages": _package_versions(),
        },
        "row_counts": {"positions": len(rows)},
        "terminal_split": split,
        "total_nodes": total_nodes,
        "schema_hash": _schema_hash(FIELDNAMES),
        "files": files,
        "checksums": checksums,
        "parquet_written": wrote_parquet,
    }
    manifest_path = args.out / "manifest.json"
    manifest_path.write_text(json.dumps(manifest, indent=2))
    logging.info("Wrote manifest.json")

    log_params({"canonical_only": args.canonical_only, "format": fmt})
    log_metrics({"positions": float(len(rows)), "total_nodes": float(total_nodes)})
    log_artifact(manifest_path)
    if wrote_csv:
        log_artifact(table_csv)
    if wrote_parquet:
        log_artifact(table_parquet)
    return args.out
