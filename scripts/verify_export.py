#!/usr/bin/env python3
"""
Verify a perfect-play table export directory.

Checks performed:
- manifest.json exists and is parseable
- Files listed in manifest exist and their SHA256 checksums match
- Row count in the CSV matches manifest.row_counts.positions
- schema_hash matches the CSV header
- Every best_move points at an empty cell and every score is in [-9, 9]
- A sample of rows re-solves to the same move and score

Exit codes:
 0 on success, non-zero on any validation failure.
"""
from __future__ import annotations

import argparse
import csv
import hashlib
import json
import sys
from pathlib import Path
from typing import Any, Dict

from perfectplay.search import best_move
from perfectplay.table import sha256_file


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Verify perfect-play table export")
    ap.add_argument("out", type=Path, help="Export directory (contains manifest.json)")
    ap.add_argument("--resolve-every", type=int, default=25, help="Re-solve every Nth row")
    ns = ap.parse_args(argv)
    manifest_path = ns.out / "manifest.json"
    if not manifest_path.exists():
        print(f"ERROR: manifest not found: {manifest_path}", file=sys.stderr)
        return 2
    try:
        manifest = json.loads(manifest_path.read_text())
    except json.JSONDecodeError as e:
        print(f"ERROR: failed to parse manifest: {e}", file=sys.stderr)
        return 2

    ok = True
    files: Dict[str, Any] = manifest.get("files", {}) or {}
    checksums: Dict[str, Any] = manifest.get("checksums", {}) or {}
    for label, p in files.items():
        if p is None:
            continue
        path = Path(p)
        if not path.exists():
            print(f"ERROR: missing file for {label}: {path}", file=sys.stderr)
            ok = False
            continue
        if checksums.get(label) != sha256_file(path):
            print(f"ERROR: checksum mismatch for {label}", file=sys.stderr)
            ok = False

    table = files.get("table_csv")
    if table and Path(table).exists():
        with Path(table).open(newline="") as f:
            reader = csv.DictReader(f)
            header = reader.fieldnames or []
            rows = list(reader)
        expected = manifest.get("row_counts", {}).get("positions")
        if len(rows) != expected:
            print(f"ERROR: row count {len(rows)} != manifest {expected}", file=sys.stderr)
            ok = False
        digest = hashlib.sha256("\n".join(sorted(header)).encode("utf-8")).hexdigest()
        if digest != manifest.get("schema_hash"):
            print("ERROR: schema_hash does not match CSV header", file=sys.stderr)
            ok = False
        for n, r in enumerate(rows):
            board = [int(c) for c in r["board"]]
            if r["best_move"] == "":
                continue
            mv, score = int(r["best_move"]), int(r["score"])
            if board[mv] != 0 or not -9 <= score <= 9:
                print(f"ERROR: bad row {r}", file=sys.stderr)
                ok = False
            if ns.resolve_every > 0 and n % ns.resolve_every == 0 and best_move(board) != (mv, score):
                print(f"ERROR: row {r['board']} does not re-solve to ({mv}, {score})", file=sys.stderr)
                ok = False

    if ok:
        print("OK")
        return 0
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
