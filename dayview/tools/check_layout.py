#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List

from dayview.api import layout_events, process_events
from dayview.bench import flatten_events, make_synthetic_events
from dayview.cli import flatten_events_json
from dayview.codec import decode_events, decode_layout
from dayview.config import PACKING_POLICIES
from dayview.validate import EventValidationError, validate_layout


def _die(msg: str, rc: int = 2) -> int:
    print(f"[dayview-check-layout] ERROR: {msg}", file=sys.stderr)
    return rc


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="dayview-check-layout",
        description=(
            "Lay out a batch and check the result: every event placed once, fractions summing to 1,\n"
            "no overlap inside a column, groups ordered and disjoint, stable re-clustering."
        ),
    )
    ap.add_argument("--in", dest="in_json", default=None, help="Events JSON path (default: synthetic batch)")
    ap.add_argument("--n", type=int, default=200, help="Synthetic batch size when --in is not given")
    ap.add_argument("--seed", type=int, default=1, help="Synthetic batch seed")
    ap.add_argument(
        "--packing",
        choices=PACKING_POLICIES + ("all",),
        default="all",
        help="Policy to check (default: all)",
    )
    ns = ap.parse_args(argv)

    if ns.in_json:
        p = Path(ns.in_json)
        if not p.exists():
            return _die(f"Missing JSON file: {p}")
        try:
            flat = flatten_events_json(json.loads(p.read_text(encoding="utf-8", errors="replace")))
        except ValueError as e:
            return _die(f"Failed to load events: {p} ({e})")
        src = f"json:{p}"
    else:
        if ns.n < 0:
            return _die("--n must be >= 0")
        flat = flatten_events(make_synthetic_events(int(ns.n), seed=int(ns.seed)))
        src = f"synthetic:n={ns.n},seed={ns.seed}"

    try:
        events = decode_events(flat)
    except EventValidationError as e:
        print(f"[dayview-check-layout] FAIL\n  - {src}: {e}", file=sys.stderr)
        return 3

    policies = PACKING_POLICIES if ns.packing == "all" else (ns.packing,)
    all_errs: List[str] = []
    for policy in policies:
        cfg = {"packing": policy}
        groups = layout_events(events, cfg)
        all_errs.extend(f"{src}: {e}" for e in validate_layout(events, groups, label=policy))

        decoded = decode_layout(process_events(flat, cfg))
        all_errs.extend(f"{src}: {e}" for e in validate_layout(events, decoded, label=f"{policy}/buffer"))

        cols = sum(g.column_count for g in groups)
        print(f"[dayview-check-layout] {policy}: events={len(events)} groups={len(groups)} columns={cols}")

    if all_errs:
        print("[dayview-check-layout] FAIL", file=sys.stderr)
        for e in all_errs:
            print(f"  - {e}", file=sys.stderr)
        return 3

    print("[dayview-check-layout] OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
