#!/usr/bin/env python3
from __future__ import annotations

import argparse
import statistics
import sys
import time
from typing import List, Tuple

from dayview.api import layout_events, process_events
from dayview.bench import flatten_events, make_synthetic_events
from dayview.config import PACKING_POLICIES


def _die(msg: str, rc: int = 2) -> int:
    print(f"[dayview-bench] ERROR: {msg}", file=sys.stderr)
    return rc


def _now_ns() -> int:
    return time.perf_counter_ns()


def _time_one(fn, *, repeats: int, warmup: int) -> Tuple[float, float, float]:
    for _ in range(max(0, warmup)):
        fn()

    samples_ms: List[float] = []
    for _ in range(max(1, repeats)):
        t0 = _now_ns()
        fn()
        t1 = _now_ns()
        samples_ms.append((t1 - t0) / 1_000_000.0)

    return (min(samples_ms), statistics.fmean(samples_ms), max(samples_ms))


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="dayview-bench", description="Micro-benchmark DAYVIEW packing policies.")
    ap.add_argument("--n", type=int, default=500, help="Number of synthetic events")
    ap.add_argument("--seed", type=int, default=1, help="RNG seed for synthetic events")
    ap.add_argument("--day-min", type=float, default=24 * 60, help="Day length in minutes (default: 1440)")
    ap.add_argument("--min-dur", type=float, default=10, help="Minimum event duration in minutes")
    ap.add_argument("--max-dur", type=float, default=120, help="Maximum event duration in minutes")
    ap.add_argument("--repeats", type=int, default=3, help="Measurement repeats (min/avg/max over repeats)")
    ap.add_argument("--warmup", type=int, default=0, help="Warmup runs per step before measuring")
    ns = ap.parse_args(argv)

    if ns.n < 0:
        return _die("--n must be >= 0")

    try:
        events = make_synthetic_events(
            int(ns.n),
            seed=int(ns.seed),
            day_min=float(ns.day_min),
            min_dur=float(ns.min_dur),
            max_dur=float(ns.max_dur),
        )
    except ValueError as e:
        return _die(str(e))

    print(f"[dayview-bench] n={ns.n} seed={ns.seed} repeats={ns.repeats} warmup={ns.warmup}")

    for policy in PACKING_POLICIES:
        cfg = {"packing": policy}
        groups = layout_events(events, cfg)
        cols = [g.column_count for g in groups]
        print(
            f"[dayview-bench] {policy}: groups={len(groups)} columns={sum(cols)} max_columns={max(cols, default=0)}"
        )

        def _layout() -> None:
            _ = layout_events(events, cfg)

        mn, av, mx = _time_one(_layout, repeats=int(ns.repeats), warmup=int(ns.warmup))
        print(f"[dayview-bench] {policy} layout: {mn:.2f}/{av:.2f}/{mx:.2f} ms (min/avg/max)")

    flat = flatten_events(events)

    def _buffer() -> None:
        out = process_events(flat)
        if events and not out:
            raise RuntimeError("buffer round produced no output")

    mn, av, mx = _time_one(_buffer, repeats=int(ns.repeats), warmup=int(ns.warmup))
    print(f"[dayview-bench] buffer:  {mn:.2f}/{av:.2f}/{mx:.2f} ms (min/avg/max)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
