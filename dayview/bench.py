from __future__ import annotations

import random
from typing import List

from .model import Event


def make_synthetic_events(
    n: int,
    *,
    seed: int = 1,
    day_min: float = 24 * 60,
    min_dur: float = 10,
    max_dur: float = 120,
    snap: float = 5,
) -> List[Event]:
    """Deterministic day of appointments (minutes), snapped to `snap`.

    Snapping produces shared edges and exact-fit gaps, which is where the
    packing policies differ.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    if not (0 < min_dur <= max_dur):
        raise ValueError("durations must satisfy 0 < min_dur <= max_dur")

    rng = random.Random(seed)
    steps = max(1, int(day_min // snap))
    events: List[Event] = []
    for i in range(n):
        start = rng.randrange(steps) * snap
        dur = max(snap, round(rng.uniform(min_dur, max_dur) / snap) * snap)
        events.append(Event(id=float(i), start=float(start), end=float(start + dur)))
    return events


def flatten_events(events: List[Event]) -> List[float]:
    out: List[float] = []
    for e in events:
        out.extend((e.id, e.start, e.end))
    return out
