"""Event validation helpers (library-facing)."""

from __future__ import annotations

import math
from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Sequence, Tuple

from dayview.grouper import group_events
from dayview.model import Event, LayoutGroup

EVENT_FIELDS = 3


class EventValidationError(ValueError):
    """Raised when an event batch fails validation."""


class MalformedInputError(EventValidationError):
    """Flat buffer does not hold a whole number of events."""


class InvalidIntervalError(EventValidationError):
    """An event's start is not strictly before its end."""


def _interval_problem(start: float, end: float) -> str | None:
    if not (math.isfinite(start) and math.isfinite(end)):
        return f"start/end must be finite (start={start!r}, end={end!r})"
    if not start < end:
        return f"start must be less than end (start={start!r}, end={end!r})"
    return None


def make_event(id: float, start: float, end: float) -> Event:
    """Build an Event through the validating path."""
    problem = _interval_problem(float(start), float(end))
    if problem:
        raise InvalidIntervalError(f"event {id!r}: {problem}")
    return Event(id=float(id), start=float(start), end=float(end))


def validate_buffer(values: Sequence[float], *, label: str = "events") -> List[str]:
    errs: List[str] = []
    n = len(values)
    if n % EVENT_FIELDS != 0:
        errs.append(f"{label}: length must be a multiple of {EVENT_FIELDS} (got {n})")
        return errs

    for i in range(0, n, EVENT_FIELDS):
        ev_id, start, end = values[i], values[i + 1], values[i + 2]
        problem = _interval_problem(float(start), float(end))
        if problem:
            errs.append(f"{label}[{i // EVENT_FIELDS}] id={ev_id!r}: {problem}")
    return errs


def assert_valid_buffer(values: Sequence[float]) -> None:
    errs = validate_buffer(values)
    if not errs:
        return
    if len(values) % EVENT_FIELDS != 0:
        raise MalformedInputError(errs[0])
    raise InvalidIntervalError(errs[0])


def _members_key(events: Iterable[Event]) -> Tuple[Tuple[float, float, float], ...]:
    return tuple(sorted((e.start, e.end, e.id) for e in events))


def validate_layout(
    events: Sequence[Event],
    groups: Sequence[LayoutGroup],
    *,
    label: str = "layout",
    tol: float = 1e-5,
) -> List[str]:
    """Check a computed layout against its input events.

    Covers conservation, fraction sums, column bounds, per-column overlap,
    group order/disjointness and re-clustering stability.
    """
    errs: List[str] = []

    placed = Counter(it.event for lg in groups for it in lg.items)
    if placed != Counter(events):
        missing = Counter(events) - placed
        extra = placed - Counter(events)
        errs.append(f"{label}: events not conserved (missing={sum(missing.values())}, extra={sum(extra.values())})")

    for gi, lg in enumerate(groups):
        span = lg.end - lg.start
        by_column: Dict[int, List[Event]] = defaultdict(list)
        for ii, it in enumerate(lg.items):
            where = f"{label}: groups[{gi}].items[{ii}] id={it.event.id!r}"
            if not 0 <= it.column < lg.column_count:
                errs.append(f"{where}: column {it.column} out of range (column_count={lg.column_count})")
            if it.event.start < lg.start or it.event.end > lg.end:
                errs.append(f"{where}: event outside group bounds [{lg.start!r}, {lg.end!r}]")
            if span > 0 and abs(it.top + it.height + it.bottom - 1.0) > tol:
                errs.append(f"{where}: top+height+bottom={it.top + it.height + it.bottom!r}")
            by_column[it.column].append(it.event)

        for ci, col in sorted(by_column.items()):
            col = sorted(col, key=lambda e: (e.start, e.end))
            for a, b in zip(col, col[1:]):
                if a.end > b.start:
                    errs.append(f"{label}: groups[{gi}] column {ci}: id={a.id!r} overlaps id={b.id!r}")

        if gi > 0:
            prev = groups[gi - 1]
            if prev.start > lg.start:
                errs.append(f"{label}: groups[{gi}] starts before groups[{gi - 1}]")
            if prev.end > lg.start:
                errs.append(f"{label}: groups[{gi}] overlaps groups[{gi - 1}]")

    members = [[it.event for it in lg.items] for lg in groups]
    again = group_events(e for m in members for e in m)
    if [_members_key(m) for m in members] != [_members_key(g.events()) for g in again]:
        errs.append(f"{label}: re-clustering the output changes group membership")

    return errs


__all__ = [
    "EVENT_FIELDS",
    "EventValidationError",
    "MalformedInputError",
    "InvalidIntervalError",
    "make_event",
    "validate_buffer",
    "assert_valid_buffer",
    "validate_layout",
]
