# dayview/packer.py
"""Column packing inside one overlap group.

Two policies:

  - first_fit: first-fit over tracked vacant rectangles (gaps) of existing
    columns. A rectangle is split when an event is carved out of it and is
    never merged back with its neighbours. When no tracked rectangle fits,
    the whole gap set is rebuilt from the columns and placement is retried
    once before a new column is opened.
  - greedy: append to the first column whose last event has ended; no gap
    reuse.

Packers mutate the caller's `columns` (list of per-column event lists) and
keep each column in ascending start order.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import List, Optional

from .config import PACKING_FIRST_FIT, PACKING_GREEDY, normalize_choice
from .model import Event, FreeRect

Columns = List[List[Event]]


def _split(rect: FreeRect, event: Event) -> List[FreeRect]:
    # exact fit -> [], left/right aligned -> one remainder, interior -> two.
    out: List[FreeRect] = []
    if rect.start < event.start:
        out.append(FreeRect(start=rect.start, end=event.start, column=rect.column))
    if event.end < rect.end:
        out.append(FreeRect(start=event.end, end=rect.end, column=rect.column))
    return out


def take_rect(rects: List[FreeRect], event: Event) -> Optional[int]:
    """Carve `event` out of the first rect that contains it.

    Returns the rect's column, or None when nothing fits. `rects` is updated
    in place; remainders keep the consumed rect's list position.
    """
    for i, rect in enumerate(rects):
        if rect.contains(event):
            rects[i : i + 1] = _split(rect, event)
            return rect.column
    return None


def vacant_rects(columns: Columns, start: float, end: float) -> List[FreeRect]:
    """All gaps of every column within [start, end), column by column."""
    rects: List[FreeRect] = []
    for ci, column in enumerate(columns):
        covered = start
        for ev in column:
            if ev.start > covered:
                rects.append(FreeRect(start=covered, end=ev.start, column=ci))
            covered = max(covered, ev.end)
        if covered < end:
            rects.append(FreeRect(start=covered, end=end, column=ci))
    return rects


def insert_event(columns: Columns, column: int, event: Event) -> None:
    while column >= len(columns):
        columns.append([])
    col = columns[column]
    idx = bisect_right([e.start for e in col], event.start)
    col.insert(idx, event)


def _open_column(columns: Columns, event: Event) -> int:
    columns.append([event])
    return len(columns) - 1


class FirstFitPacker:
    name = PACKING_FIRST_FIT

    def __init__(self) -> None:
        self.free_rects: List[FreeRect] = []

    def place(self, event: Event, columns: Columns, start: Optional[float], end: Optional[float]) -> int:
        column = take_rect(self.free_rects, event)

        if column is None and columns:
            # Rebuild against the bounds the group will have once `event` is in.
            g_start = event.start if start is None else min(start, event.start)
            g_end = event.end if end is None else max(end, event.end)
            fresh = vacant_rects(columns, g_start, g_end)
            column = take_rect(fresh, event)
            if column is not None:
                self.free_rects = fresh

        if column is None:
            return _open_column(columns, event)

        insert_event(columns, column, event)
        return column


class GreedyPacker:
    name = PACKING_GREEDY

    def place(self, event: Event, columns: Columns, start: Optional[float], end: Optional[float]) -> int:
        for ci, column in enumerate(columns):
            if column[-1].end <= event.start:
                column.append(event)
                return ci
        return _open_column(columns, event)


_PACKERS = {
    PACKING_FIRST_FIT: FirstFitPacker,
    PACKING_GREEDY: GreedyPacker,
}


def make_packer(name: str = PACKING_FIRST_FIT):
    return _PACKERS[normalize_choice("packing", name)]()


__all__ = [
    "FirstFitPacker",
    "GreedyPacker",
    "insert_event",
    "make_packer",
    "take_rect",
    "vacant_rects",
]
