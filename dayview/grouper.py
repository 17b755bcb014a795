# dayview/grouper.py
from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from .config import PACKING_FIRST_FIT
from .model import Event
from .packer import make_packer


def sort_events(events: Iterable[Event]) -> List[Event]:
    """Ascending start; among equal starts the longer event comes first."""
    return sorted(events, key=lambda e: (e.start, -e.end))


class Group:
    """A maximal run of events connected by overlap, packed into columns."""

    def __init__(self, packing: str = PACKING_FIRST_FIT) -> None:
        self.start: Optional[float] = None
        self.end: Optional[float] = None
        self.columns: List[List[Event]] = []
        self.packer = make_packer(packing)

    def overlaps(self, event: Event) -> bool:
        if self.start is None or self.end is None:
            return False
        return event.overlaps(self.start, self.end)

    def add(self, event: Event) -> int:
        column = self.packer.place(event, self.columns, self.start, self.end)
        self.start = event.start if self.start is None else min(self.start, event.start)
        self.end = event.end if self.end is None else max(self.end, event.end)
        return column

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def events(self) -> Iterator[Event]:
        for column in self.columns:
            yield from column

    def __len__(self) -> int:
        return sum(len(c) for c in self.columns)

    def __repr__(self) -> str:
        return f"Group(start={self.start!r}, end={self.end!r}, columns={self.column_count}, events={len(self)})"


def group_events(events: Iterable[Event], *, packing: str = PACKING_FIRST_FIT) -> List[Group]:
    """Cluster events into overlap groups, packing each group as it grows.

    Only the most recent group is tested: after sorting by start, an event
    that misses the last group cannot reach any earlier one, and no later
    event can reach the groups it closed.
    """
    groups: List[Group] = []
    for event in sort_events(events):
        last = groups[-1] if groups else None
        if last is None or not last.overlaps(event):
            last = Group(packing)
            groups.append(last)
        last.add(event)
    return groups


def regroup(groups: Iterable[Group], *, packing: str = PACKING_FIRST_FIT) -> List[Group]:
    """Cluster the flattened members of existing groups again."""
    members: List[Event] = []
    for g in groups:
        members.extend(g.events())
    return group_events(members, packing=packing)


__all__ = [
    "Group",
    "group_events",
    "regroup",
    "sort_events",
]
