# dayview/model.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Event:
    id: float
    start: float
    end: float

    def overlaps(self, start: float, end: float) -> bool:
        # Half-open: touching edges do not overlap.
        return self.start < end and start < self.end


@dataclass(frozen=True)
class FreeRect:
    start: float
    end: float
    column: int

    def contains(self, event: Event) -> bool:
        return self.start <= event.start and event.end <= self.end


@dataclass(frozen=True)
class EventLayout:
    top: float      # fraction of the group span above the event
    bottom: float   # fraction below
    height: float   # fraction covered
    column: int
    event: Event


@dataclass(frozen=True)
class LayoutGroup:
    start: float
    end: float
    column_count: int
    items: Tuple[EventLayout, ...]


# Resolved packing/normalization settings (see dayview.config)
LayoutConfig = Dict[str, Any]


__all__ = [
    "Event",
    "FreeRect",
    "EventLayout",
    "LayoutGroup",
    "LayoutConfig",
]
