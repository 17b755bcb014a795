"""dayview.api

Stable *library* entrypoint for DAYVIEW.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from array import array
from typing import Any, Dict, Iterable, List, Mapping, Optional

from dayview.codec import decode_events, decode_layout, encode_layout
from dayview.config import resolve_config
from dayview.grouper import group_events
from dayview.layout import layout_groups
from dayview.model import Event, EventLayout, LayoutGroup
from dayview.util.console import obs_warn
from dayview.validate import (
    EventValidationError,
    InvalidIntervalError,
    MalformedInputError,
    make_event,
    validate_buffer,
)


def layout_events(events: Iterable[Event], cfg: Optional[Mapping[str, Any]] = None) -> List[LayoutGroup]:
    """Cluster, pack and normalize already-built events.

    No validation happens here; zero-duration events are laid out as-is.
    """
    c = resolve_config(cfg)
    groups = group_events(events, packing=c["packing"])
    return layout_groups(groups, zero_span=c["zero_span"])


def process_events(values: Any, cfg: Optional[Mapping[str, Any]] = None) -> array:
    """Flat (id, start, end) float32 buffer in, flat layout buffer out.

    All-or-nothing: any validation failure returns an empty buffer.
    """
    c = resolve_config(cfg)
    try:
        events = decode_events(values)
    except EventValidationError as e:
        obs_warn("api", f"dropping batch: {e}")
        return array("f")
    return encode_layout(layout_events(events, c))


def layout_to_dict(lg: LayoutGroup) -> Dict[str, Any]:
    return {
        "start": lg.start,
        "end": lg.end,
        "column_count": lg.column_count,
        "items": [
            {
                "top": it.top,
                "bottom": it.bottom,
                "height": it.height,
                "column": it.column,
                "event": {"id": it.event.id, "start": it.event.start, "end": it.event.end},
            }
            for it in lg.items
        ],
    }


def layout_to_json_obj(groups: Iterable[LayoutGroup]) -> List[Dict[str, Any]]:
    return [layout_to_dict(lg) for lg in groups]


__all__ = [
    "Event",
    "EventLayout",
    "LayoutGroup",
    "EventValidationError",
    "MalformedInputError",
    "InvalidIntervalError",
    "make_event",
    "validate_buffer",
    "layout_events",
    "process_events",
    "decode_layout",
    "layout_to_dict",
    "layout_to_json_obj",
]
