# dayview/codec.py
"""Flat float32 buffer codec.

Input buffer:  (id, start, end) triples, any order.
Output buffer: per group, ascending start,

    [start, end, column_count, item_count,
     top, bottom, height, column, id, start, end,   # item 0
     ...]                                           # item_count items

There is no outer length prefix; readers walk header + items until the
buffer is exhausted.
"""

from __future__ import annotations

import math
import sys
from array import array
from typing import Any, Iterable, List, Sequence

from .model import Event, EventLayout, LayoutGroup
from .validate import EVENT_FIELDS, MalformedInputError, assert_valid_buffer

LAYOUT_GROUP_FIELDS = 4
EVENT_LAYOUT_FIELDS = 7

_F32_SIZE = array("f").itemsize


def as_float32(values: Any) -> array:
    """Coerce numbers (or a raw little-endian float32 byte buffer) to array('f')."""
    if isinstance(values, array) and values.typecode == "f":
        return values
    if isinstance(values, (bytes, bytearray, memoryview)):
        raw = bytes(values)
        if len(raw) % _F32_SIZE != 0:
            raise MalformedInputError(f"byte buffer length must be a multiple of {_F32_SIZE} (got {len(raw)})")
        out = array("f")
        out.frombytes(raw)
        if sys.byteorder != "little":
            out.byteswap()
        return out
    try:
        return array("f", values)
    except (TypeError, ValueError, OverflowError) as e:
        raise MalformedInputError(f"buffer must hold numbers only ({e})") from e


def decode_events(values: Any) -> List[Event]:
    buf = as_float32(values)
    assert_valid_buffer(buf)
    return [
        Event(id=buf[i], start=buf[i + 1], end=buf[i + 2])
        for i in range(0, len(buf), EVENT_FIELDS)
    ]


def encoded_length(layout_groups: Iterable[LayoutGroup]) -> int:
    return sum(LAYOUT_GROUP_FIELDS + EVENT_LAYOUT_FIELDS * len(lg.items) for lg in layout_groups)


def encode_layout(layout_groups: Iterable[LayoutGroup]) -> array:
    out = array("f")
    for lg in layout_groups:
        out.extend((lg.start, lg.end, float(lg.column_count), float(len(lg.items))))
        for item in lg.items:
            ev = item.event
            out.extend((item.top, item.bottom, item.height, float(item.column), ev.id, ev.start, ev.end))
    return out


def _count(v: float, what: str, offset: int) -> int:
    if not math.isfinite(v) or v < 0 or v != int(v):
        raise MalformedInputError(f"{what} at offset {offset} must be a non-negative integer (got {v!r})")
    return int(v)


def decode_layout(values: Any) -> List[LayoutGroup]:
    """Parse an output buffer back into LayoutGroup records."""
    buf: Sequence[float] = as_float32(values)
    n = len(buf)
    groups: List[LayoutGroup] = []
    i = 0
    while i < n:
        if i + LAYOUT_GROUP_FIELDS > n:
            raise MalformedInputError(f"truncated group header at offset {i} (len={n})")
        g_start, g_end, cc, count = buf[i : i + LAYOUT_GROUP_FIELDS]
        column_count = _count(cc, "column_count", i + 2)
        item_count = _count(count, "item_count", i + 3)
        i += LAYOUT_GROUP_FIELDS

        if i + item_count * EVENT_LAYOUT_FIELDS > n:
            raise MalformedInputError(f"truncated items at offset {i}: need {item_count} items (len={n})")

        items: List[EventLayout] = []
        for _ in range(item_count):
            top, bottom, height, column, ev_id, ev_start, ev_end = buf[i : i + EVENT_LAYOUT_FIELDS]
            items.append(
                EventLayout(
                    top=top,
                    bottom=bottom,
                    height=height,
                    column=_count(column, "column", i + 3),
                    event=Event(id=ev_id, start=ev_start, end=ev_end),
                )
            )
            i += EVENT_LAYOUT_FIELDS

        groups.append(LayoutGroup(start=g_start, end=g_end, column_count=column_count, items=tuple(items)))
    return groups


__all__ = [
    "EVENT_FIELDS",
    "EVENT_LAYOUT_FIELDS",
    "LAYOUT_GROUP_FIELDS",
    "as_float32",
    "decode_events",
    "decode_layout",
    "encode_layout",
    "encoded_length",
]
