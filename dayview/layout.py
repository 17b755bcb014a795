# dayview/layout.py
from __future__ import annotations

from typing import Iterable, List

from .config import ZERO_SPAN_COLLAPSE, ZERO_SPAN_FILL, normalize_choice
from .grouper import Group
from .model import EventLayout, LayoutGroup
from .util.console import obs_warn


def layout_group(group: Group, *, zero_span: str = ZERO_SPAN_FILL) -> LayoutGroup:
    """Freeze a packed group into fractional coordinates.

    Items are column-major: every event of column 0 (in column order), then
    column 1, and so on. top/height/bottom are fractions of the group span
    and sum to 1.

    A zero span only happens for a lone zero-duration event. `zero_span`
    decides its geometry: "fill" gives height=1, "collapse" gives all zeros.
    """
    if group.start is None or group.end is None:
        raise ValueError("cannot lay out an empty group")

    policy = normalize_choice("zero_span", zero_span)
    g_start = group.start
    g_end = group.end
    total = g_end - g_start

    items: List[EventLayout] = []
    if total == 0:
        obs_warn("layout", f"zero-span group at {g_start!r} (policy={policy})")
        height = 1.0 if policy == ZERO_SPAN_FILL else 0.0
        for ci, column in enumerate(group.columns):
            for ev in column:
                items.append(EventLayout(top=0.0, bottom=0.0, height=height, column=ci, event=ev))
    else:
        for ci, column in enumerate(group.columns):
            for ev in column:
                items.append(
                    EventLayout(
                        top=(ev.start - g_start) / total,
                        bottom=(g_end - ev.end) / total,
                        height=(ev.end - ev.start) / total,
                        column=ci,
                        event=ev,
                    )
                )

    return LayoutGroup(
        start=g_start,
        end=g_end,
        column_count=group.column_count,
        items=tuple(items),
    )


def layout_groups(groups: Iterable[Group], *, zero_span: str = ZERO_SPAN_FILL) -> List[LayoutGroup]:
    return [layout_group(g, zero_span=zero_span) for g in groups]


__all__ = [
    "ZERO_SPAN_COLLAPSE",
    "ZERO_SPAN_FILL",
    "layout_group",
    "layout_groups",
]
