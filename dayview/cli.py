from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, List

from .api import layout_events, layout_to_json_obj
from .codec import decode_events, encode_layout
from .config import PACKING_POLICIES, ZERO_SPAN_POLICIES, resolve_config
from .validate import EventValidationError


def _die(msg: str, rc: int = 2) -> int:
    print(f"[dayview] ERROR: {msg}", file=sys.stderr)
    return rc


def _read_source(src: str) -> str:
    if src == "-":
        return sys.stdin.read()
    return Path(src).read_text(encoding="utf-8", errors="replace")


def flatten_events_json(obj: Any) -> List[float]:
    """Accept a flat numeric list, a list of {id,start,end} objects, or {"events": [...]}."""
    if isinstance(obj, dict):
        obj = obj.get("events")
    if not isinstance(obj, list):
        raise ValueError("events must be a JSON list (or an object with an 'events' list)")

    flat: List[float] = []
    for i, item in enumerate(obj):
        if isinstance(item, dict):
            try:
                flat.extend(float(item[k]) for k in ("id", "start", "end"))
            except KeyError as e:
                raise ValueError(f"events[{i}] missing key: {e.args[0]}") from None
            except TypeError as e:
                raise ValueError(f"events[{i}] fields must be numbers ({e})") from None
        elif isinstance(item, (int, float)) and not isinstance(item, bool):
            flat.append(float(item))
        else:
            raise ValueError(f"events[{i}] must be a number or an object; got {type(item).__name__}")
    return flat


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="dayview",
        description="Lay out overlapping time intervals into side-by-side columns (calendar day view).",
    )
    ap.add_argument("--in", dest="in_path", default="-", help="Events JSON path, or '-' for stdin (default: -)")
    ap.add_argument(
        "--packing",
        choices=PACKING_POLICIES,
        default=None,
        help="Column packing policy (default: env DAYVIEW_PACKING or first_fit)",
    )
    ap.add_argument(
        "--zero-span",
        dest="zero_span",
        choices=ZERO_SPAN_POLICIES,
        default=None,
        help="Geometry for a zero-length group (default: env DAYVIEW_ZERO_SPAN or fill)",
    )
    ap.add_argument("--flat", action="store_true", help="Emit the flat float32 layout buffer as a JSON list")
    ap.add_argument("--out", default=None, help="Output path (default: stdout)")
    ns = ap.parse_args(argv)

    try:
        cfg = resolve_config({"packing": ns.packing, "zero_span": ns.zero_span})
    except ValueError as e:
        return _die(str(e))

    try:
        values = flatten_events_json(json.loads(_read_source(ns.in_path)))
    except FileNotFoundError:
        return _die(f"Missing events file: {ns.in_path}")
    except ValueError as e:
        return _die(f"Failed to load events: {ns.in_path} ({e})")

    rc = 0
    try:
        events = decode_events(values)
    except EventValidationError as e:
        print(f"[dayview] INVALID: {e}", file=sys.stderr)
        events = []
        rc = 3

    groups = layout_events(events, cfg) if rc == 0 else []
    if ns.flat:
        doc: Any = list(encode_layout(groups))
    elif rc == 0:
        doc = layout_to_json_obj(groups)
    else:
        return rc

    text = json.dumps(doc, indent=None if ns.flat else 2) + "\n"
    if ns.out:
        out_path = os.path.abspath(ns.out)
        Path(out_path).parent.mkdir(parents=True, exist_ok=True)
        Path(out_path).write_text(text, encoding="utf-8")
        print(out_path)
    else:
        sys.stdout.write(text)
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
