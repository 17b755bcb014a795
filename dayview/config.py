# dayview/config.py
from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional

PACKING_FIRST_FIT = "first_fit"
PACKING_GREEDY = "greedy"
PACKING_POLICIES = (PACKING_FIRST_FIT, PACKING_GREEDY)

ZERO_SPAN_FILL = "fill"
ZERO_SPAN_COLLAPSE = "collapse"
ZERO_SPAN_POLICIES = (ZERO_SPAN_FILL, ZERO_SPAN_COLLAPSE)

DEFAULTS: Dict[str, str] = {
    "packing": PACKING_FIRST_FIT,
    "zero_span": ZERO_SPAN_FILL,
}

_ENV_KEYS: Dict[str, str] = {
    "packing": "DAYVIEW_PACKING",
    "zero_span": "DAYVIEW_ZERO_SPAN",
}

_CHOICES: Dict[str, tuple] = {
    "packing": PACKING_POLICIES,
    "zero_span": ZERO_SPAN_POLICIES,
}


def _norm(v: Any) -> str:
    return str(v).strip().lower().replace("-", "_")


def normalize_choice(key: str, value: Any) -> str:
    choices = _CHOICES[key]
    s = _norm(value)
    if s not in choices:
        raise ValueError(f"Invalid {key}: {value!r} (expected one of: {', '.join(choices)})")
    return s


def resolve_config(cfg: Optional[Mapping[str, Any]] = None) -> Dict[str, str]:
    """Resolve layout settings.

    Precedence per key:
      1) explicit cfg value (None means "not set")
      2) environment (DAYVIEW_PACKING, DAYVIEW_ZERO_SPAN)
      3) DEFAULTS

    Unknown keys in cfg are ignored; unknown values raise ValueError.
    """
    src = dict(cfg or {})
    out: Dict[str, str] = {}
    for key, default in DEFAULTS.items():
        v = src.get(key)
        if v is None:
            env_v = (os.getenv(_ENV_KEYS[key], "") or "").strip()
            v = env_v or default
        out[key] = normalize_choice(key, v)
    return out


__all__ = [
    "DEFAULTS",
    "PACKING_FIRST_FIT",
    "PACKING_GREEDY",
    "PACKING_POLICIES",
    "ZERO_SPAN_FILL",
    "ZERO_SPAN_COLLAPSE",
    "ZERO_SPAN_POLICIES",
    "normalize_choice",
    "resolve_config",
]
