"""Normalization helpers.

Stored gateway states are ``0`` (down) or ``1`` (up).  Older files carry
``"OK"``/``"NOK"``, booleans or numeric strings; everything is folded into
``{0, 1}`` on read.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

_UP_WORDS: frozenset[str] = frozenset({"1", "ok", "up", "online", "true", "on", "yes"})


def normalize_state(value: Any) -> int:
    """Return ``1`` for anything that means "reachable", ``0`` otherwise."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return 0
        return 1 if value > 0 else 0
    if isinstance(value, str):
        return 1 if value.strip().lower() in _UP_WORDS else 0
    return 0


def normalize_snapshot(data: Any) -> dict[str, int]:
    """Coerce a stored ``{gatewayId: state}`` mapping, dropping unusable keys."""
    if not isinstance(data, Mapping):
        return {}
    snapshot: dict[str, int] = {}
    for key, value in data.items():
        gateway_id = str(key).strip()
        if not gateway_id:
            continue
        snapshot[gateway_id] = normalize_state(value)
    return snapshot
