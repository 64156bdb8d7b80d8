"""Persisted state.

Three resource kinds live here: the rolling latest snapshot, one carry
baseline per period and one append-only transition log per period.
"""

from gwuptime.state.carry import CarryStore
from gwuptime.state.snapshot import LatestSnapshotStore
from gwuptime.state.transitions import TransitionLog, parse_transition_lines

__all__ = [
    "CarryStore",
    "LatestSnapshotStore",
    "TransitionLog",
    "parse_transition_lines",
]
