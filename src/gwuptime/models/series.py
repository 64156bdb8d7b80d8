"""Derived (non-persisted) results: intervals, statistics, reports."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from gwuptime.models.events import TransitionEvent


class StateInterval(BaseModel):
    """A maximal run of constant state over ``[start, end)``."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime
    state: int

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def is_up(self) -> bool:
        return self.state == 1


class UptimeStats(BaseModel):
    """Exact up/down totals for a window, integrated from intervals."""

    model_config = ConfigDict(frozen=True)

    up_duration: timedelta
    down_duration: timedelta
    up_fraction: float

    @property
    def up_percent(self) -> float:
        return self.up_fraction * 100.0


class TickResult(BaseModel):
    """Outcome of one recording tick."""

    model_config = ConfigDict(frozen=True)

    emitted_events: list[TransitionEvent] = Field(default_factory=list)
    updated_snapshot: dict[str, int] = Field(default_factory=dict)
    period: str


class UptimeReport(BaseModel):
    """Everything the reporting layer needs for one gateway and one window.

    Parameters
    ----------
    gateway_id : str
        Gateway the report covers.
    start, end : datetime
        Query window.
    step : timedelta
        Raster slot length used for :attr:`slots`.
    intervals : list[StateInterval]
        Contiguous intervals whose union is exactly ``[start, end]``.
    slots : list[bool]
        Raster view, one entry per step (``True`` = up).
    up_fraction : float
        ``up_duration / (end - start)``.
    up_duration, down_duration : timedelta
        Exact totals, not derived from the raster.
    transitions_in_window : list[TransitionEvent]
        Events with ``start < t <= end``, oldest first.
    """

    model_config = ConfigDict(frozen=True)

    gateway_id: str
    start: datetime
    end: datetime
    step: timedelta
    intervals: list[StateInterval]
    slots: list[bool]
    up_fraction: float
    up_duration: timedelta
    down_duration: timedelta
    transitions_in_window: list[TransitionEvent] = Field(default_factory=list)

    def transitions(self, *, newest_first: bool = True, limit: int | None = None) -> list[TransitionEvent]:
        """Transitions for history reports, most recent first by default."""
        # Imported here: series.aggregate depends on this module.
        from gwuptime.series.aggregate import recent_transitions

        return recent_transitions(self.transitions_in_window, newest_first=newest_first, limit=limit)


class Failure(BaseModel):
    """Structured failure returned at the collaborator boundary.

    ``kind`` is ``"config"`` for missing/invalid configuration and
    ``"storage"`` for I/O failures.  Details go to the logs; the consumer
    only needs something it can show.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["config", "storage"]
    operation: str
    message: str

    def describe(self) -> str:
        return f"failed to {self.operation} — see logs"
