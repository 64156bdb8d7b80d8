"""Persisted records: transition events, carry snapshots, poll results."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from gwuptime.models._base import GatewayState, UptimeBaseModel


def _clean_gateway_id(value: Any) -> str:
    gateway_id = str(value).strip() if value is not None else ""
    if not gateway_id:
        raise ValueError("gateway id must be non-empty")
    return gateway_id


class TransitionEvent(UptimeBaseModel):
    """One recorded state change, stored as an NDJSON line.

    Parameters
    ----------
    timestamp : str
        Civil timestamp of the poll tick that observed the change (``t``).
    gateway_id : str
        Stable gateway identifier (``gw``).
    state : int
        New state, ``1`` up or ``0`` down (``s``).
    """

    timestamp: str = Field(alias="t")
    gateway_id: str = Field(alias="gw")
    state: GatewayState = Field(alias="s")

    @field_validator("gateway_id", mode="before")
    @classmethod
    def _normalize_gateway_id(cls, value: Any) -> str:
        return _clean_gateway_id(value)

    def to_line(self) -> str:
        """Compact single-line JSON: ``{"t":...,"gw":...,"s":...}``."""
        return self.model_dump_json(by_alias=True)


class CarrySnapshot(UptimeBaseModel):
    """State believed true at the first instant of a period.

    Created once per period and never rewritten afterwards.
    """

    period_start: str
    state: dict[str, GatewayState] = Field(default_factory=dict)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class PollResult(UptimeBaseModel):
    """One gateway's state as reported by the poller for a single tick."""

    gateway_id: str
    state: GatewayState

    @field_validator("gateway_id", mode="before")
    @classmethod
    def _normalize_gateway_id(cls, value: Any) -> str:
        return _clean_gateway_id(value)
