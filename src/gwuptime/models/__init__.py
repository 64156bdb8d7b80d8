"""Data models for persisted records and derived results."""

from gwuptime.models._base import GatewayState, UptimeBaseModel
from gwuptime.models.events import CarrySnapshot, PollResult, TransitionEvent
from gwuptime.models.series import Failure, StateInterval, TickResult, UptimeReport, UptimeStats

__all__ = [
    "CarrySnapshot",
    "Failure",
    "GatewayState",
    "PollResult",
    "StateInterval",
    "TickResult",
    "TransitionEvent",
    "UptimeBaseModel",
    "UptimeReport",
    "UptimeStats",
]
