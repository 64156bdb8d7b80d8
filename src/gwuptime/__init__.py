"""gwuptime - Gateway uptime reconstruction from sparse transition logs."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("gwuptime")
except PackageNotFoundError:
    __version__ = "0+local"
from gwuptime.config import UptimeConfig
from gwuptime.exceptions import (
    TimestampParseError,
    UptimeConfigError,
    UptimeError,
    UptimeStorageError,
)
from gwuptime.models import (
    CarrySnapshot,
    Failure,
    PollResult,
    StateInterval,
    TickResult,
    TransitionEvent,
    UptimeReport,
    UptimeStats,
)
from gwuptime.monitor import UptimeMonitor
from gwuptime.timestamps import WallClockCodec

__all__ = [
    "__version__",
    "CarrySnapshot",
    "Failure",
    "PollResult",
    "StateInterval",
    "TickResult",
    "TimestampParseError",
    "TransitionEvent",
    "UptimeConfig",
    "UptimeConfigError",
    "UptimeError",
    "UptimeMonitor",
    "UptimeReport",
    "UptimeStats",
    "UptimeStorageError",
    "WallClockCodec",
]
