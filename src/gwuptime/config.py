"""Engine configuration for gwuptime."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from gwuptime._constants import DEFAULT_TIME_ZONE, GITHUB_API_BASE
from gwuptime.exceptions import UptimeConfigError

STORAGE_BACKENDS: frozenset[str] = frozenset({"gist", "file", "memory"})


def _env_int(value: str | None, name: str) -> int | None:
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise UptimeConfigError(f"{name} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class UptimeConfig:
    """Engine configuration.

    Parameters
    ----------
    time_zone : str
        IANA zone whose wall clock is used for civil timestamps and for the
        monthly period boundaries.
    storage : str
        Blob storage backend: ``"gist"``, ``"file"`` or ``"memory"``.
    gist_id : str or None
        Gist holding the resources (``gist`` backend).
    github_token : str or None
        Token with the ``gist`` scope (``gist`` backend).
    github_api_base : str
        GitHub API root.
    store_dir : Path or None
        Directory holding one file per resource (``file`` backend).
    name_prefix : str
        Prefix prepended to every resource name, e.g. ``"gateways_"``.
    tick_round_minutes : int
        Round tick instants to the nearest multiple of this many minutes
        before recording.  ``0`` records the instant as observed.
    default_step_minutes : int
        Raster slot length used when a query does not pass one.
    """

    time_zone: str = DEFAULT_TIME_ZONE
    storage: str = "gist"
    gist_id: str | None = None
    github_token: str | None = dataclasses.field(default=None, repr=False)
    github_api_base: str = GITHUB_API_BASE
    store_dir: Path | None = None
    name_prefix: str = ""
    tick_round_minutes: int = 0
    default_step_minutes: int = 60

    def validate(self) -> None:
        """Raise :class:`UptimeConfigError` when the configuration cannot work."""
        if self.storage not in STORAGE_BACKENDS:
            raise UptimeConfigError(
                f"Unknown storage backend {self.storage!r}; expected one of {sorted(STORAGE_BACKENDS)}"
            )
        if self.storage == "gist" and (not self.gist_id or not self.github_token):
            raise UptimeConfigError("Gist storage requires GITHUB_GIST_ID and GITHUB_TOKEN")
        if self.storage == "file" and self.store_dir is None:
            raise UptimeConfigError("File storage requires UPTIME_STORE_DIR")
        if self.tick_round_minutes < 0:
            raise UptimeConfigError("tick_round_minutes must not be negative")
        if self.default_step_minutes <= 0:
            raise UptimeConfigError("default_step_minutes must be positive")

    @classmethod
    def from_env(cls, **overrides: Any) -> UptimeConfig:
        """Create configuration from environment variables.

        Reads ``GITHUB_GIST_ID``, ``GITHUB_TOKEN`` and the optional
        ``UPTIME_*`` variables.  Explicit keyword arguments override
        environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "UPTIME_TIME_ZONE": "time_zone",
            "UPTIME_STORAGE": "storage",
            "GITHUB_GIST_ID": "gist_id",
            "GITHUB_TOKEN": "github_token",
            "GITHUB_API_BASE": "github_api_base",
            "UPTIME_NAME_PREFIX": "name_prefix",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val.strip()

        store_dir = env.get("UPTIME_STORE_DIR")
        if store_dir:
            config_kwargs["store_dir"] = Path(store_dir)

        round_minutes = _env_int(env.get("UPTIME_TICK_ROUND_MINUTES"), "UPTIME_TICK_ROUND_MINUTES")
        if round_minutes is not None:
            config_kwargs["tick_round_minutes"] = round_minutes

        step_minutes = _env_int(env.get("UPTIME_STEP_MINUTES"), "UPTIME_STEP_MINUTES")
        if step_minutes is not None:
            config_kwargs["default_step_minutes"] = step_minutes

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
