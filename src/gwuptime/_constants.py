"""Internal constants shared across the library."""

import re

DEFAULT_TIME_ZONE = "Europe/Lisbon"
GITHUB_API_BASE = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
USER_AGENT = "gwuptime/1.0"

# ------------------------------------------------------------------
# Persisted resource names
# ------------------------------------------------------------------

LATEST_SNAPSHOT_NAME = "uptime_last"
CARRY_NAME_PREFIX = "uptime_carry_"
TRANSITIONS_NAME_PREFIX = "uptime_transitions_"


def carry_name(period: str, prefix: str = "") -> str:
    """Resource name of the carry snapshot for *period* (``"YYYY-MM"``)."""
    return f"{prefix}{CARRY_NAME_PREFIX}{period}"


def transitions_name(period: str, prefix: str = "") -> str:
    """Resource name of the NDJSON transition log for *period*."""
    return f"{prefix}{TRANSITIONS_NAME_PREFIX}{period}"


# ------------------------------------------------------------------
# Civil timestamp shape  (YYYY-MM-DDTHH:MM:SS, no offset)
# ------------------------------------------------------------------

CIVIL_FORMAT = "%Y-%m-%dT%H:%M:%S"
CIVIL_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})$")
DISPLAY_FORMAT = "%d-%m-%Y %H:%M"

PERIOD_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")
