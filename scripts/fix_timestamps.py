#!/usr/bin/env python3
"""Round historical transition timestamps to the poll interval.

Usage
-----
Set environment variables and run::

    export GITHUB_GIST_ID="..."
    export GITHUB_TOKEN="..."
    python scripts/fix_timestamps.py 2025-09 2025-10

Options::

    --minutes N     Interval to round to (default: 5)
    --dry-run       Report what would change without writing
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import aiohttp

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from gwuptime import UptimeConfig, UptimeError, WallClockCodec  # noqa: E402
from gwuptime._constants import transitions_name  # noqa: E402
from gwuptime.maintenance import fix_store_timestamps  # noqa: E402
from gwuptime.monitor import build_blob_store  # noqa: E402
from gwuptime.periods import parse_period  # noqa: E402


async def main() -> int:
    parser = argparse.ArgumentParser(description="Round transition log timestamps to the poll interval")
    parser.add_argument("periods", nargs="+", help="Period keys (YYYY-MM) whose logs to fix")
    parser.add_argument("--minutes", type=int, default=5, help="Rounding interval in minutes")
    parser.add_argument("--dry-run", action="store_true", help="Do not write anything")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(message)s")

    for period in args.periods:
        try:
            parse_period(period)
        except ValueError as exc:
            parser.error(str(exc))

    config = UptimeConfig.from_env()
    try:
        async with aiohttp.ClientSession() as session:
            store = build_blob_store(config, session)
            codec = WallClockCodec(config.time_zone)
            names = [transitions_name(period, config.name_prefix) for period in args.periods]
            results = await fix_store_timestamps(store, names, codec, args.minutes, dry_run=args.dry_run)
    except UptimeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    total = sum(result.fixed for result in results.values())
    verb = "would be rounded" if args.dry_run else "rounded"
    print(f"{total} timestamp(s) {verb} across {len(results)} log(s)")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
