#!/usr/bin/env python3
"""Print an uptime report for one gateway.

Usage
-----
::

    export GITHUB_GIST_ID="..."
    export GITHUB_TOKEN="..."
    python scripts/query_uptime.py GW-01 --days 7

Options::

    --days N          Window length ending now (default: 1)
    --start/--end     Explicit civil timestamps (YYYY-MM-DDTHH:MM:SS)
    --step MINUTES    Raster slot length (default: config)
    --history N       Show the N most recent transitions (default: 10)
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import timedelta
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from gwuptime import Failure, UptimeConfig, UptimeError, UptimeMonitor  # noqa: E402
from gwuptime.series import format_duration, outages, render_slots  # noqa: E402
from gwuptime.timestamps import utcnow  # noqa: E402


async def main() -> int:
    parser = argparse.ArgumentParser(description="Uptime report for one gateway")
    parser.add_argument("gateway", help="Gateway id")
    parser.add_argument("--days", type=float, default=1.0, help="Window length in days, ending now")
    parser.add_argument("--start", help="Window start (civil timestamp)")
    parser.add_argument("--end", help="Window end (civil timestamp)")
    parser.add_argument("--step", type=int, help="Raster slot length in minutes")
    parser.add_argument("--history", type=int, default=10, help="Number of recent transitions to show")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(message)s")

    try:
        async with UptimeMonitor(UptimeConfig.from_env()) as monitor:
            codec = monitor.codec
            end = codec.decode(args.end) if args.end else utcnow()
            start = codec.decode(args.start) if args.start else end - timedelta(days=args.days)
            step = timedelta(minutes=args.step) if args.step else None
            report = await monitor.query_uptime(args.gateway, start, end, step)
    except (UptimeError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if isinstance(report, Failure):
        print(report.describe(), file=sys.stderr)
        return 1

    print(f"{args.gateway}  {codec.format_display(report.start)} → {codec.format_display(report.end)}")
    print(f"Up   {report.up_fraction * 100:6.2f}%  {format_duration(report.up_duration)}")
    print(f"Down {(1 - report.up_fraction) * 100:6.2f}%  {format_duration(report.down_duration)}")
    print(render_slots(report.slots))

    down = outages(report.intervals)
    if down:
        print(f"\nOutages ({len(down)}):")
        for interval in down:
            print(f"  {codec.format_display(interval.start)}  {format_duration(interval.duration)}")

    history = report.transitions(newest_first=True, limit=args.history)
    if history:
        print("\nRecent transitions:")
        for event in history:
            print(f"  {event.timestamp}  {'UP' if event.state else 'DOWN'}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
