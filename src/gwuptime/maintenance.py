"""Maintenance of historical transition logs.

Ticks recorded before rounding was enabled carry the few seconds of
scheduler delay (``17:05:11`` instead of ``17:05:00``), which shows up as
``5m 01s`` outages in reports.  These helpers rewrite stored logs with every
timestamp rounded to the poll interval.  They are the one sanctioned
exception to append-only logs and must not run while a recorder is active.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from gwuptime.exceptions import TimestampParseError
from gwuptime.storage.base import BlobStore
from gwuptime.timestamps import WallClockCodec, round_to_interval

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RoundingResult:
    content: str
    fixed: int
    total: int


def round_log_timestamps(content: str, codec: WallClockCodec, minutes: int = 5) -> RoundingResult:
    """Round the ``t`` field of every NDJSON line to *minutes*.

    Blank lines are dropped; lines that are not JSON objects or whose
    timestamp does not decode are kept verbatim.
    """
    lines = [line for line in content.splitlines() if line.strip()]
    fixed = 0
    out: list[str] = []
    for line in lines:
        try:
            obj = json.loads(line)
        except json.JSONDecodeError:
            _logger.warning("Keeping unparseable line: %s", line[:120])
            out.append(line)
            continue
        if not isinstance(obj, dict) or not obj.get("t"):
            out.append(line)
            continue
        try:
            original = codec.decode(obj["t"])
        except TimestampParseError as exc:
            _logger.warning("Keeping line with bad timestamp: %s", exc)
            out.append(line)
            continue

        rounded = codec.encode(round_to_interval(original, minutes))
        if rounded != obj["t"]:
            obj["t"] = rounded
            fixed += 1
            out.append(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        else:
            out.append(line)

    text = "\n".join(out) + "\n" if out else ""
    return RoundingResult(content=text, fixed=fixed, total=len(lines))


async def fix_store_timestamps(
    store: BlobStore,
    names: Iterable[str],
    codec: WallClockCodec,
    minutes: int = 5,
    *,
    dry_run: bool = False,
) -> dict[str, RoundingResult]:
    """Apply :func:`round_log_timestamps` to each named log.

    Logs that are missing or need no change are not rewritten.  Storage
    errors propagate.
    """
    results: dict[str, RoundingResult] = {}
    for name in names:
        content = await store.read(name)
        if not content:
            _logger.info("%s is empty or missing, skipping", name)
            continue
        result = round_log_timestamps(content, codec, minutes)
        results[name] = result
        _logger.info("%s: %d/%d timestamp(s) rounded", name, result.fixed, result.total)
        if result.fixed and not dry_run:
            await store.write(name, result.content)
    return results
