from __future__ import annotations

import pytest

from gwuptime.exceptions import UptimeStorageError
from gwuptime.models import TransitionEvent
from gwuptime.state import TransitionLog, parse_transition_lines
from gwuptime.storage import MemoryBlobStore


def _event(t: str, gw: str, s: int) -> TransitionEvent:
    return TransitionEvent(timestamp=t, gateway_id=gw, state=s)


@pytest.mark.asyncio
async def test_append_then_read_preserves_file_order() -> None:
    store = MemoryBlobStore()
    log = TransitionLog(store)
    await log.append("2025-09", [_event("2025-09-10T12:00:00", "GW1", 0)])
    await log.append("2025-09", [_event("2025-09-10T11:00:00", "GW2", 1), _event("2025-09-10T13:00:00", "GW1", 1)])

    events = await log.read("2025-09")
    assert [e.timestamp for e in events] == ["2025-09-10T12:00:00", "2025-09-10T11:00:00", "2025-09-10T13:00:00"]
    assert store.blobs["uptime_transitions_2025-09"].count("\n") == 3


@pytest.mark.asyncio
async def test_append_without_events_does_not_touch_store() -> None:
    store = MemoryBlobStore()
    await TransitionLog(store).append("2025-09", [])
    assert store.writes == []


@pytest.mark.asyncio
async def test_events_for_filters_gateway() -> None:
    store = MemoryBlobStore()
    log = TransitionLog(store)
    await log.append("2025-09", [_event("2025-09-10T12:00:00", "GW1", 0), _event("2025-09-10T12:00:00", "GW2", 0)])
    assert [e.gateway_id for e in await log.events_for("2025-09", "GW2")] == ["GW2"]


@pytest.mark.asyncio
async def test_read_missing_log_is_empty() -> None:
    assert await TransitionLog(MemoryBlobStore()).read("2025-09") == []


@pytest.mark.asyncio
async def test_read_failure_propagates() -> None:
    store = MemoryBlobStore()
    store.fail_reads.add("uptime_transitions_2025-09")
    with pytest.raises(UptimeStorageError):
        await TransitionLog(store).read("2025-09")


def test_parse_skips_bad_lines(caplog: pytest.LogCaptureFixture) -> None:
    text = "\n".join(
        [
            '{"t":"2025-09-10T12:00:00","gw":"GW1","s":0}',
            "not json",
            '{"t":"2025-09-10T12:05:00","gw":"GW1"}',
            "",
            '{"t":"2025-09-10T12:10:00","gw":"GW1","s":"OK"}',
        ]
    )
    events = parse_transition_lines(text, source="log")
    assert [e.state for e in events] == [0, 1]
    assert "log:2" in caplog.text
    assert "log:3" in caplog.text
