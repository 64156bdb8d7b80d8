"""In-process blob store."""

from __future__ import annotations

from gwuptime.exceptions import UptimeStorageError


class MemoryBlobStore:
    """Dict-backed store for tests and scratch runs.

    ``fail_reads``/``fail_writes`` hold resource names whose next accesses
    raise :class:`UptimeStorageError`, to exercise failure paths.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.blobs: dict[str, str] = dict(initial or {})
        self.fail_reads: set[str] = set()
        self.fail_writes: set[str] = set()
        self.writes: list[str] = []

    async def read(self, name: str) -> str | None:
        if name in self.fail_reads:
            raise UptimeStorageError(f"Simulated read failure for {name}", resource=name)
        return self.blobs.get(name)

    async def write(self, name: str, content: str) -> None:
        if name in self.fail_writes:
            raise UptimeStorageError(f"Simulated write failure for {name}", resource=name)
        self.blobs[name] = content
        self.writes.append(name)

    def names(self) -> list[str]:
        return sorted(self.blobs)
