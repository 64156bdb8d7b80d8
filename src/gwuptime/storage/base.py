"""Storage protocol and the read-then-write append helper."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

_logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    """Structural interface for named text blobs.

    Implementations raise :class:`~gwuptime.exceptions.UptimeStorageError`
    on I/O failure.  A missing blob is not a failure: ``read`` returns
    ``None``.
    """

    async def read(self, name: str) -> str | None:
        ...

    async def write(self, name: str, content: str) -> None:
        ...


async def append_lines(store: BlobStore, name: str, lines: Sequence[str]) -> None:
    """Append *lines* to the blob *name* as read-modify-write.

    There is no compare-and-swap: a second writer appending to the same blob
    between our read and our write loses its lines.  Callers must keep a
    single writer per blob.
    """
    if not lines:
        return
    current = await store.read(name) or ""
    if current and not current.endswith("\n"):
        current += "\n"
    content = current + "".join(f"{line}\n" for line in lines)
    _logger.debug("Appending %d line(s) to %s", len(lines), name)
    await store.write(name, content)
