"""Directory-backed blob store: one file per resource."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from gwuptime.exceptions import UptimeStorageError

_logger = logging.getLogger(__name__)


class FileBlobStore:
    """Store each blob as ``<directory>/<name>``.

    Writes go to a sibling temp file first and are then renamed over the
    target, so a reader never sees a half-written blob.
    """

    def __init__(self, directory: Path | str) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def _path(self, name: str) -> Path:
        if not name or "/" in name or "\\" in name or name in {".", ".."}:
            raise UptimeStorageError(f"Invalid resource name: {name!r}", resource=name)
        return self._directory / name

    def _read_sync(self, name: str) -> str | None:
        path = self._path(name)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise UptimeStorageError(f"Failed to read {path}: {exc}", resource=name) from exc

    def _write_sync(self, name: str, content: str) -> None:
        path = self._path(name)
        tmp = path.with_name(f".{path.name}.tmp")
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            tmp.write_text(content, encoding="utf-8")
            tmp.replace(path)
        except OSError as exc:
            raise UptimeStorageError(f"Failed to write {path}: {exc}", resource=name) from exc

    async def read(self, name: str) -> str | None:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._read_sync, name)

    async def write(self, name: str, content: str) -> None:
        _logger.debug("Writing %s (%d chars)", name, len(content))
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._write_sync, name, content)
