"""GitHub Gist blob store.

Each resource is one file of a single gist.  Reads fetch the gist and return
the named file's content, following ``raw_url`` when GitHub marks the inline
content as truncated.  Writes PATCH the one file, replacing its content.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp

from gwuptime._constants import GITHUB_API_BASE, GITHUB_API_VERSION, USER_AGENT
from gwuptime._redact import redact_headers, shorten
from gwuptime.exceptions import UptimeStorageError

_logger = logging.getLogger(__name__)


class GistBlobStore:
    """Blob store backed by the files of one GitHub gist.

    Parameters
    ----------
    gist_id : str
        Identifier of the gist holding the resources.
    token : str
        GitHub token with the ``gist`` scope.
    http_session : aiohttp.ClientSession
        Session used for every request.  Timeouts configured on the session
        apply; the store adds none of its own.
    api_base : str
        GitHub API root, overridable for GitHub Enterprise.
    """

    def __init__(
        self,
        gist_id: str,
        token: str,
        http_session: aiohttp.ClientSession,
        *,
        api_base: str = GITHUB_API_BASE,
    ) -> None:
        self._gist_id = gist_id
        self._token = token
        self._http = http_session
        self._url = f"{api_base.rstrip('/')}/gists/{gist_id}"

    def _headers(self) -> dict[str, str]:
        return {
            "authorization": f"Bearer {self._token}",
            "accept": "application/vnd.github+json",
            "user-agent": USER_AGENT,
            "x-github-api-version": GITHUB_API_VERSION,
        }

    async def _request_text(self, method: str, url: str, *, resource: str, **kwargs: Any) -> str:
        _logger.debug("%s %s headers=%s", method, url, redact_headers(kwargs.get("headers")))
        try:
            async with self._http.request(method, url, **kwargs) as resp:
                text = await resp.text()
                if resp.status < 200 or resp.status >= 300:
                    raise UptimeStorageError(
                        f"HTTP {resp.status} from {method} {url}: {shorten(text)}",
                        resource=resource,
                        status_code=resp.status,
                    )
        except UptimeStorageError:
            raise
        except aiohttp.ClientError as exc:
            raise UptimeStorageError(
                f"{method} {url} failed: {exc}",
                resource=resource,
            ) from exc
        return text

    async def _get_gist(self, resource: str) -> dict[str, Any]:
        text = await self._request_text("GET", self._url, resource=resource, headers=self._headers())
        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise UptimeStorageError(
                f"Invalid JSON from gist {self._gist_id}: {shorten(text)}",
                resource=resource,
            ) from exc
        if not isinstance(body, dict):
            raise UptimeStorageError(f"Unexpected gist payload for {self._gist_id}", resource=resource)
        return body

    async def read(self, name: str) -> str | None:
        gist = await self._get_gist(name)
        files = gist.get("files")
        if not isinstance(files, dict):
            return None
        entry = files.get(name)
        if not isinstance(entry, dict):
            return None

        if entry.get("truncated") and entry.get("raw_url"):
            _logger.debug("Gist file %s is truncated, fetching raw content", name)
            return await self._request_text("GET", str(entry["raw_url"]), resource=name)

        content = entry.get("content")
        return content if isinstance(content, str) else None

    async def write(self, name: str, content: str) -> None:
        headers = {**self._headers(), "content-type": "application/json"}
        body = json.dumps({"files": {name: {"content": content}}})
        _logger.debug("Updating gist file %s: %s", name, shorten(content, 120))
        await self._request_text("PATCH", self._url, resource=name, headers=headers, data=body)
