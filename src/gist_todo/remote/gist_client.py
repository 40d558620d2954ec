# src/gist_todo/remote/gist_client.py

"""
GitHub Gist client for the remote task document.

One private gist, found by its description label, holds one JSON file with the
task list. Every failure is raised as RemoteError with a kind from ErrorKind:

- no such gist                    -> NOT_FOUND
- 401                             -> AUTH_REQUIRED
- other non-2xx                   -> SERVER_ERROR
- timeout / connection problems   -> NETWORK_ERROR
- unreadable JSON                 -> DECODE_ERROR

No retries here; the sync engine does not retry either.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import httpx

from .. import __version__
from ..errors import ErrorKind, RemoteError
from ..tasks.task_models import Task
from .document import decode_tasks, encode_tasks

logger = logging.getLogger(__name__)

GISTS_PAGE_SIZE = 100
MAX_GIST_PAGES = 30


def make_timeout(seconds: float) -> httpx.Timeout:
    return httpx.Timeout(seconds, connect=min(seconds, 10.0))


class GistClient:
    """
    Remote document client backed by the GitHub REST API.

    `transport` is injectable so tests can use httpx.MockTransport.
    """

    def __init__(
        self,
        *,
        api_url: str = "https://api.github.com",
        description: str = "TodoCLI Task List",
        filename: str = "todolist.json",
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._description = description
        self._filename = filename
        self._timeout = make_timeout(timeout_seconds)
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Any) -> GistClient:
        return cls(
            api_url=settings.github_api_url,
            description=settings.gist_description,
            filename=settings.gist_filename,
            timeout_seconds=settings.http_timeout_seconds,
        )

    # ---- low-level helpers ----

    def _client(self, token: str) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._api_url,
            timeout=self._timeout,
            transport=self._transport,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "User-Agent": f"gist-todo/{__version__}",
            },
        )

    async def _request(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        *,
        what: str,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise RemoteError(ErrorKind.NETWORK_ERROR, f"Timed out while trying to {what}.") from e
        except httpx.TransportError as e:
            raise RemoteError(ErrorKind.NETWORK_ERROR, f"Network error while trying to {what}: {e}") from e

        logger.debug("%s %s -> %s", method, url, response.status_code)

        if response.status_code == 401:
            raise RemoteError(ErrorKind.AUTH_REQUIRED, "GitHub rejected the token (401).")
        if response.status_code == 404:
            raise RemoteError(ErrorKind.NOT_FOUND, f"Failed to {what}: not found (404).")
        if response.is_error:
            raise RemoteError(
                ErrorKind.SERVER_ERROR,
                f"Failed to {what}: {response.status_code} {_short_body(response)}".rstrip(),
            )
        return response

    @staticmethod
    def _json(response: httpx.Response, *, what: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(ErrorKind.DECODE_ERROR, f"Invalid JSON while trying to {what}.") from e

    def _files_payload(self, tasks: Iterable[Task]) -> dict[str, Any]:
        return {self._filename: {"content": encode_tasks(tasks)}}

    async def _find_gist_id(self, client: httpx.AsyncClient) -> str:
        """Walk the user's gists until one carries our description label."""
        for page in range(1, MAX_GIST_PAGES + 1):
            response = await self._request(
                client,
                "GET",
                "/gists",
                what="list gists",
                params={"per_page": GISTS_PAGE_SIZE, "page": page},
            )
            gists = self._json(response, what="list gists")
            if not isinstance(gists, list):
                raise RemoteError(ErrorKind.DECODE_ERROR, "Gist listing is not a JSON array.")

            for gist in gists:
                if isinstance(gist, dict) and gist.get("description") == self._description:
                    gist_id = gist.get("id")
                    if isinstance(gist_id, str) and gist_id:
                        logger.debug("Found task gist id=%s on page %d", gist_id, page)
                        return gist_id

            if len(gists) < GISTS_PAGE_SIZE:
                raise RemoteError(ErrorKind.NOT_FOUND, f"Gist '{self._description}' not found.")

        # Listing not exhausted, so the gist may still exist.
        raise RemoteError(
            ErrorKind.SERVER_ERROR,
            f"Gist '{self._description}' not found in the first {MAX_GIST_PAGES * GISTS_PAGE_SIZE} gists.",
        )

    async def _file_content(self, client: httpx.AsyncClient, gist: dict[str, Any]) -> str | None:
        files = gist.get("files")
        if not isinstance(files, dict):
            raise RemoteError(ErrorKind.DECODE_ERROR, "Gist payload has no files map.")

        entry = files.get(self._filename)
        if entry is None:
            logger.info("Gist has no %s yet; treating remote list as empty.", self._filename)
            return None
        if not isinstance(entry, dict):
            raise RemoteError(ErrorKind.DECODE_ERROR, f"Gist file {self._filename} is malformed.")

        # GitHub inlines at most ~1MB of content; larger files must be fetched raw.
        if entry.get("truncated") and isinstance(entry.get("raw_url"), str):
            response = await self._request(client, "GET", entry["raw_url"], what="download gist file")
            return response.text

        content = entry.get("content")
        return content if isinstance(content, str) else None

    # ---- public API ----

    async def fetch_tasks(self, credential: str) -> list[Task]:
        async with self._client(credential) as client:
            gist_id = await self._find_gist_id(client)
            response = await self._request(client, "GET", f"/gists/{gist_id}", what="fetch gist")
            gist = self._json(response, what="fetch gist")
            if not isinstance(gist, dict):
                raise RemoteError(ErrorKind.DECODE_ERROR, "Gist payload is not a JSON object.")
            content = await self._file_content(client, gist)

        tasks = decode_tasks(content)
        logger.info("Fetched %d remote tasks from gist %s", len(tasks), gist_id)
        return tasks

    async def create_document(self, credential: str, tasks: Iterable[Task]) -> None:
        items = list(tasks)
        payload = {
            "description": self._description,
            "public": False,
            "files": self._files_payload(items),
        }
        async with self._client(credential) as client:
            response = await self._request(client, "POST", "/gists", what="create gist", json=payload)
        created = self._json(response, what="create gist")
        gist_id = created.get("id") if isinstance(created, dict) else None
        logger.info("Created task gist id=%s with %d tasks", gist_id, len(items))

    async def update_document(self, credential: str, tasks: Iterable[Task]) -> None:
        items = list(tasks)
        async with self._client(credential) as client:
            gist_id = await self._find_gist_id(client)
            await self._request(
                client,
                "PATCH",
                f"/gists/{gist_id}",
                what="update gist",
                json={"files": self._files_payload(items)},
            )
        logger.info("Updated task gist id=%s with %d tasks", gist_id, len(items))


def _short_body(response: httpx.Response, limit: int = 200) -> str:
    try:
        text = response.text
    except (UnicodeDecodeError, httpx.ResponseNotRead):
        return ""
    text = " ".join(text.split())
    return text[:limit]
