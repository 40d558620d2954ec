# tests/test_gist_client.py

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from gist_todo.errors import ErrorKind, RemoteError
from gist_todo.remote.document import encode_tasks
from gist_todo.remote import gist_client
from gist_todo.remote.gist_client import GistClient
from gist_todo.tasks.task_models import Task, TaskStatus

from .conftest import T0

API = "https://api.github.test"
TOKEN = "ghp_test"
LABEL = "TodoCLI Task List"

Handler = Callable[[httpx.Request], httpx.Response]


def _client(handler: Handler) -> GistClient:
    return GistClient(
        api_url=API,
        description=LABEL,
        filename="todolist.json",
        timeout_seconds=5.0,
        transport=httpx.MockTransport(handler),
    )


def _tasks() -> list[Task]:
    return [Task(id="abc123def456", description="Buy milk", status=TaskStatus.PENDING, created_at=T0)]


class FakeGitHub:
    """Tiny stand-in for the gists endpoints, recording every request."""

    def __init__(self, gists: list[dict] | None = None) -> None:
        self.gists = gists or []
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "GET" and path == "/gists":
            listing = [{"id": g["id"], "description": g["description"]} for g in self.gists]
            return httpx.Response(200, json=listing)

        if request.method == "POST" and path == "/gists":
            body = json.loads(request.content)
            gist = {"id": f"g{len(self.gists) + 1}", "description": body["description"], "files": body["files"]}
            self.gists.append(gist)
            return httpx.Response(201, json=gist)

        if path.startswith("/gists/"):
            gist_id = path.rsplit("/", 1)[-1]
            gist = next((g for g in self.gists if g["id"] == gist_id), None)
            if gist is None:
                return httpx.Response(404, json={"message": "Not Found"})
            if request.method == "PATCH":
                gist["files"].update(json.loads(request.content)["files"])
            return httpx.Response(200, json=gist)

        return httpx.Response(500)


@pytest.mark.asyncio
async def test_fetch_without_gist_is_not_found() -> None:
    gh = FakeGitHub([{"id": "other", "description": "something else", "files": {}}])

    with pytest.raises(RemoteError) as err:
        await _client(gh).fetch_tasks(TOKEN)

    assert err.value.kind == ErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_create_then_fetch_then_update_round_trip() -> None:
    gh = FakeGitHub()
    client = _client(gh)

    await client.create_document(TOKEN, _tasks())
    assert gh.gists[0]["description"] == LABEL
    create_body = json.loads(gh.requests[0].content)
    assert create_body["public"] is False

    fetched = await client.fetch_tasks(TOKEN)
    assert fetched == _tasks()

    completed = [fetched[0].with_status(TaskStatus.COMPLETED)]
    await client.update_document(TOKEN, completed)
    assert json.loads(gh.gists[0]["files"]["todolist.json"]["content"])[0]["status"] == "Completed"

    patch = gh.requests[-1]
    assert patch.method == "PATCH"
    assert patch.url.path == "/gists/g1"
    assert patch.headers["Authorization"] == f"Bearer {TOKEN}"


@pytest.mark.asyncio
async def test_gist_without_task_file_reads_as_empty() -> None:
    gh = FakeGitHub([{"id": "g1", "description": LABEL, "files": {"notes.md": {"content": "hi"}}}])
    assert await _client(gh).fetch_tasks(TOKEN) == []


@pytest.mark.asyncio
async def test_truncated_file_is_downloaded_from_raw_url() -> None:
    raw_url = "https://gist.githubusercontent.test/raw/todolist.json"

    def handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == raw_url:
            return httpx.Response(200, text=encode_tasks(_tasks()))
        if request.url.path == "/gists":
            return httpx.Response(200, json=[{"id": "g1", "description": LABEL}])
        return httpx.Response(
            200,
            json={"id": "g1", "files": {"todolist.json": {"truncated": True, "content": "[", "raw_url": raw_url}}},
        )

    assert await _client(handler).fetch_tasks(TOKEN) == _tasks()


@pytest.mark.asyncio
async def test_listing_follows_pages() -> None:
    seen_pages: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/gists":
            page = request.url.params["page"]
            seen_pages.append(page)
            if page == "1":
                return httpx.Response(200, json=[{"id": f"x{i}", "description": "other"} for i in range(100)])
            return httpx.Response(200, json=[{"id": "mine", "description": LABEL}])
        return httpx.Response(200, json={"id": "mine", "files": {"todolist.json": {"content": "[]"}}})

    assert await _client(handler).fetch_tasks(TOKEN) == []
    assert seen_pages == ["1", "2"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "kind"),
    [(401, ErrorKind.AUTH_REQUIRED), (500, ErrorKind.SERVER_ERROR), (403, ErrorKind.SERVER_ERROR)],
)
async def test_http_status_mapping(status: int, kind: ErrorKind) -> None:
    client = _client(lambda request: httpx.Response(status, text="nope"))
    with pytest.raises(RemoteError) as err:
        await client.fetch_tasks(TOKEN)
    assert err.value.kind == kind


@pytest.mark.asyncio
async def test_timeout_maps_to_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(RemoteError) as err:
        await _client(handler).update_document(TOKEN, _tasks())
    assert err.value.kind == ErrorKind.NETWORK_ERROR


@pytest.mark.asyncio
async def test_connection_error_maps_to_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route", request=request)

    with pytest.raises(RemoteError) as err:
        await _client(handler).create_document(TOKEN, [])
    assert err.value.kind == ErrorKind.NETWORK_ERROR


@pytest.mark.asyncio
async def test_invalid_json_maps_to_decode_error() -> None:
    client = _client(lambda request: httpx.Response(200, text="<html>"))
    with pytest.raises(RemoteError) as err:
        await client.fetch_tasks(TOKEN)
    assert err.value.kind == ErrorKind.DECODE_ERROR


@pytest.mark.asyncio
async def test_listing_cut_off_at_page_cap_is_not_a_missing_gist(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(gist_client, "MAX_GIST_PAGES", 2)
    gh = FakeGitHub([{"id": f"x{i}", "description": "other", "files": {}} for i in range(250)])

    with pytest.raises(RemoteError) as err:
        await _client(gh).fetch_tasks(TOKEN)

    assert err.value.kind == ErrorKind.SERVER_ERROR
    assert [r.url.params["page"] for r in gh.requests] == ["1", "2"]
