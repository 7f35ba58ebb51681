import json
import logging
from typing import Any, AsyncGenerator

import httpx
from pytest import fixture

from trilium_cache import Server, TreeCache

logging.basicConfig(level=logging.WARNING)

HOST = "http://trilium.test"
TOKEN = "test-token"

MARKERS = [
    "server_error",
]


def pytest_configure(config) -> None:
    for marker in MARKERS:
        config.addinivalue_line("markers", marker)


def note_row(
    note_id: str,
    title: str | None = None,
    *,
    note_type: str = "text",
    mime: str = "text/html",
) -> dict[str, Any]:
    """
    Create a note row as sent by the server.
    """
    return {
        "noteId": note_id,
        "title": title or note_id,
        "contentLength": 0,
        "isProtected": False,
        "type": note_type,
        "mime": mime,
        "isDeleted": False,
    }


def branch_row(
    parent_note_id: str,
    child_note_id: str,
    position: int = 10,
    *,
    branch_id: str | None = None,
    prefix: str | None = None,
) -> dict[str, Any]:
    """
    Create a branch row as sent by the server.
    """
    return {
        "branchId": branch_id or f"{parent_note_id}_{child_note_id}",
        "noteId": child_note_id,
        "parentNoteId": parent_note_id,
        "notePosition": position,
        "prefix": prefix,
        "isExpanded": False,
    }


def attribute_row(
    note_id: str,
    name: str,
    value: str = "",
    *,
    attribute_type: str = "label",
    inheritable: bool = False,
    attribute_id: str | None = None,
    position: int = 0,
) -> dict[str, Any]:
    """
    Create an attribute row as sent by the server.
    """
    return {
        "attributeId": attribute_id or f"{note_id}_{name}_{value}",
        "noteId": note_id,
        "type": attribute_type,
        "name": name,
        "value": value,
        "isInheritable": inheritable,
        "position": position,
    }


class FakeTrilium:
    """
    In-memory Trilium server. Rows added here are only visible to a
    {obj}`TreeCache` once fetched through the API.
    """

    notes: dict[str, dict[str, Any]]
    branches: dict[str, dict[str, Any]]
    attributes: dict[str, dict[str, Any]]
    contents: dict[str, str | None]

    requests: list[tuple[str, str, Any]]
    """Requests received as (method, path, body)"""

    headers: list[httpx.Headers]

    fail_status: int | None = None

    def __init__(self):
        self.notes = {}
        self.branches = {}
        self.attributes = {}
        self.contents = {}
        self.requests = []
        self.headers = []

    def add_note(
        self,
        note_id: str,
        title: str | None = None,
        *,
        parent: str | None = "root",
        position: int = 10,
        content: str | None = "",
        **kwargs,
    ):
        self.notes[note_id] = note_row(note_id, title, **kwargs)
        self.contents[note_id] = content

        if parent is not None:
            self.add_branch(parent, note_id, position)

    def add_branch(self, parent_note_id: str, child_note_id: str, position=10):
        row = branch_row(parent_note_id, child_note_id, position)
        self.branches[row["branchId"]] = row

    def add_label(self, note_id: str, name: str, value: str = "", **kwargs):
        row = attribute_row(note_id, name, value, **kwargs)
        self.attributes[row["attributeId"]] = row

    def add_relation(self, note_id: str, name: str, target: str, **kwargs):
        row = attribute_row(
            note_id, name, target, attribute_type="relation", **kwargs
        )
        self.attributes[row["attributeId"]] = row

    def tree_load_count(self) -> int:
        return len([r for r in self.requests if r[1] == "tree/load"])

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api/")
        body = json.loads(request.content) if request.content else None

        self.requests.append((request.method, path, body))
        self.headers.append(request.headers)

        if self.fail_status is not None:
            return httpx.Response(self.fail_status)

        if request.method == "POST" and path == "tree/load":
            note_ids = set(body["noteIds"])

            return httpx.Response(
                200,
                json={
                    "notes": [
                        row
                        for note_id, row in self.notes.items()
                        if note_id in note_ids
                    ],
                    "branches": [
                        row
                        for row in self.branches.values()
                        if row["noteId"] in note_ids
                        or row["parentNoteId"] in note_ids
                    ],
                    "attributes": [
                        row
                        for row in self.attributes.values()
                        if row["noteId"] in note_ids
                    ],
                },
            )

        if request.method == "GET" and path.startswith("notes/"):
            note_id = path.removeprefix("notes/")

            if note_id not in self.notes:
                return httpx.Response(404)

            return httpx.Response(
                200,
                json={
                    **self.notes[note_id],
                    "content": self.contents[note_id],
                },
            )

        return httpx.Response(404)


@fixture
def trilium() -> FakeTrilium:
    """
    Fake server populated with just the root note.
    """
    fake = FakeTrilium()
    fake.add_note("root", parent=None)
    return fake


@fixture
async def server(trilium: FakeTrilium) -> AsyncGenerator[Server, None]:
    async with Server(
        HOST, token=TOKEN, transport=httpx.MockTransport(trilium.handler)
    ) as server:
        yield server


@fixture
def cache(server: Server) -> TreeCache:
    return TreeCache(server)
