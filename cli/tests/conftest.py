"""
Fixtures for Studio CLI tests.

FakeStudioApi answers the subset of the REST API the CLI uses, in memory,
through httpx.MockTransport.
"""

from __future__ import annotations

import json
import re
import uuid

import httpx
import pytest
import pytest_asyncio

from studio_cli.client import ApiClient

PROJECT_ID = "11111111-1111-1111-1111-111111111111"


class FakeStudioApi:
    """In-memory stand-in for the Studio backend."""

    def __init__(self):
        self.files: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None
        # Called after a file listing is served, for simulating concurrent edits
        self.after_list = None

    def add(self, path: str, content: str = "", is_folder: bool = False) -> dict:
        parent, _, name = path.rpartition("/")
        record = {
            "id": str(uuid.uuid4()),
            "project_id": PROJECT_ID,
            "name": name,
            "path": path,
            "content": content,
            "is_folder": is_folder,
            "parent_path": parent or None,
            "updated_at": "2026-01-01T00:00:00+00:00",
        }
        self.files[record["id"]] = record
        return record

    def by_path(self, path: str) -> dict | None:
        return next((f for f in self.files.values() if f["path"] == path), None)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"detail": "forced failure"})

        path = request.url.path
        method = request.method

        if method == "POST" and path == "/auth/login":
            body = json.loads(request.content)
            if body["password"] != "s3cret-pass":
                return httpx.Response(401, json={"detail": "Invalid username or password."})
            return httpx.Response(
                200,
                json={"id": "u1", "username": body["username"]},
                headers={"set-cookie": "session=tok123; HttpOnly; Path=/; SameSite=lax"},
            )

        if method == "GET" and path == "/api/projects":
            return httpx.Response(200, json=[{"id": PROJECT_ID, "name": "My Site", "template": "static"}])

        if method == "GET" and path == f"/api/projects/{PROJECT_ID}/files":
            response = httpx.Response(200, json=list(self.files.values()))
            if self.after_list is not None:
                self.after_list()
            return response

        if method == "POST" and path == "/api/files":
            body = json.loads(request.content)
            if self.by_path(body["path"]):
                return httpx.Response(409, json={"detail": "File already exists."})
            parent = body.get("parent_path")
            if parent and not (self.by_path(parent) or {}).get("is_folder"):
                return httpx.Response(400, json={"detail": f"Parent folder does not exist: {parent}"})
            return httpx.Response(201, json=self.add(body["path"], body["content"], body["is_folder"]))

        match = re.fullmatch(r"/api/files/([^/]+)", path)
        if match:
            file_id = match.group(1)
            record = self.files.get(file_id)
            if method == "PATCH":
                if record is None:
                    return httpx.Response(404, json={"detail": "File not found."})
                record.update(json.loads(request.content))
                return httpx.Response(200, json=record)
            if method == "DELETE":
                if record is not None:
                    prefix = record["path"] + "/"
                    for other_id, other in list(self.files.items()):
                        if other_id == file_id or other["path"].startswith(prefix):
                            del self.files[other_id]
                return httpx.Response(204)

        return httpx.Response(404, json={"detail": "Not Found"})


@pytest.fixture
def api() -> FakeStudioApi:
    return FakeStudioApi()


@pytest_asyncio.fixture
async def client(api):
    async with ApiClient("http://studio.test", session="tok123", transport=httpx.MockTransport(api.handler)) as c:
        yield c
