"""HTTP client for the Studio API, and a FileStore backed by it."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from engine.kernel.errors import ConflictError, NotFoundError, StudioError, TransportError, ValidationError
from engine.kernel.session import FileStore
from engine.kernel.types import FileRecord

logger = logging.getLogger(__name__)

SESSION_COOKIE = "session"


class AuthenticationError(StudioError):
    """The server rejected the session (401)."""


def _detail(res: httpx.Response) -> str:
    try:
        body = res.json()
    except ValueError:
        return res.text or res.reason_phrase
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return str(body)


def raise_for_status(res: httpx.Response) -> None:
    """Translate an error response into the kernel error taxonomy."""
    if res.is_success:
        return

    detail = _detail(res)
    code = res.status_code
    if code in (400, 422):
        raise ValidationError(detail)
    if code == 401:
        raise AuthenticationError(detail)
    if code == 404:
        raise NotFoundError(detail)
    if code == 409:
        raise ConflictError(detail)
    if code >= 500:
        raise TransportError(f"Server error {code}: {detail}")
    raise StudioError(f"HTTP {code}: {detail}")


class ApiClient:
    """Async HTTP client for the Studio API, authenticated by session cookie."""

    def __init__(
        self,
        api_url: str,
        session: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ):
        self.api_url = api_url.rstrip("/")
        self.session = session
        self.client = httpx.AsyncClient(base_url=self.api_url, timeout=timeout, transport=transport)

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.session:
            headers["Cookie"] = f"{SESSION_COOKIE}={self.session}"
        return headers

    async def request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """
        Send a request and raise a kernel error for any non-2xx answer.

        Raises:
            TransportError: server unreachable or 5xx
            ValidationError, NotFoundError, ConflictError: 400/422, 404, 409
            AuthenticationError: 401
        """
        try:
            res = await self.client.request(method, path, headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e
        raise_for_status(res)
        return res

    async def get(self, path: str, params: dict | None = None) -> Any:
        res = await self.request("GET", path, params=params)
        return res.json()

    async def post(self, path: str, data: dict) -> Any:
        res = await self.request("POST", path, json=data)
        return res.json()

    async def patch(self, path: str, data: dict) -> Any:
        res = await self.request("PATCH", path, json=data)
        return res.json()

    async def delete(self, path: str) -> None:
        await self.request("DELETE", path)

    async def login(self, username: str, password: str) -> dict:
        """
        Sign in and keep the session cookie.

        Returns the user as returned by /auth/login.
        """
        res = await self.request("POST", "/auth/login", json={"username": username, "password": password})
        session = res.cookies.get(SESSION_COOKIE)
        if not session:
            raise StudioError("Server did not return a session cookie")
        self.session = session
        return res.json()

    async def close(self):
        await self.client.aclose()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


class HttpFileStore(FileStore):
    """FileStore over the Studio REST API."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def list_files(self, project_id: str) -> list[FileRecord]:
        data = await self.client.get(f"/api/projects/{project_id}/files")
        return [FileRecord.from_dict(d) for d in data]

    async def create_file(self, record: FileRecord) -> FileRecord:
        data = await self.client.post(
            "/api/files",
            {
                "project_id": record.project_id,
                "name": record.name,
                "path": record.path,
                "content": record.content,
                "is_folder": record.is_folder,
                "parent_path": record.parent_path,
            },
        )
        return FileRecord.from_dict(data)

    async def update_file(self, file_id: str, content: str | None = None, name: str | None = None) -> FileRecord:
        payload: dict[str, str] = {}
        if content is not None:
            payload["content"] = content
        if name is not None:
            payload["name"] = name
        data = await self.client.patch(f"/api/files/{file_id}", payload)
        return FileRecord.from_dict(data)

    async def delete_file(self, file_id: str) -> None:
        await self.client.delete(f"/api/files/{file_id}")
