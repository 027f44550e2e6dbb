"""Route tests for the composed preview document and the sandbox host page."""

from __future__ import annotations

import html
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from backend.routes import preview as preview_routes


@pytest.fixture
def project(make_project):
    return make_project(name="My Site")


@pytest.fixture
def serve(project):
    """Serve the given files for `project`."""
    patches = []

    def _serve(files):
        for p in (
            patch.object(preview_routes.project_repo, "get", AsyncMock(return_value=project)),
            patch.object(preview_routes.file_repo, "list_for_project", AsyncMock(return_value=files)),
        ):
            p.start()
            patches.append(p)

    yield _serve
    for p in patches:
        p.stop()


class TestPreview:
    async def test_fragment_is_wrapped(self, async_client, as_user, project, serve, make_file):
        serve(
            [
                make_file(project.id, "index.html", "<h1>Hello</h1>"),
                make_file(project.id, "styles.css", "h1 { color: red; }"),
                make_file(project.id, "script.js", "console.log('hi')"),
            ]
        )
        res = await async_client.get(f"/api/projects/{project.id}/preview")

        assert res.status_code == 200
        assert res.headers["content-type"].startswith("text/html")
        assert res.headers["cache-control"] == "no-store"
        body = res.text
        assert body.startswith("<!DOCTYPE html>")
        assert "<h1>Hello</h1>" in body
        assert "h1 { color: red; }" in body
        assert "console.log('hi')" in body
        assert "catch(e)" in body
        assert "content-disposition" not in res.headers

    async def test_full_document_gets_inline_assets(self, async_client, as_user, project, serve, make_file):
        page = (
            "<!DOCTYPE html><html><head><link rel=\"stylesheet\" href=\"styles.css\"></head>"
            "<body><p>x</p><script src=\"script.js\"></script></body></html>"
        )
        serve(
            [
                make_file(project.id, "index.html", page),
                make_file(project.id, "styles.css", "p{margin:0}"),
                make_file(project.id, "script.js", "var a = 1;"),
            ]
        )
        res = await async_client.get(f"/api/projects/{project.id}/preview")

        body = res.text
        assert 'href="styles.css"' not in body
        assert 'src="script.js"' not in body
        assert body.index("<style>p{margin:0}</style>") < body.index("</head>")
        assert body.index("var a = 1;") < body.index("</body>")

    async def test_empty_project_still_renders(self, async_client, as_user, project, serve):
        serve([])
        res = await async_client.get(f"/api/projects/{project.id}/preview")

        assert res.status_code == 200
        assert "<body>" in res.text
        assert "<script>" not in res.text

    async def test_download(self, async_client, as_user, project, serve, make_file):
        serve([make_file(project.id, "index.html", "<p>x</p>")])
        res = await async_client.get(f"/api/projects/{project.id}/preview", params={"download": "true"})

        assert res.status_code == 200
        assert res.headers["content-disposition"] == 'attachment; filename="My-Site.html"'

    async def test_unknown_project(self, async_client, as_user):
        with patch.object(preview_routes.project_repo, "get", AsyncMock(return_value=None)):
            res = await async_client.get(f"/api/projects/{uuid4()}/preview")
        assert res.status_code == 404

    async def test_requires_session(self, async_client):
        res = await async_client.get(f"/api/projects/{uuid4()}/preview")
        assert res.status_code == 401


class TestPreviewFrame:
    async def test_frame_defaults_to_desktop(self, async_client, as_user, project, serve, make_file):
        serve([make_file(project.id, "index.html", "<p>x</p>")])
        res = await async_client.get(f"/api/projects/{project.id}/preview/frame")

        assert res.status_code == 200
        assert 'sandbox="allow-scripts"' in res.text
        assert "width: 100%;" in res.text
        assert html.escape("<p>x</p>", quote=True) in res.text

    async def test_frame_device_preset(self, async_client, as_user, project, serve, make_file):
        serve([make_file(project.id, "index.html", "<p>x</p>")])
        res = await async_client.get(f"/api/projects/{project.id}/preview/frame", params={"device": "tablet"})

        assert res.status_code == 200
        assert "width: 768px;" in res.text

    async def test_frame_unknown_device(self, async_client, as_user, project, serve, make_file):
        serve([make_file(project.id, "index.html", "<p>x</p>")])
        res = await async_client.get(f"/api/projects/{project.id}/preview/frame", params={"device": "watch"})

        assert res.status_code == 400
