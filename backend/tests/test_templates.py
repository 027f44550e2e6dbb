"""Tests for project starter templates."""

from __future__ import annotations

import pytest

from backend.services.templates import TEMPLATES, template_files
from engine.kernel.preview import compose_sources, select_entry_files
from engine.kernel.tree import build_tree
from engine.kernel.types import FileRecord


def _records(template: str) -> list[FileRecord]:
    return [
        FileRecord(
            id=str(i),
            project_id="p",
            name=f.name,
            path=f.path,
            content=f.content,
            is_folder=f.is_folder,
            parent_path=f.parent_path,
        )
        for i, f in enumerate(template_files(template))
    ]


class TestTemplates:
    @pytest.mark.parametrize("template", sorted(TEMPLATES))
    def test_folders_precede_their_files(self, template):
        seen_folders = set()
        for f in template_files(template):
            if f.parent_path:
                assert f.parent_path in seen_folders
            if f.is_folder:
                seen_folders.add(f.path)

    @pytest.mark.parametrize("template", sorted(TEMPLATES))
    def test_paths_unique_and_consistent(self, template):
        files = template_files(template)
        assert len({f.path for f in files}) == len(files)
        for f in files:
            expected = f"{f.parent_path}/{f.name}" if f.parent_path else f.name
            assert f.path == expected

    def test_static_files(self):
        assert [f.path for f in template_files("static")] == ["index.html", "styles.css", "script.js"]

    def test_vite_vue_files(self):
        paths = [f.path for f in template_files("vite-vue")]
        assert "src/App.vue" in paths
        assert "vite.config.js" in paths

    def test_unknown_template_falls_back(self):
        assert template_files("svelte") == template_files("static")

    def test_returns_fresh_list(self):
        files = template_files("static")
        files.clear()
        assert len(template_files("static")) == 3

    def test_nextjs_tree(self):
        tree = build_tree(_records("nextjs"))
        assert [n.name for n in tree] == ["pages", "styles", "package.json"]
        assert [c.name for c in tree[0].children] == ["index.js"]


class TestStaticTemplatePreview:
    def test_assets_inlined_once(self):
        records = _records("static")
        content = {r.path: r.content for r in records}
        document = compose_sources(select_entry_files(records, content.__getitem__))

        assert 'href="styles.css"' not in document
        assert 'src="script.js"' not in document
        assert document.count("<style>") == 1
        assert "Made with ProDev Studio" in document
        assert "cta-button" in document
        assert document.index("<style>") < document.index("</head>")
