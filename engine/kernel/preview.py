"""
Studio Kernel: Preview Composer

Pure function: (html, css, js) → one self-contained HTML document string.
No IO. No execution. Deterministic.

Two modes, picked by looking at the markup:
- full document (has a doctype or an <html> tag): the markup is kept and the
  stylesheet and script are injected inline. Links to the same logical files
  are stripped first so nothing is included twice.
- fragment: a minimal document shell is synthesized around the markup.

User script always runs inside a try/catch so one runtime error does not
stop the page from rendering. Errors go to the frame's console.
"""

from __future__ import annotations

import base64
import re
from collections.abc import Callable, Iterable

from engine.kernel.types import (
    MARKUP_ENTRY,
    SCRIPT_ENTRIES,
    STYLESHEET_ENTRIES,
    FileRecord,
    PreviewSources,
)

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_FULL_DOCUMENT = re.compile(r"<!doctype\b|<html[\s>]", re.IGNORECASE)
_HEAD_CLOSE = re.compile(r"</head\s*>", re.IGNORECASE)
_BODY_OPEN = re.compile(r"<body\b", re.IGNORECASE)
_BODY_CLOSE = re.compile(r"</body\s*>", re.IGNORECASE)
_HTML_OPEN = re.compile(r"<html\b[^>]*>", re.IGNORECASE)


def _names(names: Iterable[str]) -> str:
    return "|".join(re.escape(n) for n in names)


# href="styles.css", href='./style.css', href="/styles.css"
_STYLESHEET_LINK = re.compile(
    rf"""<link\b[^>]*\bhref\s*=\s*["'](?:\.?/)?(?:{_names(STYLESHEET_ENTRIES)})["'][^>]*>""",
    re.IGNORECASE,
)
_SCRIPT_SRC = re.compile(
    rf"""<script\b[^>]*\bsrc\s*=\s*["'](?:\.?/)?(?:{_names(SCRIPT_ENTRIES)})["'][^>]*>\s*</script\s*>""",
    re.IGNORECASE,
)

_BASELINE_RESET = (
    "* { margin: 0; padding: 0; box-sizing: border-box; }\n"
    "    body { font-family: system-ui, -apple-system, sans-serif; }"
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def is_full_document(html: str) -> bool:
    """True if the markup already is a complete document."""
    return bool(_FULL_DOCUMENT.search(html))


def compose_preview(html: str, css: str = "", js: str = "") -> str:
    """
    Compose one renderable HTML document from markup, stylesheet and script.
    Pure function. No side effects. No IO.
    """
    if is_full_document(html):
        return _compose_document(html, css, js)
    return _compose_fragment(html, css, js)


def compose_sources(sources: PreviewSources) -> str:
    return compose_preview(sources.html, sources.css, sources.js)


def strip_entry_references(html: str) -> str:
    """Remove <link> and <script src> tags that point at stylesheet/script entry files."""
    html = _STYLESHEET_LINK.sub("", html)
    return _SCRIPT_SRC.sub("", html)


def guard_script(js: str) -> str:
    """Wrap user script in a try/catch block that logs to the frame console."""
    # Newlines keep a trailing line comment in user code from eating the catch
    body = _escape_closing(js, "script")
    return f"<script>try{{\n{body}\n}}catch(e){{console.error('Preview Error:',e);}}</script>"


def select_entry_files(
    records: Iterable[FileRecord],
    resolve: Callable[[str], str],
) -> PreviewSources:
    """
    Pick the markup, stylesheet and script entry files and resolve their content.

    First match wins across each name-preference list. When several files
    share a name the one closest to the project root is used. `resolve` is
    the session's resolve_content, so unsaved edits win over persisted content.
    """
    by_name: dict[str, FileRecord] = {}
    for record in records:
        if record.is_folder:
            continue
        current = by_name.get(record.name)
        if current is None or _depth(record) < _depth(current):
            by_name[record.name] = record

    sources = PreviewSources()
    markup = by_name.get(MARKUP_ENTRY)
    if markup is not None:
        sources.html = resolve(markup.path)
        sources.paths["html"] = markup.path

    for attr, candidates in (("css", STYLESHEET_ENTRIES), ("js", SCRIPT_ENTRIES)):
        for name in candidates:
            record = by_name.get(name)
            if record is not None:
                setattr(sources, attr, resolve(record.path))
                sources.paths[attr] = record.path
                break

    return sources


def preview_data_uri(document: str) -> str:
    """Serialize a composed document for the open-in-new-window action."""
    encoded = base64.b64encode(document.encode("utf-8")).decode("ascii")
    return f"data:text/html;charset=utf-8;base64,{encoded}"


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def _compose_document(html: str, css: str, js: str) -> str:
    content = strip_entry_references(html)

    if css:
        style_tag = f"<style>{_escape_closing(css, 'style')}</style>"
        head_close = _HEAD_CLOSE.search(content)
        body_open = _BODY_OPEN.search(content)
        html_open = _HTML_OPEN.search(content)
        if head_close:
            content = _insert(content, head_close.start(), style_tag)
        elif body_open:
            content = _insert(content, body_open.start(), style_tag)
        elif html_open:
            content = _insert(content, html_open.end(), style_tag)
        else:
            content = style_tag + content

    if js:
        script_tag = guard_script(js)
        body_closes = list(_BODY_CLOSE.finditer(content))
        if body_closes:
            content = _insert(content, body_closes[-1].start(), script_tag)
        else:
            content += script_tag

    return content


def _compose_fragment(html: str, css: str, js: str) -> str:
    lines = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '  <meta charset="UTF-8">',
        '  <meta name="viewport" content="width=device-width, initial-scale=1.0">',
        "  <style>",
        f"    {_BASELINE_RESET}",
        f"    {_escape_closing(css, 'style')}",
        "  </style>",
        "</head>",
        "<body>",
        f"  {html}",
    ]
    if js:
        lines.append(f"  {guard_script(js)}")
    lines += ["</body>", "</html>", ""]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _insert(content: str, index: int, fragment: str) -> str:
    return content[:index] + fragment + content[index:]


def _escape_closing(text: str, tag: str) -> str:
    """Keep inline content from terminating its own <style>/<script> element."""
    return re.sub(rf"</({tag})", r"<\\/\1", text, flags=re.IGNORECASE)


def _depth(record: FileRecord) -> int:
    return record.path.count("/")
