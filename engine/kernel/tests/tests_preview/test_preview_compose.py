"""
Studio Preview Composer -- Composition Tests

Full-document mode vs fragment mode, injection points, stripping of
external references to the entry files, the script exception guard, and
determinism.
"""

import base64

from engine.kernel.preview import (
    compose_preview,
    guard_script,
    is_full_document,
    preview_data_uri,
    strip_entry_references,
)


CSS = "body{color:red}"
JS = "console.log(1)"


# ============================================================================
# Helpers
# ============================================================================


def assert_contains(html, *fragments):
    for fragment in fragments:
        assert fragment in html, f"Expected to find {fragment!r} in composed HTML.\nGot:\n{html[:2000]}"


def assert_not_contains(html, *fragments):
    for fragment in fragments:
        assert fragment not in html, f"Did NOT expect to find {fragment!r} in composed HTML."


def assert_before(html, first, second):
    pos_a = html.find(first)
    pos_b = html.find(second)
    assert pos_a != -1, f"{first!r} not found"
    assert pos_b != -1, f"{second!r} not found"
    assert pos_a < pos_b, f"Expected {first!r} before {second!r}"


# ============================================================================
# Mode detection
# ============================================================================


class TestModeDetection:
    def test_doctype_is_full_document(self):
        assert is_full_document("<!DOCTYPE html><p>x</p>")

    def test_lowercase_doctype_is_full_document(self):
        assert is_full_document("<!doctype html>")

    def test_html_tag_is_full_document(self):
        assert is_full_document('<html lang="en"><body></body></html>')
        assert is_full_document("<html><body></body></html>")

    def test_fragment(self):
        assert not is_full_document("<p>hi</p>")
        assert not is_full_document("<header>not html</header>")


# ============================================================================
# Full-document mode
# ============================================================================


class TestFullDocument:
    def test_style_before_head_close_and_script_before_body_close(self):
        html = "<!DOCTYPE html><html><head></head><body></body></html>"
        out = compose_preview(html, CSS, JS)
        assert_contains(out, "<style>body{color:red}</style></head>")
        assert_contains(out, guard_script(JS) + "</body>")

    def test_style_before_body_when_no_head(self):
        html = "<!DOCTYPE html><html><body><p>x</p></body></html>"
        out = compose_preview(html, CSS, "")
        assert_contains(out, "<style>body{color:red}</style><body>")

    def test_style_after_html_open_when_no_head_or_body(self):
        out = compose_preview("<html><p>x</p></html>", CSS, "")
        assert_contains(out, "<html><style>body{color:red}</style><p>x</p>")

    def test_script_appended_when_no_body_close(self):
        html = "<!DOCTYPE html><html><head></head><body><p>x</p>"
        out = compose_preview(html, "", JS)
        assert out.endswith(guard_script(JS))

    def test_script_goes_before_last_body_close(self):
        html = "<!DOCTYPE html><body><pre>&lt;/body&gt; </body></pre></body>"
        out = compose_preview(html, "", JS)
        assert out.endswith(guard_script(JS) + "</body>")

    def test_empty_css_and_js_inject_nothing(self):
        html = "<!DOCTYPE html><html><head></head><body></body></html>"
        assert compose_preview(html, "", "") == html

    def test_markup_preserved(self):
        html = "<!DOCTYPE html><html><head><title>T</title></head><body><h1>Hello</h1></body></html>"
        out = compose_preview(html, CSS, JS)
        assert_contains(out, "<title>T</title>", "<h1>Hello</h1>")
        assert_before(out, "<title>T</title>", "<style>")
        assert_before(out, "<h1>Hello</h1>", "<script>")

    def test_linked_stylesheet_replaced_by_inline(self):
        html = (
            '<!DOCTYPE html><html><head><link rel="stylesheet" href="styles.css"></head>'
            "<body></body></html>"
        )
        out = compose_preview(html, CSS, "")
        assert_not_contains(out, "<link")
        assert out.count("<style>") == 1

    def test_script_src_replaced_by_inline(self):
        html = '<!DOCTYPE html><html><head></head><body><script src="script.js"></script></body></html>'
        out = compose_preview(html, "", JS)
        assert_not_contains(out, 'src="script.js"')
        assert out.count("<script>") == 1

    def test_unrelated_links_and_scripts_kept(self):
        html = (
            '<!DOCTYPE html><html><head><link rel="stylesheet" href="theme.css">'
            '<script src="https://cdn.example.com/lib.js"></script></head><body></body></html>'
        )
        out = compose_preview(html, CSS, JS)
        assert_contains(out, 'href="theme.css"', 'src="https://cdn.example.com/lib.js"')

    def test_closing_tag_in_user_code_is_escaped(self):
        out = compose_preview("<!DOCTYPE html><body></body>", "", "var s = '</script>';")
        assert_contains(out, "var s = '<\\/script>';")


# ============================================================================
# Fragment mode
# ============================================================================


class TestFragment:
    def test_synthesized_document(self):
        out = compose_preview("<p>hi</p>", CSS, JS)
        assert out.startswith("<!DOCTYPE html>")
        assert_contains(
            out,
            '<meta charset="UTF-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
            "box-sizing: border-box",
            guard_script(JS),
        )
        assert_before(out, "<style>", CSS)
        assert_before(out, CSS, "</style>")
        assert_before(out, "<body>", "<p>hi</p>")
        assert_before(out, "<p>hi</p>", "</body>")

    def test_reset_precedes_user_css(self):
        out = compose_preview("<p>hi</p>", CSS, "")
        assert_before(out, "box-sizing: border-box", CSS)

    def test_script_after_markup(self):
        out = compose_preview("<p>hi</p>", "", JS)
        assert_before(out, "<p>hi</p>", guard_script(JS))

    def test_empty_markup_still_a_document(self):
        out = compose_preview("", "", "")
        assert_contains(out, "<html", "<head>", "<body>", "</html>")
        assert_not_contains(out, "<script>")


# ============================================================================
# Guard, determinism, serialization
# ============================================================================


class TestGuardAndOutput:
    def test_guard_wraps_in_try_catch(self):
        tag = guard_script(JS)
        assert tag.startswith("<script>try{")
        assert "catch(e){console.error('Preview Error:',e);}" in tag
        assert tag.endswith("</script>")

    def test_trailing_line_comment_does_not_swallow_catch(self):
        tag = guard_script("run() // done")
        assert "// done\n}catch" in tag

    def test_deterministic(self):
        assert compose_preview("<p>hi</p>", CSS, JS) == compose_preview("<p>hi</p>", CSS, JS)

    def test_strip_handles_relative_prefix_and_quotes(self):
        html = "<link href='./style.css' rel=stylesheet><script src=\"/app.js\"></script>"
        assert strip_entry_references(html) == ""

    def test_data_uri_round_trips(self):
        doc = compose_preview("<p>é</p>")
        uri = preview_data_uri(doc)
        assert uri.startswith("data:text/html;charset=utf-8;base64,")
        assert base64.b64decode(uri.split(",", 1)[1]).decode("utf-8") == doc
