"""
Studio Kernel: Sandboxed Renderer host

Builds the host page that embeds a composed preview document in an
isolated frame. Scripts may run inside the frame but it gets no
same-origin access to the host page.

Device presets only change the frame width. They are not part of the
composed document.
"""

from __future__ import annotations

from html import escape as _html_escape

from engine.kernel.errors import ValidationError

DEVICE_WIDTHS: dict[str, str] = {
    "mobile": "375px",
    "tablet": "768px",
    "desktop": "100%",
}

SANDBOX_POLICY = "allow-scripts"


def render_sandbox_frame(document: str, device: str = "desktop", title: str = "Live Preview") -> str:
    """
    Return a host HTML page with the document in a sandboxed iframe.

    Raises:
        ValidationError: unknown device preset
    """
    if device not in DEVICE_WIDTHS:
        raise ValidationError(f"Unknown device preset: {device!r}")

    width = DEVICE_WIDTHS[device]
    srcdoc = _html_escape(document, quote=True)
    safe_title = _html_escape(title)
    return "\n".join(
        [
            "<!DOCTYPE html>",
            '<html lang="en">',
            "<head>",
            '  <meta charset="utf-8">',
            f"  <title>{safe_title}</title>",
            "  <style>",
            "    html, body { margin: 0; height: 100%; background: #f4f4f5; }",
            "    .frame-host { display: flex; justify-content: center; height: 100%; padding: 16px; box-sizing: border-box; }",
            "    iframe { border: 1px solid #e4e4e7; border-radius: 6px; background: #fff; height: 100%; }",
            "  </style>",
            "</head>",
            "<body>",
            f'  <div class="frame-host" data-device="{device}">',
            f'    <iframe title="{safe_title}" sandbox="{SANDBOX_POLICY}" style="width: {width};" srcdoc="{srcdoc}"></iframe>',
            "  </div>",
            "</body>",
            "</html>",
            "",
        ]
    )
