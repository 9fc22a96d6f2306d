from __future__ import annotations

import base64
from pathlib import Path

BOUNDARY = "----MultipartBoundary--t8QbMZ3dGn4Yv5oLq2WkRr1xEfJhPsUc----"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(64))

PAGE_HTML = (
    "<!DOCTYPE html><html><head><title>Saved page</title>"
    '<link rel="stylesheet" href="style.css">'
    '<script src="https://cdn.example.com/js/app.js?v=3"></script>'
    "</head><body><p>Hello archive</p></body></html>"
)


def mhtml_bytes(
    parts: list[tuple[dict[str, str], bytes]],
    *,
    boundary: str = BOUNDARY,
    newline: str = "\r\n",
    closed: bool = True,
) -> bytes:
    envelope = [
        "From: <Saved by Blink>",
        "Snapshot-Content-Location: https://example.com/page",
        "Subject: Saved page",
        "MIME-Version: 1.0",
        f'Content-Type: multipart/related; type="text/html"; boundary="{boundary}"',
        "",
        "This is a multi-part message in MIME format.",
    ]
    nl = newline.encode("ascii")
    out = newline.join(envelope).encode("ascii") + nl
    for headers, body in parts:
        out += f"--{boundary}".encode("ascii") + nl
        for name, value in headers.items():
            out += f"{name}: {value}".encode("ascii") + nl
        out += nl + body + nl
    if closed:
        out += f"--{boundary}--".encode("ascii") + nl
    return out


def html_part(html: str = PAGE_HTML, location: str = "https://example.com/page") -> tuple[dict[str, str], bytes]:
    return (
        {
            "Content-Type": "text/html; charset=utf-8",
            "Content-Transfer-Encoding": "8bit",
            "Content-Location": location,
        },
        html.encode("utf-8"),
    )


def png_part(location: str = "https://example.com/logo.png") -> tuple[dict[str, str], bytes]:
    return (
        {
            "Content-Type": "image/png",
            "Content-Transfer-Encoding": "base64",
            "Content-Location": location,
        },
        base64.b64encode(PNG_BYTES),
    )


def css_part(css: str = "body { color: #333; }") -> tuple[dict[str, str], bytes]:
    return (
        {
            "Content-Type": "TEXT/CSS; charset=utf-8",
            "Content-Location": "https://example.com/style.css",
        },
        css.encode("utf-8"),
    )


def write_sample_archive(tmp_path: Path, name: str = "page.mhtml") -> Path:
    path = tmp_path / name
    path.write_bytes(mhtml_bytes([html_part(), png_part(), css_part()]))
    return path
