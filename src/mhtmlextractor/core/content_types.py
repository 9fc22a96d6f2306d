from __future__ import annotations

DEFAULT_CONTENT_TYPE = "application/octet-stream"
DEFAULT_EXTENSION = ".bin"

_EXTENSIONS: dict[str, str] = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
    "text/css": ".css",
    "text/javascript": ".js",
    "application/javascript": ".js",
    "application/json": ".json",
    "font/ttf": ".ttf",
    "font/otf": ".otf",
    "font/woff": ".woff",
    "font/woff2": ".woff2",
    "text/plain": ".txt",
    "text/html": ".html",
}


def normalize_content_type(raw: str | None) -> str:
    """Lowercase a Content-Type value and drop its parameters."""
    value = str(raw or "").split(";", 1)[0].strip().lower()
    return value or DEFAULT_CONTENT_TYPE


def extension_for(kind: str) -> str:
    return _EXTENSIONS.get(kind, DEFAULT_EXTENSION)
