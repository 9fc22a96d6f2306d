import pytest

from mhtmlextractor.core.content_types import extension_for, normalize_content_type


def test_normalize_is_idempotent_for_plain_types() -> None:
    assert normalize_content_type("text/css") == "text/css"
    assert normalize_content_type(normalize_content_type("text/css")) == "text/css"


def test_normalize_strips_parameters_and_lowercases() -> None:
    assert normalize_content_type("TEXT/CSS; charset=utf-8") == "text/css"
    assert normalize_content_type(" Image/PNG ;name=logo.png") == "image/png"


@pytest.mark.parametrize("raw", ["", None, "   ", ";charset=utf-8"])
def test_normalize_defaults_to_octet_stream(raw) -> None:
    assert normalize_content_type(raw) == "application/octet-stream"


@pytest.mark.parametrize(
    ("kind", "extension"),
    [
        ("image/jpeg", ".jpg"),
        ("image/png", ".png"),
        ("image/webp", ".webp"),
        ("image/gif", ".gif"),
        ("text/css", ".css"),
        ("text/javascript", ".js"),
        ("application/javascript", ".js"),
        ("application/json", ".json"),
        ("font/ttf", ".ttf"),
        ("font/otf", ".otf"),
        ("font/woff", ".woff"),
        ("font/woff2", ".woff2"),
        ("text/plain", ".txt"),
        ("text/html", ".html"),
    ],
)
def test_extension_for_known_types(kind: str, extension: str) -> None:
    assert extension_for(kind) == extension


def test_extension_for_unknown_type_falls_back_to_bin() -> None:
    assert extension_for("image/svg+xml") == ".bin"
    assert extension_for("application/octet-stream") == ".bin"
    assert extension_for("") == ".bin"
