from __future__ import annotations

import os
import re

from mhtmlextractor.core.ids import DEFAULT_SHORT_ID_LENGTH, short_id

_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9._-]")
_SEPARATORS = {os.sep, "/", "\\"}


def synthesized_name(prefix: str, extension: str = "", id_length: int = DEFAULT_SHORT_ID_LENGTH) -> str:
    return f"{prefix}_{short_id(id_length)}{extension}"


def sanitize_filename(raw: str | None, id_length: int = DEFAULT_SHORT_ID_LENGTH) -> str:
    """Turn an untrusted name into one made only of ``[A-Za-z0-9._-]``.

    Path separators become ``_`` so a declared name can never escape the
    output directory. Names that end up empty, ``.`` or ``..`` are replaced
    by ``resource_<id>``.
    """
    name = str(raw or "")
    for sep in _SEPARATORS:
        name = name.replace(sep, "_")
    name = _UNSAFE_CHARS_RE.sub("_", name)
    if name in {"", ".", ".."}:
        return synthesized_name("resource", id_length=id_length)
    return name
