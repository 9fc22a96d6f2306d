from __future__ import annotations

import uuid

DEFAULT_SHORT_ID_LENGTH = 8


def new_uuid() -> str:
    """Generate a new UUID4 as a string."""
    return str(uuid.uuid4())


def short_id(length: int = DEFAULT_SHORT_ID_LENGTH) -> str:
    """Return the first ``length`` hex characters of a fresh UUID4."""
    return new_uuid().replace("-", "")[:length]
