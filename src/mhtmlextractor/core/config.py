from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from mhtmlextractor.core.errors import ConfigurationError

APP_VERSION = "0.1.0"
DEFAULT_FETCH_TIMEOUT_SECONDS = 5.0
DEFAULT_FETCH_WORKERS = 1
DEFAULT_USER_AGENT = f"mhtml-extractor/{APP_VERSION}"
DEFAULT_ID_LENGTH = 8
MIN_ID_LENGTH = 4
MAX_ID_LENGTH = 32


@dataclass(frozen=True)
class AppConfig:
    fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS
    fetch_workers: int = DEFAULT_FETCH_WORKERS
    user_agent: str = DEFAULT_USER_AGENT
    id_length: int = DEFAULT_ID_LENGTH

    def __post_init__(self) -> None:
        if self.fetch_timeout_seconds <= 0:
            raise ConfigurationError(f"Fetch timeout must be positive, got {self.fetch_timeout_seconds}")
        if self.fetch_workers < 1:
            raise ConfigurationError(f"Fetch workers must be at least 1, got {self.fetch_workers}")
        if not MIN_ID_LENGTH <= self.id_length <= MAX_ID_LENGTH:
            raise ConfigurationError(
                f"Identifier length must be between {MIN_ID_LENGTH} and {MAX_ID_LENGTH}, got {self.id_length}"
            )


def load_config(
    *,
    fetch_timeout_seconds: float | None = None,
    fetch_workers: int | None = None,
) -> AppConfig:
    """Build the runtime configuration from ``MHTX_*`` environment variables.

    Explicit keyword arguments (typically CLI options) win over the
    environment. Unparseable environment values fall back to defaults.
    """
    timeout = fetch_timeout_seconds
    if timeout is None:
        timeout = _read_float_env("MHTX_FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT_SECONDS)
    workers = fetch_workers
    if workers is None:
        workers = _read_int_env("MHTX_FETCH_WORKERS", DEFAULT_FETCH_WORKERS)
    user_agent = (os.getenv("MHTX_USER_AGENT") or "").strip() or DEFAULT_USER_AGENT
    id_length = _read_int_env("MHTX_ID_LENGTH", DEFAULT_ID_LENGTH)
    if not MIN_ID_LENGTH <= id_length <= MAX_ID_LENGTH:
        id_length = DEFAULT_ID_LENGTH

    return AppConfig(
        fetch_timeout_seconds=timeout,
        fetch_workers=workers,
        user_agent=user_agent,
        id_length=id_length,
    )


def default_output_dir(archive_path: Path) -> Path:
    """Sibling directory named after the archive, e.g. ``a/page.mhtml`` -> ``a/page``."""
    path = archive_path.expanduser()
    return path.parent / path.stem


def _read_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _read_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default
