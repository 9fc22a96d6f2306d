from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console

from mhtmlextractor.application.services.archive_service import ArchiveService
from mhtmlextractor.core.config import AppConfig


@dataclass(slots=True)
class CLIContext:
    config: AppConfig
    console: Console
    service: ArchiveService
