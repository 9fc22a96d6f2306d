from __future__ import annotations

from pathlib import Path
from typing import Iterable

from mhtmlextractor.application.services.extraction_service import ResourceExtractor
from mhtmlextractor.core.config import AppConfig, default_output_dir
from mhtmlextractor.domain.models.resource import ParseResult
from mhtmlextractor.infrastructure.mhtml.decoder import MhtmlDecoder


class ArchiveService:
    """Entry point the shells call: parse an archive, read its HTML, extract files."""

    def __init__(
        self,
        config: AppConfig | None = None,
        decoder: MhtmlDecoder | None = None,
        extractor: ResourceExtractor | None = None,
    ) -> None:
        self.config = config or AppConfig()
        self.decoder = decoder or MhtmlDecoder(self.config)
        self.extractor = extractor or ResourceExtractor()

    def parse(self, file_path: Path, fetch_external: bool = False) -> ParseResult:
        return self.decoder.parse(Path(file_path), fetch_external=fetch_external)

    @staticmethod
    def get_html_content(result: ParseResult) -> str:
        return result.html_content

    def extract_resources(
        self,
        result: ParseResult,
        output_dir: Path,
        selected_indices: Iterable[int],
    ) -> list[Path]:
        return self.extractor.extract(result.resources, Path(output_dir), selected_indices)

    @staticmethod
    def default_output_dir(file_path: Path) -> Path:
        return default_output_dir(Path(file_path))
