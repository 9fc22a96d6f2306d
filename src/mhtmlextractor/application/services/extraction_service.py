from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from mhtmlextractor.core.errors import ArchiveIOError, InvalidIndexError
from mhtmlextractor.core.files import ensure_directory, next_free_path
from mhtmlextractor.domain.models.resource import Resource

logger = logging.getLogger(__name__)


class ResourceExtractor:
    """Writes a selected subset of decoded resources into a directory.

    Indices are validated before the filesystem is touched. Existing files
    are never overwritten: a clashing name gets ``_1``, ``_2``, ... inserted
    before its extension. The exists-then-write sequence is not atomic, which
    is fine for a single process writing into its own output directory.
    """

    def extract(
        self,
        resources: Sequence[Resource],
        output_dir: Path,
        selected_indices: Iterable[int],
    ) -> list[Path]:
        indices = self._validated_indices(selected_indices, len(resources))
        if not indices:
            return []

        target_dir = Path(output_dir).expanduser()
        try:
            ensure_directory(target_dir)
        except OSError as exc:
            raise ArchiveIOError(f"Failed to create output directory {target_dir}: {exc}") from exc

        written: list[Path] = []
        for index in indices:
            resource = resources[index]
            output_path = next_free_path(target_dir / resource.filename)
            try:
                output_path.write_bytes(resource.payload)
            except OSError as exc:
                raise ArchiveIOError(f"Failed to write {output_path}: {exc}") from exc
            logger.debug("Wrote resource %d (%s, %d bytes) to %s", index, resource.kind, resource.size, output_path)
            written.append(output_path)

        logger.info("Extracted %d resources to %s", len(written), target_dir)
        return written

    @staticmethod
    def _validated_indices(selected_indices: Iterable[int], total: int) -> list[int]:
        unique: set[int] = set()
        for idx in selected_indices:
            if isinstance(idx, bool) or not isinstance(idx, int):
                raise InvalidIndexError(f"Invalid selected index: {idx!r}")
            if idx < 0 or idx >= total:
                raise InvalidIndexError(f"Invalid selected index: {idx} (resources: {total})")
            unique.add(idx)
        return sorted(unique)
