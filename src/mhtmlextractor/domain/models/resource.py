from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from mhtmlextractor.core.errors import InvalidIndexError


class ResourceOrigin:
    EMBEDDED = "embedded"
    INLINE = "inline"
    EXTERNAL = "external"

    ALL = (EMBEDDED, INLINE, EXTERNAL)


@dataclass(frozen=True, slots=True)
class Resource:
    kind: str
    filename: str
    payload: bytes
    origin: str
    location: str | None = None

    def __post_init__(self) -> None:
        if self.origin not in ResourceOrigin.ALL:
            raise ValueError(f"Unknown resource origin: {self.origin}")
        if not isinstance(self.payload, bytes):
            # bytearray/memoryview would let callers mutate the payload after the fact.
            object.__setattr__(self, "payload", bytes(self.payload))

    @property
    def size(self) -> int:
        return len(self.payload)


@dataclass(frozen=True, slots=True)
class ParseResult:
    source_path: Path
    resources: tuple[Resource, ...] = ()
    html_content: str = ""
    skipped_parts: int = 0

    def __len__(self) -> int:
        return len(self.resources)

    def __getitem__(self, index: int) -> Resource:
        return self.resources[index]

    def counts_by_origin(self) -> dict[str, int]:
        counts = Counter(r.origin for r in self.resources)
        return {origin: counts.get(origin, 0) for origin in ResourceOrigin.ALL}


@dataclass(slots=True)
class ResourceSelection:
    """Indices a shell has ticked for one ParseResult.

    Lives beside the result instead of inside it, so toggling a checkbox never
    touches engine-owned data.
    """

    total: int
    selected: set[int] = field(default_factory=set)

    @classmethod
    def all_of(cls, result: ParseResult) -> ResourceSelection:
        return cls(total=len(result), selected=set(range(len(result))))

    def _check(self, index: int) -> None:
        if index < 0 or index >= self.total:
            raise InvalidIndexError(f"Invalid selected index: {index} (resources: {self.total})")

    def is_selected(self, index: int) -> bool:
        return index in self.selected

    def toggle(self, index: int) -> bool:
        self._check(index)
        if index in self.selected:
            self.selected.discard(index)
            return False
        self.selected.add(index)
        return True

    def select_all(self) -> None:
        self.selected = set(range(self.total))

    def clear(self) -> None:
        self.selected = set()

    def toggle_all(self) -> bool:
        if self.total and len(self.selected) == self.total:
            self.clear()
            return False
        self.select_all()
        return True

    def indices(self) -> list[int]:
        return sorted(self.selected)
