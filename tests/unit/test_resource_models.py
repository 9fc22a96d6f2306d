from pathlib import Path

import pytest

from mhtmlextractor.core.errors import InvalidIndexError
from mhtmlextractor.domain.models.resource import ParseResult, Resource, ResourceOrigin, ResourceSelection


def _result(count: int) -> ParseResult:
    resources = tuple(
        Resource(kind="text/plain", filename=f"r{i}.txt", payload=b"x" * i, origin=ResourceOrigin.EMBEDDED)
        for i in range(count)
    )
    return ParseResult(source_path=Path("page.mhtml"), resources=resources)


def test_resource_size_tracks_payload() -> None:
    resource = Resource(kind="image/png", filename="a.png", payload=bytearray(b"abc"), origin="embedded")
    assert isinstance(resource.payload, bytes)
    assert resource.size == 3


def test_resource_rejects_unknown_origin() -> None:
    with pytest.raises(ValueError):
        Resource(kind="image/png", filename="a.png", payload=b"", origin="somewhere")


def test_resource_is_immutable() -> None:
    resource = Resource(kind="image/png", filename="a.png", payload=b"", origin="inline")
    with pytest.raises(AttributeError):
        resource.filename = "b.png"  # type: ignore[misc]


def test_selection_starts_full_and_toggles() -> None:
    selection = ResourceSelection.all_of(_result(3))
    assert selection.indices() == [0, 1, 2]

    assert selection.toggle(1) is False
    assert selection.indices() == [0, 2]
    assert selection.toggle(1) is True
    assert selection.is_selected(1)


def test_toggle_all_mirrors_select_all_button() -> None:
    selection = ResourceSelection.all_of(_result(2))

    assert selection.toggle_all() is False
    assert selection.indices() == []
    assert selection.toggle_all() is True
    assert selection.indices() == [0, 1]

    selection.toggle(0)
    assert selection.toggle_all() is True
    assert selection.indices() == [0, 1]


def test_selection_rejects_out_of_range_index() -> None:
    selection = ResourceSelection.all_of(_result(2))
    with pytest.raises(InvalidIndexError):
        selection.toggle(2)


def test_empty_result_selection() -> None:
    selection = ResourceSelection.all_of(_result(0))
    assert selection.toggle_all() is True
    assert selection.indices() == []
