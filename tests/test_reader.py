from __future__ import annotations

import io
from decimal import Decimal
from pathlib import Path

import pytest

from json2zig import JsonSource, MalformedJsonError, loads, read_document


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_loads_keeps_integers_and_decimals_apart() -> None:
    doc = loads('{"i": 3, "f": 1.25, "s": "x", "n": null, "b": false}')
    assert doc == {"i": 3, "f": Decimal("1.25"), "s": "x", "n": None, "b": False}
    assert isinstance(doc["i"], int)


def test_loads_scalar_root() -> None:
    assert loads("7") == 7
    assert loads("null") is None


@pytest.mark.parametrize("text", ['{"a": ', "", "   ", "[1, 2,]", '{"a": 1} {"b": 2}'])
def test_malformed_documents_are_rejected(text: str) -> None:
    with pytest.raises(MalformedJsonError) as exc_info:
        loads(text, name="broken.json")
    assert exc_info.value.source == "broken.json"
    assert "broken.json" in str(exc_info.value)


def test_read_document_from_binary_stream() -> None:
    assert read_document(io.BytesIO(b'[1, "two"]')) == [1, "two"]


def test_missing_file_raises() -> None:
    with pytest.raises(FileNotFoundError):
        JsonSource(["does/not/exist.json"])


def test_documents_yields_one_root_per_file(tmp_path: Path) -> None:
    first = _write(tmp_path / "a.json", '{"a": 1}')
    second = _write(tmp_path / "b.json", "[true]")
    source = JsonSource([first, second])
    assert list(source.documents()) == [{"a": 1}, [True]]
    assert source.describe() == [str(first), str(second)]


def test_single_path_is_accepted(tmp_path: Path) -> None:
    path = _write(tmp_path / "a.json", "1")
    assert list(JsonSource(path).documents()) == [1]


def test_items_streams_top_level_arrays(tmp_path: Path) -> None:
    first = _write(tmp_path / "a.json", '[{"id": 1}, {"id": 2}]')
    second = _write(tmp_path / "b.json", '[{"id": 3}]')
    items = list(JsonSource([first, second]).items())
    assert items == [{"id": 1}, {"id": 2}, {"id": 3}]


def test_items_of_non_array_root_is_empty(tmp_path: Path) -> None:
    path = _write(tmp_path / "a.json", '{"id": 1}')
    assert list(JsonSource(path).items()) == []


def test_malformed_file_names_the_source(tmp_path: Path) -> None:
    path = _write(tmp_path / "bad.json", '{"a": tru}')
    with pytest.raises(MalformedJsonError) as exc_info:
        list(JsonSource(path).documents())
    assert exc_info.value.source == str(path)


def test_stdin_is_used_without_files() -> None:
    source = JsonSource(stdin=io.BytesIO(b'{"x": "y"}'))
    assert source.describe() == ["<stdin>"]
    assert list(source.documents()) == [{"x": "y"}]
