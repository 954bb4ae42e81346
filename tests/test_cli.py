from __future__ import annotations

import io
import json
from pathlib import Path

import pytest
import yaml

from json2zig.cli import build_parser, main as cli_main


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_parser_maps_short_flags() -> None:
    args = build_parser().parse_args(["-i", "u32", "-s", "String", "-a", "Value", "x.json"])
    assert args.integer == "u32"
    assert args.string == "String"
    assert args.any == "Value"
    assert args.files == ["x.json"]
    assert args.format == "zig"


def test_renders_file_to_stdout(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path / "in.json", '{"id": 1, "tags": ["a"]}')
    assert cli_main([str(path)]) == 0
    out = capsys.readouterr().out
    assert out == "struct {\n    id: i64,\n    tags: [][]const u8,\n}"


def test_type_overrides_and_name(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path / "in.json", '{"id": 1, "ratio": 0.5, "x": [1, "a"]}')
    assert cli_main([str(path), "-i", "u32", "--float", "f32", "-a", "Value", "-n", "Record"]) == 0
    out = capsys.readouterr().out
    assert out == "pub const Record = struct {\n    id: u32,\n    ratio: f32,\n    x: []Value,\n};\n"


def test_reads_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b"[null, true]")))
    assert cli_main([]) == 0
    assert capsys.readouterr().out == "[]?bool"


def test_multiple_files_are_merged(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    first = _write(tmp_path / "a.json", '{"a": 1}')
    second = _write(tmp_path / "b.json", '{"a": 2, "b": "x"}')
    assert cli_main([str(first), str(second)]) == 0
    assert capsys.readouterr().out == "struct {\n    a: i64,\n    b: ?[]const u8,\n}"


def test_items_mode_infers_record_type(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path / "records.json", '[{"id": 1}, {"id": 2, "note": null}]')
    assert cli_main([str(path), "--items"]) == 0
    captured = capsys.readouterr()
    assert captured.out == "struct {\n    id: i64,\n    note: ?UNKNOWN,\n}"
    assert "Merged 2 items" in captured.err


def test_yaml_schema_dump_keeps_ranges(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path / "in.json", '{"a": [1, 2.5]}')
    assert cli_main([str(path), "--format", "yaml"]) == 0
    schema = yaml.safe_load(capsys.readouterr().out)
    assert schema["type"] == "object"
    items = schema["fields"]["a"]["items"]
    assert items == {"type": "float", "min": 1.0, "max": 2.5}


def test_json_schema_dump(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path / "in.json", '["ab", "abcd"]')
    assert cli_main([str(path), "--format", "json"]) == 0
    schema = json.loads(capsys.readouterr().out)
    assert schema == {
        "type": "array",
        "min_len": 2,
        "max_len": 2,
        "items": {"type": "string", "min_len": 2, "max_len": 4},
    }


def test_output_file(tmp_path: Path) -> None:
    path = _write(tmp_path / "in.json", "[1]")
    out_path = tmp_path / "out.zig"
    assert cli_main([str(path), "-o", str(out_path)]) == 0
    assert out_path.read_text(encoding="utf-8") == "[]i64"


def test_malformed_input_fails(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path / "bad.json", '{"a": ')
    assert cli_main([str(path)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Error" in captured.err


def test_missing_file_fails(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main([str(tmp_path / "nope.json")]) == 1
    assert "File not found" in capsys.readouterr().err


def test_empty_name_is_rejected(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path / "in.json", "1")
    assert cli_main([str(path), "--name", ""]) == 1
    assert "--name" in capsys.readouterr().err


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main(["--version"]) == 0
    assert "json2zig version" in capsys.readouterr().err
