"""Tests for file collection, JSON reading and CSV serialization."""

import csv
import io
import json
import logging
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from json_csv_flattener import io_utils
from json_csv_flattener.io_utils import (
    collect_json_files,
    read_json_content,
    render_csv,
    write_csv,
)

pytestmark = pytest.mark.unit


def test_collect_json_files_recurses_and_sorts(tmp_path):
    """Nested .json files of any extension case are found in path order."""
    (tmp_path / "b").mkdir()
    (tmp_path / "b" / "deep").mkdir()
    (tmp_path / "b" / "deep" / "z.JSON").write_text("{}", encoding="utf-8")
    (tmp_path / "b" / "a.json").write_text("{}", encoding="utf-8")
    (tmp_path / "a.json").write_text("{}", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")
    (tmp_path / "dir.json").mkdir()

    found = collect_json_files(str(tmp_path))

    assert found == [
        str(tmp_path / "a.json"),
        str(tmp_path / "b" / "a.json"),
        str(tmp_path / "b" / "deep" / "z.JSON"),
    ]


def test_collect_json_files_empty_directory(tmp_path):
    """No matches yields an empty list."""
    assert collect_json_files(str(tmp_path)) == []


def test_read_json_content_from_path_and_stream(tmp_path):
    """Paths, file-like objects and byte streams are all accepted."""
    path = tmp_path / "doc.json"
    path.write_text('{"id": "1"}', encoding="utf-8")

    assert read_json_content(str(path)) == {"id": "1"}
    assert read_json_content(io.StringIO('{"id": "2"}')) == {"id": "2"}
    assert read_json_content(io.BytesIO('{"id": "ü"}'.encode("utf-8"))) == {"id": "ü"}


def test_read_json_content_rejects_missing_input():
    """None is reported as a ValueError."""
    with pytest.raises(ValueError):
        read_json_content(None)


def test_read_json_content_raises_on_bad_json(tmp_path):
    """Malformed documents surface the decoder error."""
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        read_json_content(str(path))


def test_render_csv_quotes_only_when_needed():
    """Commas, quotes and newlines trigger quoting; other values stay bare."""
    rows = [{"id": "1", "timestamp": "t", "url": "u", "Note": 'say "hi", then\nleave'}]
    text = render_csv(rows, ["id", "timestamp", "url", "Note"])
    assert text == 'id,timestamp,url,Note\n1,t,u,"say ""hi"", then\nleave"\n'


def test_render_csv_fills_missing_columns_with_empty_string():
    """Columns absent from a row are written as empty cells."""
    rows = [{"id": "1", "timestamp": "t1", "url": "u1"}, {"id": "2", "timestamp": "t2", "url": "u2", "Foo": "bar"}]
    assert render_csv(rows, ["id", "timestamp", "url", "Foo"]) == (
        "id,timestamp,url,Foo\n1,t1,u1,\n2,t2,u2,bar\n"
    )


@pytest.mark.parametrize("value", ["a,b", 'quote"inside', "line\nbreak", '",\n"', "plain"])
def test_special_values_survive_reparse(value):
    """Standard CSV parsing recovers the original string exactly."""
    text = render_csv([{"id": "1", "timestamp": "", "url": "", "X": value}], ["id", "timestamp", "url", "X"])
    parsed = list(csv.DictReader(io.StringIO(text, newline="")))
    assert parsed[0]["X"] == value


def test_write_csv_overwrites_and_creates_parent(tmp_path):
    """The output file is replaced and missing parent directories are created."""
    destination = tmp_path / "out" / "data.csv"
    destination.parent.mkdir()
    destination.write_text("stale\n", encoding="utf-8")

    write_csv([{"id": "1", "timestamp": "", "url": "é"}], ["id", "timestamp", "url"], str(destination))
    assert destination.read_text(encoding="utf-8") == "id,timestamp,url\n1,,é\n"

    nested = tmp_path / "new" / "dir" / "data.csv"
    write_csv([], ["id", "timestamp", "url"], str(nested))
    assert nested.read_text(encoding="utf-8") == "id,timestamp,url\n"


@pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
def test_read_json_content_rejects_non_standard_constants(tmp_path, constant):
    """NaN and Infinity are not JSON and are reported as ValueError."""
    path = tmp_path / "doc.json"
    path.write_text('{"data": [{"Price": %s}]}' % constant, encoding="utf-8")

    with pytest.raises(ValueError):
        read_json_content(str(path))
    with pytest.raises(ValueError):
        read_json_content(io.StringIO('[%s]' % constant))


def test_collect_json_files_warns_about_unreadable_directories(tmp_path, monkeypatch, caplog):
    """Directories the walk cannot list are logged and the rest is still collected."""
    (tmp_path / "a.json").write_text("{}", encoding="utf-8")
    real_walk = io_utils.os.walk

    def walk_with_error(top, onerror=None):
        onerror(PermissionError(13, "Permission denied", str(tmp_path / "locked")))
        yield from real_walk(top)

    monkeypatch.setattr(io_utils.os, "walk", walk_with_error)

    with caplog.at_level(logging.WARNING, logger="json_csv_flattener.io_utils"):
        found = collect_json_files(str(tmp_path))

    assert found == [str(tmp_path / "a.json")]
    assert any(
        "Cannot read directory" in r.getMessage() and "locked" in r.getMessage()
        for r in caplog.records
    )
