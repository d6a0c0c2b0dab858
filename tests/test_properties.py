"""Tests for the properties reader/writer."""

from __future__ import annotations

from pathlib import Path

import pytest

from android_location.core.properties import parse_properties, read_properties, store_properties


class TestParseProperties:
    def test_comments_and_blank_lines_skipped(self) -> None:
        text = "# comment\n! another\n\nkey=value\n"
        assert parse_properties(text) == {"key": "value"}

    def test_separators(self) -> None:
        text = "a=1\nb: 2\nc 3\nd = 4\n  e=5"
        assert parse_properties(text) == {"a": "1", "b": "2", "c": "3", "d": "4", "e": "5"}

    def test_value_keeps_later_separators(self) -> None:
        assert parse_properties("url=http://host:80/a=b") == {"url": "http://host:80/a=b"}

    def test_escapes(self) -> None:
        text = "path=C\\:\\\\sdk\\\\skins\nname=caf\\u00e9\ntab=a\\tb\nmy\\ key=v"
        assert parse_properties(text) == {
            "path": "C:\\sdk\\skins",
            "name": "café",
            "tab": "a\tb",
            "my key": "v",
        }

    def test_line_continuation(self) -> None:
        text = "list=one,\\\n    two,\\\n    three\nnext=x"
        assert parse_properties(text) == {"list": "one,two,three", "next": "x"}

    def test_even_backslashes_do_not_continue(self) -> None:
        text = "a=dir\\\\\nb=2"
        assert parse_properties(text) == {"a": "dir\\", "b": "2"}

    def test_empty_value(self) -> None:
        assert parse_properties("empty=\nbare") == {"empty": "", "bare": ""}

    def test_later_key_wins(self) -> None:
        assert parse_properties("k=1\nk=2") == {"k": "2"}


class TestReadStore:
    def test_read_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert read_properties(tmp_path / "missing.ini") == {}

    def test_store_writes_comment_header(self, tmp_path: Path) -> None:
        path = tmp_path / "sdk.info"
        store_properties(path, {"SDK_LOCATION": "/opt/sdk"}, "Do not modify!")
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "#Do not modify!"
        assert lines[1].startswith("#")
        assert lines[2] == "SDK_LOCATION=/opt/sdk"

    def test_store_escapes_special_characters(self, tmp_path: Path) -> None:
        path = tmp_path / "sdk.info"
        values = {"SDK_LOCATION": "C:\\Android\\sdk", "odd key": " #lead"}
        store_properties(path, values)
        text = path.read_text(encoding="utf-8")
        assert "SDK_LOCATION=C\\:\\\\Android\\\\sdk" in text
        assert read_properties(path) == values

    def test_undecodable_bytes_survive_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "sdk.info"
        values = {"SDK_LOCATION": "/opt/sdk\udcff"}
        store_properties(path, values)
        assert b"/opt/sdk\xff" in path.read_bytes()
        assert read_properties(path) == values

    def test_unencodable_value_leaves_no_file(self, tmp_path: Path) -> None:
        path = tmp_path / "sdk.info"
        with pytest.raises(UnicodeEncodeError):
            store_properties(path, {"SDK_LOCATION": "/opt/sdk\ud800"})
        assert not path.exists()
