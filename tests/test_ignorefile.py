"""Tests for ignorefile module — ignore file loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from ignorescan import IgnoreFileError
from ignorescan.ignorefile import DEFAULT_IGNORE_FILE, load_ignore_lines
from ignorescan.scanner import scan_directory


class TestLoadIgnoreLines:
    def test_missing_file_returns_none(self, tmp_path: Path) -> None:
        assert load_ignore_lines(tmp_path) is None

    def test_nonexistent_root_returns_none(self, tmp_path: Path) -> None:
        assert load_ignore_lines(tmp_path / "nonexistent") is None

    @pytest.mark.parametrize(
        ("content", "expected"),
        [
            ("lib\n*.md\n", ["lib", "*.md"]),
            ("lib\r\n!README.md", ["lib", "!README.md"]),
            ("", []),
            ("# comment\n\n", ["# comment", ""]),
        ],
    )
    def test_returns_raw_lines(self, tmp_path: Path, content: str, expected: list[str]) -> None:
        (tmp_path / DEFAULT_IGNORE_FILE).write_bytes(content.encode("utf-8"))
        assert load_ignore_lines(tmp_path) == expected

    def test_bom_is_left_for_normalization(self, tmp_path: Path) -> None:
        (tmp_path / DEFAULT_IGNORE_FILE).write_bytes(b"\xef\xbb\xbflib\n")
        assert load_ignore_lines(tmp_path) == ["\ufefflib"]

    def test_custom_name(self, tmp_path: Path) -> None:
        (tmp_path / ".gitignore").write_text("*.pyc\n")
        assert load_ignore_lines(tmp_path, ".gitignore") == ["*.pyc"]
        assert load_ignore_lines(tmp_path) is None


class TestIgnoreFileErrors:
    def test_directory_in_place_of_file(self, tmp_path: Path) -> None:
        (tmp_path / DEFAULT_IGNORE_FILE).mkdir()
        with pytest.raises(IgnoreFileError) as exc_info:
            load_ignore_lines(tmp_path)
        assert exc_info.value.path == tmp_path / DEFAULT_IGNORE_FILE

    def test_directory_error_names_file(self, tmp_path: Path) -> None:
        (tmp_path / DEFAULT_IGNORE_FILE).mkdir()
        with pytest.raises(IgnoreFileError, match="cannot read ignore file"):
            load_ignore_lines(tmp_path)


class TestNonUtf8IgnoreFile:
    def test_undecodable_bytes_are_kept(self, tmp_path: Path) -> None:
        (tmp_path / DEFAULT_IGNORE_FILE).write_bytes(b"lib\n\xff\xfe\n*.log\n")
        assert load_ignore_lines(tmp_path) == ["lib", "\udcff\udcfe", "*.log"]

    def test_scan_still_applies_patterns(self, tmp_path: Path) -> None:
        (tmp_path / DEFAULT_IGNORE_FILE).write_bytes(b"caf\xe9\n*.log\n")
        (tmp_path / "a.log").write_text("log")
        (tmp_path / "b.txt").write_text("txt")
        assert scan_directory(tmp_path) == [DEFAULT_IGNORE_FILE, "b.txt"]
