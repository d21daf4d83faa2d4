"""Tests for memory subtree enumeration."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from clawops.memory.scanner import FileRecord, collect_files


def _write(path: Path, content: str, mtime_ms: int | None = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    if mtime_ms is not None:
        ns = mtime_ms * 1_000_000
        os.utime(path, ns=(ns, ns))
    return path


class TestCollectFiles:
    def test_nested_files(self, tmp_path: Path):
        _write(tmp_path / "2026-01-01.md", "a")
        _write(tmp_path / "notes" / "ideas.md", "bb")
        _write(tmp_path / "notes" / "deep" / "er" / "x.txt", "ccc")

        files = collect_files(tmp_path)
        assert sorted(f.relative_path for f in files) == [
            "2026-01-01.md",
            "notes/deep/er/x.txt",
            "notes/ideas.md",
        ]

    def test_every_file_once(self, tmp_path: Path):
        for i in range(20):
            _write(tmp_path / f"d{i % 4}" / f"f{i}.md", "x")
        files = collect_files(tmp_path)
        paths = [f.relative_path for f in files]
        assert len(paths) == 20
        assert len(set(paths)) == 20

    def test_record_fields(self, tmp_path: Path):
        path = _write(tmp_path / "sub" / "log.md", "hello", mtime_ms=1_700_000_000_123)
        [record] = collect_files(tmp_path)
        assert record == FileRecord(
            path=path,
            relative_path="sub/log.md",
            mtime_ms=1_700_000_000_123,
            size=5,
        )
        assert record.name == "log.md"

    def test_zero_byte_file(self, tmp_path: Path):
        _write(tmp_path / "empty.md", "")
        [record] = collect_files(tmp_path)
        assert record.size == 0

    def test_directories_not_listed(self, tmp_path: Path):
        (tmp_path / "only" / "dirs").mkdir(parents=True)
        assert collect_files(tmp_path) == []

    def test_nothing_skipped(self, tmp_path: Path):
        _write(tmp_path / ".git" / "HEAD", "ref")
        _write(tmp_path / "node_modules" / "pkg.js", "x")
        _write(tmp_path / ".hidden.md", "x")
        names = {f.relative_path for f in collect_files(tmp_path)}
        assert names == {".git/HEAD", "node_modules/pkg.js", ".hidden.md"}

    def test_missing_dir(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            collect_files(tmp_path / "missing")

    def test_not_a_directory(self, tmp_path: Path):
        path = _write(tmp_path / "memory", "I am a file")
        with pytest.raises(NotADirectoryError):
            collect_files(path)

    def test_deep_tree(self, tmp_path: Path):
        deep = tmp_path
        for i in range(60):
            deep = deep / f"l{i}"
        _write(deep / "bottom.md", "x")
        [record] = collect_files(tmp_path)
        assert record.relative_path.count("/") == 60
        assert record.name == "bottom.md"

    def test_directory_symlink_not_followed(self, tmp_path: Path):
        _write(tmp_path / "notes" / "2024-01-01.md", "x")
        (tmp_path / "alias").symlink_to(tmp_path / "notes", target_is_directory=True)
        assert [f.relative_path for f in collect_files(tmp_path)] == ["notes/2024-01-01.md"]

    def test_symlink_loop_terminates(self, tmp_path: Path):
        _write(tmp_path / "2024-01-01.md", "x")
        (tmp_path / "loop").symlink_to(tmp_path, target_is_directory=True)
        assert [f.relative_path for f in collect_files(tmp_path)] == ["2024-01-01.md"]

    def test_file_symlink_skipped(self, tmp_path: Path):
        target = _write(tmp_path / "real.md", "x")
        (tmp_path / "link.md").symlink_to(target)
        assert [f.relative_path for f in collect_files(tmp_path)] == ["real.md"]
