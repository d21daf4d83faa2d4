"""Tail of the newest daily log in a workspace's memory directory."""

from __future__ import annotations

from pathlib import Path

import frontmatter

from clawops.memory.cleanup import MEMORY_DIR, is_daily_log

NOTES_OK = "ok"
NO_MEMORY_DIR = "no-memory-dir"
NO_MEMORY_FILES = "no-memory-files"
NO_NOTES = "no-notes"


def latest_daily_log(memory_dir: Path) -> Path | None:
    """Newest YYYY-MM-DD.md directly inside memory_dir, by file name."""
    logs = sorted(
        (p for p in memory_dir.iterdir() if p.is_file() and is_daily_log(p.name)),
        key=lambda p: p.name,
        reverse=True,
    )
    return logs[0] if logs else None


def recent_notes(root: Path, limit: int = 3, width: int = 60) -> tuple[str, list[str]]:
    """Return (state, lines): the last `limit` non-empty lines of the newest daily log.

    YAML front matter is dropped before taking lines; each line is cut to
    `width` characters.
    """
    memory_dir = root / MEMORY_DIR
    if not memory_dir.is_dir():
        return NO_MEMORY_DIR, []

    latest = latest_daily_log(memory_dir)
    if latest is None:
        return NO_MEMORY_FILES, []

    text = latest.read_text(encoding="utf-8", errors="replace")
    try:
        body = frontmatter.loads(text).content
    except Exception:
        body = text  # malformed front matter, keep everything
    lines = [line for line in body.strip().splitlines() if line.strip()]
    if not lines:
        return NO_NOTES, []

    return NOTES_OK, [line[:width] for line in lines[-limit:]]
