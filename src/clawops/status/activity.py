"""Last-activity scan over a whole workspace."""

from __future__ import annotations

import os
from pathlib import Path

SKIP_DIRS = frozenset({".git", "node_modules"})


def last_activity(root: Path, skip_dirs: frozenset[str] = SKIP_DIRS) -> int | None:
    """Return the newest file mtime (epoch ms) under root, or None.

    Directories named in skip_dirs are not descended into. None when root
    does not exist or holds no files.
    """
    if not root.is_dir():
        return None

    latest: int | None = None
    stack = [os.fspath(root)]
    while stack:
        with os.scandir(stack.pop()) as entries:
            for entry in entries:
                if entry.is_dir(follow_symlinks=False):
                    if entry.name not in skip_dirs:
                        stack.append(entry.path)
                    continue
                try:
                    mtime = entry.stat().st_mtime_ns // 1_000_000
                except FileNotFoundError:
                    continue  # dangling symlink

                if latest is None or mtime > latest:
                    latest = mtime
    return latest
