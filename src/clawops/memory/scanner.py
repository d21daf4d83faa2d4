"""Recursive file enumeration for a workspace memory subtree."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileRecord:
    """A regular file found under a memory root."""

    path: Path
    relative_path: str  # always "/"-separated
    mtime_ms: int
    size: int

    @property
    def name(self) -> str:
        return self.relative_path.rsplit("/", 1)[-1]


def collect_files(base_dir: Path) -> list[FileRecord]:
    """List every regular file under base_dir, at any depth.

    Symbolic links are not followed: linked files and directories are skipped.
    Raises FileNotFoundError / NotADirectoryError if base_dir is missing or
    is not a directory. No ordering guarantee.
    """
    files: list[FileRecord] = []
    # (absolute dir, relative prefix)
    stack: list[tuple[str, str]] = [(os.fspath(base_dir), "")]

    while stack:
        current, prefix = stack.pop()
        with os.scandir(current) as entries:
            for entry in entries:
                relative = f"{prefix}{entry.name}"
                if entry.is_dir(follow_symlinks=False):
                    stack.append((entry.path, f"{relative}/"))
                elif entry.is_file(follow_symlinks=False):
                    st = entry.stat()
                    files.append(
                        FileRecord(
                            path=Path(entry.path),
                            relative_path=relative,
                            mtime_ms=st.st_mtime_ns // 1_000_000,
                            size=st.st_size,
                        )
                    )

    logger.debug("Collected %d files under %s", len(files), base_dir)
    return files
