"""Memory analysis and stale-file archival for one workspace.

Statistics are always computed over every file under `memory/`. Archival
moves files older than the cutoff into `memory/archive/`, mirroring their
relative path. Moves are not transactional: a hard failure stops the
workspace's archival and the files already moved stay moved.
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from clawops.memory.scanner import FileRecord, collect_files

if TYPE_CHECKING:
    from clawops.config import Workspace

logger = logging.getLogger(__name__)

MEMORY_DIR = "memory"
ARCHIVE_DIR = "archive"
MAX_AGE_DAYS = 30
DAY_MS = 24 * 60 * 60 * 1000

DAILY_LOG_RE = re.compile(r"^\d{4}-\d{2}-\d{2}\.md$")


class ArchiveError(Exception):
    """Archival aborted part way through a workspace."""

    def __init__(self, moved: int, source: Path, cause: OSError) -> None:
        super().__init__(f"archiving {source} failed after {moved} move(s): {cause}")
        self.moved = moved
        self.source = source
        self.cause = cause


@dataclass
class AnalysisResult:
    """Per-workspace memory statistics for one run."""

    workspace: Workspace
    memory_path: Path
    exists: bool
    daily_log_count: int = 0
    older_than_30_days_count: int = 0
    total_size_bytes: int = 0
    oldest_date: int | None = None
    newest_date: int | None = None
    archived_count: int = 0
    file_count: int = 0
    error: str | None = None

    @classmethod
    def missing(cls, workspace: Workspace, memory_path: Path) -> AnalysisResult:
        return cls(workspace=workspace, memory_path=memory_path, exists=False)

    @property
    def ok(self) -> bool:
        return self.error is None


def compute_cutoff(now_ms: int | None = None) -> int:
    """Return the instant (epoch ms) before which a file counts as stale."""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return now_ms - MAX_AGE_DAYS * DAY_MS


def is_daily_log(name: str) -> bool:
    return DAILY_LOG_RE.match(name) is not None


def is_archived(relative_path: str) -> bool:
    """True if the path is the archive directory itself or anything inside it."""
    return relative_path == ARCHIVE_DIR or relative_path.startswith(f"{ARCHIVE_DIR}/")


def partition(
    files: list[FileRecord], cutoff: int
) -> tuple[list[FileRecord], list[FileRecord]]:
    """Split files into (current, stale). A file exactly at the cutoff is current."""
    current: list[FileRecord] = []
    stale: list[FileRecord] = []
    for f in files:
        (current if f.mtime_ms >= cutoff else stale).append(f)
    return current, stale


def summarize(
    workspace: Workspace,
    memory_path: Path,
    files: list[FileRecord],
    cutoff: int,
) -> AnalysisResult:
    """Aggregate statistics over the full file set."""
    _, stale = partition(files, cutoff)
    mtimes = [f.mtime_ms for f in files]
    return AnalysisResult(
        workspace=workspace,
        memory_path=memory_path,
        exists=True,
        daily_log_count=sum(1 for f in files if is_daily_log(f.name)),
        older_than_30_days_count=len(stale),
        total_size_bytes=sum(f.size for f in files),
        oldest_date=min(mtimes) if mtimes else None,
        newest_date=max(mtimes) if mtimes else None,
        file_count=len(files),
    )


def archive_files(memory_path: Path, stale: list[FileRecord]) -> int:
    """Move stale files into memory/archive/, keeping their relative paths.

    Returns the number of files moved. Files already under archive/ are
    skipped, and a source that has vanished is skipped without counting.
    Any other OSError aborts the remaining moves and raises ArchiveError.
    Existing destination files are never overwritten.
    """
    archive_dir = memory_path / ARCHIVE_DIR
    moved = 0
    try:
        archive_dir.mkdir(exist_ok=True)
    except OSError as e:
        raise ArchiveError(moved, archive_dir, e) from e

    for f in stale:
        if is_archived(f.relative_path):
            continue

        destination = archive_dir.joinpath(*f.relative_path.split("/"))
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            if destination.exists() or destination.is_symlink():
                if not f.path.exists():
                    logger.debug("Already relocated: %s", f.relative_path)
                    continue
                raise FileExistsError(f"destination already exists: {destination}")
            os.rename(f.path, destination)
        except FileNotFoundError as e:
            if f.path.exists():
                raise ArchiveError(moved, f.path, e) from e
            logger.debug("Source vanished before move: %s", f.relative_path)
            continue
        except OSError as e:
            raise ArchiveError(moved, f.path, e) from e

        moved += 1
        logger.debug("Archived %s", f.relative_path)

    return moved


def _scan(memory_path: Path) -> list[FileRecord] | None:
    try:
        return collect_files(memory_path)
    except (FileNotFoundError, NotADirectoryError):
        if memory_path.is_dir():
            raise  # something vanished below the root mid-walk
        return None


async def analyze_workspace(
    workspace: Workspace,
    cutoff: int,
    *,
    archive: bool = False,
) -> AnalysisResult:
    """Analyze one workspace's memory subtree, archiving stale files if asked."""
    memory_path = workspace.root / MEMORY_DIR
    loop = asyncio.get_running_loop()

    files = await loop.run_in_executor(None, _scan, memory_path)
    if files is None:
        logger.info("%s: no memory directory at %s", workspace.name, memory_path)
        return AnalysisResult.missing(workspace, memory_path)

    result = summarize(workspace, memory_path, files, cutoff)
    logger.info(
        "%s: %d files, %d older than %d days",
        workspace.name,
        result.file_count,
        result.older_than_30_days_count,
        MAX_AGE_DAYS,
    )

    if not archive:
        return result

    _, stale = partition(files, cutoff)
    try:
        result.archived_count = await loop.run_in_executor(
            None, archive_files, memory_path, stale
        )
    except ArchiveError as e:
        result.archived_count = e.moved
        result.error = str(e)
        logger.error("%s: %s", workspace.name, e)
    else:
        if result.archived_count:
            logger.info("%s: archived %d files", workspace.name, result.archived_count)
    return result
