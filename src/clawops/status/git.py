"""Branch and working-tree summary via the git CLI."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitStatus:
    branch: str
    changes: int

    @property
    def clean(self) -> bool:
        return self.changes == 0


async def _git(root: Path, *args: str) -> str | None:
    """Run a git subcommand in root; None on any failure."""
    try:
        proc = await asyncio.create_subprocess_exec(
            "git",
            *args,
            cwd=str(root),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        logger.debug("git unavailable: %s", e)
        return None

    stdout, stderr = await proc.communicate()
    if proc.returncode != 0:
        logger.debug(
            "git %s failed in %s: %s",
            " ".join(args),
            root,
            stderr.decode("utf-8", errors="replace").strip(),
        )
        return None
    return stdout.decode("utf-8", errors="replace")


async def git_status(root: Path) -> GitStatus | None:
    """Return branch + number of changed paths, or None if root is not a repo."""
    if not (root / ".git").exists():
        return None

    branch = await _git(root, "rev-parse", "--abbrev-ref", "HEAD")
    if branch is None:
        return None
    porcelain = await _git(root, "status", "--porcelain")
    if porcelain is None:
        return None

    changes = sum(1 for line in porcelain.splitlines() if line.strip())
    return GitStatus(branch=branch.strip(), changes=changes)
