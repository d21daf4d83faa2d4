"""Agent workspace status: last activity, git state, recent daily-log notes."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from clawops.status.activity import last_activity
from clawops.status.git import GitStatus, git_status
from clawops.status.notes import NOTES_OK, recent_notes

if TYPE_CHECKING:
    from clawops.config import Workspace

logger = logging.getLogger(__name__)


@dataclass
class AgentStatus:
    """Snapshot of one agent workspace."""

    workspace: Workspace
    root_exists: bool = True
    last_modified_ms: int | None = None
    git: GitStatus | None = None
    notes: list[str] = field(default_factory=list)
    notes_state: str = NOTES_OK
    error: str | None = None


async def collect_status(workspace: Workspace) -> AgentStatus:
    """Gather activity, git and notes for a workspace. OSErrors land on `error`."""
    status = AgentStatus(workspace=workspace)
    loop = asyncio.get_running_loop()
    status.root_exists = await loop.run_in_executor(None, workspace.root.is_dir)
    try:
        status.last_modified_ms = await loop.run_in_executor(None, last_activity, workspace.root)
        status.notes_state, status.notes = await loop.run_in_executor(
            None, recent_notes, workspace.root
        )
    except OSError as e:
        logger.warning("%s: status scan failed: %s", workspace.name, e)
        status.error = str(e)
    status.git = await git_status(workspace.root)
    return status


__all__ = [
    "AgentStatus",
    "GitStatus",
    "collect_status",
    "git_status",
    "last_activity",
    "recent_notes",
]
