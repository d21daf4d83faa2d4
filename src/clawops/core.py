"""clawops orchestrator: fans out per-workspace work and joins the results.

Responsibilities:
1. Compute one cutoff per run, shared by every workspace
2. Analyze (and optionally archive) each workspace concurrently
3. Keep one workspace's failure from affecting the others
4. Return results in configuration order
"""

from __future__ import annotations

import asyncio
import logging

from clawops.config import ClawopsConfig, Workspace
from clawops.memory.cleanup import (
    MEMORY_DIR,
    AnalysisResult,
    analyze_workspace,
    compute_cutoff,
)
from clawops.status import AgentStatus, collect_status

logger = logging.getLogger(__name__)


class Inspector:
    """Runs memory cleanup and status checks across the configured workspaces."""

    def __init__(self, config: ClawopsConfig) -> None:
        self.config = config

    @property
    def workspaces(self) -> list[Workspace]:
        return self.config.workspaces

    # ── Memory cleanup ───────────────────────────────────────

    async def run_cleanup(
        self,
        *,
        archive: bool = False,
        now_ms: int | None = None,
    ) -> list[AnalysisResult]:
        """Analyze every workspace; archive stale memory files when asked."""
        cutoff = compute_cutoff(now_ms)
        logger.info(
            "Analyzing %d workspaces (%s)",
            len(self.workspaces),
            "archive enabled" if archive else "report mode",
        )
        # gather preserves argument order regardless of completion order
        return list(
            await asyncio.gather(
                *(self._analyze(ws, cutoff, archive) for ws in self.workspaces)
            )
        )

    async def _analyze(self, workspace: Workspace, cutoff: int, archive: bool) -> AnalysisResult:
        try:
            return await analyze_workspace(workspace, cutoff, archive=archive)
        except OSError as e:
            logger.error("%s: analysis failed: %s", workspace.name, e)
            return AnalysisResult(
                workspace=workspace,
                memory_path=workspace.root / MEMORY_DIR,
                exists=True,
                error=str(e),
            )

    # ── Agent status ─────────────────────────────────────────

    async def run_status(self) -> list[AgentStatus]:
        """Collect activity, git and notes for every workspace."""
        return list(await asyncio.gather(*(collect_status(ws) for ws in self.workspaces)))
