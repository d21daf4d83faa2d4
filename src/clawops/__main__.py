"""Entry point: python -m clawops [cleanup|status]

- No args / "cleanup": Report memory usage per workspace (--archive moves stale files)
- "status":            Last activity, git state and recent notes per agent
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from rich.console import Console
from rich.text import Text

from clawops.config import load_config
from clawops.core import Inspector
from clawops.render import render_cleanup, render_status

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_WORKSPACE_FAILED = 2


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="clawops",
        description="Inspect OpenClaw agent workspaces and archive stale memory logs.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=["cleanup", "status"],
        default="cleanup",
        help="cleanup (default): memory report; status: agent activity overview",
    )
    parser.add_argument(
        "--archive",
        action="store_true",
        help="Move memory files older than 30 days into memory/archive/.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to clawops.toml.")
    parser.add_argument("--log-level", default=None, help="Override the configured log level.")
    args = parser.parse_args(argv)
    if args.command == "status" and args.archive:
        parser.error("--archive only applies to the cleanup command")
    return args


async def _run(args: argparse.Namespace, console: Console) -> int:
    config = load_config(args.config)
    _setup_logging(args.log_level or config.log_level)
    inspector = Inspector(config)

    if args.command == "status":
        render_status(await inspector.run_status(), console)
        return EXIT_OK

    results = await inspector.run_cleanup(archive=args.archive)
    render_cleanup(results, args.archive, console)
    return EXIT_OK if all(r.ok for r in results) else EXIT_WORKSPACE_FAILED


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        return asyncio.run(_run(args, Console()))
    except Exception as e:
        Console(stderr=True).print(Text(f"Error: {e}", style="red"))
        return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
