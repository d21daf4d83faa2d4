"""Configuration loading from environment variables and clawops.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_CONFIG_FILENAME = "clawops.toml"

# (name, directory under $OPENCLAW_HOME, emoji)
_DEFAULT_WORKSPACES = [
    ("Clawd", "workspace", "🦞"),
    ("Spark", "workspace-spark", "⚡"),
    ("Echo", "workspace-echo", "🌊"),
    ("Codex", "workspace-codex", "🐦‍⬛"),
    ("Lumen", "workspace-lumen", "💡"),
]


@dataclass(frozen=True)
class Workspace:
    """A named agent workspace root."""

    name: str
    root: Path
    emoji: str = ""

    @property
    def label(self) -> str:
        return f"{self.emoji} {self.name}" if self.emoji else self.name


@dataclass
class ClawopsConfig:
    """Top-level clawops configuration."""

    workspaces: list[Workspace] = field(default_factory=list)
    log_level: str = "INFO"


def _openclaw_home() -> Path:
    return Path(os.getenv("OPENCLAW_HOME", str(Path.home() / ".openclaw")))


def default_workspaces() -> list[Workspace]:
    """The five OpenClaw agent workspaces under $OPENCLAW_HOME."""
    home = _openclaw_home()
    return [
        Workspace(name=name, root=home / dirname, emoji=emoji)
        for name, dirname, emoji in _DEFAULT_WORKSPACES
    ]


def _parse_workspaces(entries: list) -> list[Workspace]:
    workspaces = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict) or not entry.get("name") or not entry.get("root"):
            raise ValueError(f"workspaces[{i}] needs both 'name' and 'root'")
        workspaces.append(
            Workspace(
                name=str(entry["name"]),
                root=Path(entry["root"]).expanduser(),
                emoji=str(entry.get("emoji", "")),
            )
        )
    return workspaces


def _read_toml(path: Path) -> dict:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid config file {path}: {e}") from e


def load_config(config_path: Path | None = None) -> ClawopsConfig:
    """Load configuration from environment variables and optional clawops.toml.

    Priority: environment variables > clawops.toml > defaults.
    """
    file_data: dict = {}
    if config_path is not None:
        if not config_path.exists():
            raise ValueError(f"Config file not found: {config_path}")
        file_data = _read_toml(config_path)
    else:
        # Search current dir and ~/.clawops/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, Path.home() / ".clawops" / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = _read_toml(candidate)
                break

    entries = file_data.get("workspaces")
    workspaces = _parse_workspaces(entries) if entries else default_workspaces()

    return ClawopsConfig(
        workspaces=workspaces,
        log_level=os.getenv("CLAWOPS_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
