"""Workspace memory analysis and archival.

Layout (per workspace):
    <root>/memory/
    ├── 2026-02-18.md                  # Daily logs (YYYY-MM-DD.md)
    ├── notes/...                      # Anything else still counts toward size/age
    └── archive/                       # Stale files, mirrored by relative path
        └── 2025-12-01.md

Files older than 30 days are "stale". In archive mode they are moved to
`memory/archive/<relative path>`; files already under `archive/` are never
moved again.
"""
