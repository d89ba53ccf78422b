"""Path resolution for the directory that owns `.minifmt/config.toml`."""

from __future__ import annotations

import os
from pathlib import Path

from minifmt.lib.config.settings import CONFIG_DIRNAME


def resolve_root(explicit: Path | None = None) -> Path:
    """Resolve the directory whose `.minifmt/` config applies.

    Precedence:
    1. Explicit function argument.
    2. `MINIFMT_ROOT` environment variable.
    3. Current directory / ancestors containing `.minifmt/`, stopping at a
       `.git` boundary.
    4. Current working directory.
    """

    if explicit is not None:
        return explicit.expanduser().resolve()

    env_root = os.getenv("MINIFMT_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()

    cwd = Path.cwd().resolve()
    candidate = cwd
    while True:
        if (candidate / CONFIG_DIRNAME).is_dir():
            return candidate

        # A .git entry (file for worktree/submodule, directory for standalone
        # repo) marks a repo boundary.
        if (candidate / ".git").exists():
            return candidate

        parent = candidate.parent
        if parent == candidate:
            break
        candidate = parent

    return cwd
