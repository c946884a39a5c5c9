from __future__ import annotations

import subprocess
from pathlib import Path

from .clock import utc_now


def read_git_sha(cwd: Path) -> str:
    try:
        out = subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"],
            cwd=cwd,
            text=True,
            stderr=subprocess.DEVNULL,
        ).strip()
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
    return out or "unknown"


def make_run_id(project_root: Path, prefix: str = "stubgen") -> str:
    ts = utc_now().strftime("%Y%m%d-%H%M%S")
    return f"{prefix}-{ts}-{read_git_sha(project_root)}"
