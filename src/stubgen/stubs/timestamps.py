"""Reset generated stub timestamps to the epoch.

javac treats a class file as stale when its source is newer. Stubs are written
after groovyc already produced the real classes, so left alone they would make
javac overwrite perfectly good compiled Groovy. Epoch-dated stubs never win
that comparison, yet their content stays available to javadoc.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from ..core.errors import FileSystemError

EPOCH = 0


def iter_stub_files(root: Path) -> Iterator[Path]:
    stack = [root]
    while stack:
        current = stack.pop()
        with os.scandir(current) as entries:
            children = sorted(entries, key=lambda entry: entry.name)
        dirs: list[Path] = []
        for entry in children:
            if entry.is_dir(follow_symlinks=False):
                dirs.append(Path(entry.path))
            elif entry.is_file(follow_symlinks=False):
                yield Path(entry.path)
        stack.extend(reversed(dirs))


def snapshot_mtimes(root: Path, suffixes: tuple[str, ...]) -> dict[Path, int]:
    if not root.is_dir():
        return {}
    try:
        return {
            path: path.stat().st_mtime_ns
            for path in iter_stub_files(root)
            if path.name.endswith(suffixes)
        }
    except OSError as exc:
        raise FileSystemError(f"failed to list stub directory {root}: {exc}") from exc


def reset_stub_modified_dates(root: Path) -> int:
    if not root.is_dir():
        raise FileSystemError(f"Failed to get output folder: {root} is not a directory")
    touched = 0
    try:
        for path in iter_stub_files(root):
            stat = path.stat()
            os.utime(path, ns=(stat.st_atime_ns, EPOCH))
            touched += 1
    except OSError as exc:
        raise FileSystemError(f"Failed to get output folder: {exc}") from exc
    return touched
