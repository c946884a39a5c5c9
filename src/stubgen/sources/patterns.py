"""Ant-style include/exclude patterns.

``**`` spans any number of directories, ``*`` and ``?`` stay inside one path
segment, and a trailing ``/`` is shorthand for ``/**``. Paths are matched in
POSIX form relative to the source directory.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable

DEFAULT_EXCLUDES: tuple[str, ...] = (
    "**/*~",
    "**/#*#",
    "**/.#*",
    "**/.DS_Store",
    "**/.git/**",
    "**/.gitignore",
    "**/.hg/**",
    "**/.svn/**",
    "**/CVS/**",
)


def _segment_regex(segment: str) -> str:
    out: list[str] = []
    for char in segment:
        if char == "*":
            out.append("[^/]*")
        elif char == "?":
            out.append("[^/]")
        else:
            out.append(re.escape(char))
    return "".join(out)


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    norm = pattern.strip().replace("\\", "/").lstrip("/")
    if not norm or norm.endswith("/"):
        norm += "**"
    parts = [part for part in norm.split("/") if part]
    regex: list[str] = []
    for index, part in enumerate(parts):
        last = index == len(parts) - 1
        if part == "**":
            regex.append(".*" if last else "(?:[^/]+/)*")
        else:
            regex.append(_segment_regex(part) + ("" if last else "/"))
    return re.compile("".join(regex))


def matches(pattern: str, rel_path: str) -> bool:
    return compile_pattern(pattern).fullmatch(rel_path) is not None


def matches_any(patterns: Iterable[str], rel_path: str) -> bool:
    return any(matches(pattern, rel_path) for pattern in patterns)
