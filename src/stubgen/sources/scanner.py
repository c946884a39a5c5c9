from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from ..core.errors import ConfigurationError, FileSystemError
from .model import ScriptFile, SourceSet
from .patterns import DEFAULT_EXCLUDES, matches_any
from .suffix import STUB_MAPPINGS, SuffixMapping, is_candidate


def _raise(exc: OSError) -> None:
    raise exc


def _iter_relative_files(root: Path) -> Iterable[str]:
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        base = Path(dirpath)
        for name in filenames:
            yield (base / name).relative_to(root).as_posix()


def scan_for_sources(source_set: SourceSet, mappings: Iterable[SuffixMapping] = STUB_MAPPINGS) -> list[ScriptFile]:
    root = source_set.directory
    if not root.is_absolute():
        raise ConfigurationError(f"source set directory must be absolute after normalization: {root}")
    if not root.exists():
        raise FileSystemError(f"source directory does not exist: {root}")
    if not root.is_dir():
        raise FileSystemError(f"source directory is not a directory: {root}")
    mapping_table = tuple(mappings)
    includes = source_set.includes or ("**",)
    excludes = (*source_set.excludes, *DEFAULT_EXCLUDES)
    try:
        rel_paths = sorted(_iter_relative_files(root))
    except OSError as exc:
        raise FileSystemError(f"failed to scan source directory {root}: {exc}") from exc
    found: list[ScriptFile] = []
    for rel in rel_paths:
        if not is_candidate(rel.rsplit("/", 1)[-1], mapping_table):
            continue
        if not matches_any(includes, rel) or matches_any(excludes, rel):
            continue
        found.append(ScriptFile.from_path(root / rel))
    return found
